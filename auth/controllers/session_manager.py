"""
Session Manager

Owns the credential lifecycle:

    1. Load persisted credential        (none -> 4)
    2. Still valid for 5+ minutes?      -> return it, no network call
    3. Expiring and refreshable?        -> refresh, persist, return
                                           (refresh failure -> 4, not fatal)
    4. Run the device flow once         -> persist, return
                                           (failure propagates)

Persistence is best-effort: a failed save is logged and the in-memory
credential stays usable for this process.

SOLID Principles:
- Single Responsibility: credential lifecycle only
- Dependency Inversion: depends on TokenStoreInterface and the flow client
"""

import logging
import time
from typing import Callable, Optional

from auth.constants import AuthState
from auth.controllers.device_authorization import DeviceAuthorization
from auth.device_flow_client import DeviceFlowClient
from auth.errors import AuthError, InvalidTokenError
from auth.interfaces.token_store_interface import TokenStoreError, TokenStoreInterface
from auth.models import Credential, DeviceSession
from core.observable import Observable


class SessionManager:
    """
    Credential lifecycle manager.

    Usage:
        manager = SessionManager(client, FileTokenStore())

        # Blocking; may run the device flow
        credential = manager.get_valid_credential()

        # Before a long upload
        credential = manager.ensure_fresh(credential)
    """

    def __init__(
        self,
        client: DeviceFlowClient,
        token_store: TokenStoreInterface,
        credential_state: Optional[Observable] = None,
        auth_state: Optional[Observable] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize session manager.

        Args:
            client: Device flow HTTP client
            token_store: Credential persistence
            credential_state: Shared observable to publish credentials to
            auth_state: Shared observable to publish AuthState to
            sleep: Wait function for the device flow loop
            clock: Time source for expiry checks
        """
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.token_store = token_store
        self.credential_state = credential_state
        self.auth_state = auth_state
        self.sleep = sleep
        self.clock = clock

    # =========================================================================
    # CREDENTIAL LIFECYCLE
    # =========================================================================

    def get_valid_credential(self) -> Credential:
        """
        Return a usable credential, acquiring one if needed.

        Returns:
            Credential valid for at least the expiry margin

        Raises:
            AuthError: If the device flow fails
        """
        stored = self.token_store.load()

        if stored is not None:
            if not stored.is_expired(now=self.clock()):
                self.logger.info("✅ Using stored credential")
                return stored

            if stored.can_refresh:
                refreshed = self._try_refresh(stored)
                if refreshed is not None:
                    return refreshed
            else:
                self.logger.info("Stored credential expired and has no refresh token")

        credential = self._run_device_flow()
        self._persist(credential)
        return credential

    def ensure_fresh(self, credential: Credential) -> Credential:
        """
        Refresh-before-upload check.

        Called once per upload, never per chunk, so a long-running transfer
        never starts with a token inside the expiry margin.

        Returns:
            The same credential if still valid, else a refreshed one

        Raises:
            InvalidTokenError: Credential is expiring and cannot be refreshed
        """
        if not credential.is_expired(now=self.clock()):
            return credential

        if not credential.can_refresh:
            raise InvalidTokenError("Credential expired and has no refresh token")

        self.logger.info("🔄 Access token expiring, refreshing before upload...")
        try:
            refreshed = self.client.refresh_token(credential.refresh_token)
        except AuthError as e:
            raise InvalidTokenError(f"Token refresh failed: {e}") from e

        self._persist(refreshed)
        self._publish_credential(refreshed)
        return refreshed

    def logout(self) -> None:
        """
        Delete the persisted credential.

        Credentials already held in memory elsewhere are not affected;
        callers must drop their own references.
        """
        try:
            self.token_store.delete()
        except TokenStoreError as e:
            self.logger.warning(f"Logout could not delete stored credential: {e}")

        self._publish_credential(None)
        self._publish_auth_state(AuthState.checking())
        self.logger.info("Logged out")

    # =========================================================================
    # UI-FACING AUTHENTICATION
    # =========================================================================

    def authenticate(self) -> Optional[Credential]:
        """
        Obtain a credential while publishing progress for the UI.

        Run this on a background thread at startup. Failures end in a
        persistent AuthState.ERROR; they are not raised.

        Returns:
            Credential, or None if authentication failed
        """
        self._publish_auth_state(AuthState.checking())

        try:
            credential = self.get_valid_credential()
        except AuthError as e:
            self.logger.error(f"❌ Authentication failed: {e}")
            self._publish_auth_state(AuthState.error(str(e)))
            return None

        self._publish_credential(credential)
        self._publish_auth_state(AuthState.authenticated())
        self.logger.info("✅ Authenticated successfully")
        return credential

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _try_refresh(self, stored: Credential) -> Optional[Credential]:
        """Refresh a stored credential; None on failure (caller re-authenticates)."""
        try:
            refreshed = self.client.refresh_token(stored.refresh_token)
        except AuthError as e:
            self.logger.warning(f"⚠️ Token refresh failed, need new login: {e}")
            return None

        self._persist(refreshed)
        return refreshed

    def _run_device_flow(self) -> Credential:
        flow = DeviceAuthorization(self.client, sleep=self.sleep, clock=self.clock)
        flow.on_device_session = self._on_device_session

        credential = flow.run()
        self._publish_auth_state(AuthState.authenticating())
        return credential

    def _on_device_session(self, session: DeviceSession) -> None:
        self._publish_auth_state(
            AuthState.needs_auth(session.display_uri, session.user_code),
        )

    def _persist(self, credential: Credential) -> None:
        try:
            self.token_store.save(credential)
        except TokenStoreError as e:
            # Degraded mode: usable now, re-authenticate next launch
            self.logger.warning(f"Failed to save credential: {e}")

    def _publish_credential(self, credential: Optional[Credential]) -> None:
        if self.credential_state is not None:
            self.credential_state.set(credential)

    def _publish_auth_state(self, state: AuthState) -> None:
        if self.auth_state is not None:
            self.auth_state.set(state)
