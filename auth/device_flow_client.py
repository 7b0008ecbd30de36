"""
Device Flow Client

The three HTTP exchanges of the OAuth2 Device Authorization Grant:

1. request_device_code()  - POST /oauth/device/code
2. poll_token()           - POST /oauth/token (device_code grant)
3. refresh_token()        - POST /oauth/token (refresh_token grant)

All requests are form-encoded. Server replies are classified into typed
outcomes (PollResult) or AuthError subclasses; this class never sleeps or
loops - see DeviceAuthorization for the polling state machine.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

import requests

from auth.constants import (
    DEVICE_CODE_GRANT_TYPE,
    DEVICE_CODE_URL,
    ERROR_ACCESS_DENIED,
    ERROR_AUTHORIZATION_PENDING,
    ERROR_EXPIRED_TOKEN,
    ERROR_SLOW_DOWN,
    REFRESH_TOKEN_GRANT_TYPE,
    TOKEN_URL,
    PollOutcome,
)
from auth.errors import (
    AccessDeniedError,
    ExpiredTokenError,
    InvalidResponseError,
    NetworkError,
    UnknownAuthError,
)
from auth.models import (
    Credential,
    DeviceSession,
    PollResult,
    TokenErrorReply,
    TokenGrant,
    parse_token_response,
)
from config.settings import (
    AUTH_AUDIENCE,
    AUTH_CLIENT_ID,
    AUTH_CLIENT_SECRET,
    AUTH_SCOPE,
    HTTP_TIMEOUT,
)

FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


class DeviceFlowClient:
    """
    OAuth2 device-grant client.

    Usage:
        client = DeviceFlowClient()
        session = client.request_device_code()
        print(f"Open {session.verification_uri} and enter {session.user_code}")

        result = client.poll_token(session.device_code)
        if result.outcome == PollOutcome.SUCCESS:
            credential = result.credential
    """

    def __init__(
        self,
        client_id: str = AUTH_CLIENT_ID,
        client_secret: Optional[str] = AUTH_CLIENT_SECRET,
        audience: Optional[str] = AUTH_AUDIENCE,
        scope: Optional[str] = AUTH_SCOPE,
        device_code_url: str = DEVICE_CODE_URL,
        token_url: str = TOKEN_URL,
        http: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize device flow client.

        Args:
            client_id: OAuth client identifier
            client_secret: Client secret (omitted from polls if empty)
            audience: Requested API audience (optional)
            scope: Requested scopes (optional)
            device_code_url: Device authorization endpoint
            token_url: Token endpoint
            http: requests.Session to use (tests pass a fake)
            clock: Wall-clock source for expiry computation
        """
        self.logger = logging.getLogger(__name__)
        self.client_id = client_id
        self.client_secret = client_secret or None
        self.audience = audience or None
        self.scope = scope or None
        self.device_code_url = device_code_url
        self.token_url = token_url
        self.http = http or requests.Session()
        self.clock = clock

        if not self.client_id:
            self.logger.warning(
                "AUTH_CLIENT_ID is empty. Add to .env file: AUTH_CLIENT_ID=<id>",
            )

    # =========================================================================
    # DEVICE CODE REQUEST
    # =========================================================================

    def request_device_code(self) -> DeviceSession:
        """
        Start a device authorization attempt.

        Returns:
            DeviceSession with the user code to display

        Raises:
            NetworkError: Transport failure or non-2xx status
            InvalidResponseError: Reply is not a device code object
        """
        form = {"client_id": self.client_id}
        if self.audience:
            form["audience"] = self.audience
        if self.scope:
            form["scope"] = self.scope

        self.logger.info("Requesting device code...")
        response = self._post_form(self.device_code_url, form)

        if not response.ok:
            raise NetworkError(f"HTTP {response.status_code}: {response.text}")

        session = DeviceSession.from_response(
            self._json_body(response),
            now=self.clock(),
        )
        self.logger.info(
            f"Device code issued (user code: {session.user_code}, "
            f"interval: {session.interval:.0f}s)",
        )
        return session

    # =========================================================================
    # TOKEN POLL
    # =========================================================================

    def poll_token(self, device_code: str) -> PollResult:
        """
        Poll the token endpoint once.

        The reply body is parsed whatever the HTTP status: servers answer
        pending polls with 4xx plus an error object.

        Returns:
            PollResult with SUCCESS (and credential), PENDING or SLOW_DOWN

        Raises:
            AccessDeniedError: User refused
            ExpiredTokenError: Device code expired
            UnknownAuthError: Any other error code
            NetworkError: Transport failure
            InvalidResponseError: Reply matches neither shape
        """
        form = {
            "grant_type": DEVICE_CODE_GRANT_TYPE,
            "device_code": device_code,
            "client_id": self.client_id,
        }
        if self.client_secret:
            form["client_secret"] = self.client_secret

        response = self._post_form(self.token_url, form)
        reply = parse_token_response(self._json_body(response))

        if isinstance(reply, TokenGrant):
            credential = reply.to_credential(now=self.clock())
            self.logger.info("Device authorization granted")
            return PollResult(PollOutcome.SUCCESS, credential)

        return self._classify_poll_error(reply)

    def _classify_poll_error(self, reply: TokenErrorReply) -> PollResult:
        """Map a token error code to an outcome or a fatal exception."""
        if reply.error == ERROR_AUTHORIZATION_PENDING:
            return PollResult(PollOutcome.PENDING)
        if reply.error == ERROR_SLOW_DOWN:
            return PollResult(PollOutcome.SLOW_DOWN)
        if reply.error == ERROR_ACCESS_DENIED:
            raise AccessDeniedError()
        if reply.error == ERROR_EXPIRED_TOKEN:
            raise ExpiredTokenError()
        raise UnknownAuthError(reply.message)

    # =========================================================================
    # REFRESH
    # =========================================================================

    def refresh_token(self, refresh_token: str) -> Credential:
        """
        Exchange a refresh token for a new credential.

        Servers may or may not rotate refresh tokens: when the reply omits
        one, the caller's refresh token is kept.

        Returns:
            New Credential (expires_at recomputed)

        Raises:
            UnknownAuthError: Any error reply (not classified further)
            NetworkError: Transport failure
            InvalidResponseError: Reply matches neither shape
        """
        form = {
            "grant_type": REFRESH_TOKEN_GRANT_TYPE,
            "client_id": self.client_id,
            "client_secret": self.client_secret or "",
            "refresh_token": refresh_token,
        }

        self.logger.info("Refreshing access token...")
        response = self._post_form(self.token_url, form)
        reply = parse_token_response(self._json_body(response))

        if isinstance(reply, TokenErrorReply):
            raise UnknownAuthError(reply.message)

        credential = reply.to_credential(now=self.clock())
        if not credential.refresh_token:
            credential = credential.with_refresh_token(refresh_token)

        self.logger.info("Access token refreshed")
        return credential

    # =========================================================================
    # HTTP HELPERS
    # =========================================================================

    def _post_form(self, url: str, form: Dict[str, str]) -> requests.Response:
        try:
            return self.http.post(
                url,
                data=form,
                headers=FORM_HEADERS,
                timeout=HTTP_TIMEOUT,
            )
        except requests.RequestException as e:
            raise NetworkError(str(e)) from e

    def _json_body(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            if not response.ok:
                raise NetworkError(
                    f"HTTP {response.status_code}: {response.text}",
                ) from e
            raise InvalidResponseError(
                f"HTTP {response.status_code}: body is not JSON: {response.text[:200]}",
            ) from e
