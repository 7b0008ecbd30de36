"""
Authentication Constants

Protocol constants for the OAuth2 Device Authorization Grant (RFC 8628)
plus the enums describing session state.

Server-specific values (domain, client id, audience) live in
config/settings.py.
"""

from dataclasses import dataclass
from enum import Enum

from config.settings import AUTH_DOMAIN

# =============================================================================
# ENDPOINTS
# =============================================================================

DEVICE_CODE_URL = f"https://{AUTH_DOMAIN}/oauth/device/code"
TOKEN_URL = f"https://{AUTH_DOMAIN}/oauth/token"

# =============================================================================
# GRANT TYPES
# =============================================================================

DEVICE_CODE_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:device_code"
REFRESH_TOKEN_GRANT_TYPE = "refresh_token"

# =============================================================================
# TOKEN ENDPOINT ERROR CODES
# =============================================================================

ERROR_AUTHORIZATION_PENDING = "authorization_pending"
ERROR_SLOW_DOWN = "slow_down"
ERROR_ACCESS_DENIED = "access_denied"
ERROR_EXPIRED_TOKEN = "expired_token"


# =============================================================================
# POLLING
# =============================================================================


class PollOutcome(Enum):
    """Non-fatal result of one token poll"""

    SUCCESS = "success"
    PENDING = "authorization_pending"  # Retry after one interval
    SLOW_DOWN = "slow_down"  # Retry with a larger interval


class DeviceFlowState(Enum):
    """
    States of one device authorization attempt.

    Lifecycle: REQUESTING -> WAITING -> POLLING -> (WAITING | SUCCESS | FATAL)
    """

    REQUESTING = "requesting"
    WAITING = "waiting"
    POLLING = "polling"
    SUCCESS = "success"
    FATAL = "fatal"


# =============================================================================
# SESSION STATE (UI-facing)
# =============================================================================


class AuthStage(Enum):
    """Where the user session stands, as shown by the presentation layer"""

    CHECKING = "checking"  # Looking at persisted credential
    NEEDS_AUTH = "needs_auth"  # Waiting for the user to enter the code
    AUTHENTICATING = "authenticating"  # Code accepted, finishing up
    AUTHENTICATED = "authenticated"
    ERROR = "error"  # Persistent; requires restart


@dataclass(frozen=True)
class AuthState:
    """Immutable snapshot of the session state."""

    stage: AuthStage = AuthStage.CHECKING
    verification_uri: str = ""
    user_code: str = ""
    message: str = ""

    @classmethod
    def checking(cls) -> "AuthState":
        return cls(AuthStage.CHECKING)

    @classmethod
    def needs_auth(cls, verification_uri: str, user_code: str) -> "AuthState":
        return cls(
            AuthStage.NEEDS_AUTH,
            verification_uri=verification_uri,
            user_code=user_code,
        )

    @classmethod
    def authenticating(cls) -> "AuthState":
        return cls(AuthStage.AUTHENTICATING)

    @classmethod
    def authenticated(cls) -> "AuthState":
        return cls(AuthStage.AUTHENTICATED)

    @classmethod
    def error(cls, message: str) -> "AuthState":
        return cls(AuthStage.ERROR, message=message)
