"""
Authentication Data Models

Credential        - locally held token set plus its computed expiry
DeviceSession     - one device authorization attempt
TokenResponse     - tagged parse of the token endpoint reply

Token endpoint parse rule:
    The token endpoint answers either with a token set or with an error
    object, distinguished only by which fields are present. We decide the
    variant explicitly instead of trying shapes in order:

    1. object has "access_token"  -> TokenGrant (success)
    2. else object has "error"    -> TokenErrorReply
    3. anything else              -> InvalidResponseError
"""

import time
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Optional, Union

from auth.constants import PollOutcome
from auth.errors import InvalidResponseError
from config.settings import TOKEN_EXPIRY_MARGIN_SECONDS


@dataclass(frozen=True)
class Credential:
    """
    Access/refresh/identity token triple with its absolute expiry.

    Frozen: a refresh produces a new Credential, it never mutates one.

    Attributes:
        access_token: Opaque bearer token sent to the APIs
        refresh_token: Opaque renewal token ("" if the server issued none)
        id_token: Opaque identity token ("" if absent)
        token_type: Token kind label (usually "Bearer")
        expires_in: Lifetime in seconds as issued
        expires_at: Unix timestamp when the access token expires
    """

    access_token: str
    refresh_token: str = ""
    id_token: str = ""
    token_type: str = "Bearer"
    expires_in: int = 0
    expires_at: int = 0

    @classmethod
    def issued(
        cls,
        access_token: str,
        expires_in: int,
        refresh_token: str = "",
        id_token: str = "",
        token_type: str = "Bearer",
        now: Optional[float] = None,
    ) -> "Credential":
        """
        Build a freshly issued credential.

        expires_at is always recomputed as issue time + lifetime.
        """
        issued_at = int(time.time() if now is None else now)
        return cls(
            access_token=access_token,
            refresh_token=refresh_token or "",
            id_token=id_token or "",
            token_type=token_type,
            expires_in=int(expires_in),
            expires_at=issued_at + int(expires_in),
        )

    def seconds_remaining(self, now: Optional[float] = None) -> float:
        """Seconds of lifetime left (never negative)."""
        current = time.time() if now is None else now
        return max(0.0, self.expires_at - current)

    def is_expired(self, now: Optional[float] = None) -> bool:
        """
        True if fewer than TOKEN_EXPIRY_MARGIN_SECONDS remain.

        Compared against the unrounded clock, so 299.5 s left is expired.

        Example:
            expires_at = now + 300    -> not expired
            expires_at = now + 299.5  -> expired
        """
        return self.seconds_remaining(now) < TOKEN_EXPIRY_MARGIN_SECONDS

    @property
    def can_refresh(self) -> bool:
        return bool(self.refresh_token)

    def with_refresh_token(self, refresh_token: str) -> "Credential":
        return replace(self, refresh_token=refresh_token)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Credential":
        """
        Rebuild a credential from its persisted JSON object.

        Raises:
            KeyError, TypeError, ValueError: If the object is malformed
        """
        return cls(
            access_token=str(data["access_token"]),
            refresh_token=str(data.get("refresh_token") or ""),
            id_token=str(data.get("id_token") or ""),
            token_type=str(data.get("token_type") or "Bearer"),
            expires_in=int(data.get("expires_in", 0)),
            expires_at=int(data.get("expires_at", 0)),
        )

    def __repr__(self) -> str:
        # Never log token material
        return (
            f"Credential(token_type={self.token_type!r}, "
            f"expires_at={self.expires_at}, "
            f"has_refresh_token={self.can_refresh})"
        )


@dataclass
class DeviceSession:
    """
    One device authorization attempt.

    interval is mutable: it grows on "slow_down" and never shrinks.
    """

    device_code: str
    user_code: str
    verification_uri: str
    expires_at: float
    interval: float
    verification_uri_complete: str = ""

    @classmethod
    def from_response(
        cls,
        data: Dict[str, Any],
        now: Optional[float] = None,
    ) -> "DeviceSession":
        """
        Build a session from the device-code endpoint reply.

        Raises:
            InvalidResponseError: If required fields are missing
        """
        started = time.time() if now is None else now
        try:
            return cls(
                device_code=str(data["device_code"]),
                user_code=str(data["user_code"]),
                verification_uri=str(data["verification_uri"]),
                verification_uri_complete=str(
                    data.get("verification_uri_complete") or "",
                ),
                expires_at=started + float(data["expires_in"]),
                interval=float(data["interval"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidResponseError(
                f"Malformed device code response: {e}",
            ) from e

    @property
    def display_uri(self) -> str:
        """Pre-filled URI when the server offers one."""
        return self.verification_uri_complete or self.verification_uri

    def is_expired(self, now: Optional[float] = None) -> bool:
        current = time.time() if now is None else now
        return current >= self.expires_at


@dataclass(frozen=True)
class TokenGrant:
    """Success shape of the token endpoint."""

    access_token: str
    token_type: str
    expires_in: int
    refresh_token: str = ""
    id_token: str = ""

    def to_credential(self, now: Optional[float] = None) -> Credential:
        return Credential.issued(
            access_token=self.access_token,
            expires_in=self.expires_in,
            refresh_token=self.refresh_token,
            id_token=self.id_token,
            token_type=self.token_type,
            now=now,
        )


@dataclass(frozen=True)
class TokenErrorReply:
    """Error shape of the token endpoint."""

    error: str
    error_description: Optional[str] = None

    @property
    def message(self) -> str:
        return self.error_description or self.error


TokenResponse = Union[TokenGrant, TokenErrorReply]


def parse_token_response(data: Any) -> TokenResponse:
    """
    Decide the token response variant (see module docstring).

    Raises:
        InvalidResponseError: If the payload is neither shape
    """
    if not isinstance(data, dict):
        raise InvalidResponseError(f"Expected JSON object, got {type(data).__name__}")

    if "access_token" in data:
        try:
            return TokenGrant(
                access_token=str(data["access_token"]),
                token_type=str(data.get("token_type") or "Bearer"),
                expires_in=int(data["expires_in"]),
                refresh_token=str(data.get("refresh_token") or ""),
                id_token=str(data.get("id_token") or ""),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidResponseError(f"Malformed token response: {e}") from e

    if "error" in data:
        return TokenErrorReply(
            error=str(data["error"]),
            error_description=data.get("error_description"),
        )

    raise InvalidResponseError(
        f"Token response has neither access_token nor error: {sorted(data)}",
    )


@dataclass
class PollResult:
    """Result of one token poll that did not fail fatally."""

    outcome: PollOutcome
    credential: Optional[Credential] = field(default=None)
