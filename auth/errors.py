"""
Authentication Errors

Exception hierarchy for the device flow and session manager.

"authorization_pending" and "slow_down" are deliberately NOT here: they are
control signals (see PollOutcome) consumed inside the polling loop.
"""


class AuthError(Exception):
    """
    Base class for authentication failures.

    Examples:
    - Authorization server unreachable
    - User denied access
    - Device code expired
    """

    def __str__(self) -> str:
        return self.describe()

    def describe(self) -> str:
        return self.args[0] if self.args else self.__class__.__name__


class NetworkError(AuthError):
    """Transport failure or non-2xx HTTP status (status and body included)"""

    def describe(self) -> str:
        return f"Network error: {super().describe()}"


class AccessDeniedError(AuthError):
    """User refused the authorization request"""

    def describe(self) -> str:
        return "Access denied by user"


class ExpiredTokenError(AuthError):
    """Device code expired before the user completed authorization"""

    def describe(self) -> str:
        return "Device code expired"


class InvalidResponseError(AuthError):
    """Server payload did not match any expected shape"""

    def describe(self) -> str:
        return f"Invalid response: {super().describe()}"


class UnknownAuthError(AuthError):
    """Unclassified error code from the token endpoint"""

    def describe(self) -> str:
        return f"Unknown error: {super().describe()}"


class InvalidTokenError(AuthError):
    """Credential is unusable and cannot be renewed silently"""

    def describe(self) -> str:
        return "Invalid or expired access token"
