"""
Authentication errors.
"""

from typing import Optional


class AuthError(Exception):
    """Base class for TIDAL login failures."""

    pass


class AuthRequestFailed(AuthError):
    """The login request could not be completed or its response could not be read."""

    def __init__(self, cause: BaseException):
        super().__init__(f"The authentication request failed: {cause}")
        self.cause = cause


class CreateSessionFailed(AuthError):
    """TIDAL rejected the login (bad credentials, invalid token, ...)."""

    def __init__(self, status: int = 0, message: Optional[str] = None):
        super().__init__(message or f"Fetch session failed (HTTP {status})")
        self.status = status


class MissingTokenError(AssertionError):
    """Raised when authenticating with an empty application token.

    Programming error, not a login failure: not an AuthError, so the
    credentials holder never swallows it.
    """

    def __init__(self) -> None:
        super().__init__("Application token needs to be set")
