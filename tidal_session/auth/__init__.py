"""
TIDAL authentication module.

Handles the login exchange and the credentials/session values it produces.
"""

from .credentials import TidalCredentials
from .exceptions import (
    AuthError,
    AuthRequestFailed,
    CreateSessionFailed,
    MissingTokenError,
)
from .session import LOGIN_URL, Session, SessionExchanger

__all__ = [
    "LOGIN_URL",
    "TidalCredentials",
    "Session",
    "SessionExchanger",
    "AuthError",
    "AuthRequestFailed",
    "CreateSessionFailed",
    "MissingTokenError",
]
