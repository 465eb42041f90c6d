"""
tidal-session - TIDAL login client.

Exchanges an application token and user credentials for a TIDAL session.
"""

__version__ = "0.1.0"

from .auth import (
    AuthError,
    AuthRequestFailed,
    CreateSessionFailed,
    MissingTokenError,
    Session,
    SessionExchanger,
    TidalCredentials,
)
from .config import Config, ConfigError, load_config

__all__ = [
    "__version__",
    "TidalCredentials",
    "Session",
    "SessionExchanger",
    "AuthError",
    "AuthRequestFailed",
    "CreateSessionFailed",
    "MissingTokenError",
    "Config",
    "ConfigError",
    "load_config",
]
