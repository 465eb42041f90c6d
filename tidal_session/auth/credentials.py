"""
TIDAL credentials holder.

Pairs the application token with an optional established session.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Optional

from .exceptions import AuthError, MissingTokenError
from .session import Session, SessionExchanger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TidalCredentials:
    """Application token plus the session obtained with it, if any."""

    application_token: str
    session: Optional[Session] = None

    def with_session(self, session: Optional[Session]) -> "TidalCredentials":
        """Return a copy with the session replaced."""
        return dataclasses.replace(self, session=session)

    async def authenticate(
        self,
        username: str,
        password: str,
        exchanger: Optional[SessionExchanger] = None,
    ) -> "TidalCredentials":
        """
        Log in and attach the resulting session.

        Login failures are not raised: they are logged and the returned
        credentials carry no session. Use authenticate_or_raise() to find
        out why a login failed.

        Args:
            username: TIDAL username
            password: TIDAL password
            exchanger: Session exchanger to use (default: production endpoint)

        Returns:
            New credentials, with a session if the login succeeded

        Raises:
            MissingTokenError: If the application token is empty
        """
        try:
            return await self.authenticate_or_raise(username, password, exchanger)
        except AuthError as e:
            logger.warning(f"Login for {username} failed: {e}")
            return self.with_session(None)

    async def authenticate_or_raise(
        self,
        username: str,
        password: str,
        exchanger: Optional[SessionExchanger] = None,
    ) -> "TidalCredentials":
        """
        Log in and attach the resulting session, raising on failure.

        Raises:
            MissingTokenError: If the application token is empty
            CreateSessionFailed: If TIDAL rejected the login
            AuthRequestFailed: If the request itself failed
        """
        if not self.application_token:
            raise MissingTokenError()

        if exchanger is None:
            exchanger = SessionExchanger()

        session = await exchanger.obtain(self.application_token, username, password)
        logger.info(f"Logged in as user {session.user_id} ({session.country_code})")
        return self.with_session(session)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "token": self.application_token,
            "session": self.session.to_dict() if self.session else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TidalCredentials":
        """Build credentials from the output of to_dict()."""
        session_data = data.get("session")
        session = Session.from_dict(session_data) if session_data else None
        return cls(application_token=data["token"], session=session)
