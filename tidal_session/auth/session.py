"""
TIDAL session exchange.

Posts the application token and user credentials to the login endpoint and
turns the response into a Session.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import aiohttp

from .exceptions import AuthRequestFailed, CreateSessionFailed

logger = logging.getLogger(__name__)

LOGIN_URL = "https://api.tidalhifi.com/v1/login/username"


def mask(value: str, visible: int = 4) -> str:
    """Mask a secret for log output, keeping at most `visible` leading characters."""
    if len(value) <= visible:
        return "***"
    return value[:visible] + "***"


@dataclass(frozen=True)
class Session:
    """Session issued by TIDAL after a successful login."""

    user_id: int
    session_id: str
    country_code: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Session":
        """
        Build a Session from a login response body.

        Raises:
            KeyError: If a field is missing
            TypeError: If a field has the wrong type
        """
        user_id = data["userId"]
        session_id = data["sessionId"]
        country_code = data["countryCode"]

        # bool is an int subclass, but never a valid user id
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise TypeError(f"userId must be an integer, got {user_id!r}")
        if not isinstance(session_id, str):
            raise TypeError(f"sessionId must be a string, got {session_id!r}")
        if not isinstance(country_code, str):
            raise TypeError(f"countryCode must be a string, got {country_code!r}")

        return cls(user_id=user_id, session_id=session_id, country_code=country_code)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format used by the login endpoint."""
        return {
            "userId": self.user_id,
            "sessionId": self.session_id,
            "countryCode": self.country_code,
        }


class SessionExchanger:
    """
    Performs the login round trip against TIDAL.

    Each call opens its own aiohttp session, so one exchanger can be shared
    by concurrent callers. There is no retry and no timeout override.

    Usage:
        exchanger = SessionExchanger()
        session = await exchanger.obtain(token, username, password)
    """

    def __init__(self, base_url: str = LOGIN_URL):
        """
        Initialize exchanger.

        Args:
            base_url: Login endpoint URL (tests point this at a local server)
        """
        self.base_url = base_url

    async def obtain(self, token: str, username: str, password: str) -> Session:
        """
        Exchange token and credentials for a Session.

        Args:
            token: Application token
            username: TIDAL username
            password: TIDAL password

        Returns:
            Session issued by TIDAL

        Raises:
            CreateSessionFailed: If TIDAL answers with a non-2xx status
            AuthRequestFailed: If the request fails or the response can't be parsed
        """
        payload = {"username": username, "password": password}
        return await self._fetch_session_data(token, payload)

    async def _fetch_session_data(self, token: str, payload: dict[str, str]) -> Session:
        """POST the login form and interpret the response."""
        params = {"token": token}

        try:
            async with aiohttp.ClientSession() as http:
                async with http.post(self.base_url, params=params, data=payload) as resp:
                    if 200 <= resp.status < 300:
                        logger.debug(f"Login response: {resp.status}")
                        data = await resp.json(content_type=None)
                        return Session.from_dict(data)

                    logger.error(
                        f"Creating session failed. token: {mask(token)}, "
                        f"form: username={payload['username']} password=***"
                    )
                    # The error body is informational; a bad one must not hide the rejection
                    try:
                        body = await resp.text(errors="replace")
                    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                        body = f"<unreadable body: {e}>"
                    logger.error(f"Login response {resp.status}: {body}")
                    raise CreateSessionFailed(resp.status)

        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            raise AuthRequestFailed(e) from e
        except (ValueError, KeyError, TypeError) as e:
            # Malformed or incomplete success body
            raise AuthRequestFailed(e) from e
