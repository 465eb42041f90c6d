"""Shared fixtures: a local stand-in for the TIDAL login endpoint."""

import json
import socket
from typing import Any, Union

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

SUCCESS_BODY = json.dumps({"userId": 123, "sessionId": "session-id-123", "countryCode": "US"})
FAILURE_BODY = json.dumps({"status": 401, "subStatus": 3001, "userMessage": "Invalid credentials"})


class FakeLoginService:
    """Records login requests and answers with a configurable response."""

    def __init__(self) -> None:
        self.status = 200
        self.body: Union[str, bytes] = SUCCESS_BODY
        self.url = ""
        self.requests: list[dict[str, Any]] = []

    def reject(self, status: int = 401) -> None:
        """Answer subsequent logins with a TIDAL error body."""
        self.status = status
        self.body = FAILURE_BODY

    async def handle(self, request: web.Request) -> web.Response:
        form = await request.post()
        self.requests.append(
            {
                "method": request.method,
                "query": dict(request.query),
                "form": dict(form),
                "content_type": request.content_type,
            }
        )
        if isinstance(self.body, bytes):
            return web.Response(status=self.status, body=self.body, content_type="application/json")
        return web.Response(status=self.status, text=self.body, content_type="application/json")


@pytest.fixture
async def login_service():
    """Start a fake login endpoint for the duration of a test."""
    service = FakeLoginService()
    app = web.Application()
    app.router.add_post("/v1/login/username", service.handle)

    server = TestServer(app)
    await server.start_server()
    service.url = str(server.make_url("/v1/login/username"))
    yield service
    await server.close()


@pytest.fixture
def refused_url() -> str:
    """URL of a local port nobody is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    return f"http://127.0.0.1:{port}/v1/login/username"
