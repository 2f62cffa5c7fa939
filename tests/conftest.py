"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime

import httpx
import pytest

from twinkly_client.adapters.twinkly_session import DeviceSession
from twinkly_client.config import Settings
from twinkly_client.domain.modes import DeviceMode
from twinkly_client.domain.movie import Movie
from twinkly_client.errors import DeviceError

API_PREFIX = "/xled/v1/"
FIXED_NOW = datetime(2024, 12, 1, 18, 0, tzinfo=UTC)


def fixed_clock() -> datetime:
    return FIXED_NOW


@dataclass
class FakeDevice:
    """In-memory Twinkly device served through httpx.MockTransport."""

    token: str = "abc"
    expires_in: int | None = 3600
    login_payload: dict[str, object] | None = None
    mode: str = "movie"
    mode_body: bytes | None = None
    failures: dict[str, int] = field(default_factory=dict)
    unreachable: bool = False
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.unreachable:
            raise httpx.ConnectError("Connection refused", request=request)
        path = request.url.path.removeprefix(API_PREFIX)
        status = self.failures.get(path)
        if status is not None:
            return httpx.Response(status, json={"code": 1104})
        if path == "login":
            return httpx.Response(200, json=self._login_body())
        if path == "led/mode" and request.method == "GET":
            if self.mode_body is not None:
                return httpx.Response(200, content=self.mode_body)
            return httpx.Response(200, json={"mode": self.mode, "code": 1000})
        return httpx.Response(200, json={"code": 1000})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def paths(self) -> list[str]:
        return [request.url.path.removeprefix(API_PREFIX) for request in self.requests]

    def last_json(self) -> dict[str, object]:
        return json.loads(self.requests[-1].content.decode())

    def _login_body(self) -> dict[str, object]:
        if self.login_payload is not None:
            return self.login_payload
        body: dict[str, object] = {
            "authentication_token": self.token,
            "challenge-response": "0" * 40,
            "code": 1000,
        }
        if self.expires_in is not None:
            body["authentication_token_expires_in"] = self.expires_in
        return body


@dataclass
class FakeSession(DeviceSession):
    """Fake device session that records calls."""

    calls: list[tuple[str, object]] = field(default_factory=list)
    fail_with: DeviceError | None = None
    closed: bool = False

    async def set_mode(self, mode: DeviceMode) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append(("set_mode", mode))

    async def get_mode(self) -> DeviceMode:
        return DeviceMode.OFF

    async def upload_movie(self, movie: Movie) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append(("upload_movie", movie))

    async def close(self) -> None:
        self.closed = True


@dataclass
class FakeConnector:
    """Session connector returning pre-built fake sessions."""

    sessions: list[FakeSession] = field(default_factory=list)
    connected: list[tuple[str, str | None]] = field(default_factory=list)
    error: Exception | None = None

    async def __call__(self, host: str, proxy: str | None) -> DeviceSession:
        self.connected.append((host, proxy))
        if self.error is not None:
            raise self.error
        session = FakeSession()
        self.sessions.append(session)
        return session


@pytest.fixture
def settings() -> Settings:
    return Settings(
        host="192.168.1.160",
        led_count=10,
        proxy_url="http://127.0.0.1:8888",
        use_proxy=False,
    )


@pytest.fixture
def device() -> FakeDevice:
    return FakeDevice()


@pytest.fixture
def connector() -> FakeConnector:
    return FakeConnector()
