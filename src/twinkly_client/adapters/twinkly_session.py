"""Authenticated session against a single Twinkly device."""

import base64
import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

import httpx
from pydantic import ValidationError

from twinkly_client.domain.auth import AuthToken, LoginResponse
from twinkly_client.domain.modes import DeviceMode
from twinkly_client.domain.movie import Movie
from twinkly_client.errors import AuthenticationError, DeviceError, NetworkError

DEFAULT_TIMEOUT_SECONDS = 10.0
CHALLENGE_BYTES = 32
JSON_CONTENT_TYPE = "application/json"
OCTET_STREAM_CONTENT_TYPE = "application/octet-stream"

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class DeviceSession(Protocol):
    """Interface for an authenticated device connection."""

    async def set_mode(self, mode: DeviceMode) -> None:
        """Switch the device to the given operating mode."""

    async def get_mode(self) -> DeviceMode:
        """Return the device's current operating mode."""

    async def upload_movie(self, movie: Movie) -> None:
        """Upload a movie buffer and its playback configuration."""

    async def close(self) -> None:
        """Release the underlying HTTP resources."""


@dataclass
class TwinklySession(DeviceSession):
    """HTTPX-backed session holding the device's bearer token.

    Build sessions only through :meth:`connect`, which performs the
    login/verify handshake. The generated constructor exists for the
    handshake itself; calling it directly yields a session whose token was
    never verified by the device.

    The token is never refreshed implicitly: once it expires the device
    rejects requests with an error status and callers must reconnect or
    call :meth:`reauthenticate`.
    """

    hostname: str
    http_client: httpx.AsyncClient
    token: AuthToken
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    clock: Callable[[], datetime] = field(default=_utc_now, repr=False)

    @classmethod
    async def connect(
        cls,
        hostname: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        proxy: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> "TwinklySession":
        """Log in to the device and verify the token before returning a session.

        A client created here (optionally routed through `proxy`) is closed
        again when the handshake fails.
        """
        client = http_client or httpx.AsyncClient(proxy=proxy)
        base_url = _base_url(hostname)
        try:
            token = await _login(client, base_url, timeout=timeout, now=clock())
            session = cls(
                hostname=hostname,
                http_client=client,
                token=token,
                timeout=timeout,
                clock=clock,
            )
            await session._post("verify")
        except Exception:
            if http_client is None:
                await client.aclose()
            raise
        _logger.info("Connected to %s", base_url)
        return session

    @property
    def base_url(self) -> str:
        """Return the device's API root."""
        return _base_url(self.hostname)

    @property
    def expires_at(self) -> datetime:
        """Return the instant after which the token should not be used."""
        return self.token.expires_at

    @property
    def token_expired(self) -> bool:
        """Return True once the token's expiry instant has passed."""
        return self.token.is_expired(self.clock())

    async def reauthenticate(self) -> None:
        """Run the login handshake again and swap in the new token."""
        token = await _login(
            self.http_client, self.base_url, timeout=self.timeout, now=self.clock()
        )
        await _send(
            self.http_client,
            "POST",
            f"{self.base_url}/verify",
            headers=_auth_headers(token, JSON_CONTENT_TYPE),
            timeout=self.timeout,
        )
        self.token = token
        _logger.info("Re-authenticated with %s", self.base_url)

    async def set_mode(self, mode: DeviceMode) -> None:
        """Switch the device to the given operating mode."""
        await self._post("led/mode", json={"mode": mode.value})

    async def get_mode(self) -> DeviceMode:
        """Return the device's current operating mode."""
        response = await self._request("GET", "led/mode")
        try:
            return DeviceMode(response.json()["mode"])
        except (ValueError, TypeError, KeyError) as exc:
            raise DeviceError(
                f"Device returned an unreadable mode: {response.text!r}"
            ) from exc

    async def upload_movie(self, movie: Movie) -> None:
        """Turn the device off, upload the frame buffer, then its configuration."""
        await self.set_mode(DeviceMode.OFF)
        buffer = movie.encode()
        _logger.info(
            "Uploading movie to %s: frames=%s leds=%s bytes=%s",
            self.hostname,
            movie.frame_count,
            movie.led_count,
            len(buffer),
        )
        await self._post(
            "led/movie/full", content=buffer, content_type=OCTET_STREAM_CONTENT_TYPE
        )
        await self._post("led/movie/config", json=movie.config_payload())

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _post(
        self,
        path: str,
        *,
        json: dict[str, object] | None = None,
        content: bytes | None = None,
        content_type: str = JSON_CONTENT_TYPE,
    ) -> httpx.Response:
        return await self._request(
            "POST", path, json=json, content=content, content_type=content_type
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, object] | None = None,
        content: bytes | None = None,
        content_type: str = JSON_CONTENT_TYPE,
    ) -> httpx.Response:
        """Send a request carrying the session token."""
        return await _send(
            self.http_client,
            method,
            f"{self.base_url}/{path}",
            headers=_auth_headers(self.token, content_type),
            json=json,
            content=content,
            timeout=self.timeout,
        )


def _base_url(hostname: str) -> str:
    return f"http://{hostname}/xled/v1"


def _auth_headers(token: AuthToken, content_type: str) -> dict[str, str]:
    return {"X-Auth-Token": token.value, "Content-Type": content_type}


def _new_challenge() -> str:
    """Return 32 random bytes, base64-encoded, for the login request."""
    return base64.b64encode(secrets.token_bytes(CHALLENGE_BYTES)).decode("ascii")


async def _login(
    client: httpx.AsyncClient, base_url: str, *, timeout: float, now: datetime
) -> AuthToken:
    """Request a new token from the device's login endpoint."""
    try:
        response = await _send(
            client,
            "POST",
            f"{base_url}/login",
            json={"challenge": _new_challenge()},
            timeout=timeout,
        )
    except (NetworkError, DeviceError) as exc:
        _logger.warning("Login to %s failed: %s", base_url, exc)
        raise

    try:
        login = LoginResponse.model_validate(response.json())
    except (ValueError, ValidationError) as exc:
        raise AuthenticationError(
            "Login response did not include the expected token data"
        ) from exc
    return AuthToken.from_login(login, now)


async def _send(  # noqa: PLR0913
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    json: dict[str, object] | None = None,
    content: bytes | None = None,
    timeout: float,
) -> httpx.Response:
    """Send a request and translate httpx failures into client errors."""
    try:
        response = await client.request(
            method,
            url,
            headers=headers,
            json=json,
            content=content,
            timeout=timeout,
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status_code = exc.response.status_code
        raise DeviceError(
            f"HTTP {status_code} for {method} {url}", status_code=status_code
        ) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise NetworkError(f"{method} {url} failed: {exc}") from exc
    return response
