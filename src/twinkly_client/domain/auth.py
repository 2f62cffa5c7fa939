"""Authentication models for the device login handshake."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, Field

DEFAULT_TOKEN_LIFETIME_SECONDS = 14400
EXPIRY_SAFETY_MARGIN = timedelta(seconds=10)


class LoginResponse(BaseModel):
    """Payload returned by the device's login endpoint."""

    authentication_token: str = Field(min_length=1)
    authentication_token_expires_in: int = DEFAULT_TOKEN_LIFETIME_SECONDS


@dataclass(frozen=True)
class AuthToken:
    """Bearer token with the instant after which it should not be used."""

    value: str
    expires_at: datetime

    @classmethod
    def from_login(cls, login: LoginResponse, now: datetime) -> "AuthToken":
        """Build a token expiring a safety margin before the device's own expiry."""
        expires_at = (
            now
            + timedelta(seconds=login.authentication_token_expires_in)
            - EXPIRY_SAFETY_MARGIN
        )
        return cls(value=login.authentication_token, expires_at=expires_at)

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True once the expiry instant has been reached."""
        return (now or datetime.now(tz=UTC)) >= self.expires_at
