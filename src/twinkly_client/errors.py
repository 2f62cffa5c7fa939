"""Errors raised while talking to a device."""


class TwinklyError(Exception):
    """Base class for device client failures."""


class NetworkError(TwinklyError):
    """The HTTP transport failed (refused connection, timeout, DNS)."""


class AuthenticationError(TwinklyError):
    """The login handshake did not yield a usable token."""


class DeviceError(TwinklyError):
    """The device answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
