"""Dependency container wiring for the shell."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from twinkly_client.adapters.twinkly_session import DeviceSession, TwinklySession
from twinkly_client.config import Settings
from twinkly_client.services.commands import CommandShell


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    shell: CommandShell
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    output: Callable[[str], None] = print,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()

    async def connect_session(host: str, proxy: str | None) -> DeviceSession:
        return await TwinklySession.connect(
            host,
            proxy=proxy,
            timeout=resolved_settings.request_timeout_seconds,
        )

    shell = CommandShell(
        settings=resolved_settings,
        connect_session=connect_session,
        output=output,
    )

    async def close_resources() -> None:
        await shell.close()

    return AppContainer(
        settings=resolved_settings,
        shell=shell,
        close_resources=close_resources,
    )
