"""Command handlers for the interactive shell."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from twinkly_client.adapters.twinkly_session import DeviceSession
from twinkly_client.config import Settings
from twinkly_client.domain.modes import DeviceMode
from twinkly_client.errors import TwinklyError
from twinkly_client.services.demo import build_demo_movie
from twinkly_client.shell_commands import ShellCommand, help_lines

PROMPT = "TWINKLIER> "
SESSION_REQUIRED_MESSAGE = (
    'This command requires an active session. Use the "connect" command to begin one.'
)

SessionConnector = Callable[[str, str | None], Awaitable[DeviceSession]]

_logger = logging.getLogger(__name__)


async def _read_stdin_line() -> str:
    return await asyncio.to_thread(input, PROMPT)


@dataclass
class CommandShell:
    """Line-oriented shell owning the single current device session."""

    settings: Settings
    connect_session: SessionConnector
    output: Callable[[str], None] = print
    session: DeviceSession | None = None
    use_proxy: bool = False
    running: bool = field(default=True, init=False)

    def __post_init__(self) -> None:
        self.use_proxy = self.use_proxy or self.settings.use_proxy

    async def run(self, read_line: Callable[[], Awaitable[str]] | None = None) -> None:
        """Read and execute commands until `exit` or end of input."""
        next_line = read_line or _read_stdin_line
        while self.running:
            try:
                line = await next_line()
            except EOFError:
                break
            await self.execute(line)

    async def execute(self, line: str) -> None:
        """Execute a single command line, reporting device errors to the user."""
        name, _, remainder = line.strip().partition(" ")
        command = ShellCommand.lookup(name)
        if command is None:
            self.output("Unknown command")
            return
        if command.value.requires_session and self._active_session() is None:
            return

        # Only the first argument is used.
        arguments = remainder.split()
        argument = arguments[0] if arguments else None
        handler = self._handlers()[command]
        try:
            await handler(argument)
        except TwinklyError as exc:
            _logger.debug("Command %s failed", name, exc_info=exc)
            self.output(f"An error occurred. Message: {exc}")

    async def close(self) -> None:
        """Close the current session, if any."""
        if self.session is not None:
            await self.session.close()
            self.session = None

    def _active_session(self) -> DeviceSession | None:
        """Return the current session, telling the user when there is none."""
        if self.session is None:
            self.output(SESSION_REQUIRED_MESSAGE)
        return self.session

    def _handlers(
        self,
    ) -> dict[ShellCommand, Callable[[str | None], Awaitable[None]]]:
        return {
            ShellCommand.CONNECT: self._connect,
            ShellCommand.DISCONNECT: self._disconnect,
            ShellCommand.SET_MODE: self._set_mode,
            ShellCommand.HELP: self._help,
            ShellCommand.SEND_DEMO: self._send_demo,
            ShellCommand.ENABLE_PROXY: self._enable_proxy,
            ShellCommand.EXIT: self._exit,
        }

    async def _connect(self, host: str | None) -> None:
        target = host or self.settings.host
        self.output(f"Connecting to Twinkly device at {target}")
        proxy = self.settings.proxy_url if self.use_proxy else None
        session = await self.connect_session(target, proxy)
        await self.close()
        self.session = session
        self.output("Connected!")

    async def _disconnect(self, _: str | None) -> None:
        await self.close()

    async def _set_mode(self, mode_name: str | None) -> None:
        mode = DeviceMode.from_name(mode_name or "")
        if mode is None:
            self.output("Unsupported mode.")
            return
        session = self._active_session()
        if session is not None:
            await session.set_mode(mode)

    async def _help(self, _: str | None) -> None:
        for line in help_lines():
            self.output(line)

    async def _send_demo(self, _: str | None) -> None:
        session = self._active_session()
        if session is None:
            return
        self.output("Creating new movie")
        movie = build_demo_movie(
            self.settings.led_count, frame_delay=self.settings.demo_frame_delay_ms
        )
        self.output("Uploading movie ...")
        await session.upload_movie(movie)
        self.output("Setting mode to movie...")
        await session.set_mode(DeviceMode.MOVIE)

    async def _enable_proxy(self, _: str | None) -> None:
        self.use_proxy = True
        self.output(f"Proxy enabled for new connections: {self.settings.proxy_url}")

    async def _exit(self, _: str | None) -> None:
        self.running = False
