"""Interactive shell command configuration."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class CommandSpec:
    """Declarative shell command definition."""

    name: str
    help_text: str
    requires_session: bool = False


class ShellCommand(Enum):
    """Enum of shell commands (single source of truth)."""

    CONNECT = CommandSpec(
        "connect",
        "Connects to the specified IP/hostname, or the configured default",
    )
    DISCONNECT = CommandSpec(
        "disconnect", "Abandons the current session", requires_session=True
    )
    SET_MODE = CommandSpec(
        "set-mode",
        'Sets the controller mode. Valid modes are "off", "movie", '
        '"realtime", and "demo".',
        requires_session=True,
    )
    HELP = CommandSpec("help", "Lists supported commands.")
    SEND_DEMO = CommandSpec(
        "send-demo",
        "Sends a pre-programmed demo sequence to the connected controller.",
        requires_session=True,
    )
    ENABLE_PROXY = CommandSpec(
        "enable-proxy",
        "Routes new connections through the configured debugging proxy.",
    )
    EXIT = CommandSpec("exit", "Exits the shell")

    @classmethod
    def lookup(cls, name: str) -> "ShellCommand | None":
        """Return the command with the given name, if any."""
        for entry in cls:
            if entry.value.name == name:
                return entry
        return None


def help_lines() -> list[str]:
    """Return one formatted help line per command."""
    return [f"{entry.value.name:<12} - {entry.value.help_text}" for entry in ShellCommand]
