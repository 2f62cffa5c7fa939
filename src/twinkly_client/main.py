"""Command-line entry point."""

import asyncio
from collections.abc import Awaitable, Callable

from twinkly_client.app_logging import configure_logging
from twinkly_client.containers import AppContainer, build_container


async def run(
    container: AppContainer, read_line: Callable[[], Awaitable[str]] | None = None
) -> None:
    """Run the interactive shell and release its session afterwards."""
    try:
        await container.shell.run(read_line)
    finally:
        await container.close_resources()


def main() -> None:
    """Start the Twinkly movie shell."""
    container = build_container()
    configure_logging(container.settings.log_level)
    print("Twinklier shell. Type 'help' for a list of commands.")
    asyncio.run(run(container))


if __name__ == "__main__":
    main()
