"""
Entry point for `jellyfin-cli` and `python -m jellyfin_cli`.

Errors raised by a command are rendered as a panel and turned into an exit
status that tells scripts which part of the chain failed.
"""

import asyncio
import logging
import sys

from rich.console import Console

from jellyfin_cli.cli.app import app
from jellyfin_cli.cli.formatters import format_error_with_suggestions
from jellyfin_cli.exceptions import (
    AuthorizationError,
    ConfigurationError,
    JellyfinCliError,
    MetadataIncompleteError,
    StreamInterruptedError,
    TransportError,
)

log = logging.getLogger("jellyfin_cli")

EXIT_ERROR = 1
EXIT_CONFIG = 3
EXIT_AUTH = 4
EXIT_TRANSPORT = 5
EXIT_STREAM_INTERRUPTED = 6
EXIT_METADATA = 7
EXIT_CANCELLED = 130

# Most specific class first; the first match along the MRO wins.
EXIT_CODES: dict[type[JellyfinCliError], int] = {
    ConfigurationError: EXIT_CONFIG,
    AuthorizationError: EXIT_AUTH,
    StreamInterruptedError: EXIT_STREAM_INTERRUPTED,
    TransportError: EXIT_TRANSPORT,
    MetadataIncompleteError: EXIT_METADATA,
}


def exit_code_for(error: JellyfinCliError) -> int:
    """Maps an error to its exit status; unlisted errors exit with 1."""
    for cls in type(error).__mro__:
        if cls in EXIT_CODES:
            return EXIT_CODES[cls]
    return EXIT_ERROR


def main() -> None:
    console = Console(stderr=True)
    try:
        app()
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print("[yellow]Cancelled.[/yellow]")
        sys.exit(EXIT_CANCELLED)
    except JellyfinCliError as e:
        console.print(format_error_with_suggestions(e))
        sys.exit(exit_code_for(e))
    except Exception as e:
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
