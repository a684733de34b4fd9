"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import aiofiles
import typer
from rich.console import Console
from rich.logging import RichHandler

from jellyfin_cli import __version__
from jellyfin_cli.api import (
    Session,
    get_discography,
    list_artists,
    list_songs,
    open_audio_stream,
    resolve_song_metadata,
)
from jellyfin_cli.media import PrefetchBuffer
from jellyfin_cli.storage.config_manager import ConfigManager
from jellyfin_cli.utils.formatting import TICKS_PER_SECOND, format_size

from .formatters import (
    print_artists_table,
    print_config,
    print_discography,
    print_song_descriptor,
    print_songs_table,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("jellyfin_cli")

app = typer.Typer(
    name="jellyfin-cli",
    help="Browse and stream music from a Jellyfin server.",
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "jellyfin-cli"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


async def _open_session() -> Session:
    """Loads the configuration and logs in. Warns, but continues, if login fails."""
    config = ConfigManager(CONFIG_FILE).load_config()
    session = await Session.create(
        config.host, config.credentials, identity=config.identity
    )
    if not session.is_authenticated:
        console.print(
            f"[yellow]⚠️  Login failed ({session.auth_error}). "
            "Requests will be rejected by the server.[/yellow]"
        )
    return session


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """Jellyfin music CLI"""
    if version:
        console.print(f"[bold]jellyfin-cli[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "WARNING"
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("jellyfin_cli").setLevel(log_level)

    if show_config:
        config_manager = ConfigManager(CONFIG_FILE)
        config = config_manager.load_config()
        print_config(CONFIG_FILE, config.model_dump(exclude={"config_path"}))
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    host: str = typer.Argument(..., help="Server URL, e.g. http://localhost:8096."),
    username: str = typer.Argument(..., help="Jellyfin username."),
    password: str = typer.Argument(..., help="Jellyfin password."),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration."
    ),
):
    """Save the server address and credentials, then test the login."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    ConfigManager(CONFIG_FILE).save_new_config(
        {"host": host, "username": username, "password": password}
    )
    console.print(f"[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")

    async def _check_login():
        session = await _open_session()
        await session.close()
        if session.is_authenticated:
            console.print(f"[green]✓ Logged in as user {session.user_id}.[/green]")

    asyncio.run(_check_login())


@app.command()
def artists():
    """List artists, sorted by name."""

    async def _artists_async():
        async with await _open_session() as session:
            print_artists_table(await list_artists(session))

    asyncio.run(_artists_async())


@app.command()
def discography(artist_id: str = typer.Argument(..., help="The artist's ID.")):
    """Show every track by an artist, grouped by album."""

    async def _discography_async():
        async with await _open_session() as session:
            print_discography(await get_discography(session, artist_id))

    asyncio.run(_discography_async())


@app.command()
def songs():
    """List songs, sorted by album."""

    async def _songs_async():
        async with await _open_session() as session:
            print_songs_table(await list_songs(session))

    asyncio.run(_songs_async())


@app.command()
def song(song_id: str = typer.Argument(..., help="The track's ID.")):
    """Show the channels, sample rate, duration and size of a track."""

    async def _song_async():
        async with await _open_session() as session:
            descriptor = await resolve_song_metadata(session, song_id)
            print_song_descriptor(song_id, descriptor)

    asyncio.run(_song_async())


@app.command()
def stream(
    track_id: str = typer.Argument(..., help="The track's ID."),
    output: Path = typer.Option(  # noqa: B008
        ..., "-o", "--output", help="File to write the audio to."
    ),
    buffer: int = typer.Option(
        32, "-b", "--buffer", help="Number of chunks to read ahead."
    ),
    start: float = typer.Option(0.0, "--start", help="Start offset in seconds."),
):
    """Stream a track from the server into a file."""

    async def _stream_async():
        async with await _open_session() as session:
            audio = await open_audio_stream(
                session, track_id, start_time_ticks=int(start * TICKS_PER_SECOND)
            )
            async with (
                PrefetchBuffer(audio, max_chunks=buffer) as prefetch,
                aiofiles.open(output, "wb") as f,
            ):
                async for chunk in prefetch:
                    await f.write(chunk)

            if audio.bytes_received == 0:
                console.print("[yellow]⚠️  The server sent nothing to play.[/yellow]")
            else:
                console.print(
                    f"[green]✓ Wrote {format_size(audio.bytes_received)} "
                    f"in {audio.chunks_received} chunks to '{output}'.[/green]"
                )

    asyncio.run(_stream_async())
