"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from jellyfin_cli.models.catalog import Artist, DiscographySong
from jellyfin_cli.models.song import SongDescriptor
from jellyfin_cli.utils.discography import group_by_album
from jellyfin_cli.utils.formatting import format_duration, format_size, format_ticks


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "AuthorizationError": [
            "• Verify the username and password in the configuration file.",
            "• Run `jellyfin-cli init` again to replace them.",
            "• Check that the account is enabled on the server dashboard.",
        ],
        "TransportError": [
            "• Check that the server host is reachable from this machine.",
            "• Verify the scheme (http/https) and port in the configured host.",
        ],
        "StreamInterruptedError": [
            "• The connection dropped while audio was being transferred.",
            "• Try again; the partial output was kept for inspection.",
        ],
        "ServerError": [
            "• The Jellyfin server returned an error for this request.",
            "• Check the server logs for details.",
        ],
        "MetadataIncompleteError": [
            "• The server has not finished probing this file.",
            "• Run a library scan on the server and try again.",
        ],
        "ConfigurationError": [
            "• Run `jellyfin-cli init <HOST> <USERNAME> <PASSWORD>` to create a config.",
            "• Use `jellyfin-cli --show-config` to inspect the current values.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration, hiding sensitive data."""
    console = Console()
    content = ""
    for key, value in config_data.items():
        if key == "password":
            value = "********"
        content += f"{key} = {value}\n"

    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_artists_table(artists: list[Artist]):
    """Displays a list of artists."""
    console = Console()
    if not artists:
        console.print("[yellow]No artists found.[/yellow]")
        return

    table = Table(title=f"Artists ({len(artists)})", box=box.SIMPLE_HEAD)
    table.add_column("Name", style="cyan")
    table.add_column("Length", justify="right", style="green")
    table.add_column("Plays", justify="right")
    table.add_column("ID", style="dim")
    for artist in artists:
        favorite = " [magenta]♥[/magenta]" if artist.user_data.is_favorite else ""
        table.add_row(
            f"{artist.name}{favorite}",
            format_ticks(artist.run_time_ticks),
            str(artist.user_data.play_count),
            artist.id,
        )
    console.print(table)


def print_discography(songs: list[DiscographySong]):
    """Displays an artist's tracks grouped by album, in server order."""
    console = Console()
    if not songs:
        console.print("[yellow]No tracks found.[/yellow]")
        return

    for album in group_by_album(songs):
        table = Table(box=None, show_header=False, padding=(0, 2))
        table.add_column(justify="right", style="dim")
        table.add_column(style="white")
        table.add_column(justify="right", style="green")
        table.add_column(style="dim")
        for song in album.songs:
            table.add_row(
                str(song.index_number) if song.index_number is not None else "-",
                song.name,
                format_ticks(song.run_time_ticks),
                song.id,
            )
        console.print(
            Panel(
                table,
                title=f"[bold cyan]{album.album or 'Unknown Album'}[/bold cyan]",
                subtitle=(
                    f"{album.album_artist} · {len(album.songs)} tracks · "
                    f"{format_ticks(album.run_time_ticks)}"
                ),
                border_style="cyan",
                expand=False,
            )
        )


def print_songs_table(songs: list[DiscographySong]):
    """Displays the song inventory."""
    console = Console()
    if not songs:
        console.print("[yellow]No songs found.[/yellow]")
        return

    table = Table(title=f"Songs ({len(songs)})", box=box.SIMPLE_HEAD)
    table.add_column("Title", style="white")
    table.add_column("Album", style="cyan")
    table.add_column("Album Artist")
    table.add_column("Length", justify="right", style="green")
    table.add_column("ID", style="dim")
    for song in songs:
        table.add_row(
            song.name,
            song.album,
            song.album_artist,
            format_ticks(song.run_time_ticks),
            song.id,
        )
    console.print(table)


def print_song_descriptor(song_id: str, descriptor: SongDescriptor):
    """Displays the technical metadata of one track."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Channels:", str(descriptor.channels))
    table.add_row("Sample Rate:", f"{descriptor.sample_rate} Hz")
    table.add_row(
        "Duration:", format_duration(descriptor.duration.total_seconds())
    )
    table.add_row(
        "File Size:", f"{format_size(descriptor.file_size)} ({descriptor.file_size} bytes)"
    )

    console.print(
        Panel(table, title=f"[bold]Song {song_id}[/bold]", border_style="green")
    )
