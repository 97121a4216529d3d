"""Command-line interface for Vinyl Scrobbler."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config.history import ScrobbleHistory
from .config.settings import Credentials, Settings
from .core.lastfm import LastfmClient
from .errors import (
    AuthenticationFailedError,
    ConfigurationMissingError,
    ReleaseFetchFailedError,
)
from .models.release import Release
from .models.scrobble import ScrobbleReport
from .models.track import NormalizedTrack
from .service import VinylScrobblerService, write_session_key
from .utils.formatting import format_duration, format_timestamp
from .utils.logger import setup_logger
from .utils.platform import get_config_dir

app = typer.Typer(help="Scrobble vinyl records from Discogs to Last.fm")
console = Console()

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to configuration file"
)


def get_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from file or defaults."""
    return Settings.from_file_or_default(config_path)


def get_service(config_path: Optional[Path] = None) -> VinylScrobblerService:
    """Build the scrobbler service."""
    return VinylScrobblerService(config_path=config_path)


def show_release(release: Release, tracks: List[NormalizedTrack]) -> None:
    """Print release details and its tracklist."""
    year = f" ({release.year})" if release.year else ""
    console.print(f"\n[bold]{escape(release.artist)}[/bold] - [green]{escape(release.title)}[/green]{year}")
    if release.url:
        console.print(f"[dim]{release.url}[/dim]")
    if release.thumbnail_url:
        console.print(f"[dim]Cover: {release.thumbnail_url}[/dim]")

    table = Table(title="Tracklist")
    table.add_column("#", justify="right")
    table.add_column("Position", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Duration", justify="right")

    for index, track in enumerate(tracks, start=1):
        duration = format_duration(track.parsed_seconds)
        if track.track.raw_duration is None:
            duration = f"[yellow]{duration}?[/yellow]"
        table.add_row(str(index), escape(track.position), escape(track.title), duration)

    console.print(table)


def show_report(report: ScrobbleReport) -> None:
    """Print the outcome of a scrobble run."""
    if report.dry_run:
        table = Table(title="Dry run schedule")
        table.add_column("#", justify="right")
        table.add_column("Track", style="green")
        table.add_column("Duration", justify="right")
        table.add_column("Timestamp")

        for index, entry in enumerate(report.entries, start=1):
            table.add_row(
                str(index),
                escape(entry.track),
                format_duration(entry.duration),
                format_timestamp(entry.timestamp)
            )

        console.print(table)
        console.print(f"[cyan]Dry run: {report.processed} track(s), nothing submitted[/cyan]")
        return

    for failure in report.failures:
        console.print(f"[red]Failed: {escape(failure.track)} ({escape(failure.reason)})[/red]")

    if report.failed:
        console.print(
            f"[yellow]Scrobbled {report.succeeded} of {report.processed} track(s), "
            f"{report.failed} failed[/yellow]"
        )
    else:
        console.print(f"\n[green]All {report.processed} track(s) scrobbled successfully![/green]")


@app.command()
def scrobble(
    release: Optional[str] = typer.Argument(
        None,
        help="Discogs release URL or ID (prompted for if omitted)"
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Show the computed scrobbles without submitting them"
    ),
    delay: Optional[int] = typer.Option(
        None,
        "--delay",
        "-d",
        min=0,
        help="Delay between submissions in milliseconds"
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip the artist correction and confirmation prompts"
    ),
    config: Optional[Path] = CONFIG_OPTION
):
    """Scrobble every track of a Discogs release."""
    if not release:
        release = typer.prompt("Enter Discogs release URL")

    try:
        service = get_service(config)
    except ConfigurationMissingError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        console.print("Set the missing variables in the environment or a .env file")
        raise typer.Exit(1)

    try:
        fetched = service.fetch_release(release)
    except ReleaseFetchFailedError as e:
        console.print(f"[red]Discogs error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    show_release(fetched, service.scrobbler.normalize(fetched.tracks))

    if not yes:
        new_artist = typer.prompt(
            "Press Enter to keep or enter corrected artist name",
            default="",
            show_default=False
        ).strip()
        if new_artist:
            fetched = fetched.with_artist(new_artist)

        question = "Preview these scrobbles?" if dry_run else "Scrobble these tracks?"
        if not typer.confirm(question, default=True):
            console.print("[yellow]Cancelled[/yellow]")
            return

    try:
        report = service.scrobble_release(fetched, dry_run=dry_run, delay_ms=delay)
    except AuthenticationFailedError as e:
        console.print(f"[red]Authentication error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    show_report(report)


@app.command()
def auth(
    config: Optional[Path] = CONFIG_OPTION
):
    """Authorize this application in the browser and store the session key."""
    settings = get_settings(config)
    credentials = Credentials.from_env()

    try:
        credentials.require('lastfm_api_key', 'lastfm_api_secret')
    except ConfigurationMissingError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    logger = setup_logger(log_file=settings.logging.path, level=settings.logging.level, console=False)
    client = LastfmClient(
        api_key=credentials.lastfm_api_key,
        api_secret=credentials.lastfm_api_secret,
        logger=logger,
        api_url=settings.lastfm.api_url,
        timeout=settings.lastfm.timeout
    )

    try:
        token = client.get_token()
        console.print("\nPlease visit this URL to authorize the application:")
        console.print(f"[cyan]{client.authorization_url(token)}[/cyan]")
        typer.prompt(
            "\nPress Enter once you have authorized access",
            default="",
            show_default=False
        )
        session_key = client.get_session(token)
    except AuthenticationFailedError as e:
        console.print(f"[red]Authentication error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    write_session_key(settings.lastfm.session_path, session_key)
    console.print(f"[green]Session key saved to {settings.lastfm.session_path}[/green]")


@app.command()
def history(
    limit: int = typer.Option(
        20,
        "--limit",
        "-l",
        min=1,
        help="Number of sessions to show"
    ),
    config: Optional[Path] = CONFIG_OPTION
):
    """List previously scrobbled releases."""
    settings = get_settings(config)
    logger = setup_logger(level=settings.logging.level, console=True, console_level="WARNING")
    entries = ScrobbleHistory(settings.history.path, logger).entries()

    if not entries:
        console.print("[yellow]No scrobble sessions logged yet[/yellow]")
        return

    table = Table(title="Scrobble History")
    table.add_column("Scrobbled", style="cyan")
    table.add_column("Artist", style="green")
    table.add_column("Album")
    table.add_column("Tracks", justify="right")
    table.add_column("Failed", justify="right")

    for entry in entries[-limit:]:
        failed = entry.get('failed', 0)
        table.add_row(
            str(entry.get('scrobbled_at', '')),
            escape(str(entry.get('artist', ''))),
            escape(str(entry.get('album', ''))),
            str(len(entry.get('tracks', []))),
            f"[red]{failed}[/red]" if failed else "0"
        )

    console.print(table)


@app.command()
def init_config(
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path for config file"
    )
):
    """Initialize a configuration file with defaults."""
    if output is None:
        output = get_config_dir() / 'config.yaml'

    if output.exists():
        overwrite = typer.confirm(
            f"Config file already exists at {output}. Overwrite?",
            default=False
        )
        if not overwrite:
            console.print("[yellow]Cancelled[/yellow]")
            return

    settings = Settings()
    settings.save(output)

    console.print(f"[green]Configuration file created: {output}[/green]")
    console.print("\nCredentials are read from the environment or a .env file:")
    console.print("  LASTFM_API_KEY, LASTFM_API_SECRET, LASTFM_USERNAME,")
    console.print("  LASTFM_PASSWORD, DISCOGS_USER_TOKEN")


if __name__ == "__main__":
    app()
