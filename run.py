#!/usr/bin/env python3
"""
Application Entry Script.

Launch point for the notes application. Opens the configured notes
database, loads the canonical list and prints it.

Usage:
    python run.py --help
    python run.py --action list --verbose
    python run.py --action list --query work
    python run.py --action config
    python run.py --action info
"""

import asyncio
import sys
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from notekeeper.core.logging import bind_source, get_logger, setup_logging


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(["list", "config", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--query", "-q",
    default="",
    help="Search text matched against title, body and tags (for list action).",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
def main(
    action: str,
    query: str,
    verbose: bool,
    debug: bool,
) -> None:
    """
    Notes Application Entry Point.

    List stored notes, view configuration, or show application info.

    Examples:

        # List all notes, newest first
        python run.py --action list

        # List notes matching a search
        python run.py --action list --query groceries

        # View loaded configuration
        python run.py --action config
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    bind_source("cli")
    logger = get_logger(__name__)

    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    if action == "list":
        list_notes(logger, query)
    elif action == "config":
        show_config(logger)
    elif action == "info":
        show_info(logger)


def list_notes(logger, query: str) -> None:
    """Load the store and print the canonical list or its projection."""
    from notekeeper.core.config import get_app_config
    from notekeeper.core.database import get_database
    from notekeeper.core.exceptions import StorageUnavailableError
    from notekeeper.services.note_store import NoteStore
    from notekeeper.services.projection import NoteProjection

    async def load() -> tuple:
        database = get_database()
        store = NoteStore(database)
        try:
            await store.load()
            return NoteProjection(store, query).notes
        finally:
            await database.dispose()

    try:
        notes = asyncio.run(load())
    except StorageUnavailableError as e:
        logger.error("Notes could not be loaded", extra={"error": e.message})
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        sys.exit(1)

    if not notes:
        click.echo("No notes." if not query.strip() else f"No notes match {query.strip()!r}.")
        return

    prefer_bytes = get_app_config().application.images.prefer_inline_bytes
    for note in notes:
        click.echo(format_note(note, prefer_bytes))


def format_note(note, prefer_inline_bytes: bool = False) -> str:
    """One list card as text: header line, body preview, tags."""
    from notekeeper.schemas.note import preferred_source

    header = f"[{note.id}] {note.title}  ({note.updated_at:%Y-%m-%d %H:%M})"
    source = preferred_source(note.image, prefer_inline_bytes)
    if isinstance(source, bytes):
        header += f"  [image: {len(source)} bytes]"
    elif source is not None:
        header += f"  [image: {source}]"

    lines = [header]
    preview = note.preview()
    if preview:
        lines.extend(f"    {line}" for line in preview.splitlines())
    if note.tags:
        lines.append("    " + " ".join(f"#{tag}" for tag in note.tags))
    return "\n".join(lines)


def show_config(logger) -> None:
    """Display loaded configuration."""
    click.echo("Application Configuration:\n")

    try:
        from notekeeper.core.config import get_app_config, get_database_url

        app_config = get_app_config()

        sections = [
            ("Application Settings (from YAML):", app_config.application),
            ("Database Settings (from YAML):", app_config.database),
            ("Logging Settings (from YAML):", app_config.logging),
        ]
        for title, section in sections:
            click.echo(title)
            click.echo("-" * 40)
            for key, value in section.model_dump().items():
                if isinstance(value, dict):
                    click.echo(f"  {key}:")
                    for k, v in value.items():
                        click.echo(f"    {k}: {v}")
                else:
                    click.echo(f"  {key}: {value}")
            click.echo()

        click.echo(f"Effective database URL: {get_database_url()}")
        logger.info("Configuration displayed successfully")

    except (OSError, RuntimeError, ValueError) as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    click.echo("Notekeeper")
    click.echo("=" * 40)

    try:
        from notekeeper.core.config import get_app_config
        app_config = get_app_config()
        click.echo(f"Name: {app_config.application.name}")
        click.echo(f"Version: {app_config.application.version}")
        click.echo(f"Description: {app_config.application.description}")
    except (OSError, RuntimeError, ValueError):
        from notekeeper import __version__
        click.echo("Name: Notekeeper")
        click.echo(f"Version: {__version__}")

    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action list     List notes, newest first")
    click.echo("  --action config   Display configuration")
    click.echo("  --action info     Show this information")
    click.echo()
    click.echo("Options:")
    click.echo("  --query, -q       Filter the list by title, body or tag")
    click.echo("  --verbose, -v     Enable INFO level logging")
    click.echo("  --debug, -d       Enable DEBUG level logging")
    click.echo()
    click.echo("Examples:")
    click.echo("  python run.py --action list")
    click.echo("  python run.py --action list --query work")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
