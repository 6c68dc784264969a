"""Command-line interface for LifeLogr."""

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from lifelogr.journal import JournalService
from lifelogr.models import Settings
from lifelogr.storage import SettingsStore

app = typer.Typer(
    name="lifelogr",
    help="LifeLogr - keep a journal in a git repository",
    add_completion=False,
)
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

_BOOL_VALUES = {"true": True, "false": False}


def _parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    try:
        return _BOOL_VALUES[value.strip().lower()]
    except KeyError:
        raise ValueError(f"--push-by-default expects true or false, got {value!r}") from None


def _print_error(error: object) -> None:
    err_console.print(f"[bold red]Error:[/bold red] [red]{escape(str(error))}[/red]")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_dir: Optional[Path] = typer.Option(
        None, "--config-dir", envvar="LIFELOGR_CONFIG_DIR", help="Directory holding settings.json (default: ~/.lifelogr)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Keep a journal in a git repository."""
    store = SettingsStore(config_dir)
    ctx.obj = {"store": store}

    try:
        level = Settings.load(store).log_level
    except ValidationError:
        level = "WARNING"
    _configure_logging("DEBUG" if verbose else level)


@app.command()
def config(
    ctx: typer.Context,
    path: Optional[Path] = typer.Option(None, "--path", help="Path of the repository to write entries to"),
    push_by_default: Optional[str] = typer.Option(
        None, "--push-by-default", metavar="BOOL", help="Push every new entry to the remote (true/false)"
    ),
) -> None:
    """Update and show the journal settings."""
    store: SettingsStore = ctx.obj["store"]

    try:
        push_flag = _parse_bool(push_by_default)
        if path is not None:
            store.set_repository_path(path.expanduser().absolute())
        if push_flag is not None:
            store.set_push_by_default(push_flag)

        settings = Settings.load(store)
    except Exception as e:
        _print_error(e)
        raise typer.Exit(1)

    repository_path = settings.repository_path if settings.repository_path is not None else ""
    console.print(f"Repository path: {repository_path}", highlight=False)
    console.print(f"Push by default: {settings.push_by_default}", highlight=False)


@app.command()
def add(
    ctx: typer.Context,
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Message to log (required)"),
    push: bool = typer.Option(False, "--push", "-p", help="Push to the remote after committing"),
) -> None:
    """Add a new message to the log."""
    store: SettingsStore = ctx.obj["store"]

    if message is None:
        _print_error("Missing option '--message' / '-m'.")
        raise typer.Exit(1)

    try:
        settings = Settings.load(store)
        result = JournalService(settings).add(message, push=push)
    except Exception as e:
        _print_error(e)
        raise typer.Exit(1)

    if not result.ok:
        if result.commit_sha:
            err_console.print(
                f"[yellow]Committed {result.commit_sha[:7]} locally; it was not pushed.[/yellow]"
            )
        _print_error(result.error_message)
        raise typer.Exit(1)

    console.print(message, markup=False, highlight=False)
    if result.pushed:
        console.print("[green]Pushed to remote.[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from lifelogr import __version__

    console.print(f"[bold]LifeLogr[/bold] version {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
