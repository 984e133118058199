"""CLI interface for casefile."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from casefile import __version__
from casefile.analyzer import FolderAnalyzer
from casefile.config import config_path, load_settings, save_settings
from casefile.display import console, show_analysis, show_diagnostics, show_settings
from casefile.errors import CasefileError, Cancelled, RootUnreadable
from casefile.models import display_text

# Create Typer app
app = typer.Typer(
    name="casefile",
    help="Investigate a folder: sizes, file types, ages, duplicates and naming habits",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"casefile version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send engine logs to the console when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """casefile - folder forensics in your terminal."""


@app.command()
def analyze(
    path: str = typer.Argument(..., help="Folder to analyze"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    top: Optional[int] = typer.Option(None, "--top", "-n", min=1, help="Number of largest files to keep"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", min=1, help="Threads used to stat files"),
    no_follow: bool = typer.Option(False, "--no-follow-symlinks", help="Do not descend into symlinked folders"),
    verbose: bool = typer.Option(False, "--verbose", help="Show scan logs"),
) -> None:
    """Analyze a folder and show what it contains."""
    configure_logging(verbose)

    settings = load_settings()
    overrides = {}
    if top is not None:
        overrides["top_files"] = top
    if workers is not None:
        overrides["max_workers"] = workers
    if no_follow:
        overrides["follow_symlinks"] = False
    settings = settings.model_copy(update=overrides)

    cancel_event = threading.Event()
    analyzer = FolderAnalyzer(path, settings=settings, cancel_event=cancel_event)

    # Scan in a worker so Ctrl-C can cancel it cleanly
    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(analyzer.run)
        try:
            if as_json:
                result = future.result()
            else:
                root = display_text(analyzer.walker.root)
                with console.status(f"[bold blue]Analyzing {root}...[/bold blue]"):
                    result = future.result()
        except KeyboardInterrupt:
            cancel_event.set()
            try:
                future.result()
            except CasefileError:
                pass
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(130)
        except RootUnreadable as e:
            console.print(f"[red]Error: {display_text(str(e))}[/red]")
            raise typer.Exit(1)
        except Cancelled:
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(130)

    if as_json:
        typer.echo(result.to_json())
        return

    show_analysis(result, display_text(analyzer.walker.root))
    show_diagnostics(analyzer.diagnostics)


@app.command()
def config(
    top: Optional[int] = typer.Option(None, "--top", min=1, help="Default number of largest files"),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Default stat worker threads"),
    follow_symlinks: Optional[bool] = typer.Option(
        None, "--follow-symlinks/--no-follow-symlinks", help="Default symlink policy"
    ),
) -> None:
    """Show or change default settings."""
    path = config_path()
    settings = load_settings(path)

    updates = {}
    if top is not None:
        updates["top_files"] = top
    if workers is not None:
        updates["max_workers"] = workers
    if follow_symlinks is not None:
        updates["follow_symlinks"] = follow_symlinks

    if updates:
        settings = settings.model_copy(update=updates)
        if not save_settings(settings, path):
            console.print(f"[red]Could not write {path}[/red]")
            raise typer.Exit(1)
        console.print("[green]Settings saved.[/green]")

    show_settings(settings, str(path))


if __name__ == "__main__":
    app()
