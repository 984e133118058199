"""Rich terminal display for casefile."""

import os

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from casefile.analyzer import format_size, get_findings, get_suspects, get_top_file_types
from casefile.config import Settings
from casefile.models import NO_EXTENSION, AnalysisResult, EntryError

console = Console()


def extension_label(ext: str) -> str:
    """Display label for a file type key."""
    return "[no ext]" if ext == NO_EXTENSION else ext.upper()


def show_summary(result: AnalysisResult, root: str) -> None:
    """Display headline numbers."""
    table = Table(title=f"Case File: {root}", show_header=True, header_style="bold")
    table.add_column("Files", justify="right")
    table.add_column("Folders", justify="right")
    table.add_column("Total Size", justify="right")
    table.add_column("Max Depth", justify="right")

    table.add_row(
        str(result.total_files),
        str(result.total_folders),
        f"[bold]{format_size(result.total_size)}[/bold]",
        str(result.max_depth),
    )

    console.print(table)
    console.print()


def show_suspects(result: AnalysisResult, limit: int = 10) -> None:
    """Display the largest files."""
    suspects = get_suspects(result, top_n=limit)
    if not suspects:
        return

    table = Table(title="Largest Files", show_header=True, header_style="bold red")
    table.add_column("#", justify="right", width=3)
    table.add_column("Name", style="red")
    table.add_column("Size", justify="right")
    table.add_column("Modified")
    table.add_column("Depth", justify="right")

    for i, entry in enumerate(suspects, 1):
        table.add_row(str(i), entry.name, format_size(entry.size), entry.modified, str(entry.depth))

    console.print(table)
    console.print()


def show_file_types(result: AnalysisResult) -> None:
    """Display the most common file types."""
    if not result.file_types:
        return

    table = Table(title="File Types", show_header=True, header_style="bold cyan")
    table.add_column("Type", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Share", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Average", justify="right")

    for ext, count, percent in get_top_file_types(result):
        info = result.file_types[ext]
        table.add_row(
            extension_label(ext),
            str(count),
            f"{percent:.0f}%",
            format_size(info.total_size),
            format_size(info.average_size),
        )

    console.print(table)
    console.print()


def show_timeline(result: AnalysisResult) -> None:
    """Display oldest and newest files and the average age."""
    if result.oldest_file is None or result.newest_file is None:
        return

    console.print(
        Panel(
            f"[bold]Oldest:[/bold] {result.oldest_file.name} ({result.oldest_file.modified})\n"
            f"[bold]Newest:[/bold] {result.newest_file.name} ({result.newest_file.modified})\n"
            f"[bold]Average age:[/bold] {result.avg_file_age_days:.0f} days",
            title="Timeline",
            border_style="blue",
        )
    )


def show_duplicates(result: AnalysisResult, limit: int = 10) -> None:
    """Display duplicate name patterns."""
    if not result.duplicate_patterns:
        return

    table = Table(title="Duplicate Patterns", show_header=True, header_style="bold yellow")
    table.add_column("Pattern", style="yellow")
    table.add_column("Files", justify="right")
    table.add_column("Examples")

    for group in result.duplicate_patterns[:limit]:
        examples = ", ".join(os.path.basename(p) for p in group.files[:3])
        if group.count > 3:
            examples += f" (+{group.count - 3} more)"
        table.add_row(group.pattern, str(group.count), examples)

    console.print(table)
    if len(result.duplicate_patterns) > limit:
        console.print(f"[dim]...and {len(result.duplicate_patterns) - limit} more patterns[/dim]")
    console.print()


def show_naming(result: AnalysisResult) -> None:
    """Display naming convention counts."""
    stats = result.naming_stats
    console.print("[bold]Naming Conventions[/bold]")
    console.print(f"  camelCase:  {stats.camel_case_count}")
    console.print(f"  snake_case: {stats.snake_case_count}")
    console.print(f"  kebab-case: {stats.kebab_case_count}")
    console.print(f"  [dim]other:      {result.unclassified_name_count}[/dim]")
    console.print()


def show_findings(result: AnalysisResult) -> None:
    """Display case notes."""
    findings = get_findings(result)
    body = "\n".join(f"• {f}" for f in findings) if findings else "[dim]Nothing unusual found.[/dim]"
    console.print(Panel(body, title="Case Notes", border_style="magenta"))


def show_analysis(result: AnalysisResult, root: str) -> None:
    """Display full analysis results."""
    show_summary(result, root)

    if result.total_files == 0:
        console.print("[yellow]No files found.[/yellow]")
        return

    show_suspects(result)
    show_file_types(result)
    show_timeline(result)
    console.print()
    show_duplicates(result)
    show_naming(result)
    show_findings(result)


def show_diagnostics(errors: list[EntryError], limit: int = 10) -> None:
    """Display entries skipped during the scan."""
    if not errors:
        return
    console.print(f"[yellow]Skipped {len(errors)} unreadable entries[/yellow]")
    for error in errors[:limit]:
        console.print(f"  [dim]{error.path}: {error.reason}[/dim]")
    if len(errors) > limit:
        console.print(f"  [dim]...and {len(errors) - limit} more[/dim]")


def show_settings(settings: Settings, path: str) -> None:
    """Display current settings."""
    table = Table(title="Settings", show_header=True, header_style="bold")
    table.add_column("Key", style="bold")
    table.add_column("Value", justify="right")

    for key, value in settings.model_dump().items():
        table.add_row(key, str(value))

    console.print(table)
    console.print(f"[dim]Config file: {path}[/dim]")
