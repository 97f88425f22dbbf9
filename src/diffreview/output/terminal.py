"""Rich terminal reporter — file table with status pills and line counts."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from diffreview.git.models import FileChange, FileStatus, ParsedDiff
from diffreview.stats.summary import DiffStats, summarize

_STATUS_STYLE = {
    FileStatus.ADDED: "bold black on green",
    FileStatus.MODIFIED: "bold black on yellow",
    FileStatus.DELETED: "bold white on red",
    FileStatus.RENAMED: "bold black on bright_cyan",
}


def _status_pill(status: FileStatus) -> Text:
    return Text(f" {status.value.upper()} ", style=_STATUS_STYLE.get(status, ""))


def _path_cell(change: FileChange) -> str:
    if change.old_path:
        return f"{change.old_path} → {change.path}"
    return change.path


def render(
    diff: ParsedDiff,
    *,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print the changed files of *diff* to the terminal using Rich."""
    console = console or Console()
    stats = summarize(diff)

    if diff.is_empty():
        console.print("[dim]No changes.[/dim]")
        return

    title = "Changed files"
    if diff.base_ref and diff.head_ref:
        title = f"Changed files ({diff.base_ref} → {diff.head_ref})"

    table = Table(title=title, title_style="bold", border_style="dim")
    table.add_column("Status", justify="center", width=12)
    table.add_column("File", style="magenta")
    table.add_column("Hunks", justify="right")
    table.add_column("+", justify="right", style="green")
    table.add_column("-", justify="right", style="red")

    for change, fs in zip(diff.files, stats.files):
        table.add_row(
            _status_pill(change.status),
            _path_cell(change),
            str(fs.hunks),
            str(fs.added),
            str(fs.removed),
        )

    console.print(table)

    if show_summary:
        _print_summary(console, stats)


def _print_summary(console: Console, stats: DiffStats) -> None:
    console.print()
    console.print(f"[dim]Files:[/dim]    {stats.file_count}")
    console.print(f"[dim]Hunks:[/dim]    {stats.hunk_count}")
    console.print(f"[dim]Added:[/dim]    [green]+{stats.added}[/green]")
    console.print(f"[dim]Removed:[/dim]  [red]-{stats.removed}[/red]")
    by_status = ", ".join(
        f"{status.value} {count}" for status, count in stats.by_status.items() if count
    )
    console.print(f"[dim]By status:[/dim] {by_status}")
