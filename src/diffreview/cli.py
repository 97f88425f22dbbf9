"""diffreview CLI — Typer application with parse, diff and init commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from diffreview import __version__

app = typer.Typer(
    name="diffreview",
    help="Parse git unified diffs into a structured change model.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _setup_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=debug)],
        force=True,
    )


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from diffreview.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _load_config(repo_root: Path, config: Optional[str]):
    from diffreview.config.loader import ConfigError, load_config

    try:
        return load_config(repo_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _emit(diff, fmt: str, output: Optional[str], show_summary: bool) -> None:
    """Render *diff* in *fmt* to stdout, or to *output* when given."""
    from diffreview.output import json_report, terminal, yaml_report

    if fmt not in ("terminal", "json", "yaml"):
        console.print(f"[bold red]Invalid format:[/bold red] {fmt}")
        raise typer.Exit(code=2)

    if fmt == "terminal":
        terminal.render(diff, show_summary=show_summary, console=Console())
        if output:
            # Files always get a machine-readable report
            Path(output).write_text(json_report.render(diff), encoding="utf-8")
        return

    report_text = json_report.render(diff) if fmt == "json" else yaml_report.render(diff)
    if output:
        Path(output).write_text(report_text, encoding="utf-8")
        logging.getLogger(__name__).info("Report written to %s", output)
    else:
        print(report_text)


# ── parse ─────────────────────────────────────────────────────────────────────


@app.command()
def parse(
    source: str = typer.Argument("-", help="Diff file to read, or '-' for stdin"),
    format: str = typer.Option("json", "--format", "-f", help="Output format: terminal | json | yaml"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    base: Optional[str] = typer.Option(None, "--base", help="Base ref to record in the output"),
    head: Optional[str] = typer.Option(None, "--head", help="Head ref to record in the output"),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 if any file chunk could not be parsed"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Parse unified diff text from a file or stdin."""
    from diffreview.git.diff_parser import DiffParser, count_file_markers

    _setup_logging(verbose, debug)

    if source == "-":
        diff_text = sys.stdin.read()
    else:
        try:
            diff_text = Path(source).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            console.print(f"[bold red]Error:[/bold red] cannot read {source}: {exc}")
            raise typer.Exit(code=2) from exc

    diff = DiffParser().parse(diff_text)
    if base or head:
        diff = diff.with_refs(base or "", head or "")

    markers = count_file_markers(diff_text)
    if diff.file_count < markers:
        logging.getLogger(__name__).warning(
            "%d of %d file chunk(s) could not be parsed", markers - diff.file_count, markers
        )

    _emit(diff, format, output, show_summary=True)

    if strict and diff.file_count < markers:
        raise typer.Exit(code=1)


# ── diff ──────────────────────────────────────────────────────────────────────


@app.command()
def diff(
    paths: Optional[List[str]] = typer.Argument(None, help="Limit the diff to these paths"),
    base: Optional[str] = typer.Option(None, "--base", "-b", help="Base ref (default from config: main)"),
    head: Optional[str] = typer.Option(None, "--head", help="Head ref (default from config: HEAD)"),
    staged: bool = typer.Option(False, "--staged", help="Diff staged changes against the base ref"),
    context: Optional[int] = typer.Option(None, "--context", "-U", min=0, help="Context lines"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .diffreview.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | yaml"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Run git diff in the current repository and parse the result."""
    from diffreview.git.adapter import GitError
    from diffreview.git.resolver import DiffResolver

    _setup_logging(verbose, debug)
    repo_root = _resolve_repo_root()
    cfg = _load_config(repo_root, config)

    # --- CLI overrides ---
    if base:
        cfg.diff.base_ref = base
    if head:
        cfg.diff.head_ref = head
    if staged:
        cfg.diff.staged = True
    if context is not None:
        cfg.diff.context_lines = context
    if format:
        cfg.output.format = format  # type: ignore[assignment]

    resolver = DiffResolver(repo_root, context_lines=cfg.diff.context_lines)
    try:
        if cfg.diff.staged:
            # The index is compared with HEAD unless --base is given
            result = resolver.resolve_staged(base or "HEAD", paths or ())
        else:
            result = resolver.resolve(cfg.diff.base_ref, cfg.diff.head_ref, paths or ())
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    _emit(result, cfg.output.format, output, show_summary=cfg.output.show_summary)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .diffreview.toml in the repo root."""
    from diffreview.config.defaults import DEFAULT_TOML
    from diffreview.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"diffreview {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """diffreview — structured views of git diffs."""
