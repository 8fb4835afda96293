"""diffreview CLI — Typer application for showing, locating, and marking reviewed diffs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from diffreview import __version__

app = typer.Typer(
    name="diffreview",
    help="Review git working-tree changes as unified or side-by-side diffs.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)
out = Console()

logger = logging.getLogger("diffreview")


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=debug)],
        force=True,
    )


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from diffreview.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def _load_config_or_exit(repo_root: Path, config: Optional[str]):
    from diffreview.config.loader import ConfigError, load_config

    try:
        return load_config(repo_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def _file_diff_or_exit(repo_root: Path, path: str, base: str) -> str:
    from diffreview.git.adapter import GitError, get_file_diff

    try:
        return get_file_diff(repo_root, path, base)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


# ── show ──────────────────────────────────────────────────────────────────────


@app.command()
def show(
    path: str = typer.Argument(..., help="File path relative to the repo root"),
    base: Optional[str] = typer.Option(None, "--base", "-b", help="Revision to diff against"),
    view: Optional[str] = typer.Option(None, "--view", help="Diff layout: unified | split"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | yaml"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .diffreview.toml"),
    no_inline: bool = typer.Option(False, "--no-inline", help="Disable word-level highlighting"),
) -> None:
    """Show the diff of one file against the base revision."""
    from diffreview.config.schema import OUTPUT_FORMATS, VIEW_MODES
    from diffreview.git.diff_parser import DiffParser
    from diffreview.output import json_report, terminal, yaml_report

    repo_root = _resolve_repo_root()
    cfg = _load_config_or_exit(repo_root, config)

    # --- CLI overrides ---
    if view:
        if view not in VIEW_MODES:
            console.print(f"[bold red]Invalid view:[/bold red] {escape(view)}")
            raise typer.Exit(code=2)
        cfg.ui.diff_view_mode = view  # type: ignore[assignment]
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {escape(format)}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if output and cfg.output.format == "terminal":
        console.print("[bold red]--output needs --format json or yaml[/bold red]")
        raise typer.Exit(code=2)
    if base:
        cfg.diff.base = base
    inline = cfg.ui.inline_highlight and not no_inline

    diff_text = _file_diff_or_exit(repo_root, path, cfg.diff.base)
    parsed = DiffParser(diff_text).parse()
    logger.info("%s: %d hunk(s) against %s", path, len(parsed.hunks), cfg.diff.base)

    mode = cfg.ui.diff_view_mode
    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        renderer = terminal.render_split if mode == "split" else terminal.render_unified
        renderer(parsed, console=out, show_line_numbers=cfg.ui.show_line_numbers, inline=inline)
    elif cfg.output.format == "json":
        report_text = json_report.render(parsed, view=mode, inline=inline)
    elif cfg.output.format == "yaml":
        report_text = yaml_report.render(parsed, view=mode, inline=inline)

    if report_text is not None:
        if output:
            Path(output).write_text(report_text, encoding="utf-8")
            logger.info("Report written to %s", output)
        else:
            print(report_text)


# ── files ─────────────────────────────────────────────────────────────────────


@app.command()
def files(
    base: Optional[str] = typer.Option(None, "--base", "-b", help="Revision to diff against"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .diffreview.toml"),
) -> None:
    """List changed, staged, and untracked files with their status."""
    from diffreview.git.adapter import GitError, get_all_file_statuses, get_changed_files
    from diffreview.output import terminal

    repo_root = _resolve_repo_root()
    cfg = _load_config_or_exit(repo_root, config)
    rev = base or cfg.diff.base

    try:
        changed = get_changed_files(repo_root, rev)
        statuses = get_all_file_statuses(repo_root, changed, rev)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    terminal.render_file_list([(p, statuses[p]) for p in changed], console=out)


# ── review / unreview ─────────────────────────────────────────────────────────


@app.command()
def review(
    path: str = typer.Argument(..., help="File path relative to the repo root"),
) -> None:
    """Mark a file as reviewed by staging it."""
    from diffreview.git.adapter import GitError, stage_file

    repo_root = _resolve_repo_root()
    try:
        stage_file(repo_root, path)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    console.print(f"[green]✓[/green] Reviewed {escape(path)}")


@app.command()
def unreview(
    path: str = typer.Argument(..., help="File path relative to the repo root"),
) -> None:
    """Clear the reviewed mark by unstaging a file."""
    from diffreview.git.adapter import GitError, unstage_file

    repo_root = _resolve_repo_root()
    try:
        unstage_file(repo_root, path)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    console.print(f"[yellow]↺[/yellow] Unreviewed {escape(path)}")


# ── commits ───────────────────────────────────────────────────────────────────


@app.command()
def commits(
    count: int = typer.Option(20, "--count", "-n", min=1, help="Number of commits to list"),
) -> None:
    """List recent commits, e.g. to pick a --base revision."""
    from diffreview.git.adapter import GitError, get_recent_commits
    from diffreview.output import terminal

    repo_root = _resolve_repo_root()
    try:
        history = get_recent_commits(repo_root, count)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    terminal.render_commits(history, console=out)


# ── locate ────────────────────────────────────────────────────────────────────


@app.command()
def locate(
    path: str = typer.Argument(..., help="File path relative to the repo root"),
    row: int = typer.Argument(..., help="1-based row of the unified view"),
    base: Optional[str] = typer.Option(None, "--base", "-b", help="Revision to diff against"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .diffreview.toml"),
) -> None:
    """Print the source line and side (old/new) behind a unified-view row."""
    from diffreview.git.diff_parser import DiffParser
    from diffreview.render.unified import source_line_for, to_unified_render_lines

    repo_root = _resolve_repo_root()
    cfg = _load_config_or_exit(repo_root, config)

    diff_text = _file_diff_or_exit(repo_root, path, base or cfg.diff.base)
    render_lines = to_unified_render_lines(DiffParser(diff_text).parse())
    location = source_line_for(render_lines, row)
    if location is None:
        console.print(f"[yellow]No source line for row {row}[/yellow]")
        raise typer.Exit(code=1)
    print(f"{location.side}:{location.line_number}")


# ── inline ────────────────────────────────────────────────────────────────────


@app.command()
def inline(
    old: str = typer.Argument(..., help="Original line"),
    new: str = typer.Argument(..., help="Modified line"),
) -> None:
    """Print the changed character range of NEW relative to OLD."""
    from diffreview.render.inline import compute_inline_diff

    ranges = compute_inline_diff(old, new)
    if not ranges:
        console.print("[dim]No difference.[/dim]")
        return
    for r in ranges:
        print(f"{r.start} {r.end} {new[r.start:r.end]!r}")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .diffreview.toml in the repo root."""
    from diffreview.config.defaults import DEFAULT_TOML
    from diffreview.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {escape(str(config_path))}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {escape(str(config_path))}")


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
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """diffreview — Review git working-tree changes from the terminal."""
    _configure_logging(verbose, debug)
