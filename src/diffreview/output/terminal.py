"""Rich terminal reporter — unified and side-by-side diff views."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.table import Table
from rich.text import Text

from diffreview.git.models import Commit, FileStatus, LineKind, ParsedDiff
from diffreview.render.inline import highlight_ranges
from diffreview.render.models import SplitLine
from diffreview.render.split import to_split_render_lines
from diffreview.render.unified import pair_changed_lines, to_unified_render_lines

_LINE_STYLE = {
    "add": "green",
    "delete": "red",
    "header": "bold cyan",
    "context": "",
    "padding": "dim",
    "filepath": "bold magenta",
}

_INLINE_STYLE = {
    "add": "bold black on green",
    "delete": "bold black on red",
}

_PREFIX = {
    LineKind.ADD: "+",
    LineKind.DELETE: "-",
    LineKind.CONTEXT: " ",
}

_STATUS_STYLE = {
    FileStatus.ADDED: ("A", "green"),
    FileStatus.MODIFIED: ("M", "yellow"),
    FileStatus.DELETED: ("D", "red"),
}


def _number(value: Optional[int]) -> str:
    return "" if value is None else str(value)


def _content_text(content: str, kind: str, paired: Optional[str], inline: bool) -> Text:
    text = Text(content, style=_LINE_STYLE.get(kind, ""))
    if inline and kind in _INLINE_STYLE:
        for r in highlight_ranges(content, paired):
            text.stylize(_INLINE_STYLE[kind], r.start, r.end)
    return text


def render_unified(
    parsed: ParsedDiff,
    *,
    console: Optional[Console] = None,
    show_line_numbers: bool = True,
    inline: bool = True,
) -> None:
    """Print *parsed* as a single-column diff."""
    console = console or Console()
    render_lines = to_unified_render_lines(parsed)
    if not render_lines:
        console.print("[dim]No changes in this file.[/dim]")
        return

    pairs: Dict[int, str] = pair_changed_lines(render_lines) if inline else {}
    console.print(Text(parsed.display_path, style=_LINE_STYLE["filepath"]))

    for idx, line in enumerate(render_lines):
        row = Text()
        if show_line_numbers:
            row.append(
                f"{_number(line.old_line_number):>5} {_number(line.new_line_number):>5} ",
                style="dim",
            )
        if line.kind == LineKind.HEADER:
            row.append(line.content, style=_LINE_STYLE["header"])
        else:
            row.append(_PREFIX[line.kind], style=_LINE_STYLE[line.kind.value])
            row.append_text(_content_text(line.content, line.kind.value, pairs.get(idx), inline))
        console.print(row, soft_wrap=True)


def _split_cells(row: SplitLine, inline: bool) -> Tuple[str, Text]:
    return (
        _number(row.source_line_number),
        _content_text(row.content, row.kind.value, row.paired_content, inline),
    )


def render_split(
    parsed: ParsedDiff,
    *,
    console: Optional[Console] = None,
    show_line_numbers: bool = True,
    inline: bool = True,
) -> None:
    """Print *parsed* as two aligned columns, old on the left, new on the right."""
    console = console or Console()
    if not parsed.hunks:
        console.print("[dim]No changes in this file.[/dim]")
        return

    old_rows, new_rows = to_split_render_lines(parsed)

    table = Table(show_header=False, box=None, expand=True, pad_edge=False)
    if show_line_numbers:
        table.add_column(justify="right", style="dim", no_wrap=True)
    table.add_column(ratio=1, overflow="fold")
    if show_line_numbers:
        table.add_column(justify="right", style="dim", no_wrap=True)
    table.add_column(ratio=1, overflow="fold")

    for old, new in zip(old_rows, new_rows):
        cells: List = []
        for side in (old, new):
            number, text = _split_cells(side, inline)
            if show_line_numbers:
                cells.append(number)
            cells.append(text)
        table.add_row(*cells)

    console.print(table)


def render_file_list(
    entries: Sequence[Tuple[str, FileStatus]],
    *,
    console: Optional[Console] = None,
) -> None:
    """Print changed files with a one-letter status pill."""
    console = console or Console()
    if not entries:
        console.print("[dim]No changed files.[/dim]")
        return
    for path, status in entries:
        letter, style = _STATUS_STYLE[status]
        row = Text()
        row.append(f" {letter} ", style=f"bold {style}")
        row.append(" ")
        row.append(path)
        console.print(row)


def render_commits(
    commits: Sequence[Commit],
    *,
    console: Optional[Console] = None,
) -> None:
    """Print recent commits as a table."""
    console = console or Console()
    if not commits:
        console.print("[dim]No commits.[/dim]")
        return
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Commit", style="yellow", no_wrap=True)
    table.add_column("Subject", overflow="fold")
    table.add_column("Author", style="cyan", no_wrap=True)
    table.add_column("When", style="dim", no_wrap=True)
    for c in commits:
        table.add_row(c.short_hash, Text(c.subject), c.author, c.date)
    console.print(table)
