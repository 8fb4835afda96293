"""Unified projection — hunk headers interleaved with diff lines."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from diffreview.git.models import DiffLine, LineKind, ParsedDiff, RenderLine
from diffreview.render.models import SourceLocation


def to_unified_render_lines(parsed: ParsedDiff) -> List[RenderLine]:
    """Flatten *parsed* into one header row per hunk followed by its lines."""
    render_lines: List[RenderLine] = []
    for hunk in parsed.hunks:
        render_lines.append(DiffLine(
            kind=LineKind.HEADER,
            content=hunk.header_text,
            raw_text=hunk.header_text,
        ))
        render_lines.extend(hunk.lines)
    return render_lines


def source_line_for(render_lines: Sequence[RenderLine], row: int) -> Optional[SourceLocation]:
    """Map a 1-based display *row* to its line number and side.

    Context rows report the new side. Header rows and out-of-range rows
    give None.
    """
    if row < 1 or row > len(render_lines):
        return None
    line = render_lines[row - 1]
    if line.kind == LineKind.DELETE and line.old_line_number is not None:
        return SourceLocation(line.old_line_number, "old")
    if line.kind in (LineKind.ADD, LineKind.CONTEXT) and line.new_line_number is not None:
        return SourceLocation(line.new_line_number, "new")
    return None


def pair_changed_lines(render_lines: Sequence[RenderLine]) -> Dict[int, str]:
    """Match each delete run with the add run right after it, 1:1 by position.

    Returns a mapping of 0-based row index to the counterpart line's content,
    filled for both halves of every matched pair.
    """
    pairs: Dict[int, str] = {}
    i = 0
    total = len(render_lines)
    while i < total:
        if render_lines[i].kind != LineKind.DELETE:
            i += 1
            continue

        deletes: List[int] = []
        while i < total and render_lines[i].kind == LineKind.DELETE:
            deletes.append(i)
            i += 1
        adds: List[int] = []
        while i < total and render_lines[i].kind == LineKind.ADD:
            adds.append(i)
            i += 1

        for d, a in zip(deletes, adds):
            pairs[a] = render_lines[d].content
            pairs[d] = render_lines[a].content
    return pairs


def _header_rows(render_lines: Sequence[RenderLine]) -> List[int]:
    return [i for i, line in enumerate(render_lines, start=1) if line.kind == LineKind.HEADER]


def next_hunk_row(render_lines: Sequence[RenderLine], row: int) -> Optional[int]:
    """Row of the next hunk header after *row*, wrapping to the first one."""
    headers = _header_rows(render_lines)
    if not headers:
        return None
    for header in headers:
        if header > row:
            return header
    return headers[0]


def prev_hunk_row(render_lines: Sequence[RenderLine], row: int) -> Optional[int]:
    """Row of the closest hunk header before *row*, wrapping to the last one."""
    headers = _header_rows(render_lines)
    if not headers:
        return None
    for header in reversed(headers):
        if header < row:
            return header
    return headers[-1]
