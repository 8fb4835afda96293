"""Render models — unified rows, split columns, inline highlights."""

from diffreview.render.inline import compute_inline_diff, highlight_ranges, tokenize
from diffreview.render.models import InlineDiffRange, SourceLocation, SplitKind, SplitLine, Token
from diffreview.render.split import to_split_render_lines
from diffreview.render.unified import (
    next_hunk_row,
    pair_changed_lines,
    prev_hunk_row,
    source_line_for,
    to_unified_render_lines,
)

__all__ = [
    "InlineDiffRange",
    "SourceLocation",
    "SplitKind",
    "SplitLine",
    "Token",
    "compute_inline_diff",
    "highlight_ranges",
    "next_hunk_row",
    "pair_changed_lines",
    "prev_hunk_row",
    "source_line_for",
    "to_split_render_lines",
    "to_unified_render_lines",
]
