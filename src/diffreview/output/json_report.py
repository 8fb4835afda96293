"""JSON reporter — the parsed diff plus the chosen render projection."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from diffreview.git.models import DiffLine, ParsedDiff
from diffreview.render.inline import highlight_ranges
from diffreview.render.models import SplitLine
from diffreview.render.split import to_split_render_lines
from diffreview.render.unified import pair_changed_lines, to_unified_render_lines


def _line_dict(line: DiffLine) -> Dict[str, Any]:
    return {
        "kind": line.kind.value,
        "content": line.content,
        "old_line": line.old_line_number,
        "new_line": line.new_line_number,
    }


def _ranges(content: str, paired: Optional[str]) -> List[List[int]]:
    return [[r.start, r.end] for r in highlight_ranges(content, paired)]


def _split_row_dict(row: SplitLine, inline: bool) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "kind": row.kind.value,
        "content": row.content,
        "line": row.source_line_number,
    }
    if row.paired_content is not None:
        data["paired_content"] = row.paired_content
        if inline:
            data["inline"] = _ranges(row.content, row.paired_content)
    return data


def to_dict(parsed: ParsedDiff, *, view: str = "unified", inline: bool = True) -> Dict[str, Any]:
    """Convert a ParsedDiff and its *view* projection to a JSON-serialisable dict."""
    hunks = [
        {
            "header": h.header_text,
            "old_start": h.old_start,
            "old_count": h.old_count,
            "new_start": h.new_start,
            "new_count": h.new_count,
            "lines": [_line_dict(l) for l in h.lines],
        }
        for h in parsed.hunks
    ]

    data: Dict[str, Any] = {
        "version": "1.0",
        "old_file": parsed.old_file_path,
        "new_file": parsed.new_file_path,
        "hunks": hunks,
        "view": view,
    }

    if view == "split":
        old_rows, new_rows = to_split_render_lines(parsed)
        data["rows"] = {
            "old": [_split_row_dict(r, inline) for r in old_rows],
            "new": [_split_row_dict(r, inline) for r in new_rows],
        }
    else:
        render_lines = to_unified_render_lines(parsed)
        pairs = pair_changed_lines(render_lines)
        rows = []
        for idx, line in enumerate(render_lines):
            row = {"row": idx + 1, **_line_dict(line)}
            if inline and idx in pairs:
                row["inline"] = _ranges(line.content, pairs[idx])
            rows.append(row)
        data["rows"] = rows

    return data


def render(parsed: ParsedDiff, *, view: str = "unified", inline: bool = True) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(parsed, view=view, inline=inline), indent=2)
