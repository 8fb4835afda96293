"""Side-by-side projection — two index-aligned columns, old and new.

A run of deletes directly followed by a run of adds is paired positionally
(first delete with first add, and so on). Reordered edits inside one block
get mis-paired; that approximation is kept on purpose so highlighting
stays stable.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from diffreview.git.models import DiffLine, LineKind, ParsedDiff
from diffreview.render.models import PADDING, SplitKind, SplitLine

SplitRows = Tuple[List[SplitLine], List[SplitLine]]


def _collect_run(lines: Sequence[DiffLine], start: int, kind: LineKind) -> List[DiffLine]:
    end = start
    while end < len(lines) and lines[end].kind == kind:
        end += 1
    return list(lines[start:end])


def _emit_change_block(
    deletes: List[DiffLine],
    adds: List[DiffLine],
    old_rows: List[SplitLine],
    new_rows: List[SplitLine],
) -> None:
    for i in range(max(len(deletes), len(adds))):
        delete = deletes[i] if i < len(deletes) else None
        add = adds[i] if i < len(adds) else None

        if delete is not None:
            old_rows.append(SplitLine(
                kind=SplitKind.DELETE,
                content=delete.content,
                source_line_number=delete.old_line_number,
                paired_content=add.content if add is not None else None,
            ))
        else:
            old_rows.append(PADDING)

        if add is not None:
            new_rows.append(SplitLine(
                kind=SplitKind.ADD,
                content=add.content,
                source_line_number=add.new_line_number,
                paired_content=delete.content if delete is not None else None,
            ))
        else:
            new_rows.append(PADDING)


def to_split_render_lines(parsed: ParsedDiff) -> SplitRows:
    """Return ``(old_rows, new_rows)``, always of equal length.

    Both columns open with a file-path row and an empty spacer row.
    """
    path = parsed.display_path
    old_rows: List[SplitLine] = [
        SplitLine(kind=SplitKind.FILEPATH, content=path),
        SplitLine(kind=SplitKind.FILEPATH, content=""),
    ]
    new_rows: List[SplitLine] = list(old_rows)

    for hunk in parsed.hunks:
        lines = hunk.lines
        cursor = 0
        while cursor < len(lines):
            line = lines[cursor]

            if line.kind == LineKind.CONTEXT:
                old_rows.append(SplitLine(
                    kind=SplitKind.CONTEXT,
                    content=line.content,
                    source_line_number=line.old_line_number,
                ))
                new_rows.append(SplitLine(
                    kind=SplitKind.CONTEXT,
                    content=line.content,
                    source_line_number=line.new_line_number,
                ))
                cursor += 1
            elif line.kind == LineKind.DELETE:
                deletes = _collect_run(lines, cursor, LineKind.DELETE)
                cursor += len(deletes)
                adds = _collect_run(lines, cursor, LineKind.ADD)
                cursor += len(adds)
                _emit_change_block(deletes, adds, old_rows, new_rows)
            elif line.kind == LineKind.ADD:
                old_rows.append(PADDING)
                new_rows.append(SplitLine(
                    kind=SplitKind.ADD,
                    content=line.content,
                    source_line_number=line.new_line_number,
                ))
                cursor += 1
            else:
                cursor += 1

    return old_rows, new_rows
