"""Unified diff parser — turns ``git diff`` text into hunks of typed lines.

The parser never raises: empty input gives an empty ParsedDiff, an
unreadable hunk header falls back to ``1`` for every number, and lines it
does not understand are skipped.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from diffreview.git.models import DiffLine, Hunk, LineKind, ParsedDiff

logger = logging.getLogger(__name__)

# --- Regex patterns for diff parsing ---

_DIFF_HEADER_RE = re.compile(r"^diff --git ")
_HUNK_HEADER_RE = re.compile(
    r"^@@ -(\d+)(?:,(\d*))? \+(\d+)(?:,(\d*))? @@"
)
_OLD_PATH_PREFIX = "--- "
_NEW_PATH_PREFIX = "+++ "
_HUNK_PREFIX = "@@ "


def parse_hunk_header(header: str) -> Tuple[int, int, int, int]:
    """Return ``(old_start, old_count, new_start, new_count)`` for *header*.

    Omitted counts mean 1. If the header does not match at all, every
    number defaults to 1.
    """
    m = _HUNK_HEADER_RE.match(header)
    if not m:
        logger.debug("Unparseable hunk header, using defaults: %r", header)
        return 1, 1, 1, 1
    return tuple(int(g) if g else 1 for g in m.groups())  # type: ignore[return-value]


def _strip_path(rest: str, prefix: str) -> str:
    return rest[len(prefix):] if rest.startswith(prefix) else rest


class _HunkBuilder:
    """Mutable accumulator, frozen into a Hunk once parsing is done."""

    __slots__ = ("header", "numbers", "lines")

    def __init__(self, header: str, numbers: Tuple[int, int, int, int]) -> None:
        self.header = header
        self.numbers = numbers
        self.lines: List[DiffLine] = []

    def build(self) -> Hunk:
        old_start, old_count, new_start, new_count = self.numbers
        return Hunk(
            header_text=self.header,
            old_start=old_start,
            old_count=old_count,
            new_start=new_start,
            new_count=new_count,
            lines=tuple(self.lines),
        )


class DiffParser:
    """Parse the unified diff of a single file.

    Usage::

        parsed = DiffParser(diff_text).parse()
        for hunk in parsed.hunks:
            ...
    """

    def __init__(self, diff_text: Optional[str]) -> None:
        self._text = diff_text or ""

    def parse(self) -> ParsedDiff:
        if not self._text:
            return ParsedDiff()

        old_path: Optional[str] = None
        new_path: Optional[str] = None
        hunks: List[_HunkBuilder] = []
        current: Optional[_HunkBuilder] = None
        old_line = 0
        new_line = 0

        for raw_line in self._text.split("\n"):
            # --- File headers ---
            if raw_line.startswith(_OLD_PATH_PREFIX):
                old_path = _strip_path(raw_line[len(_OLD_PATH_PREFIX):], "a/")
                continue
            if raw_line.startswith(_NEW_PATH_PREFIX):
                new_path = _strip_path(raw_line[len(_NEW_PATH_PREFIX):], "b/")
                continue

            # --- Hunk header ---
            if raw_line.startswith(_HUNK_PREFIX):
                numbers = parse_hunk_header(raw_line)
                current = _HunkBuilder(raw_line, numbers)
                hunks.append(current)
                old_line, new_line = numbers[0], numbers[2]
                continue

            if current is None:
                continue

            # --- Content lines ---
            prefix, content = raw_line[:1], raw_line[1:]
            if prefix == "+":
                current.lines.append(DiffLine(
                    kind=LineKind.ADD,
                    content=content,
                    raw_text=raw_line,
                    new_line_number=new_line,
                ))
                new_line += 1
            elif prefix == "-":
                current.lines.append(DiffLine(
                    kind=LineKind.DELETE,
                    content=content,
                    raw_text=raw_line,
                    old_line_number=old_line,
                ))
                old_line += 1
            elif prefix == " ":
                current.lines.append(DiffLine(
                    kind=LineKind.CONTEXT,
                    content=content,
                    raw_text=raw_line,
                    old_line_number=old_line,
                    new_line_number=new_line,
                ))
                old_line += 1
                new_line += 1
            # anything else ("\ No newline at end of file", blank) is ignored

        logger.debug("Parsed %d hunk(s) for %s", len(hunks), new_path or old_path)
        return ParsedDiff(
            old_file_path=old_path,
            new_file_path=new_path,
            hunks=tuple(h.build() for h in hunks),
        )


def parse_diff(diff_text: Optional[str]) -> ParsedDiff:
    """Shorthand for ``DiffParser(diff_text).parse()``."""
    return DiffParser(diff_text).parse()


def split_files(diff_text: Optional[str]) -> List[str]:
    """Split a multi-file ``git diff`` into one chunk per ``diff --git`` block.

    Text before the first ``diff --git`` line (or the whole input, if there
    is none) is kept as its own chunk when it is not blank.
    """
    if not diff_text:
        return []
    chunks: List[List[str]] = [[]]
    for line in diff_text.split("\n"):
        if _DIFF_HEADER_RE.match(line) and any(l.strip() for l in chunks[-1]):
            chunks.append([])
        chunks[-1].append(line)
    return ["\n".join(c) for c in chunks if any(l.strip() for l in c)]


def parse_many(diff_text: Optional[str]) -> List[ParsedDiff]:
    """Parse every file of a multi-file diff, in input order."""
    return [DiffParser(chunk).parse() for chunk in split_files(diff_text)]
