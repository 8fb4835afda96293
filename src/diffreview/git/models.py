"""Data models for diff parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class LineKind(str, Enum):
    CONTEXT = "context"
    ADD = "add"
    DELETE = "delete"
    HEADER = "header"  # only in unified render sequences


class FileStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass(frozen=True, slots=True)
class DiffLine:
    """A single line of a hunk, prefix stripped from ``content``."""

    kind: LineKind
    content: str
    raw_text: str
    old_line_number: Optional[int] = None  # None for pure adds
    new_line_number: Optional[int] = None  # None for pure deletes

    @property
    def is_change(self) -> bool:
        return self.kind in (LineKind.ADD, LineKind.DELETE)


# Unified render rows reuse DiffLine, with LineKind.HEADER marking hunk boundaries.
RenderLine = DiffLine


@dataclass(frozen=True)
class Hunk:
    """One ``@@`` block of a unified diff."""

    header_text: str
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: Tuple[DiffLine, ...] = ()


@dataclass(frozen=True)
class ParsedDiff:
    """Parse result for a single file's diff."""

    old_file_path: Optional[str] = None
    new_file_path: Optional[str] = None
    hunks: Tuple[Hunk, ...] = ()

    @property
    def display_path(self) -> str:
        """New path preferred, then old path, then empty string."""
        return self.new_file_path or self.old_file_path or ""

    @property
    def is_new_file(self) -> bool:
        return self.old_file_path == "/dev/null"

    @property
    def is_deleted_file(self) -> bool:
        return self.new_file_path == "/dev/null"


@dataclass(frozen=True)
class Commit:
    """One entry of ``git log``, used to pick a base revision."""

    hash: str
    short_hash: str
    subject: str
    author: str
    date: str  # relative, e.g. "3 days ago"
