"""Render-model types shared by the unified, split and inline renderers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, NamedTuple, Optional

Side = Literal["old", "new"]


class SplitKind(str, Enum):
    CONTEXT = "context"
    ADD = "add"
    DELETE = "delete"
    PADDING = "padding"
    FILEPATH = "filepath"


@dataclass(frozen=True, slots=True)
class SplitLine:
    """One row of the old-side or new-side column of a split view."""

    kind: SplitKind
    content: str = ""
    source_line_number: Optional[int] = None
    paired_content: Optional[str] = None  # counterpart of a matched delete/add pair

    @property
    def is_paired(self) -> bool:
        return self.paired_content is not None


PADDING = SplitLine(kind=SplitKind.PADDING)


class SourceLocation(NamedTuple):
    """Where a unified display row points to in the real file."""

    line_number: int
    side: Side


class Token(NamedTuple):
    text: str
    start: int  # 0-based, inclusive
    end: int  # exclusive


class InlineDiffRange(NamedTuple):
    """Half-open ``[start, end)`` character span of a changed region."""

    start: int
    end: int
