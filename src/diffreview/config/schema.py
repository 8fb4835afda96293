"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ViewMode = Literal["unified", "split"]
OutputFormat = Literal["terminal", "json", "yaml"]

VIEW_MODES: tuple[str, ...] = ("unified", "split")
OUTPUT_FORMATS: tuple[str, ...] = ("terminal", "json", "yaml")


@dataclass
class DiffConfig:
    base: str = "HEAD"  # revision the working tree is compared against


@dataclass
class UIConfig:
    diff_view_mode: ViewMode = "unified"
    show_line_numbers: bool = True
    inline_highlight: bool = True


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"


@dataclass
class ReviewConfig:
    version: str = "1.0"
    diff: DiffConfig = field(default_factory=DiffConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
