"""Load and merge configuration from .diffreview.toml and env vars."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from diffreview.config.schema import (
    OUTPUT_FORMATS,
    VIEW_MODES,
    DiffConfig,
    OutputConfig,
    ReviewConfig,
    UIConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".diffreview.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: ReviewConfig) -> None:
    """Apply DIFFREVIEW_* environment variable overrides."""
    if val := os.environ.get("DIFFREVIEW_BASE"):
        cfg.diff.base = val
    if val := os.environ.get("DIFFREVIEW_VIEW"):
        if val in VIEW_MODES:
            cfg.ui.diff_view_mode = val  # type: ignore[assignment]
        else:
            logger.warning("Ignoring DIFFREVIEW_VIEW=%r (expected one of %s)", val, ", ".join(VIEW_MODES))
    if val := os.environ.get("DIFFREVIEW_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
        else:
            logger.warning("Ignoring DIFFREVIEW_FORMAT=%r (expected one of %s)", val, ", ".join(OUTPUT_FORMATS))


def _build_section(data: Dict[str, Any], cls: type, section: str, source: Path):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    section_data = data.get(section, {})
    if not isinstance(section_data, dict):
        raise ConfigError(f"{source}: [{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in section_data.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: ReviewConfig, source: Path) -> None:
    if cfg.ui.diff_view_mode not in VIEW_MODES:
        raise ConfigError(f"{source}: invalid ui.diff_view_mode {cfg.ui.diff_view_mode!r}")
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"{source}: invalid output.format {cfg.output.format!r}")


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> ReviewConfig:
    """Load, validate, and return a ReviewConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = ReviewConfig()
    else:
        logger.info("Loading config from %s", config_path)
        raw = _parse_toml(config_path)
        cfg = ReviewConfig(
            version=raw.get("version", "1.0"),
            diff=_build_section(raw, DiffConfig, "diff", config_path),
            ui=_build_section(raw, UIConfig, "ui", config_path),
            output=_build_section(raw, OutputConfig, "output", config_path),
        )
        _validate(cfg, config_path)

    _merge_env_overrides(cfg)
    return cfg
