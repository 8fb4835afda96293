"""Configuration loading, schema, and defaults."""

from diffreview.config.loader import ConfigError, load_config
from diffreview.config.schema import OutputFormat, ReviewConfig, ViewMode

__all__ = [
    "ConfigError",
    "OutputFormat",
    "ReviewConfig",
    "ViewMode",
    "load_config",
]
