"""Configuration loading, schema, and defaults."""

from diffreview.config.loader import ConfigError, load_config
from diffreview.config.schema import DiffConfig, DiffReviewConfig, OutputConfig

__all__ = [
    "ConfigError",
    "DiffConfig",
    "DiffReviewConfig",
    "OutputConfig",
    "load_config",
]
