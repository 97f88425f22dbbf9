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
    DiffConfig,
    DiffReviewConfig,
    OutputConfig,
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


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    unknown = set(raw) - valid_fields
    if unknown:
        logger.warning("Ignoring unknown keys in [%s]: %s", section, ", ".join(sorted(unknown)))
    return cls(**{k: v for k, v in raw.items() if k in valid_fields})


def _validate(cfg: DiffReviewConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid output format {cfg.output.format!r}; expected one of {', '.join(OUTPUT_FORMATS)}"
        )
    if not isinstance(cfg.diff.context_lines, int) or cfg.diff.context_lines < 0:
        raise ConfigError("diff.context_lines must be a non-negative integer")


def _merge_env_overrides(cfg: DiffReviewConfig) -> None:
    """Apply DIFFREVIEW_* environment variable overrides."""
    if val := os.environ.get("DIFFREVIEW_BASE_REF"):
        cfg.diff.base_ref = val
    if val := os.environ.get("DIFFREVIEW_HEAD_REF"):
        cfg.diff.head_ref = val
    if val := os.environ.get("DIFFREVIEW_CONTEXT_LINES"):
        try:
            lines = int(val)
        except ValueError:
            logger.warning("Ignoring non-integer DIFFREVIEW_CONTEXT_LINES=%r", val)
        else:
            if lines >= 0:
                cfg.diff.context_lines = lines
    if val := os.environ.get("DIFFREVIEW_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> DiffReviewConfig:
    """Load, validate, and return a DiffReviewConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = DiffReviewConfig()
    else:
        logger.debug("Loading config from %s", config_path)
        raw = _parse_toml(config_path)
        cfg = DiffReviewConfig(
            version=raw.get("version", "1.0"),
            diff=_build_section(raw, DiffConfig, "diff"),
            output=_build_section(raw, OutputConfig, "output"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
