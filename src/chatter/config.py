"""Settings for the chatter runtime, read from TOML and the environment."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import ConfigError

LOG_LEVELS = frozenset({"debug", "info", "warning", "error", "critical"})
LOG_FORMATS = frozenset({"console", "json"})

ENV_LOG_LEVEL = "CHATTER_LOG_LEVEL"
ENV_LOG_FORMAT = "CHATTER_LOG_FORMAT"


@dataclass(frozen=True, slots=True)
class ChatterSettings:
    log_level: str = "info"
    log_format: str = "console"


def _expand_path(s: str | Path) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(str(s))))


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config at {path}: {exc}") from exc
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    table = data.get("chatter", {})
    if not isinstance(table, dict):
        raise ConfigError("[chatter] must be a table")
    return table


def _normalize_choice(
    key: str, value: Any, choices: frozenset[str]
) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{key} must be a string")
    normalized = value.strip().lower()
    if normalized not in choices:
        allowed = ", ".join(sorted(choices))
        raise ConfigError(f"{key} must be one of: {allowed} (got {value!r})")
    return normalized


def load_settings(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ChatterSettings:
    """Load settings from an optional TOML file, then apply env overrides.

    Args:
        path: TOML file with a ``[chatter]`` table. Missing means defaults.
        environ: Environment mapping, ``os.environ`` when omitted.

    Returns:
        Validated settings.
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}
    if path is not None:
        values.update(_load_toml(_expand_path(path)))

    env_level = (env.get(ENV_LOG_LEVEL) or "").strip()
    if env_level:
        values["log_level"] = env_level
    env_format = (env.get(ENV_LOG_FORMAT) or "").strip()
    if env_format:
        values["log_format"] = env_format

    unknown = set(values) - {"log_level", "log_format"}
    if unknown:
        raise ConfigError(f"Unknown chatter settings: {', '.join(sorted(unknown))}")

    defaults = ChatterSettings()
    return ChatterSettings(
        log_level=_normalize_choice(
            "log_level", values.get("log_level", defaults.log_level), LOG_LEVELS
        ),
        log_format=_normalize_choice(
            "log_format", values.get("log_format", defaults.log_format), LOG_FORMATS
        ),
    )
