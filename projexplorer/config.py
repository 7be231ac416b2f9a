"""Persistent JSON config helpers and the explorer settings object.

Malformed or missing config falls back to defaults key by key.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from pathlib import Path

from platformdirs import user_cache_dir, user_config_dir

from .builders import (
    BUILDER_STRATEGIES,
    DEFAULT_EXCLUDE,
    DEFAULT_IDLE_DELAY,
    DEFAULT_LISTING_COMMAND,
    DEFAULT_POLL_INTERVAL,
)
from .roots import default_root_function

APP_NAME = "projexplorer"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_CACHE_DIR = Path(user_cache_dir(APP_NAME, appauthor=False))
SIDES = ("left", "right")
DEFAULT_WIDTH = 40


@dataclass(frozen=True)
class ExplorerConfig:
    """Every recognized explorer option with its default."""

    builder: str = "incremental"
    cache_enabled: bool = True
    auto_refresh_cache: bool = True
    cache_dir: Path = DEFAULT_CACHE_DIR
    side: str = "left"
    width: int = DEFAULT_WIDTH
    inline_folders: bool = True
    exclude: str | None = DEFAULT_EXCLUDE
    root_function: Callable[[], Path] = field(default=default_root_function, compare=False)
    confirm_delete: bool = True
    goto_current_file: bool = True
    idle_delay: float = DEFAULT_IDLE_DELAY
    listing_command: str = DEFAULT_LISTING_COMMAND
    poll_interval: float = DEFAULT_POLL_INTERVAL

    def with_overrides(self, **changes: object) -> "ExplorerConfig":
        """Return a copy with every non-``None`` keyword applied."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so an unwritable config never breaks a run.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _bool(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _positive_number(data: dict[str, object], key: str, default: float) -> float:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        return default
    return float(value)


def _positive_int(data: dict[str, object], key: str, default: int) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def _choice(data: dict[str, object], key: str, choices: tuple[str, ...], default: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) and value in choices else default


def _nonempty_str(data: dict[str, object], key: str, default: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        return default
    return value


def config_from_mapping(data: dict[str, object]) -> ExplorerConfig:
    """Build an ``ExplorerConfig`` from decoded JSON, ignoring invalid values.

    ``exclude`` may be ``null`` to disable exclusion entirely.
    """
    defaults = ExplorerConfig()
    exclude = defaults.exclude
    if "exclude" in data:
        raw_exclude = data["exclude"]
        if raw_exclude is None or isinstance(raw_exclude, str):
            exclude = raw_exclude or None
    cache_dir = defaults.cache_dir
    raw_cache_dir = data.get("cache_dir")
    if isinstance(raw_cache_dir, str) and raw_cache_dir.strip():
        cache_dir = Path(raw_cache_dir).expanduser()

    return ExplorerConfig(
        builder=_choice(data, "builder", BUILDER_STRATEGIES, defaults.builder),
        cache_enabled=_bool(data, "cache_enabled", defaults.cache_enabled),
        auto_refresh_cache=_bool(data, "auto_refresh_cache", defaults.auto_refresh_cache),
        cache_dir=cache_dir,
        side=_choice(data, "side", SIDES, defaults.side),
        width=_positive_int(data, "width", defaults.width),
        inline_folders=_bool(data, "inline_folders", defaults.inline_folders),
        exclude=exclude,
        confirm_delete=_bool(data, "confirm_delete", defaults.confirm_delete),
        goto_current_file=_bool(data, "goto_current_file", defaults.goto_current_file),
        idle_delay=_positive_number(data, "idle_delay", defaults.idle_delay),
        listing_command=_nonempty_str(data, "listing_command", defaults.listing_command),
        poll_interval=_positive_number(data, "poll_interval", defaults.poll_interval),
    )


def load_explorer_config() -> ExplorerConfig:
    """Load the persisted explorer settings."""
    return config_from_mapping(load_config())


def save_explorer_config(config: ExplorerConfig) -> None:
    """Persist every JSON-representable setting of ``config``."""
    data = load_config()
    data.update(
        {
            "builder": config.builder,
            "cache_enabled": config.cache_enabled,
            "auto_refresh_cache": config.auto_refresh_cache,
            "cache_dir": str(config.cache_dir),
            "side": config.side,
            "width": config.width,
            "inline_folders": config.inline_folders,
            "exclude": config.exclude,
            "confirm_delete": config.confirm_delete,
            "goto_current_file": config.goto_current_file,
            "idle_delay": config.idle_delay,
            "listing_command": config.listing_command,
            "poll_interval": config.poll_interval,
        }
    )
    save_config(data)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_CACHE_DIR",
    "SIDES",
    "ExplorerConfig",
    "load_config",
    "save_config",
    "config_from_mapping",
    "load_explorer_config",
    "save_explorer_config",
]
