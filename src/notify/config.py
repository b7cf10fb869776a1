"""Notifier configuration.

Values come from an optional YAML file and are overridden by
environment variables:

``MACOS_NOTIFY_NOTIFIER_PATH``: path to the terminal-notifier executable.
``MACOS_NOTIFY_TITLE``: literal default title.
``MACOS_NOTIFY_SOUND``: default sound name.
``MACOS_NOTIFY_RESOLVE_TITLE``: derive the default title from the git repo.
``MACOS_NOTIFY_LOG_LEVEL``: logging level name.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import yaml

from src.notify.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".macos-notify"
CONFIG_FILE = "config.yaml"
DEFAULT_TITLE = "macos-notify-mcp"
DEFAULT_SOUND = "Glass"

_RECOGNISED_BOOL_VALUES = frozenset(
    ("1", "true", "yes", "0", "false", "no")
)


@dataclass(frozen=True)
class NotifyConfig:
    notifier_path: Optional[str] = None
    default_title: str = DEFAULT_TITLE
    default_sound: str = DEFAULT_SOUND
    resolve_title: bool = True
    log_level: str = "WARNING"


def _parse_bool(value: str, default: bool) -> bool:
    """Parse a boolean setting with explicit default.

    Recognises ``true/1/yes`` and ``false/0/no`` (case-insensitive).
    Returns *default* when the value is empty, and logs a warning and
    returns *default* for anything unrecognised.
    """
    if not value:
        return default
    normalised = value.lower()
    if normalised not in _RECOGNISED_BOOL_VALUES:
        logger.warning(
            "Unrecognised boolean value %r, using default %s. "
            "Expected one of: true/1/yes or false/0/no.",
            value,
            default,
        )
        return default
    return normalised in ("1", "true", "yes")


def _parse_level(value: str) -> str:
    level = value.upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Unrecognised log level %r, using WARNING", value)
        return "WARNING"
    return level


def _read_config_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid config file {path}: expected a mapping")
    return data


def load_config(
    config_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> NotifyConfig:
    """Load configuration from ``config.yaml`` and the environment."""
    env = os.environ if environ is None else environ
    data = _read_config_file((config_dir or DEFAULT_CONFIG_DIR) / CONFIG_FILE)

    resolve_title = data.get("resolve_title", True)
    if not isinstance(resolve_title, bool):
        resolve_title = _parse_bool(str(resolve_title), default=True)
    resolve_title = _parse_bool(
        env.get("MACOS_NOTIFY_RESOLVE_TITLE", ""), default=resolve_title
    )

    return NotifyConfig(
        notifier_path=env.get("MACOS_NOTIFY_NOTIFIER_PATH") or data.get("notifier_path"),
        default_title=env.get("MACOS_NOTIFY_TITLE") or data.get("default_title") or DEFAULT_TITLE,
        default_sound=env.get("MACOS_NOTIFY_SOUND") or data.get("default_sound") or DEFAULT_SOUND,
        resolve_title=resolve_title,
        log_level=_parse_level(
            str(env.get("MACOS_NOTIFY_LOG_LEVEL") or data.get("log_level") or "WARNING")
        ),
    )
