"""Load optional CLI configuration from `.task/config.yaml`."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .constants import CONFIG_FILE, DEFAULT_LOG_LEVEL, SKIP_CONFIRM_ENV, STATE_DIR_NAME

VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


def load_config(project_dir: Path) -> tuple[dict[str, Any], str | None]:
    """Load the optional config file.

    Args:
        project_dir: Project root directory.

    Returns:
        A tuple of `(config, error_message)`. If the file is missing, returns `({}, None)`.
    """
    path = Path(project_dir).resolve() / STATE_DIR_NAME / CONFIG_FILE
    if not path.exists():
        return {}, None
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        return {}, f"{path.name}: {exc.__class__.__name__}: {exc}"
    except yaml.YAMLError as exc:
        return {}, f"{path.name}: YAMLError: {exc}"
    if data is None:
        return {}, None
    if not isinstance(data, dict):
        return {}, f"{path.name}: expected mapping, got {type(data).__name__}"
    return data, None


def get_log_level(config: dict[str, Any]) -> str:
    """Extract the log level, falling back to the default for missing/invalid values."""
    raw = config.get("log_level")
    if isinstance(raw, str) and raw.upper() in VALID_LOG_LEVELS:
        return raw.upper()
    return DEFAULT_LOG_LEVEL


def get_skip_confirm(config: dict[str, Any], environ: Optional[Mapping[str, str]] = None) -> bool:
    """Whether `delete` should skip its confirmation prompt.

    The `TASKCLI_SKIP_CONFIRM` environment variable wins over the config file.
    """
    env = os.environ if environ is None else environ
    raw_env = env.get(SKIP_CONFIRM_ENV)
    if raw_env is not None:
        return raw_env.strip().lower() == "true"
    return config.get("skip_confirm") is True
