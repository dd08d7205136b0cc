"""Settings resolution from defaults, YAML files and environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .constants import CONFIG_FILE_NAME, ENV_MESSAGE_FORMAT, ENV_MESSAGE_NO_COMMIT
from .errors import BlameStatusError, ErrorCode
from .models import RenderSettings

logger = logging.getLogger(__name__)

ENV_KEYS = {
    ENV_MESSAGE_FORMAT: "message_format",
    ENV_MESSAGE_NO_COMMIT: "message_no_commit",
}


def read_yaml_settings(path: Path) -> dict[str, Any]:
    """Return the mapping stored in ``path``, or ``{}`` when absent."""
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
    except PermissionError as exc:
        raise BlameStatusError(
            ErrorCode.PERMISSION_DENIED,
            f"Permission denied while reading {path}",
            "Check file permissions and try again.",
        ) from exc
    except yaml.YAMLError as exc:
        raise BlameStatusError(
            ErrorCode.INVALID_CONFIG,
            f"Invalid YAML in {path}",
            "Fix the YAML syntax of the settings file.",
            {"path": str(path)},
        ) from exc
    if isinstance(loaded, dict):
        return loaded
    logger.debug("Ignoring non-mapping settings document in %s.", path)
    return {}


def _env_settings(source: Mapping[str, str]) -> dict[str, str]:
    values: dict[str, str] = {}
    for env_key, field_name in ENV_KEYS.items():
        raw = source.get(env_key)
        if raw is not None:
            values[field_name] = raw
    return values


def load_settings(
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, str | None] | None = None,
) -> RenderSettings:
    """Merge defaults, YAML file, environment and explicit overrides.

    Later sources win. ``None`` values in ``overrides`` are skipped so CLI
    flags that were not given leave lower layers untouched.
    """
    source = os.environ if env is None else env
    path = Path(config_path).expanduser() if config_path else Path.cwd() / CONFIG_FILE_NAME

    merged: dict[str, Any] = {}
    file_values = read_yaml_settings(path)
    if file_values:
        logger.debug("Loaded settings from %s.", path)
    merged.update(file_values)
    merged.update(_env_settings(source))
    merged.update({key: value for key, value in (overrides or {}).items() if value is not None})

    try:
        return RenderSettings(**merged)
    except ValidationError as exc:
        raise BlameStatusError(
            ErrorCode.INVALID_CONFIG,
            "Settings validation failed",
            f"Supported keys: {', '.join(RenderSettings.model_fields)}.",
            {"errors": exc.errors(include_context=False, include_input=False)},
        ) from exc
