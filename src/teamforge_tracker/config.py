"""Configuration loading for teamforge-tracker."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import yaml

from teamforge_tracker.provider.models import CategoryFilter
from teamforge_tracker.provider.provider import DEFAULT_RELEASE_FIELD

CONFIG_FILE_NAME = "teamforge.yaml"
PASSWORD_ENV_VAR = "TEAMFORGE_PASSWORD"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class TrackerConfig:
    """Connection settings for a TeamForge tracker."""

    base_url: str
    username: str
    password: str = field(default="", repr=False)
    release_field: str | None = DEFAULT_RELEASE_FIELD
    category_filter: CategoryFilter = field(default_factory=CategoryFilter)
    timeout: float = 30.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrackerConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary from YAML.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If required fields are missing or malformed.
        """
        required_fields = ["base_url", "username"]
        missing = [f for f in required_fields if not data.get(f)]
        if missing:
            raise ConfigError(f"Missing required fields: {', '.join(missing)}")

        base_url = str(data["base_url"])
        if urlsplit(base_url).scheme not in ("http", "https"):
            raise ConfigError(f"base_url must be an http:// or https:// URL, got {base_url!r}")

        category_ids = data.get("category_filter") or []
        if isinstance(category_ids, dict):
            category_filter = CategoryFilter(
                project_id=category_ids.get("project_id") or None,
                tracker_id=category_ids.get("tracker_id") or None,
            )
        elif isinstance(category_ids, list):
            category_filter = CategoryFilter.from_ids([_as_id(i) for i in category_ids])
        else:
            raise ConfigError(
                "category_filter must be a list [project_id, tracker_id] or a mapping"
            )

        try:
            timeout = float(data.get("timeout", 30.0))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid timeout: {data.get('timeout')!r}") from e

        return cls(
            base_url=base_url,
            username=str(data["username"]),
            password=os.environ.get(PASSWORD_ENV_VAR) or str(data.get("password") or ""),
            release_field=data.get("release_field", DEFAULT_RELEASE_FIELD) or None,
            category_filter=category_filter,
            timeout=timeout,
        )


def _as_id(value: Any) -> str | None:
    return None if value is None else str(value)


def load_config(config_path: Path | str) -> TrackerConfig:
    """Load tracker configuration from a YAML file.

    Args:
        config_path: Path to teamforge.yaml file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return TrackerConfig.from_dict(data)


def find_config(start_path: Path | str | None = None) -> Path:
    """Find teamforge.yaml by walking up directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to teamforge.yaml file.

    Raises:
        ConfigError: If no config file is found.
    """
    start_path = Path.cwd() if start_path is None else Path(start_path)

    current = start_path.resolve()
    for directory in (current, *current.parents):
        config_path = directory / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

    raise ConfigError(f"No {CONFIG_FILE_NAME} found in {start_path} or any parent directory")
