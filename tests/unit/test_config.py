"""Unit tests for configuration loading."""

import os
from pathlib import Path
from textwrap import dedent
from unittest.mock import patch

import pytest

from teamforge_tracker.config import (
    ConfigError,
    TrackerConfig,
    find_config,
    load_config,
)
from teamforge_tracker.provider import CategoryFilter


@pytest.fixture
def temp_config(tmp_path: Path) -> Path:
    """Create a temporary config file."""
    config_content = dedent("""
        base_url: http://collabnet:8080
        username: builder
        password: secret
        release_field: Fixed In
        category_filter: [proj1001, tracker1002]
        timeout: 12
    """).strip()

    config_path = tmp_path / "teamforge.yaml"
    config_path.write_text(config_content)
    return config_path


@pytest.mark.unit
class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_valid_config(self, temp_config: Path) -> None:
        config = load_config(temp_config)

        assert config.base_url == "http://collabnet:8080"
        assert config.username == "builder"
        assert config.password == "secret"
        assert config.release_field == "Fixed In"
        assert config.timeout == 12.0

    def test_load_category_filter(self, temp_config: Path) -> None:
        config = load_config(temp_config)

        assert config.category_filter == CategoryFilter("proj1001", "tracker1002")

    def test_category_filter_mapping(self, tmp_path: Path) -> None:
        config_path = tmp_path / "teamforge.yaml"
        config_path.write_text(
            "base_url: http://h\nusername: u\ncategory_filter:\n  tracker_id: tracker7\n"
        )

        config = load_config(config_path)

        assert config.category_filter == CategoryFilter(None, "tracker7")

    def test_numeric_ids_become_text(self, tmp_path: Path) -> None:
        config_path = tmp_path / "teamforge.yaml"
        config_path.write_text("base_url: http://h\nusername: u\ncategory_filter: [1001, 1002]\n")

        assert load_config(config_path).category_filter.tracker_id == "1002"

    def test_defaults(self, tmp_path: Path) -> None:
        config_path = tmp_path / "teamforge.yaml"
        config_path.write_text("base_url: http://h\nusername: u\n")

        config = load_config(config_path)

        assert config.password == ""
        assert config.release_field == "resolvedReleaseId"
        assert config.category_filter == CategoryFilter()
        assert config.timeout == 30.0

    def test_empty_release_field_disables_filtering(self, tmp_path: Path) -> None:
        config_path = tmp_path / "teamforge.yaml"
        config_path.write_text('base_url: http://h\nusername: u\nrelease_field: ""\n')

        assert load_config(config_path).release_field is None

    @patch.dict(os.environ, {"TEAMFORGE_PASSWORD": "from-env"})
    def test_password_from_env(self, temp_config: Path) -> None:
        assert load_config(temp_config).password == "from-env"

    def test_password_not_in_repr(self, temp_config: Path) -> None:
        assert "secret" not in repr(load_config(temp_config))

    def test_load_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nonexistent.yaml")

    def test_load_missing_required_fields(self, tmp_path: Path) -> None:
        config_path = tmp_path / "teamforge.yaml"
        config_path.write_text("username: builder\n")

        with pytest.raises(ConfigError, match="Missing required fields: base_url"):
            load_config(config_path)

    def test_load_invalid_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "teamforge.yaml"
        config_path.write_text("invalid: yaml: content:")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(config_path)

    def test_load_non_mapping(self, tmp_path: Path) -> None:
        config_path = tmp_path / "teamforge.yaml"
        config_path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigError, match="must be a YAML mapping"):
            load_config(config_path)

    def test_invalid_category_filter(self, tmp_path: Path) -> None:
        config_path = tmp_path / "teamforge.yaml"
        config_path.write_text("base_url: http://h\nusername: u\ncategory_filter: tracker1\n")

        with pytest.raises(ConfigError, match="category_filter"):
            load_config(config_path)

    @pytest.mark.parametrize("base_url", ["collabnet:8080", "ftp://collabnet"])
    def test_base_url_requires_http(self, tmp_path: Path, base_url: str) -> None:
        config_path = tmp_path / "teamforge.yaml"
        config_path.write_text(f"base_url: '{base_url}'\nusername: u\n")

        with pytest.raises(ConfigError, match="http:// or https://"):
            load_config(config_path)

    def test_invalid_timeout(self, tmp_path: Path) -> None:
        config_path = tmp_path / "teamforge.yaml"
        config_path.write_text("base_url: http://h\nusername: u\ntimeout: soon\n")

        with pytest.raises(ConfigError, match="Invalid timeout"):
            load_config(config_path)


@pytest.mark.unit
class TestFromDict:
    """Tests for TrackerConfig.from_dict."""

    def test_from_dict(self) -> None:
        config = TrackerConfig.from_dict(
            {"base_url": "http://h", "username": "u", "category_filter": ["p", "t"]}
        )

        assert config.category_filter.tracker_id == "t"


@pytest.mark.unit
class TestFindConfig:
    """Tests for find_config function."""

    def test_find_in_current_dir(self, temp_config: Path) -> None:
        assert find_config(temp_config.parent) == temp_config.resolve()

    def test_find_in_parent_dir(self, temp_config: Path) -> None:
        nested = temp_config.parent / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config(nested) == temp_config.resolve()

    def test_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="No teamforge.yaml found"):
            find_config(tmp_path)
