"""
Press Search - Config Tests

Tests for configuration defaults, YAML loading and environment overrides.
"""

import os
from unittest.mock import patch

from press_search.config import (
    IntegrationConfig,
    load_config,
    parse_env_bool,
    parse_env_int,
    parse_env_list,
)


class TestParsers:
    """Tests for environment value parsers."""

    def test_parse_env_bool(self):
        """Test boolean parsing."""
        assert parse_env_bool("true") is True
        assert parse_env_bool("1") is True
        assert parse_env_bool("off") is False
        assert parse_env_bool(None, default=True) is True

    def test_parse_env_int(self):
        """Test int parsing falls back on bad input."""
        assert parse_env_int("20") == 20
        assert parse_env_int("twenty", default=10) == 10

    def test_parse_env_list(self):
        """Test comma list parsing."""
        assert parse_env_list("post, page,,event") == ["post", "page", "event"]
        assert parse_env_list("") == []


class TestDefaults:
    """Tests for default configuration."""

    def test_default_config(self):
        """Test default values."""
        config = IntegrationConfig()
        assert config.enabled is True
        assert config.indexed_content_types == ["post", "page"]
        assert config.searchable_content_types is None
        assert config.date_field == "post_date"
        assert config.default_page_size == 10
        assert config.query_var == "sp"
        assert config.facets is None
        assert [t.name for t in config.taxonomies] == ["category", "post_tag"]

    def test_default_content_types(self):
        """Test the searchable set defaults to the indexed set."""
        assert IntegrationConfig().default_content_types() == ["post", "page"]
        config = IntegrationConfig(searchable_content_types=["post"])
        assert config.default_content_types() == ["post"]

    def test_from_dict(self):
        """Test loading config from dictionary."""
        config = IntegrationConfig.from_dict({
            "indexed_content_types": ["post"],
            "taxonomies": [{"name": "genre", "query_var": "genre"}],
        })
        assert config.indexed_content_types == ["post"]
        assert config.taxonomies[0].public is True


class TestYaml:
    """Tests for YAML loading."""

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test a missing file yields defaults."""
        config = IntegrationConfig.from_yaml(str(tmp_path / "absent.yaml"))
        assert config == IntegrationConfig()

    def test_reads_section(self, tmp_path):
        """Test the press_search section is loaded."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "press_search:\n"
            "  indexed_content_types: [post, event]\n"
            "  date_field: post_modified\n"
            "  facets:\n"
            "    Tags:\n"
            "      type: taxonomy\n"
            "      taxonomy: post_tag\n"
        )
        config = IntegrationConfig.from_yaml(str(path))
        assert config.indexed_content_types == ["post", "event"]
        assert config.date_field == "post_modified"
        assert config.facets == {"Tags": {"type": "taxonomy", "taxonomy": "post_tag"}}

    def test_empty_file(self, tmp_path):
        """Test an empty file yields defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert IntegrationConfig.from_yaml(str(path)) == IntegrationConfig()


class TestEnv:
    """Tests for environment overrides."""

    def test_load_from_env(self):
        """Test loading config from environment variables."""
        with patch.dict(os.environ, {
            "PRESS_SEARCH_ENABLED": "false",
            "PRESS_SEARCH_INDEXED_TYPES": "post,event",
            "PRESS_SEARCH_SEARCHABLE_TYPES": "event",
            "PRESS_SEARCH_PAGE_SIZE": "25",
            "PRESS_SEARCH_QUERY_VAR": "adv",
            "PRESS_SEARCH_LOG_LEVEL": "DEBUG",
        }):
            config = IntegrationConfig.from_env()
        assert config.enabled is False
        assert config.indexed_content_types == ["post", "event"]
        assert config.searchable_content_types == ["event"]
        assert config.default_page_size == 25
        assert config.query_var == "adv"
        assert config.log_level == "DEBUG"

    def test_bad_page_size_keeps_default(self):
        """Test malformed numbers fall back."""
        with patch.dict(os.environ, {"PRESS_SEARCH_PAGE_SIZE": "lots"}):
            assert IntegrationConfig.from_env().default_page_size == 10

    def test_env_overrides_yaml(self, tmp_path):
        """Test that env vars override YAML config."""
        path = tmp_path / "config.yaml"
        path.write_text("press_search:\n  date_field: post_modified\n  default_page_size: 5\n")
        with patch.dict(os.environ, {"PRESS_SEARCH_DATE_FIELD": "post_date_gmt"}):
            config = load_config(str(path))
        assert config.date_field == "post_date_gmt"
        assert config.default_page_size == 5
