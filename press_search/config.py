"""Configuration models for the search integration."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field


def parse_env_bool(value: Optional[str], default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")


def parse_env_int(value: Optional[str], default: int = 0) -> int:
    """Parse int from environment variable."""
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def parse_env_list(value: Optional[str]) -> List[str]:
    """Parse a comma-separated environment variable into a list."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class TaxonomyConfig(BaseModel):
    """A taxonomy known to the host."""

    name: str = Field(description="Taxonomy identifier")
    query_var: str = Field(description="Query variable carrying its terms")
    public: bool = Field(default=True, description="Private taxonomies are never filtered on")


def _default_taxonomies() -> List[TaxonomyConfig]:
    return [
        TaxonomyConfig(name="category", query_var="category_name"),
        TaxonomyConfig(name="post_tag", query_var="tag"),
    ]


class IntegrationConfig(BaseModel):
    """Complete integration configuration."""

    enabled: bool = Field(default=True, description="Master switch for the integration")
    indexed_content_types: List[str] = Field(
        default_factory=lambda: ["post", "page"],
        description="Content types synced to the search index",
    )
    searchable_content_types: Optional[List[str]] = Field(
        default=None,
        description="Default searchable types (None = all indexed types)",
    )
    facets: Optional[Dict[str, Any]] = Field(default=None, description="Facets passed to the backend")
    date_field: str = Field(default="post_date", description="Canonical content timestamp field")
    default_page_size: int = Field(default=10, description="Page size when the request has none")
    query_var: str = Field(default="sp", description="Advanced-field query variable")
    taxonomies: List[TaxonomyConfig] = Field(default_factory=_default_taxonomies)
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="standard", description="Format: standard, json")

    def default_content_types(self) -> List[str]:
        """The content types searched when the request names none usable."""
        if self.searchable_content_types:
            return list(self.searchable_content_types)
        return list(self.indexed_content_types)

    @classmethod
    def from_dict(cls, data: dict) -> "IntegrationConfig":
        """Create config from dictionary."""
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: str) -> "IntegrationConfig":
        """Load config from the ``press_search`` section of a YAML file."""
        config_path = Path(path)
        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            yaml_data = yaml.safe_load(f) or {}

        return cls.from_dict(yaml_data.get("press_search", {}) or {})

    @classmethod
    def from_env(cls, base: Optional["IntegrationConfig"] = None) -> "IntegrationConfig":
        """Apply environment variable overrides on top of ``base`` (or defaults)."""
        config = base.model_copy(deep=True) if base is not None else cls()

        if os.environ.get("PRESS_SEARCH_ENABLED") is not None:
            config.enabled = parse_env_bool(os.environ.get("PRESS_SEARCH_ENABLED"), default=True)
        if os.environ.get("PRESS_SEARCH_INDEXED_TYPES"):
            config.indexed_content_types = parse_env_list(os.environ["PRESS_SEARCH_INDEXED_TYPES"])
        if os.environ.get("PRESS_SEARCH_SEARCHABLE_TYPES"):
            config.searchable_content_types = parse_env_list(os.environ["PRESS_SEARCH_SEARCHABLE_TYPES"])
        if os.environ.get("PRESS_SEARCH_DATE_FIELD"):
            config.date_field = os.environ["PRESS_SEARCH_DATE_FIELD"]
        if os.environ.get("PRESS_SEARCH_PAGE_SIZE"):
            config.default_page_size = parse_env_int(
                os.environ["PRESS_SEARCH_PAGE_SIZE"], default=config.default_page_size
            )
        if os.environ.get("PRESS_SEARCH_QUERY_VAR"):
            config.query_var = os.environ["PRESS_SEARCH_QUERY_VAR"]
        if os.environ.get("PRESS_SEARCH_LOG_LEVEL"):
            config.log_level = os.environ["PRESS_SEARCH_LOG_LEVEL"]
        if os.environ.get("PRESS_SEARCH_LOG_FORMAT"):
            config.log_format = os.environ["PRESS_SEARCH_LOG_FORMAT"]

        return config

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "IntegrationConfig":
        """Load configuration (priority: env vars > YAML > defaults).

        Args:
            config_path: Optional path to YAML config file

        Returns:
            IntegrationConfig instance
        """
        config = cls.from_yaml(config_path) if config_path else cls()
        return cls.from_env(config)


def load_config(config_path: Optional[str] = None) -> IntegrationConfig:
    """Load integration configuration."""
    return IntegrationConfig.load(config_path)
