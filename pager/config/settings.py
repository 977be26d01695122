"""Configuration settings with TOML and environment variable support.

This module is the single source of truth for pager configuration.
Models are defined here and JSON Schema is exported via generate_schema().
"""

import json
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# Configuration Models
# =============================================================================


class ApiSettings(BaseModel):
    """Request and response mapping for the JSON API fetcher."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    token: str | None = None
    timeout: float = Field(default=15, gt=0)
    items_key: str = Field(default="items", alias="items-key")
    total_key: str = Field(default="total", alias="total-key")
    has_more_key: str = Field(default="has_more", alias="has-more-key")
    page_param: str = Field(default="page", alias="page-param")
    page_size_param: str = Field(default="page_size", alias="page-size-param")
    # Number the API gives its first page (0 or 1 in practice)
    first_page: int = Field(default=1, ge=0, alias="first-page")


# =============================================================================
# Settings Class (pydantic-settings)
# =============================================================================


class Settings(BaseSettings):
    """Application settings loaded from pager.toml and environment variables.

    Precedence order:
    1. Environment variables (with PAGER_ prefix)
    2. pager.toml file (see _find_config_file for search order)
    3. Default values from schema

    Example environment variables:
        PAGER_VERBOSE=true
        PAGER_LOG_JSON=true
        PAGER_PAGE_SIZE=25
        PAGER_API__TOKEN=secret
    """

    verbose: bool = False
    log_json: bool = False
    page_size: int = Field(default=10, ge=1)
    proximity_threshold: float = Field(default=200, ge=0)

    api: ApiSettings = Field(default_factory=ApiSettings)

    model_config = SettingsConfigDict(
        env_prefix="PAGER_",
        env_nested_delimiter="__",
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """Customize settings sources to include TOML file."""
        config_file = _find_config_file()
        if config_file:
            return (
                init_settings,
                env_settings,
                _PagerTomlSettingsSource(settings_cls, config_file),
            )
        return (init_settings, env_settings)


# =============================================================================
# TOML Settings Source
# =============================================================================


class _PagerTomlSettingsSource:
    """Custom settings source that reads from [pager] section in TOML."""

    def __init__(self, settings_cls: type[BaseSettings], toml_file: Path):
        self.settings_cls = settings_cls
        self.toml_file = toml_file

    def __call__(self) -> dict:
        """Load settings from [pager] section."""
        with open(self.toml_file, "rb") as f:
            data = tomllib.load(f)

        return data.get("pager", {})


def _find_config_file() -> Path | None:
    """Find pager.toml in standard locations.

    Search order:
    1. PAGER_CONFIG environment variable
    2. ./pager.toml (current directory)
    3. $XDG_CONFIG_HOME/pager/pager.toml or ~/.config/pager/pager.toml
    4. ~/.pager.toml (home directory)

    Returns:
        First existing config file path, or None if not found.
    """
    if env_path := os.getenv("PAGER_CONFIG"):
        path = Path(env_path).expanduser()
        if path.exists():
            return path

    path = Path.cwd() / "pager.toml"
    if path.exists():
        return path

    config_home = os.getenv("XDG_CONFIG_HOME", Path.home() / ".config")
    path = Path(config_home) / "pager" / "pager.toml"
    if path.exists():
        return path

    path = Path.home() / ".pager.toml"
    if path.exists():
        return path

    return None


# =============================================================================
# Schema Generation
# =============================================================================


class _PagerToml(BaseModel):
    """Root model for pager.toml schema generation."""

    model_config = ConfigDict(populate_by_name=True)
    pager: Settings


def generate_schema() -> dict:
    """Generate JSON Schema for pager.toml validation.

    Returns:
        JSON Schema dict with definitions for all config models.
    """
    return _PagerToml.model_json_schema(by_alias=True)


def write_schema(output_path: str | Path = "schema/schema.json") -> None:
    """Generate and write JSON Schema to file.

    Args:
        output_path: Path to write schema.json (default: schema/schema.json)
    """
    schema = generate_schema()
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(schema, indent=2) + "\n")
