"""Configuration management for pager.

This module provides configuration loading from:
1. Environment variables (PAGER_ prefix)
2. pager.toml file (multiple locations)
3. Default values
"""

from .settings import ApiSettings, Settings, generate_schema, write_schema

__all__ = [
    "ApiSettings",
    "Settings",
    "generate_schema",
    "write_schema",
]
