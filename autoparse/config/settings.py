"""
settings.py

This module provides application configuration management for autoparse.

Features:
- Centralized engine configuration using Pydantic settings
- A shared rich console for user-facing output

Usage:
Import appsettings for configuration values.
"""

from typing import Final
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console

# Console instance for rich output
console: Final[Console] = Console(stderr=True)


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with the
    AUTOPARSE_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
        max_tag_length: Longest tag body the scanner will consider
        max_depth: Deepest parenthesis nesting accepted in a tag path
        json_indent: Indent used by the pretty JSON post-processors
    """

    beQuiet: bool = False

    max_tag_length: int = Field(default=4096, gt=0)
    max_depth: int = Field(default=32, gt=0)
    json_indent: int = Field(default=4, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="AUTOPARSE_",  # Environment variables with this prefix override settings
        case_sensitive=False,
        extra="allow",
    )


# Create the application settings instance
appsettings: Final[App] = App()
