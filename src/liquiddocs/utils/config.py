"""Configuration management for liquiddocs.

This module handles loading, validating, and managing configuration from
multiple sources (CLI args, config files, environment variables).
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import AbstractSet, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from liquiddocs.core.objects import resolve_allowed_types

DEFAULT_MAX_BUFFER_SIZE = 10 * 1024 * 1024


class LiquidDocsConfig(BaseSettings):
    """Main configuration for liquiddocs.

    Configuration is loaded in this order (later sources override earlier):
    1. Default values
    2. Environment variables (LIQUIDDOCS_*)
    3. Config file (liquiddocs.toml or pyproject.toml)
    4. CLI arguments

    Attributes:
        file_pattern: Glob pattern for finding templates in directories
        exclude_patterns: Patterns to exclude from processing
        warn: Report files without doc tags as warnings instead of errors
        error_on_parse: Fail the check on parse issues
        ci: Emit GCC and GitHub annotation output
        max_buffer_size: Maximum bytes of template content read per batch
        extra_types: Platform object names accepted on top of the defaults
        verbose: Enable verbose logging
        quiet: Suppress all non-error output
        log_level: Logging level
        log_format: Log format (json or console)
    """

    model_config = SettingsConfigDict(
        env_prefix="LIQUIDDOCS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # File processing
    file_pattern: str = Field(
        default="**/*.liquid",
        description="File pattern for discovery",
    )
    exclude_patterns: list[str] = Field(
        default_factory=lambda: [
            "**/node_modules/**",
            "**/.*/**",
        ],
        description="Patterns to exclude",
    )
    max_buffer_size: int = Field(
        default=DEFAULT_MAX_BUFFER_SIZE,
        gt=0,
        description="Batch buffer size (bytes)",
    )

    # Check behavior
    warn: bool = Field(
        default=False,
        description="Missing doc tags are warnings",
    )
    error_on_parse: bool = Field(
        default=False,
        description="Parse issues are errors",
    )
    ci: bool = Field(
        default=False,
        description="CI output format",
    )

    # Type vocabulary
    extra_types: list[str] = Field(
        default_factory=list,
        description="Additional platform object types",
    )

    # Logging
    verbose: bool = Field(
        default=False,
        description="Verbose output",
    )
    quiet: bool = Field(
        default=False,
        description="Quiet mode",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level",
    )
    log_format: str = Field(
        default="console",
        description="Log format (json or console)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = ["json", "console"]
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"Invalid log format: {v}. Must be one of {valid_formats}")
        return v_lower

    @field_validator("extra_types")
    @classmethod
    def validate_extra_types(cls, v: list[str]) -> list[str]:
        """Strip type names and drop blanks."""
        return [name.strip() for name in v if name and name.strip()]

    def allowed_types(self) -> AbstractSet[str]:
        """Get the platform object names the parser should accept.

        Returns:
            Default allow-list extended with ``extra_types``
        """
        return resolve_allowed_types(self.extra_types)


def load_config(
    config_path: Path | None = None,
    **overrides: Any,
) -> LiquidDocsConfig:
    """Load configuration from file and environment.

    Args:
        config_path: Path to config file (searches for default if not provided)
        **overrides: Configuration overrides from CLI

    Returns:
        Loaded configuration

    Raises:
        FileNotFoundError: If specified config file doesn't exist
        ValueError: If config file is invalid
    """
    # Find config file if not specified
    if config_path is None:
        config_path = find_config_file()

    # Load from file if exists
    file_config: dict[str, Any] = {}
    if config_path and config_path.exists():
        file_config = load_config_file(config_path)

    # Merge file config with overrides
    merged_config = {**file_config, **overrides}

    # Remove None values from overrides
    merged_config = {k: v for k, v in merged_config.items() if v is not None}

    return LiquidDocsConfig(**merged_config)


def find_config_file() -> Path | None:
    """Search for a config file in standard locations.

    Searches in this order:
    1. ./liquiddocs.toml
    2. ./pyproject.toml (with [tool.liquiddocs] section)
    3. ../.liquiddocs.toml
    4. ~/.config/liquiddocs/config.toml

    Returns:
        Path to config file if found, None otherwise
    """
    search_paths = [
        Path.cwd() / "liquiddocs.toml",
        Path.cwd() / "pyproject.toml",
        Path.cwd().parent / ".liquiddocs.toml",
        Path.home() / ".config" / "liquiddocs" / "config.toml",
    ]

    for path in search_paths:
        if path.exists():
            # For pyproject.toml, check if it has a liquiddocs section
            if path.name == "pyproject.toml":
                try:
                    with open(path, "rb") as f:
                        data = tomllib.load(f)
                except (OSError, tomllib.TOMLDecodeError):
                    continue
                if "liquiddocs" in data.get("tool", {}):
                    return path
            else:
                return path

    return None


def load_config_file(config_path: Path) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to config file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file is invalid TOML
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ValueError(f"Invalid config file {config_path}: {e}") from e

    # Extract liquiddocs section
    if config_path.name == "pyproject.toml":
        config: dict[str, Any] = data.get("tool", {}).get("liquiddocs", {})
    else:
        config = data.get("liquiddocs", data)

    return config


def create_default_config(output_path: Path) -> None:
    """Create a default configuration file.

    Args:
        output_path: Where to write the config file

    Raises:
        FileExistsError: If file already exists
    """
    if output_path.exists():
        raise FileExistsError(f"Config file already exists: {output_path}")

    default_config = """# liquiddocs configuration

[liquiddocs]
# Pattern used when a directory is given to `liquiddocs check`
file_pattern = "**/*.liquid"
exclude_patterns = [
    "**/node_modules/**",
    "**/.*/**",
]

# Report templates without {% doc %} tags as warnings instead of errors
warn = false

# Fail the check on parse issues (unknown types, missing names, ...)
error_on_parse = false

# Emit GCC and GitHub annotation output
ci = false

# Extra object names accepted in @param {type} besides the Shopify objects
extra_types = []

# Bytes of template content read per batch
max_buffer_size = 10485760

# Logging
verbose = false
quiet = false
log_level = "INFO"
log_format = "console"
"""

    output_path.write_text(default_config)
