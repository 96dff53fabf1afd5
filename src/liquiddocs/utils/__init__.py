"""Utility functions for liquiddocs."""

from liquiddocs.utils.config import (
    DEFAULT_MAX_BUFFER_SIZE,
    LiquidDocsConfig,
    create_default_config,
    find_config_file,
    load_config,
    load_config_file,
)
from liquiddocs.utils.file_ops import (
    FileOperations,
    batch_files,
    expand_braces,
    find_liquid_files,
)

__all__ = [
    "DEFAULT_MAX_BUFFER_SIZE",
    "LiquidDocsConfig",
    "load_config",
    "load_config_file",
    "find_config_file",
    "create_default_config",
    "FileOperations",
    "find_liquid_files",
    "batch_files",
    "expand_braces",
]
