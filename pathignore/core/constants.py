"""
pathignore: Constants and Type Definitions

This module provides package-wide constants, error codes, and the default
configuration shared by the engine, the configuration layer and the CLI.
"""
from enum import IntEnum
from typing import TypeAlias

# Version information
PATHIGNORE_VERSION = "1.0.0"

# Name of the pattern file looked up in a base directory
DEFAULT_IGNORE_FILENAME = ".ignore"

# Prefix for environment variable overrides (PATHIGNORE_LOGGING_LEVEL=DEBUG)
ENV_PREFIX = "PATHIGNORE_"


class ErrorCode(IntEnum):
    """Standardized error codes for pathignore operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad pattern, invalid configuration
    NOT_FOUND = 2  # File or directory doesn't exist
    PERMISSION_DENIED = 3  # Insufficient permissions
    INTERNAL_ERROR = 6  # Bug in pathignore
    DEGRADED = 9  # Running with reduced functionality (partial load)


# Type aliases for clarity
RelativePath: TypeAlias = str
PatternText: TypeAlias = str


class ConfigKey:
    """Configuration key constants."""

    ROOT = "pathignore"

    IGNORE = "ignore"
    IGNORE_FILENAME = "filename"

    LOGGING = "logging"
    LOGGING_LEVEL = "level"
    LOGGING_FILE = "file"

    OUTPUT = "output"
    OUTPUT_FORMAT = "format"


# Supported CLI output formats
OUTPUT_FORMATS = ("text", "yaml")

# Valid log level names
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


DEFAULT_CONFIG = {
    ConfigKey.ROOT: {
        ConfigKey.IGNORE: {
            ConfigKey.IGNORE_FILENAME: DEFAULT_IGNORE_FILENAME,
        },
        ConfigKey.LOGGING: {
            ConfigKey.LOGGING_LEVEL: "WARNING",
            ConfigKey.LOGGING_FILE: None,
        },
        ConfigKey.OUTPUT: {
            ConfigKey.OUTPUT_FORMAT: "text",
        },
    }
}
