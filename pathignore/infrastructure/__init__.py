"""pathignore Infrastructure Layer.

This layer provides services used by the CLI around the rules engine:
- ConfigManager: Hierarchical configuration (defaults, YAML, environment, CLI)
- Logger: Structured logging, including the diagnostic reporter
"""

from .config_manager import ConfigError, ConfigManager, ConfigSource, ConfigValue
from .logger import Logger, LogLevel, get_logger

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "get_logger",
    # ConfigManager exports
    "ConfigSource",
    "ConfigValue",
    "ConfigError",
    "ConfigManager",
]
