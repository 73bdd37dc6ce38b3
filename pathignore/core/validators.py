"""
pathignore: Input Validators.

Validation of the YAML configuration structure loaded by the
configuration manager and the CLI.
"""
from typing import Any, Dict

from pathignore.core.constants import LOG_LEVELS, OUTPUT_FORMATS, ConfigKey, ErrorCode


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate pathignore configuration structure.

    Accepts either the full document (with the ``pathignore`` root key) or
    the contents under that key.

    Args:
        config: Configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    if ConfigKey.ROOT in config:
        config = config[ConfigKey.ROOT]
        if not isinstance(config, dict):
            raise ValidationError(f"'{ConfigKey.ROOT}' section must be a dictionary")

    if ConfigKey.IGNORE in config:
        validate_ignore_config(config[ConfigKey.IGNORE])

    if ConfigKey.LOGGING in config:
        validate_logging_config(config[ConfigKey.LOGGING])

    if ConfigKey.OUTPUT in config:
        output = config[ConfigKey.OUTPUT]
        if not isinstance(output, dict):
            raise ValidationError("Output configuration must be a dictionary")
        if ConfigKey.OUTPUT_FORMAT in output:
            validate_output_format(output[ConfigKey.OUTPUT_FORMAT])

    return True


def validate_ignore_config(ignore: Dict[str, Any]) -> bool:
    """Validate the pattern file section.

    Args:
        ignore: Ignore configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If the section is invalid
    """
    if not isinstance(ignore, dict):
        raise ValidationError("Ignore configuration must be a dictionary")

    if ConfigKey.IGNORE_FILENAME in ignore:
        filename = ignore[ConfigKey.IGNORE_FILENAME]
        if not isinstance(filename, str) or not filename.strip():
            raise ValidationError(f"Ignore filename must be a non-empty string: {filename!r}")
        if "/" in filename or "\\" in filename:
            raise ValidationError(f"Ignore filename must not contain a path separator: {filename}")

    return True


def validate_logging_config(logging_config: Dict[str, Any]) -> bool:
    """Validate logging section.

    Args:
        logging_config: Logging configuration dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If the section is invalid
    """
    if not isinstance(logging_config, dict):
        raise ValidationError("Logging configuration must be a dictionary")

    if ConfigKey.LOGGING_LEVEL in logging_config:
        validate_log_level(logging_config[ConfigKey.LOGGING_LEVEL])

    log_file = logging_config.get(ConfigKey.LOGGING_FILE)
    if log_file is not None and not isinstance(log_file, str):
        raise ValidationError(f"Log file must be a string: {log_file!r}")

    return True


def validate_log_level(level: Any) -> bool:
    """Validate a log level name (case-insensitive)."""
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ValidationError(f"Invalid log level: {level}. Must be one of {list(LOG_LEVELS)}")
    return True


def validate_output_format(output_format: Any) -> bool:
    """Validate a CLI output format name."""
    if output_format not in OUTPUT_FORMATS:
        raise ValidationError(
            f"Invalid output format: {output_format}. Must be one of {list(OUTPUT_FORMATS)}"
        )
    return True
