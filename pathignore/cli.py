#!/usr/bin/env python3
"""Command-line interface for pathignore.

This module provides the CLI for checking paths against a pattern file:
- Argument parsing and validation
- Configuration file loading
- Logging setup, with load diagnostics routed to the logger
- Text or YAML output

Example:
    >>> from pathignore.cli import parse_arguments
    >>> args = parse_arguments(["--directory", "/project", "build.sh"])
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pathignore.core.constants import (
    OUTPUT_FORMATS,
    PATHIGNORE_VERSION,
    ConfigKey,
)
from pathignore.infrastructure.config_manager import ConfigError, ConfigManager, ConfigSource
from pathignore.infrastructure.logger import Logger, get_logger
from pathignore.report import build_report, render
from pathignore.rules.engine import IgnoreProcessor

DESCRIPTION = "pathignore - check paths against a gitignore-style pattern file"


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
        CLIError: If validation fails
    """
    parser = argparse.ArgumentParser(
        prog="pathignore",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check files against ./.ignore
  pathignore build.sh src/main.py

  # Use another directory and pattern file name
  pathignore --directory out --filename .codegen-ignore out/docs/api.md

  # Show the parsed rules as YAML
  pathignore --list-rules --format yaml
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {PATHIGNORE_VERSION}",
    )

    parser.add_argument(
        "paths",
        metavar="PATH",
        nargs="*",
        help="Paths to check",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help="Configuration file path (YAML format)",
    )

    # Pattern file options
    ignore_group = parser.add_argument_group("pattern file options")

    ignore_group.add_argument(
        "-d",
        "--directory",
        metavar="DIR",
        type=str,
        default=".",
        help="Directory holding the pattern file (default: current directory)",
    )

    ignore_group.add_argument(
        "-f",
        "--filename",
        metavar="NAME",
        type=str,
        help="Pattern file name (default: .ignore)",
    )

    # Output options
    output_group = parser.add_argument_group("output options")

    output_group.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        dest="output_format",
        help="Output format (default: text)",
    )

    output_group.add_argument(
        "--list-rules",
        action="store_true",
        help="List parsed exclusion and inclusion rules",
    )

    # Logging options
    log_group = parser.add_argument_group("logging options")

    log_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        type=str,
        help="Also write log output to FILE",
    )

    parsed = parser.parse_args(args)

    _validate_arguments(parsed)

    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Args:
        args: Parsed arguments namespace

    Raises:
        CLIError: If validation fails
    """
    if not args.paths and not args.list_rules:
        raise CLIError("Either PATH arguments or --list-rules must be given\n" "Use --help for usage information")

    if args.filename is not None and ("/" in args.filename or "\\" in args.filename):
        raise CLIError(f"Pattern file name must not contain a path separator: {args.filename}")

    if args.config:
        config_path = Path(args.config)

        if not config_path.exists():
            raise CLIError(f"Configuration file does not exist: {args.config}")

        if not config_path.is_file():
            raise CLIError(f"Configuration path is not a file: {args.config}")


def build_config_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Build configuration dictionary from command-line arguments.

    Only options given on the command line appear in the result.

    Args:
        args: Parsed arguments namespace

    Returns:
        Configuration dictionary for ConfigManager
    """
    section: Dict[str, Any] = {}

    if args.filename:
        section[ConfigKey.IGNORE] = {ConfigKey.IGNORE_FILENAME: args.filename}

    logging_config: Dict[str, Any] = {}
    if args.debug:
        logging_config[ConfigKey.LOGGING_LEVEL] = "DEBUG"
    if args.log_file:
        logging_config[ConfigKey.LOGGING_FILE] = args.log_file
    if logging_config:
        section[ConfigKey.LOGGING] = logging_config

    if args.output_format:
        section[ConfigKey.OUTPUT] = {ConfigKey.OUTPUT_FORMAT: args.output_format}

    return {ConfigKey.ROOT: section}


def load_config(args: argparse.Namespace) -> ConfigManager:
    """
    Build the layered configuration for a CLI run.

    Args:
        args: Parsed arguments namespace

    Returns:
        Configuration manager with file, environment and argument layers

    Raises:
        CLIError: If the configuration file cannot be loaded or is invalid
    """
    try:
        config = ConfigManager(args.config)
        config.load_dict(build_config_from_args(args), ConfigSource.CLI_ARGS)
        config.validate()
    except ConfigError as e:
        raise CLIError(e.message)
    return config


def setup_logging(config: ConfigManager) -> Logger:
    """
    Setup logging based on configuration.

    Args:
        config: Configuration manager

    Returns:
        Configured logger instance
    """
    return get_logger("pathignore.cli", level=config.log_level, log_file=config.log_file)


def run(args: argparse.Namespace, config: ConfigManager, logger: Logger) -> str:
    """
    Load the pattern file and render the verdicts.

    Args:
        args: Parsed arguments namespace
        config: Configuration manager
        logger: Logger receiving load diagnostics

    Returns:
        Rendered output
    """
    with logger.add_context(directory=args.directory):
        processor = IgnoreProcessor(args.directory, config.ignore_filename, reporter=logger.report)
        logger.debug(
            "Pattern file loaded",
            loaded=processor.loaded,
            exclusions=len(processor.exclusion_rules),
            inclusions=len(processor.inclusion_rules),
        )

    # Paths on the command line are relative to the working directory
    paths = [str(Path(path).absolute()) for path in args.paths]
    report = build_report(processor, paths, list_rules=args.list_rules)
    for result, given in zip(report["results"], args.paths):
        result["path"] = given

    return render(report, config.output_format)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit code
    """
    try:
        args = parse_arguments(argv)
        config = load_config(args)
        logger = setup_logging(config)

        output = run(args, config, logger)
        sys.stdout.write(output)
        return 0

    except CLIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
