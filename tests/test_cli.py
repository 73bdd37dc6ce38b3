"""Tests for the command-line interface.

This module tests the CLI including:
- Argument parsing and validation
- Building the configuration layers from arguments
- Text and YAML output of path verdicts
- Exit codes
"""

import logging
import os

import pytest
import yaml

from pathignore.cli import (
    CLIError,
    build_config_from_args,
    load_config,
    main,
    parse_arguments,
    setup_logging,
)
from pathignore.core.constants import PATHIGNORE_VERSION
from pathignore.infrastructure.logger import LogLevel


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep PATHIGNORE_* variables of the host out of the tests."""
    for key in list(os.environ):
        if key.startswith("PATHIGNORE_"):
            monkeypatch.delenv(key)


@pytest.fixture
def close_cli_log_handlers():
    """Close file handlers opened by the CLI logger."""
    yield
    logger = logging.getLogger("pathignore.cli")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestParseArguments:
    """Test argument parsing."""

    def test_defaults(self):
        args = parse_arguments(["build.sh"])

        assert args.paths == ["build.sh"]
        assert args.directory == "."
        assert args.filename is None
        assert args.output_format is None
        assert args.config is None
        assert not args.list_rules
        assert not args.debug
        assert args.log_file is None

    def test_all_options(self, config_file):
        args = parse_arguments(
            [
                "-c", str(config_file),
                "-d", "out",
                "-f", ".codegen-ignore",
                "--format", "yaml",
                "--list-rules",
                "--debug",
                "--log-file", "run.log",
                "a.md", "b.md",
            ]
        )

        assert args.paths == ["a.md", "b.md"]
        assert args.directory == "out"
        assert args.filename == ".codegen-ignore"
        assert args.output_format == "yaml"
        assert args.list_rules
        assert args.debug
        assert args.log_file == "run.log"

    def test_list_rules_without_paths(self):
        assert parse_arguments(["--list-rules"]).paths == []

    def test_requires_paths_or_list_rules(self):
        with pytest.raises(CLIError, match="--list-rules"):
            parse_arguments([])

    def test_filename_with_separator(self):
        with pytest.raises(CLIError, match="path separator"):
            parse_arguments(["-f", "sub/.ignore", "a.txt"])

    def test_missing_config_file(self, temp_dir):
        with pytest.raises(CLIError, match="does not exist"):
            parse_arguments(["-c", str(temp_dir / "absent.yaml"), "a.txt"])

    def test_config_path_is_directory(self, temp_dir):
        with pytest.raises(CLIError, match="not a file"):
            parse_arguments(["-c", str(temp_dir), "a.txt"])

    def test_unknown_format(self):
        with pytest.raises(SystemExit):
            parse_arguments(["--format", "json", "a.txt"])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_arguments(["--version"])

        assert exc_info.value.code == 0
        assert PATHIGNORE_VERSION in capsys.readouterr().out


class TestBuildConfig:
    """Test configuration built from arguments."""

    def test_only_given_options(self):
        args = parse_arguments(["a.txt"])

        assert build_config_from_args(args) == {"pathignore": {}}

    def test_all_options(self):
        args = parse_arguments(
            ["-f", ".x", "--debug", "--log-file", "run.log", "--format", "yaml", "a.txt"]
        )

        assert build_config_from_args(args) == {
            "pathignore": {
                "ignore": {"filename": ".x"},
                "logging": {"level": "DEBUG", "file": "run.log"},
                "output": {"format": "yaml"},
            }
        }

    def test_arguments_override_config_file(self, config_file):
        args = parse_arguments(["-c", str(config_file), "--format", "text", "a.txt"])

        config = load_config(args)

        assert config.output_format == "text"
        assert config.ignore_filename == ".codegen-ignore"

    def test_invalid_config_file(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("pathignore:\n  output:\n    format: xml\n")
        args = parse_arguments(["-c", str(path), "a.txt"])

        with pytest.raises(CLIError, match="Invalid output format"):
            load_config(args)

    def test_setup_logging_uses_config_level(self):
        config = load_config(parse_arguments(["--debug", "a.txt"]))

        assert setup_logging(config).get_level() == LogLevel.DEBUG


class TestMain:
    """Test the CLI entry point."""

    def test_text_output(self, project_dir, monkeypatch, capsys):
        monkeypatch.chdir(project_dir)

        code = main(["build.sh", "src/build.sh", "docs/1/Users/UserApi.md"])

        assert code == 0
        assert capsys.readouterr().out == (
            "ignored\tbuild.sh\n"
            "allowed\tsrc/build.sh\n"
            "ignored\tdocs/1/Users/UserApi.md\n"
        )

    def test_directory_option(self, project_dir, capsys):
        target = str(project_dir / "src" / "build.sh")

        code = main(["-d", str(project_dir), target])

        assert code == 0
        assert capsys.readouterr().out == f"allowed\t{target}\n"

    def test_yaml_output(self, project_dir, monkeypatch, capsys):
        monkeypatch.chdir(project_dir)

        code = main(["--format", "yaml", "build.sh", "docs/UserApi.md"])

        assert code == 0
        report = yaml.safe_load(capsys.readouterr().out)
        assert report["loaded"] is True
        assert report["ignore_file"].endswith(".ignore")
        assert report["results"] == [
            {"path": "build.sh", "allowed": False},
            {"path": "docs/UserApi.md", "allowed": True},
        ]
        assert "rules" not in report

    def test_list_rules_text(self, project_dir, monkeypatch, capsys):
        monkeypatch.chdir(project_dir)

        code = main(["--list-rules"])

        output = capsys.readouterr().out
        assert code == 0
        assert "Pattern file: " in output
        assert "Exclusion rules (2):" in output
        assert "Inclusion rules (1):" in output
        assert "RootedFileRule" in output
        assert "DirectoryRule" in output
        assert "docs/**/Users/" in output

    def test_list_rules_yaml(self, project_dir, monkeypatch, capsys):
        monkeypatch.chdir(project_dir)

        main(["--list-rules", "--format", "yaml"])

        report = yaml.safe_load(capsys.readouterr().out)
        assert report["results"] == []
        assert [rule["kind"] for rule in report["rules"]["exclusion"]] == [
            "RootedFileRule",
            "DirectoryRule",
        ]
        assert report["rules"]["inclusion"][0]["negated"] is True
        assert report["rules"]["inclusion"][0]["pattern"] == "docs/1/Users/UserApi.md"

    def test_config_file(self, temp_dir, config_file, capsys):
        (temp_dir / ".codegen-ignore").write_text("*.md\n")
        target = str(temp_dir / "README.md")

        code = main(["-c", str(config_file), "-d", str(temp_dir), target])

        assert code == 0
        report = yaml.safe_load(capsys.readouterr().out)
        assert report["results"] == [{"path": target, "allowed": False}]

    def test_filename_option(self, temp_dir, write_ignore, monkeypatch, capsys):
        write_ignore("*.md\n", filename=".swagger-codegen-ignore")
        monkeypatch.chdir(temp_dir)

        main(["-f", ".swagger-codegen-ignore", "README.md"])

        assert capsys.readouterr().out == "ignored\tREADME.md\n"

    def test_missing_directory_warns(self, temp_dir, capsys):
        code = main(["-d", str(temp_dir / "missing"), "a.txt"])

        captured = capsys.readouterr()
        assert code == 0
        assert captured.out == "allowed\ta.txt\n"
        assert "Directory does not exist" in captured.err

    def test_invalid_rule_is_logged(self, temp_dir, write_ignore, monkeypatch, capsys):
        write_ignore("docs/***\n")
        monkeypatch.chdir(temp_dir)

        code = main(["--list-rules", "docs/a.md"])

        captured = capsys.readouterr()
        assert code == 0
        assert "allowed\tdocs/a.md" in captured.out
        assert "[The pattern *** is invalid.]" in captured.out
        assert "line=1" in captured.err

    def test_log_file(self, project_dir, monkeypatch, capsys, close_cli_log_handlers):
        monkeypatch.chdir(project_dir)
        log_file = project_dir / "run.log"

        code = main(["--debug", "--log-file", str(log_file), "build.sh"])

        assert code == 0
        for handler in logging.getLogger("pathignore.cli").handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "Pattern file loaded" in content
        assert "exclusions=2" in content

    def test_error_exit_code(self, capsys):
        code = main([])

        assert code == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_keyboard_interrupt(self, monkeypatch, capsys):
        def interrupted(*args, **kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr("pathignore.cli.run", interrupted)

        assert main(["a.txt"]) == 130
