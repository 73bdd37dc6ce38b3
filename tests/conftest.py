"""Shared pytest fixtures for pathignore tests."""
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Generator

import pytest
import yaml


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_ignore(temp_dir: Path) -> Callable[..., Path]:
    """Write a pattern file into the temporary directory."""

    def _write(content: str, filename: str = ".ignore") -> Path:
        path = temp_dir / filename
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Create a project tree with a pattern file."""
    (temp_dir / "build.sh").write_text("#!/bin/sh\n")
    (temp_dir / "src").mkdir()
    (temp_dir / "src" / "build.sh").write_text("#!/bin/sh\n")
    (temp_dir / "docs" / "1" / "Users").mkdir(parents=True)
    (temp_dir / "docs" / "1" / "Users" / "UserApi.md").write_text("# Users\n")
    (temp_dir / "docs" / "UserApi.md").write_text("# API\n")
    (temp_dir / ".ignore").write_text(
        "# generated files to keep\n"
        "\n"
        "*.sh\n"
        "docs/**/Users/\n"
        "!docs/1/Users/UserApi.md\n",
        encoding="utf-8",
    )
    return temp_dir


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample pathignore configuration."""
    return {
        "pathignore": {
            "ignore": {"filename": ".codegen-ignore"},
            "logging": {"level": "INFO", "file": None},
            "output": {"format": "yaml"},
        }
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "pathignore.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path
