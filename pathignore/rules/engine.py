#!/usr/bin/env python3
"""Evaluation of ignore-file rules against candidate paths.

This module provides the pattern store for one pattern file:
- Loading from a base directory, an explicit file, or raw text
- Exclusion rules (plain lines) and inclusion rules ("!" lines) in file order
- Directory-aware precedence between exclusions and inclusions
- Diagnostics returned to the caller instead of logged globally

Example:
    >>> processor = IgnoreProcessor.from_text("docs/**\\n!docs/UserApi.md", "/project")
    >>> processor.allowed("docs/UserApi.md")
    True
    >>> processor.allowed("docs/Other.md")
    False
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, Union

from pathignore.core.constants import DEFAULT_IGNORE_FILENAME
from pathignore.rules.rules import DirectoryRule, InvalidRule, Operation, Rule, create_rule

PathLike = Union[str, os.PathLike]


class DiagnosticLevel(Enum):
    """Severity of a load-time diagnostic."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """A note produced while loading a pattern file."""

    level: DiagnosticLevel
    message: str
    line_number: Optional[int] = None
    definition: Optional[str] = None


Reporter = Callable[[Diagnostic], None]


class IgnoreProcessor:
    """Decides whether paths are allowed under one pattern file.

    The processor is built once and is read-only afterwards; ``allowed`` may
    be called from several threads.
    """

    def __init__(
        self,
        base_directory: PathLike,
        ignore_filename: str = DEFAULT_IGNORE_FILENAME,
        reporter: Optional[Reporter] = None,
    ):
        """Load the named pattern file from a base directory.

        A missing directory or file is not an error: the processor stays
        unloaded and allows every path.

        Args:
            base_directory: Directory of the files to be processed; holds the pattern file
            ignore_filename: Name of the pattern file
            reporter: Optional callback receiving each diagnostic
        """
        self._init_state(Path(base_directory), reporter)

        if self._base_directory.is_dir():
            self._load_file(self._base_directory / ignore_filename)
        else:
            self._report(
                DiagnosticLevel.WARNING,
                f"Directory does not exist, or is inaccessible: {base_directory}. "
                "No file will be evaluated.",
            )

    @classmethod
    def from_file(cls, ignore_file: PathLike, reporter: Optional[Reporter] = None) -> "IgnoreProcessor":
        """Load an explicit pattern file; paths are evaluated relative to its directory."""
        processor = cls.__new__(cls)
        ignore_file = Path(ignore_file)
        processor._init_state(ignore_file.parent, reporter)
        processor._load_file(ignore_file)
        return processor

    @classmethod
    def from_text(
        cls, text: str, base_directory: PathLike, reporter: Optional[Reporter] = None
    ) -> "IgnoreProcessor":
        """Build from the raw text of a pattern file located in ``base_directory``."""
        return cls.from_lines(text.splitlines(), base_directory, reporter)

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], base_directory: PathLike, reporter: Optional[Reporter] = None
    ) -> "IgnoreProcessor":
        """Build from pattern lines located in ``base_directory``.

        An ``OSError`` raised while iterating stops loading; rules read so far
        stay active.
        """
        processor = cls.__new__(cls)
        processor._init_state(Path(base_directory), reporter)
        processor._loaded = True
        processor._load_lines(lines, "<text>")
        return processor

    def _init_state(self, base_directory: Path, reporter: Optional[Reporter]) -> None:
        self._base_directory = base_directory.absolute()
        self._reporter = reporter
        self._exclusion_rules: List[Rule] = []
        self._inclusion_rules: List[Rule] = []
        self._diagnostics: List[Diagnostic] = []
        self._ignore_file: Optional[Path] = None
        self._loaded = False

    def _load_file(self, ignore_file: Path) -> None:
        if not ignore_file.is_file():
            self._report(DiagnosticLevel.INFO, f"No {ignore_file.name} file found.")
            return

        try:
            with open(ignore_file, "r", encoding="utf-8") as f:
                # Rules parsed before a read failure stay in effect
                self._ignore_file = ignore_file.absolute()
                self._loaded = True
                self._load_lines(f, ignore_file.name)
        except OSError as e:
            self._report(DiagnosticLevel.ERROR, f"Could not process {ignore_file.name}: {e}")

    def _load_lines(self, lines: Iterable[str], source: str) -> None:
        line_number = 0
        try:
            for line_number, line in enumerate(lines, start=1):
                rule = create_rule(line)
                if rule is None:
                    continue

                if isinstance(rule, InvalidRule):
                    self._report(
                        DiagnosticLevel.WARNING,
                        f"Invalid rule in {source}: {rule.reason}",
                        line_number=line_number,
                        definition=rule.definition,
                    )

                if rule.negated:
                    self._inclusion_rules.append(rule)
                else:
                    self._exclusion_rules.append(rule)
        except (OSError, UnicodeDecodeError) as e:
            self._report(
                DiagnosticLevel.ERROR,
                f"Could not process {source} after line {line_number}: {e}",
                line_number=line_number + 1,
            )

    def _report(
        self,
        level: DiagnosticLevel,
        message: str,
        line_number: Optional[int] = None,
        definition: Optional[str] = None,
    ) -> None:
        diagnostic = Diagnostic(level, message, line_number, definition)
        self._diagnostics.append(diagnostic)
        if self._reporter is not None:
            self._reporter(diagnostic)

    def relativize(self, path: PathLike) -> Optional[str]:
        """Express a path relative to the pattern file's directory.

        Args:
            path: Relative (to the pattern file's directory) or absolute path

        Returns:
            Forward-slash relative path, or None if the path lies outside
        """
        raw = os.fspath(path)
        directory_hint = raw.endswith("/") or raw.endswith(os.sep)
        candidate = Path(raw)

        if candidate.is_absolute():
            try:
                candidate = candidate.relative_to(self._base_directory)
            except ValueError:
                return None

        relative = candidate.as_posix().replace("\\", "/")
        if relative == ".":
            relative = ""
        if directory_hint and relative:
            relative += "/"
        return relative

    def allowed(self, path: PathLike) -> bool:
        """Determine whether a path is allowed under the loaded rules.

        Args:
            path: The path to check

        Returns:
            False if the path is excluded and no inclusion rule lifts that, otherwise True
        """
        if not self._loaded:
            return True

        relative_path = self.relativize(path)
        if relative_path is None:
            return True

        if not self._exclusion_rules and not self._inclusion_rules:
            return True

        excluded = False
        directory_excluded = False

        # Every exclusion rule is consulted unless one terminates the pass
        for rule in self._exclusion_rules:
            operation = rule.evaluate(relative_path)
            if operation is Operation.EXCLUDE:
                excluded = True
                # An inclusion can't lift an exclusion made through a parent directory
                if isinstance(rule, DirectoryRule):
                    directory_excluded = True
            elif operation is Operation.EXCLUDE_AND_TERMINATE:
                # Absolute match: excluded, without directory status
                excluded = True
                break

        if not excluded:
            return True

        for rule in self._inclusion_rules:
            if rule.evaluate(relative_path) is not Operation.INCLUDE:
                continue
            if isinstance(rule, DirectoryRule) and directory_excluded:
                # e.g. "baz/" then "!foo/bar/baz/"
                excluded = False
            elif not directory_excluded:
                # e.g. "**/*.log" then "!ISSUE_1234.log"
                excluded = False
            if not excluded:
                break

        return not excluded

    def filter(self, paths: Iterable[PathLike]) -> Iterator[PathLike]:
        """Yield the allowed paths, in order."""
        for path in paths:
            if self.allowed(path):
                yield path

    @property
    def inclusion_rules(self) -> Tuple[Rule, ...]:
        """Negated rules, which may lift exclusions."""
        return tuple(self._inclusion_rules)

    @property
    def exclusion_rules(self) -> Tuple[Rule, ...]:
        """Exclusion rules.

        Presence here doesn't mean a path is excluded; an inclusion rule may
        override it.
        """
        return tuple(self._exclusion_rules)

    @property
    def diagnostics(self) -> Tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def ignore_file(self) -> Optional[Path]:
        return self._ignore_file

    @property
    def base_directory(self) -> Path:
        return self._base_directory

    def __len__(self) -> int:
        """Return number of rules."""
        return len(self._exclusion_rules) + len(self._inclusion_rules)
