#!/usr/bin/env python3
"""Rules parsed from ignore-file pattern lines.

Each non-blank, non-comment line becomes exactly one rule. The variant is
chosen once, from the shape of the reconstructed pattern:

- DirectoryRule: pattern ends with "/"; matches the directory and
  everything beneath it
- RootedFileRule: single path segment, matched only in the pattern file's
  own directory
- FileRule: glob over the full relative path
- InvalidRule: a line that could not be turned into a coherent pattern

Example:
    >>> rule = create_rule("docs/**/Users/")
    >>> type(rule).__name__, rule.evaluate("docs/1/Users/a")
    ('DirectoryRule', <Operation.EXCLUDE: 'exclude'>)
"""

import re
from enum import Enum
from typing import List, Optional, Pattern, Sequence, Tuple

from pathignore.rules.patterns import GlobPattern, find_class_end, translate_class
from pathignore.rules.tokenizer import Part, PatternError, Token, reconstruct, tokenize


class Operation(Enum):
    """Outcome of evaluating a rule against a path."""

    EXCLUDE = "exclude"
    INCLUDE = "include"
    NOOP = "noop"
    EXCLUDE_AND_TERMINATE = "exclude_and_terminate"


class Rule:
    """Base class for all rule variants.

    Subclasses implement ``matches``; the pattern is rebuilt from the parsed
    syntax rather than taken from the raw line.
    """

    def __init__(self, syntax: Optional[Sequence[Part]], definition: str, negated: bool = False):
        """Initialize rule.

        Args:
            syntax: Parts produced by the tokenizer (None if tokenizing failed)
            definition: Original line text
            negated: Whether the line began with "!"
        """
        self._syntax: Tuple[Part, ...] = tuple(syntax or ())
        self._definition = definition
        self._negated = negated
        self._pattern = reconstruct(list(self._syntax)) if syntax is not None else definition

    @property
    def syntax(self) -> Tuple[Part, ...]:
        return self._syntax

    @property
    def definition(self) -> str:
        return self._definition

    @property
    def negated(self) -> bool:
        return self._negated

    @property
    def pattern(self) -> str:
        return self._pattern

    def matches(self, relative_path: str) -> Optional[bool]:
        """Check whether the rule matches a path relative to the pattern file."""
        raise NotImplementedError

    def evaluate(self, relative_path: str) -> Operation:
        """Evaluate the rule, yielding the operation it requests for the path.

        Args:
            relative_path: Path relative to the pattern file's directory

        Returns:
            INCLUDE or EXCLUDE when the rule matches, otherwise NOOP
        """
        if self.matches(relative_path) is True:
            return self.include_operation if self._negated else self.exclude_operation
        return Operation.NOOP

    @property
    def include_operation(self) -> Operation:
        return Operation.INCLUDE

    @property
    def exclude_operation(self) -> Operation:
        return Operation.EXCLUDE

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._definition!r})"


class FileRule(Rule):
    """Glob over the full relative path."""

    def __init__(self, syntax: Optional[Sequence[Part]], definition: str, negated: bool = False):
        super().__init__(syntax, definition, negated)
        self._matcher = GlobPattern.compile(self.pattern)

    def matches(self, relative_path: str) -> Optional[bool]:
        return self._matcher.matches(relative_path)


class DirectoryRule(FileRule):
    """Matches a directory and, recursively, everything beneath it."""

    def __init__(self, syntax: Optional[Sequence[Part]], definition: str, negated: bool = False):
        super().__init__(syntax, definition, negated)
        directory = self.pattern if self.pattern.endswith("/") else self.pattern + "/"
        self._directory_matcher = GlobPattern.compile(directory)
        self._contents_matcher = GlobPattern.compile(directory + "**")

    def matches(self, relative_path: str) -> Optional[bool]:
        if self._contents_matcher.matches(relative_path):
            return True
        # The directory entry itself, with or without its trailing separator
        return self._directory_matcher.matches(relative_path.rstrip("/") + "/")


class RootedFileRule(Rule):
    """A single-segment rule anchored to the pattern file's directory.

    The defined name is split at its last "." into a filename and an
    extension. The extension must match literally or be "*"; the filename
    matches literally or, when it holds "*" or a ``[...]`` class, as a
    shortest-match wildcard.
    """

    def __init__(self, syntax: Optional[Sequence[Part]], definition: str, negated: bool = False):
        super().__init__(syntax, definition, negated)
        self._filename_part, self._extension_part = split_name(self.pattern)
        self._filename_regex = _filename_regex(self._filename_part)

    @property
    def filename_part(self) -> str:
        return self._filename_part

    @property
    def extension_part(self) -> str:
        return self._extension_part

    def matches(self, relative_path: str) -> Optional[bool]:
        # A leading separator is tolerated, an interior one is not
        if relative_path.rfind("/") > 0:
            return False

        filename, extension = split_name(relative_path)
        extension_matches = (
            self._extension_part == extension
            or self._extension_part == Token.MATCH_ANY.pattern
        )
        if not extension_matches:
            return False

        if self._filename_regex is not None:
            return self._filename_regex.fullmatch(filename) is not None

        return self._filename_part == filename


class InvalidRule(Rule):
    """A line that could not be parsed. Never matches, always NOOP."""

    def __init__(
        self,
        syntax: Optional[Sequence[Part]],
        definition: str,
        reason: str,
        negated: bool = False,
    ):
        super().__init__(syntax, definition, negated)
        self._reason = reason

    @property
    def reason(self) -> str:
        return self._reason

    def matches(self, relative_path: str) -> Optional[bool]:
        return None

    def evaluate(self, relative_path: str) -> Operation:
        return Operation.NOOP


def split_name(name: str) -> Tuple[str, str]:
    """Split a single path segment at its last "." into (filename, extension).

    A leading "/" is dropped. A dot in first position (".bashrc") does not
    start an extension.
    """
    if name.startswith("/"):
        name = name[1:]
    index = name.rfind(".")
    if index > 0:
        return name[:index], name[index + 1 :]
    return name, ""


def _filename_regex(filename: str) -> Optional[Pattern]:
    """Compile a wildcard filename, or return None when it is a plain name.

    Raises:
        re.error: If a character class cannot be compiled
    """
    pieces = []
    wildcard = False
    i = 0
    while i < len(filename):
        char = filename[i]
        if char == Token.MATCH_ANY.pattern:
            pieces.append(".*?")
            wildcard = True
            i += 1
            continue
        if char == "[":
            end = find_class_end(filename, i)
            if end >= 0:
                pieces.append(translate_class(filename[i + 1 : end]))
                wildcard = True
                i = end + 1
                continue
        pieces.append(re.escape(char))
        i += 1

    if not wildcard:
        return None
    return re.compile("".join(pieces))


def is_blank_or_comment(line: str) -> bool:
    """Whether a line produces no rule at all."""
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def create_rule(line: str) -> Optional[Rule]:
    """Create the rule described by one pattern line.

    Args:
        line: Raw line from the pattern file (line ending optional)

    Returns:
        The rule, or None for blank and comment lines
    """
    definition = line.rstrip("\r\n")
    if is_blank_or_comment(definition):
        return None

    body = definition
    negated = body.startswith("!")
    if negated:
        body = body[1:]
        if not body.strip():
            return InvalidRule(None, definition, "Negation with no negated pattern.", negated)

    stripped = body.strip()
    if stripped == ".":
        return InvalidRule(None, definition, "Pattern '.' is invalid.", negated)
    if stripped.startswith(".."):
        return InvalidRule(None, definition, "Pattern '..' is invalid.", negated)

    try:
        syntax = tokenize(body)
    except PatternError as e:
        return InvalidRule(None, definition, e.message, negated)

    pattern = reconstruct(syntax)
    if not pattern:
        return InvalidRule(syntax, definition, "Pattern is empty.", negated)

    try:
        if pattern.endswith("/"):
            return DirectoryRule(syntax, definition, negated)
        if not _has_path_delimiter(syntax):
            return RootedFileRule(syntax, definition, negated)
        return FileRule(syntax, definition, negated)
    except re.error as e:
        return InvalidRule(syntax, definition, f"Pattern cannot be compiled: {e}", negated)


def _has_path_delimiter(syntax: List[Part]) -> bool:
    return any(part.token is Token.PATH_DELIM for part in syntax)
