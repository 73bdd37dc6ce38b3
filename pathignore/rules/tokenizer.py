#!/usr/bin/env python3
r"""Tokenizer for a single ignore-file pattern line.

This module turns one pattern line into an ordered list of typed parts:
- Leading ``/`` as a rooted marker
- ``**`` as match-all, ``*`` as match-any
- ``/`` as a path delimiter, a trailing ``/`` as a directory marker
- ``\ `` as a literal space inside text
- Everything else accumulated into text runs

Negation (``!``), comments and blank lines are handled by the rule factory
before a line reaches the tokenizer.

Example:
    >>> [part.value for part in tokenize("docs/**/*.md")]
    ['docs', '/', '**', '/', '*', '.md']
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pathignore.core.constants import ErrorCode


class PatternError(Exception):
    """Raised when a pattern line cannot be tokenized."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class Token(Enum):
    """Token kinds produced by the tokenizer."""

    TEXT = "text"
    PATH_DELIM = "path_delim"  # Interior "/"
    MATCH_ANY = "match_any"  # "*", within one segment
    MATCH_ALL = "match_all"  # "**", across segments
    DIRECTORY_MARKER = "directory_marker"  # Trailing "/"
    ROOTED_MARKER = "rooted_marker"  # Leading "/"

    @property
    def pattern(self) -> Optional[str]:
        """Canonical literal of the token, None for text."""
        return _TOKEN_PATTERNS[self]


_TOKEN_PATTERNS = {
    Token.TEXT: None,
    Token.PATH_DELIM: "/",
    Token.MATCH_ANY: "*",
    Token.MATCH_ALL: "**",
    Token.DIRECTORY_MARKER: "/",
    Token.ROOTED_MARKER: "/",
}


@dataclass(frozen=True)
class Part:
    """A token together with the literal text it contributes to a pattern."""

    token: Token
    value: str = ""

    @classmethod
    def of(cls, token: Token) -> "Part":
        """Build a part carrying the token's canonical literal."""
        return cls(token, token.pattern or "")

    @property
    def contributes(self) -> bool:
        """Whether the part is part of the reconstructed match pattern."""
        return self.token is not Token.ROOTED_MARKER


def strip_trailing_whitespace(line: str) -> str:
    r"""Drop trailing whitespace unless the final space is escaped with ``\``."""
    stripped = line.rstrip()
    if len(stripped) < len(line) and stripped.endswith("\\"):
        return stripped + " "
    return stripped


def tokenize(line: str) -> List[Part]:
    """Split a pattern line into parts.

    Args:
        line: Pattern text with any ``!`` negation prefix already removed

    Returns:
        Ordered list of parts

    Raises:
        PatternError: If the line contains a run of three or more asterisks
    """
    line = strip_trailing_whitespace(line)
    parts: List[Part] = []
    text: List[str] = []
    length = len(line)

    def flush() -> None:
        if text:
            parts.append(Part(Token.TEXT, "".join(text)))
            text.clear()

    i = 0
    while i < length:
        char = line[i]
        following = line[i + 1] if i + 1 < length else None

        # Escaped leading hash or bang is literal text
        if i == 0 and char == "\\" and following in ("#", "!"):
            text.append(following)
            i += 2
            continue

        if char == "*":
            flush()
            if following == "*":
                if i + 2 < length and line[i + 2] == "*":
                    raise PatternError("The pattern *** is invalid.")
                parts.append(Part.of(Token.MATCH_ALL))
                i += 2
            else:
                parts.append(Part.of(Token.MATCH_ANY))
                i += 1
            continue

        if char == "\\" and following == " ":
            text.append(" ")
            i += 2
            continue

        if char == "/":
            flush()
            start = i
            while i < length and line[i] == "/":
                i += 1
            if start == 0:
                parts.append(Part.of(Token.ROOTED_MARKER))
            elif i == length:
                parts.append(Part.of(Token.DIRECTORY_MARKER))
            else:
                parts.append(Part.of(Token.PATH_DELIM))
            continue

        text.append(char)
        i += 1

    flush()
    return parts


def reconstruct(parts: List[Part]) -> str:
    """Concatenate the literals of the contributing parts into a pattern."""
    return "".join(part.value for part in parts if part.contributes)
