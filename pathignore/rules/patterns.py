#!/usr/bin/env python3
r"""Glob pattern compilation for relative paths.

This module translates path globs into anchored regular expressions:
- ``*`` matches within one path segment, ``?`` one non-separator character
- ``**`` matches any run of characters, separators included, so
  ``**/`` needs at least one directory before what follows
- ``[...]`` character classes (``[!...]`` negated)
- ``{a,b}`` alternative groups
- ``\x`` escapes a single character

Paths are matched whole, using forward slashes.

Example:
    >>> glob = GlobPattern.compile("docs/**/*.md")
    >>> glob.matches("docs/api/index.md")
    True
    >>> glob.matches("src/docs/index.md")
    False
"""

import re
from dataclasses import dataclass
from typing import Pattern


def translate(pattern: str) -> str:
    """Translate a glob pattern into a regular expression body.

    Args:
        pattern: Glob pattern using forward slashes

    Returns:
        Regular expression (without anchors)
    """
    result = []
    i = 0
    length = len(pattern)

    while i < length:
        char = pattern[i]

        if char == "*":
            if pattern.startswith("**", i):
                # A following "/" stays literal
                result.append(".*")
                i += 2
            else:
                result.append("[^/]*")
                i += 1
            continue

        if char == "?":
            result.append("[^/]")
            i += 1
            continue

        if char == "[":
            end = find_class_end(pattern, i)
            if end < 0:
                result.append(re.escape(char))
                i += 1
                continue
            result.append(translate_class(pattern[i + 1 : end]))
            i = end + 1
            continue

        if char == "{":
            end = pattern.find("}", i + 1)
            if end < 0:
                result.append(re.escape(char))
                i += 1
                continue
            alternatives = pattern[i + 1 : end].split(",")
            result.append("(?:" + "|".join(translate(alt) for alt in alternatives) + ")")
            i = end + 1
            continue

        if char == "\\" and i + 1 < length:
            result.append(re.escape(pattern[i + 1]))
            i += 2
            continue

        result.append(re.escape(char))
        i += 1

    return "".join(result)


def translate_class(body: str) -> str:
    """Translate the body of a ``[...]`` glob class into a regex class.

    A leading ``!`` negates the class. Characters that the regex engine reads
    as nested sets or set operations are escaped.
    """
    negated = body.startswith("!")
    if negated:
        body = body[1:]
    escaped = "".join("\\" + char if char in "\\[&~|" else char for char in body)
    if escaped.startswith("^"):
        escaped = "\\" + escaped
    return "[" + ("^" if negated else "") + escaped + "]"


def find_class_end(pattern: str, start: int) -> int:
    """Find the index of the bracket closing a character class, or -1."""
    i = start + 1
    if i < len(pattern) and pattern[i] in "!^":
        i += 1
    # A leading "]" is a member of the class, not its end
    if i < len(pattern) and pattern[i] == "]":
        i += 1
    end = pattern.find("]", i)
    if end < 0 or "/" in pattern[start:end]:
        return -1
    return end


@dataclass(frozen=True)
class GlobPattern:
    """A glob pattern compiled to an anchored regular expression."""

    pattern: str
    compiled: Pattern

    @classmethod
    def compile(cls, pattern: str) -> "GlobPattern":
        """Compile a glob pattern.

        Args:
            pattern: Glob pattern

        Returns:
            Compiled glob

        Raises:
            re.error: If the translated expression is invalid (e.g. ``[z-a]``)
        """
        return cls(pattern=pattern, compiled=re.compile(translate(pattern), re.DOTALL))

    def matches(self, path: str) -> bool:
        """Check whether the whole path matches the glob."""
        return self.compiled.fullmatch(path) is not None
