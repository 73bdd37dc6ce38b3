"""pathignore - decide whether paths are excluded by a gitignore-style pattern file.

Example:
    >>> from pathignore import IgnoreProcessor
    >>> processor = IgnoreProcessor("/project")
    >>> processor.allowed("/project/src/build.sh")
"""

from pathignore.core.constants import DEFAULT_IGNORE_FILENAME, PATHIGNORE_VERSION
from pathignore.rules import (
    Diagnostic,
    DiagnosticLevel,
    DirectoryRule,
    FileRule,
    IgnoreProcessor,
    InvalidRule,
    Operation,
    RootedFileRule,
    Rule,
    create_rule,
)

__version__ = PATHIGNORE_VERSION

__all__ = [
    "DEFAULT_IGNORE_FILENAME",
    "Diagnostic",
    "DiagnosticLevel",
    "DirectoryRule",
    "FileRule",
    "IgnoreProcessor",
    "InvalidRule",
    "Operation",
    "RootedFileRule",
    "Rule",
    "create_rule",
]
