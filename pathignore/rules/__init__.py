"""pathignore Rules System.

This module provides parsing and evaluation of ignore-file patterns:
- tokenize: Pattern line to typed parts
- GlobPattern: Glob to anchored regex compilation
- Rule variants: FileRule, DirectoryRule, RootedFileRule, InvalidRule
- IgnoreProcessor: Exclusion/inclusion precedence over a whole pattern file
"""

from .engine import Diagnostic, DiagnosticLevel, IgnoreProcessor
from .patterns import GlobPattern, translate
from .rules import (
    DirectoryRule,
    FileRule,
    InvalidRule,
    Operation,
    RootedFileRule,
    Rule,
    create_rule,
)
from .tokenizer import Part, PatternError, Token, tokenize

__all__ = [
    # Tokenizer
    "Token",
    "Part",
    "PatternError",
    "tokenize",
    # Glob matching
    "GlobPattern",
    "translate",
    # Rules
    "Operation",
    "Rule",
    "FileRule",
    "DirectoryRule",
    "RootedFileRule",
    "InvalidRule",
    "create_rule",
    # Pattern store
    "Diagnostic",
    "DiagnosticLevel",
    "IgnoreProcessor",
]
