"""
sexpr-lex - Scanner for a Small S-Expression Syntax
===================================================

This package turns a stream of characters into typed tokens for an
S-expression surface syntax: parentheses, quote marks, ';' comments,
symbolic atoms, integers and floats.

Main Components
---------------
- **scanner**: the character-level state machine (Scanner, tokenize)
- **tokens**: Token and TokenKind value types
- **source**: character sources over strings, text and byte streams
- **errors**: exception hierarchy for consumers that prefer exceptions
- **config**: front-end settings (encoding, strictness)

Quick Start
-----------
Scan a string:
    >>> from sexpr_lex import tokenize
    >>> [t.kind.name for t in tokenize("(f 'x)")]
    ['OPEN_PAREN', 'ATOM', 'QUOTE', 'ATOM', 'CLOSE_PAREN', 'END_OF_INPUT']

Pull tokens one at a time:
    >>> from sexpr_lex import Scanner
    >>> scanner = Scanner.from_string("42")
    >>> scanner.next().value
    42

Or use the command-line tool:
    $ sxlex program.lisp

Copyright (c) 2026 sexpr-lex Contributors
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from sexpr_lex.errors import (
    SexprError,
    ScanError,
    SourceReadError,
    UnexpectedCharacterError,
    MalformedAtomError,
    MalformedNumberError,
    SourceLocation,
    ErrorCategory,
    ErrorMessage,
)
from sexpr_lex.tokens import Token, TokenKind
from sexpr_lex.source import (
    CharacterSource,
    Fetch,
    FetchStatus,
    StringSource,
    TextStreamSource,
    ByteStreamSource,
    open_source,
)
from sexpr_lex.scanner import Scanner, tokenize
from sexpr_lex.config import ScannerConfig, get_config, set_config, reset_config

__all__ = [
    "__version__",
    # Scanner
    "Scanner",
    "tokenize",
    # Tokens
    "Token",
    "TokenKind",
    # Sources
    "CharacterSource",
    "Fetch",
    "FetchStatus",
    "StringSource",
    "TextStreamSource",
    "ByteStreamSource",
    "open_source",
    # Errors
    "SexprError",
    "ScanError",
    "SourceReadError",
    "UnexpectedCharacterError",
    "MalformedAtomError",
    "MalformedNumberError",
    "SourceLocation",
    "ErrorCategory",
    "ErrorMessage",
    # Configuration
    "ScannerConfig",
    "get_config",
    "set_config",
    "reset_config",
]
