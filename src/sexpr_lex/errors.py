"""
sexpr-lex Error Hierarchy
=========================

This module defines the exception hierarchy for the S-expression scanner.
All exceptions inherit from SexprError, allowing callers to catch every
package error with a single except clause.

The scanner itself never raises these. Problems found while scanning are
reported inline as ERROR tokens whose value is an ErrorMessage tagged with
an ErrorCategory. A consumer that prefers exceptions converts such a token
with Token.raise_for_error() (or tokenize(..., strict=True)), which raises
the class mapped to the message's category.

Exception Hierarchy
-------------------
SexprError (base)
└── ScanError (lexical errors)
    ├── SourceReadError - character source failed (not a clean end)
    ├── UnexpectedCharacterError - character starts no token
    ├── MalformedAtomError - atom ends in '-' or '_'
    └── MalformedNumberError - bad terminator or unparsable number

Error messages follow this format:
    filename:row:col: error: description
    hint: suggestion for fixing (when available)

Copyright (c) 2026 sexpr-lex Contributors
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class SexprError(Exception):
    """
    Base exception for all sexpr-lex errors.

        try:
            tokens = tokenize(text, strict=True)
        except SexprError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for error reporting.

    Attributes:
        filename: Name of the source (or "<input>" for string input)
        row: Line number (1-indexed)
        col: Column number (1-indexed)
    """
    filename: str
    row: int
    col: int

    def __str__(self) -> str:
        """Format as 'filename:row:col' for error messages."""
        return f"{self.filename}:{self.row}:{self.col}"


# =============================================================================
# Error Categories
# =============================================================================

class ErrorCategory(Enum):
    """Classifies why the scanner produced an ERROR token."""

    SOURCE_READ = "source-read"
    UNEXPECTED_CHARACTER = "unexpected-character"
    MALFORMED_ATOM = "malformed-atom"
    MALFORMED_NUMBER = "malformed-number"


class ErrorMessage(str):
    """
    Human-readable error text carried as the value of an ERROR token.

    Compares equal to the plain message string, and additionally records
    the ErrorCategory so consumers can branch without parsing text.
    """

    category: ErrorCategory

    def __new__(cls, text: str, category: ErrorCategory) -> "ErrorMessage":
        obj = super().__new__(cls, text)
        obj.category = category
        return obj

    def __repr__(self) -> str:
        return f"ErrorMessage({str(self)!r}, {self.category.name})"


# =============================================================================
# Scan Exceptions
# =============================================================================

class ScanError(SexprError):
    """
    Base exception for lexical errors.

    Attributes:
        message: The error description
        location: Where the offending token started (optional)
        raw: Source text consumed before the error was detected
        hint: A suggestion for fixing the error (optional)
    """

    category: Optional[ErrorCategory] = None

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        raw: str = "",
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.raw = raw
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

        Example output:
            demo.lisp:3:7: error: Invalid Atom[foo-]
            hint: atoms must end with a letter or digit
        """
        if self.location:
            parts = [f"{self.location}: error: {self.message}"]
        else:
            parts = [f"error: {self.message}"]

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class SourceReadError(ScanError):
    """The character source failed, as opposed to ending cleanly."""

    category = ErrorCategory.SOURCE_READ


class UnexpectedCharacterError(ScanError):
    """
    A character that cannot begin any token.

    Examples: '#', '"', '[' or any other punctuation outside comments.
    """

    category = ErrorCategory.UNEXPECTED_CHARACTER


class MalformedAtomError(ScanError):
    """An atom whose last character is '-' or '_'."""

    category = ErrorCategory.MALFORMED_ATOM

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        raw: str = "",
        hint: Optional[str] = None,
    ):
        if hint is None:
            hint = "atoms must end with a letter or digit"
        super().__init__(message, location, raw, hint)


class MalformedNumberError(ScanError):
    """
    A numeric literal that is badly terminated or cannot be parsed.

    Only a space, newline, '(' or ')' (or the end of input) may follow a
    number. Text such as '-' or '.' on its own fails to parse.
    """

    category = ErrorCategory.MALFORMED_NUMBER


_ERRORS_BY_CATEGORY: dict[ErrorCategory, type[ScanError]] = {
    ErrorCategory.SOURCE_READ: SourceReadError,
    ErrorCategory.UNEXPECTED_CHARACTER: UnexpectedCharacterError,
    ErrorCategory.MALFORMED_ATOM: MalformedAtomError,
    ErrorCategory.MALFORMED_NUMBER: MalformedNumberError,
}


def error_for(
    message: ErrorMessage,
    location: Optional[SourceLocation] = None,
    raw: str = "",
) -> ScanError:
    """
    Build the exception matching an ErrorMessage's category.

    Args:
        message: The ERROR token's value
        location: Where the token started
        raw: The token's raw text

    Returns:
        An instance of the ScanError subclass for the category
    """
    error_class = _ERRORS_BY_CATEGORY.get(message.category, ScanError)
    return error_class(str(message), location, raw)
