"""
Token Definitions
=================

Value types produced by the scanner: the closed TokenKind enumeration and
the immutable Token record.

Value by Kind
-------------
| Kind         | value           | raw                      |
|--------------|-----------------|--------------------------|
| ATOM         | str             | the atom text            |
| NUMBER       | int or float    | the literal text         |
| COMMENT      | None            | ';' up to end of line    |
| ERROR        | ErrorMessage    | text consumed so far     |
| OPEN_PAREN   | None            | ""                       |
| CLOSE_PAREN  | None            | ""                       |
| QUOTE        | None            | ""                       |
| END_OF_INPUT | None            | ""                       |
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

from sexpr_lex.errors import ErrorMessage, SourceLocation, error_for


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """Closed set of token kinds. Names are stable for messages and tests."""

    ERROR = auto()          # Grammar violation or source failure
    END_OF_INPUT = auto()   # Source exhausted
    COMMENT = auto()        # ; to end of line
    OPEN_PAREN = auto()     # (
    CLOSE_PAREN = auto()    # )
    QUOTE = auto()          # '
    ATOM = auto()           # Symbolic name
    NUMBER = auto()         # Integer or float literal


TERMINAL_KINDS = frozenset({TokenKind.ERROR, TokenKind.END_OF_INPUT})

TokenValue = Union[None, str, int, float, ErrorMessage]


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from the source text.

    Attributes:
        kind: The TokenKind classification
        value: Decoded payload (see module table)
        raw: Exact text consumed for the payload
        row: Line of the token's first character (1-indexed)
        col: Column of the token's first character (1-indexed)
        filename: Label of the source, for error reporting
    """
    kind: TokenKind
    value: TokenValue
    raw: str
    row: int
    col: int
    filename: str = "<input>"

    def __str__(self) -> str:
        return (
            f"[@({self.row},{self.col}){self.kind.name}"
            f"<{type(self.value).__name__}>:{self.value},{self.raw}]"
        )

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.row, self.col)

    @property
    def is_terminal(self) -> bool:
        """True for ERROR and END_OF_INPUT; consumers stop after these."""
        return self.kind in TERMINAL_KINDS

    @property
    def is_error(self) -> bool:
        return self.kind is TokenKind.ERROR

    def raise_for_error(self) -> "Token":
        """
        Raise the matching ScanError if this is an ERROR token.

        Returns:
            The token itself when it is not an error, so calls can chain

        Raises:
            ScanError: subclass chosen by the error message's category
        """
        if self.kind is TokenKind.ERROR:
            raise error_for(self.value, self.location, self.raw)
        return self
