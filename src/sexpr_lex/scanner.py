"""
S-Expression Scanner
====================

This module implements the character-level scanner for the S-expression
surface syntax. It pulls code points from a CharacterSource and returns one
Token per call to Scanner.next().

Grammar
-------
| Token       | Form                                                   |
|-------------|--------------------------------------------------------|
| COMMENT     | ';' up to (not including) newline or end of input      |
| OPEN_PAREN  | '('                                                    |
| CLOSE_PAREN | ')'                                                    |
| QUOTE       | "'"                                                    |
| ATOM        | letter (letter | digit | '-' | '_')*, ending in a      |
|             | letter or digit                                        |
| NUMBER      | ('-' | '.' | digit) (digit | one '.')*, followed by a  |
|             | space, newline, '(' , ')' or the end of input          |

Whitespace between tokens is skipped. Letters and digits are classified by
Unicode category, so 'λ' starts an atom and '٣' starts a number literal.
Only ASCII digits parse, though: '٣٤' is an Invalid Number.

Positions
---------
Rows and columns are 1-based. The counters advance once per fetch from
the source, at the moment the character is first fetched, whether by a
peek or by a read. A newline moves to the next row with column 0, so the
first character on every row is at column 1. A token is stamped with the
counters as they stood right after its first character was fetched.

Errors
------
Nothing is raised across next(). Grammar violations and source failures
come back as ERROR tokens whose value is an ErrorMessage:

- "Rune Error" - the source failed
- "Unexpected token[c]" - c starts no token
- "Invalid Atom[text]" - atom ends in '-' or '_'
- "Invalid Number[text]" - bad terminator after a number
- "Invalid Number[text]: reason" - number text does not parse

Treat ERROR as terminal. The scanner does not resynchronise after one.

Example
-------
>>> from sexpr_lex.scanner import Scanner
>>> scanner = Scanner.from_string("(add 1 -2.5)")
>>> for token in scanner:
...     print(token.kind.name, repr(token.value), token.row, token.col)
OPEN_PAREN None 1 1
ATOM 'add' 1 2
NUMBER 1 1 6
NUMBER -2.5 1 8
CLOSE_PAREN None 1 12
END_OF_INPUT None 1 13

Copyright (c) 2026 sexpr-lex Contributors
"""

import logging
import math
import unicodedata
from typing import BinaryIO, Iterator, Optional, TextIO, Union

from sexpr_lex.errors import ErrorCategory, ErrorMessage
from sexpr_lex.source import CharacterSource, Fetch, StringSource, open_source
from sexpr_lex.tokens import Token, TokenKind, TokenValue

logger = logging.getLogger(__name__)


# Integers are limited to a signed 64-bit range
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

# Characters that may directly follow a number (end of input also may)
NUMBER_TERMINATORS = frozenset("\n() ")

STRUCTURAL_TOKENS = {
    "(": TokenKind.OPEN_PAREN,
    ")": TokenKind.CLOSE_PAREN,
    "'": TokenKind.QUOTE,
}


# =============================================================================
# Character Classes
# =============================================================================

def is_letter(char: str) -> bool:
    """Unicode letter (categories Lu, Ll, Lt, Lm, Lo)."""
    return unicodedata.category(char).startswith("L")


def is_number(char: str) -> bool:
    """Unicode number of any kind (categories Nd, Nl, No)."""
    return unicodedata.category(char).startswith("N")


def is_digit(char: str) -> bool:
    """Unicode decimal digit (category Nd)."""
    return unicodedata.category(char) == "Nd"


# str.isspace() counts these as whitespace; the scanner does not
SEPARATOR_CONTROLS = frozenset("\x1c\x1d\x1e\x1f")


def is_space(char: str) -> bool:
    """Whitespace, not counting the ASCII file, group, record and unit separators."""
    return char.isspace() and char not in SEPARATOR_CONTROLS


# =============================================================================
# Lookahead and Position Tracking
# =============================================================================

class Lookahead:
    """
    One-slot lookahead over a CharacterSource, with row/column counters.

    The counters move exactly once per character pulled from the source,
    at the moment it is pulled. Reading a character that an earlier peek
    already pulled does not move them again.

    Attributes:
        row: Current row (1-indexed)
        col: Column of the most recently fetched character
        last: The most recently consumed fetch, or None before any read
    """

    def __init__(self, source: CharacterSource):
        self._source = source
        self._peeked: Optional[Fetch] = None
        self.last: Optional[Fetch] = None
        self.row = 1
        self.col = 0

    def _pull(self) -> Fetch:
        fetched = self._source.fetch()
        if fetched.is_newline:
            self.row += 1
            self.col = 0
        else:
            self.col += 1
        return fetched

    def peek(self) -> Fetch:
        """Return the next fetch without consuming it."""
        if self._peeked is None:
            self._peeked = self._pull()
        return self._peeked

    def read(self) -> Fetch:
        """Consume and return the next fetch."""
        if self._peeked is not None:
            fetched, self._peeked = self._peeked, None
        else:
            fetched = self._pull()
        self.last = fetched
        return fetched


# =============================================================================
# Scanner
# =============================================================================

class Scanner:
    """
    Tokenizes S-expression source, one token per next() call.

    The scanner makes a single forward pass over its source and cannot be
    reset; scan new input with a new Scanner. It borrows the source and
    never closes it. It is not safe to share between threads.

    Usage:
        scanner = Scanner.from_string("(a 'b)")
        token = scanner.next()
        while not token.is_terminal:
            ...
            token = scanner.next()

    Iterating a scanner yields tokens up to and including the first ERROR
    or END_OF_INPUT.

    Attributes:
        filename: Label stamped on tokens for error reporting
    """

    def __init__(self, source: CharacterSource, filename: str = "<input>"):
        """
        Initialize the scanner.

        Args:
            source: Where characters come from
            filename: Label for error messages
        """
        self.filename = filename
        self._input = Lookahead(source)
        self._start_row = 1
        self._start_col = 1

    @classmethod
    def from_string(cls, text: str, filename: str = "<input>") -> "Scanner":
        """Create a scanner over an in-memory string."""
        return cls(StringSource(text), filename)

    @classmethod
    def from_stream(
        cls,
        stream: Union[TextIO, BinaryIO],
        filename: Optional[str] = None,
        encoding: str = "utf-8",
    ) -> "Scanner":
        """
        Create a scanner over a text or binary stream.

        Args:
            stream: Open stream; binary streams are decoded with `encoding`
            filename: Label for errors (defaults to the stream's name)
            encoding: Decoding for binary streams
        """
        if filename is None:
            filename = str(getattr(stream, "name", "<stream>"))
        return cls(open_source(stream, encoding), filename)

    @property
    def row(self) -> int:
        return self._input.row

    @property
    def col(self) -> int:
        return self._input.col

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next()
            yield token
            if token.is_terminal:
                return

    def next(self) -> Token:
        """
        Scan and return the next token.

        Returns END_OF_INPUT once the source is exhausted, and again on
        every later call.
        """
        while True:
            fetched = self._input.peek()
            self._start_row = self._input.row
            self._start_col = self._input.col

            if fetched.is_end:
                self._input.read()
                return self._make_token(TokenKind.END_OF_INPUT, None, "")

            if fetched.is_read_error:
                self._input.read()
                return self._error("Rune Error", ErrorCategory.SOURCE_READ, "")

            char = fetched.char

            if char == ";":
                return self._scan_comment()

            if is_space(char):
                self._input.read()
                continue

            if char in STRUCTURAL_TOKENS:
                self._input.read()
                return self._make_token(STRUCTURAL_TOKENS[char], None, "")

            if is_letter(char):
                return self._scan_atom()

            if is_number(char) or char == "." or char == "-":
                return self._scan_number()

            self._input.read()
            return self._error(
                f"Unexpected token[{char}]",
                ErrorCategory.UNEXPECTED_CHARACTER,
                char,
            )

    # =========================================================================
    # Sub-scanners
    # =========================================================================

    def _scan_comment(self) -> Token:
        """
        Scan from ';' to the end of the line.

        The newline (or end of input) is left for the next call.
        """
        chars = []
        while True:
            fetched = self._input.peek()
            if fetched.is_end or fetched.is_newline:
                return self._make_token(TokenKind.COMMENT, None, "".join(chars))
            if fetched.is_read_error:
                return self._error(
                    "Rune Error", ErrorCategory.SOURCE_READ, "".join(chars)
                )
            chars.append(self._input.read().char)

    def _scan_atom(self) -> Token:
        """Scan an atom; the first character is known to be a letter."""
        chars = [self._input.read().char]
        while True:
            fetched = self._input.peek()
            if not fetched.is_ok:
                break
            char = fetched.char
            if not (is_letter(char) or is_digit(char) or char == "-" or char == "_"):
                break
            chars.append(self._input.read().char)

        text = "".join(chars)
        last = self._input.last.char
        if is_letter(last) or is_number(last):
            return self._make_token(TokenKind.ATOM, text, text)
        return self._error(f"Invalid Atom[{text}]", ErrorCategory.MALFORMED_ATOM, text)

    def _scan_number(self) -> Token:
        """
        Scan an integer or float literal.

        The first character is '-', '.' or a number. At most one '.' is
        taken; a second one ends the literal (and fails the terminator
        check).
        """
        first = self._input.read().char
        seen_point = first == "."
        chars = [first]

        while True:
            fetched = self._input.peek()
            if not fetched.is_ok:
                break
            char = fetched.char
            if is_number(char):
                chars.append(self._input.read().char)
            elif char == "." and not seen_point:
                seen_point = True
                chars.append(self._input.read().char)
            else:
                break

        text = "".join(chars)
        terminated = fetched.is_end or (
            fetched.is_ok and fetched.char in NUMBER_TERMINATORS
        )
        if not terminated:
            return self._error(
                f"Invalid Number[{text}]", ErrorCategory.MALFORMED_NUMBER, text
            )

        try:
            value = _parse_number(text, seen_point)
        except ValueError as e:
            return self._error(
                f"Invalid Number[{text}]: {e}", ErrorCategory.MALFORMED_NUMBER, text
            )
        return self._make_token(TokenKind.NUMBER, value, text)

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(self, kind: TokenKind, value: TokenValue, raw: str) -> Token:
        token = Token(
            kind=kind,
            value=value,
            raw=raw,
            row=self._start_row,
            col=self._start_col,
            filename=self.filename,
        )
        logger.debug(f"{self.filename}: {token}")
        return token

    def _error(self, message: str, category: ErrorCategory, raw: str) -> Token:
        return self._make_token(TokenKind.ERROR, ErrorMessage(message, category), raw)


def _parse_number(text: str, is_float: bool) -> Union[int, float]:
    """
    Parse accumulated number text.

    Only ASCII digits are accepted, even though any Unicode number may
    start a literal.

    Raises:
        ValueError: If the text is not a number or is out of range
    """
    if not text.isascii():
        raise ValueError("invalid syntax")

    if is_float:
        value = float(text)
        if math.isinf(value):
            raise ValueError("value out of range")
        return value

    value = int(text)
    if not INT_MIN <= value <= INT_MAX:
        raise ValueError("value out of range")
    return value


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(text: str, filename: str = "<input>", strict: bool = False) -> list[Token]:
    """
    Scan a whole string.

    Args:
        text: Source text
        filename: Label for error messages
        strict: Raise the first ERROR token as a ScanError instead of
            returning it

    Returns:
        Tokens up to and including the terminal ERROR or END_OF_INPUT

    Raises:
        ScanError: In strict mode, for the first ERROR token
    """
    tokens = []
    for token in Scanner.from_string(text, filename):
        if strict:
            token.raise_for_error()
        tokens.append(token)
    return tokens
