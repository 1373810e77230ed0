"""
Character Sources
=================

A character source hands the scanner one Unicode code point per fetch().
Every fetch produces a tagged outcome rather than a sentinel character:

| Status     | Meaning                                   |
|------------|-------------------------------------------|
| OK         | `char` holds the next code point          |
| END        | the source is exhausted                   |
| READ_ERROR | the source failed; `reason` says why      |

Sources are strictly sequential and single-pass. They offer no pushback;
the scanner keeps its own lookahead slot. A source that has failed keeps
reporting the same failure on every later fetch.

Sources borrow the underlying stream. Closing it stays with the caller.

Example
-------
>>> from sexpr_lex.source import StringSource
>>> src = StringSource("(a)")
>>> [src.fetch().char for _ in range(3)]
['(', 'a', ')']
>>> src.fetch().status
<FetchStatus.END: 2>
"""

import codecs
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import BinaryIO, Optional, Protocol, TextIO, Union

logger = logging.getLogger(__name__)


# =============================================================================
# Fetch Outcome
# =============================================================================

class FetchStatus(Enum):
    """Outcome tag for a single fetch from a character source."""

    OK = auto()
    END = auto()
    READ_ERROR = auto()


@dataclass(frozen=True)
class Fetch:
    """
    Result of one CharacterSource.fetch() call.

    Attributes:
        status: Which outcome this is
        char: The code point (only for OK)
        reason: Failure description (only for READ_ERROR)
    """
    status: FetchStatus
    char: str = ""
    reason: Optional[str] = None

    @classmethod
    def ok(cls, char: str) -> "Fetch":
        return cls(FetchStatus.OK, char)

    @classmethod
    def read_error(cls, reason: str) -> "Fetch":
        return cls(FetchStatus.READ_ERROR, reason=reason)

    @property
    def is_ok(self) -> bool:
        return self.status is FetchStatus.OK

    @property
    def is_end(self) -> bool:
        return self.status is FetchStatus.END

    @property
    def is_read_error(self) -> bool:
        return self.status is FetchStatus.READ_ERROR

    @property
    def is_newline(self) -> bool:
        return self.status is FetchStatus.OK and self.char == "\n"


END_OF_STREAM = Fetch(FetchStatus.END)


class CharacterSource(Protocol):
    """
    Protocol for anything the scanner can pull characters from.
    """
    def fetch(self) -> Fetch:
        """Return the next code point, END, or READ_ERROR."""
        ...


# =============================================================================
# Concrete Sources
# =============================================================================

class StringSource:
    """Character source over an in-memory string."""

    def __init__(self, text: str):
        self._text = text
        self._pos = 0

    def fetch(self) -> Fetch:
        if self._pos >= len(self._text):
            return END_OF_STREAM
        char = self._text[self._pos]
        self._pos += 1
        return Fetch.ok(char)


class TextStreamSource:
    """
    Character source over a text stream (anything with read(1) -> str).

    OSError and UnicodeDecodeError raised by the stream become READ_ERROR.
    """

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._failure: Optional[Fetch] = None

    def fetch(self) -> Fetch:
        if self._failure is not None:
            return self._failure
        try:
            char = self._stream.read(1)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Error reading character: {e}")
            self._failure = Fetch.read_error(str(e))
            return self._failure
        if not char:
            return END_OF_STREAM
        return Fetch.ok(char)


class ByteStreamSource:
    """
    Character source over a binary stream, decoded incrementally.

    Bytes that do not decode under `encoding`, a multi-byte sequence cut
    off by the end of the stream, and OSError from the stream all become
    READ_ERROR.
    """

    def __init__(self, stream: BinaryIO, encoding: str = "utf-8"):
        self._stream = stream
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="strict")
        self._pending = ""
        self._failure: Optional[Fetch] = None
        self._exhausted = False

    def fetch(self) -> Fetch:
        if self._failure is not None:
            return self._failure

        # Some codecs need several bytes per character, and a few emit
        # more than one character per byte.
        while not self._pending:
            if self._exhausted:
                return END_OF_STREAM
            try:
                data = self._stream.read(1)
                if data:
                    self._pending = self._decoder.decode(data)
                else:
                    self._exhausted = True
                    self._pending = self._decoder.decode(b"", final=True)
            except (OSError, UnicodeDecodeError) as e:
                return self._fail(e)

        char, self._pending = self._pending[0], self._pending[1:]
        return Fetch.ok(char)

    def _fail(self, error: Exception) -> Fetch:
        logger.debug(f"Error reading character: {error}")
        self._failure = Fetch.read_error(str(error))
        return self._failure


def open_source(
    obj: Union[str, TextIO, BinaryIO, CharacterSource],
    encoding: str = "utf-8",
) -> CharacterSource:
    """
    Wrap a string or stream in the matching character source.

    Args:
        obj: A str, a text stream, a binary stream, or an existing source
        encoding: Decoding for binary streams

    Returns:
        A CharacterSource reading from obj

    Raises:
        TypeError: If obj is none of the accepted kinds
    """
    if isinstance(obj, str):
        return StringSource(obj)
    if hasattr(obj, "fetch"):
        return obj
    if hasattr(obj, "read"):
        # read(0) consumes nothing but reveals whether the stream is binary
        if isinstance(obj.read(0), bytes):
            return ByteStreamSource(obj, encoding)
        return TextStreamSource(obj)
    raise TypeError(f"cannot read characters from {type(obj).__name__}")
