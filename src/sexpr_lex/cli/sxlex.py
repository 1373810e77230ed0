"""
sxlex - S-Expression Token Dump
===============================

This module implements the command-line interface for the scanner. It
reads one or more source files (or standard input) and prints the token
stream, one token per line.

Usage Examples
--------------
Dump a file:
    $ sxlex program.lisp

Read from standard input:
    $ echo "(a 'b 1.5)" | sxlex

Stop with a non-zero exit code on the first scan error:
    $ sxlex --strict program.lisp

Diagnostic token format:
    $ sxlex --format repr program.lisp

Output Format
-------------
Plain format prints `row:col KIND value raw`, with value and raw shown as
Python literals:

    1:1 OPEN_PAREN None ''
    1:2 ATOM 'a' 'a'

Copyright (c) 2026 sexpr-lex Contributors
"""

import codecs
import logging
from typing import BinaryIO, Iterator, Optional

import click

from sexpr_lex import __version__
from sexpr_lex.cli.errors import handle_cli_exception
from sexpr_lex.config import ScannerConfig, get_config
from sexpr_lex.scanner import Scanner
from sexpr_lex.tokens import Token, TokenKind

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def format_token(token: Token, style: str = "plain") -> str:
    """
    Render a token for output.

    Args:
        token: The token to render
        style: "plain" for `row:col KIND value raw`, "repr" for str(token)
    """
    if style == "repr":
        return str(token)
    value = str(token.value) if token.is_error else repr(token.value)
    return f"{token.row}:{token.col} {token.kind.name} {value} {token.raw!r}"


def scan_stream(stream: BinaryIO, config: ScannerConfig, style: str) -> Iterator[str]:
    """
    Scan one input, yielding each token rendered as it is scanned.

    Raises:
        ScanError: In strict mode, for the first ERROR token, after the
            tokens before it have been yielded
    """
    scanner = Scanner.from_stream(stream, encoding=config.encoding)
    count = 0
    for token in scanner:
        count += 1
        if config.strict:
            token.raise_for_error()
        if config.skip_comments and token.kind is TokenKind.COMMENT:
            continue
        yield format_token(token, style)
    logger.debug(f"{scanner.filename}: {count} tokens")


def _validate_encoding(ctx, param, value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        codecs.lookup(value)
    except LookupError:
        raise click.BadParameter(f"unknown encoding '{value}'")
    return value


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument("input_files", nargs=-1, type=click.File("rb"))
@click.option(
    "-f", "--format", "style",
    type=click.Choice(["plain", "repr"]),
    default="plain",
    help="Token output format. Default: plain",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Exit with an error on the first scan error (default: from SXLEX_STRICT, else off)",
)
@click.option(
    "--skip-comments/--keep-comments",
    default=None,
    help="Omit comment tokens from the output",
)
@click.option(
    "-e", "--encoding",
    default=None,
    callback=_validate_encoding,
    help="Input encoding (default: from SXLEX_ENCODING, else utf-8)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging)",
)
@click.version_option(version=__version__, prog_name="sxlex")
def main(
    input_files: tuple[BinaryIO, ...],
    style: str,
    strict: Optional[bool],
    skip_comments: Optional[bool],
    encoding: Optional[str],
    verbose: bool,
) -> None:
    """
    Print the token stream of S-expression source.

    INPUT_FILES are the files to scan; with none (or "-"), standard input
    is read.

    \b
    Examples:
        sxlex program.lisp            # Dump tokens
        sxlex --strict program.lisp   # Fail on the first scan error
        cat program.lisp | sxlex      # Read standard input
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    config = get_config().with_overrides(
        strict=strict,
        skip_comments=skip_comments,
        encoding=encoding,
    )

    if not input_files:
        input_files = (click.get_binary_stream("stdin"),)

    try:
        for stream in input_files:
            if len(input_files) > 1:
                click.echo(f"== {getattr(stream, 'name', '<stream>')}")
            for line in scan_stream(stream, config, style):
                click.echo(line)
    except Exception as e:
        handle_cli_exception(e, verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
