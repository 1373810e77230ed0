"""
sexpr-lex Command-Line Interface
================================

This package provides the command-line front end for the scanner:

- **sxlex**: dump the token stream of S-expression files

The tool is a Click-based application with consistent error reporting
and exit codes (see cli.errors).
"""

__all__ = ["sxlex"]
