"""
sexpr-lex Configuration
=======================

Scanner front-end settings. Configuration can come from:
- Default values (defined here)
- Environment variables
- Explicit overrides (command-line options)

None of these settings change how characters are classified or how tokens
are formed; they control decoding of byte input and how results are
reported.

Copyright (c) 2026 sexpr-lex Contributors
"""

from dataclasses import dataclass, replace
from typing import Optional
import codecs
import os


_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _parse_bool(value: str) -> Optional[bool]:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


@dataclass
class ScannerConfig:
    """
    Settings for scanning files and streams.

    Attributes:
        encoding: Codec for decoding byte input (default: "utf-8")
        strict: Treat the first ERROR token as a failure (default: False)
        skip_comments: Leave COMMENT tokens out of reports (default: False)
    """

    encoding: str = "utf-8"
    strict: bool = False
    skip_comments: bool = False

    @classmethod
    def from_env(cls) -> "ScannerConfig":
        """
        Create ScannerConfig from environment variables.

        Environment variables (all optional):
            SXLEX_ENCODING: Codec for byte input (must be a known codec)
            SXLEX_STRICT: "1"/"true"/"yes"/"on" or "0"/"false"/"no"/"off"
            SXLEX_SKIP_COMMENTS: same boolean forms

        Unrecognised values are ignored.

        Returns:
            ScannerConfig with values from environment variables
        """
        config = cls()

        if encoding := os.environ.get("SXLEX_ENCODING"):
            try:
                codecs.lookup(encoding)
                config.encoding = encoding
            except LookupError:
                pass  # Ignore unknown codecs

        if strict := os.environ.get("SXLEX_STRICT"):
            parsed = _parse_bool(strict)
            if parsed is not None:
                config.strict = parsed

        if skip := os.environ.get("SXLEX_SKIP_COMMENTS"):
            parsed = _parse_bool(skip)
            if parsed is not None:
                config.skip_comments = parsed

        return config

    def with_overrides(self, **overrides) -> "ScannerConfig":
        """
        Return a copy with the given fields replaced.

        Overrides whose value is None are ignored, so unset command-line
        options fall through to the existing value.
        """
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


# =============================================================================
# Global Configuration Instance
# =============================================================================

_config: Optional[ScannerConfig] = None


def get_config() -> ScannerConfig:
    """
    Get the process-wide configuration.

    Creates from environment variables on first access.
    """
    global _config
    if _config is None:
        _config = ScannerConfig.from_env()
    return _config


def set_config(config: ScannerConfig) -> None:
    """Replace the process-wide configuration."""
    global _config
    _config = config


def reset_config() -> None:
    """Forget the process-wide configuration; the next get_config() rereads the environment."""
    global _config
    _config = None
