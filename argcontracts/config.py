"""
Environment-driven settings for argument contracts.

Values are read from os.environ at the moment they are needed (not at import),
so tests and long-running processes can change them without reloading.

    ARGCONTRACTS_FAILURE_MODE       return | raise   (default: return)
    ARGCONTRACTS_FAILURE_LOG_LEVEL  DEBUG | INFO | WARNING | ...  (default: DEBUG)
    ARGCONTRACTS_OPTIONAL_MARKER    single character  (default: ?)
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


DEFAULT_OPTIONAL_MARKER = '?'


def _get_failure_mode_name() -> str:
    """Get failure mode name from environment."""
    mode = os.environ.get('ARGCONTRACTS_FAILURE_MODE', 'return').strip().lower()
    return 'raise' if mode == 'raise' else 'return'


def _get_failure_log_level() -> int:
    """Resolve the log level used when a wrapper reports a failure."""
    raw = os.environ.get('ARGCONTRACTS_FAILURE_LOG_LEVEL', 'DEBUG').strip().upper()
    level = logging.getLevelName(raw)
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else logging.DEBUG


def _get_optional_marker() -> str:
    marker = os.environ.get('ARGCONTRACTS_OPTIONAL_MARKER', DEFAULT_OPTIONAL_MARKER)
    if len(marker) != 1:
        return DEFAULT_OPTIONAL_MARKER
    return marker


class Config:
    """Read-through accessors for argcontracts settings."""

    @staticmethod
    def failure_mode_name() -> str:
        return _get_failure_mode_name()

    @staticmethod
    def failure_log_level() -> int:
        return _get_failure_log_level()

    @staticmethod
    def optional_marker() -> str:
        return _get_optional_marker()
