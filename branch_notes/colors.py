#!/usr/bin/env python3
"""
Terminal color utilities for the git-branch-notes CLI.

Respects NO_COLOR, FORCE_COLOR, and TTY detection of the stream the text is
written to. Note text and branch listings printed by `show` are never
colored, so the output stays plain Markdown when redirected into an email or
a file.

Usage:
    from branch_notes.colors import success, error

    print(success("Saved notes for feature/auth", stream=out), file=out)
    print(error("Error: Not in a git repository", stream=sys.stderr), file=sys.stderr)

Environment Variables:
    NO_COLOR=1      Disable all colors (https://no-color.org/)
    FORCE_COLOR=1   Force colors even in non-TTY
    TERM=dumb       Disable colors for dumb terminals
"""
import os
import sys
from typing import Optional, TextIO


class Colors:
    """ANSI escape code constants."""

    RESET = '\033[0m'

    GRAY = '\033[90m'
    BRIGHT_RED = '\033[91m'
    BRIGHT_GREEN = '\033[92m'
    BRIGHT_YELLOW = '\033[93m'


def _supports_color(stream: Optional[TextIO] = None) -> bool:
    """
    Check if a stream supports colors.

    Checks in order:
    1. NO_COLOR env var - disables colors
    2. FORCE_COLOR env var - forces colors on
    3. stream.isatty() - must be a TTY (stdout if no stream given)
    4. TERM != 'dumb'

    Returns:
        True if colors should be enabled
    """
    if os.environ.get('NO_COLOR'):
        return False

    if os.environ.get('FORCE_COLOR'):
        return True

    stream = stream or sys.stdout
    if not hasattr(stream, 'isatty') or not stream.isatty():
        return False

    if os.environ.get('TERM', '') == 'dumb':
        return False

    return True


# Forced on/off (for testing); None detects per stream
_color_enabled = None


def colors_enabled(stream: Optional[TextIO] = None) -> bool:
    """Check if colors apply to text written to stream."""
    if _color_enabled is not None:
        return _color_enabled
    return _supports_color(stream)


def _wrap(text: str, color: str, stream: Optional[TextIO]) -> str:
    if not colors_enabled(stream):
        return text
    return f"{color}{text}{Colors.RESET}"


def success(text: str, stream: Optional[TextIO] = None) -> str:
    """Green text for confirmations."""
    return _wrap(text, Colors.BRIGHT_GREEN, stream)


def error(text: str, stream: Optional[TextIO] = None) -> str:
    """Red text for error messages."""
    return _wrap(text, Colors.BRIGHT_RED, stream)


def warning(text: str, stream: Optional[TextIO] = None) -> str:
    """Yellow text for warnings."""
    return _wrap(text, Colors.BRIGHT_YELLOW, stream)


def dim(text: str, stream: Optional[TextIO] = None) -> str:
    """Gray text for secondary information."""
    return _wrap(text, Colors.GRAY, stream)
