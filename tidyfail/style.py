"""Terminal emphasis for failure messages.

The sequences are fixed: 256-color foreground index 1 (red), bold, then a
full reset. No terminal capability detection is done.
"""

from __future__ import annotations

EMPHASIS_PREFIX = "\x1b[38;5;1m\x1b[1m"
RESET_SUFFIX = "\x1b[0m"


def emphasize(text: str) -> str:
    return f"{EMPHASIS_PREFIX}{text}{RESET_SUFFIX}"


def strip_emphasis(text: str) -> str:
    """Remove one layer of emphasis added by `emphasize`, if present."""

    if text.startswith(EMPHASIS_PREFIX) and text.endswith(RESET_SUFFIX):
        return text[len(EMPHASIS_PREFIX) : len(text) - len(RESET_SUFFIX)]
    return text
