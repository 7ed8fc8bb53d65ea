"""Stylesheet pre-pass: drops comments and line breaks before rule splitting."""

from __future__ import annotations

import re

__all__ = ["normalize"]

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)

# Line breaks and other non-space whitespace become plain spaces.
_LINE_BREAK_RE = re.compile(r"[\r\n\t\f]+")


def normalize(stylesheet: str) -> str:
    """Return *stylesheet* without ``/* ... */`` comments, on a single line, stripped."""
    without_comments = _COMMENT_RE.sub("", stylesheet)
    return _LINE_BREAK_RE.sub(" ", without_comments).strip()
