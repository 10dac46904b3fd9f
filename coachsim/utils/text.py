"""Utilities for working with manager message text."""
from __future__ import annotations

import re
from typing import Any


_DISALLOWED_CHARS_RE = re.compile(r"[^a-z0-9\s?'\"]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_message(value: Any) -> str:
    """Return a canonical lowercase form of a manager message for keyword matching.

    Punctuation is replaced with spaces except question marks, apostrophes and
    double quotes, so contractions such as ``i'll`` and ``let's`` survive.
    Non-string inputs return an empty string to keep scoring total.
    """

    if not isinstance(value, str):
        return ""

    text = value.strip().lower()
    text = _DISALLOWED_CHARS_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def count_question_marks(value: Any) -> int:
    """Return the number of literal ``?`` characters in ``value``."""

    if not isinstance(value, str):
        return 0
    return value.count("?")


__all__ = ["count_question_marks", "normalize_message"]
