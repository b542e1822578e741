from __future__ import annotations

import math

from .textutils import WHITESPACE_RE, split_words


def count_words(text: str) -> int:
    """Return the number of whitespace-delimited tokens in text."""
    return len(split_words(text))


def count_characters(text: str, count_spaces: bool = True) -> int:
    """Return the character length of text, optionally ignoring whitespace."""
    if not text:
        return 0
    if count_spaces:
        return len(text)
    return len(WHITESPACE_RE.sub("", text))


def calculate_reading_time(text: str, words_per_minute: int = 200) -> int:
    """Estimated reading time in whole minutes, rounded up."""
    if words_per_minute <= 0:
        raise ValueError("words_per_minute must be positive.")
    return math.ceil(count_words(text) / words_per_minute)


def truncate_text(text: str, max_length: int) -> str:
    """Cut text to max_length characters and mark the cut with an ellipsis."""
    if not text or len(text) <= max_length:
        return text or ""
    return text[: max(0, max_length)] + "..."
