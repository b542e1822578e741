"""
author_ally package exports the text analytics helpers for library consumers.
"""

from __future__ import annotations

from .analysis import analyze_corpus, analyze_document
from .config import AuthorAllyConfig, config_from_dict, config_from_yaml, load_config
from .counting import (
    calculate_reading_time,
    count_characters,
    count_words,
    truncate_text,
)
from .readability import ReadabilityLevel, ReadabilityResult, calculate_readability
from .syllables import count_syllables

__all__ = [
    "AuthorAllyConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "count_words",
    "count_characters",
    "calculate_reading_time",
    "truncate_text",
    "count_syllables",
    "calculate_readability",
    "ReadabilityLevel",
    "ReadabilityResult",
    "analyze_document",
    "analyze_corpus",
]

__version__ = "0.1.0"
