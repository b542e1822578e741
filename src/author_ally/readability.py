from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .syllables import count_syllables
from .textutils import round_half_up, split_words

SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

MIN_SCORE = 0.0
MAX_SCORE = 100.0


class ReadabilityLevel(str, Enum):
    """Qualitative band for a Flesch reading-ease score."""

    VERY_EASY = "Very Easy"
    EASY = "Easy"
    FAIRLY_EASY = "Fairly Easy"
    STANDARD = "Standard"
    FAIRLY_DIFFICULT = "Fairly Difficult"
    DIFFICULT = "Difficult"
    VERY_DIFFICULT = "Very Difficult"
    NOT_AVAILABLE = "N/A"


# Checked in order; the first threshold the score reaches wins.
LEVEL_THRESHOLDS: tuple[tuple[float, ReadabilityLevel], ...] = (
    (90.0, ReadabilityLevel.VERY_EASY),
    (80.0, ReadabilityLevel.EASY),
    (70.0, ReadabilityLevel.FAIRLY_EASY),
    (60.0, ReadabilityLevel.STANDARD),
    (50.0, ReadabilityLevel.FAIRLY_DIFFICULT),
    (30.0, ReadabilityLevel.DIFFICULT),
)


@dataclass(frozen=True, slots=True)
class ReadabilityResult:
    """Reading-ease score (0-100, one decimal) and its band."""

    score: float
    level: ReadabilityLevel
    word_count: int = 0
    sentence_count: int = 0
    syllable_count: int = 0

    @property
    def is_available(self) -> bool:
        return self.level is not ReadabilityLevel.NOT_AVAILABLE


def split_sentences(text: str) -> list[str]:
    """Split text on runs of sentence terminators, dropping blank fragments."""
    if not text:
        return []
    return [s for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]


def readability_level(score: float) -> ReadabilityLevel:
    """Map a clamped reading-ease score onto its qualitative band."""
    for threshold, level in LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return ReadabilityLevel.VERY_DIFFICULT


def flesch_reading_ease(words: int, sentences: int, syllables: int) -> float:
    """Raw Flesch reading-ease formula; callers guard against zero counts."""
    return 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)


def calculate_readability(text: str) -> ReadabilityResult:
    """
    Score text with the Flesch reading-ease formula.

    Text without words or without a sentence yields ``score=0`` and
    ``ReadabilityLevel.NOT_AVAILABLE`` rather than an error. The band is
    picked from the clamped score before it is rounded for display.
    """
    sentence_count = len(split_sentences(text))
    word_count = len(split_words(text))
    if word_count == 0 or sentence_count == 0:
        return ReadabilityResult(
            score=0.0,
            level=ReadabilityLevel.NOT_AVAILABLE,
            word_count=word_count,
            sentence_count=sentence_count,
        )

    syllable_count = count_syllables(text)
    raw = flesch_reading_ease(word_count, sentence_count, syllable_count)
    clamped = min(max(raw, MIN_SCORE), MAX_SCORE)
    return ReadabilityResult(
        score=round_half_up(clamped, 1),
        level=readability_level(clamped),
        word_count=word_count,
        sentence_count=sentence_count,
        syllable_count=syllable_count,
    )
