"""
Vowel-group syllable heuristic used by the readability scorer.

The estimate counts runs of one or two vowels as syllable nuclei and applies
two English suffix corrections. It is not dictionary backed and will miscount
irregular words, which is acceptable for a plain-text readability display.
"""

from __future__ import annotations

import re

from .textutils import iter_alpha_words

VOWEL_GROUP_RE = re.compile(r"[aeiouy]{1,2}")
VOWELS = frozenset("aeiouy")


def estimate_word_syllables(word: str) -> int:
    """
    Estimate syllables for a single lower-case alphabetic word.

    A trailing silent ``e`` is dropped on words longer than three letters and
    a consonant + ``le`` ending adds the syllable the silent-e rule removed.
    Every word counts as at least one syllable.
    """
    count = len(VOWEL_GROUP_RE.findall(word))
    if len(word) > 3 and word.endswith("e"):
        count -= 1
    if len(word) > 2 and word.endswith("le") and word[-3] not in VOWELS:
        count += 1
    return max(1, count)


def count_syllables(text: str) -> int:
    """Return the estimated syllable count for every word in text."""
    return sum(estimate_word_syllables(word) for word in iter_alpha_words(text))
