from __future__ import annotations

import logging
from datetime import timedelta
from typing import Dict, List

from .config import AuthorAllyConfig, TipThresholds
from .counting import calculate_reading_time, count_characters, count_words
from .models import Document, DocumentAnalytics
from .readability import ReadabilityResult, calculate_readability
from .textutils import round_half_up

logger = logging.getLogger(__name__)

READABILITY_TIP = "Consider simplifying your language for better readability."
PACE_TIP = "Try free writing exercises to increase your writing speed."
WORD_COUNT_TIP = "Set a word count goal to help build your content."
HABIT_TIP = "Regular writing sessions improve productivity over time."


def analyze_document(
    doc: Document, config: AuthorAllyConfig | None = None
) -> DocumentAnalytics:
    """Run the counters and readability scorer over a single document."""
    config = config or AuthorAllyConfig()
    word_count = count_words(doc.text)
    readability = calculate_readability(doc.text)
    analytics = DocumentAnalytics(
        doc_id=doc.doc_id,
        word_count=word_count,
        character_count=count_characters(doc.text, count_spaces=config.count_spaces),
        character_count_no_spaces=count_characters(doc.text, count_spaces=False),
        readability=readability,
        reading_time_minutes=calculate_reading_time(
            doc.text, config.words_per_minute
        ),
        tips=writing_tips(readability, word_count, thresholds=config.tips),
    )
    logger.debug(
        "Analyzed doc=%s words=%d readability=%.1f (%s)",
        doc.doc_id,
        word_count,
        readability.score,
        readability.level.value,
    )
    return analytics


def analyze_corpus(
    documents: List[Document], config: AuthorAllyConfig | None = None
) -> Dict[str, DocumentAnalytics]:
    """Analyze all documents and return the per-document results."""
    results: Dict[str, DocumentAnalytics] = {}
    for document in documents:
        results[document.doc_id] = analyze_document(document, config)
    return results


def writing_tips(
    readability: ReadabilityResult,
    word_count: int,
    words_per_minute: int | None = None,
    thresholds: TipThresholds | None = None,
) -> list[str]:
    """Suggestions shown beside the analytics panel, most specific first."""
    thresholds = thresholds or TipThresholds()
    tips: list[str] = []
    if readability.is_available and readability.score < thresholds.readability:
        tips.append(READABILITY_TIP)
    if words_per_minute is not None and words_per_minute < thresholds.writing_pace:
        tips.append(PACE_TIP)
    if word_count < thresholds.word_count:
        tips.append(WORD_COUNT_TIP)
    tips.append(HABIT_TIP)
    return tips


def writing_pace(words_added: int, elapsed: timedelta) -> int:
    """Words per minute written over the elapsed span."""
    minutes = elapsed.total_seconds() / 60
    if words_added <= 0 or minutes <= 0:
        return 0
    return int(round_half_up(words_added / minutes))
