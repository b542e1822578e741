from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List

WHITESPACE_RE = re.compile(r"\s+")
NON_ALPHA_RE = re.compile(r"[^a-z]+")


def split_words(value: str) -> List[str]:
    """Split text on whitespace runs, dropping empty tokens."""
    if not value:
        return []
    return value.split()


def iter_alpha_words(value: str) -> Iterable[str]:
    """Yield lower-cased runs of ASCII letters; everything else separates words."""
    if not value:
        return
    for word in NON_ALPHA_RE.sub(" ", value.lower()).split():
        yield word


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero, unlike the built-in banker's rounding."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
