from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path


class FakeClock:
    """Deterministic clock that only moves when advanced."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 2, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def write_sample_corpus(root: Path) -> Path:
    """Create a small corpus with .txt and .md manuscripts plus an ignored file."""
    corpus_dir = root / "corpus"
    (corpus_dir / "drafts").mkdir(parents=True)
    (corpus_dir / "chapter1.txt").write_text(
        "The cat sat. The dog ran.",
        encoding="utf-8",
    )
    (corpus_dir / "drafts" / "notes.md").write_text(
        "Comprehensive institutional evaluation necessitates considerable "
        "organizational deliberation.",
        encoding="utf-8",
    )
    (corpus_dir / "outline.csv").write_text("a,b\n1,2\n", encoding="utf-8")
    return corpus_dir
