from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from .readability import ReadabilityResult


@dataclass(slots=True)
class Document:
    """Represents an input document."""

    doc_id: str
    text: str


@dataclass(slots=True)
class DocumentAnalytics:
    """Counts, readability and suggestions computed for one document."""

    doc_id: str
    word_count: int
    character_count: int
    character_count_no_spaces: int
    readability: ReadabilityResult
    reading_time_minutes: int
    tips: list[str] = field(default_factory=list)


@dataclass(slots=True)
class PendingSession:
    """A writing session that has been started but not yet ended."""

    document_id: str
    start_time: datetime
    initial_words: int


@dataclass(slots=True)
class WritingSession:
    """A completed span of writing on one document."""

    document_id: str
    start_time: datetime
    end_time: datetime
    words_written: int

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time


class GoalType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    PROJECT = "project"


@dataclass(slots=True)
class WritingGoal:
    """A word-count target over a day, a week or a single project."""

    goal_id: str
    goal_type: GoalType
    target: int
    start_date: datetime
    current: int = 0
    document_id: str | None = None
    end_date: datetime | None = None
    completed: bool = False
    streak: int = 0


@dataclass(slots=True)
class WritingStats:
    """Aggregate statistics over a user's writing sessions."""

    total_sessions: int = 0
    total_time_seconds: float = 0.0
    total_words_written: int = 0
    average_words_per_minute: int = 0
    most_productive_time_of_day: str = "unknown"
    most_productive_day: str = "unknown"
    longest_session_seconds: float = 0.0
    current_streak: int = 0
