from __future__ import annotations

import math
from dataclasses import replace
from datetime import date, timedelta
from typing import Dict, List, Tuple

from ..models import GoalType, WritingGoal, WritingSession, WritingStats
from ..textutils import round_half_up

WEEKLY_WINDOW_DAYS = 7

WEEKDAYS = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def time_of_day(hour: int) -> str:
    """Bucket an hour of the day: morning 5-12, afternoon 12-17, evening 17-22."""
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 22:
        return "evening"
    return "night"


def weekday_name(value: date) -> str:
    # date.weekday() is Monday=0; the buckets start on Sunday.
    return WEEKDAYS[(value.weekday() + 1) % 7]


def goal_progress(goal: WritingGoal) -> int:
    """Percentage of the goal reached, capped at 100."""
    if goal.target <= 0:
        return 0
    return min(int(round_half_up(goal.current / goal.target * 100)), 100)


def _session_matches_goal(goal: WritingGoal, session: WritingSession) -> bool:
    if goal.goal_type is GoalType.PROJECT:
        return goal.document_id is not None and goal.document_id == session.document_id
    if goal.goal_type is GoalType.DAILY:
        return goal.start_date.date() == session.end_time.date()
    if goal.goal_type is GoalType.WEEKLY:
        diff = abs((session.end_time - goal.start_date).total_seconds())
        return math.ceil(diff / timedelta(days=1).total_seconds()) <= WEEKLY_WINDOW_DAYS
    return False


def apply_session_to_goals(
    goals: List[WritingGoal], session: WritingSession
) -> Tuple[List[WritingGoal], bool]:
    """Credit a completed session to every goal it counts towards."""
    updated: List[WritingGoal] = []
    changed = False
    for goal in goals:
        if _session_matches_goal(goal, session):
            current = goal.current + session.words_written
            updated.append(
                replace(goal, current=current, completed=current >= goal.target)
            )
            changed = True
        else:
            updated.append(goal)
    return updated, changed


def _most_productive(counts: Dict[str, int]) -> str:
    best_label, best_count = "unknown", 0
    for label, count in counts.items():
        if count > best_count:
            best_label, best_count = label, count
    return best_label


def calculate_current_streak(sessions: List[WritingSession], today: date) -> int:
    """Count consecutive writing days ending today; 0 if nothing ended today."""
    days = {session.end_time.date() for session in sessions}
    if today not in days:
        return 0
    streak = 1
    cursor = today - timedelta(days=1)
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def compute_writing_stats(sessions: List[WritingSession], today: date) -> WritingStats:
    """Aggregate a user's sessions into the dashboard statistics."""
    if not sessions:
        return WritingStats()

    total_time = sum((s.duration.total_seconds() for s in sessions), 0.0)
    total_words = sum(s.words_written for s in sessions)

    # Only sessions that produced words count toward the pace.
    writing_minutes = sum(
        s.duration.total_seconds() / 60 for s in sessions if s.words_written > 0
    )
    average_wpm = (
        int(round_half_up(total_words / writing_minutes)) if writing_minutes > 0 else 0
    )

    time_counts: Dict[str, int] = {
        "morning": 0,
        "afternoon": 0,
        "evening": 0,
        "night": 0,
    }
    day_counts: Dict[str, int] = {day: 0 for day in WEEKDAYS}
    for session in sessions:
        time_counts[time_of_day(session.start_time.hour)] += session.words_written
        day_counts[weekday_name(session.start_time.date())] += session.words_written

    return WritingStats(
        total_sessions=len(sessions),
        total_time_seconds=total_time,
        total_words_written=total_words,
        average_words_per_minute=average_wpm,
        most_productive_time_of_day=_most_productive(time_counts),
        most_productive_day=_most_productive(day_counts),
        longest_session_seconds=max(s.duration.total_seconds() for s in sessions),
        current_streak=calculate_current_streak(sessions, today),
    )
