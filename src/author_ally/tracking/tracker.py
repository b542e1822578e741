from __future__ import annotations

import logging
import uuid
from dataclasses import fields, replace
from datetime import datetime, timezone
from typing import Any, Callable, List

from ..models import (
    GoalType,
    PendingSession,
    WritingGoal,
    WritingSession,
    WritingStats,
)
from .auth import AuthProvider, require_user
from .stats import apply_session_to_goals, compute_writing_stats
from .stores import WritingStore

logger = logging.getLogger(__name__)

# Fields callers may not overwrite through update_goal.
PROTECTED_GOAL_FIELDS = frozenset({"goal_id", "streak"})


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WritingTracker:
    """Records writing sessions and keeps the signed-in user's goals current."""

    def __init__(
        self,
        store: WritingStore,
        auth: AuthProvider,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._auth = auth
        self._clock = clock

    def start_session(self, document_id: str, initial_words: int) -> PendingSession:
        """Open a session; any session already open for the user is replaced."""
        user_id = require_user(self._auth)
        pending = PendingSession(
            document_id=document_id,
            start_time=self._clock(),
            initial_words=max(0, initial_words),
        )
        if self._store.load_pending(user_id) is not None:
            logger.info("Replacing open session for user=%s", user_id)
        self._store.save_pending(user_id, pending)
        return pending

    def end_session(self, final_words: int) -> WritingSession | None:
        """
        Close the open session and credit its words to matching goals.

        Goals are saved first, then the session history, and the open session
        is cleared last. A failed goal save leaves everything as it was, so the
        session can be ended again. If only clearing the open session failed,
        ending it again returns the already recorded session without crediting
        goals a second time.
        """
        user_id = require_user(self._auth)
        pending = self._store.load_pending(user_id)
        if pending is None:
            return None

        sessions = self._store.load_sessions(user_id)
        for recorded in sessions:
            if (
                recorded.document_id == pending.document_id
                and recorded.start_time == pending.start_time
            ):
                self._store.save_pending(user_id, None)
                return recorded

        session = WritingSession(
            document_id=pending.document_id,
            start_time=pending.start_time,
            end_time=self._clock(),
            words_written=max(0, final_words - pending.initial_words),
        )
        goals, changed = apply_session_to_goals(self._store.load_goals(user_id), session)
        if changed:
            self._store.save_goals(user_id, goals)
        sessions.append(session)
        self._store.save_sessions(user_id, sessions)
        self._store.save_pending(user_id, None)
        logger.info(
            "Ended session user=%s doc=%s words=%d",
            user_id,
            session.document_id,
            session.words_written,
        )
        return session

    def sessions(self) -> List[WritingSession]:
        return self._store.load_sessions(require_user(self._auth))

    def goals(self) -> List[WritingGoal]:
        return self._store.load_goals(require_user(self._auth))

    def create_goal(
        self,
        goal_type: GoalType | str,
        target: int,
        document_id: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> WritingGoal:
        user_id = require_user(self._auth)
        goal_type = GoalType(goal_type)
        if target < 0:
            raise ValueError("Goal target must be a non-negative word count.")
        if goal_type is GoalType.PROJECT and not document_id:
            raise ValueError("Project goals require a document_id.")

        goal = WritingGoal(
            goal_id=f"goal_{uuid.uuid4().hex[:12]}",
            goal_type=goal_type,
            target=target,
            document_id=document_id,
            start_date=start_date or self._clock(),
            end_date=end_date,
        )
        goals = self._store.load_goals(user_id)
        goals.append(goal)
        self._store.save_goals(user_id, goals)
        logger.info("Created %s goal %s for user=%s", goal_type.value, goal.goal_id, user_id)
        return goal

    def update_goal(self, goal_id: str, **changes: Any) -> bool:
        """Apply changes to a goal; completing a goal extends its streak."""
        user_id = require_user(self._auth)
        allowed = {f.name for f in fields(WritingGoal)} - PROTECTED_GOAL_FIELDS
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Unknown goal fields: {', '.join(sorted(unknown))}")

        goals = self._store.load_goals(user_id)
        for idx, goal in enumerate(goals):
            if goal.goal_id != goal_id:
                continue
            if "goal_type" in changes:
                changes["goal_type"] = GoalType(changes["goal_type"])
            updated = replace(goal, **changes)
            if updated.completed and not goal.completed:
                updated.streak += 1
            goals[idx] = updated
            self._store.save_goals(user_id, goals)
            return True
        return False

    def delete_goal(self, goal_id: str) -> bool:
        user_id = require_user(self._auth)
        goals = self._store.load_goals(user_id)
        remaining = [g for g in goals if g.goal_id != goal_id]
        if len(remaining) == len(goals):
            return False
        self._store.save_goals(user_id, remaining)
        return True

    def stats(self) -> WritingStats:
        sessions = self.sessions()
        return compute_writing_stats(sessions, self._clock().date())
