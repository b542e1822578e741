from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, List, TypeVar
from urllib.parse import quote

from ..models import GoalType, PendingSession, WritingGoal, WritingSession

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from ..config import AuthorAllyConfig

LOGGER = logging.getLogger(__name__)

SESSIONS_FILE = "sessions.json"
GOALS_FILE = "goals.json"
PENDING_FILE = "current_session.json"

T = TypeVar("T")

# Record fields that are missing or of the wrong type raise one of these.
MALFORMED_RECORD_ERRORS = (AttributeError, KeyError, TypeError, ValueError)


class StoreError(RuntimeError):
    """Raised when writing data cannot be persisted."""


class WritingStore(ABC):
    """Per-user persistence for sessions, goals and the open session."""

    @abstractmethod
    def load_sessions(self, user_id: str) -> List[WritingSession]:
        raise NotImplementedError

    @abstractmethod
    def save_sessions(self, user_id: str, sessions: List[WritingSession]) -> None:
        raise NotImplementedError

    @abstractmethod
    def load_goals(self, user_id: str) -> List[WritingGoal]:
        raise NotImplementedError

    @abstractmethod
    def save_goals(self, user_id: str, goals: List[WritingGoal]) -> None:
        raise NotImplementedError

    @abstractmethod
    def load_pending(self, user_id: str) -> PendingSession | None:
        raise NotImplementedError

    @abstractmethod
    def save_pending(self, user_id: str, pending: PendingSession | None) -> None:
        """Persist the open session; None clears it."""
        raise NotImplementedError


class InMemoryWritingStore(WritingStore):
    """Keeps everything in process memory; nothing survives a restart."""

    def __init__(self) -> None:
        self._sessions: Dict[str, List[WritingSession]] = {}
        self._goals: Dict[str, List[WritingGoal]] = {}
        self._pending: Dict[str, PendingSession] = {}

    def load_sessions(self, user_id: str) -> List[WritingSession]:
        return [replace(s) for s in self._sessions.get(user_id, [])]

    def save_sessions(self, user_id: str, sessions: List[WritingSession]) -> None:
        self._sessions[user_id] = [replace(s) for s in sessions]

    def load_goals(self, user_id: str) -> List[WritingGoal]:
        return [replace(g) for g in self._goals.get(user_id, [])]

    def save_goals(self, user_id: str, goals: List[WritingGoal]) -> None:
        self._goals[user_id] = [replace(g) for g in goals]

    def load_pending(self, user_id: str) -> PendingSession | None:
        pending = self._pending.get(user_id)
        return replace(pending) if pending else None

    def save_pending(self, user_id: str, pending: PendingSession | None) -> None:
        if pending is None:
            self._pending.pop(user_id, None)
        else:
            self._pending[user_id] = replace(pending)


class JsonWritingStore(WritingStore):
    """
    Stores each user's data as JSON files under ``root/<user_id>/``.

    Files are rewritten whole on every save. Missing files read as empty,
    corrupt files are logged and read as empty, and malformed records inside
    an otherwise valid file are logged and skipped.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def load_sessions(self, user_id: str) -> List[WritingSession]:
        payload = self._read(user_id, SESSIONS_FILE)
        if not isinstance(payload, list):
            return []
        return self._convert_records(payload, session_from_dict, SESSIONS_FILE)

    def save_sessions(self, user_id: str, sessions: List[WritingSession]) -> None:
        self._write(user_id, SESSIONS_FILE, [session_to_dict(s) for s in sessions])

    def load_goals(self, user_id: str) -> List[WritingGoal]:
        payload = self._read(user_id, GOALS_FILE)
        if not isinstance(payload, list):
            return []
        return self._convert_records(payload, goal_from_dict, GOALS_FILE)

    def save_goals(self, user_id: str, goals: List[WritingGoal]) -> None:
        self._write(user_id, GOALS_FILE, [goal_to_dict(g) for g in goals])

    def load_pending(self, user_id: str) -> PendingSession | None:
        payload = self._read(user_id, PENDING_FILE)
        if not isinstance(payload, dict):
            return None
        try:
            return pending_from_dict(payload)
        except MALFORMED_RECORD_ERRORS as exc:
            LOGGER.warning("Ignoring malformed open session for user=%s: %s", user_id, exc)
            return None

    def save_pending(self, user_id: str, pending: PendingSession | None) -> None:
        if pending is None:
            path = self._user_dir(user_id) / PENDING_FILE
            path.unlink(missing_ok=True)
            return
        self._write(user_id, PENDING_FILE, pending_to_dict(pending))

    def _user_dir(self, user_id: str) -> Path:
        if not user_id:
            raise ValueError("user_id must not be empty.")
        # Percent-encode every reserved character and dots so distinct ids map
        # to distinct directories and none of them resolve outside root.
        safe_id = quote(user_id, safe="").replace(".", "%2E")
        return self.root / safe_id

    def _convert_records(
        self, payload: List[Any], convert: Callable[[Any], T], name: str
    ) -> List[T]:
        records: List[T] = []
        for index, item in enumerate(payload):
            try:
                records.append(convert(item))
            except MALFORMED_RECORD_ERRORS as exc:
                LOGGER.warning("Skipping malformed record %d in %s: %s", index, name, exc)
        return records

    def _read(self, user_id: str, name: str) -> Any:
        path = self._user_dir(user_id) / name
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            LOGGER.warning("Ignoring unreadable store file %s: %s", path, exc)
            return None

    def _write(self, user_id: str, name: str, payload: Any) -> None:
        path = self._user_dir(user_id) / name
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Failed to write {path}") from exc
        LOGGER.debug("Wrote %s", path)


def create_store(name: str, **kwargs: Any) -> WritingStore:
    """Factory for building writing stores by name."""
    normalized = name.lower().strip()
    if normalized == "memory":
        return InMemoryWritingStore()
    if normalized == "json":
        return JsonWritingStore(**kwargs)
    raise ValueError(f"Unknown store '{name}'.")


def build_store_from_config(config: "AuthorAllyConfig") -> WritingStore:
    """Convenience helper to build a store from AuthorAllyConfig."""
    if config.store_backend.lower().strip() == "json":
        return create_store(config.store_backend, root=config.store_path)
    return create_store(config.store_backend)


def session_to_dict(session: WritingSession) -> dict[str, Any]:
    return {
        "document_id": session.document_id,
        "start_time": session.start_time.isoformat(),
        "end_time": session.end_time.isoformat(),
        "words_written": session.words_written,
    }


def session_from_dict(data: dict[str, Any]) -> WritingSession:
    return WritingSession(
        document_id=str(data["document_id"]),
        start_time=datetime.fromisoformat(data["start_time"]),
        end_time=datetime.fromisoformat(data["end_time"]),
        words_written=int(data.get("words_written", 0)),
    )


def pending_to_dict(pending: PendingSession) -> dict[str, Any]:
    return {
        "document_id": pending.document_id,
        "start_time": pending.start_time.isoformat(),
        "initial_words": pending.initial_words,
    }


def pending_from_dict(data: dict[str, Any]) -> PendingSession:
    return PendingSession(
        document_id=str(data["document_id"]),
        start_time=datetime.fromisoformat(data["start_time"]),
        initial_words=int(data.get("initial_words", 0)),
    )


def goal_to_dict(goal: WritingGoal) -> dict[str, Any]:
    return {
        "goal_id": goal.goal_id,
        "goal_type": goal.goal_type.value,
        "target": goal.target,
        "current": goal.current,
        "document_id": goal.document_id,
        "start_date": goal.start_date.isoformat(),
        "end_date": goal.end_date.isoformat() if goal.end_date else None,
        "completed": goal.completed,
        "streak": goal.streak,
    }


def goal_from_dict(data: dict[str, Any]) -> WritingGoal:
    end_date = data.get("end_date")
    return WritingGoal(
        goal_id=str(data["goal_id"]),
        goal_type=GoalType(data["goal_type"]),
        target=int(data["target"]),
        current=int(data.get("current", 0)),
        document_id=data.get("document_id"),
        start_date=datetime.fromisoformat(data["start_date"]),
        end_date=datetime.fromisoformat(end_date) if end_date else None,
        completed=bool(data.get("completed", False)),
        streak=int(data.get("streak", 0)),
    )
