from __future__ import annotations

from .auth import AuthProvider, NotAuthenticatedError, StaticAuthProvider
from .stats import (
    apply_session_to_goals,
    calculate_current_streak,
    compute_writing_stats,
    goal_progress,
)
from .stores import (
    InMemoryWritingStore,
    JsonWritingStore,
    StoreError,
    WritingStore,
    build_store_from_config,
    create_store,
)
from .tracker import WritingTracker

__all__ = [
    "AuthProvider",
    "NotAuthenticatedError",
    "StaticAuthProvider",
    "WritingStore",
    "InMemoryWritingStore",
    "JsonWritingStore",
    "StoreError",
    "create_store",
    "build_store_from_config",
    "WritingTracker",
    "apply_session_to_goals",
    "calculate_current_streak",
    "compute_writing_stats",
    "goal_progress",
]
