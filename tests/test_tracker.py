import pytest

from author_ally.models import GoalType
from author_ally.tracking import (
    InMemoryWritingStore,
    NotAuthenticatedError,
    StaticAuthProvider,
    StoreError,
    WritingTracker,
)
from tests.utils import FakeClock


def _tracker(clock: FakeClock | None = None, user: str | None = "writer-1") -> WritingTracker:
    return WritingTracker(
        InMemoryWritingStore(), StaticAuthProvider(user), clock=clock or FakeClock()
    )


def test_session_lifecycle_records_words_written():
    clock = FakeClock()
    tracker = _tracker(clock)

    pending = tracker.start_session("novel", initial_words=1200)
    assert pending.start_time == clock.now
    clock.advance(minutes=45)
    session = tracker.end_session(final_words=1650)

    assert session is not None
    assert session.words_written == 450
    assert session.duration.total_seconds() == 45 * 60
    assert tracker.sessions() == [session]
    # The open session is cleared once ended.
    assert tracker.end_session(final_words=2000) is None


def test_end_session_without_start_returns_none():
    assert _tracker().end_session(final_words=10) is None


def test_deleted_words_never_count_negative():
    tracker = _tracker()
    tracker.start_session("novel", initial_words=500)
    session = tracker.end_session(final_words=300)
    assert session is not None and session.words_written == 0


def test_operations_require_a_signed_in_user():
    tracker = _tracker(user=None)
    with pytest.raises(NotAuthenticatedError):
        tracker.start_session("novel", 0)
    with pytest.raises(NotAuthenticatedError):
        tracker.goals()


def test_ending_a_session_updates_matching_goals():
    clock = FakeClock()
    tracker = _tracker(clock)
    daily = tracker.create_goal(GoalType.DAILY, target=300)
    project = tracker.create_goal("project", target=1000, document_id="novel")
    unrelated = tracker.create_goal(GoalType.PROJECT, target=1000, document_id="essay")

    tracker.start_session("novel", initial_words=0)
    clock.advance(minutes=30)
    tracker.end_session(final_words=400)

    goals = {goal.goal_id: goal for goal in tracker.goals()}
    assert goals[daily.goal_id].current == 400
    assert goals[daily.goal_id].completed
    assert goals[project.goal_id].current == 400
    assert not goals[project.goal_id].completed
    assert goals[unrelated.goal_id].current == 0


def test_create_goal_validates_arguments():
    tracker = _tracker()
    with pytest.raises(ValueError):
        tracker.create_goal(GoalType.PROJECT, target=100)
    with pytest.raises(ValueError):
        tracker.create_goal(GoalType.DAILY, target=-1)
    with pytest.raises(ValueError):
        tracker.create_goal("monthly", target=100)


def test_update_goal_extends_streak_on_completion():
    tracker = _tracker()
    goal = tracker.create_goal(GoalType.DAILY, target=500)

    assert tracker.update_goal(goal.goal_id, completed=True)
    assert tracker.update_goal(goal.goal_id, completed=True, current=600)
    stored = tracker.goals()[0]
    assert stored.streak == 1
    assert stored.current == 600

    assert not tracker.update_goal("missing", completed=True)
    with pytest.raises(ValueError):
        tracker.update_goal(goal.goal_id, streak=10)


def test_delete_goal():
    tracker = _tracker()
    goal = tracker.create_goal(GoalType.WEEKLY, target=5000)
    assert tracker.delete_goal(goal.goal_id)
    assert not tracker.delete_goal(goal.goal_id)
    assert tracker.goals() == []


def test_stats_reflect_recorded_sessions():
    clock = FakeClock()
    tracker = _tracker(clock)
    tracker.start_session("novel", initial_words=0)
    clock.advance(minutes=20)
    tracker.end_session(final_words=400)

    stats = tracker.stats()
    assert stats.total_sessions == 1
    assert stats.average_words_per_minute == 20
    assert stats.most_productive_time_of_day == "morning"
    assert stats.current_streak == 1


def test_goals_are_scoped_per_user():
    store = InMemoryWritingStore()
    alice = WritingTracker(store, StaticAuthProvider("alice"), clock=FakeClock())
    bob = WritingTracker(store, StaticAuthProvider("bob"), clock=FakeClock())
    alice.create_goal(GoalType.DAILY, target=100)
    assert len(alice.goals()) == 1
    assert bob.goals() == []


class FlakyStore(InMemoryWritingStore):
    """In-memory store whose named save methods fail a set number of times."""

    def __init__(self, **failures: int) -> None:
        super().__init__()
        self.failures = failures

    def _maybe_fail(self, name: str) -> None:
        if self.failures.get(name, 0) > 0:
            self.failures[name] -= 1
            raise StoreError(f"{name} failed")

    def save_goals(self, user_id, goals):
        self._maybe_fail("save_goals")
        super().save_goals(user_id, goals)

    def save_pending(self, user_id, pending):
        if pending is None:
            self._maybe_fail("clear_pending")
        super().save_pending(user_id, pending)


def test_failed_goal_save_keeps_session_open_for_retry():
    clock = FakeClock()
    store = FlakyStore()
    tracker = WritingTracker(store, StaticAuthProvider("writer-1"), clock=clock)
    goal = tracker.create_goal(GoalType.DAILY, target=1000)
    tracker.start_session("novel", initial_words=0)
    clock.advance(minutes=20)

    store.failures["save_goals"] = 1
    with pytest.raises(StoreError):
        tracker.end_session(final_words=300)
    assert tracker.sessions() == []
    assert store.load_pending("writer-1") is not None

    session = tracker.end_session(final_words=300)
    assert session is not None and session.words_written == 300
    assert tracker.sessions() == [session]
    assert tracker.goals()[0].goal_id == goal.goal_id
    assert tracker.goals()[0].current == 300


def test_failed_clear_does_not_credit_goals_twice():
    store = FlakyStore(clear_pending=1)
    tracker = WritingTracker(store, StaticAuthProvider("writer-1"), clock=FakeClock())
    tracker.create_goal(GoalType.DAILY, target=1000)
    tracker.start_session("novel", initial_words=100)

    with pytest.raises(StoreError):
        tracker.end_session(final_words=250)
    assert len(tracker.sessions()) == 1

    retried = tracker.end_session(final_words=250)
    assert retried == tracker.sessions()[0]
    assert len(tracker.sessions()) == 1
    assert tracker.goals()[0].current == 150
    assert tracker.end_session(final_words=250) is None
