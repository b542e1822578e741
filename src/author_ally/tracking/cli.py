from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

import click
import yaml

from ..config import load_config
from ..models import GoalType, WritingGoal
from .auth import NotAuthenticatedError, StaticAuthProvider
from .stats import goal_progress
from .stores import (
    StoreError,
    build_store_from_config,
    goal_to_dict,
    session_to_dict,
)
from .tracker import WritingTracker


@click.group(name="author-ally-tracking")
@click.option("--user", "user_id", envvar="AUTHOR_ALLY_USER", default=None)
@click.option("--store-path", type=click.Path(file_okay=False), default=None)
@click.option(
    "--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), default=None
)
@click.pass_context
def tracking_group(
    ctx: click.Context,
    user_id: str | None,
    store_path: str | None,
    config_path: str | None,
) -> None:
    """Writing sessions, goals and statistics."""
    try:
        cfg = load_config(config_path)
        if store_path:
            cfg.store_backend = "json"
            cfg.store_path = store_path
        store = build_store_from_config(cfg)
    except (ValueError, yaml.YAMLError) as exc:
        raise click.ClickException(f"Invalid config: {exc}") from exc
    ctx.obj = WritingTracker(store, StaticAuthProvider(user_id))


@tracking_group.command("start-session")
@click.option("--document", "document_id", required=True)
@click.option("--words", "initial_words", type=int, default=0, show_default=True)
@click.pass_obj
def start_session(tracker: WritingTracker, document_id: str, initial_words: int) -> None:
    """Open a writing session for a document at its current word count."""
    pending = _guard(tracker.start_session, document_id, initial_words)
    click.echo(f"Started session on {pending.document_id} at {pending.initial_words} words")


@tracking_group.command("end-session")
@click.option("--words", "final_words", type=int, required=True)
@click.pass_obj
def end_session(tracker: WritingTracker, final_words: int) -> None:
    """Close the open session at the document's final word count."""
    session = _guard(tracker.end_session, final_words)
    if session is None:
        raise click.ClickException("No writing session is open.")
    click.echo(json.dumps(session_to_dict(session), indent=2))


@tracking_group.command("add-goal")
@click.option(
    "--type",
    "goal_type",
    type=click.Choice([t.value for t in GoalType]),
    default=GoalType.DAILY.value,
    show_default=True,
)
@click.option("--target", type=int, required=True, help="Target word count.")
@click.option("--document", "document_id", default=None, help="Required for project goals.")
@click.option("--end-date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.pass_obj
def add_goal(
    tracker: WritingTracker,
    goal_type: str,
    target: int,
    document_id: str | None,
    end_date: datetime | None,
) -> None:
    """Create a daily, weekly or project word-count goal."""
    deadline = end_date.replace(tzinfo=timezone.utc) if end_date else None
    goal = _guard(tracker.create_goal, goal_type, target, document_id, None, deadline)
    click.echo(goal.goal_id)


@tracking_group.command("list-goals")
@click.option("--active-only", is_flag=True, default=False)
@click.pass_obj
def list_goals(tracker: WritingTracker, active_only: bool) -> None:
    """Print goals with their progress as JSON."""
    goals = _guard(tracker.goals)
    if active_only:
        goals = [g for g in goals if not g.completed]
    click.echo(json.dumps({"goals": [_goal_payload(g) for g in goals]}, indent=2))


@tracking_group.command("remove-goal")
@click.argument("goal_id")
@click.pass_obj
def remove_goal(tracker: WritingTracker, goal_id: str) -> None:
    """Delete a goal by id."""
    if not _guard(tracker.delete_goal, goal_id):
        raise click.ClickException(f"Goal '{goal_id}' not found.")
    click.echo(f"Removed {goal_id}")


@tracking_group.command("stats")
@click.pass_obj
def stats(tracker: WritingTracker) -> None:
    """Print aggregate writing statistics as JSON."""
    click.echo(json.dumps(asdict(_guard(tracker.stats)), indent=2))


def main() -> None:
    tracking_group()


def _guard(func: Any, *args: Any) -> Any:
    try:
        return func(*args)
    except (NotAuthenticatedError, StoreError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc


def _goal_payload(goal: WritingGoal) -> dict[str, Any]:
    payload = goal_to_dict(goal)
    payload["progress"] = goal_progress(goal)
    return payload


if __name__ == "__main__":
    main()
