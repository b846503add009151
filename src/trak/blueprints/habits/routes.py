"""Habit routes."""

from __future__ import annotations

from flask import abort, jsonify, request

from ...services import habits as habit_service
from ...services.habits import HabitOverview
from ...stats.periods import Period
from ...web import current_context, login_required
from . import bp
from .forms import HabitForm, HabitUpdateForm

MAX_FEED_DAYS = 366


def _habit_payload(habit, tags: list[str]) -> dict:
    return {
        "id": habit.id,
        "title": habit.title,
        "description": habit.description,
        "period": habit.period,
        "created_at": habit.created_at.isoformat(),
        "updated_at": habit.updated_at.isoformat(),
        "tags": tags,
    }


def _overview_payload(overview: HabitOverview) -> dict:
    return {
        **_habit_payload(overview.habit, overview.tags),
        "completed": overview.completed,
        "current_streak": overview.streak.current_streak,
        "longest_streak": overview.streak.longest_streak,
        "streak_label": overview.label,
        "completion_rate": overview.completion_rate,
        "total_completions": overview.total_completions,
    }


@bp.get("/")
@login_required
def list_habits():
    """List habits with streaks; ``?period=weekly`` and ``?tag=name`` narrow the list."""

    ctx = current_context()
    period = request.args.get("period")
    overviews = habit_service.habit_overview(
        ctx.habit_repo,
        user_id=ctx.require_user_id(),
        period=Period.coerce(period) if period else None,
        tag=request.args.get("tag") or None,
    )
    return jsonify([_overview_payload(item) for item in overviews])


@bp.post("/")
@login_required
def create_habit():
    ctx = current_context()
    form = HabitForm.model_validate(request.get_json(silent=True) or {})
    habit = habit_service.create_habit(
        ctx.habit_repo,
        user_id=ctx.require_user_id(),
        title=form.title,
        description=form.description,
        period=form.period,
        tags=form.tags,
    )
    tags = habit_service.tags_for(ctx.habit_repo, habit.id, user_id=habit.user_id)
    return jsonify(_habit_payload(habit, tags)), 201


@bp.patch("/<int:habit_id>")
@login_required
def update_habit(habit_id: int):
    ctx = current_context()
    form = HabitUpdateForm.model_validate(request.get_json(silent=True) or {})
    habit = habit_service.update_habit(
        ctx.habit_repo,
        habit_id,
        user_id=ctx.require_user_id(),
        **form.model_dump(exclude_none=True),
    )
    tags = habit_service.tags_for(ctx.habit_repo, habit.id, user_id=habit.user_id)
    return jsonify(_habit_payload(habit, tags))


@bp.delete("/<int:habit_id>")
@login_required
def delete_habit(habit_id: int):
    ctx = current_context()
    habit_service.delete_habit(ctx.habit_repo, habit_id, user_id=ctx.require_user_id())
    return "", 204


@bp.post("/<int:habit_id>/toggle")
@login_required
def toggle_habit(habit_id: int):
    """Toggle habit completion for the current period."""

    ctx = current_context()
    completed = habit_service.toggle_completion(
        ctx.habit_repo, habit_id, user_id=ctx.require_user_id()
    )
    return jsonify({"id": habit_id, "completed": completed})


@bp.get("/activity")
@login_required
def activity_feed():
    """Recent habit creations, edits and completions, newest first."""

    ctx = current_context()
    days = request.args.get("days", default=habit_service.FEED_DAYS, type=int)
    if not 0 <= days <= MAX_FEED_DAYS:
        abort(400, description=f"days must be between 0 and {MAX_FEED_DAYS}")
    items = habit_service.activity_feed(
        ctx.habit_repo,
        user_id=ctx.require_user_id(),
        days=days,
        tag=request.args.get("tag") or None,
    )
    return jsonify(
        [
            {
                "habit_id": item.habit.id,
                "title": item.habit.title,
                "period": item.habit.period,
                "date": item.when.isoformat(),
                "kind": item.kind.value,
                "streak": item.streak,
            }
            for item in items
        ]
    )
