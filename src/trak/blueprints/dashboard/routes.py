"""Dashboard statistics routes."""

from __future__ import annotations

from flask import abort, jsonify, request

from ...services import activity as activity_service
from ...services import habits as habit_service
from ...services import journal as journal_service
from ...stats import activity_level, summarize
from ...web import current_context, login_required, to_jsonable
from . import bp

MAX_WINDOW_DAYS = 5 * 366


def _bucket_payload(bucket) -> dict | None:
    if bucket is None:
        return None
    return {
        "date": bucket.day.isoformat(),
        "count": bucket.count,
        "level": activity_level(bucket.count),
    }


@bp.get("/")
@login_required
def summary():
    """Habit and journal statistics for the signed-in user."""

    ctx = current_context()
    user_id = ctx.require_user_id()
    return jsonify(
        {
            "habits": to_jsonable(habit_service.dashboard_stats(ctx.habit_repo, user_id=user_id)),
            "journal": to_jsonable(journal_service.journal_stats(ctx.journal_repo, user_id=user_id)),
        }
    )


@bp.get("/activity")
@login_required
def activity():
    """Per-day activity counts as a linear list or as Sunday-first week columns."""

    ctx = current_context()
    user_id = ctx.require_user_id()
    layout = request.args.get("layout", "linear")
    days = request.args.get("days", default=ctx.config.ACTIVITY_WINDOW_DAYS, type=int)
    if not 0 <= days <= MAX_WINDOW_DAYS:
        abort(400, description=f"days must be between 0 and {MAX_WINDOW_DAYS}")

    if layout == "grid":
        weeks = activity_service.activity_grid(
            ctx.habit_repo, ctx.journal_repo, user_id=user_id, window_days=days
        )
        return jsonify(
            {
                "layout": "grid",
                "weeks": [[_bucket_payload(cell) for cell in week] for week in weeks],
            }
        )
    if layout != "linear":
        abort(400, description="layout must be 'linear' or 'grid'")

    buckets = activity_service.activity_buckets(
        ctx.habit_repo, ctx.journal_repo, user_id=user_id, window_days=days
    )
    return jsonify(
        {
            "layout": "linear",
            "days": [_bucket_payload(bucket) for bucket in buckets],
            "summary": to_jsonable(summarize(buckets)),
        }
    )
