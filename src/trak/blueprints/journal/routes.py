"""Journal routes."""

from __future__ import annotations

from flask import jsonify, request

from ...services import journal as journal_service
from ...web import current_context, login_required, to_jsonable
from . import bp
from .forms import JournalForm


def _entry_payload(entry) -> dict | None:
    if entry is None:
        return None
    return {
        "entry_date": entry.entry_date.isoformat(),
        "content": entry.content,
        "words": journal_service.count_words(entry.content),
        "updated_at": entry.updated_at.isoformat(),
    }


@bp.get("/")
@login_required
def show_journal():
    """Return today's entry plus recent and same-day-in-past entries."""

    ctx = current_context()
    user_id = ctx.require_user_id()
    history = journal_service.journal_history(ctx.journal_repo, user_id=user_id)
    return jsonify(
        {
            "today": _entry_payload(journal_service.todays_entry(ctx.journal_repo, user_id=user_id)),
            "recent": [_entry_payload(entry) for entry in history.recent],
            "lookbacks": {key: _entry_payload(entry) for key, entry in history.lookbacks.items()},
        }
    )


@bp.put("/")
@login_required
def save_entry():
    """Create or replace today's entry."""

    ctx = current_context()
    form = JournalForm.model_validate(request.get_json(silent=True) or {})
    entry = journal_service.save_entry(
        ctx.journal_repo, form.content, user_id=ctx.require_user_id()
    )
    return jsonify(_entry_payload(entry))


@bp.get("/stats")
@login_required
def journal_stats():
    ctx = current_context()
    stats = journal_service.journal_stats(ctx.journal_repo, user_id=ctx.require_user_id())
    return jsonify(to_jsonable(stats))
