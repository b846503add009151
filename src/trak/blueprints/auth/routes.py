"""Sign-up, login and logout routes."""

from __future__ import annotations

from flask import jsonify, request, session

from ...services import auth
from ...web import base_context, current_context, login_required
from . import bp
from .forms import CredentialsForm, ProfileForm


def _user_payload(user) -> dict:
    return {"id": user.id, "username": user.username, "display_name": user.display_name}


@bp.post("/signup")
def signup():
    """Create an account and sign it in."""

    form = CredentialsForm.model_validate(request.get_json(silent=True) or {})
    user = auth.create_user(
        username=form.username,
        password=form.password,
        session_factory=base_context().session_factory,
    )
    session.clear()
    session["user_id"] = user.id
    return jsonify(_user_payload(user)), 201


@bp.post("/login")
def login():
    form = CredentialsForm.model_validate(request.get_json(silent=True) or {})
    user = auth.authenticate(
        username=form.username,
        password=form.password,
        session_factory=base_context().session_factory,
    )
    if user is None:
        return jsonify({"error": "Invalid username or password"}), 401
    session.clear()
    session["user_id"] = user.id
    return jsonify(_user_payload(user))


@bp.post("/logout")
def logout():
    session.clear()
    return "", 204


@bp.get("/me")
def me():
    user = current_context().current_user
    if user is None:
        return jsonify({"error": "Authentication required"}), 401
    return jsonify(_user_payload(user))


@bp.patch("/me")
@login_required
def update_me():
    """Change the signed-in user's display name."""

    ctx = current_context()
    form = ProfileForm.model_validate(request.get_json(silent=True) or {})
    user = auth.update_profile(
        ctx.require_user_id(),
        display_name=form.display_name,
        session_factory=ctx.session_factory,
    )
    return jsonify(_user_payload(user))
