"""
Shared plumbing for the API blueprints: role guards, the injected store,
error rendering and the user and question serializers.
"""

from __future__ import annotations

import logging
from functools import wraps

from flask import current_app, g, jsonify
from flask_jwt_extended import get_jwt_identity, jwt_required
from sqlalchemy.exc import SQLAlchemyError

from quizroom.db.models.user import ROLE_STUDENT, ROLE_TEACHER, User
from quizroom.extensions import db
from quizroom.services.codes import format_teacher_code
from quizroom.services.errors import QuizroomError
from quizroom.services.store import QuizStore

log = logging.getLogger(__name__)

STORE_KEY = "quizroom_store"


def get_store() -> QuizStore:
    return current_app.extensions[STORE_KEY]


# ── Guards ────────────────────────────────────────────────────────────────────

def login_required(*roles):
    """
    Require a valid access token and load the caller into ``g.user``.
    With *roles* given, the caller's role must be one of them.
    """
    def decorator(fn):
        @wraps(fn)
        @jwt_required()
        def wrapper(*args, **kwargs):
            user = db.session.get(User, get_jwt_identity())
            if user is None:
                return jsonify({"error": "user not found"}), 404
            if roles and user.role not in roles:
                return jsonify({"error": f"only {' or '.join(roles)} accounts can do this"}), 403
            g.user = user
            return fn(*args, **kwargs)
        return wrapper
    return decorator


teacher_required = login_required(ROLE_TEACHER)
student_required = login_required(ROLE_STUDENT)


# ── Errors ────────────────────────────────────────────────────────────────────

def register_error_handlers(app) -> None:

    @app.errorhandler(QuizroomError)
    def _quizroom_error(exc: QuizroomError):
        if exc.status_code >= 500:
            log.error("request failed: %s", exc)
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(SQLAlchemyError)
    def _database_error(exc: SQLAlchemyError):
        db.session.rollback()
        log.error("database error: %s", exc)
        return jsonify({"error": "something went wrong, please try again", "code": "unexpected"}), 500


# ── Serializers ───────────────────────────────────────────────────────────────

def user_to_dict(user: User) -> dict:
    d = {
        "id":         user.id,
        "email":      user.email,
        "name":       user.name,
        "role":       user.role,
        "approved":   user.approved,
        "verified":   user.verified,
        "teacher_id": user.teacher_id,
        "created_at": user.created_at.isoformat(),
    }
    if user.is_teacher:
        d["teacher_code"] = format_teacher_code(user.teacher_code)
    return d


def question_for_player(question) -> dict:
    """Question payload without the answer key."""
    return {
        "id":            question.id,
        "order_index":   question.order_index,
        "question_text": question.question_text,
        "question_type": question.question_type,
        "options":       [
            {"text": o.get("text", ""), "image_url": o.get("image_url", "")}
            for o in question.options
        ],
        "time_limit":    question.time_limit,
        "points":        question.points,
        "image_url":     question.image_url,
        "video_url":     question.video_url,
        "gif_url":       question.gif_url,
    }
