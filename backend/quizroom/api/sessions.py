"""
Quiz session API

Endpoints
---------
POST   /api/sessions                               – teacher hosts a session for a quiz
GET    /api/sessions                               – teacher's sessions, newest first
PATCH  /api/sessions/<session_id>/status           – teacher starts / completes / cancels
POST   /api/sessions/<session_id>/next             – teacher advances to the next question
GET    /api/sessions/<session_id>/leaderboard      – host or participant

GET    /api/sessions/lookup?pin=123456             – student resolves a PIN
POST   /api/sessions/join                          – student joins by PIN
GET    /api/sessions/<session_id>/participation    – is the caller still in this session?
GET    /api/sessions/<session_id>/state            – live view polling
POST   /api/sessions/<session_id>/answers          – student answers the current question

Join responses carry a navigation ``intent`` telling the client what to show
next (live quiz, rejoin confirmation, team picker).
"""

from __future__ import annotations

import logging

from flask import Blueprint, g, jsonify, request

from quizroom.api.common import (
    get_store,
    login_required,
    question_for_player,
    student_required,
    teacher_required,
)
from quizroom.db.models import Quiz, QuizSession
from quizroom.db.models.quiz_session import (
    MODE_CLASSIC,
    SESSION_MODES,
    STATUS_ACTIVE,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_PENDING,
)
from quizroom.extensions import db
from quizroom.services.answers import leaderboard, submit_answer
from quizroom.services.codes import generate_pin
from quizroom.services.errors import Conflict, InvalidInput, NotFound, PermissionDenied
from quizroom.services.session_join import find_joinable_session, join_session

log = logging.getLogger(__name__)

sessions_bp = Blueprint("sessions", __name__, url_prefix="/api/sessions")

_PIN_ATTEMPTS = 20

# status -> statuses it may move to
_TRANSITIONS = {
    STATUS_PENDING:   (STATUS_ACTIVE, STATUS_CANCELLED),
    STATUS_ACTIVE:    (STATUS_COMPLETED, STATUS_CANCELLED),
    STATUS_COMPLETED: (),
    STATUS_CANCELLED: (),
}


# ── Helpers ───────────────────────────────────────────────────────────────────

def _session_to_dict(session: QuizSession) -> dict:
    return {
        "id":                     session.id,
        "pin":                    session.pin,
        "status":                 session.status,
        "mode":                   session.mode,
        "quiz_id":                session.quiz_id,
        "quiz_title":             session.quiz.title if session.quiz else None,
        "current_question_index": session.current_question_index,
        "created_at":             session.created_at.isoformat(),
    }


def _participant_to_dict(participant) -> dict:
    return {
        "id":            participant.id,
        "session_id":    participant.session_id,
        "user_id":       participant.user_id,
        "display_name":  participant.display_name,
        "team_id":       participant.team_id,
        "is_team_entry": participant.is_team_entry,
        "score":         participant.score,
        "joined_at":     participant.joined_at.isoformat(),
    }


def _hosted_session(session_id: str) -> QuizSession:
    session = get_store().session_by_id(session_id)
    if session is None or session.host_id != g.user.id:
        raise NotFound("quiz session not found")
    return session


def _unused_pin() -> str:
    store = get_store()
    for _ in range(_PIN_ATTEMPTS):
        pin = generate_pin()
        if store.session_by_pin(pin) is None:
            return pin
    raise Conflict("could not allocate a session PIN, please try again")


# ── Teacher: host a session ───────────────────────────────────────────────────

@sessions_bp.post("")
@teacher_required
def create_session():
    data = request.get_json(silent=True) or {}
    quiz_id = data.get("quiz_id")
    mode = (data.get("mode") or MODE_CLASSIC).strip().lower()

    if mode not in SESSION_MODES:
        return jsonify({"error": "mode must be classic or team"}), 400

    quiz = db.session.get(Quiz, quiz_id) if quiz_id else None
    if quiz is None or (quiz.teacher_id != g.user.id and not quiz.is_public):
        return jsonify({"error": "quiz not found"}), 404
    if not quiz.questions:
        return jsonify({"error": "quiz has no questions"}), 400

    session = QuizSession(
        pin=_unused_pin(),
        mode=mode,
        quiz_id=quiz.id,
        host_id=g.user.id,
        status=STATUS_PENDING,
    )
    db.session.add(session)
    db.session.commit()
    log.info("session: teacher=%s hosted session=%s pin=%s mode=%s",
             g.user.id, session.id, session.pin, mode)

    return jsonify(_session_to_dict(session)), 201


@sessions_bp.get("")
@teacher_required
def list_sessions():
    sessions = (
        QuizSession.query
        .filter_by(host_id=g.user.id)
        .order_by(QuizSession.created_at.desc())
        .all()
    )
    return jsonify([_session_to_dict(s) for s in sessions]), 200


@sessions_bp.patch("/<session_id>/status")
@teacher_required
def update_status(session_id: str):
    session = _hosted_session(session_id)
    data = request.get_json(silent=True) or {}
    status = (data.get("status") or "").strip().lower()

    if status not in _TRANSITIONS.get(session.status, ()):
        raise Conflict(f"cannot move a {session.status} session to {status or 'nothing'}")

    session.status = status
    db.session.commit()
    log.info("session: session=%s is now %s", session.id, status)
    return jsonify(_session_to_dict(session)), 200


@sessions_bp.post("/<session_id>/next")
@teacher_required
def next_question(session_id: str):
    session = _hosted_session(session_id)
    if session.status != STATUS_ACTIVE:
        raise Conflict("the session is not running")
    if session.current_question_index + 1 >= len(session.quiz.questions):
        raise Conflict("this was the last question")

    session.current_question_index += 1
    db.session.commit()
    return jsonify(_session_to_dict(session)), 200


@sessions_bp.get("/<session_id>/leaderboard")
@login_required()
def session_leaderboard(session_id: str):
    store = get_store()
    session = store.session_by_id(session_id)
    if session is None:
        raise NotFound("quiz session not found")
    if session.host_id != g.user.id and store.participant(session.id, g.user.id) is None:
        raise PermissionDenied("you are not part of this quiz")

    limit = request.args.get("limit", type=int)
    return jsonify(leaderboard(store, session, limit=limit)), 200


# ── Student: join ─────────────────────────────────────────────────────────────

@sessions_bp.get("/lookup")
@student_required
def lookup_session():
    session = find_joinable_session(get_store(), request.args.get("pin", ""))
    return jsonify(_session_to_dict(session)), 200


@sessions_bp.post("/join")
@student_required
def join():
    """
    Request body (JSON):
        pin     : str   – 6-digit session PIN (required)
        team_id : str   – team picked from a previous PICK_TEAM answer
        confirm : bool  – confirms a previous CONFIRM_REJOIN answer
    """
    data = request.get_json(silent=True) or {}
    outcome = join_session(
        get_store(),
        g.user,
        str(data.get("pin") or ""),
        team_id=data.get("team_id") or None,
        confirm=bool(data.get("confirm")),
    )
    return jsonify(outcome.to_dict()), 200


@sessions_bp.get("/<session_id>/participation")
@login_required()
def participation(session_id: str):
    store = get_store()
    session = store.session_by_id(session_id)
    if session is None:
        raise NotFound("quiz session not found")

    participant = store.participant(session.id, g.user.id)
    return jsonify(
        {
            "session_id":    session.id,
            "status":        session.status,
            "is_terminal":   session.is_terminal,
            "participating": participant is not None,
            "participant":   _participant_to_dict(participant) if participant else None,
        }
    ), 200


# ── Student: play ─────────────────────────────────────────────────────────────

@sessions_bp.get("/<session_id>/state")
@student_required
def session_state(session_id: str):
    store = get_store()
    session = store.session_by_id(session_id)
    if session is None:
        raise NotFound("quiz session not found")
    participant = store.participant(session.id, g.user.id)
    if participant is None:
        raise PermissionDenied("you have not joined this quiz")

    questions = session.quiz.questions
    current = None
    answered = False
    if session.status == STATUS_ACTIVE and 0 <= session.current_question_index < len(questions):
        question = questions[session.current_question_index]
        current = question_for_player(question)
        answered = store.answer(participant.id, question.id) is not None

    return jsonify(
        {
            "session":          _session_to_dict(session),
            "question":         current,
            "question_count":   len(questions),
            "already_answered": answered,
            "participant":      _participant_to_dict(participant),
        }
    ), 200


@sessions_bp.post("/<session_id>/answers")
@student_required
def answer(session_id: str):
    """
    Request body (JSON):
        question_id           : str
        selected_option_index : int
        time_remaining        : float – seconds left on the question timer
    """
    store = get_store()
    session = store.session_by_id(session_id)
    if session is None:
        raise NotFound("quiz session not found")

    data = request.get_json(silent=True) or {}
    question_id = data.get("question_id")
    try:
        selected = int(data.get("selected_option_index"))
        time_remaining = float(data.get("time_remaining"))
    except (TypeError, ValueError):
        raise InvalidInput("selected_option_index and time_remaining must be numbers")
    if not question_id:
        raise InvalidInput("question_id is required")

    result = submit_answer(store, session, g.user, question_id, selected, time_remaining)
    return jsonify(result), 201
