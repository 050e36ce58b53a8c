"""
Quiz authoring API

Endpoints
---------
POST    /api/quizzes                          – create a quiz with its questions
GET     /api/quizzes                          – teacher's own quizzes
GET     /api/quizzes/public                   – quizzes shared by any teacher
GET     /api/quizzes/<quiz_id>                – one quiz (owner, or anyone if public)
PUT     /api/quizzes/<quiz_id>                – replace title/settings/questions
DELETE  /api/quizzes/<quiz_id>                – delete a quiz
POST    /api/quizzes/import                   – create a quiz from an uploaded CSV
GET     /api/quizzes/csv-template             – download the simple CSV template
POST    /api/quizzes/<quiz_id>/assignments    – assign to students + e-mail them
GET     /api/quizzes/<quiz_id>/assignments    – who the quiz is assigned to, with progress
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from flask import Blueprint, Response, current_app, g, jsonify, request

from quizroom.api.assignments import assignment_to_dict
from quizroom.api.common import login_required, teacher_required
from quizroom.db.models import Question, Quiz, QuizAssignment, QuizSession, User
from quizroom.db.models.quiz_session import STATUS_ACTIVE, STATUS_PENDING
from quizroom.db.models.question import QUESTION_TYPES
from quizroom.db.models.quiz_assignment import ASSIGNMENT_IN_PROGRESS
from quizroom.db.models.user import ROLE_STUDENT
from quizroom.extensions import db
from quizroom.services.csv_import import CSV_TEMPLATE, parse_csv_to_questions, parse_kahoot_csv
from quizroom.services.errors import Conflict, InvalidInput, NotFound
from quizroom.services.notifications import send_assignment_notification
from quizroom.services.sanitize import (
    sanitize_option_text,
    sanitize_question_text,
    sanitize_quiz_title,
)

log = logging.getLogger(__name__)

quizzes_bp = Blueprint("quizzes", __name__, url_prefix="/api/quizzes")


# ── Helpers ───────────────────────────────────────────────────────────────────

def _question_to_dict(q: Question) -> dict:
    return {
        "id":            q.id,
        "order_index":   q.order_index,
        "question_text": q.question_text,
        "question_type": q.question_type,
        "options":       q.options,
        "time_limit":    q.time_limit,
        "points":        q.points,
        "image_url":     q.image_url,
        "video_url":     q.video_url,
        "gif_url":       q.gif_url,
    }


def _quiz_to_dict(quiz: Quiz, include_questions: bool = False) -> dict:
    d = {
        "id":                 quiz.id,
        "title":              quiz.title,
        "description":        quiz.description,
        "is_course_material": quiz.is_course_material,
        "is_public":          quiz.is_public,
        "teacher_id":         quiz.teacher_id,
        "question_count":     len(quiz.questions),
        "created_at":         quiz.created_at.isoformat(),
    }
    if include_questions:
        d["questions"] = [_question_to_dict(q) for q in quiz.questions]
    return d


def _build_question(raw: dict, index: int) -> Question:
    """Validate and sanitize one question payload."""
    text = sanitize_question_text(raw.get("question_text") or "")
    if not text:
        raise InvalidInput(f"question {index + 1}: text is required")

    question_type = (raw.get("question_type") or "multiple_choice").strip().lower()
    if question_type not in QUESTION_TYPES:
        raise InvalidInput(f"question {index + 1}: unknown type {question_type}")

    options = [
        {
            "text":       sanitize_option_text(o.get("text") or ""),
            "is_correct": bool(o.get("is_correct")),
            "image_url":  o.get("image_url") or "",
        }
        for o in (raw.get("options") or [])
        if isinstance(o, dict)
    ]
    if len(options) < 2:
        raise InvalidInput(f"question {index + 1}: at least two options are required")
    if not any(o["is_correct"] for o in options):
        raise InvalidInput(f"question {index + 1}: mark at least one correct option")

    try:
        time_limit = int(raw.get("time_limit") or 30)
        points = int(raw.get("points") if raw.get("points") is not None else 100)
    except (TypeError, ValueError):
        raise InvalidInput(f"question {index + 1}: time_limit and points must be integers")
    if time_limit <= 0:
        raise InvalidInput(f"question {index + 1}: time_limit must be positive")
    if points < 0:
        raise InvalidInput(f"question {index + 1}: points cannot be negative")

    return Question(
        order_index=index,
        question_text=text,
        question_type=question_type,
        options=options,
        time_limit=time_limit,
        points=points,
        image_url=raw.get("image_url") or None,
        video_url=raw.get("video_url") or None,
        gif_url=raw.get("gif_url") or None,
    )


def _apply(quiz: Quiz, data: dict) -> None:
    title = sanitize_quiz_title(data.get("title") or "")
    if not title:
        raise InvalidInput("title is required")
    raw_questions = data.get("questions") or []
    if not isinstance(raw_questions, list) or not raw_questions:
        raise InvalidInput("a quiz needs at least one question")

    quiz.title = title
    quiz.description = (data.get("description") or "").strip() or None
    if "is_course_material" in data:
        quiz.is_course_material = bool(data["is_course_material"])
    quiz.is_public = bool(data.get("is_public", quiz.is_public or False))
    quiz.questions = [_build_question(q, i) for i, q in enumerate(raw_questions)]


def _owned_quiz(quiz_id: str) -> Quiz:
    quiz = db.session.get(Quiz, quiz_id)
    if quiz is None or quiz.teacher_id != g.user.id:
        raise NotFound("quiz not found")
    return quiz


# ── CRUD ──────────────────────────────────────────────────────────────────────

@quizzes_bp.post("")
@teacher_required
def create_quiz():
    data = request.get_json(silent=True) or {}
    quiz = Quiz(teacher_id=g.user.id)
    _apply(quiz, data)
    db.session.add(quiz)
    db.session.commit()
    log.info("quiz: teacher=%s created quiz=%s questions=%d", g.user.id, quiz.id, len(quiz.questions))
    return jsonify(_quiz_to_dict(quiz, include_questions=True)), 201


@quizzes_bp.get("")
@teacher_required
def list_quizzes():
    quizzes = (
        Quiz.query
        .filter_by(teacher_id=g.user.id)
        .order_by(Quiz.created_at.desc())
        .all()
    )
    return jsonify([_quiz_to_dict(q) for q in quizzes]), 200


@quizzes_bp.get("/public")
@teacher_required
def list_public_quizzes():
    quizzes = (
        Quiz.query
        .filter_by(is_public=True)
        .order_by(Quiz.created_at.desc())
        .all()
    )
    return jsonify([_quiz_to_dict(q) for q in quizzes]), 200


@quizzes_bp.get("/csv-template")
@teacher_required
def csv_template():
    return Response(
        CSV_TEMPLATE,
        mimetype="text/csv",
        headers={"Content-Disposition": "attachment; filename=quiz_template.csv"},
    )


@quizzes_bp.get("/<quiz_id>")
@login_required()
def get_quiz(quiz_id: str):
    quiz = db.session.get(Quiz, quiz_id)
    if quiz is None or (quiz.teacher_id != g.user.id and not quiz.is_public):
        return jsonify({"error": "quiz not found"}), 404
    return jsonify(_quiz_to_dict(quiz, include_questions=True)), 200


@quizzes_bp.put("/<quiz_id>")
@teacher_required
def update_quiz(quiz_id: str):
    quiz = _owned_quiz(quiz_id)
    # answers reference the questions that an edit would replace
    running = (
        QuizSession.query
        .filter(QuizSession.quiz_id == quiz.id, QuizSession.status.in_((STATUS_PENDING, STATUS_ACTIVE)))
        .first()
    )
    if running is not None:
        raise Conflict("this quiz has a session that has not finished yet, end it before editing")
    if QuizAssignment.query.filter_by(quiz_id=quiz.id, status=ASSIGNMENT_IN_PROGRESS).first() is not None:
        raise Conflict("students are taking this quiz as an assignment right now")
    _apply(quiz, request.get_json(silent=True) or {})
    db.session.commit()
    return jsonify(_quiz_to_dict(quiz, include_questions=True)), 200


@quizzes_bp.delete("/<quiz_id>")
@teacher_required
def delete_quiz(quiz_id: str):
    quiz = _owned_quiz(quiz_id)
    db.session.delete(quiz)
    db.session.commit()
    return jsonify({"deleted": quiz_id}), 200


# ── CSV import ────────────────────────────────────────────────────────────────

@quizzes_bp.post("/import")
@teacher_required
def import_quiz():
    """
    Multipart form:
        file   : the CSV file (required)
        format : "kahoot" (default) | "simple"
        title  : quiz title, overrides the one found in the file
    """
    upload = request.files.get("file")
    if upload is None:
        return jsonify({"error": "file is required"}), 400

    try:
        content = upload.read().decode("utf-8-sig")
    except UnicodeDecodeError:
        return jsonify({"error": "CSV file must be UTF-8 encoded"}), 400

    fmt = (request.form.get("format") or "kahoot").lower()
    if fmt == "simple":
        parsed = {"title": "", "questions": parse_csv_to_questions(content)}
    else:
        parsed = parse_kahoot_csv(content, upload.filename)

    title = request.form.get("title") or parsed["title"] or "Imported Quiz"
    quiz = Quiz(teacher_id=g.user.id)
    _apply(quiz, {"title": title, "questions": parsed["questions"]})
    db.session.add(quiz)
    db.session.commit()
    log.info("quiz: teacher=%s imported quiz=%s from %s (%s)",
             g.user.id, quiz.id, upload.filename, fmt)
    return jsonify(_quiz_to_dict(quiz, include_questions=True)), 201


# ── Assignments ───────────────────────────────────────────────────────────────

@quizzes_bp.post("/<quiz_id>/assignments")
@teacher_required
def assign_quiz(quiz_id: str):
    """
    Request body (JSON):
        student_ids : list[str]  – the teacher's own students
        deadline    : str        – ISO-8601 timestamp in the future
    """
    quiz = _owned_quiz(quiz_id)
    data = request.get_json(silent=True) or {}

    try:
        deadline = datetime.fromisoformat(str(data.get("deadline") or ""))
    except ValueError:
        raise InvalidInput("deadline must be an ISO-8601 timestamp")
    if deadline.tzinfo is None:
        deadline = deadline.replace(tzinfo=timezone.utc)
    if deadline <= datetime.now(timezone.utc):
        raise InvalidInput("deadline must be in the future")

    student_ids = data.get("student_ids") or []
    students = (
        User.query
        .filter(
            User.id.in_(student_ids),
            User.teacher_id == g.user.id,
            User.role == ROLE_STUDENT,
        )
        .all()
    ) if student_ids else []
    if not students:
        raise InvalidInput("select at least one of your students")

    assignments = []
    for student in students:
        assignment = QuizAssignment(
            quiz_id=quiz.id,
            student_id=student.id,
            teacher_id=g.user.id,
            deadline=deadline,
        )
        db.session.add(assignment)
        assignments.append(assignment)
    db.session.commit()

    # fire-and-forget, one e-mail per student
    sent = 0
    for student in students:
        if send_assignment_notification(
            current_app.config,
            student_email=student.email,
            student_name=student.display_name,
            quiz_title=quiz.title,
            teacher_name=g.user.display_name,
            deadline=deadline,
        ):
            sent += 1

    return jsonify(
        {
            "assignments": [{"id": a.id, "student_id": a.student_id} for a in assignments],
            "emails_sent": sent,
        }
    ), 201


@quizzes_bp.get("/<quiz_id>/assignments")
@teacher_required
def quiz_assignments(quiz_id: str):
    quiz = _owned_quiz(quiz_id)
    rows = (
        QuizAssignment.query
        .filter_by(quiz_id=quiz.id)
        .order_by(QuizAssignment.created_at.desc())
        .all()
    )
    return jsonify([
        dict(assignment_to_dict(a), student_name=a.student.display_name if a.student else None)
        for a in rows
    ]), 200
