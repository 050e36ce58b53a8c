"""
Assigned quiz API (student side)

Endpoints
---------
GET    /api/assignments                          – caller's assignments, nearest deadline first
POST   /api/assignments/<assignment_id>/start    – open (or resume) an assignment
POST   /api/assignments/<assignment_id>/answers  – answer one question
POST   /api/assignments/<assignment_id>/complete – submit and total the assignment
"""

from __future__ import annotations

from flask import Blueprint, g, jsonify, request

from quizroom.api.common import question_for_player, student_required
from quizroom.db.models import QuizAssignment
from quizroom.services.assignments import (
    answer_assignment,
    assignments_for,
    complete_assignment,
    is_overdue,
    own_assignment,
    start_assignment,
)
from quizroom.services.errors import InvalidInput

assignments_bp = Blueprint("assignments", __name__, url_prefix="/api/assignments")


def assignment_to_dict(a: QuizAssignment) -> dict:
    return {
        "id":                     a.id,
        "quiz_id":                a.quiz_id,
        "quiz_title":             a.quiz.title if a.quiz else None,
        "student_id":             a.student_id,
        "status":                 a.status,
        "deadline":               a.deadline.isoformat(),
        "overdue":                a.completed_at is None and is_overdue(a),
        "current_question_index": a.current_question_index,
        "score":                  a.score,
        "correct_answers":        a.correct_answers,
        "question_count":         len(a.quiz.questions) if a.quiz else 0,
        "time_taken":             a.time_taken,
        "started_at":             a.started_at.isoformat() if a.started_at else None,
        "completed_at":           a.completed_at.isoformat() if a.completed_at else None,
    }


def _answers_by_question(a: QuizAssignment) -> dict:
    return {
        ans.question_id: {
            "selected_option_index": ans.selected_option_index,
            "is_correct":            ans.is_correct,
            "points_earned":         ans.points_earned,
        }
        for ans in a.answers
    }


@assignments_bp.get("")
@student_required
def my_assignments():
    return jsonify([assignment_to_dict(a) for a in assignments_for(g.user.id)]), 200


@assignments_bp.post("/<assignment_id>/start")
@student_required
def start(assignment_id: str):
    assignment = start_assignment(own_assignment(assignment_id, g.user))
    return jsonify(
        {
            "assignment": assignment_to_dict(assignment),
            "questions":  [question_for_player(q) for q in assignment.quiz.questions],
            "answers":    _answers_by_question(assignment),
        }
    ), 200


@assignments_bp.post("/<assignment_id>/answers")
@student_required
def answer(assignment_id: str):
    """
    Request body (JSON):
        question_id           : str
        selected_option_index : int
        time_remaining        : float – seconds left on the question timer
    """
    assignment = own_assignment(assignment_id, g.user)
    data = request.get_json(silent=True) or {}
    question_id = data.get("question_id")
    try:
        selected = int(data.get("selected_option_index"))
        time_remaining = float(data.get("time_remaining"))
    except (TypeError, ValueError):
        raise InvalidInput("selected_option_index and time_remaining must be numbers")
    if not question_id:
        raise InvalidInput("question_id is required")

    recorded = answer_assignment(assignment, question_id, selected, time_remaining)
    return jsonify(
        {
            "question_id":   recorded.question_id,
            "is_correct":    recorded.is_correct,
            "points_earned": recorded.points_earned,
        }
    ), 201


@assignments_bp.post("/<assignment_id>/complete")
@student_required
def complete(assignment_id: str):
    assignment = complete_assignment(own_assignment(assignment_id, g.user))
    return jsonify(assignment_to_dict(assignment)), 200
