"""
Student results report.

Public API
----------
    quiz_history(user_id)   -> list[dict]   completed sessions, newest first
    summarize(history)      -> dict         totals / averages for one slice
    student_report(user_id) -> dict         history + overall/course/non-course stats

Cancelled and still-running sessions never show up in a report.  A quiz
counts as course material unless it is explicitly flagged otherwise.
"""

from __future__ import annotations

import math
from typing import List

from quizroom.db.models import Quiz, QuizAnswer, QuizSession, SessionParticipant
from quizroom.db.models.quiz_session import STATUS_COMPLETED
from quizroom.extensions import db


def quiz_history(user_id: str) -> List[dict]:
    rows = (
        db.session.query(SessionParticipant, QuizSession, Quiz)
        .join(QuizSession, SessionParticipant.session_id == QuizSession.id)
        .outerjoin(Quiz, QuizSession.quiz_id == Quiz.id)
        .filter(
            SessionParticipant.user_id == user_id,
            QuizSession.status == STATUS_COMPLETED,
        )
        .order_by(SessionParticipant.joined_at.desc())
        .all()
    )

    history = []
    for participant, session, quiz in rows:
        answers = (
            QuizAnswer.query
            .filter_by(participant_id=participant.id)
            .all()
        )
        total = len(answers)
        correct = sum(1 for a in answers if a.is_correct)
        history.append({
            "session_id":         session.id,
            "participant_id":     participant.id,
            "quiz_title":         quiz.title if quiz else "Unknown Quiz",
            "score":              participant.score or 0,
            "date_taken":         participant.joined_at.isoformat(),
            "total_questions":    total,
            "correct_answers":    correct,
            "accuracy":           (correct / total) * 100 if total else 0.0,
            "is_course_material": quiz is None or quiz.is_course_material is not False,
        })
    return history


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def summarize(history: List[dict]) -> dict:
    if not history:
        return {
            "total_quizzes":    0,
            "average_score":    0,
            "average_accuracy": 0,
            "total_points":     0,
        }
    total_points = sum(h["score"] for h in history)
    return {
        "total_quizzes":    len(history),
        "average_score":    _round_half_up(total_points / len(history)),
        "average_accuracy": _round_half_up(sum(h["accuracy"] for h in history) / len(history)),
        "total_points":     total_points,
    }


def student_report(user_id: str) -> dict:
    history = quiz_history(user_id)
    return {
        "history":    history,
        "overall":    summarize(history),
        "course":     summarize([h for h in history if h["is_course_material"]]),
        "non_course": summarize([h for h in history if not h["is_course_material"]]),
    }
