"""
Results API

Endpoints
---------
GET    /api/results/me                      – caller's completed-quiz history and stats
GET    /api/results/students/<student_id>   – the same report for one of the teacher's students
"""

from flask import Blueprint, g, jsonify

from quizroom.api.assignments import assignment_to_dict
from quizroom.api.common import student_required, teacher_required, user_to_dict
from quizroom.db.models import User
from quizroom.db.models.user import ROLE_STUDENT
from quizroom.extensions import db
from quizroom.services.assignments import assignments_for
from quizroom.services.errors import NotFound
from quizroom.services.results import student_report

results_bp = Blueprint("results", __name__, url_prefix="/api/results")


@results_bp.get("/me")
@student_required
def my_results():
    """Completed-quiz history with overall, course and non-course stats."""
    return jsonify(student_report(g.user.id)), 200


@results_bp.get("/students/<student_id>")
@teacher_required
def student_results(student_id: str):
    student = db.session.get(User, student_id)
    if student is None or student.role != ROLE_STUDENT or student.teacher_id != g.user.id:
        raise NotFound("student not found")

    report = student_report(student.id)
    report["student"] = user_to_dict(student)
    report["assignments"] = [assignment_to_dict(a) for a in assignments_for(student.id)]
    return jsonify(report), 200
