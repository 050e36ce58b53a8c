from flask import Blueprint, g, jsonify, request

from quizroom.api.common import teacher_required, user_to_dict
from quizroom.db.models.user import ROLE_STUDENT, User
from quizroom.extensions import db
from quizroom.services.csv_import import parse_users_csv

students_bp = Blueprint("students", __name__, url_prefix="/api/students")


def _own_student(student_id: str):
    student = db.session.get(User, student_id)
    if not student or student.role != ROLE_STUDENT or student.teacher_id != g.user.id:
        return None
    return student


@students_bp.get("")
@teacher_required
def list_students():
    """Teacher's class, pending approvals first."""
    students = (
        User.query
        .filter_by(teacher_id=g.user.id, role=ROLE_STUDENT)
        .order_by(User.approved.asc(), User.name.asc())
        .all()
    )
    return jsonify([user_to_dict(s) for s in students]), 200


@students_bp.post("/<student_id>/approve")
@teacher_required
def approve(student_id: str):
    student = _own_student(student_id)
    if not student:
        return jsonify({"error": "student not found"}), 404
    student.approved = True
    db.session.commit()
    return jsonify(user_to_dict(student)), 200


@students_bp.post("/<student_id>/revoke")
@teacher_required
def revoke(student_id: str):
    student = _own_student(student_id)
    if not student:
        return jsonify({"error": "student not found"}), 404
    student.approved = False
    db.session.commit()
    return jsonify(user_to_dict(student)), 200


@students_bp.post("/import/preview")
@teacher_required
def import_preview():
    """Parse a roster CSV (name,email,role,student_id) and flag known e-mails."""
    upload = request.files.get("file")
    if upload is None:
        return jsonify({"error": "file is required"}), 400
    rows = parse_users_csv(upload.read().decode("utf-8-sig", errors="replace"))

    emails = [r["email"].lower() for r in rows if r["email"]]
    known = {
        u.email for u in User.query.filter(User.email.in_(emails)).all()
    } if emails else set()
    for row in rows:
        row["exists"] = row["email"].lower() in known
    return jsonify({"rows": rows, "count": len(rows)}), 200
