from flask import Blueprint, request, jsonify
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    jwt_required,
    get_jwt_identity,
)
from sqlalchemy.exc import IntegrityError
from quizroom.extensions import db
from quizroom.db.models.user import User, ROLE_STUDENT, ROLE_TEACHER
from quizroom.api.common import user_to_dict
from quizroom.services.codes import generate_teacher_code, unformat_teacher_code
import uuid

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


# ── Register ────────────────────────────────────────────────────────────────

@auth_bp.post("/register")
def register():
    data = request.get_json(silent=True) or {}
    email = (data.get("email") or "").strip().lower()
    password = data.get("password", "")
    name = (data.get("name") or "").strip() or None
    role = (data.get("role") or ROLE_STUDENT).strip().lower()

    # Validation
    if not email or not password:
        return jsonify({"error": "email and password are required"}), 400
    if len(password) < 8:
        return jsonify({"error": "password must be at least 8 characters"}), 400
    if role not in (ROLE_STUDENT, ROLE_TEACHER):
        return jsonify({"error": "role must be student or teacher"}), 400

    if User.query.filter_by(email=email).first():
        return jsonify({"error": "email already registered"}), 409

    user = User(
        id=str(uuid.uuid4()),
        email=email,
        name=name,
        role=role,
    )
    user.set_password(password)

    if role == ROLE_TEACHER:
        user.approved = True
        user.teacher_code = generate_teacher_code()
    else:
        code = unformat_teacher_code(data.get("teacher_code") or "")
        if not code:
            return jsonify({"error": "teacher_code is required for students"}), 400
        teacher = User.query.filter_by(teacher_code=code, role=ROLE_TEACHER).first()
        if not teacher:
            return jsonify({"error": "invalid teacher code"}), 404
        user.teacher_id = teacher.id
        user.approved = False

    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({"error": "email already registered"}), 409

    access_token = create_access_token(identity=user.id)
    refresh_token = create_refresh_token(identity=user.id)

    return jsonify(
        {
            "message": "Account created",
            "access_token": access_token,
            "refresh_token": refresh_token,
            "user": user_to_dict(user),
        }
    ), 201


# ── Login ────────────────────────────────────────────────────────────────────

@auth_bp.post("/login")
def login():
    data = request.get_json(silent=True) or {}
    email = (data.get("email") or "").strip().lower()
    password = data.get("password", "")

    if not email or not password:
        return jsonify({"error": "email and password are required"}), 400

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        return jsonify({"error": "invalid credentials"}), 401
    if not user.verified:
        return jsonify({"error": "please verify your email before signing in"}), 403

    access_token = create_access_token(identity=user.id)
    refresh_token = create_refresh_token(identity=user.id)

    return jsonify(
        {
            "access_token": access_token,
            "refresh_token": refresh_token,
            "user": user_to_dict(user),
        }
    ), 200


# ── Refresh ──────────────────────────────────────────────────────────────────

@auth_bp.post("/refresh")
@jwt_required(refresh=True)
def refresh():
    user_id = get_jwt_identity()
    access_token = create_access_token(identity=user_id)
    return jsonify({"access_token": access_token}), 200


# ── Me ───────────────────────────────────────────────────────────────────────

@auth_bp.get("/me")
@jwt_required()
def me():
    user_id = get_jwt_identity()
    user = db.session.get(User, user_id)
    if not user:
        return jsonify({"error": "user not found"}), 404
    return jsonify({"user": user_to_dict(user)}), 200
