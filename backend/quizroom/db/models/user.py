import uuid
from datetime import datetime, timezone
from werkzeug.security import generate_password_hash, check_password_hash
from quizroom.extensions import db

ROLE_STUDENT = "student"
ROLE_TEACHER = "teacher"


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(
        db.String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    email = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(100), nullable=True)
    password_hash = db.Column(db.Text, nullable=False)
    # "student" | "teacher"
    role = db.Column(db.String(20), nullable=False, default=ROLE_STUDENT)
    approved = db.Column(db.Boolean, default=False, nullable=False)
    verified = db.Column(db.Boolean, default=True, nullable=False)
    # students only: the teacher whose class they belong to
    teacher_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    # teachers only: invitation code handed to students at registration
    teacher_code = db.Column(db.String(8), unique=True, nullable=True)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # ── password helpers ─────────────────────────────────────────────────────

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def is_teacher(self) -> bool:
        return self.role == ROLE_TEACHER

    @property
    def display_name(self) -> str:
        return self.name or self.email

    def __repr__(self):
        return f"<User {self.email} role={self.role}>"
