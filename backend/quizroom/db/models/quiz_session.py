import uuid
from datetime import datetime, timezone
from quizroom.extensions import db

STATUS_PENDING = "pending"
STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"
SESSION_STATUSES = (STATUS_PENDING, STATUS_ACTIVE, STATUS_COMPLETED, STATUS_CANCELLED)
TERMINAL_STATUSES = (STATUS_COMPLETED, STATUS_CANCELLED)

MODE_CLASSIC = "classic"
MODE_TEAM = "team"
SESSION_MODES = (MODE_CLASSIC, MODE_TEAM)


class QuizSession(db.Model):
    __tablename__ = "quiz_sessions"

    id = db.Column(
        db.String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    pin = db.Column(db.String(6), unique=True, nullable=False)
    # "pending" | "active" | "completed" | "cancelled"
    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING)
    # "classic" | "team"
    mode = db.Column(db.String(20), nullable=False, default=MODE_CLASSIC)
    quiz_id = db.Column(
        db.String(36),
        db.ForeignKey("quizzes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    host_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    current_question_index = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # Relationships
    quiz = db.relationship("Quiz")
    participants = db.relationship(
        "SessionParticipant",
        back_populates="session",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def __repr__(self):
        return f"<QuizSession id={self.id} pin={self.pin} status={self.status}>"
