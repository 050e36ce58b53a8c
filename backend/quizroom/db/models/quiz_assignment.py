import uuid
from datetime import datetime, timezone
from quizroom.extensions import db

ASSIGNMENT_ASSIGNED = "assigned"
ASSIGNMENT_IN_PROGRESS = "in_progress"
ASSIGNMENT_COMPLETED = "completed"


class QuizAssignment(db.Model):
    """A quiz a teacher gave one student to take on their own before a deadline."""
    __tablename__ = "quiz_assignments"

    id = db.Column(
        db.String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    quiz_id = db.Column(
        db.String(36),
        db.ForeignKey("quizzes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    teacher_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    deadline = db.Column(db.DateTime(timezone=True), nullable=False)
    # "assigned" | "in_progress" | "completed"
    status = db.Column(db.String(20), nullable=False, default=ASSIGNMENT_ASSIGNED)
    current_question_index = db.Column(db.Integer, nullable=False, default=0)
    score = db.Column(db.Integer, nullable=True)
    correct_answers = db.Column(db.Integer, nullable=True)
    # seconds from start to completion
    time_taken = db.Column(db.Integer, nullable=True)
    started_at = db.Column(db.DateTime(timezone=True), nullable=True)
    completed_at = db.Column(db.DateTime(timezone=True), nullable=True)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    quiz = db.relationship("Quiz")
    student = db.relationship("User", foreign_keys=[student_id])
    answers = db.relationship(
        "AssignmentAnswer",
        back_populates="assignment",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<QuizAssignment quiz={self.quiz_id} student={self.student_id} status={self.status}>"
