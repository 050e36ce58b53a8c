import uuid
from datetime import datetime, timezone
from quizroom.extensions import db


class AssignmentAnswer(db.Model):
    __tablename__ = "assignment_answers"
    __table_args__ = (
        db.UniqueConstraint(
            "assignment_id", "question_id", name="uq_assignment_answers_assignment_question"
        ),
    )

    id = db.Column(
        db.String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    assignment_id = db.Column(
        db.String(36),
        db.ForeignKey("quiz_assignments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    question_id = db.Column(
        db.String(36),
        db.ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    )
    selected_option_index = db.Column(db.Integer, nullable=False)
    is_correct = db.Column(db.Boolean, nullable=False, default=False)
    points_earned = db.Column(db.Integer, nullable=False, default=0)
    time_taken = db.Column(db.Float, nullable=False, default=0.0)
    answered_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    assignment = db.relationship("QuizAssignment", back_populates="answers")

    def __repr__(self):
        return f"<AssignmentAnswer assignment={self.assignment_id} question={self.question_id}>"
