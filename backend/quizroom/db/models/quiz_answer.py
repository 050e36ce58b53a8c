import uuid
from datetime import datetime, timezone
from quizroom.extensions import db


class QuizAnswer(db.Model):
    __tablename__ = "quiz_answers"
    __table_args__ = (
        db.UniqueConstraint(
            "participant_id", "question_id", name="uq_quiz_answers_participant_question"
        ),
    )

    id = db.Column(
        db.String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    session_id = db.Column(
        db.String(36),
        db.ForeignKey("quiz_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    participant_id = db.Column(
        db.String(36),
        db.ForeignKey("session_participants.id", ondelete="CASCADE"),
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
    # seconds between question start and submission
    time_taken = db.Column(db.Float, nullable=False, default=0.0)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    participant = db.relationship("SessionParticipant", back_populates="answers")

    def __repr__(self):
        return f"<QuizAnswer participant={self.participant_id} question={self.question_id}>"
