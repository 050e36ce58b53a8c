import json
import uuid
from quizroom.extensions import db

QUESTION_TYPES = ("multiple_choice", "true_false")


class Question(db.Model):
    """A single timed question; options are stored as a JSON list of
    ``{"text", "is_correct", "image_url"}`` dicts."""
    __tablename__ = "questions"
    __table_args__ = (
        db.Index("ix_questions_quiz_order", "quiz_id", "order_index"),
    )

    id = db.Column(
        db.String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    quiz_id = db.Column(
        db.String(36),
        db.ForeignKey("quizzes.id", ondelete="CASCADE"),
        nullable=False,
    )
    order_index = db.Column(db.Integer, nullable=False, default=0)
    question_text = db.Column(db.String(500), nullable=False, default="")
    # "multiple_choice" | "true_false"
    question_type = db.Column(db.String(20), nullable=False, default="multiple_choice")
    options_json = db.Column(db.Text, nullable=False, default="[]")
    time_limit = db.Column(db.Integer, nullable=False, default=30)
    points = db.Column(db.Integer, nullable=False, default=100)
    image_url = db.Column(db.Text, nullable=True)
    video_url = db.Column(db.Text, nullable=True)
    gif_url = db.Column(db.Text, nullable=True)

    quiz = db.relationship("Quiz", back_populates="questions")

    @property
    def options(self) -> list:
        try:
            return json.loads(self.options_json) if self.options_json else []
        except ValueError:
            return []

    @options.setter
    def options(self, value: list) -> None:
        self.options_json = json.dumps(value or [])

    def __repr__(self):
        return f"<Question id={self.id} quiz={self.quiz_id} #{self.order_index}>"
