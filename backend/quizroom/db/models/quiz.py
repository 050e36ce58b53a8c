import uuid
from datetime import datetime, timezone
from quizroom.extensions import db


class Quiz(db.Model):
    __tablename__ = "quizzes"

    id = db.Column(
        db.String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    teacher_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    # NULL counts as course material in reports
    is_course_material = db.Column(db.Boolean, nullable=True, default=True)
    is_public = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # Relationships
    questions = db.relationship(
        "Question",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="Question.order_index",
    )

    def __repr__(self):
        return f"<Quiz id={self.id} title={self.title!r}>"
