import uuid
from datetime import datetime, timezone
from quizroom.extensions import db


class SessionParticipant(db.Model):
    """
    One user's entry in one quiz session.  Team entries carry the team the
    user plays for; the (session_id, user_id) pair is unique so a second join
    never produces a second row.
    """
    __tablename__ = "session_participants"
    __table_args__ = (
        db.UniqueConstraint(
            "session_id", "user_id", name="uq_session_participants_session_user"
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
    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    team_id = db.Column(
        db.String(36),
        db.ForeignKey("teams.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_team_entry = db.Column(db.Boolean, nullable=False, default=False)
    score = db.Column(db.Integer, nullable=False, default=0)
    # shown instead of the user name when the user has none
    nickname = db.Column(db.String(100), nullable=True)
    joined_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # Relationships
    session = db.relationship("QuizSession", back_populates="participants")
    user = db.relationship("User")
    team = db.relationship("Team")
    answers = db.relationship(
        "QuizAnswer",
        back_populates="participant",
        cascade="all, delete-orphan",
    )

    @property
    def display_name(self) -> str:
        if self.user is not None and self.user.name:
            return self.user.name
        return self.nickname or (self.user.email if self.user else "")

    def __repr__(self):
        return f"<SessionParticipant session={self.session_id} user={self.user_id}>"
