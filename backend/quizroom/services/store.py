"""
Storage boundary for the join, team and answer flows.

``QuizStore`` wraps a SQLAlchemy session and exposes the handful of reads and
writes the services need.  It is constructed once in ``create_app`` and
handed to the services by the API layer.

Idempotent joining lives here: ``insert_participant_if_absent`` returns the
existing row when (session_id, user_id) is already present, including when a
concurrent request wins the race and the unique constraint rejects our insert.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from quizroom.db.models import (
    Question,
    QuizAnswer,
    QuizSession,
    SessionParticipant,
    Team,
    TeamMember,
    User,
)
from quizroom.db.models.user import ROLE_STUDENT
from quizroom.services.codes import generate_nickname, generate_unique_nicknames
from quizroom.services.errors import Conflict, Unexpected

log = logging.getLogger(__name__)


class QuizStore:

    def __init__(self, session):
        self.session = session

    # ── Sessions ─────────────────────────────────────────────────────────────

    def session_by_pin(self, pin: str) -> Optional[QuizSession]:
        return self.session.query(QuizSession).filter_by(pin=pin).first()

    def session_by_id(self, session_id: str) -> Optional[QuizSession]:
        return self.session.get(QuizSession, session_id)

    # ── Users ────────────────────────────────────────────────────────────────

    def user(self, user_id: str) -> Optional[User]:
        return self.session.get(User, user_id)

    def classmates(self, user: User) -> List[User]:
        """Approved students of the same teacher, excluding *user*."""
        if not user.teacher_id:
            return []
        return (
            self.session.query(User)
            .filter(
                User.teacher_id == user.teacher_id,
                User.role == ROLE_STUDENT,
                User.approved.is_(True),
                User.id != user.id,
            )
            .order_by(User.name.asc(), User.email.asc())
            .all()
        )

    # ── Participants ─────────────────────────────────────────────────────────

    def participant(self, session_id: str, user_id: str) -> Optional[SessionParticipant]:
        return (
            self.session.query(SessionParticipant)
            .filter_by(session_id=session_id, user_id=user_id)
            .first()
        )

    def participants(self, session_id: str) -> List[SessionParticipant]:
        return (
            self.session.query(SessionParticipant)
            .filter_by(session_id=session_id)
            .order_by(SessionParticipant.score.desc(), SessionParticipant.joined_at.asc())
            .all()
        )

    def insert_participant_if_absent(
        self,
        session_id: str,
        user_id: str,
        team_id: Optional[str] = None,
        is_team_entry: bool = False,
    ) -> Tuple[SessionParticipant, bool]:
        """
        Ensure exactly one participant row exists for (session_id, user_id).

        Returns ``(participant, created)``.  Commits on insert; pending work
        in the session must be committed by the caller beforehand.
        """
        existing = self.participant(session_id, user_id)
        if existing is not None:
            return existing, False

        user = self.user(user_id)
        row = SessionParticipant(
            session_id=session_id,
            user_id=user_id,
            team_id=team_id,
            is_team_entry=is_team_entry,
            score=0,
            nickname=None if user is not None and user.name else self.free_nickname(session_id),
        )
        self.session.add(row)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            existing = self.participant(session_id, user_id)
            if existing is None:
                log.error(
                    "participant insert rejected but no row found session=%s user=%s",
                    session_id, user_id,
                )
                raise Unexpected("could not join the quiz, please try again")
            log.info("participant already present session=%s user=%s", session_id, user_id)
            return existing, False
        except SQLAlchemyError as exc:
            self.session.rollback()
            log.error("participant insert failed session=%s user=%s: %s", session_id, user_id, exc)
            raise Unexpected("could not join the quiz, please try again") from exc
        return row, True

    def free_nickname(self, session_id: str) -> str:
        """A nickname nobody in the session uses yet, if one turns up quickly."""
        taken = {
            nickname
            for (nickname,) in self.session.query(SessionParticipant.nickname)
            .filter(
                SessionParticipant.session_id == session_id,
                SessionParticipant.nickname.isnot(None),
            )
            .all()
        }
        for nickname in generate_unique_nicknames(len(taken) + 1):
            if nickname not in taken:
                return nickname
        return generate_nickname()

    # ── Teams ────────────────────────────────────────────────────────────────

    def team(self, team_id: str) -> Optional[Team]:
        return self.session.get(Team, team_id)

    def team_by_code(self, team_code: str) -> Optional[Team]:
        return self.session.query(Team).filter_by(team_code=team_code).first()

    def teams_of(self, user_id: str) -> List[Team]:
        return (
            self.session.query(Team)
            .join(TeamMember, TeamMember.team_id == Team.id)
            .filter(TeamMember.student_id == user_id)
            .order_by(Team.created_at.asc())
            .all()
        )

    def active_team_ids(self, session_id: str) -> Set[str]:
        """Teams already playing in the session through at least one participant."""
        rows = (
            self.session.query(SessionParticipant.team_id)
            .filter(
                SessionParticipant.session_id == session_id,
                SessionParticipant.team_id.isnot(None),
            )
            .distinct()
            .all()
        )
        return {team_id for (team_id,) in rows}

    def create_team(self, team: Team, member_ids: List[str]) -> Team:
        """Insert *team* plus one membership per id and commit."""
        self.session.add(team)
        try:
            self.session.flush()
            for student_id in dict.fromkeys(member_ids):
                self.session.add(TeamMember(team_id=team.id, student_id=student_id))
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            log.warning("team insert rejected code=%s: %s", team.team_code, exc)
            raise Conflict("that team code is already taken, please try again") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            log.error("team insert failed: %s", exc)
            raise Unexpected("could not create the team, please try again") from exc
        return team

    def is_member(self, team_id: str, student_id: str) -> bool:
        return (
            self.session.query(TeamMember.id)
            .filter_by(team_id=team_id, student_id=student_id)
            .first()
            is not None
        )

    def add_membership_if_absent(self, team_id: str, student_id: str) -> bool:
        """Returns True when a membership row was added."""
        if self.is_member(team_id, student_id):
            return False
        self.session.add(TeamMember(team_id=team_id, student_id=student_id))
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            return False
        return True

    # ── Questions and answers ────────────────────────────────────────────────

    def question(self, question_id: str) -> Optional[Question]:
        return self.session.get(Question, question_id)

    def answer(self, participant_id: str, question_id: str) -> Optional[QuizAnswer]:
        return (
            self.session.query(QuizAnswer)
            .filter_by(participant_id=participant_id, question_id=question_id)
            .first()
        )

    def record_answer(self, participant: SessionParticipant, answer: QuizAnswer) -> QuizAnswer:
        """Insert *answer* and add its points to the participant in one commit."""
        self.session.add(answer)
        participant.score = (participant.score or 0) + answer.points_earned
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise Conflict("this question has already been answered") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            log.error("answer insert failed participant=%s: %s", participant.id, exc)
            raise Unexpected("could not save the answer, please try again") from exc
        return answer
