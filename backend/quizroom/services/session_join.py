"""
Session join resolver.

Public API
----------
    find_joinable_session(store, pin)                          -> QuizSession
    join_session(store, user, pin, team_id=None, confirm=False) -> JoinOutcome

Decision table for a PIN entered by an approved student:

    session missing                      -> NotFound
    session completed / cancelled        -> AlreadyEnded
    classic mode                         -> participant (is_team_entry=False), LIVE_QUIZ
    team mode, one team, already playing -> CONFIRM_REJOIN until confirm=True
                                            (also when team_id names it)
    team mode, several teams, team_id    -> participant for that team, LIVE_QUIZ
    team mode, one team, not playing     -> participant for that team, LIVE_QUIZ
    team mode, several teams             -> PICK_TEAM with every candidate
    team mode, no team                   -> NoTeam

A participant that already exists for (session, user) counts as a successful
join, so double submissions are harmless.  Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Optional

from quizroom.db.models import QuizSession, User
from quizroom.db.models.quiz_session import MODE_CLASSIC
from quizroom.services.codes import is_valid_pin
from quizroom.services.errors import (
    AlreadyEnded,
    InvalidInput,
    NoTeam,
    NotFound,
    PermissionDenied,
)
from quizroom.services.outcomes import Intent, JoinOutcome, TeamCandidate
from quizroom.services.store import QuizStore

log = logging.getLogger(__name__)


def ensure_can_join(user: User) -> None:
    if not user.approved:
        raise PermissionDenied(
            "your account is awaiting teacher approval, you can join quizzes once approved"
        )


def ensure_joinable(session: QuizSession) -> None:
    if session.is_terminal:
        raise AlreadyEnded("this quiz has already ended")


def find_joinable_session(store: QuizStore, pin: str) -> QuizSession:
    """Look the session up by PIN and refuse sessions that are over."""
    pin = (pin or "").strip()
    if not is_valid_pin(pin):
        raise InvalidInput("please enter a valid 6-digit PIN")

    session = store.session_by_pin(pin)
    if session is None:
        log.warning("join: no session for pin=%s", pin)
        raise NotFound("invalid PIN, quiz not found")
    ensure_joinable(session)
    return session


def join_session(
    store: QuizStore,
    user: User,
    pin: str,
    team_id: Optional[str] = None,
    confirm: bool = False,
) -> JoinOutcome:
    ensure_can_join(user)
    session = find_joinable_session(store, pin)

    if session.mode == MODE_CLASSIC:
        return _enter(store, session, user, team_id=None)
    return _join_as_team(store, session, user, team_id, confirm)


# ── Team mode ─────────────────────────────────────────────────────────────────

def _join_as_team(
    store: QuizStore,
    session: QuizSession,
    user: User,
    team_id: Optional[str],
    confirm: bool,
) -> JoinOutcome:
    teams = store.teams_of(user.id)
    if not teams:
        raise NoTeam("you are not in a team yet, create a team or join one with a team code first")

    active = store.active_team_ids(session.id)
    candidates = [
        TeamCandidate(
            team_id=t.id,
            name=t.name,
            team_code=t.team_code,
            is_shared_device=t.is_shared_device,
            active=t.id in active,
        )
        for t in teams
    ]

    chosen = None
    if team_id is not None:
        chosen = next((c for c in candidates if c.team_id == team_id), None)
        if chosen is None:
            raise InvalidInput("you are not a member of that team")

    # A lone team that is already playing always needs confirmation, even
    # when the client names it explicitly.
    if len(candidates) == 1:
        only = candidates[0]
        if only.active and not confirm:
            log.info("join: team=%s already playing session=%s, asking user=%s to confirm",
                     only.team_id, session.id, user.id)
            return JoinOutcome(
                intent=Intent.CONFIRM_REJOIN,
                session_id=session.id,
                team_id=only.team_id,
                candidates=candidates,
                message=f"team {only.name} is already playing, rejoin it?",
            )
        return _enter(store, session, user, team_id=only.team_id)

    if chosen is not None:
        return _enter(store, session, user, team_id=chosen.team_id)

    return JoinOutcome(
        intent=Intent.PICK_TEAM,
        session_id=session.id,
        candidates=candidates,
        message="choose the team you are playing for",
    )


# ── Participant insert ───────────────────────────────────────────────────────

def _enter(
    store: QuizStore,
    session: QuizSession,
    user: User,
    team_id: Optional[str],
) -> JoinOutcome:
    participant, created = store.insert_participant_if_absent(
        session_id=session.id,
        user_id=user.id,
        team_id=team_id,
        is_team_entry=team_id is not None,
    )
    if created:
        log.info("join: user=%s joined session=%s team=%s", user.id, session.id, team_id)
    return JoinOutcome(
        intent=Intent.LIVE_QUIZ,
        session_id=session.id,
        team_id=participant.team_id,
        participant_id=participant.id,
        created=created,
    )
