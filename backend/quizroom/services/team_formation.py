"""
Team formation: a captain creates a team, teammates join it by code.

Both flows run in the context of the team-mode session the students are
about to play, and both end with a participant row for the caller.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from quizroom.db.models import QuizSession, Team, User
from quizroom.services.codes import TEAM_CODE_LENGTH, generate_team_code, normalize_team_code
from quizroom.services.errors import (
    AlreadyJoined,
    InvalidInput,
    NotFound,
    NotJoinable,
)
from quizroom.services.outcomes import Intent, JoinOutcome
from quizroom.services.session_join import ensure_can_join, ensure_joinable
from quizroom.services.store import QuizStore

log = logging.getLogger(__name__)

MAX_TEAM_NAME = 100


def create_team(
    store: QuizStore,
    session: QuizSession,
    creator: User,
    name: str,
    member_ids: Iterable[str],
    shared_device: bool = False,
) -> JoinOutcome:
    """
    Create a team with *creator* plus the selected classmates and enter the
    creator into *session* as the team's entry.

    Shared-device teams go straight to the quiz; otherwise the outcome
    carries the team code for the captain to hand out.
    """
    ensure_can_join(creator)
    ensure_joinable(session)

    name = (name or "").strip()
    if not name:
        raise InvalidInput("please enter a team name")
    if len(name) > MAX_TEAM_NAME:
        raise InvalidInput(f"team name must be at most {MAX_TEAM_NAME} characters")

    selected = [m for m in dict.fromkeys(member_ids or []) if m != creator.id]
    if not selected:
        raise InvalidInput("please select at least one teammate")

    classmate_ids = {c.id for c in store.classmates(creator)}
    unknown = [m for m in selected if m not in classmate_ids]
    if unknown:
        raise InvalidInput("teammates must be approved classmates")
    if store.participant(session.id, creator.id) is not None:
        raise AlreadyJoined("you have already joined this quiz")

    team = Team(
        name=name,
        creator_id=creator.id,
        teacher_id=creator.teacher_id,
        team_code=generate_team_code(),
        is_shared_device=bool(shared_device),
    )
    store.create_team(team, [creator.id, *selected])
    log.info("team: user=%s created team=%s code=%s members=%d shared=%s",
             creator.id, team.id, team.team_code, len(selected) + 1, team.is_shared_device)

    participant, created = store.insert_participant_if_absent(
        session_id=session.id,
        user_id=creator.id,
        team_id=team.id,
        is_team_entry=True,
    )

    if team.is_shared_device:
        return JoinOutcome(
            intent=Intent.LIVE_QUIZ,
            session_id=session.id,
            team_id=participant.team_id,
            team_code=team.team_code,
            participant_id=participant.id,
            created=created,
        )
    return JoinOutcome(
        intent=Intent.SHOW_TEAM_CODE,
        session_id=session.id,
        team_id=participant.team_id,
        team_code=team.team_code,
        participant_id=participant.id,
        created=created,
        message="share this code with your teammates so they can join",
    )


def find_team_by_code(store: QuizStore, session: QuizSession, user: User, raw_code: str) -> Team:
    """Resolve a typed team code to a team the caller may join."""
    code = normalize_team_code(raw_code)
    if len(code) != TEAM_CODE_LENGTH:
        raise InvalidInput("please enter a valid 4-character team code")

    team = store.team_by_code(code)
    if team is None:
        log.warning("team: no team for code=%s", code)
        raise NotFound("team not found, check the code and try again")
    if team.is_shared_device:
        raise NotJoinable("this team plays on a single shared device and cannot be joined with a code")
    if store.participant(session.id, user.id) is not None:
        raise AlreadyJoined("you have already joined this quiz")
    return team


def join_team_by_code(store: QuizStore, session: QuizSession, user: User, raw_code: str) -> JoinOutcome:
    ensure_can_join(user)
    ensure_joinable(session)
    team = find_team_by_code(store, session, user, raw_code)

    if store.add_membership_if_absent(team.id, user.id):
        log.info("team: user=%s added to team=%s", user.id, team.id)

    participant, created = store.insert_participant_if_absent(
        session_id=session.id,
        user_id=user.id,
        team_id=team.id,
        is_team_entry=True,
    )
    if not created:
        raise AlreadyJoined("you have already joined this quiz")

    log.info("team: user=%s joined session=%s with team=%s", user.id, session.id, team.id)
    return JoinOutcome(
        intent=Intent.LIVE_QUIZ,
        session_id=session.id,
        team_id=team.id,
        team_code=team.team_code,
        participant_id=participant.id,
        created=True,
    )


def list_classmates(store: QuizStore, user: User) -> List[User]:
    return store.classmates(user)


def list_my_teams(store: QuizStore, user: User) -> List[Team]:
    return store.teams_of(user.id)
