import pytest

from quizroom.db.models import SessionParticipant, Team, TeamMember
from quizroom.db.models.quiz_session import (
    MODE_TEAM,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_PENDING,
)
from quizroom.extensions import db
from quizroom.services.errors import (
    AlreadyEnded,
    InvalidInput,
    NoTeam,
    NotFound,
    PermissionDenied,
)
from quizroom.services.outcomes import Intent
from quizroom.services.session_join import join_session


def _team(owner, *members, code="TEAM"):
    team = Team(name=f"Team {code}", creator_id=owner.id, teacher_id=owner.teacher_id, team_code=code)
    db.session.add(team)
    db.session.flush()
    for user in (owner, *members):
        db.session.add(TeamMember(team_id=team.id, student_id=user.id))
    db.session.commit()
    return team


def _rows(session, user):
    return SessionParticipant.query.filter_by(session_id=session.id, user_id=user.id).count()


# ── Classic mode ──────────────────────────────────────────────────────────────

def test_classic_join_creates_participant(store, make_session, student):
    session = make_session()
    outcome = join_session(store, student, session.pin)

    assert outcome.intent is Intent.LIVE_QUIZ
    assert outcome.session_id == session.id
    assert outcome.created is True
    participant = store.participant(session.id, student.id)
    assert participant.is_team_entry is False
    assert participant.team_id is None
    assert participant.score == 0


def test_pending_session_is_joinable(store, make_session, student):
    session = make_session(status=STATUS_PENDING)
    assert join_session(store, student, session.pin).intent is Intent.LIVE_QUIZ


def test_joining_twice_keeps_one_row(store, make_session, student):
    session = make_session()
    first = join_session(store, student, session.pin)
    second = join_session(store, student, session.pin)

    assert second.intent is Intent.LIVE_QUIZ
    assert second.created is False
    assert second.participant_id == first.participant_id
    assert _rows(session, student) == 1


def test_pin_is_trimmed(store, make_session, student):
    session = make_session()
    assert join_session(store, student, f"  {session.pin} ").intent is Intent.LIVE_QUIZ


def test_malformed_pin(store, student):
    with pytest.raises(InvalidInput):
        join_session(store, student, "12ab56")


def test_unknown_pin(store, make_session, student):
    session = make_session()
    unknown = "000000" if session.pin != "000000" else "999999"
    with pytest.raises(NotFound):
        join_session(store, student, unknown)


@pytest.mark.parametrize("mode", ["classic", MODE_TEAM])
@pytest.mark.parametrize("status", [STATUS_COMPLETED, STATUS_CANCELLED])
def test_ended_session_is_refused(store, make_session, student, mode, status):
    session = make_session(mode=mode, status=status)
    with pytest.raises(AlreadyEnded):
        join_session(store, student, session.pin)
    assert _rows(session, student) == 0


def test_unapproved_student_cannot_join(store, make_session, make_student):
    session = make_session()
    pending = make_student(name="Pending", approved=False)
    with pytest.raises(PermissionDenied):
        join_session(store, pending, session.pin)
    assert _rows(session, pending) == 0


def test_student_without_name_gets_nickname(store, make_session, make_student):
    session = make_session()
    anonymous = make_student(name=None)
    join_session(store, anonymous, session.pin)

    participant = store.participant(session.id, anonymous.id)
    assert participant.nickname
    assert participant.display_name == participant.nickname


# ── Team mode ─────────────────────────────────────────────────────────────────

def test_team_mode_without_team(store, make_session, student):
    session = make_session(mode=MODE_TEAM)
    with pytest.raises(NoTeam):
        join_session(store, student, session.pin)


def test_single_team_not_playing_enters_directly(store, make_session, student, make_student):
    session = make_session(mode=MODE_TEAM)
    team = _team(student, make_student(name="Wanda"))

    outcome = join_session(store, student, session.pin)

    assert outcome.intent is Intent.LIVE_QUIZ
    assert outcome.team_id == team.id
    participant = store.participant(session.id, student.id)
    assert participant.is_team_entry is True
    assert participant.team_id == team.id


def test_single_active_team_needs_confirmation(store, make_session, student, make_student):
    session = make_session(mode=MODE_TEAM)
    mate = make_student(name="Wanda")
    team = _team(student, mate)
    join_session(store, mate, session.pin)

    outcome = join_session(store, student, session.pin)

    assert outcome.intent is Intent.CONFIRM_REJOIN
    assert outcome.team_id == team.id
    assert [c.team_id for c in outcome.candidates] == [team.id]
    assert outcome.candidates[0].active is True
    assert _rows(session, student) == 0

    confirmed = join_session(store, student, session.pin, confirm=True)
    assert confirmed.intent is Intent.LIVE_QUIZ
    assert _rows(session, student) == 1


def test_naming_the_active_team_still_needs_confirmation(store, make_session, student, make_student):
    session = make_session(mode=MODE_TEAM)
    mate = make_student(name="Wanda")
    team = _team(student, mate)
    join_session(store, mate, session.pin)

    outcome = join_session(store, student, session.pin, team_id=team.id)

    assert outcome.intent is Intent.CONFIRM_REJOIN
    assert _rows(session, student) == 0

    confirmed = join_session(store, student, session.pin, team_id=team.id, confirm=True)
    assert confirmed.intent is Intent.LIVE_QUIZ
    assert _rows(session, student) == 1


def test_several_teams_asks_to_pick(store, make_session, student, make_student):
    session = make_session(mode=MODE_TEAM)
    first = _team(student, make_student(name="Wanda"), code="AAAA")
    second = _team(student, make_student(name="Keesha"), code="BBBB")

    outcome = join_session(store, student, session.pin)

    assert outcome.intent is Intent.PICK_TEAM
    assert {c.team_id for c in outcome.candidates} == {first.id, second.id}
    assert _rows(session, student) == 0

    picked = join_session(store, student, session.pin, team_id=second.id)
    assert picked.intent is Intent.LIVE_QUIZ
    assert store.participant(session.id, student.id).team_id == second.id


def test_picking_a_foreign_team(store, make_session, student, make_student):
    session = make_session(mode=MODE_TEAM)
    _team(student, make_student(name="Wanda"), code="AAAA")
    other = make_student(name="Tim")
    foreign = _team(other, make_student(name="Phoebe"), code="CCCC")

    with pytest.raises(InvalidInput):
        join_session(store, student, session.pin, team_id=foreign.id)


def test_outcome_serializes_intent_value(store, make_session, student):
    session = make_session()
    body = join_session(store, student, session.pin).to_dict()
    assert body["intent"] == "live_quiz"
    assert body["candidates"] == []
