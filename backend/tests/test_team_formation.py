import pytest

from quizroom.db.models import SessionParticipant, Team
from quizroom.db.models.quiz_session import MODE_TEAM, STATUS_COMPLETED
from quizroom.services.codes import CODE_ALPHABET
from quizroom.services.errors import (
    AlreadyEnded,
    AlreadyJoined,
    InvalidInput,
    NotFound,
    NotJoinable,
)
from quizroom.services.outcomes import Intent
from quizroom.services.team_formation import (
    create_team,
    find_team_by_code,
    join_team_by_code,
    list_classmates,
    list_my_teams,
)


@pytest.fixture()
def session(make_session):
    return make_session(mode=MODE_TEAM)


@pytest.fixture()
def mates(make_student):
    return [make_student(name="Wanda"), make_student(name="Keesha")]


def test_classmates_are_approved_peers(store, student, mates, make_student, make_teacher):
    make_student(name="Waiting", approved=False)
    elsewhere = make_teacher(email="other@school.test")
    make_student(name="Stranger", owner=elsewhere)

    names = [c.name for c in list_classmates(store, student)]
    assert names == ["Keesha", "Wanda"]


def test_create_team_shows_code(store, session, student, mates):
    outcome = create_team(store, session, student, "  Rockets ", [m.id for m in mates])

    assert outcome.intent is Intent.SHOW_TEAM_CODE
    assert len(outcome.team_code) == 4
    assert set(outcome.team_code) <= set(CODE_ALPHABET)

    team = store.team(outcome.team_id)
    assert team.name == "Rockets"
    assert team.creator_id == student.id
    assert team.teacher_id == student.teacher_id
    assert {m.student_id for m in team.members} == {student.id, *[m.id for m in mates]}

    participant = store.participant(session.id, student.id)
    assert participant.team_id == team.id
    assert participant.is_team_entry is True


def test_shared_device_team_goes_live(store, session, student, mates):
    outcome = create_team(store, session, student, "Couch", [mates[0].id], shared_device=True)
    assert outcome.intent is Intent.LIVE_QUIZ
    assert store.team(outcome.team_id).is_shared_device is True


def test_creator_in_selection_is_ignored(store, session, student, mates):
    outcome = create_team(store, session, student, "Solo+", [student.id, mates[0].id, mates[0].id])
    assert len(store.team(outcome.team_id).members) == 2


@pytest.mark.parametrize("name", ["", "   ", "x" * 101])
def test_team_name_is_validated(store, session, student, mates, name):
    with pytest.raises(InvalidInput):
        create_team(store, session, student, name, [mates[0].id])
    assert Team.query.count() == 0


def test_needs_a_teammate(store, session, student):
    with pytest.raises(InvalidInput):
        create_team(store, session, student, "Lonely", [student.id])


def test_teammates_must_be_classmates(store, session, student, make_teacher, make_student):
    stranger = make_student(name="Stranger", owner=make_teacher(email="other@school.test"))
    with pytest.raises(InvalidInput):
        create_team(store, session, student, "Mixed", [stranger.id])


def test_cannot_create_for_ended_session(store, make_session, student, mates):
    ended = make_session(mode=MODE_TEAM, status=STATUS_COMPLETED)
    with pytest.raises(AlreadyEnded):
        create_team(store, ended, student, "Late", [mates[0].id])


def test_creator_already_playing_cannot_start_a_second_team(store, session, student, mates):
    first = create_team(store, session, student, "Rockets", [mates[0].id])

    with pytest.raises(AlreadyJoined):
        create_team(store, session, student, "Comets", [mates[1].id])

    assert [t.id for t in Team.query.all()] == [first.team_id]
    assert store.participant(session.id, student.id).team_id == first.team_id


# ── Join by code ──────────────────────────────────────────────────────────────

def test_join_by_code(store, session, student, mates):
    created = create_team(store, session, student, "Rockets", [mates[0].id])
    newcomer = mates[1]

    outcome = join_team_by_code(store, session, newcomer, f" {created.team_code.lower()} ")

    assert outcome.intent is Intent.LIVE_QUIZ
    assert outcome.team_id == created.team_id
    assert store.is_member(created.team_id, newcomer.id)
    participant = store.participant(session.id, newcomer.id)
    assert participant.team_id == created.team_id
    assert participant.is_team_entry is True
    assert [t.id for t in list_my_teams(store, newcomer)] == [created.team_id]


def test_join_by_code_twice(store, session, student, mates):
    created = create_team(store, session, student, "Rockets", [mates[0].id])
    join_team_by_code(store, session, mates[0], created.team_code)

    with pytest.raises(AlreadyJoined):
        join_team_by_code(store, session, mates[0], created.team_code)
    assert SessionParticipant.query.filter_by(session_id=session.id, user_id=mates[0].id).count() == 1


@pytest.mark.parametrize("code", ["", "ABC", "ABCDE"])
def test_code_length(store, session, student, code):
    with pytest.raises(InvalidInput):
        find_team_by_code(store, session, student, code)


def test_unknown_code(store, session, student):
    with pytest.raises(NotFound):
        find_team_by_code(store, session, student, "ZZZZ")


def test_shared_device_team_cannot_be_joined(store, session, student, mates):
    created = create_team(store, session, student, "Couch", [mates[0].id], shared_device=True)
    with pytest.raises(NotJoinable):
        join_team_by_code(store, session, mates[1], created.team_code)
