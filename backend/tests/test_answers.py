import pytest

from quizroom.db.models import Team, TeamMember
from quizroom.db.models.quiz_session import MODE_TEAM, STATUS_PENDING
from quizroom.extensions import db
from quizroom.services.answers import leaderboard, submit_answer
from quizroom.services.errors import Conflict, InvalidInput, NotFound
from quizroom.services.session_join import join_session


@pytest.fixture()
def live(store, make_session, student):
    session = make_session()
    join_session(store, student, session.pin)
    return session


def test_correct_answer_scores_with_time_bonus(store, live, student, quiz):
    first = quiz.questions[0]
    result = submit_answer(store, live, student, first.id, 1, 10)

    assert result == {
        "question_id":   first.id,
        "is_correct":    True,
        "points_earned": 1050,
        "score":         1050,
    }
    assert store.participant(live.id, student.id).score == 1050
    answer = store.answer(store.participant(live.id, student.id).id, first.id)
    assert answer.time_taken == 10


def test_wrong_answer_scores_zero(store, live, student, quiz):
    result = submit_answer(store, live, student, quiz.questions[0].id, 0, 20)
    assert result["is_correct"] is False
    assert result["points_earned"] == 0


def test_scores_accumulate(store, live, student, quiz):
    submit_answer(store, live, student, quiz.questions[0].id, 1, 20)
    result = submit_answer(store, live, student, quiz.questions[1].id, 1, 0)
    assert result["score"] == 1100 + 100


def test_second_answer_is_rejected(store, live, student, quiz):
    submit_answer(store, live, student, quiz.questions[0].id, 1, 5)
    with pytest.raises(Conflict):
        submit_answer(store, live, student, quiz.questions[0].id, 0, 5)


def test_outsider_cannot_answer(store, live, make_student, quiz):
    with pytest.raises(NotFound):
        submit_answer(store, live, make_student(name="Lurker"), quiz.questions[0].id, 1, 5)


def test_session_must_be_running(store, make_session, student, quiz):
    session = make_session(status=STATUS_PENDING)
    join_session(store, student, session.pin)
    with pytest.raises(Conflict):
        submit_answer(store, session, student, quiz.questions[0].id, 1, 5)


@pytest.mark.parametrize("option, remaining", [(2, 5), (-1, 5), (1, -1), (1, 21)])
def test_out_of_range_input(store, live, student, quiz, option, remaining):
    with pytest.raises(InvalidInput):
        submit_answer(store, live, student, quiz.questions[0].id, option, remaining)


def test_question_from_another_quiz(store, live, student):
    with pytest.raises(NotFound):
        submit_answer(store, live, student, "no-such-question", 0, 5)


def test_leaderboard_ranks_players_and_sums_teams(store, make_session, student, make_student, quiz):
    session = make_session(mode=MODE_TEAM)
    mate = make_student(name="Wanda")
    team = Team(name="Rockets", creator_id=student.id, teacher_id=student.teacher_id, team_code="RKTS")
    db.session.add(team)
    db.session.flush()
    db.session.add_all([
        TeamMember(team_id=team.id, student_id=student.id),
        TeamMember(team_id=team.id, student_id=mate.id),
    ])
    db.session.commit()

    join_session(store, mate, session.pin)
    join_session(store, student, session.pin, confirm=True)
    submit_answer(store, session, student, quiz.questions[0].id, 1, 20)
    submit_answer(store, session, mate, quiz.questions[0].id, 1, 0)

    board = leaderboard(store, session)

    assert [p["name"] for p in board["players"]] == ["Arnold", "Wanda"]
    assert [p["score"] for p in board["players"]] == [1100, 1000]
    assert board["teams"] == [
        {"team_id": team.id, "name": "Rockets", "score": 2100, "members": 2}
    ]
    assert len(leaderboard(store, session, limit=1)["players"]) == 1
