import pytest

from quizroom.services.scoring import score


def test_wrong_answer_scores_nothing():
    assert score(False, 15, 20, 1000) == 0
    assert score(False, 0, 20, 1000) == 0


def test_instant_answer_gets_full_bonus():
    assert score(True, 20, 20, 1000) == 1100


def test_last_second_answer_gets_base_points():
    assert score(True, 0, 20, 1000) == 1000


def test_half_time_remaining():
    assert score(True, 10, 20, 1000) == 1050


@pytest.mark.parametrize(
    "remaining, limit, expected",
    [
        (1, 3, 133),    # 33.33 floors to 33
        (2, 3, 166),    # 66.67 floors to 66
        (29.9, 30, 199),
    ],
)
def test_bonus_is_floored(remaining, limit, expected):
    assert score(True, remaining, limit, 100) == expected


def test_returns_int():
    assert isinstance(score(True, 7.5, 30, 100), int)
