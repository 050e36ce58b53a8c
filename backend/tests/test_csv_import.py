import pytest

from quizroom.services.csv_import import (
    CSV_TEMPLATE,
    parse_csv_to_questions,
    parse_kahoot_csv,
    parse_users_csv,
    title_from_file_name,
)
from quizroom.services.errors import InvalidInput

KAHOOT = """\
"Space Quiz"
Question Number,Question,Answer 1,Answer 2,Answer 3,Answer 4,Correct Answer(s)
1,"Largest planet, by far?",Mars,Jupiter,Venus,Earth,2
2,Sun is a star,True,False,1
3,Pick primes,2,4,5,9,"1,3"
4,Broken row,a,b
5,No valid answer,a,b,c,d,9
"""


def test_kahoot_export():
    parsed = parse_kahoot_csv(KAHOOT, "ignored.csv")
    assert parsed["title"] == "Space Quiz"

    questions = parsed["questions"]
    assert len(questions) == 4

    mc = questions[0]
    assert mc["question_text"] == "Largest planet, by far?"
    assert mc["question_type"] == "multiple_choice"
    assert [o["is_correct"] for o in mc["options"]] == [False, True, False, False]
    assert mc["time_limit"] == 30 and mc["points"] == 100

    tf = questions[1]
    assert tf["question_type"] == "true_false"
    assert [o["text"] for o in tf["options"]] == ["True", "False"]
    assert tf["options"][0]["is_correct"] is True

    multi = questions[2]
    assert [o["is_correct"] for o in multi["options"]] == [True, False, True, False]

    fallback = questions[3]
    assert fallback["options"][0]["is_correct"] is True


def test_title_from_file_name_when_header_first():
    content = "Question Number,Question,A1,A2,Correct\n1,Q?,yes,no,1\n"
    parsed = parse_kahoot_csv(content, "biology_week-3.csv")
    assert parsed["title"] == "Biology Week 3"


def test_title_from_file_name():
    assert title_from_file_name("quiz_sample.CSV") == "Quiz Sample"


@pytest.mark.parametrize(
    "content",
    [
        "",
        "only one line",
        "Question Number,Question,A1,A2,Correct\n1,too,few\n",
    ],
)
def test_kahoot_rejects_unusable_files(content):
    with pytest.raises(InvalidInput):
        parse_kahoot_csv(content)


def test_simple_template():
    questions = parse_csv_to_questions(CSV_TEMPLATE)
    assert len(questions) == 3

    first = questions[0]
    assert first["question_text"] == "What is 2+2?"
    assert [o["text"] for o in first["options"]] == ["3", "4", "5", "6"]
    assert [o["is_correct"] for o in first["options"]] == [False, True, False, False]

    tf = questions[1]
    assert tf["question_type"] == "true_false"
    assert tf["options"] == [
        {"text": "True", "is_correct": True},
        {"text": "False", "is_correct": False},
    ]
    assert tf["time_limit"] == 20 and tf["points"] == 50


def test_simple_defaults():
    content = "header\nQ?,,a,b,,,,,\n"
    question = parse_csv_to_questions(content)[0]
    assert question["question_type"] == "multiple_choice"
    assert question["time_limit"] == 30
    assert question["points"] == 100
    assert question["options"][0]["is_correct"] is True


def test_users_roster():
    rows = parse_users_csv(
        "name,email,role,student_id\n"
        "Ada,ada@school.test,,S1\n"
        "Grace,grace@school.test,Teacher\n"
        "broken\n"
    )
    assert rows == [
        {"name": "Ada", "email": "ada@school.test", "role": "student", "student_id": "S1"},
        {"name": "Grace", "email": "grace@school.test", "role": "teacher", "student_id": None},
    ]
