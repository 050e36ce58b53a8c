from quizroom.db.models import Question, Quiz
from quizroom.db.models.quiz_session import STATUS_CANCELLED, STATUS_COMPLETED
from quizroom.extensions import db
from quizroom.services.answers import submit_answer
from quizroom.services.results import student_report, summarize
from quizroom.services.session_join import join_session


def _play(store, session, student, answers):
    join_session(store, student, session.pin)
    for question, option, remaining in answers:
        submit_answer(store, session, student, question.id, option, remaining)


def _finish(session, status=STATUS_COMPLETED):
    session.status = status
    db.session.commit()


def test_summarize_empty():
    assert summarize([]) == {
        "total_quizzes":    0,
        "average_score":    0,
        "average_accuracy": 0,
        "total_points":     0,
    }


def test_summarize_rounds_half_up():
    history = [
        {"score": 1, "accuracy": 50.0},
        {"score": 2, "accuracy": 25.0},
    ]
    assert summarize(history) == {
        "total_quizzes":    2,
        "average_score":    2,     # 1.5 rounds up
        "average_accuracy": 38,    # 37.5 rounds up
        "total_points":     3,
    }


def test_report_counts_completed_sessions_only(store, make_session, student, quiz):
    done = make_session()
    q1, q2 = quiz.questions
    _play(store, done, student, [(q1, 1, 10), (q2, 0, 5)])
    _finish(done)

    cancelled = make_session()
    _play(store, cancelled, student, [(q1, 1, 20)])
    _finish(cancelled, STATUS_CANCELLED)

    running = make_session()
    _play(store, running, student, [(q1, 1, 20)])

    report = student_report(student.id)

    assert len(report["history"]) == 1
    entry = report["history"][0]
    assert entry["session_id"] == done.id
    assert entry["quiz_title"] == "Planets"
    assert entry["score"] == 1050
    assert entry["total_questions"] == 2
    assert entry["correct_answers"] == 1
    assert entry["accuracy"] == 50.0
    assert entry["is_course_material"] is True
    assert report["overall"]["total_points"] == 1050
    assert report["course"]["total_quizzes"] == 1
    assert report["non_course"]["total_quizzes"] == 0


def test_non_course_quizzes_are_split_out(store, make_session, student, quiz, teacher):
    casual = Quiz(teacher_id=teacher.id, title="Trivia night", is_course_material=False)
    casual.questions = [
        Question(
            order_index=0,
            question_text="Best snack?",
            options=[{"text": "Crisps", "is_correct": True}, {"text": "Kale", "is_correct": False}],
            time_limit=10,
            points=100,
        )
    ]
    db.session.add(casual)
    db.session.commit()

    course_session = make_session()
    _play(store, course_session, student, [(quiz.questions[0], 1, 20)])
    _finish(course_session)

    trivia_session = make_session()
    trivia_session.quiz_id = casual.id
    db.session.commit()
    _play(store, trivia_session, student, [(casual.questions[0], 0, 10)])
    _finish(trivia_session)

    report = student_report(student.id)

    assert report["overall"]["total_quizzes"] == 2
    assert report["course"]["total_points"] == 1100
    assert report["non_course"]["total_points"] == 200
    assert report["non_course"]["average_accuracy"] == 100


def test_no_answers_means_zero_accuracy(store, make_session, student):
    session = make_session()
    join_session(store, student, session.pin)
    _finish(session)

    entry = student_report(student.id)["history"][0]
    assert entry["total_questions"] == 0
    assert entry["accuracy"] == 0.0


# ── Teacher view ──────────────────────────────────────────────────────────────

def test_teacher_sees_own_students_report(client, auth_headers, store, make_session, teacher, student, quiz):
    session = make_session()
    _play(store, session, student, [(quiz.questions[0], 1, 10)])
    _finish(session)

    resp = client.get(f"/api/results/students/{student.id}", headers=auth_headers(teacher))

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["student"]["id"] == student.id
    assert body["overall"]["total_quizzes"] == 1
    assert body["history"][0]["quiz_title"] == "Planets"
    assert body["assignments"] == []


def test_teacher_cannot_see_other_classes(client, auth_headers, make_teacher, student):
    other = make_teacher(email="other@school.test")
    resp = client.get(f"/api/results/students/{student.id}", headers=auth_headers(other))
    assert resp.status_code == 404


def test_students_cannot_use_the_teacher_report(client, auth_headers, student):
    resp = client.get(f"/api/results/students/{student.id}", headers=auth_headers(student))
    assert resp.status_code == 403
