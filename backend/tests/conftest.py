import pytest
from flask_jwt_extended import create_access_token

from quizroom import create_app
from quizroom.api.common import get_store
from quizroom.db.models import Question, Quiz, QuizSession, User
from quizroom.db.models.quiz_session import MODE_CLASSIC, STATUS_ACTIVE
from quizroom.db.models.user import ROLE_STUDENT, ROLE_TEACHER
from quizroom.extensions import db
from quizroom.services.codes import generate_pin, generate_teacher_code


@pytest.fixture()
def app(tmp_path):
    app = create_app("testing", overrides={"MEDIA_DIR": str(tmp_path / "media")})
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def store(app):
    return get_store()


# ── Factories ─────────────────────────────────────────────────────────────────

@pytest.fixture()
def make_teacher(app):
    def _make(email="teacher@school.test", name="Ms Frizzle"):
        user = User(email=email, name=name, role=ROLE_TEACHER, approved=True,
                    teacher_code=generate_teacher_code())
        user.set_password("password123")
        db.session.add(user)
        db.session.commit()
        return user
    return _make


@pytest.fixture()
def teacher(make_teacher):
    return make_teacher()


@pytest.fixture()
def make_student(app, teacher):
    counter = {"n": 0}

    def _make(name="Student", approved=True, owner=None):
        counter["n"] += 1
        user = User(
            email=f"student{counter['n']}@school.test",
            name=name,
            role=ROLE_STUDENT,
            approved=approved,
            teacher_id=(owner or teacher).id,
        )
        user.set_password("password123")
        db.session.add(user)
        db.session.commit()
        return user
    return _make


@pytest.fixture()
def student(make_student):
    return make_student(name="Arnold")


@pytest.fixture()
def quiz(teacher):
    quiz = Quiz(teacher_id=teacher.id, title="Planets")
    quiz.questions = [
        Question(
            order_index=0,
            question_text="Which planet is the largest?",
            options=[
                {"text": "Mars", "is_correct": False},
                {"text": "Jupiter", "is_correct": True},
            ],
            time_limit=20,
            points=1000,
        ),
        Question(
            order_index=1,
            question_text="Pluto is a planet.",
            question_type="true_false",
            options=[
                {"text": "True", "is_correct": False},
                {"text": "False", "is_correct": True},
            ],
            time_limit=10,
            points=100,
        ),
    ]
    db.session.add(quiz)
    db.session.commit()
    return quiz


@pytest.fixture()
def make_session(quiz, teacher):
    def _make(mode=MODE_CLASSIC, status=STATUS_ACTIVE):
        session = QuizSession(
            pin=generate_pin(),
            mode=mode,
            status=status,
            quiz_id=quiz.id,
            host_id=teacher.id,
        )
        db.session.add(session)
        db.session.commit()
        return session
    return _make


@pytest.fixture()
def auth_headers(app):
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(identity=user.id)}"}
    return _headers
