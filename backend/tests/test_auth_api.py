from quizroom.db.models import User


def _register(client, **body):
    payload = {"email": "new@school.test", "password": "password123", "name": "New"}
    payload.update(body)
    return client.post("/api/auth/register", json=payload)


def test_teacher_registration_issues_class_code(client):
    resp = _register(client, email="t@school.test", role="teacher")
    assert resp.status_code == 201
    user = resp.get_json()["user"]
    assert user["role"] == "teacher"
    assert user["approved"] is True
    assert len(user["teacher_code"]) == 9 and user["teacher_code"][4] == "-"


def test_student_registers_with_teacher_code(client, teacher):
    formatted = f"{teacher.teacher_code[:4]}-{teacher.teacher_code[4:]}".lower()
    resp = _register(client, teacher_code=formatted)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["user"]["approved"] is False
    assert body["user"]["teacher_id"] == teacher.id
    assert body["access_token"] and body["refresh_token"]


def test_student_needs_a_code(client):
    assert _register(client).status_code == 400


def test_student_with_unknown_code(client, teacher):
    assert _register(client, teacher_code="ZZZZ-ZZZZ").status_code == 404


def test_validation(client):
    assert _register(client, password="short").status_code == 400
    assert _register(client, role="admin").status_code == 400
    assert _register(client, email="").status_code == 400


def test_duplicate_email(client, teacher):
    assert _register(client, email=teacher.email, role="teacher").status_code == 409


def test_login_and_me(client, student):
    resp = client.post("/api/auth/login", json={"email": student.email.upper(), "password": "password123"})
    assert resp.status_code == 200
    token = resp.get_json()["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.get_json()["user"]["email"] == student.email


def test_bad_password(client, student):
    resp = client.post("/api/auth/login", json={"email": student.email, "password": "wrong-pass"})
    assert resp.status_code == 401


def test_unverified_user_cannot_log_in(client, student, app):
    from quizroom.extensions import db

    db.session.get(User, student.id).verified = False
    db.session.commit()
    resp = client.post("/api/auth/login", json={"email": student.email, "password": "password123"})
    assert resp.status_code == 403


def test_refresh(client, student):
    tokens = client.post(
        "/api/auth/login", json={"email": student.email, "password": "password123"}
    ).get_json()
    resp = client.post(
        "/api/auth/refresh", headers={"Authorization": f"Bearer {tokens['refresh_token']}"}
    )
    assert resp.status_code == 200
    assert resp.get_json()["access_token"]
