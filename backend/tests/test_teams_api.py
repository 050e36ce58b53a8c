from quizroom.db.models.quiz_session import MODE_TEAM


def test_create_then_join_by_code(client, auth_headers, student, make_student, make_session):
    session = make_session(mode=MODE_TEAM)
    wanda = make_student(name="Wanda")
    keesha = make_student(name="Keesha")

    mates = client.get("/api/teams/classmates", headers=auth_headers(student)).get_json()
    assert {m["name"] for m in mates} == {"Wanda", "Keesha"}

    created = client.post(
        "/api/teams",
        json={"session_id": session.id, "name": "Rockets", "member_ids": [wanda.id]},
        headers=auth_headers(student),
    )
    assert created.status_code == 201
    body = created.get_json()
    assert body["intent"] == "show_team_code"
    code = body["team_code"]

    preview = client.post(
        "/api/teams/lookup",
        json={"session_id": session.id, "team_code": code.lower()},
        headers=auth_headers(keesha),
    ).get_json()
    assert preview["name"] == "Rockets"
    assert {m["name"] for m in preview["members"]} == {"Arnold", "Wanda"}

    joined = client.post(
        "/api/teams/join",
        json={"session_id": session.id, "team_code": code},
        headers=auth_headers(keesha),
    )
    assert joined.status_code == 200
    assert joined.get_json()["intent"] == "live_quiz"

    again = client.post(
        "/api/teams/join",
        json={"session_id": session.id, "team_code": code},
        headers=auth_headers(keesha),
    )
    assert again.status_code == 409
    assert again.get_json()["code"] == "already_joined"

    mine = client.get("/api/teams/mine", headers=auth_headers(keesha)).get_json()
    assert [t["name"] for t in mine] == ["Rockets"]


def test_member_ids_must_be_a_list(client, auth_headers, student, make_session):
    session = make_session(mode=MODE_TEAM)
    resp = client.post(
        "/api/teams",
        json={"session_id": session.id, "name": "Rockets", "member_ids": "everyone"},
        headers=auth_headers(student),
    )
    assert resp.status_code == 400


def test_unknown_session(client, auth_headers, student):
    resp = client.post("/api/teams/join", json={"session_id": "missing", "team_code": "ABCD"},
                       headers=auth_headers(student))
    assert resp.status_code == 404


def test_teachers_cannot_form_teams(client, auth_headers, teacher):
    assert client.get("/api/teams/classmates", headers=auth_headers(teacher)).status_code == 403
