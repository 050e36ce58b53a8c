import io
import os


def test_teacher_approves_and_revokes(client, auth_headers, teacher, make_student):
    pending = make_student(name="Phoebe", approved=False)
    headers = auth_headers(teacher)

    listed = client.get("/api/students", headers=headers).get_json()
    assert listed[0]["id"] == pending.id
    assert listed[0]["approved"] is False

    approved = client.post(f"/api/students/{pending.id}/approve", headers=headers).get_json()
    assert approved["approved"] is True

    revoked = client.post(f"/api/students/{pending.id}/revoke", headers=headers).get_json()
    assert revoked["approved"] is False


def test_cannot_approve_another_teachers_student(client, auth_headers, make_teacher, student):
    other = make_teacher(email="other@school.test")
    resp = client.post(f"/api/students/{student.id}/approve", headers=auth_headers(other))
    assert resp.status_code == 404


def test_roster_preview_flags_known_emails(client, auth_headers, teacher, student):
    roster = f"name,email,role,student_id\nArnold,{student.email},student,S1\nNew,new@school.test,,\n"
    resp = client.post(
        "/api/students/import/preview",
        data={"file": (io.BytesIO(roster.encode()), "roster.csv")},
        content_type="multipart/form-data",
        headers=auth_headers(teacher),
    )
    body = resp.get_json()
    assert body["count"] == 2
    assert [r["exists"] for r in body["rows"]] == [True, False]


def test_media_upload_and_serve(client, auth_headers, teacher, app):
    resp = client.post(
        "/api/media",
        data={"file": (io.BytesIO(b"\x89PNG fake"), "diagram.png", "image/png")},
        content_type="multipart/form-data",
        headers=auth_headers(teacher),
    )
    assert resp.status_code == 201
    stored = resp.get_json()
    assert stored["filename"].endswith(".png")
    assert stored["url"].endswith(stored["filename"])
    assert os.path.exists(os.path.join(app.config["MEDIA_DIR"], stored["filename"]))

    served = client.get(f"/media/{stored['filename']}")
    assert served.status_code == 200
    assert served.data == b"\x89PNG fake"


def test_media_rejects_other_types(client, auth_headers, teacher):
    resp = client.post(
        "/api/media",
        data={"file": (io.BytesIO(b"MZ"), "tool.exe", "application/x-msdownload")},
        content_type="multipart/form-data",
        headers=auth_headers(teacher),
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "File type not allowed"


def test_results_endpoint(client, auth_headers, student):
    body = client.get("/api/results/me", headers=auth_headers(student)).get_json()
    assert body["history"] == []
    assert body["overall"]["total_quizzes"] == 0
