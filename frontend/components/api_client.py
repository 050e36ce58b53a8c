"""
api_client.py — single HTTP client for all frontend → Flask communication.
Reads API_BASE_URL from .env (falls back to localhost:5000).

One ApiClient is built per browser session (see ``get_client``) and carries
the JWT access token, instead of every call reaching into module globals.
"""
import os
import requests
from dotenv import load_dotenv

load_dotenv()

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000")


class APIError(Exception):
    def __init__(self, message: str, status_code: int = 0, code: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


def _raise(resp: requests.Response) -> None:
    if not resp.ok:
        code = None
        try:
            body = resp.json()
            msg = body.get("error", resp.text)
            code = body.get("code")
        except Exception:
            msg = resp.text
        raise APIError(msg, resp.status_code, code)


class ApiClient:

    def __init__(self, base_url: str = API_BASE_URL, access_token: str | None = None,
                 session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.http = session or requests.Session()

    def _headers(self, json_body: bool = True) -> dict:
        h = {"Content-Type": "application/json"} if json_body else {}
        if self.access_token:
            h["Authorization"] = f"Bearer {self.access_token}"
        return h

    # ── Generic helpers ──────────────────────────────────────────────────────

    def get(self, path: str, params: dict | None = None) -> dict:
        resp = self.http.get(
            f"{self.base_url}{path}",
            headers=self._headers(),
            params=params,
            timeout=30,
        )
        _raise(resp)
        return resp.json()

    def post(self, path: str, payload: dict | None = None) -> dict:
        resp = self.http.post(
            f"{self.base_url}{path}",
            json=payload or {},
            headers=self._headers(),
            timeout=30,
        )
        _raise(resp)
        return resp.json()

    def patch(self, path: str, payload: dict) -> dict:
        resp = self.http.patch(
            f"{self.base_url}{path}",
            json=payload,
            headers=self._headers(),
            timeout=30,
        )
        _raise(resp)
        return resp.json()

    def delete(self, path: str) -> dict:
        resp = self.http.delete(
            f"{self.base_url}{path}",
            headers=self._headers(),
            timeout=10,
        )
        _raise(resp)
        return resp.json()

    def upload(self, path: str, filename: str, content: bytes, mimetype: str,
               fields: dict | None = None) -> dict:
        resp = self.http.post(
            f"{self.base_url}{path}",
            files={"file": (filename, content, mimetype)},
            data=fields or {},
            headers=self._headers(json_body=False),
            timeout=60,
        )
        _raise(resp)
        return resp.json()

    # ── Auth ─────────────────────────────────────────────────────────────────

    def register(self, email: str, password: str, name: str | None = None,
                 role: str = "student", teacher_code: str | None = None) -> dict:
        data = self.post("/api/auth/register", {
            "email": email,
            "password": password,
            "name": name,
            "role": role,
            "teacher_code": teacher_code,
        })
        self.access_token = data["access_token"]
        return data

    def login(self, email: str, password: str) -> dict:
        data = self.post("/api/auth/login", {"email": email, "password": password})
        self.access_token = data["access_token"]
        return data

    def me(self) -> dict:
        return self.get("/api/auth/me")["user"]

    # ── Student: sessions and teams ──────────────────────────────────────────

    def lookup_session(self, pin: str) -> dict:
        return self.get("/api/sessions/lookup", params={"pin": pin})

    def join_session(self, pin: str, team_id: str | None = None, confirm: bool = False) -> dict:
        return self.post("/api/sessions/join", {"pin": pin, "team_id": team_id, "confirm": confirm})

    def participation(self, session_id: str) -> dict:
        return self.get(f"/api/sessions/{session_id}/participation")

    def session_state(self, session_id: str) -> dict:
        return self.get(f"/api/sessions/{session_id}/state")

    def submit_answer(self, session_id: str, question_id: str, option_index: int,
                      time_remaining: float) -> dict:
        return self.post(f"/api/sessions/{session_id}/answers", {
            "question_id": question_id,
            "selected_option_index": option_index,
            "time_remaining": time_remaining,
        })

    def leaderboard(self, session_id: str) -> dict:
        return self.get(f"/api/sessions/{session_id}/leaderboard")

    def classmates(self) -> list:
        return self.get("/api/teams/classmates")

    def create_team(self, session_id: str, name: str, member_ids: list,
                    shared_device: bool) -> dict:
        return self.post("/api/teams", {
            "session_id": session_id,
            "name": name,
            "member_ids": member_ids,
            "shared_device": shared_device,
        })

    def lookup_team(self, session_id: str, team_code: str) -> dict:
        return self.post("/api/teams/lookup", {"session_id": session_id, "team_code": team_code})

    def join_team(self, session_id: str, team_code: str) -> dict:
        return self.post("/api/teams/join", {"session_id": session_id, "team_code": team_code})

    def my_results(self) -> dict:
        return self.get("/api/results/me")

    # ── Assigned quizzes ─────────────────────────────────────────────────────

    def my_assignments(self) -> list:
        return self.get("/api/assignments")

    def start_assignment(self, assignment_id: str) -> dict:
        return self.post(f"/api/assignments/{assignment_id}/start")

    def answer_assignment(self, assignment_id: str, question_id: str, option_index: int,
                          time_remaining: float) -> dict:
        return self.post(f"/api/assignments/{assignment_id}/answers", {
            "question_id": question_id,
            "selected_option_index": option_index,
            "time_remaining": time_remaining,
        })

    def complete_assignment(self, assignment_id: str) -> dict:
        return self.post(f"/api/assignments/{assignment_id}/complete")

    # ── Teacher: reports ─────────────────────────────────────────────────────

    def student_report(self, student_id: str) -> dict:
        return self.get(f"/api/results/students/{student_id}")


def get_client(state) -> ApiClient:
    """Return the ApiClient kept in *state* (Streamlit session state), creating it once."""
    client = state.get("api_client")
    if client is None:
        client = ApiClient(access_token=state.get("access_token"))
        state["api_client"] = client
    return client
