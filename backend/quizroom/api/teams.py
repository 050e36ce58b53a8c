"""
Team API

Endpoints
---------
GET   /api/teams/classmates   – approved classmates the caller can pick
GET   /api/teams/mine         – teams the caller belongs to
POST  /api/teams              – create a team and enter its captain into a session
POST  /api/teams/lookup       – preview the team behind a code
POST  /api/teams/join         – join a team by code and enter the session

All routes are student-only.  Create and join take the ``session_id`` of the
team-mode session being joined and answer with a navigation intent.
"""

from __future__ import annotations

from flask import Blueprint, g, jsonify, request

from quizroom.api.common import get_store, student_required
from quizroom.db.models import Team
from quizroom.services.errors import InvalidInput, NotFound
from quizroom.services.team_formation import (
    create_team,
    find_team_by_code,
    join_team_by_code,
    list_classmates,
    list_my_teams,
)

teams_bp = Blueprint("teams", __name__, url_prefix="/api/teams")


# ── Helpers ───────────────────────────────────────────────────────────────────

def _team_to_dict(team: Team, include_members: bool = False) -> dict:
    d = {
        "id":               team.id,
        "name":             team.name,
        "team_code":        team.team_code,
        "is_shared_device": team.is_shared_device,
        "creator_id":       team.creator_id,
        "created_at":       team.created_at.isoformat(),
    }
    if include_members:
        d["members"] = [
            {"id": m.student_id, "name": m.student.display_name if m.student else None}
            for m in team.members
        ]
    return d


def _session_from(data: dict):
    session_id = data.get("session_id")
    if not session_id:
        raise InvalidInput("session_id is required")
    session = get_store().session_by_id(session_id)
    if session is None:
        raise NotFound("quiz session not found")
    return session


# ── Routes ────────────────────────────────────────────────────────────────────

@teams_bp.get("/classmates")
@student_required
def classmates():
    students = list_classmates(get_store(), g.user)
    return jsonify([{"id": s.id, "name": s.name, "email": s.email} for s in students]), 200


@teams_bp.get("/mine")
@student_required
def my_teams():
    teams = list_my_teams(get_store(), g.user)
    return jsonify([_team_to_dict(t, include_members=True) for t in teams]), 200


@teams_bp.post("")
@student_required
def create():
    """
    Request body (JSON):
        session_id    : str        – team-mode session being joined
        name          : str        – team name
        member_ids    : list[str]  – selected classmates (at least one)
        shared_device : bool       – whole team plays on this device
    """
    data = request.get_json(silent=True) or {}
    member_ids = data.get("member_ids") or []
    if not isinstance(member_ids, list):
        raise InvalidInput("member_ids must be a list")

    outcome = create_team(
        get_store(),
        _session_from(data),
        g.user,
        name=data.get("name") or "",
        member_ids=[str(m) for m in member_ids],
        shared_device=bool(data.get("shared_device")),
    )
    return jsonify(outcome.to_dict()), 201


@teams_bp.post("/lookup")
@student_required
def lookup():
    data = request.get_json(silent=True) or {}
    team = find_team_by_code(get_store(), _session_from(data), g.user, data.get("team_code") or "")
    return jsonify(_team_to_dict(team, include_members=True)), 200


@teams_bp.post("/join")
@student_required
def join():
    data = request.get_json(silent=True) or {}
    outcome = join_team_by_code(get_store(), _session_from(data), g.user, data.get("team_code") or "")
    return jsonify(outcome.to_dict()), 200
