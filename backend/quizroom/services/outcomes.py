"""
Navigation intents returned by the join and team services.

Instead of calling back into the client, a service answers with what the
client should show next.  The client dispatches the intent to its router.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Intent(str, Enum):
    DASHBOARD = "dashboard"
    JOIN_QUIZ = "join_quiz"
    CREATE_TEAM = "create_team"
    JOIN_TEAM = "join_team"
    CONFIRM_REJOIN = "confirm_rejoin"
    PICK_TEAM = "pick_team"
    SHOW_TEAM_CODE = "show_team_code"
    LIVE_QUIZ = "live_quiz"
    RESULTS = "results"
    LOGIN = "login"


@dataclass
class TeamCandidate:
    team_id: str
    name: str
    team_code: str
    is_shared_device: bool
    active: bool

    def to_dict(self) -> dict:
        return {
            "team_id":          self.team_id,
            "name":             self.name,
            "team_code":        self.team_code,
            "is_shared_device": self.is_shared_device,
            "active":           self.active,
        }


@dataclass
class JoinOutcome:
    intent: Intent
    session_id: str
    team_id: Optional[str] = None
    team_code: Optional[str] = None
    participant_id: Optional[str] = None
    created: bool = False
    candidates: List[TeamCandidate] = field(default_factory=list)
    message: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "intent":         self.intent.value,
            "session_id":     self.session_id,
            "team_id":        self.team_id,
            "team_code":      self.team_code,
            "participant_id": self.participant_id,
            "created":        self.created,
            "candidates":     [c.to_dict() for c in self.candidates],
            "message":        self.message,
        }
