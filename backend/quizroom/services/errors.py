"""
Error taxonomy shared by the join, team and scoring services.

Every error carries a machine-readable ``code`` and the HTTP status the API
layer answers with.  Messages are user-facing text.
"""

from __future__ import annotations


class QuizroomError(Exception):
    code = "unexpected"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class NotFound(QuizroomError):
    code = "not_found"
    status_code = 404


class AlreadyEnded(QuizroomError):
    code = "already_ended"
    status_code = 409


class AlreadyJoined(QuizroomError):
    code = "already_joined"
    status_code = 409


class NoTeam(QuizroomError):
    code = "no_team"
    status_code = 409


class NotJoinable(QuizroomError):
    code = "not_joinable"
    status_code = 409


class PermissionDenied(QuizroomError):
    code = "permission_denied"
    status_code = 403


class InvalidInput(QuizroomError):
    code = "invalid_input"
    status_code = 400


class Conflict(QuizroomError):
    code = "conflict"
    status_code = 409


class Unexpected(QuizroomError):
    code = "unexpected"
    status_code = 500
