"""
session_pointer.py — remembers the live quiz this device joined.

The pointer survives reloads so a student whose browser tab closed can get
back into a running quiz.  It lives in one JSON file per device; at most one
pointer exists at a time.  Storage problems (read-only home directory,
corrupt file) are logged and treated as "no pointer", never raised.

Whether the pointer is still worth acting on is up to the caller: the
dashboard re-checks the session and the caller's participation and clears
the pointer when either check fails (see ``revalidate``).
"""
import json
import logging
import os
import time
from pathlib import Path

log = logging.getLogger(__name__)

DEFAULT_STATE_DIR = os.getenv("QUIZROOM_STATE_DIR", str(Path.home() / ".quizroom"))
POINTER_FILE = "active_session.json"


class SessionPointer:

    def __init__(self, state_dir: str | os.PathLike = DEFAULT_STATE_DIR):
        self.path = Path(state_dir) / POINTER_FILE

    def save(self, session_id: str, metadata: dict | None = None) -> None:
        """Overwrite the stored pointer with {sessionId, joinedAt, **metadata}."""
        record = {
            "sessionId": session_id,
            "joinedAt": int(time.time() * 1000),
            **(metadata or {}),
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(record, ensure_ascii=False), encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            log.warning("session pointer: failed to save: %s", exc)

    def get(self) -> dict | None:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            log.warning("session pointer: failed to read: %s", exc)
            return None
        try:
            # UnicodeDecodeError is a ValueError
            data = json.loads(raw.decode("utf-8"))
        except ValueError as exc:
            log.warning("session pointer: unreadable record: %s", exc)
            return None
        return data if isinstance(data, dict) else None

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            log.warning("session pointer: failed to clear: %s", exc)


def revalidate(pointer: SessionPointer, check_participation) -> dict | None:
    """
    Return the stored pointer if its session is still running and the caller
    still participates; otherwise clear it and return None.

    *check_participation* takes a session id and returns the participation
    payload from the API (``status``, ``is_terminal``, ``participating``).
    It may raise; a session that no longer exists clears the pointer.
    """
    from components.api_client import APIError

    stored = pointer.get()
    if not stored or not stored.get("sessionId"):
        return None

    try:
        info = check_participation(stored["sessionId"])
    except APIError as exc:
        if exc.status_code == 404:
            pointer.clear()
            return None
        raise

    if info.get("is_terminal") or not info.get("participating"):
        pointer.clear()
        return None
    return stored
