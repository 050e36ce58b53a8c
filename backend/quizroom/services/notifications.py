"""
Assignment notification e-mails via the Resend HTTP API.

Sending is fire-and-forget: a failure is logged and reported back as
``False`` but never raised and never retried, so an assignment is created
whether or not its e-mail goes out.
"""

from __future__ import annotations

import html
import logging
from datetime import datetime, timezone
from typing import Optional

import requests

log = logging.getLogger(__name__)

RESEND_URL = "https://api.resend.com/emails"
_TIMEOUT = 10


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'' if n == 1 else 's'}"


def time_remaining_text(deadline: datetime, now: Optional[datetime] = None) -> str:
    """'2 days and 3 hours', '5 hours' or 'Less than 1 hour'."""
    now = now or datetime.now(timezone.utc)
    remaining = (deadline - now).total_seconds()
    days = int(remaining // 86400)
    hours = int((remaining % 86400) // 3600)
    if days > 0:
        return f"{_plural(days, 'day')} and {_plural(hours, 'hour')}"
    if hours > 0:
        return _plural(hours, "hour")
    return "Less than 1 hour"


def build_assignment_email(student_name: str, teacher_name: str, quiz_title: str,
                           deadline: datetime, app_url: str) -> str:
    deadline_text = deadline.strftime("%A, %B %d, %Y %H:%M %Z").strip()
    return f"""\
<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif; background-color: #f4f4f5;">
  <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
    <h1>Quiz Assignment</h1>
    <p>Hello <strong>{html.escape(student_name or "Student")}</strong>,</p>
    <p>Your teacher <strong>{html.escape(teacher_name or "your teacher")}</strong>
       has assigned you a quiz to complete.</p>
    <h2>{html.escape(quiz_title)}</h2>
    <p><strong>Deadline:</strong> {html.escape(deadline_text)}</p>
    <p><strong>{time_remaining_text(deadline)} remaining</strong></p>
    <p>Please log in to your student dashboard and complete this quiz before the deadline.</p>
    <p><a href="{html.escape(app_url)}">Go to Dashboard</a></p>
    <p style="color: #6b7280;">This is an automated message from Quizroom. Please do not reply.</p>
  </div>
</body>
</html>
"""


def send_assignment_notification(
    config,
    student_email: str,
    student_name: str,
    quiz_title: str,
    teacher_name: str,
    deadline: datetime,
) -> bool:
    """
    Send one assignment e-mail.

    *config* is the Flask config mapping (RESEND_API_KEY, FROM_EMAIL, APP_URL).
    Returns True when Resend accepted the message.
    """
    api_key = config.get("RESEND_API_KEY")
    if not api_key:
        log.warning("notifications: RESEND_API_KEY not set, skipping e-mail to %s", student_email)
        return False

    payload = {
        "from":    config.get("FROM_EMAIL"),
        "to":      [student_email],
        "subject": f"New Quiz Assignment: {quiz_title}",
        "html":    build_assignment_email(
            student_name, teacher_name, quiz_title, deadline, config.get("APP_URL", "")
        ),
    }
    try:
        resp = requests.post(
            RESEND_URL,
            json=payload,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type":  "application/json",
            },
            timeout=_TIMEOUT,
        )
    except requests.RequestException as exc:
        log.warning("notifications: e-mail to %s failed: %s", student_email, exc)
        return False

    if not resp.ok:
        log.warning("notifications: Resend rejected e-mail to %s status=%s body=%s",
                    student_email, resp.status_code, resp.text[:300])
        return False

    log.info("notifications: assignment e-mail sent to %s", student_email)
    return True
