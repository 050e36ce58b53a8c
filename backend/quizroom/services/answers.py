"""
Answer submission and session leaderboard.

The API boundary checks ``0 <= time_remaining <= time_limit`` before calling
``scoring.score``, which does not clamp.
"""

from __future__ import annotations

import logging
from typing import Optional

from quizroom.db.models import QuizAnswer, QuizSession, User
from quizroom.db.models.quiz_session import STATUS_ACTIVE
from quizroom.services.errors import Conflict, InvalidInput, NotFound
from quizroom.services.scoring import score
from quizroom.services.store import QuizStore

log = logging.getLogger(__name__)


def submit_answer(
    store: QuizStore,
    session: QuizSession,
    user: User,
    question_id: str,
    selected_option_index: int,
    time_remaining: float,
) -> dict:
    participant = store.participant(session.id, user.id)
    if participant is None:
        raise NotFound("you have not joined this quiz")
    if session.status != STATUS_ACTIVE:
        raise Conflict("this quiz is not accepting answers right now")

    question = store.question(question_id)
    if question is None or question.quiz_id != session.quiz_id:
        raise NotFound("question not found")

    options = question.options
    if not 0 <= selected_option_index < len(options):
        raise InvalidInput("selected option does not exist")
    if not 0 <= time_remaining <= question.time_limit:
        raise InvalidInput(f"time_remaining must be between 0 and {question.time_limit}")

    if store.answer(participant.id, question.id) is not None:
        raise Conflict("this question has already been answered")

    is_correct = bool(options[selected_option_index].get("is_correct"))
    points = score(is_correct, time_remaining, question.time_limit, question.points)

    answer = QuizAnswer(
        session_id=session.id,
        participant_id=participant.id,
        question_id=question.id,
        selected_option_index=selected_option_index,
        is_correct=is_correct,
        points_earned=points,
        time_taken=float(question.time_limit - time_remaining),
    )
    store.record_answer(participant, answer)
    log.info("answer: participant=%s question=%s correct=%s points=%d",
             participant.id, question.id, is_correct, points)

    return {
        "question_id":   question.id,
        "is_correct":    is_correct,
        "points_earned": points,
        "score":         participant.score,
    }


def leaderboard(store: QuizStore, session: QuizSession, limit: Optional[int] = None) -> dict:
    """Individual ranking plus per-team totals for team entries."""
    players = []
    teams: dict = {}
    for p in store.participants(session.id):
        players.append({
            "participant_id": p.id,
            "user_id":        p.user_id,
            "name":           p.display_name,
            "team_id":        p.team_id,
            "score":          p.score,
        })
        if p.is_team_entry and p.team_id:
            entry = teams.setdefault(p.team_id, {
                "team_id": p.team_id,
                "name":    p.team.name if p.team else None,
                "score":   0,
                "members": 0,
            })
            entry["score"] += p.score
            entry["members"] += 1

    team_rows = sorted(teams.values(), key=lambda t: t["score"], reverse=True)
    if limit is not None:
        players = players[:limit]
        team_rows = team_rows[:limit]
    return {"players": players, "teams": team_rows}
