"""
Self-paced assigned quizzes.

Public API
----------
    assignments_for(student_id)                                  -> list[QuizAssignment]
    own_assignment(assignment_id, user)                          -> QuizAssignment
    start_assignment(assignment, now=None)                       -> QuizAssignment
    answer_assignment(assignment, question_id, option, time_remaining, now=None)
                                                                 -> AssignmentAnswer
    complete_assignment(assignment, now=None)                    -> QuizAssignment

Lifecycle: assigned -> in_progress -> completed.  Starting and answering are
refused once the deadline has passed; completing is still accepted so work
done before the deadline is kept.  Assigned quizzes have no speed bonus: a
correct answer earns the question's points.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from quizroom.db.models import AssignmentAnswer, Question, QuizAssignment, User
from quizroom.db.models.quiz_assignment import (
    ASSIGNMENT_ASSIGNED,
    ASSIGNMENT_COMPLETED,
    ASSIGNMENT_IN_PROGRESS,
)
from quizroom.extensions import db
from quizroom.services.errors import AlreadyEnded, Conflict, InvalidInput, NotFound

log = logging.getLogger(__name__)


def _aware(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _now(now: Optional[datetime]) -> datetime:
    return _aware(now) if now is not None else datetime.now(timezone.utc)


def is_overdue(assignment: QuizAssignment, now: Optional[datetime] = None) -> bool:
    return _aware(assignment.deadline) < _now(now)


def assignments_for(student_id: str) -> List[QuizAssignment]:
    return (
        QuizAssignment.query
        .filter_by(student_id=student_id)
        .order_by(QuizAssignment.deadline.asc())
        .all()
    )


def own_assignment(assignment_id: str, user: User) -> QuizAssignment:
    assignment = db.session.get(QuizAssignment, assignment_id)
    if assignment is None or assignment.student_id != user.id:
        raise NotFound("assignment not found")
    return assignment


def _ensure_open(assignment: QuizAssignment, now: datetime) -> None:
    if assignment.status == ASSIGNMENT_COMPLETED:
        raise AlreadyEnded("you have already submitted this quiz")
    if is_overdue(assignment, now):
        raise AlreadyEnded("the deadline for this quiz has passed")


def start_assignment(assignment: QuizAssignment, now: Optional[datetime] = None) -> QuizAssignment:
    """Open the assignment; resuming one already in progress is a no-op."""
    if assignment.status == ASSIGNMENT_COMPLETED:
        return assignment
    now = _now(now)
    _ensure_open(assignment, now)
    if assignment.status == ASSIGNMENT_ASSIGNED:
        assignment.status = ASSIGNMENT_IN_PROGRESS
        assignment.started_at = now
        db.session.commit()
        log.info("assignment: student=%s started assignment=%s", assignment.student_id, assignment.id)
    return assignment


def answer_assignment(
    assignment: QuizAssignment,
    question_id: str,
    selected_option_index: int,
    time_remaining: float,
    now: Optional[datetime] = None,
) -> AssignmentAnswer:
    now = _now(now)
    _ensure_open(assignment, now)
    if assignment.status != ASSIGNMENT_IN_PROGRESS:
        raise Conflict("start the quiz before answering")

    question = db.session.get(Question, question_id)
    if question is None or question.quiz_id != assignment.quiz_id:
        raise NotFound("question not found")
    if not 0 <= selected_option_index < len(question.options):
        raise InvalidInput("selected option does not exist")
    if not 0 <= time_remaining <= question.time_limit:
        raise InvalidInput(f"time_remaining must be between 0 and {question.time_limit}")

    is_correct = bool(question.options[selected_option_index].get("is_correct"))
    answer = AssignmentAnswer(
        assignment_id=assignment.id,
        question_id=question.id,
        selected_option_index=selected_option_index,
        is_correct=is_correct,
        points_earned=question.points if is_correct else 0,
        time_taken=float(question.time_limit - time_remaining),
        answered_at=now,
    )
    db.session.add(answer)
    assignment.current_question_index = max(assignment.current_question_index, question.order_index + 1)
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise Conflict("this question has already been answered") from exc
    return answer


def complete_assignment(assignment: QuizAssignment, now: Optional[datetime] = None) -> QuizAssignment:
    """Total the recorded answers and close the assignment."""
    if assignment.status == ASSIGNMENT_COMPLETED:
        raise AlreadyEnded("you have already submitted this quiz")
    if assignment.status != ASSIGNMENT_IN_PROGRESS:
        raise Conflict("start the quiz before submitting it")

    now = _now(now)
    answers = assignment.answers
    assignment.score = sum(a.points_earned for a in answers)
    assignment.correct_answers = sum(1 for a in answers if a.is_correct)
    assignment.time_taken = int((now - _aware(assignment.started_at)).total_seconds())
    assignment.status = ASSIGNMENT_COMPLETED
    assignment.completed_at = now
    db.session.commit()
    log.info("assignment: student=%s completed assignment=%s score=%d correct=%d/%d",
             assignment.student_id, assignment.id, assignment.score,
             assignment.correct_answers, len(assignment.quiz.questions))
    return assignment
