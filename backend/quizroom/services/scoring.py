"""
Time-bonus scoring.

A correct answer earns the question's base points plus a bonus of up to 100
points proportional to the share of the time limit still remaining.
"""

from __future__ import annotations

import math

MAX_TIME_BONUS = 100


def score(is_correct: bool, time_remaining: float, time_limit: float, base_points: int) -> int:
    """
    Return the points for one answer.

    Callers must guarantee ``0 <= time_remaining <= time_limit``; values
    outside that range are not clamped.
    """
    if not is_correct:
        return 0
    time_bonus = math.floor((time_remaining / time_limit) * MAX_TIME_BONUS)
    return int(base_points + time_bonus)
