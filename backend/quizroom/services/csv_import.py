"""
CSV importers for quiz authoring and class rosters.

Kahoot export format
--------------------
    Row 1  : quiz title (optional; derived from the file name when absent)
    Row 2  : blank
    Header : Question Number,Question,Option 1,Option 2,Option 3,Option 4,Correct Answer(s)
    Rows   : 1,"Question text","Opt1","Opt2","Opt3","Opt4","2"      (multiple choice)
             1,"Question text","True","False","1"                   (true / false)

Correct answers are 1-based and may list several indices separated by
``,`` or ``;``.

Simple template format
----------------------
    question_text,question_type,option1,option2,option3,option4,correct_answer,time_limit,points
"""

from __future__ import annotations

import csv
import logging
import re
from typing import List, Optional

from quizroom.services.errors import InvalidInput

log = logging.getLogger(__name__)

DEFAULT_TIME_LIMIT = 30
DEFAULT_POINTS = 100
_HEADER_SCAN_LIMIT = 100

CSV_TEMPLATE = (
    "question_text,question_type,option1,option2,option3,option4,correct_answer,time_limit,points\n"
    "What is 2+2?,multiple_choice,3,4,5,6,2,30,100\n"
    "Is the sky blue?,true_false,true,,,,,20,50\n"
    "Capital of France?,multiple_choice,London,Paris,Berlin,Madrid,2,25,100\n"
)

_LINE_BREAK = re.compile(r"\r?\n")
_WORD_START = re.compile(r"\b\w")


# ── Helpers ───────────────────────────────────────────────────────────────────

def _lines(content: str) -> List[str]:
    return [line for line in _LINE_BREAK.split(content or "") if line.strip()]


def _parse_line(line: str) -> List[str]:
    """Split one CSV line, honouring quotes and doubled quotes, trimming fields."""
    fields = next(csv.reader([line]), [])
    return [f.strip() for f in fields] or [""]


def _int_or(value: Optional[str], default: int) -> int:
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed or default


def _is_header(line: str) -> bool:
    lowered = line.lower()
    return "question number" in lowered or ("question" in lowered and "answer" in lowered)


def title_from_file_name(file_name: str) -> str:
    """quiz_sample.csv -> Quiz Sample"""
    title = re.sub(r"\.csv$", "", file_name, flags=re.IGNORECASE)
    title = re.sub(r"[_-]", " ", title)
    title = _WORD_START.sub(lambda m: m.group(0).upper(), title)
    return title.strip()


def _correct_indices(raw: str, num_options: int) -> List[int]:
    indices = []
    for part in re.split(r"[,;]", raw or ""):
        try:
            index = int(part.strip()) - 1
        except ValueError:
            continue
        if 0 <= index < num_options:
            indices.append(index)
    return indices


# ── Kahoot format ─────────────────────────────────────────────────────────────

def parse_kahoot_csv(content: str, file_name: Optional[str] = None) -> dict:
    """
    Parse a Kahoot-style CSV export.

    Returns ``{"title": str, "questions": [question dict, ...]}``; raises
    InvalidInput when the file has fewer than two lines or no usable rows.
    """
    lines = _lines(content)
    if len(lines) < 2:
        raise InvalidInput("CSV file must have at least a header and one question")

    if _is_header(lines[0]):
        header_index = 0
        title = title_from_file_name(file_name) if file_name else ""
    else:
        title = re.sub(r"^[\"']|[\"']$", "", lines[0]).strip()
        header_index = 1
        for i in range(1, min(len(lines), _HEADER_SCAN_LIMIT)):
            if _is_header(lines[i]):
                header_index = i
                break

    questions = []
    for i in range(header_index + 1, len(lines)):
        fields = _parse_line(lines[i])

        # Question Number, Question, 2 options, Correct Answer at minimum
        if len(fields) < 5:
            log.warning("csv import: skipping row %d, insufficient fields", i + 1)
            continue

        is_true_false = len(fields) < 7
        if is_true_false:
            question_text, texts, correct_raw = fields[1], fields[2:4], fields[4]
        else:
            question_text, texts, correct_raw = fields[1], fields[2:6], fields[6]

        correct = _correct_indices(correct_raw, len(texts))
        options = [
            {"text": text or "", "is_correct": index in correct, "image_url": ""}
            for index, text in enumerate(texts)
        ]
        if not any(o["is_correct"] for o in options):
            log.warning("csv import: row %d has no valid correct answer, using first option", i + 1)
            options[0]["is_correct"] = True

        questions.append({
            "question_text": question_text or "",
            "question_type": "true_false" if is_true_false else "multiple_choice",
            "time_limit":    DEFAULT_TIME_LIMIT,
            "points":        DEFAULT_POINTS,
            "image_url":     "",
            "video_url":     "",
            "gif_url":       "",
            "options":       options,
        })

    if not questions:
        raise InvalidInput("No valid questions found in CSV file")

    return {"title": title, "questions": questions}


# ── Simple template format ────────────────────────────────────────────────────

def parse_csv_to_questions(content: str) -> List[dict]:
    """Parse the simple template format; the header row is skipped."""
    lines = (content or "").split("\n")
    lines = [line for line in lines if line.strip()]
    questions = []

    for i in range(1, len(lines)):
        # plain split, quoted commas are not supported by this format
        cols = [c.strip() for c in lines[i].strip().split(",")]
        if len(cols) < 3:
            continue

        def col(n: int) -> str:
            return cols[n] if n < len(cols) else ""

        question_type = col(1).lower() or "multiple_choice"
        if question_type == "true_false":
            answer = col(2).lower()
            options = [
                {"text": "True", "is_correct": answer == "true"},
                {"text": "False", "is_correct": answer == "false"},
            ]
        else:
            correct = _int_or(col(6), 1)
            options = [
                {"text": col(n), "is_correct": correct == n - 1}
                for n in range(2, 6)
                if col(n)
            ]

        questions.append({
            "question_text": col(0),
            "question_type": question_type,
            "options":       options,
            "time_limit":    _int_or(col(7), DEFAULT_TIME_LIMIT),
            "points":        _int_or(col(8), DEFAULT_POINTS),
            "order_index":   i - 1,
        })

    return questions


# ── Users roster ──────────────────────────────────────────────────────────────

def parse_users_csv(content: str) -> List[dict]:
    """name,email,role,student_id; header row skipped, role defaults to student."""
    lines = [line for line in (content or "").split("\n") if line.strip()]
    users = []
    for i in range(1, len(lines)):
        cols = [c.strip() for c in lines[i].strip().split(",")]
        if len(cols) < 2:
            continue
        users.append({
            "name":       cols[0],
            "email":      cols[1],
            "role":       (cols[2].lower() if len(cols) > 2 else "") or "student",
            "student_id": (cols[3] if len(cols) > 3 else "") or None,
        })
    return users
