"""
Short human-readable codes and nicknames.

Team codes (4 chars) and teacher invitation codes (8 chars) draw from a
32-symbol alphabet without the look-alike characters I, O, 0 and 1.
Session PINs are 6 decimal digits.
"""

from __future__ import annotations

import random
import re
import secrets
from typing import List

CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
TEAM_CODE_LENGTH = 4
TEACHER_CODE_LENGTH = 8
PIN_LENGTH = 6

_WHITESPACE = re.compile(r"\s")
_PIN = re.compile(r"[0-9]{6}")

_ADJECTIVES = [
    "Sneaky", "Dancing", "Mighty", "Clever", "Brave", "Silly", "Happy", "Crazy",
    "Smart", "Swift", "Funky", "Jazzy", "Bouncy", "Sparkly", "Groovy", "Zippy",
    "Jolly", "Wacky", "Speedy", "Giggly", "Cosmic", "Electric", "Ninja", "Turbo",
    "Epic", "Super", "Mega", "Ultra", "Rad", "Cool", "Awesome", "Amazing",
]

_NOUNS = [
    "Panda", "Pickle", "Potato", "Banana", "Taco", "Penguin", "Burrito", "Unicorn",
    "Avocado", "Muffin", "Platypus", "Llama", "Donut", "Narwhal", "Waffle", "Dragon",
    "Ninja", "Wizard", "Robot", "Pirate", "Viking", "Warrior", "Champion", "Legend",
    "Tiger", "Eagle", "Falcon", "Phoenix", "Wolf", "Bear", "Fox", "Panther",
]


def _random_code(length: int) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


# ── Team codes ────────────────────────────────────────────────────────────────

def generate_team_code() -> str:
    return _random_code(TEAM_CODE_LENGTH)


def normalize_team_code(code: str) -> str:
    """Remove every whitespace character and uppercase."""
    return _WHITESPACE.sub("", code or "").upper()


# ── Teacher invitation codes ──────────────────────────────────────────────────

def generate_teacher_code() -> str:
    return _random_code(TEACHER_CODE_LENGTH)


def format_teacher_code(code: str) -> str:
    """ABCDEFGH -> ABCD-EFGH; anything that is not 8 chars is returned as is."""
    if not code or len(code) != TEACHER_CODE_LENGTH:
        return code
    return f"{code[:4]}-{code[4:]}"


def unformat_teacher_code(code: str) -> str:
    return (code or "").replace("-", "").strip().upper()


# ── Session PINs ──────────────────────────────────────────────────────────────

def generate_pin() -> str:
    return "".join(secrets.choice("0123456789") for _ in range(PIN_LENGTH))


def is_valid_pin(pin: str) -> bool:
    return bool(pin) and _PIN.fullmatch(pin) is not None


# ── Nicknames ─────────────────────────────────────────────────────────────────

def generate_nickname() -> str:
    return f"{random.choice(_ADJECTIVES)} {random.choice(_NOUNS)}"


def generate_unique_nicknames(count: int) -> List[str]:
    """Up to *count* distinct nicknames; gives up after ``count * 10`` draws."""
    nicknames: list = []
    attempts = 0
    while len(nicknames) < count and attempts < count * 10:
        nickname = generate_nickname()
        if nickname not in nicknames:
            nicknames.append(nickname)
        attempts += 1
    return nicknames
