"""
Input sanitising for quiz content and upload validation.
"""

from __future__ import annotations

import re

MAX_TITLE = 200
MAX_QUESTION = 500
MAX_OPTION = 200

DEFAULT_MAX_UPLOAD = 10 * 1024 * 1024
ALLOWED_MEDIA_TYPES = (
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "video/mp4",
    "video/webm",
)

_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]*>")
_EVENT_ATTR_DQ = re.compile(r'on\w+="[^"]*"')
_EVENT_ATTR_SQ = re.compile(r"on\w+='[^']*'")
_JS_SCHEME = re.compile(r"javascript:", re.IGNORECASE)


def sanitize_input(value):
    """Drop script blocks and every tag; non-strings pass through untouched."""
    if not isinstance(value, str):
        return value
    value = _SCRIPT_BLOCK.sub("", value)
    value = _TAG.sub("", value)
    return value.strip()


def sanitize_html(value):
    """Keep markup but remove scripts, inline event handlers and javascript: URLs."""
    if not isinstance(value, str):
        return value
    value = _SCRIPT_BLOCK.sub("", value)
    value = _EVENT_ATTR_DQ.sub("", value)
    value = _EVENT_ATTR_SQ.sub("", value)
    value = _JS_SCHEME.sub("", value)
    return value.strip()


def sanitize_quiz_title(title: str) -> str:
    return (sanitize_input(title) or "")[:MAX_TITLE]


def sanitize_question_text(text: str) -> str:
    return (sanitize_input(text) or "")[:MAX_QUESTION]


def sanitize_option_text(text: str) -> str:
    return (sanitize_input(text) or "")[:MAX_OPTION]


def validate_upload(size: int, content_type: str,
                    max_size: int = DEFAULT_MAX_UPLOAD,
                    allowed_types=ALLOWED_MEDIA_TYPES) -> dict:
    """Return ``{"valid": bool, "error": str | None}``."""
    if size is None or content_type is None:
        return {"valid": False, "error": "No file provided"}
    if size > max_size:
        return {"valid": False, "error": f"File size exceeds {max_size // (1024 * 1024)}MB limit"}
    if content_type not in allowed_types:
        return {"valid": False, "error": "File type not allowed"}
    return {"valid": True, "error": None}
