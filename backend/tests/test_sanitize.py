import pytest

from quizroom.services.sanitize import (
    sanitize_html,
    sanitize_input,
    sanitize_option_text,
    sanitize_question_text,
    sanitize_quiz_title,
    validate_upload,
)


def test_sanitize_input_strips_scripts_and_tags():
    assert sanitize_input("  <b>Hi</b><script>alert(1)</script> there ") == "Hi there"


def test_sanitize_input_passes_non_strings():
    assert sanitize_input(42) == 42
    assert sanitize_input(None) is None


def test_sanitize_html_keeps_markup():
    dirty = '<a href="javascript:evil()" onclick="x()">link</a><script>bad()</script>'
    assert sanitize_html(dirty) == '<a href="evil()" >link</a>'


def test_length_limits():
    assert len(sanitize_quiz_title("t" * 300)) == 200
    assert len(sanitize_question_text("q" * 900)) == 500
    assert len(sanitize_option_text("o" * 300)) == 200
    assert sanitize_quiz_title(None) == ""


@pytest.mark.parametrize(
    "size, content_type, expected",
    [
        (1024, "image/png", {"valid": True, "error": None}),
        (None, "image/png", {"valid": False, "error": "No file provided"}),
        (11 * 1024 * 1024, "image/png", {"valid": False, "error": "File size exceeds 10MB limit"}),
        (1024, "application/x-msdownload", {"valid": False, "error": "File type not allowed"}),
    ],
)
def test_validate_upload(size, content_type, expected):
    assert validate_upload(size, content_type) == expected
