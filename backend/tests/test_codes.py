from quizroom.services.codes import (
    CODE_ALPHABET,
    format_teacher_code,
    generate_nickname,
    generate_pin,
    generate_team_code,
    generate_teacher_code,
    generate_unique_nicknames,
    is_valid_pin,
    normalize_team_code,
    unformat_teacher_code,
)


def test_alphabet_skips_lookalikes():
    assert len(CODE_ALPHABET) == 32
    for ch in "IO01":
        assert ch not in CODE_ALPHABET


def test_team_code_shape():
    for _ in range(200):
        code = generate_team_code()
        assert len(code) == 4
        assert set(code) <= set(CODE_ALPHABET)


def test_normalize_team_code():
    assert normalize_team_code("  a1 b2 ") == "A1B2"
    assert normalize_team_code("ab\tc\nd") == "ABCD"
    assert normalize_team_code("") == ""
    assert normalize_team_code(None) == ""


def test_teacher_code_round_trip():
    code = generate_teacher_code()
    assert len(code) == 8
    formatted = format_teacher_code(code)
    assert formatted[4] == "-"
    assert unformat_teacher_code(formatted.lower()) == code


def test_format_teacher_code_leaves_odd_lengths_alone():
    assert format_teacher_code("ABC") == "ABC"


def test_pins():
    pin = generate_pin()
    assert len(pin) == 6 and pin.isdigit()
    assert is_valid_pin("012345")
    assert not is_valid_pin("12345")
    assert not is_valid_pin("1234567")
    assert not is_valid_pin("12a456")
    assert not is_valid_pin("")


def test_nicknames():
    assert len(generate_nickname().split(" ")) == 2
    names = generate_unique_nicknames(5)
    assert len(names) == 5
    assert len(set(names)) == 5
