# tests/test_coercion.py
import pytest

from coercion import parse_integer, parse_number, truncate_integer


@pytest.mark.parametrize("value,expected", [
    (9.99, 9.99),
    (3, 3.0),
    ("9.99", 9.99),
    ("  12.5 ", 12.5),
    ("-4", -4.0),
    ("1e3", 1000.0),
    (".5", 0.5),
])
def test_parse_number_accepts_numbers_and_numeric_strings(value, expected):
    assert parse_number(value) == expected


@pytest.mark.parametrize("value", [
    None, True, False, "", "   ", "abc", "12abc", "NaN", "Infinity", "1_000",
    float("nan"), float("inf"), [1], {"v": 1},
])
def test_parse_number_rejects(value):
    assert parse_number(value) is None


@pytest.mark.parametrize("value,expected", [
    (3, 3),
    ("3", 3),
    (" 7 ", 7),
    (3.0, 3),
    ("3.0", 3),
    ("-2", -2),
    ("12345678901234567890", 12345678901234567890),
])
def test_parse_integer_accepts_whole_numbers(value, expected):
    assert parse_integer(value) == expected


@pytest.mark.parametrize("value", ["3.7", 3.5, "abc", "", None, True, "9" * 5000])
def test_parse_integer_rejects_fractional_and_garbage(value):
    assert parse_integer(value) is None


def test_truncate_integer_truncates_toward_zero():
    assert truncate_integer("3.7") == 3
    assert truncate_integer(-2.5) == -2
    assert truncate_integer("x") is None
