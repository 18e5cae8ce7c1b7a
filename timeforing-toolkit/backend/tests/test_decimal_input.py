"""
Test Decimal Hours Input

- Comma/dot parsing and display formatting
- Clamping on blur
- Arrow key stepping
"""

import math

import pytest

from app.utils.decimal_input import (
    HoursInput,
    clamp_hours,
    format_number_with_comma,
    parse_decimal_input,
)


@pytest.mark.parametrize("text,expected", [
    ("2,5", 2.5),
    ("2.5", 2.5),
    ("0,25", 0.25),
    ("7", 7.0),
    ("", 0.0),
    ("2,5t", 2.5),
    ("  3", 3.0),
    (",5", 0.5),
])
def test_parse_decimal_input(text, expected):
    assert parse_decimal_input(text) == expected


@pytest.mark.parametrize("text", ["abc", "t2", "-", ","])
def test_parse_decimal_input_rejects_non_numbers(text):
    assert parse_decimal_input(text) is None


def test_parse_only_first_comma_is_decimal_separator():
    assert parse_decimal_input("1,5,5") == 1.5


def test_parse_infinity():
    assert parse_decimal_input("Infinity") == math.inf
    assert parse_decimal_input("-Infinity") == -math.inf


@pytest.mark.parametrize("value,expected", [
    (0, ""),
    (2.0, "2"),
    (2.5, "2,5"),
    (0.25, "0,25"),
    (24, "24"),
    (math.inf, "Infinity"),
])
def test_format_number_with_comma(value, expected):
    assert format_number_with_comma(value) == expected


def test_format_then_parse_keeps_display_value():
    for hours in [0.25, 0.5, 1, 1.75, 2.3, 7.5, 12.25, 24]:
        shown = format_number_with_comma(hours)
        assert format_number_with_comma(parse_decimal_input(shown)) == shown


def test_clamp_hours_bounds():
    assert clamp_hours(30) == 24
    assert clamp_hours(0) == 0.25
    assert clamp_hours(-3) == 0.25
    assert clamp_hours(8.5) == 8.5


def test_blur_clamps_too_many_hours():
    field = HoursInput()
    field.type("30")
    assert field.hours == 30
    assert field.blur() == 24
    assert field.text == "24"


def test_blur_clamps_zero_hours():
    field = HoursInput()
    field.type("0")
    assert field.blur() == 0.25
    assert field.text == "0,25"


def test_invalid_text_keeps_last_value():
    field = HoursInput(hours=2.5)
    field.type("abc")
    assert field.text == "abc"
    assert field.hours == 2.5

    field.blur()
    assert field.text == "2,5"


def test_empty_text_reads_as_zero_until_blur():
    field = HoursInput(hours=3)
    field.type("")
    assert field.hours == 0
    assert field.blur() == 0.25


def test_arrow_keys_step_by_quarter_hour():
    field = HoursInput(hours=1)
    assert field.key_down("ArrowUp")
    assert field.hours == 1.25
    assert field.text == "1,25"

    assert field.key_down("ArrowDown")
    assert field.key_down("ArrowDown")
    assert field.hours == 0.75


def test_arrow_keys_respect_bounds():
    field = HoursInput(hours=24)
    field.step_up()
    assert field.hours == 24

    field.set(0.25)
    field.step_down()
    assert field.hours == 0.25


def test_other_keys_are_not_handled():
    field = HoursInput(hours=1)
    assert not field.key_down("Enter")
    assert field.hours == 1


def test_reset_restores_default():
    field = HoursInput(hours=6)
    field.reset()
    assert field.hours == 1
    assert field.text == "1"
