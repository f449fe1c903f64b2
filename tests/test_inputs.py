"""
TEST: Numeric Input Fields
==========================

Typing passes through partial states ("-", "1e-") that must be kept as
text; only commit() turns the text into a number.
"""

import pytest

from rodcraft.inputs import InputState, NumericField, classify


@pytest.mark.parametrize("text, state", [
    ("", InputState.EMPTY),
    ("-", InputState.PARTIAL),
    (".", InputState.PARTIAL),
    ("-.", InputState.PARTIAL),
    ("1e", InputState.PARTIAL),
    ("1e-", InputState.PARTIAL),
    ("2.5E+", InputState.PARTIAL),
    ("12", InputState.VALID),
    ("-0.5", InputState.VALID),
    ("1.", InputState.VALID),
    (".25", InputState.VALID),
    ("2.1e11", InputState.VALID),
    ("-1e-3", InputState.VALID),
])
def test_classify(text, state):
    assert classify(text) is state


@pytest.mark.parametrize("text", ["abc", "1-", "--1", "1.2.3", "e5", "-e", "1e5e", " 1"])
def test_classify_rejects(text):
    assert classify(text) is None


def test_keystrokes_build_up_a_number():
    field = NumericField()
    for text in ["-", "-1", "-1e", "-1e-", "-1e-3"]:
        field = field.type(text)
        assert field.text == text

    value, committed = field.commit()
    assert value == pytest.approx(-0.001)
    assert committed.text == "-1e-3"
    print("✓ '-' -> '-1e-3' accepted keystroke by keystroke")


def test_rejected_keystroke_keeps_previous_text():
    field = NumericField(text="12")
    assert field.type("12a") is field
    assert field.state is InputState.VALID


@pytest.mark.parametrize("text", ["", "-", "-.", "1e-"])
def test_commit_normalises_to_default(text):
    field = NumericField(text=text, default=1.0)

    value, committed = field.commit()

    assert value == 1.0
    assert committed.state is InputState.VALID
    assert float(committed.text) == 1.0


def test_commit_zero_default_shows_empty_field():
    value, committed = NumericField(text="-").commit()
    assert value == 0.0
    assert committed.text == ""
    assert committed.state is InputState.EMPTY


def test_from_value():
    assert NumericField.from_value(2.5).text == "2.5"
    assert NumericField.from_value(0.0).text == ""
