# rodcraft/inputs.py
"""
NUMERIC INPUT FIELDS
====================

While a user types a number the text passes through states that are not yet
numbers ("-", "-.", "1e-"). Instead of storing such text in the numeric
model, a field keeps its text and one of three states:

    EMPTY    ""                        -> commits to the default
    PARTIAL  "-", ".", "-.", "1e", "1e-"  -> commits to the default
    VALID    "12", "-0.5", "2.1e11"    -> commits to float(text)

TRANSITIONS:
------------
Every keystroke proposes a new text. It is accepted when it classifies as
one of the three states, otherwise the field keeps its previous text.
Normalisation to a number happens only in commit(), i.e. when the field
loses focus, never on a keystroke.
"""

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple


class InputState(Enum):
    EMPTY = "empty"
    PARTIAL = "partial"
    VALID = "valid"


_VALID_RE = re.compile(r"^-?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$")
_PARTIAL_RE = re.compile(r"^-?\d*\.?\d*([eE][-+]?)?$")


def classify(text: str) -> Optional[InputState]:
    """State of a candidate text, or None if the text is not acceptable."""
    if text == "":
        return InputState.EMPTY
    if _VALID_RE.match(text):
        return InputState.VALID
    if _PARTIAL_RE.match(text):
        # "e" without a mantissa ("-e", ".e") is never on the way to a number
        mantissa = text.rstrip("+-eE")
        if text[-1:] in "eE+-" and "e" in text.lower() and not re.search(r"\d", mantissa):
            return None
        return InputState.PARTIAL
    return None


@dataclass(frozen=True)
class NumericField:
    """Text of one numeric input plus the value it commits to when empty or partial."""
    text: str = ""
    default: float = 0.0

    @property
    def state(self) -> InputState:
        state = classify(self.text)
        # Construction from arbitrary text is allowed; treat it as partial
        return state if state is not None else InputState.PARTIAL

    @classmethod
    def from_value(cls, value: float, default: float = 0.0) -> "NumericField":
        """Field showing a committed number (zero shows as an empty field)."""
        return cls(text="" if value == 0 else repr(float(value)), default=default)

    def type(self, text: str) -> "NumericField":
        """Propose new text; rejected keystrokes return the field unchanged."""
        if classify(text) is None:
            return self
        return replace(self, text=text)

    def commit(self) -> Tuple[float, "NumericField"]:
        """
        Normalise on blur.

        Returns the numeric value and the field to display afterwards:
        VALID text is kept, EMPTY and PARTIAL text collapse to the default.
        """
        if self.state is InputState.VALID:
            return float(self.text), self
        return self.default, NumericField.from_value(self.default, self.default)
