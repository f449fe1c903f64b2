# app/components/numeric_input.py
"""
Numeric text input backed by rodcraft.inputs.NumericField.

Streamlit hands the text over when the field loses focus, so every change
is one type() + commit() of the field. Rejected text falls back to the
previous value; empty and partial text ("-", "1e-") commit to the default.
"""

import streamlit as st
from typing import Callable, Optional

from rodcraft.inputs import NumericField


def _committed_value(text: str, default: float) -> float:
    value, _ = NumericField(text=text, default=default).commit()
    return value


def _commit(
    key: str,
    value: float,
    default: float,
    positive: bool,
    on_commit: Optional[Callable[[float], None]],
) -> None:
    field = NumericField.from_value(value, default).type(st.session_state[key])
    committed, shown = field.commit()
    if positive and committed <= 0:
        committed, shown = value, NumericField.from_value(value, default)

    st.session_state[key] = shown.text
    if committed != value and on_commit is not None:
        on_commit(committed)


def numeric_text_input(
    label: str,
    key: str,
    value: float,
    on_commit: Optional[Callable[[float], None]] = None,
    default: float = 0.0,
    positive: bool = False,
    **kwargs,
) -> None:
    """
    Render a text input showing `value`.

    Args:
        label: Widget label
        key: Session state key of the widget text
        value: Current committed number
        on_commit: Called with the new number when the committed value changes
        default: Number that empty or partial text commits to
        positive: Reject zero and negative numbers (lengths, areas, moduli)
    """
    # Re-sync when the model changed underneath the widget (file load, removal)
    stored = st.session_state.get(key)
    if stored is None or _committed_value(stored, default) != value:
        st.session_state[key] = NumericField.from_value(value, default).text

    st.text_input(
        label,
        key=key,
        on_change=_commit,
        args=(key, value, default, positive, on_commit),
        **kwargs,
    )
