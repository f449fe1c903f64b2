# app/state/session.py
"""
Session state management for Streamlit.

Provides typed accessors for session state to avoid
scattered st.session_state['key'] calls throughout the app.
"""

import streamlit as st
from typing import Optional

from rodcraft.model import FullResult, StructureInput, result_matches_structure
from rodcraft.sections import SectionQueryCalculator

from config import CONFIG


# ============================================================================
# Structure State
# ============================================================================

def get_structure() -> StructureInput:
    """Get the current structure description (empty if none loaded)."""
    if 'structure' not in st.session_state:
        st.session_state.structure = StructureInput()
    return st.session_state.structure


def set_structure(structure: StructureInput) -> None:
    """
    Replace the structure.

    The loaded result is kept only while it still belongs to the new
    structure (see result_matches_structure). A dropped result leaves a
    notice for the next page render (pop_stale_result_notice).
    """
    st.session_state.structure = structure
    result = get_result()
    if result is not None and not result_matches_structure(structure, result):
        clear_result()
        st.session_state.stale_result_notice = True


def pop_stale_result_notice() -> bool:
    """True once after set_structure dropped a result that no longer applied."""
    return st.session_state.pop('stale_result_notice', False)


# ============================================================================
# Result State
# ============================================================================

def get_result() -> Optional[FullResult]:
    """Get the loaded solver result from session state."""
    return st.session_state.get('result', None)


def set_result(result: FullResult) -> None:
    """Store a solver result and start a fresh section query history for it."""
    st.session_state.result = result
    st.session_state.calculator = SectionQueryCalculator(result.rods)


def clear_result() -> None:
    """Clear the result and everything derived from it."""
    for key in ('result', 'calculator'):
        if key in st.session_state:
            del st.session_state[key]


def get_calculator() -> Optional[SectionQueryCalculator]:
    """Section query calculator bound to the current result."""
    return st.session_state.get('calculator', None)


# ============================================================================
# Uploads
# ============================================================================

def is_new_upload(slot: str, uploaded) -> bool:
    """
    True once per file placed in an uploader.

    Streamlit keeps the uploaded file across reruns, so without this guard
    it would be parsed again on every rerun. Clearing the uploader resets
    the slot, and the same file can then be loaded again.
    """
    key = f'{slot}_upload'
    if uploaded is None:
        st.session_state.pop(key, None)
        return False
    if st.session_state.get(key) == uploaded.name:
        return False
    st.session_state[key] = uploaded.name
    return True


# ============================================================================
# Step State
# ============================================================================

def get_step() -> float:
    if 'step' not in st.session_state:
        st.session_state.step = CONFIG.default_step
    return st.session_state.step


def set_step(step: float) -> None:
    st.session_state.step = step
