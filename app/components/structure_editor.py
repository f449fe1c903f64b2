# app/components/structure_editor.py
"""
Structure editor: rod table with editable properties, node forces and supports.
"""

import streamlit as st
import matplotlib.pyplot as plt

from rodcraft.editing import can_fix_node, set_node_fixed, set_node_force, update_rod
from rodcraft.model import StructureInput

from config import CONFIG
from state import get_structure, set_structure
from .numeric_input import numeric_text_input


# (attribute, column header, default for empty text, must be positive)
ROD_COLUMNS = [
    ('length', 'L (m)', CONFIG.default_length, True),
    ('area', 'A (m²)', CONFIG.default_area, True),
    ('elastic_modulus', 'E (Pa)', CONFIG.default_E, True),
    ('allowable_stress', '[σ] (Pa)', CONFIG.default_allowable_stress, True),
    ('distributed_load', 'q (N/m)', 0.0, False),
]


def show_figure(fig) -> None:
    """Display a matplotlib figure and release it from pyplot."""
    st.pyplot(fig, use_container_width=True)
    plt.close(fig)


def _update_rod(index: int, attr: str):
    def apply(value: float) -> None:
        set_structure(update_rod(get_structure(), index, **{attr: value}))
    return apply


def _set_force(index: int):
    def apply(value: float) -> None:
        set_structure(set_node_force(get_structure(), index, value))
    return apply


def _toggle_fixed(index: int, key: str) -> None:
    set_structure(set_node_fixed(get_structure(), index, st.session_state[key]))


def render_rod_editor(structure: StructureInput) -> None:
    """One row of numeric inputs per rod; edits go through update_rod."""
    header = st.columns([1] + [3] * len(ROD_COLUMNS))
    header[0].markdown("**Rod**")
    for col, (_, title, _, _) in zip(header[1:], ROD_COLUMNS):
        col.markdown(f"**{title}**")

    for i, rod in enumerate(structure.rods):
        cols = st.columns([1] + [3] * len(ROD_COLUMNS))
        cols[0].markdown(f"{rod.id}")
        for col, (attr, title, default, positive) in zip(cols[1:], ROD_COLUMNS):
            with col:
                numeric_text_input(
                    f"{title} rod {rod.id}",
                    key=f"rod_{i}_{attr}",
                    value=getattr(rod, attr),
                    on_commit=_update_rod(i, attr),
                    default=default,
                    positive=positive,
                    label_visibility="collapsed",
                )


def render_node_editor(structure: StructureInput) -> None:
    """External force per node; supports only on the two end nodes."""
    for i, node in enumerate(structure.nodes):
        col_force, col_fixed = st.columns([3, 1])
        with col_force:
            numeric_text_input(
                f"F at node {node.id} (N)",
                key=f"force_{i}",
                value=node.external_force,
                on_commit=_set_force(i),
            )
        with col_fixed:
            key = f"fixed_{i}"
            if st.session_state.get(key) != node.fixed:
                st.session_state[key] = node.fixed
            st.checkbox(
                "Fixed",
                key=key,
                disabled=not can_fix_node(structure, i),
                on_change=_toggle_fixed,
                args=(i, key),
            )
