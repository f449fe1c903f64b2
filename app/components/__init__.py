# app/components - Reusable UI components
from .numeric_input import numeric_text_input
from .structure_editor import render_node_editor, render_rod_editor, show_figure

__all__ = [
    'numeric_text_input',
    'render_node_editor',
    'render_rod_editor',
    'show_figure',
]
