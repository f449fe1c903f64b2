# rodcraft - Rod Structure Postprocessing
"""
RODCRAFT: Layout and Postprocessing for Axially Loaded Rod Chains
=================================================================

This package takes the output of a 1-D rod solver (per-rod polynomial
fields N(x), σ(x), u(x) and nodal displacements) and provides:
- Structure layout on a bounded pixel canvas (length scale, log/linear heights)
- Node label de-collision
- Field diagram (epure) sampling with boundary and extremum markers
- Uniform-step tables and per-rod strength summaries
- Section queries with an append-only history
- HTML report assembly and CSV export

ARCHITECTURE:
-------------
    model.py        Data model (NodeSpec, RodSpec, StructureInput, FullResult)
    fields.py       Polynomial field evaluation and interior extremum
    layout.py       Pixel layout of the rod chain
    labels.py       Node label placement
    diagrams.py     Epure sampling
    post.py         Step tables, rod summary, nodal displacements
    sections.py     Section query calculator
    report.py       HTML report assembly
    export.py       CSV / report file output
    viz.py          matplotlib rendering (SVG handles)
    project_io.py   Structure and result JSON files
    editing.py      Snapshot edits of a structure
    inputs.py       Numeric input field states
"""

from .model import (
    NodeSpec,
    RodSpec,
    StructureInput,
    PolynomialField,
    RodResult,
    FullResult,
    structure_advisory,
    result_matches_structure,
)
from .layout import LayoutConfig, LayoutGeometry, compute_layout
from .labels import LabelConfig, resolve_label_positions
from .diagrams import FieldDiagram, sample_field_diagram, sample_all_diagrams
from .post import build_step_table, summarize_rods, nodal_displacements
from .sections import SectionQueryCalculator, SectionQueryRecord
from .report import ReportAssembler, ReportSections, ReportGenerationError
from .project_io import StructureFileError

__version__ = "0.1.0"
