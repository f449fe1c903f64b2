# rodcraft/diagrams.py
"""
FIELD DIAGRAM SAMPLING (EPURES)
===============================

This module turns the per-rod polynomial fields into the point sequences
used to draw one field's diagram across the whole chain:

1. Curves - each rod's local length is split into equal subdivisions and
   the field is evaluated at every point
2. Markers - the two boundary values of every rod and, for the displacement
   field, the interior extremum of u(x) when it exists
3. Vertical range - min/max over everything sampled, always including zero,
   so the baseline (value = 0) stays visible on the panel

KEY CONCEPTS:
-------------
- N(x), σ(x) are linear per rod: jumps appear only at nodes
  (concentrated forces, area changes)
- u(x) is continuous across nodes and parabolic inside a rod with q != 0

COORDINATES:
------------
Every sample carries both the pixel x of the layout (rods drawn with their
adjusted widths) and the true metre coordinate along the chain, so the same
diagram feeds the construction drawing and the metre-scaled epure plots.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .fields import FIELD_NAMES, evaluate, find_interior_extremum, rod_field
from .layout import LayoutGeometry
from .model import RodResult

DEFAULT_SAMPLES_PER_ROD = 30


@dataclass(frozen=True)
class DiagramPoint:
    """A single point on a field diagram."""
    rod_id: int
    x_local: float      # Position along the rod (0 to L)
    x_global: float     # Metres from the chain start
    x_px: float         # Pixel x on the layout
    value: float


@dataclass(frozen=True)
class DiagramMarker:
    """A point drawn with emphasis: rod boundary value or interior extremum."""
    kind: str           # "boundary" or "extremum"
    point: DiagramPoint


@dataclass
class FieldDiagram:
    """Complete diagram data for one field over the whole chain."""
    field_name: str
    points: List[DiagramPoint] = field(default_factory=list)
    markers: List[DiagramMarker] = field(default_factory=list)
    rod_spans: List[Tuple[int, int]] = field(default_factory=list)  # [start, end) into points
    value_min: float = 0.0
    value_max: float = 0.0

    @property
    def value_range(self) -> float:
        span = self.value_max - self.value_min
        return span if span > 0 else 1.0

    def rod_points(self, index: int) -> List[DiagramPoint]:
        """Points of the index-th rod only (for per-rod polylines and fills)."""
        start, end = self.rod_spans[index]
        return self.points[start:end]

    def to_panel_y(self, value: float, height: float) -> float:
        """
        Map a value into a panel of `height` pixels (0 at the top).

        The panel spans [value_min, value_max]; since both bounds include
        zero, the baseline always falls inside the panel.
        """
        return (self.value_max - value) * height / self.value_range

    @property
    def extrema(self) -> List[DiagramMarker]:
        return [m for m in self.markers if m.kind == 'extremum']


def sample_field_diagram(
    results: Sequence[RodResult],
    layout: LayoutGeometry,
    field_name: str,
    samples_per_rod: int = DEFAULT_SAMPLES_PER_ROD,
) -> FieldDiagram:
    """
    Sample one field ('N', 'sigma' or 'u') along the chain.

    Parameters:
    -----------
    results : Sequence[RodResult]
        Solver output per rod, chain order
    layout : LayoutGeometry
        Layout computed for the same rods (pixel spans of each rod)
    field_name : str
        'N', 'sigma' or 'u'
    samples_per_rod : int
        Uniform subdivisions of each rod (samples_per_rod + 1 points per rod)

    Returns:
    --------
    FieldDiagram
        Ordered points, boundary/extremum markers and the value range.
    """
    if field_name not in FIELD_NAMES:
        raise ValueError(f"Unknown field '{field_name}'. Expected one of {FIELD_NAMES}")
    n_sub = max(1, int(samples_per_rod))

    diagram = FieldDiagram(field_name=field_name)
    x_offset = 0.0

    for rod, geom in zip(results, layout.rods):
        poly = rod_field(rod, field_name)
        L = rod.length

        def to_px(x_local: float) -> float:
            if L <= 0:
                return geom.x
            return geom.x + (x_local / L) * geom.width

        def make_point(x_local: float, value: float) -> DiagramPoint:
            return DiagramPoint(
                rod_id=rod.rod_id,
                x_local=float(x_local),
                x_global=x_offset + float(x_local),
                x_px=to_px(x_local),
                value=float(value),
            )

        # Curve samples
        xs = np.linspace(0.0, L, n_sub + 1)
        values = evaluate(poly, xs)
        start = len(diagram.points)
        for x_local, value in zip(xs, values):
            diagram.points.append(make_point(x_local, value))
        diagram.rod_spans.append((start, len(diagram.points)))

        # Boundary markers at x = 0 and x = L
        for x_local in (0.0, L):
            diagram.markers.append(DiagramMarker(
                kind='boundary',
                point=make_point(x_local, evaluate(poly, x_local)),
            ))

        # Interior extremum, displacement only
        if field_name == 'u':
            x_ext = find_interior_extremum(poly, L)
            if x_ext is not None:
                diagram.markers.append(DiagramMarker(
                    kind='extremum',
                    point=make_point(x_ext, evaluate(poly, x_ext)),
                ))

        x_offset += L

    all_values = [p.value for p in diagram.points]
    all_values += [m.point.value for m in diagram.markers]
    all_values.append(0.0)
    diagram.value_min = min(all_values)
    diagram.value_max = max(all_values)

    return diagram


def sample_all_diagrams(
    results: Sequence[RodResult],
    layout: LayoutGeometry,
    samples_per_rod: int = DEFAULT_SAMPLES_PER_ROD,
) -> Dict[str, FieldDiagram]:
    """Diagrams for N, sigma and u keyed by field name."""
    return {
        name: sample_field_diagram(results, layout, name, samples_per_rod)
        for name in FIELD_NAMES
    }


def get_diagram_summary(diagrams: Dict[str, FieldDiagram]) -> Dict:
    """
    Summary statistics over the sampled diagrams.

    Returns the largest absolute value of each field and the rod where it
    occurs (None for empty diagrams).
    """
    summary = {}
    for name, diagram in diagrams.items():
        if not diagram.points:
            summary[name] = {'max_abs': 0.0, 'critical_rod': None}
            continue
        candidates = diagram.points + [m.point for m in diagram.markers]
        critical = max(candidates, key=lambda p: abs(p.value))
        summary[name] = {'max_abs': abs(critical.value), 'critical_rod': critical.rod_id}
    return summary
