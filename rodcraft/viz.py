"""
VISUALIZATION: ROD SCHEMATICS AND EPURES
========================================

PURPOSE:
--------
Renders the layout and the sampled field diagrams as vector graphics
(matplotlib figures serialised to SVG), ready to embed in a report.

Three renderable handles are provided. Each one knows how to produce its own
figure and its own SVG markup on demand, so report assembly never has to go
looking for a drawing:

- StructureDiagram     editor schematic of a StructureInput (rods, supports,
                       nodal forces, distributed loads, node labels)
- ConstructionDiagram  the solved chain with the N(x), σ(x), u(x) epures
                       stacked underneath on the same pixel layout
- EpureDiagram         one field plotted against the true metre coordinate

PIXEL DRAWINGS:
---------------
StructureDiagram and ConstructionDiagram draw in layout pixels: the axes
limits equal the canvas size, y grows downwards, and one figure inch is
PX_PER_INCH pixels. Rod widths, heights and node positions come straight
from rodcraft.layout; label rows from rodcraft.labels.
"""

import io
from typing import Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Rectangle

from .diagrams import FieldDiagram, sample_all_diagrams, sample_field_diagram
from .fields import FIELD_LABELS, FIELD_NAMES
from .labels import DEFAULT_LABELS, LabelConfig, resolve_label_positions
from .layout import DEFAULT_LAYOUT, LayoutConfig, LayoutGeometry, compute_layout
from .model import FullResult, NodeSpec, StructureInput, structure_advisory

# =============================================================================
# PALETTE
# =============================================================================

COLORS = {
    'rod_fill': '#4a90e2',
    'rod_edge': '#2c3e50',
    'background': '#fafafa',
    'text': '#333333',
    'muted': '#666666',
    'guide': '#999999',
    'axis': '#666666',
    'support': '#000000',
    'force_tension': 'blue',
    'force_compression': 'orange',
    'load_tension': 'green',
    'load_compression': 'red',
    'advisory': 'orange',
    'extremum_fill': 'gold',
    'extremum_edge': '#e65100',
    'allowable': '#ff6d00',
}

FIELD_COLORS = {
    'N': '#e53935',
    'sigma': '#1e88e5',
    'u': '#43a047',
}

PX_PER_INCH = 100.0
STRUCTURE_HEIGHT = 200.0
EPURE_HEIGHT = 100.0
EPURE_GAP = 25.0
EPURE_TOP = 170.0


def figure_to_svg(fig) -> str:
    """Serialise a figure to inline SVG markup (XML prolog stripped) and close it."""
    buffer = io.StringIO()
    try:
        fig.savefig(buffer, format='svg', facecolor=fig.get_facecolor())
    finally:
        plt.close(fig)
    svg = buffer.getvalue()
    start = svg.find('<svg')
    return svg[start:] if start >= 0 else svg


def _pixel_axes(width: float, height: float):
    """Figure whose data coordinates are canvas pixels (origin top-left)."""
    fig = plt.figure(figsize=(width / PX_PER_INCH, height / PX_PER_INCH),
                     facecolor=COLORS['background'])
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_facecolor(COLORS['background'])
    ax.axis('off')
    return fig, ax


def _arrow(ax, x0: float, y0: float, x1: float, y1: float, color: str, lw: float) -> None:
    ax.annotate(
        '', xy=(x1, y1), xytext=(x0, y0),
        arrowprops=dict(arrowstyle='-|>', color=color, lw=lw, shrinkA=0, shrinkB=0),
    )


def _draw_chain(
    ax,
    rods: Sequence,
    nodes: Sequence[NodeSpec],
    layout: LayoutGeometry,
    config: LayoutConfig,
    label_config: LabelConfig,
) -> None:
    """
    Draw rods, distributed loads, supports, nodal forces and node labels.

    `rods` may be RodSpec or RodResult items; only id, area, length and
    distributed load are read.
    """
    axis_y = config.axis_y

    for rod, geom in zip(rods, layout.rods):
        rod_id = getattr(rod, 'rod_id', getattr(rod, 'id', None))
        ax.add_patch(Rectangle(
            (geom.x, geom.y), geom.width, geom.height,
            facecolor=COLORS['rod_fill'], edgecolor=COLORS['rod_edge'], linewidth=1,
        ))

        cx = geom.x + geom.width / 2
        if geom.width > 50:
            ax.add_patch(Circle((cx, axis_y - 25), 12, facecolor='white',
                                edgecolor=COLORS['text'], linewidth=1))
            ax.text(cx, axis_y - 25, str(rod_id), ha='center', va='center',
                    fontsize=8, fontweight='bold')
            ax.text(cx, axis_y - 45, f"L={rod.length:.2f} m", ha='center', va='center',
                    fontsize=7, color=COLORS['muted'])
        else:
            ax.add_patch(Circle((cx, axis_y - 25), 8, facecolor='white',
                                edgecolor=COLORS['text'], linewidth=1))
            ax.text(cx, axis_y - 25, str(rod_id), ha='center', va='center',
                    fontsize=6, fontweight='bold')

        q = rod.distributed_load
        if q != 0:
            direction = 1 if q > 0 else -1
            color = COLORS['load_tension'] if q > 0 else COLORS['load_compression']
            if geom.width <= 40:
                _arrow(ax, cx, axis_y, cx + 10 * direction, axis_y, color, 2)
            else:
                count = max(2, int(geom.width // 15))
                spacing = geom.width / (count + 1)
                for k in range(count):
                    x0 = geom.x + spacing * (k + 1)
                    _arrow(ax, x0, axis_y, x0 + 8 * direction, axis_y, color, 1.2)

    forces = [node.external_force for node in nodes]
    placements = resolve_label_positions(layout.node_xs, forces, label_config)

    for i, (node, node_x, label) in enumerate(zip(nodes, layout.node_xs, placements)):
        if node.fixed:
            ax.plot([node_x, node_x], [axis_y - 10, axis_y + 20],
                    color=COLORS['support'], linewidth=3)
            start_x = node_x - 8 if i == 0 else node_x
            for k in range(6):
                y = axis_y - 10 + k * 5
                ax.plot([start_x, start_x + 8], [y, y + 4],
                        color=COLORS['support'], linewidth=1.2)

        if node.external_force != 0:
            tension = node.external_force > 0
            end_x = node_x + (config.arrow_length if tension else -config.arrow_length)
            color = COLORS['force_tension'] if tension else COLORS['force_compression']
            _arrow(ax, node_x, axis_y, end_x, axis_y, color, 2)

        ax.text(node_x + label.offset, label.y, f"N{node.id}", ha='center', va='center',
                fontsize=8, fontweight='bold', color=COLORS['text'])
        ax.add_patch(Circle((node_x, axis_y), 3, facecolor='white',
                            edgecolor=COLORS['text'], linewidth=1.2, zorder=5))


def _drawn_width(layout: LayoutGeometry, config: LayoutConfig) -> float:
    """Canvas width, widened when minimum rod widths push the chain past it."""
    if not layout.node_xs:
        return config.min_total_width
    return max(layout.canvas_width, layout.node_xs[-1] + config.node_offset_x)


def _draw_epure_panel(ax, diagram: FieldDiagram, top: float, width: float) -> None:
    """One field panel of the construction drawing: curve, fill, markers, title."""
    color = FIELD_COLORS[diagram.field_name]

    def panel_y(value: float) -> float:
        return top + diagram.to_panel_y(value, EPURE_HEIGHT)

    baseline = panel_y(0.0)
    ax.plot([0, width], [baseline, baseline], color=COLORS['axis'], linewidth=1.5)
    ax.text(12, top + EPURE_HEIGHT / 2, FIELD_LABELS[diagram.field_name],
            rotation=90, ha='center', va='center', fontsize=9,
            fontweight='bold', color=color)

    for i in range(len(diagram.rod_spans)):
        pts = diagram.rod_points(i)
        xs = [p.x_px for p in pts]
        ys = [panel_y(p.value) for p in pts]
        ax.fill_between(xs, ys, baseline, color=color, alpha=0.12, linewidth=0)
        ax.plot(xs, ys, color=color, linewidth=2)

    for marker in diagram.markers:
        p = marker.point
        y = panel_y(p.value)
        if marker.kind == 'extremum':
            ax.add_patch(Circle((p.x_px, y), 4, facecolor=COLORS['extremum_fill'],
                                edgecolor=COLORS['extremum_edge'], linewidth=1.5, zorder=6))
            dy = -15 if p.value >= 0 else 15
            ax.text(p.x_px, y + dy, f"{p.value:.2e}", ha='center', va='center',
                    fontsize=7, fontweight='bold', color=COLORS['extremum_edge'])
        else:
            ax.add_patch(Circle((p.x_px, y), 3.5, facecolor=color, edgecolor='none', zorder=6))
            dy = -12 if p.value >= 0 else 12
            ax.text(p.x_px, y + dy, f"{p.value:.2e}", ha='center', va='center',
                    fontsize=7, color=color)


class StructureDiagram:
    """
    Editor schematic of a structure description.

    When the node count does not match rod count + 1 (or the structure is
    empty) the advisory text is drawn in place of the schematic.
    """

    name = 'structure'

    def __init__(
        self,
        structure: StructureInput,
        config: LayoutConfig = DEFAULT_LAYOUT,
        label_config: LabelConfig = DEFAULT_LABELS,
    ):
        self.structure = structure
        self.config = config
        self.label_config = label_config

    @property
    def advisory(self) -> Optional[str]:
        return structure_advisory(self.structure)

    def figure(self):
        advisory = self.advisory
        if advisory:
            fig, ax = _pixel_axes(self.config.min_total_width, 60)
            ax.text(10, 30, advisory, ha='left', va='center', fontsize=9,
                    color=COLORS['advisory'], wrap=True)
            return fig

        rods = self.structure.rods
        layout = compute_layout(rods, self.config)
        width = _drawn_width(layout, self.config)
        fig, ax = _pixel_axes(width, STRUCTURE_HEIGHT)
        _draw_chain(ax, rods, self.structure.nodes, layout, self.config, self.label_config)

        enlarged = layout.short_rods_enlarged
        if enlarged or layout.length_scale != self.config.base_length_scale:
            note = f"Scale: 1 m = {layout.length_scale:.1f} px"
            if enlarged:
                note += " (short rods enlarged)"
            ax.text(self.config.node_offset_x, 185, note, fontsize=8,
                    fontweight='bold', color=COLORS['muted'])
        ax.text(width - self.config.node_offset_x, 195,
                f"Total: {len(rods)} rods, {len(self.structure.nodes)} nodes",
                ha='right', fontsize=8, color='#888888')
        return fig

    def to_svg(self) -> str:
        return figure_to_svg(self.figure())


class ConstructionDiagram:
    """The solved chain with the three epures stacked on the same layout."""

    name = 'construction'

    def __init__(
        self,
        result: FullResult,
        config: LayoutConfig = DEFAULT_LAYOUT,
        label_config: LabelConfig = DEFAULT_LABELS,
        samples_per_rod: int = 30,
    ):
        self.result = result
        self.config = config
        self.label_config = label_config
        self.samples_per_rod = samples_per_rod

    def figure(self):
        rods = self.result.rods
        layout = compute_layout(rods, self.config)
        diagrams = sample_all_diagrams(rods, layout, self.samples_per_rod)

        width = _drawn_width(layout, self.config)
        bottom = EPURE_TOP + len(FIELD_NAMES) * (EPURE_HEIGHT + EPURE_GAP)
        height = bottom + 40
        fig, ax = _pixel_axes(width, height)

        _draw_chain(ax, rods, self.result.nodes, layout, self.config, self.label_config)

        # Node guide lines through all panels
        for node_x in layout.node_xs:
            ax.plot([node_x, node_x], [self.config.axis_y - 10, bottom],
                    color=COLORS['guide'], linewidth=1, linestyle=(0, (3, 3)))

        for idx, name in enumerate(FIELD_NAMES):
            top = EPURE_TOP + EPURE_GAP + idx * (EPURE_HEIGHT + EPURE_GAP)
            _draw_epure_panel(ax, diagrams[name], top, width)

        ax.text(width / 2, bottom + 25, "x, m", ha='center', fontsize=9, color=COLORS['text'])
        return fig

    def to_svg(self) -> str:
        return figure_to_svg(self.figure())


class EpureDiagram:
    """One field along the chain in metres, with node grid lines."""

    def __init__(self, result: FullResult, field_name: str, samples_per_rod: int = 50):
        if field_name not in FIELD_NAMES:
            raise ValueError(f"Unknown field '{field_name}'. Expected one of {FIELD_NAMES}")
        self.result = result
        self.field_name = field_name
        self.samples_per_rod = samples_per_rod

    @property
    def name(self) -> str:
        return f"epure_{self.field_name}"

    def figure(self):
        rods = self.result.rods
        layout = compute_layout(rods)
        diagram = sample_field_diagram(rods, layout, self.field_name, self.samples_per_rod)
        color = FIELD_COLORS[self.field_name]

        fig, ax = plt.subplots(figsize=(6.5, 2.8), facecolor='white')

        node_positions = [0.0]
        for rod in rods:
            node_positions.append(node_positions[-1] + rod.length)
        for x in node_positions:
            ax.axvline(x, color=COLORS['guide'], linestyle=':', linewidth=1)

        ax.axhline(0.0, color=COLORS['axis'], linewidth=1.5)

        for i in range(len(diagram.rod_spans)):
            pts = diagram.rod_points(i)
            xs = [p.x_global for p in pts]
            ys = [p.value for p in pts]
            ax.fill_between(xs, ys, 0.0, color=color, alpha=0.12, linewidth=0)
            ax.plot(xs, ys, color=color, linewidth=2.5)

        if self.field_name == 'sigma':
            start = 0.0
            for rod in rods:
                end = start + rod.length
                for sign in (1, -1):
                    ax.hlines(sign * rod.allowable_stress, start, end,
                              colors=COLORS['allowable'], linestyles='--', linewidth=1)
                start = end

        for marker in diagram.extrema:
            p = marker.point
            ax.plot(p.x_global, p.value, 'o', markersize=6,
                    markerfacecolor=COLORS['extremum_fill'],
                    markeredgecolor=COLORS['extremum_edge'])
            ax.annotate(f"{p.value:.2e}", (p.x_global, p.value),
                        textcoords='offset points', xytext=(0, 8), ha='center',
                        fontsize=7, color=COLORS['extremum_edge'])

        ax.set_xticks(node_positions)
        ax.set_xticklabels([f"{x:.1f}" for x in node_positions])
        ax.set_xlabel('x, m')
        ax.set_ylabel(FIELD_LABELS[self.field_name])
        ax.ticklabel_format(axis='y', style='sci', scilimits=(-3, 3))
        ax.grid(True, axis='y', alpha=0.3)
        fig.tight_layout()
        return fig

    def to_svg(self) -> str:
        return figure_to_svg(self.figure())
