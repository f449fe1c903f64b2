"""
TEST: Epure Sampling
====================

We sample N, σ and u along the two-rod chain and check:

1. Point count, pixel and metre coordinates of the samples
2. Boundary markers on every rod, extremum marker only for u(x)
3. The vertical range always contains zero
"""

import pytest

from rodcraft.diagrams import get_diagram_summary, sample_all_diagrams, sample_field_diagram
from rodcraft.layout import compute_layout


def test_samples_cover_every_rod(two_rod_result):
    rods = two_rod_result.rods
    layout = compute_layout(rods)

    diagram = sample_field_diagram(rods, layout, 'N', samples_per_rod=30)

    assert len(diagram.points) == 2 * 31
    assert diagram.rod_spans == [(0, 31), (31, 62)]
    first, last = diagram.points[0], diagram.points[-1]
    assert first.x_px == pytest.approx(layout.node_xs[0])
    assert last.x_px == pytest.approx(layout.node_xs[-1])
    assert last.x_global == pytest.approx(3.0)
    assert diagram.rod_points(1)[0].x_global == pytest.approx(2.0)
    print(f"✓ {len(diagram.points)} samples from x=0 to x=3 m")


def test_boundary_markers_for_every_rod(two_rod_result):
    rods = two_rod_result.rods
    diagram = sample_field_diagram(rods, compute_layout(rods), 'N')

    boundary = [m for m in diagram.markers if m.kind == 'boundary']
    assert [round(m.point.value, 6) for m in boundary] == [1000.0, 1000.0, 2100.0, -2900.0]
    assert diagram.extrema == []


def test_extremum_marker_only_for_displacement(two_rod_result):
    rods = two_rod_result.rods
    diagrams = sample_all_diagrams(rods, compute_layout(rods))

    assert diagrams['N'].extrema == []
    assert diagrams['sigma'].extrema == []

    extrema = diagrams['u'].extrema
    assert len(extrema) == 1
    p = extrema[0].point
    assert p.rod_id == 1
    assert p.x_local == pytest.approx(0.42)
    assert p.x_global == pytest.approx(2.42)
    assert p.value == pytest.approx(2.1025e-6)
    print(f"✓ u(x) extremum at x = {p.x_global:.2f} m, u = {p.value:.4e} m")


def test_value_range_includes_zero(two_rod_result):
    rods = two_rod_result.rods
    layout = compute_layout(rods)

    # rod 0 alone: N = 1000 everywhere, yet the baseline stays in range
    n_rod0 = sample_field_diagram(rods[:1], layout, 'N')
    assert n_rod0.value_min == 0.0
    assert n_rod0.value_max == pytest.approx(1000.0)

    n_all = sample_field_diagram(rods, layout, 'N')
    assert n_all.value_min == pytest.approx(-5000.0 + 2100.0)
    assert n_all.value_max == pytest.approx(2100.0)
    assert n_all.to_panel_y(n_all.value_max, 100) == pytest.approx(0.0)
    assert n_all.to_panel_y(n_all.value_min, 100) == pytest.approx(100.0)
    assert 0.0 < n_all.to_panel_y(0.0, 100) < 100.0


def test_flat_zero_field_has_unit_range(make_rod):
    rods = [make_rod(length=1.0)]
    diagram = sample_field_diagram(rods, compute_layout(rods), 'sigma')
    assert diagram.value_range == 1.0
    assert diagram.to_panel_y(0.0, 50) == pytest.approx(0.0)


def test_unknown_field_rejected(two_rod_result):
    rods = two_rod_result.rods
    with pytest.raises(ValueError):
        sample_field_diagram(rods, compute_layout(rods), 'moment')


def test_diagram_summary(two_rod_result):
    rods = two_rod_result.rods
    summary = get_diagram_summary(sample_all_diagrams(rods, compute_layout(rods)))

    assert summary['N']['max_abs'] == pytest.approx(2900.0)
    assert summary['N']['critical_rod'] == 1
    assert summary['sigma']['max_abs'] == pytest.approx(1.45e6)
    assert summary['u']['max_abs'] == pytest.approx(2.1025e-6)
