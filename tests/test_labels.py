"""
TEST: Node Label Placement
==========================

Labels sit on one row unless neighbouring nodes are closer than the
crowding threshold; then even nodes move to the second row. Nodes with a
force are nudged in the force direction.
"""

from rodcraft.labels import DEFAULT_LABELS, LabelConfig, resolve_label_positions


def test_spread_nodes_share_baseline():
    placements = resolve_label_positions([40.0, 140.0, 240.0], [0.0, 0.0, 0.0])

    assert [p.y for p in placements] == [DEFAULT_LABELS.baseline_y] * 3
    assert [p.offset for p in placements] == [0.0, 0.0, 0.0]
    print("✓ Well separated nodes keep the baseline row")


def test_crowded_nodes_alternate_by_parity():
    node_xs = [40.0, 70.0, 100.0, 200.0]
    placements = resolve_label_positions(node_xs, [0.0] * 4)

    ys = [p.y for p in placements]
    # nodes 0..2 are crowded; node 3 is 100 px away from node 2
    assert ys == [
        DEFAULT_LABELS.alternate_y,
        DEFAULT_LABELS.baseline_y,
        DEFAULT_LABELS.alternate_y,
        DEFAULT_LABELS.baseline_y,
    ]
    print(f"✓ Crowded labels alternate rows: {ys}")


def test_force_direction_nudges_label():
    placements = resolve_label_positions([40.0, 140.0, 240.0], [0.0, 500.0, -2000.0])

    assert placements[0].offset == 0.0
    assert placements[1].offset == DEFAULT_LABELS.force_offset
    assert placements[2].offset == -DEFAULT_LABELS.force_offset


def test_missing_forces_treated_as_zero():
    placements = resolve_label_positions([40.0, 140.0], [])
    assert [p.offset for p in placements] == [0.0, 0.0]


def test_custom_threshold():
    config = LabelConfig(min_distance=150.0)
    placements = resolve_label_positions([40.0, 140.0], [0.0, 0.0], config)
    assert [p.y for p in placements] == [config.alternate_y, config.baseline_y]
