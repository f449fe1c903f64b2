# rodcraft/labels.py
"""Node label placement: greedy pairwise de-collision with immediate neighbours."""

from dataclasses import dataclass
from typing import List, Sequence


@dataclass(frozen=True)
class LabelConfig:
    baseline_y: float = 150.0      # default label row below the rod axis
    alternate_y: float = 130.0     # second row used by even nodes when crowded
    min_distance: float = 60.0     # px between neighbouring nodes before labels clash
    force_offset: float = 10.0     # px shift away from a force arrow


DEFAULT_LABELS = LabelConfig()


@dataclass(frozen=True)
class LabelPlacement:
    y: float
    offset: float


def resolve_label_positions(
    node_xs: Sequence[float],
    forces: Sequence[float],
    config: LabelConfig = DEFAULT_LABELS,
) -> List[LabelPlacement]:
    """
    Assign a label row and horizontal nudge to every node.

    Parameters:
    -----------
    node_xs : Sequence[float]
        Node pixel x positions from the layout, chain order
    forces : Sequence[float]
        External force per node (sign gives the arrow direction)
    config : LabelConfig
        Rows, crowding threshold and nudge size

    Returns:
    --------
    List[LabelPlacement]
        One placement per node. Crowded nodes alternate rows by index parity
        (even -> alternate_y, odd -> baseline_y); nodes with a nonzero force
        are nudged by +/- force_offset in the force direction.
    """
    placements = []
    n = len(node_xs)

    for i, node_x in enumerate(node_xs):
        y = config.baseline_y

        crowded_left = i > 0 and node_x - node_xs[i - 1] < config.min_distance
        crowded_right = i < n - 1 and node_xs[i + 1] - node_x < config.min_distance
        if crowded_left or crowded_right:
            y = config.alternate_y if i % 2 == 0 else config.baseline_y

        force = forces[i] if i < len(forces) else 0.0
        if force > 0:
            offset = config.force_offset
        elif force < 0:
            offset = -config.force_offset
        else:
            offset = 0.0

        placements.append(LabelPlacement(y=y, offset=offset))

    return placements
