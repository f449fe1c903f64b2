# rodcraft/layout.py
"""
ROD GEOMETRY LAYOUT
===================

Maps an ordered rod chain with heterogeneous lengths and cross-sections onto
a bounded pixel canvas while keeping every rod legible.

KEY CONCEPTS:
-------------
- Length scale (px per metre): one scale for the whole chain, so relative
  lengths are preserved, except that no rod is drawn narrower than
  `min_rod_width`.
- Canvas width: total drawn length plus room for end arrows/supports on both
  sides, kept inside [min_total_width, max_total_width].
- Height scale: rod height encodes cross-section area. When areas span more
  than `log_area_ratio` (an empirical tuning constant) the mapping becomes
  logarithmic so one large section does not flatten all others.

The chain is laid out left to right with no gaps: rod i spans exactly from
node i to node i+1.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    """Pixel constants of the schematic (defaults match the editor canvas)."""
    base_length_scale: float = 80.0
    min_rod_width: float = 30.0
    max_rod_width: float = 200.0
    min_total_width: float = 400.0
    max_total_width: float = 1000.0
    min_rod_height: float = 12.0
    max_rod_height: float = 25.0
    arrow_length: float = 25.0
    arrow_clearance: float = 15.0
    axis_y: float = 100.0
    log_area_ratio: float = 10.0

    @property
    def node_offset_x(self) -> float:
        """Horizontal room reserved at each end for force arrows and supports."""
        return self.arrow_length + self.arrow_clearance


DEFAULT_LAYOUT = LayoutConfig()


@dataclass(frozen=True)
class RodGeometry:
    """Pixel rectangle of one rod."""
    x: float
    width: float
    height: float
    y: float


@dataclass(frozen=True)
class LayoutGeometry:
    """Complete layout of the chain."""
    rods: Tuple[RodGeometry, ...] = ()
    node_xs: Tuple[float, ...] = ()
    length_scale: float = 0.0
    canvas_width: float = 0.0
    log_heights: bool = False
    short_rods_enlarged: bool = False


def compute_length_scale(
    lengths: Sequence[float],
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> Tuple[float, float]:
    """
    Compute the px-per-metre scale and the required canvas width.

    Parameters:
    -----------
    lengths : Sequence[float]
        Rod lengths in metres, chain order
    config : LayoutConfig
        Pixel constants

    Returns:
    --------
    (scale, required_width) : Tuple[float, float]
        required_width is measured with the scale before any total-width
        override, i.e. the width the chain would need unclamped.
    """
    scale = config.base_length_scale
    total_length = float(sum(lengths))
    min_len = min(lengths)
    max_len = max(lengths)

    # Rod-width caps: shortest rod wide enough, longest not too wide,
    # and never more than twice the base scale
    if min_len > 0:
        min_required_scale = config.min_rod_width / min_len
        max_allowed_scale = config.max_rod_width / max_len
        scale = min(min_required_scale, max_allowed_scale, config.base_length_scale * 2)

    offset = config.node_offset_x
    required_width = total_length * scale + 2 * offset

    if total_length <= 0:
        logger.debug("Zero total length: skipping total-width adjustment")
        return scale, required_width

    # Total-width override: land exactly on the nearest bound
    if required_width < config.min_total_width:
        scale = (config.min_total_width - 2 * offset) / total_length
    elif required_width > config.max_total_width:
        scale = (config.max_total_width - 2 * offset) / total_length

    return scale, required_width


def compute_rod_heights(
    areas: Sequence[float],
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> Tuple[List[float], bool]:
    """
    Map cross-section areas to pixel heights in [min_rod_height, max_rod_height].

    Returns the heights and whether the logarithmic branch was used.
    """
    min_h = config.min_rod_height
    max_h = config.max_rod_height
    max_area = max(areas)
    min_area = min(areas)

    use_log = min_area > 0 and max_area / min_area > config.log_area_ratio

    if use_log:
        area_scale = (max_h - min_h) / math.log(max_area / min_area + 1)
    elif max_area > 0:
        area_scale = (max_h - min_h) / max_area
    else:
        area_scale = 1.0

    heights = []
    for area in areas:
        if use_log:
            height = min_h + math.log(area / min_area + 1) * area_scale
        else:
            height = min_h + area * area_scale
        heights.append(max(min_h, min(max_h, height)))

    logger.debug(
        "Rod heights: %s mapping (area ratio %.3g)",
        "log" if use_log else "linear",
        max_area / min_area if min_area > 0 else float('inf'),
    )
    return heights, use_log


def compute_layout(rods: Sequence, config: LayoutConfig = DEFAULT_LAYOUT) -> LayoutGeometry:
    """
    Lay out a rod chain on the pixel canvas.

    Parameters:
    -----------
    rods : Sequence[RodSpec | RodResult]
        Anything with `length` and `area` attributes, in chain order
    config : LayoutConfig
        Pixel constants

    Returns:
    --------
    LayoutGeometry
        Per-rod rectangles, per-node x positions (len(rods) + 1 of them),
        the final length scale and the clamped canvas width.

    Zero rods are rejected by the caller; an empty geometry comes back here.
    """
    if not rods:
        return LayoutGeometry()

    lengths = [float(rod.length) for rod in rods]
    areas = [float(rod.area) for rod in rods]

    scale, required_width = compute_length_scale(lengths, config)
    heights, use_log = compute_rod_heights(areas, config)

    offset = config.node_offset_x
    geometries = []
    node_xs = [offset]
    current_x = offset
    for length, height in zip(lengths, heights):
        width = max(length * scale, config.min_rod_width)
        geometries.append(RodGeometry(
            x=current_x,
            width=width,
            height=height,
            y=config.axis_y - height / 2,
        ))
        current_x += width
        node_xs.append(current_x)

    canvas_width = max(config.min_total_width, min(config.max_total_width, required_width))

    return LayoutGeometry(
        rods=tuple(geometries),
        node_xs=tuple(node_xs),
        length_scale=scale,
        canvas_width=canvas_width,
        log_heights=use_log,
        short_rods_enlarged=min(lengths) * config.base_length_scale < config.min_rod_width,
    )
