# rodcraft/post.py
"""
POSTPROCESSING TABLES
=====================

Uniform-step tables, the per-rod summary (N at both ends, strength check)
and nodal displacements, computed from a solved FullResult.

STEP TABLE:
-----------
Each rod is sampled at its own local x = 0, step, 2*step, ... plus x = L.
Coordinates restart at 0 on every rod, so the shared node between two rods
appears twice, once as the end row of the left rod and once as the start
row of the right one. Both are boundary rows.
"""

import math
from dataclasses import dataclass, asdict
from typing import List, Sequence, Tuple

import pandas as pd

from .fields import evaluate, evaluate_rod
from .model import FullResult, RodResult


@dataclass(frozen=True)
class StepRow:
    """One sample of the uniform-step table."""
    rod_id: int
    x: float            # local coordinate, restarts at 0 on every rod
    N: float
    sigma: float
    u: float
    is_boundary: bool


@dataclass(frozen=True)
class RodSummary:
    """Row of the per-rod summary table."""
    rod_id: int
    length: float
    area: float
    allowable_stress: float
    max_stress: float
    n_start: float      # N(0)
    n_end: float        # N(L)
    is_safe: bool       # |max σ| <= [σ]


def step_coordinates(length: float, step: float) -> List[float]:
    """
    Local sample coordinates of one rod: {0, L} plus every k*step < L.

    Set semantics: a multiple of step that coincides with 0 or L is not
    duplicated. A multiple that lands within rounding of L counts as L
    (3 * 0.7 is 2.0999999999999996, not 2.1). Non-positive step gives an
    empty list.
    """
    if step <= 0:
        return []
    points = {0.0, float(length)}
    k = 1
    x = step
    while x < length and not math.isclose(x, length, rel_tol=1e-9, abs_tol=1e-12):
        points.add(float(x))
        k += 1
        x = k * step
    return sorted(points)


def build_step_table(results: Sequence[RodResult], step: float) -> List[StepRow]:
    """
    Evaluate N, sigma and u at a fixed step along every rod.

    Parameters:
    -----------
    results : Sequence[RodResult]
        Solver output per rod, chain order
    step : float
        Sampling step in metres. step <= 0 yields an empty table.

    Returns:
    --------
    List[StepRow]
        Ordered by rod, then by increasing local x. Rows at x = 0 and x = L
        are flagged as boundary rows.
    """
    if step <= 0:
        return []

    rows = []
    for rod in results:
        L = rod.length
        for x in step_coordinates(L, step):
            N, sigma, u = evaluate_rod(rod, x)
            rows.append(StepRow(
                rod_id=rod.rod_id,
                x=x,
                N=N,
                sigma=sigma,
                u=u,
                is_boundary=(x == 0 or x == L),
            ))
    return rows


def step_table_frame(rows: Sequence[StepRow]) -> pd.DataFrame:
    """Step rows as a DataFrame (columns: rod_id, x, N, sigma, u, is_boundary)."""
    columns = ['rod_id', 'x', 'N', 'sigma', 'u', 'is_boundary']
    return pd.DataFrame([asdict(row) for row in rows], columns=columns)


def summarize_rods(results: Sequence[RodResult]) -> List[RodSummary]:
    """
    Per-rod summary: axial force at both ends and the strength check.

    The strength check compares the solver's max |σ| on the rod with the
    rod's allowable stress.
    """
    summary = []
    for rod in results:
        summary.append(RodSummary(
            rod_id=rod.rod_id,
            length=rod.length,
            area=rod.area,
            allowable_stress=rod.allowable_stress,
            max_stress=rod.max_stress,
            n_start=float(evaluate(rod.axial_force, 0.0)),
            n_end=float(evaluate(rod.axial_force, rod.length)),
            is_safe=rod.is_safe,
        ))
    return summary


def summary_frame(results: Sequence[RodResult]) -> pd.DataFrame:
    """Summary table as a DataFrame, one row per rod."""
    return pd.DataFrame([asdict(row) for row in summarize_rods(results)])


def nodal_displacements(result: FullResult) -> List[Tuple[int, float]]:
    """(node index, displacement) pairs in node order."""
    return [(i, float(d)) for i, d in enumerate(result.displacements)]


def get_result_summary(result: FullResult) -> dict:
    """
    Summary statistics for the whole chain.

    Returns:
    --------
    Dict with the largest |σ|, the rod where it occurs, the largest nodal
    |Δ| and whether every rod passes the strength check.
    """
    if not result.rods:
        return {
            'n_rods': 0,
            'n_nodes': 0,
            'max_stress': 0.0,
            'critical_rod': None,
            'max_displacement': 0.0,
            'all_safe': True,
        }

    critical = max(result.rods, key=lambda r: abs(r.max_stress))
    max_disp = max((abs(d) for d in result.displacements), default=0.0)

    return {
        'n_rods': len(result.rods),
        'n_nodes': len(result.rods) + 1,
        'max_stress': abs(critical.max_stress),
        'critical_rod': critical.rod_id,
        'max_displacement': max_disp,
        'all_safe': all(r.is_safe for r in result.rods),
    }
