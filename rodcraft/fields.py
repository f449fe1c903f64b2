# rodcraft/fields.py
"""
POLYNOMIAL FIELD EVALUATION
===========================

The solver describes every rod by three closed-form fields along the local
coordinate x (0 at the rod's start node, L at its end node):

- N(x) = a0 + a1*x            axial force (N), tension positive
- σ(x) = a0 + a1*x            normal stress (Pa) = N(x) / A
- u(x) = a0 + a1*x + a2*x²    axial displacement (m)

N and σ are linear because the distributed load q is constant along a rod;
u picks up the quadratic term from integrating N/EA.

EXTREMUM OF u(x):
-----------------
du/dx = a1 + 2*a2*x = 0  ->  x* = -a1 / (2*a2)

Only a strictly interior x* is reported; the values at x = 0 and x = L are
always sampled separately as boundary points.
"""

from typing import Optional, Tuple, Union

import numpy as np

from .model import PolynomialField, RodResult

FIELD_NAMES = ('N', 'sigma', 'u')

FIELD_LABELS = {
    'N': 'N(x), N',
    'sigma': 'σ(x), Pa',
    'u': 'u(x), m',
}

Number = Union[float, np.ndarray]


def evaluate(field: PolynomialField, x: Number) -> Number:
    """
    Evaluate a polynomial field at local coordinate(s) x.

    No range check: x outside [0, L] extrapolates the polynomial.
    Works on scalars and numpy arrays alike.
    """
    value = field.a0 + field.a1 * x
    if field.a2 is not None:
        value = value + field.a2 * x * x
    return value


def find_interior_extremum(field: PolynomialField, length: float) -> Optional[float]:
    """
    Location of the parabola's vertex if it lies strictly inside (0, length).

    Returns None for linear fields, for a2 == 0 and for vertices on or
    outside the rod boundaries.
    """
    if not field.a2:
        return None
    x_ext = -field.a1 / (2.0 * field.a2)
    if 0.0 < x_ext < length:
        return float(x_ext)
    return None


def rod_field(rod: RodResult, name: str) -> PolynomialField:
    """Select one of the rod's fields by name ('N', 'sigma' or 'u')."""
    if name == 'N':
        return rod.axial_force
    if name == 'sigma':
        return rod.stress
    if name == 'u':
        return rod.displacement
    raise ValueError(f"Unknown field '{name}'. Expected one of {FIELD_NAMES}")


def evaluate_rod(rod: RodResult, x: float) -> Tuple[float, float, float]:
    """(N, sigma, u) of a rod at local coordinate x."""
    return (
        float(evaluate(rod.axial_force, x)),
        float(evaluate(rod.stress, x)),
        float(evaluate(rod.displacement, x)),
    )
