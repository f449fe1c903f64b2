"""
TEST: Polynomial Field Evaluation
=================================

N(x) and σ(x) are straight lines along a rod, u(x) is a parabola. We check:

1. Linear and quadratic evaluation, scalars and numpy arrays
2. The interior extremum of u(x) (only strictly inside the rod)
3. Field selection by name
"""

import numpy as np
import pytest

from rodcraft.fields import evaluate, evaluate_rod, find_interior_extremum, rod_field
from rodcraft.model import PolynomialField


def test_linear_field_evaluation():
    """N(x) = a0 + a1*x, no quadratic term."""
    field = PolynomialField(a0=100.0, a1=-20.0)

    assert field.is_quadratic is False
    assert evaluate(field, 0.0) == pytest.approx(100.0)
    assert evaluate(field, 2.5) == pytest.approx(50.0)
    # No range check: extrapolates past the rod end
    assert evaluate(field, 10.0) == pytest.approx(-100.0)
    print("✓ Linear field evaluates a0 + a1*x (and extrapolates)")


def test_quadratic_field_evaluation_on_arrays():
    field = PolynomialField(a0=1e-6, a1=5.25e-6, a2=-6.25e-6)
    xs = np.array([0.0, 0.42, 1.0])

    values = evaluate(field, xs)

    expected = 1e-6 + 5.25e-6 * xs - 6.25e-6 * xs ** 2
    np.testing.assert_allclose(values, expected, rtol=1e-12)
    assert values[-1] == pytest.approx(0.0, abs=1e-18)
    print("✓ Quadratic field evaluates element-wise on arrays")


def test_extremum_none_for_zero_quadratic_term():
    """A displacement field with a2 = 0 is a straight line: no interior extremum."""
    assert find_interior_extremum(PolynomialField(0.0, 0.002, 0.0), 2.0) is None
    assert find_interior_extremum(PolynomialField(0.0, 0.002), 2.0) is None
    print("✓ No extremum for a2 = 0 or linear fields")


@pytest.mark.parametrize("a1, a2, length", [
    (5.25e-6, -6.25e-6, 1.0),   # maximum at x = 0.42
    (-3.0, 1.0, 4.0),           # minimum at x = 1.5
    (1.0, -0.1, 3.0),           # vertex at x = 5, outside the rod
    (2.0, 1.0, 5.0),            # vertex at x = -1, outside the rod
])
def test_extremum_is_strictly_interior_and_a_local_extremum(a1, a2, length):
    """
    If an extremum is reported it must lie in (0, L) and be a true local
    min/max: the field changes derivative sign across it.
    """
    field = PolynomialField(0.0, a1, a2)
    x_ext = find_interior_extremum(field, length)

    vertex = -a1 / (2 * a2)
    if not 0 < vertex < length:
        assert x_ext is None
        return

    assert 0 < x_ext < length
    eps = 1e-6 * length
    left = evaluate(field, x_ext - eps)
    centre = evaluate(field, x_ext)
    right = evaluate(field, x_ext + eps)
    if a2 < 0:
        assert centre >= left and centre >= right
    else:
        assert centre <= left and centre <= right
    print(f"✓ Extremum at x = {x_ext:.4f} inside (0, {length})")


def test_extremum_on_boundary_is_not_reported():
    """Vertex exactly at x = L is a boundary value, already sampled as such."""
    field = PolynomialField(0.0, 2.0, -1.0)  # vertex at x = 1
    assert find_interior_extremum(field, 1.0) is None
    assert find_interior_extremum(field, 1.5) == pytest.approx(1.0)


def test_rod_field_selection(two_rod_result):
    rod = two_rod_result.rod(1)

    assert rod_field(rod, 'N') is rod.axial_force
    assert rod_field(rod, 'sigma') is rod.stress
    assert rod_field(rod, 'u') is rod.displacement
    with pytest.raises(ValueError):
        rod_field(rod, 'M')


def test_evaluate_rod_triple(two_rod_result):
    N, sigma, u = evaluate_rod(two_rod_result.rod(1), 0.42)

    assert N == pytest.approx(0.0, abs=1e-9)
    assert sigma == pytest.approx(0.0, abs=1e-6)
    assert u == pytest.approx(2.1025e-6, rel=1e-9)
    print("✓ (N, σ, u) at the zero-force section of rod 1")
