from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

from rodcraft.model import NodeSpec, PolynomialField, RodResult
from rodcraft.project_io import load_result, load_structure

DATA_DIR = Path(__file__).parent.parent / "demos" / "data"


@pytest.fixture
def two_rod_result():
    """
    Two-rod chain fixed at both ends, solved by hand:

    rod 0: L=2, A=0.01,  q=0     N = 1000,          u = 5e-7·x
    rod 1: L=1, A=0.002, q=5000  N = 2100 - 5000·x, u = 1e-6 + 5.25e-6·x - 6.25e-6·x²
    """
    return load_result(DATA_DIR / "two_rod_result.json")


@pytest.fixture
def two_rod_structure():
    return load_structure(DATA_DIR / "two_rod_structure.json")


@pytest.fixture
def make_rod():
    """Factory for single RodResult objects with sensible defaults."""
    def _make(
        rod_id=0,
        length=1.0,
        area=0.01,
        n=(0.0, 0.0),
        sigma=None,
        u=(0.0, 0.0, 0.0),
        allowable_stress=1.6e8,
        max_stress=None,
        distributed_load=0.0,
    ):
        if sigma is None:
            sigma = (n[0] / area, n[1] / area)
        if max_stress is None:
            max_stress = max(abs(sigma[0]), abs(sigma[0] + sigma[1] * length))
        return RodResult(
            rod_id=rod_id,
            length=length,
            area=area,
            elastic_modulus=2.0e11,
            allowable_stress=allowable_stress,
            distributed_load=distributed_load,
            node_related_to=(NodeSpec(id=rod_id), NodeSpec(id=rod_id + 1)),
            axial_force=PolynomialField(*n),
            stress=PolynomialField(*sigma),
            displacement=PolynomialField(*u),
            max_stress=max_stress,
        )
    return _make
