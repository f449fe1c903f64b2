"""
TEST: Rendering Handles
=======================

Smoke tests: every handle renders inline SVG markup on demand.
"""

import matplotlib.pyplot as plt
import pytest

from rodcraft.model import StructureInput
from rodcraft.viz import ConstructionDiagram, EpureDiagram, StructureDiagram, figure_to_svg


def test_structure_diagram_svg(two_rod_structure):
    diagram = StructureDiagram(two_rod_structure)

    assert diagram.advisory is None
    svg = diagram.to_svg()
    assert svg.startswith("<svg")
    assert svg.rstrip().endswith("</svg>")


def test_structure_diagram_shows_advisory_for_mismatch(two_rod_structure):
    broken = StructureInput(rods=two_rod_structure.rods, nodes=two_rod_structure.nodes[:2])
    diagram = StructureDiagram(broken)

    assert diagram.advisory.startswith("Mismatch")
    assert diagram.to_svg().startswith("<svg")


def test_empty_structure_renders_advisory():
    assert StructureDiagram(StructureInput()).to_svg().startswith("<svg")


def test_construction_diagram_svg(two_rod_result):
    svg = ConstructionDiagram(two_rod_result, samples_per_rod=10).to_svg()
    assert svg.startswith("<svg")
    print(f"✓ Construction drawing: {len(svg)} bytes of SVG")


@pytest.mark.parametrize("field_name", ["N", "sigma", "u"])
def test_epure_diagram_svg(two_rod_result, field_name):
    diagram = EpureDiagram(two_rod_result, field_name, samples_per_rod=10)
    assert diagram.name == f"epure_{field_name}"
    assert diagram.to_svg().startswith("<svg")


def test_epure_diagram_rejects_unknown_field(two_rod_result):
    with pytest.raises(ValueError):
        EpureDiagram(two_rod_result, "M")


def test_figure_to_svg_strips_prolog(two_rod_result):
    svg = figure_to_svg(EpureDiagram(two_rod_result, "N").figure())
    assert not svg.startswith("<?xml")
    assert "<!DOCTYPE" not in svg


def test_svg_rendering_closes_its_figures(two_rod_result, two_rod_structure):
    plt.close('all')

    StructureDiagram(two_rod_structure).to_svg()
    ConstructionDiagram(two_rod_result, samples_per_rod=10).to_svg()
    EpureDiagram(two_rod_result, "u", samples_per_rod=10).to_svg()

    assert plt.get_fignums() == []
