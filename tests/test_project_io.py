"""
TEST: Structure and Result Files
================================
"""

import json

import pytest

from rodcraft.model import FullResult, NodeSpec, RodSpec, StructureInput
from rodcraft.project_io import (
    StructureFileError,
    load_structure,
    result_from_json,
    save_structure,
    structure_from_json,
    structure_to_json,
)


def sample_structure():
    return StructureInput(
        rods=[
            RodSpec(id=0, length=2.0, area=0.01, elastic_modulus=2e11,
                    allowable_stress=1.6e8, distributed_load=0.0),
            RodSpec(id=1, length=0.75, area=3e-4, elastic_modulus=7e10,
                    allowable_stress=9e7, distributed_load=-1250.5),
        ],
        nodes=[
            NodeSpec(id=0, fixed=True),
            NodeSpec(id=1, external_force=-1100.0),
            NodeSpec(id=2, fixed=True, external_force=0.0),
        ],
    )


def test_structure_round_trip(tmp_path):
    """Saving and reloading reproduces the structure field-for-field."""
    structure = sample_structure()

    assert structure_from_json(structure_to_json(structure)) == structure

    path = save_structure(structure, tmp_path / "nested" / "bridge.json")
    assert path.exists()
    assert load_structure(path) == structure
    print("✓ Structure round trip is lossless")


def test_save_format_uses_camel_case_keys():
    data = json.loads(structure_to_json(sample_structure()))

    assert set(data) == {'rods', 'nodes'}
    assert set(data['rods'][0]) == {
        'id', 'length', 'area', 'elasticModulus', 'allowableStress', 'distributedLoad',
    }
    assert data['nodes'][1] == {'id': 1, 'fixed': False, 'externalForce': -1100.0}


@pytest.mark.parametrize("text", [
    "{not json",
    '{"rods": []}',
    '{"nodes": []}',
    '[1, 2, 3]',
    '{"rods": [{"id": 0}], "nodes": []}',
])
def test_malformed_structure_rejected(text):
    with pytest.raises(StructureFileError):
        structure_from_json(text)


def test_result_round_trip(two_rod_result):
    restored = FullResult.from_dict(two_rod_result.to_dict())

    assert restored == two_rod_result
    assert restored.rod(0).axial_force.a2 is None
    assert restored.rod(1).displacement.a2 == pytest.approx(-6.25e-6)


def test_result_nodes_from_rod_boundaries(two_rod_result):
    nodes = two_rod_result.nodes
    assert [n.id for n in nodes] == [0, 1, 2]
    assert nodes[0].fixed and nodes[2].fixed
    assert nodes[1].external_force == pytest.approx(-1100.0)


def test_result_without_output_rejected():
    with pytest.raises(StructureFileError):
        result_from_json('{"displacements": [0.0]}')


def test_demo_files_agree(two_rod_structure, two_rod_result):
    assert len(two_rod_structure.nodes) == len(two_rod_structure.rods) + 1
    for spec, result in zip(two_rod_structure.rods, two_rod_result.rods):
        assert spec.id == result.rod_id
        assert spec.length == result.length
        assert spec.area == result.area
