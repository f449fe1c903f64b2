"""
TEST: Structure Editing
=======================

Every edit returns a new snapshot; the input structure is never mutated.
"""

import pytest

from rodcraft.editing import (
    append_rod,
    can_fix_node,
    remove_rod,
    set_node_fixed,
    set_node_force,
    update_rod,
)
from rodcraft.model import StructureInput, result_matches_structure, structure_advisory


def three_rods():
    s = StructureInput()
    for _ in range(3):
        s = append_rod(s)
    return s


def test_append_keeps_node_count_invariant():
    empty = StructureInput()
    one = append_rod(empty)
    two = append_rod(one)

    assert empty == StructureInput()
    assert (len(one.rods), len(one.nodes)) == (1, 2)
    assert (len(two.rods), len(two.nodes)) == (2, 3)
    assert [r.id for r in two.rods] == [0, 1]
    assert [n.id for n in two.nodes] == [0, 1, 2]
    assert structure_advisory(two) is None


def test_remove_renumbers_from_zero():
    s = set_node_force(three_rods(), 3, 500.0)
    s = update_rod(s, 2, length=4.0)

    trimmed = remove_rod(s, 1)

    assert [r.id for r in trimmed.rods] == [0, 1]
    assert [n.id for n in trimmed.nodes] == [0, 1, 2]
    assert trimmed.rods[1].length == 4.0
    assert trimmed.nodes[2].external_force == 500.0
    assert len(s.rods) == 3
    print("✓ Removal re-indexes rods and nodes")


def test_remove_last_rod_empties_structure():
    s = append_rod(StructureInput())
    assert remove_rod(s, 0) == StructureInput()


def test_remove_out_of_range():
    with pytest.raises(IndexError):
        remove_rod(three_rods(), 3)


def test_remove_drops_support_left_inside():
    s = set_node_fixed(three_rods(), 3, True)
    s = set_node_fixed(s, 0, True)
    trimmed = remove_rod(s, 2)

    # old node 3 is gone; the new last node had no support
    assert [n.fixed for n in trimmed.nodes] == [True, False, False]


def test_supports_only_on_end_nodes():
    s = three_rods()

    assert can_fix_node(s, 0) and can_fix_node(s, 3)
    assert not can_fix_node(s, 1)
    with pytest.raises(ValueError):
        set_node_fixed(s, 1, True)
    # clearing is always allowed
    assert set_node_fixed(s, 1, False).nodes[1].fixed is False


def test_rod_ids_not_editable():
    with pytest.raises(ValueError):
        update_rod(three_rods(), 0, id=9)


def test_advisory_messages():
    assert "Add rods" in structure_advisory(StructureInput())
    broken = StructureInput(rods=three_rods().rods, nodes=three_rods().nodes[:2])
    assert structure_advisory(broken) == (
        "Mismatch: there must be one more node than rods. Currently: 3 rods, 2 nodes."
    )


def test_result_belongs_to_its_own_structure(two_rod_structure, two_rod_result):
    # Reloading the structure a result was solved for keeps the result valid
    assert result_matches_structure(two_rod_structure, two_rod_result)


@pytest.mark.parametrize("edit", [
    lambda s: set_node_force(s, 1, -500.0),
    lambda s: set_node_fixed(s, 2, False),
    lambda s: update_rod(s, 1, distributed_load=0.0),
    lambda s: update_rod(s, 0, area=0.02),
    lambda s: append_rod(s),
    lambda s: remove_rod(s, 1),
])
def test_any_edit_makes_result_stale(two_rod_structure, two_rod_result, edit):
    assert not result_matches_structure(edit(two_rod_structure), two_rod_result)


def test_empty_structure_does_not_match_result(two_rod_result):
    assert not result_matches_structure(StructureInput(), two_rod_result)
