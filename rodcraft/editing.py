# rodcraft/editing.py
"""
Structure editing: pure edits of a StructureInput snapshot.

Every function returns a new structure and leaves its input untouched, so
the editor can keep the previous snapshot around.
"""

from dataclasses import replace
from typing import Optional

from .model import NodeSpec, RodSpec, StructureInput


def can_fix_node(structure: StructureInput, index: int) -> bool:
    """Supports are only allowed on the first and last node of the chain."""
    return index == 0 or index == len(structure.nodes) - 1


def append_rod(structure: StructureInput, rod: Optional[RodSpec] = None) -> StructureInput:
    """
    Add a rod at the end of the chain together with its end node.

    An empty structure gets its start node too, so len(nodes) == len(rods) + 1
    holds afterwards. The new rod's id is its chain index.
    """
    index = len(structure.rods)
    if rod is None:
        rod = RodSpec(id=index, length=1.0, area=1.0, elastic_modulus=1.0, allowable_stress=1.0)
    else:
        rod = replace(rod, id=index)

    nodes = list(structure.nodes)
    if not nodes:
        nodes.append(NodeSpec(id=0))
    nodes.append(NodeSpec(id=len(nodes)))
    return StructureInput(rods=structure.rods + (rod,), nodes=tuple(nodes))


def remove_rod(structure: StructureInput, index: int) -> StructureInput:
    """
    Remove rod `index` and the node at its end, then re-number rods and nodes
    sequentially from 0.

    Removing the last remaining rod leaves an empty structure. A support left
    on an interior node by the removal is dropped.
    """
    if not 0 <= index < len(structure.rods):
        raise IndexError(f"Rod index {index} out of range [0, {len(structure.rods)})")

    rods = [r for i, r in enumerate(structure.rods) if i != index]
    nodes = [n for i, n in enumerate(structure.nodes) if i != index + 1]
    if not rods:
        return StructureInput()

    last = len(nodes) - 1
    nodes = [
        replace(n, id=i, fixed=n.fixed and (i == 0 or i == last))
        for i, n in enumerate(nodes)
    ]
    rods = [replace(r, id=i) for i, r in enumerate(rods)]
    return StructureInput(rods=tuple(rods), nodes=tuple(nodes))


def update_rod(structure: StructureInput, index: int, **changes) -> StructureInput:
    """Replace fields of one rod (length, area, elastic_modulus, ...)."""
    if 'id' in changes:
        raise ValueError("Rod ids follow the chain order and cannot be edited")
    rods = list(structure.rods)
    rods[index] = replace(rods[index], **changes)
    return StructureInput(rods=tuple(rods), nodes=structure.nodes)


def set_node_force(structure: StructureInput, index: int, force: float) -> StructureInput:
    nodes = list(structure.nodes)
    nodes[index] = replace(nodes[index], external_force=float(force))
    return StructureInput(rods=structure.rods, nodes=tuple(nodes))


def set_node_fixed(structure: StructureInput, index: int, fixed: bool) -> StructureInput:
    """
    Set or clear the support on a node.

    Raises ValueError when a support is requested on an interior node.
    """
    if fixed and not can_fix_node(structure, index):
        raise ValueError("Supports can only be placed on the end nodes of the structure")
    nodes = list(structure.nodes)
    nodes[index] = replace(nodes[index], fixed=bool(fixed))
    return StructureInput(rods=structure.rods, nodes=tuple(nodes))
