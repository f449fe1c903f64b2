# rodcraft/model.py
"""
DATA MODEL
==========

Immutable snapshots of the structure being edited (NodeSpec, RodSpec,
StructureInput) and of the solver output for it (PolynomialField,
RodResult, FullResult).

JSON keys follow the solver's camelCase format; every type has
to_dict() and from_dict() for that format.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class NodeSpec:
    """
    Junction between two rods (or a chain end).

    external_force: > 0 tension, < 0 compression, 0 none.
    fixed is only meaningful on the first or last node of the chain.
    """
    id: int
    fixed: bool = False
    external_force: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'fixed': self.fixed,
            'externalForce': self.external_force,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeSpec":
        return cls(
            id=int(data['id']),
            fixed=bool(data.get('fixed', False)),
            external_force=float(data.get('externalForce', 0.0)),
        )


@dataclass(frozen=True)
class RodSpec:
    """Prismatic axial bar: length (m), area (m²), E (Pa), [σ] (Pa), q (N/m)."""
    id: int
    length: float
    area: float
    elastic_modulus: float
    allowable_stress: float
    distributed_load: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'length': self.length,
            'area': self.area,
            'elasticModulus': self.elastic_modulus,
            'allowableStress': self.allowable_stress,
            'distributedLoad': self.distributed_load,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RodSpec":
        return cls(
            id=int(data['id']),
            length=float(data['length']),
            area=float(data['area']),
            elastic_modulus=float(data['elasticModulus']),
            allowable_stress=float(data['allowableStress']),
            distributed_load=float(data.get('distributedLoad', 0.0)),
        )


@dataclass(frozen=True)
class StructureInput:
    """
    Ordered rod chain. Node i is the shared boundary of rod i-1 and rod i,
    so a well-formed structure has len(nodes) == len(rods) + 1.
    """
    rods: Tuple[RodSpec, ...] = ()
    nodes: Tuple[NodeSpec, ...] = ()

    def __post_init__(self):
        # Accept lists from callers but store tuples so snapshots stay immutable
        object.__setattr__(self, 'rods', tuple(self.rods))
        object.__setattr__(self, 'nodes', tuple(self.nodes))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rods': [rod.to_dict() for rod in self.rods],
            'nodes': [node.to_dict() for node in self.nodes],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StructureInput":
        return cls(
            rods=tuple(RodSpec.from_dict(r) for r in data['rods']),
            nodes=tuple(NodeSpec.from_dict(n) for n in data['nodes']),
        )


@dataclass(frozen=True)
class PolynomialField:
    """
    value(x) = a0 + a1*x (+ a2*x² for displacement) on the local coordinate
    x in [0, L]. a2 is None for the linear N(x) and σ(x) fields.
    """
    a0: float
    a1: float
    a2: Optional[float] = None

    @property
    def is_quadratic(self) -> bool:
        return self.a2 is not None

    def to_dict(self) -> Dict[str, Any]:
        return {'a0': self.a0, 'a1': self.a1, 'a2': self.a2}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], quadratic: bool = False) -> "PolynomialField":
        a2 = data.get('a2')
        if quadratic:
            a2 = float(a2) if a2 is not None else 0.0
        else:
            # The solver serialises the missing term of linear fields as null or 0
            a2 = None
        return cls(a0=float(data['a0']), a1=float(data['a1']), a2=a2)


@dataclass(frozen=True)
class RodResult:
    """Solver output for one rod: its spec, bounding nodes and field polynomials."""
    rod_id: int
    length: float
    area: float
    elastic_modulus: float
    allowable_stress: float
    distributed_load: float
    node_related_to: Tuple[NodeSpec, NodeSpec]
    axial_force: PolynomialField
    stress: PolynomialField
    displacement: PolynomialField
    max_stress: float

    @property
    def is_safe(self) -> bool:
        return abs(self.max_stress) <= self.allowable_stress

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rodId': self.rod_id,
            'length': self.length,
            'area': self.area,
            'elasticModulus': self.elastic_modulus,
            'allowableStress': self.allowable_stress,
            'distributedLoad': self.distributed_load,
            'nodeRelatedTo': [node.to_dict() for node in self.node_related_to],
            'axialForceCoeffs': self.axial_force.to_dict(),
            'stressCoeffs': self.stress.to_dict(),
            'displacementCoeffs': self.displacement.to_dict(),
            'maxStressOnTheRod': self.max_stress,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RodResult":
        start, end = data['nodeRelatedTo']
        return cls(
            rod_id=int(data['rodId']),
            length=float(data['length']),
            area=float(data['area']),
            elastic_modulus=float(data['elasticModulus']),
            allowable_stress=float(data['allowableStress']),
            distributed_load=float(data.get('distributedLoad', 0.0)),
            node_related_to=(NodeSpec.from_dict(start), NodeSpec.from_dict(end)),
            axial_force=PolynomialField.from_dict(data['axialForceCoeffs']),
            stress=PolynomialField.from_dict(data['stressCoeffs']),
            displacement=PolynomialField.from_dict(data['displacementCoeffs'], quadratic=True),
            max_stress=float(data['maxStressOnTheRod']),
        )


@dataclass(frozen=True)
class FullResult:
    """One calculation: nodal displacements (by node id) and per-rod results (by rod id)."""
    displacements: Tuple[float, ...] = ()
    rods: Tuple[RodResult, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'displacements', tuple(float(d) for d in self.displacements))
        object.__setattr__(self, 'rods', tuple(self.rods))

    @property
    def nodes(self) -> List[NodeSpec]:
        """Ordered chain nodes: start of rod 0, then the end node of every rod."""
        return nodes_from_results(self.rods)

    def rod(self, rod_id: int) -> RodResult:
        for rod in self.rods:
            if rod.rod_id == rod_id:
                return rod
        raise KeyError(f"No rod with id {rod_id} in result")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'displacements': list(self.displacements),
            'resultOutput': [rod.to_dict() for rod in self.rods],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FullResult":
        return cls(
            displacements=tuple(data.get('displacements', [])),
            rods=tuple(RodResult.from_dict(r) for r in data['resultOutput']),
        )


def nodes_from_results(rods) -> List[NodeSpec]:
    """Node i is the start node of rod 0 for i == 0, else the end node of rod i-1."""
    if not rods:
        return []
    nodes = [rods[0].node_related_to[0]]
    nodes.extend(rod.node_related_to[1] for rod in rods)
    return nodes


def structure_advisory(structure: StructureInput) -> Optional[str]:
    """
    Non-fatal advisory shown in place of the structure diagram.

    Returns None when the structure can be drawn.
    """
    n_rods = len(structure.rods)
    n_nodes = len(structure.nodes)
    if n_nodes != n_rods + 1:
        return (
            f"Mismatch: there must be one more node than rods. "
            f"Currently: {n_rods} rods, {n_nodes} nodes."
        )
    if n_rods == 0:
        return "Add rods and nodes to see the structure."
    return None


def result_matches_structure(structure: StructureInput, result: FullResult) -> bool:
    """
    True when `result` was computed for exactly this structure.

    Rods are compared by geometry, material and load, nodes by support and
    external force. Any edit to one of those makes the result stale.
    """
    if len(structure.rods) != len(result.rods):
        return False
    if len(structure.nodes) != len(result.nodes):
        return False

    for spec, rod in zip(structure.rods, result.rods):
        pairs = (
            (spec.length, rod.length),
            (spec.area, rod.area),
            (spec.elastic_modulus, rod.elastic_modulus),
            (spec.allowable_stress, rod.allowable_stress),
            (spec.distributed_load, rod.distributed_load),
        )
        if spec.id != rod.rod_id or not all(math.isclose(a, b) for a, b in pairs):
            return False

    for node, solved in zip(structure.nodes, result.nodes):
        if node.fixed != solved.fixed:
            return False
        if not math.isclose(node.external_force, solved.external_force):
            return False
    return True
