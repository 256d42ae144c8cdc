"""A single organ of the organ tree: geometry history, age, state, and children."""

from __future__ import annotations

import copy
import logging
from dataclasses import fields
from math import nan
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from .errors import GrowthContractError, IndexingFault
from .geometry import DOWN, ORIGIN, Vector3, normalize
from .growth import BranchEvent, GeometryDelta
from .kinds import KindFilter, OrganKind, matches_kind, organ_kind_name
from .parameters import OrganParameters, OrganTypeParameter

if TYPE_CHECKING:
    from .organism import Organism

_LOGGER = logging.getLogger(__name__)

Segment = tuple[int, int]


class Organ:
    """Plant organ (seed, root, stem, leaf) growing as a polyline of nodes.

    Node 0 is the attachment point. For a base organ it is placed at ``position``
    and gets a new global node id; a child organ shares position, id, and
    creation time with the parent node it is attached to.
    """

    def __init__(
        self,
        organism: "Organism",
        parent: Optional["Organ"],
        organ_kind: OrganKind,
        subtype: int,
        delay: Optional[float] = None,
        *,
        position: Optional[Vector3] = None,
        parent_node_index: Optional[int] = None,
        heading: Optional[Vector3] = None,
    ):
        self.organism = organism
        self.parent = parent
        self.organ_kind = OrganKind(organ_kind)
        self.param: OrganParameters = organism.get_organ_type_parameter(self.organ_kind, subtype).realize()
        self.id = organism.get_organ_index()
        self.children: list[Organ] = []

        self.alive = True
        self.active = True
        if delay is None:
            delay = getattr(self.param, "delay", 0.0)
        self.age = -delay
        self.length = 0.0
        self.heading = normalize(heading) if heading is not None else DOWN

        self.nodes: list[Vector3] = []
        self.node_ids: list[int] = []
        self.node_cts: list[float] = []
        if parent is None:
            self.nodes.append(position if position is not None else ORIGIN)
            self.node_ids.append(organism.get_node_index())
            self.node_cts.append(organism.sim_time)
        else:
            index = parent.number_of_nodes - 1 if parent_node_index is None else parent_node_index
            self.nodes.append(parent.get_node(index))
            self.node_ids.append(parent.get_node_id(index))
            self.node_cts.append(parent.get_node_ct(index))

        # a new base organ reports its attachment node as new until its first step
        self.old_number_of_nodes = 0 if parent is None else 1
        self.moved = False
        _LOGGER.debug("created %s organ %d (subtype %d)", organ_kind_name(self.organ_kind), self.id, subtype)

    @property
    def subtype(self) -> int:
        return self.param.subtype

    @property
    def organ_type_parameter(self) -> OrganTypeParameter:
        return self.organism.get_organ_type_parameter(self.organ_kind, self.subtype)

    @property
    def number_of_nodes(self) -> int:
        return len(self.nodes)

    @property
    def number_of_segments(self) -> int:
        return max(len(self.nodes) - 1, 0)

    @property
    def order(self) -> int:
        return 0 if self.parent is None else self.parent.order + 1

    def get_node(self, i: int) -> Vector3:
        return self._at(self.nodes, i, "node")

    def get_node_id(self, i: int) -> int:
        return self._at(self.node_ids, i, "node")

    def get_node_ct(self, i: int) -> float:
        return self._at(self.node_cts, i, "node")

    def get_child(self, i: int) -> "Organ":
        return self._at(self.children, i, "child")

    def _at(self, values: list, i: int, what: str):
        if not 0 <= i < len(values):
            raise IndexingFault(f"organ {self.id}: {what} index {i} out of range (size {len(values)})")
        return values[i]

    def simulate(self, dt: float, verbose: bool = False) -> None:
        """Grow for ``dt`` days, then let every child do the same."""

        self.old_number_of_nodes = len(self.nodes)
        self.moved = False
        if not self.alive:
            for organ in self.iter_organs():
                organ.old_number_of_nodes = len(organ.nodes)
                organ.moved = False
            return

        if self.age + dt <= 0:
            self.age += dt
            return

        active_dt = min(dt, self.age + dt)
        if self.active:
            policy = self.organism.growth_policy(self.organ_kind)
            delta = policy.advance(self, active_dt, self.organism.rng)
            self._apply(delta, self.organism.sim_time + dt, verbose)
        self.age += dt

        for child in self.children:
            child.simulate(dt, verbose)

    def _apply(self, delta: GeometryDelta, ct: float, verbose: bool) -> None:
        if delta.tip is not None:
            if len(self.nodes) == 1 and self.parent is not None:
                raise GrowthContractError(f"organ {self.id} cannot move the node it shares with its parent")
            attached = [child.id for child in self.children if child.node_ids[0] == self.node_ids[-1]]
            if attached:
                raise GrowthContractError(f"organ {self.id} cannot move its tip, organ(s) {attached} attach there")
            self.nodes[-1] = delta.tip
            self.node_cts[-1] = ct
            self.moved = True
        for position in delta.new_nodes:
            self.add_node(position, ct)
        self.length += delta.length_increment

        for event in delta.branches:
            child = self.create_child(event)
            if verbose:
                _LOGGER.info("organ %d emitted %s organ %d at node %d", self.id,
                             organ_kind_name(child.organ_kind), child.id, event.node_index)

        if delta.die:
            self.alive = False
            self.active = False
        elif delta.deactivate:
            self.active = False

    def add_node(self, position: Vector3, ct: float) -> int:
        node_id = self.organism.get_node_index()
        self.nodes.append(position)
        self.node_ids.append(node_id)
        self.node_cts.append(ct)
        return node_id

    def create_child(self, event: BranchEvent) -> "Organ":
        self.get_node(event.node_index)
        child = Organ(
            self.organism,
            self,
            event.organ_kind,
            event.subtype,
            event.delay,
            parent_node_index=event.node_index,
            heading=event.heading if event.heading is not None else self.heading,
        )
        self.children.append(child)
        return child

    def iter_organs(self) -> Iterable["Organ"]:
        yield self
        for child in self.children:
            yield from child.iter_organs()

    def get_organs(self, kind: KindFilter = None, accumulator: Optional[list["Organ"]] = None) -> list["Organ"]:
        """Depth first list of this organ and its descendants that have emerged (more than one node)."""

        organs = [] if accumulator is None else accumulator
        if len(self.nodes) > 1 and matches_kind(self.organ_kind, kind):
            organs.append(self)
        for child in self.children:
            child.get_organs(kind, organs)
        return organs

    def get_segments(self) -> list[Segment]:
        return [(self.node_ids[i], self.node_ids[i + 1]) for i in range(len(self.nodes) - 1)]

    def get_parameter(self, name: str) -> float:
        getter = _SCALARS.get(name)
        if getter is not None:
            return float(getter(self))
        if name in {item.name for item in fields(self.param)}:
            value = getattr(self.param, name)
            if isinstance(value, (int, float)):
                return float(value)
        return nan

    def copy(self, organism: "Organism", parent: Optional["Organ"] = None) -> "Organ":
        duplicate = copy.copy(self)
        duplicate.organism = organism
        duplicate.parent = parent
        duplicate.nodes = list(self.nodes)
        duplicate.node_ids = list(self.node_ids)
        duplicate.node_cts = list(self.node_cts)
        duplicate.children = [child.copy(organism, duplicate) for child in self.children]
        return duplicate

    def __str__(self) -> str:
        return (
            f"{organ_kind_name(self.organ_kind)} #{self.id}: subtype {self.subtype}, "
            f"length {self.length:.4g} cm, age {self.age:.4g} days, alive {self.alive}, "
            f"active {self.active}, {len(self.nodes)} nodes, {len(self.children)} children"
        )


_SCALARS: dict[str, Callable[[Organ], float]] = {
    "id": lambda organ: organ.id,
    "organ_kind": lambda organ: organ.organ_kind,
    "subtype": lambda organ: organ.subtype,
    "age": lambda organ: organ.age,
    "length": lambda organ: organ.length,
    "alive": lambda organ: organ.alive,
    "active": lambda organ: organ.active,
    "order": lambda organ: organ.order,
    "number_of_nodes": lambda organ: organ.number_of_nodes,
    "number_of_segments": lambda organ: organ.number_of_segments,
    "number_of_children": lambda organ: len(organ.children),
}
