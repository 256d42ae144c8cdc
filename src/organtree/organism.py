"""The organism: organ type registry, id allocation, simulation driver, and node/segment queries."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar, Union

import numpy as np

from .errors import ConfigurationError, IndexingFault
from .geometry import Vector3
from .growth import GrowthPolicy, default_growth_policies
from .kinds import KindFilter, OrganKind, as_organ_kind, matches_kind
from .organ import Organ, Segment
from .parameters import OrganTypeParameter

_LOGGER = logging.getLogger(__name__)

DEFAULT_SEED = 5489

T = TypeVar("T")


def _make_generator(seed: Optional[int]) -> np.random.Generator:
    return np.random.Generator(np.random.MT19937(seed))


@dataclass(frozen=True)
class OrganDelta:
    """What one organ did during the last step."""

    organ: Organ
    old_number_of_nodes: int
    moved: bool

    @property
    def new_node_indices(self) -> range:
        return range(self.old_number_of_nodes, self.organ.number_of_nodes)

    @property
    def new_segment_indices(self) -> range:
        return range(max(1, self.old_number_of_nodes) - 1, self.organ.number_of_nodes - 1)

    @property
    def moved_node_index(self) -> int:
        return self.old_number_of_nodes - 1


class Organism:
    """Owns the base organs and the organ type parameters, and drives the simulation.

    Subclasses override ``initialize`` to create the base organs. Call ``set_seed``
    before ``initialize`` to obtain reproducible organisms.
    """

    def __init__(self, seed: Optional[int] = DEFAULT_SEED):
        self.base_organs: list[Organ] = []
        self.organ_param: dict[OrganKind, dict[int, OrganTypeParameter]] = {kind: {} for kind in OrganKind}
        self.growth_policies: dict[OrganKind, GrowthPolicy] = default_growth_policies()
        self.sim_time = 0.0
        self.organ_id = 0
        self.node_id = 0
        self.old_number_of_nodes = 0
        self.old_number_of_organs = 0
        self.rng = _make_generator(seed)

    def set_seed(self, seed: int) -> None:
        self.rng = _make_generator(seed)

    def initialize(self) -> None:
        """Hook for subclasses: set up base organs before the first step."""

    def add_base_organ(self, organ: Organ) -> None:
        if organ.organism is not self or organ.parent is not None:
            raise ConfigurationError(f"organ {organ.id} is not a base organ of this organism")
        self.base_organs.append(organ)

    def create_base_organ(
        self,
        organ_kind: Union[OrganKind, int, str],
        subtype: int,
        position: Optional[Vector3] = None,
        heading: Optional[Vector3] = None,
        delay: Optional[float] = None,
    ) -> Organ:
        organ = Organ(self, None, as_organ_kind(organ_kind), subtype, delay, position=position, heading=heading)
        self.add_base_organ(organ)
        return organ

    # organ type parameters

    def set_organ_type_parameter(self, p: OrganTypeParameter) -> None:
        if p.organism is not self:
            raise ConfigurationError(f"organ type parameter {p.name!r} belongs to another organism")
        registry = self.organ_param[OrganKind(p.organ_kind)]
        previous = registry.get(p.subtype)
        if previous is not None and previous is not p:
            _LOGGER.debug("replacing organ type parameter %s", previous)
            previous.organism = None
        registry[p.subtype] = p

    def get_organ_type_parameter(self, organ_kind: Union[OrganKind, int, str], subtype: int) -> OrganTypeParameter:
        kind = as_organ_kind(organ_kind)
        try:
            return self.organ_param[kind][subtype]
        except KeyError:
            raise ConfigurationError(
                f"organ type parameter of {kind.name.lower()} subtype {subtype} was not set"
            ) from None

    def get_organ_type_parameters(self, organ_kind: KindFilter = None) -> list[OrganTypeParameter]:
        return [
            p
            for kind, registry in self.organ_param.items()
            if matches_kind(kind, organ_kind)
            for p in registry.values()
        ]

    def set_growth_policy(self, organ_kind: Union[OrganKind, int, str], policy: GrowthPolicy) -> None:
        self.growth_policies[as_organ_kind(organ_kind)] = policy

    def growth_policy(self, organ_kind: OrganKind) -> GrowthPolicy:
        try:
            return self.growth_policies[organ_kind]
        except KeyError:
            raise ConfigurationError(f"no growth policy for organ kind {organ_kind!r}") from None

    # ids

    def get_organ_index(self) -> int:
        index = self.organ_id
        self.organ_id += 1
        return index

    def get_node_index(self) -> int:
        index = self.node_id
        self.node_id += 1
        return index

    @property
    def number_of_nodes(self) -> int:
        return self.node_id

    @property
    def number_of_organs(self) -> int:
        return self.organ_id

    @property
    def number_of_new_nodes(self) -> int:
        return self.node_id - self.old_number_of_nodes

    @property
    def number_of_new_organs(self) -> int:
        return self.organ_id - self.old_number_of_organs

    # simulation

    def simulate(self, dt: float, verbose: bool = False) -> None:
        """Simulate ``dt`` days, base organs one after the other."""

        if verbose:
            _LOGGER.info("Organism.simulate: from %g to %g days", self.sim_time, self.sim_time + dt)
        self.old_number_of_nodes = self.number_of_nodes
        self.old_number_of_organs = self.number_of_organs
        for organ in self.base_organs:
            organ.simulate(dt, verbose)
        self.sim_time += dt
        if verbose:
            _LOGGER.info("%s; %d new nodes, %d new organs", self, self.number_of_new_nodes, self.number_of_new_organs)

    # whole tree

    def get_organs(self, organ_kind: KindFilter = None) -> list[Organ]:
        organs: list[Organ] = []
        for organ in self.base_organs:
            organ.get_organs(organ_kind, organs)
        return organs

    def get_parameter(self, name: str, organ_kind: KindFilter = None, organs: Optional[list[Organ]] = None) -> list[float]:
        """One scalar per organ, in ``get_organs`` order; NaN where the name is unknown."""

        if not organs:
            organs = self.get_organs(organ_kind)
        return [organ.get_parameter(name) for organ in organs]

    def get_summed(self, name: str, organ_kind: KindFilter = None) -> float:
        return sum(self.get_parameter(name, organ_kind), 0.0)

    def get_number_of_segments(self, organ_kind: KindFilter = None) -> int:
        return sum(organ.number_of_segments for organ in self.get_organs(organ_kind))

    def get_polylines(self, organ_kind: KindFilter = None) -> list[list[Vector3]]:
        return [list(organ.nodes) for organ in self.get_organs(organ_kind)]

    def get_polyline_cts(self, organ_kind: KindFilter = None) -> list[list[float]]:
        return [list(organ.node_cts) for organ in self.get_organs(organ_kind)]

    def get_nodes(self) -> list[Vector3]:
        """All nodes indexed by global node id, unemerged base organs included."""

        return self._dense(lambda organ, i: organ.nodes[i])

    def get_node_cts(self) -> list[float]:
        return self._dense(lambda organ, i: organ.node_cts[i])

    def _dense(self, value: Callable[[Organ, int], T]) -> list[T]:
        slots: list[Optional[T]] = [None] * self.number_of_nodes
        for organ in self.base_organs:
            self._put(slots, organ.node_ids[0], value(organ, 0), 0, overwrite=True)
        for organ in self.get_organs():
            for i in range(organ.number_of_nodes):
                self._put(slots, organ.node_ids[i], value(organ, i), 0, overwrite=True)
        return self._complete(slots)

    def get_segments(self, organ_kind: KindFilter = None) -> list[Segment]:
        segments: list[Segment] = []
        for organ in self.get_organs(organ_kind):
            segments.extend(organ.get_segments())
        return segments

    def get_segment_cts(self, organ_kind: KindFilter = None) -> list[float]:
        """Creation time of each segment, which is the creation time of its second node."""

        node_cts = self.get_node_cts()
        return [node_cts[second] for _, second in self.get_segments(organ_kind)]

    def get_segment_origins(self, organ_kind: KindFilter = None) -> list[Organ]:
        return [organ for organ in self.get_organs(organ_kind) for _ in range(organ.number_of_segments)]

    # last step

    def get_organ_deltas(self, organ_kind: KindFilter = None) -> list[OrganDelta]:
        """Per organ change records of the last step, in traversal order.

        Base organs that are still a single node take part, since that node is their tip.
        """

        organs: list[Organ] = []
        for organ in self.base_organs:
            if organ.number_of_nodes == 1 and matches_kind(organ.organ_kind, organ_kind):
                organs.append(organ)
            organ.get_organs(organ_kind, organs)
        return [
            OrganDelta(organ, organ.old_number_of_nodes, organ.moved)
            for organ in organs
            if organ.moved or organ.number_of_nodes > organ.old_number_of_nodes
        ]

    def get_updated_node_indices(self) -> list[int]:
        return [d.organ.node_ids[d.moved_node_index] for d in self.get_organ_deltas() if d.moved]

    def get_updated_nodes(self) -> list[Vector3]:
        return [d.organ.nodes[d.moved_node_index] for d in self.get_organ_deltas() if d.moved]

    def get_new_nodes(self) -> list[Vector3]:
        """Nodes created during the last step, at index ``node id - old number of nodes``."""

        return self._new(lambda organ, i: organ.nodes[i])

    def get_new_node_cts(self) -> list[float]:
        return self._new(lambda organ, i: organ.node_cts[i])

    def _new(self, value: Callable[[Organ, int], T]) -> list[T]:
        offset = self.old_number_of_nodes
        slots: list[Optional[T]] = [None] * self.number_of_new_nodes
        for delta in self.get_organ_deltas():
            for i in delta.new_node_indices:
                self._put(slots, delta.organ.node_ids[i], value(delta.organ, i), offset)
        return self._complete(slots)

    def get_new_segments(self, organ_kind: KindFilter = None) -> list[Segment]:
        deltas = self.get_organ_deltas(organ_kind)
        segments = [
            (d.organ.node_ids[i], d.organ.node_ids[i + 1])
            for d in deltas
            for i in d.new_segment_indices
        ]
        # attachment nodes of new base organs end no segment
        expected = self.number_of_new_nodes - sum(1 for d in deltas if d.old_number_of_nodes == 0)
        if organ_kind is None and len(segments) != expected:
            raise IndexingFault(f"{len(segments)} new segments for {expected} new nodes behind a segment")
        return segments

    def get_new_segment_origins(self, organ_kind: KindFilter = None) -> list[Organ]:
        return [d.organ for d in self.get_organ_deltas(organ_kind) for _ in d.new_segment_indices]

    def get_new_segment_cts(self, organ_kind: KindFilter = None) -> list[float]:
        return [d.organ.node_cts[i + 1] for d in self.get_organ_deltas(organ_kind) for i in d.new_segment_indices]

    @staticmethod
    def _put(slots: list, node_id: int, value: object, offset: int, overwrite: bool = False) -> None:
        index = node_id - offset
        if not 0 <= index < len(slots):
            raise IndexingFault(f"node id {node_id} outside of [{offset}, {offset + len(slots)})")
        if slots[index] is not None and not overwrite:
            raise IndexingFault(f"node id {node_id} written twice")
        slots[index] = value

    @staticmethod
    def _complete(slots: list[Optional[T]]) -> list[T]:
        missing = [i for i, value in enumerate(slots) if value is None]
        if missing:
            raise IndexingFault(f"no node for slot(s) {missing[:10]}")
        return slots  # type: ignore[return-value]

    # copies and info

    def copy(self) -> "Organism":
        """Deep copy; the copy continues with the same random state."""

        duplicate = copy.copy(self)
        duplicate.rng = copy.deepcopy(self.rng)
        duplicate.growth_policies = dict(self.growth_policies)
        duplicate.organ_param = {
            kind: {subtype: p.copy(duplicate) for subtype, p in registry.items()}
            for kind, registry in self.organ_param.items()
        }
        duplicate.base_organs = [organ.copy(duplicate) for organ in self.base_organs]
        return duplicate

    def __str__(self) -> str:
        return (
            f"Organism with {len(self.base_organs)} base organs, {self.number_of_nodes} nodes, "
            f"and a total of {self.number_of_organs} organs, after {self.sim_time:g} days"
        )
