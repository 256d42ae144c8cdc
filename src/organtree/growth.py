"""Growth policies: the kind-specific part of organ development.

A policy looks at an organ (age, length, nodes, realized parameters) and returns a
``GeometryDelta`` describing what the organ should do over the active part of a
time step. The organ applies the delta; policies never mutate organs themselves.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from math import exp, pi
from typing import TYPE_CHECKING, Optional, Protocol

from .errors import ConfigurationError
from .geometry import (
    DOWN,
    UP,
    GrowthDirectionWeights,
    TropismInputs,
    Vector3,
    advance_point,
    compute_growth_direction,
    distance,
    insertion_heading,
)
from .kinds import OrganKind
from .parameters import GrowthParameters, SeedParameters

if TYPE_CHECKING:
    from numpy.random import Generator

    from .organ import Organ

_EPS = 1e-9


@dataclass(frozen=True)
class BranchEvent:
    organ_kind: OrganKind
    subtype: int
    node_index: int
    delay: Optional[float] = None
    heading: Optional[Vector3] = None


@dataclass(frozen=True)
class GeometryDelta:
    length_increment: float = 0.0
    tip: Optional[Vector3] = None
    new_nodes: tuple[Vector3, ...] = ()
    branches: tuple[BranchEvent, ...] = ()
    deactivate: bool = False
    die: bool = False


class GrowthPolicy(Protocol):
    def advance(self, organ: "Organ", dt: float, rng: "Generator") -> GeometryDelta:
        ...


def elongated_length(param: GrowthParameters, age: float) -> float:
    """Negative exponential length at ``age``, approaching ``lmax`` with initial rate ``r``."""

    if age <= 0 or param.lmax <= 0 or param.r <= 0:
        return 0.0
    return param.lmax * (1.0 - exp(-(param.r / param.lmax) * age))


@dataclass(frozen=True)
class NoGrowth:
    """Policy for organs that never change shape."""

    def advance(self, organ: "Organ", dt: float, rng: "Generator") -> GeometryDelta:
        return GeometryDelta()


@dataclass(frozen=True)
class SeedGrowth:
    """Emits the taproot and the shoot on the first active step, then stops."""

    def advance(self, organ: "Organ", dt: float, rng: "Generator") -> GeometryDelta:
        param = organ.param
        if not isinstance(param, SeedParameters):
            raise ConfigurationError(f"seed organ {organ.id} needs SeedParameters, got {type(param).__name__}")
        branches = []
        if param.taproot_subtype > 0:
            branches.append(BranchEvent(OrganKind.ROOT, param.taproot_subtype, 0, heading=DOWN))
        if param.shoot_subtype > 0:
            branches.append(BranchEvent(OrganKind.STEM, param.shoot_subtype, 0, heading=UP))
        return GeometryDelta(branches=tuple(branches), deactivate=True)


@dataclass(frozen=True)
class ElongationGrowth:
    """Straight elongation with lateral branching for roots, stems, and leaves.

    Growth first extends a tip segment shorter than ``dx`` by moving the tip node;
    whatever remains is appended in chunks of at most ``dx``. Laterals emerge every
    ``ln`` after the basal zone ``lb`` and never inside the apical zone ``la``.
    """

    gravity_vector: Vector3 = DOWN

    def advance(self, organ: "Organ", dt: float, rng: "Generator") -> GeometryDelta:
        param = organ.param
        if not isinstance(param, GrowthParameters):
            raise ConfigurationError(f"organ {organ.id} needs GrowthParameters, got {type(param).__name__}")
        if param.dx <= 0:
            raise ConfigurationError(f"organ {organ.id}: node resolution dx must be positive, got {param.dx}")

        age = max(organ.age, 0.0)
        target = elongated_length(param, age + dt)
        increment = max(0.0, target - organ.length)
        new_length = organ.length + increment
        done = param.lmax <= 0 or param.r <= 0 or new_length >= param.lmax - _EPS

        direction = compute_growth_direction(
            TropismInputs(gravity_vector=self.gravity_vector, parent_vector=organ.heading),
            GrowthDirectionWeights(gravity=param.gravitropism, inertia=1.0),
        )

        points = list(organ.nodes)
        remaining = increment
        tip = None
        if len(points) > 1 and remaining > _EPS:
            last = distance(points[-2], points[-1])
            if last < param.dx - _EPS:
                fill = min(remaining, param.dx - last)
                tip = advance_point(points[-1], direction, fill)
                points[-1] = tip
                remaining -= fill

        new_nodes = []
        while remaining > _EPS:
            step = min(remaining, param.dx)
            position = advance_point(points[-1], direction, step)
            points.append(position)
            new_nodes.append(position)
            remaining -= step

        branches = self._laterals(organ, param, points, new_length, direction, rng)
        return GeometryDelta(
            length_increment=increment,
            tip=tip,
            new_nodes=tuple(new_nodes),
            branches=branches,
            deactivate=done,
        )

    def _laterals(
        self,
        organ: "Organ",
        param: GrowthParameters,
        points: list[Vector3],
        new_length: float,
        direction: Vector3,
        rng: "Generator",
    ) -> tuple[BranchEvent, ...]:
        if param.successor_subtype <= 0 or param.ln <= 0 or len(points) < 2:
            return ()

        arc = [0.0]
        for previous, current in zip(points, points[1:]):
            arc.append(arc[-1] + distance(previous, current))

        events = []
        count = len(organ.children)
        while True:
            at = param.lb + count * param.ln
            # the tip may still move, so laterals only attach behind it
            if at > new_length - param.la or at >= arc[-1]:
                break
            heading = insertion_heading(direction, param.theta, float(rng.uniform(0.0, 2.0 * pi)))
            events.append(
                BranchEvent(
                    organ_kind=OrganKind(param.successor_kind),
                    subtype=param.successor_subtype,
                    node_index=bisect_right(arc, at) - 1,
                    heading=heading,
                )
            )
            count += 1
        return tuple(events)


def default_growth_policies() -> dict[OrganKind, GrowthPolicy]:
    return {
        OrganKind.ORGAN: NoGrowth(),
        OrganKind.SEED: SeedGrowth(),
        OrganKind.ROOT: ElongationGrowth(gravity_vector=DOWN),
        OrganKind.STEM: ElongationGrowth(gravity_vector=UP),
        OrganKind.LEAF: ElongationGrowth(gravity_vector=UP),
    }
