"""A ready-to-run organism: a seed with a branching taproot and a leafy main stem."""

from __future__ import annotations

from typing import Optional

from .errors import ConfigurationError
from .geometry import Vector3
from .kinds import OrganKind
from .organ import Organ
from .organism import DEFAULT_SEED, Organism
from .parameters import GrowthTypeParameter, OrganTypeParameter, SeedTypeParameter


def default_organ_type_parameters(plant: Organism) -> list[OrganTypeParameter]:
    return [
        SeedTypeParameter(plant, subtype=0, taproot_subtype=1, shoot_subtype=1),
        GrowthTypeParameter(
            plant, OrganKind.ROOT, 1, "taproot",
            lb=1.0, lbs=0.1, la=10.0, las=1.0, ln=1.0, lns=0.1,
            lmax=100.0, lmaxs=5.0, r=1.0, rs=0.1, dx=0.5,
            successor_kind=OrganKind.ROOT, successor_subtype=2, gravitropism=0.5,
        ),
        GrowthTypeParameter(
            plant, OrganKind.ROOT, 2, "lateral",
            la=0.5, lmax=15.0, lmaxs=1.5, r=0.5, rs=0.05,
            theta=1.22, thetas=0.1, dx=0.25, delay=1.0, gravitropism=0.2,
        ),
        GrowthTypeParameter(
            plant, OrganKind.STEM, 1, "main stem",
            lb=1.0, la=2.0, ln=1.5, lns=0.1, lmax=50.0, lmaxs=2.0, r=1.5, rs=0.1, dx=0.5,
            successor_kind=OrganKind.LEAF, successor_subtype=1, gravitropism=0.3,
        ),
        GrowthTypeParameter(
            plant, OrganKind.LEAF, 1, "leaf",
            lmax=6.0, lmaxs=0.5, r=0.8, rs=0.05, theta=0.78, thetas=0.05, dx=0.5, delay=0.5,
        ),
    ]


class Plant(Organism):
    """Organism planted from a single seed.

    The seed emits a taproot and a main stem on its first step; the taproot carries
    lateral roots and the stem carries leaves.
    """

    def __init__(self, seed: Optional[int] = DEFAULT_SEED, seed_position: Vector3 = (0.0, 0.0, -3.0)):
        super().__init__(seed)
        self.seed_position = seed_position
        for p in default_organ_type_parameters(self):
            self.set_organ_type_parameter(p)

    @property
    def seed_organ(self) -> Organ:
        if not self.base_organs:
            raise ConfigurationError("plant has not been initialized")
        return self.base_organs[0]

    def initialize(self) -> None:
        if self.base_organs:
            raise ConfigurationError("plant is already initialized")
        self.create_base_organ(OrganKind.SEED, 0, self.seed_position)
