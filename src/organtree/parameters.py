"""Organ type parameters (per subtype prototypes) and realized organ parameters."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, ClassVar, Optional

from .errors import ConfigurationError
from .kinds import OrganKind

if TYPE_CHECKING:
    from numpy.random import Generator

    from .organism import Organism


@dataclass(frozen=True)
class OrganParameters:
    """Parameter values realized for one concrete organ."""

    subtype: int


@dataclass(frozen=True)
class GrowthParameters(OrganParameters):
    lb: float = 0.0
    la: float = 0.0
    ln: float = 0.0
    lmax: float = 0.0
    r: float = 0.0
    theta: float = 0.0
    dx: float = 1.0
    delay: float = 0.0
    successor_kind: int = OrganKind.ORGAN
    successor_subtype: int = 0
    gravitropism: float = 0.0


@dataclass(frozen=True)
class SeedParameters(OrganParameters):
    taproot_subtype: int = 1
    shoot_subtype: int = 0


@dataclass(eq=False)
class OrganTypeParameter:
    """Prescription for one organ kind and subtype.

    ``int_fields`` and ``float_fields`` name the attributes that file readers and
    writers may enumerate generically; subclasses extend them.
    """

    organism: Optional["Organism"] = field(repr=False)
    organ_kind: OrganKind = OrganKind.ORGAN
    subtype: int = 0
    name: str = "organ"

    int_fields: ClassVar[tuple[str, ...]] = ("organ_kind", "subtype")
    float_fields: ClassVar[tuple[str, ...]] = ()

    def realize(self) -> OrganParameters:
        return OrganParameters(subtype=self.subtype)

    def copy(self, organism: "Organism") -> "OrganTypeParameter":
        return replace(self, organism=organism)

    def fields(self) -> dict[str, float]:
        values: dict[str, float] = {name: int(getattr(self, name)) for name in self.int_fields}
        values.update({name: float(getattr(self, name)) for name in self.float_fields})
        return values

    def set_field(self, name: str, value: float) -> None:
        if name == "organ_kind":
            self.organ_kind = OrganKind(int(value))
        elif name in self.int_fields:
            setattr(self, name, int(value))
        elif name in self.float_fields:
            setattr(self, name, float(value))
        else:
            raise ConfigurationError(f"{type(self).__name__} has no parameter field {name!r}")

    def _generator(self) -> "Generator":
        if self.organism is None:
            raise ConfigurationError(f"organ type parameter {self.name!r} is not bound to an organism")
        return self.organism.rng

    def __str__(self) -> str:
        return f"Name {self.name}, organ kind {int(self.organ_kind)}, subtype {self.subtype}"


@dataclass(eq=False)
class GrowthTypeParameter(OrganTypeParameter):
    """Elongating organ (root, stem, leaf) with normally distributed parameters."""

    lb: float = 0.0
    lbs: float = 0.0
    la: float = 0.0
    las: float = 0.0
    ln: float = 0.0
    lns: float = 0.0
    lmax: float = 0.0
    lmaxs: float = 0.0
    r: float = 0.0
    rs: float = 0.0
    theta: float = 0.0
    thetas: float = 0.0
    dx: float = 1.0
    delay: float = 0.0
    successor_kind: int = OrganKind.ORGAN
    successor_subtype: int = 0
    gravitropism: float = 0.0

    int_fields: ClassVar[tuple[str, ...]] = OrganTypeParameter.int_fields + ("successor_kind", "successor_subtype")
    float_fields: ClassVar[tuple[str, ...]] = (
        "lb", "lbs", "la", "las", "ln", "lns", "lmax", "lmaxs",
        "r", "rs", "theta", "thetas", "dx", "delay", "gravitropism",
    )

    def realize(self) -> GrowthParameters:
        rng = self._generator()

        # draw order is part of reproducibility
        def draw(mean: float, sd: float) -> float:
            return max(0.0, float(mean + sd * rng.standard_normal()))

        lb = draw(self.lb, self.lbs)
        la = draw(self.la, self.las)
        ln = draw(self.ln, self.lns)
        lmax = draw(self.lmax, self.lmaxs)
        r = draw(self.r, self.rs)
        theta = draw(self.theta, self.thetas)
        return GrowthParameters(
            subtype=self.subtype,
            lb=lb,
            la=la,
            ln=ln,
            lmax=lmax,
            r=r,
            theta=theta,
            dx=self.dx,
            delay=self.delay,
            successor_kind=self.successor_kind,
            successor_subtype=self.successor_subtype,
            gravitropism=self.gravitropism,
        )


@dataclass(eq=False)
class SeedTypeParameter(OrganTypeParameter):
    organ_kind: OrganKind = OrganKind.SEED
    name: str = "seed"
    taproot_subtype: int = 1
    shoot_subtype: int = 0

    int_fields: ClassVar[tuple[str, ...]] = OrganTypeParameter.int_fields + ("taproot_subtype", "shoot_subtype")

    def realize(self) -> SeedParameters:
        return SeedParameters(
            subtype=self.subtype,
            taproot_subtype=self.taproot_subtype,
            shoot_subtype=self.shoot_subtype,
        )
