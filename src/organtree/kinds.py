"""Organ kinds and the kind name/number tables."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Union

from .errors import UnknownOrganKindError


class OrganKind(IntEnum):
    ORGAN = 0
    SEED = 1
    ROOT = 2
    STEM = 3
    LEAF = 4


ORGAN_KIND_NAMES: tuple[str, ...] = ("organ", "seed", "root", "stem", "leaf")

KindFilter = Optional[Union[OrganKind, int]]


def organ_kind_number(name: str) -> int:
    try:
        return ORGAN_KIND_NAMES.index(name)
    except ValueError:
        raise UnknownOrganKindError(name) from None


def organ_kind_name(number: int) -> str:
    if isinstance(number, bool) or not 0 <= number < len(ORGAN_KIND_NAMES):
        raise UnknownOrganKindError(number)
    return ORGAN_KIND_NAMES[number]


def as_organ_kind(value: Union[OrganKind, int, str]) -> OrganKind:
    """Coerce a kind name, number, or enum member to ``OrganKind``."""

    if isinstance(value, str):
        return OrganKind(organ_kind_number(value))
    try:
        return OrganKind(value)
    except ValueError:
        raise UnknownOrganKindError(value) from None


def matches_kind(kind: OrganKind, kind_filter: KindFilter) -> bool:
    return kind_filter is None or kind == kind_filter
