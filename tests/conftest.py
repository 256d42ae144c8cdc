"""Shared fixtures."""

from __future__ import annotations

import pytest

from organtree import Organism, OrganKind
from policies import AppendGrowth, register


@pytest.fixture
def organism() -> Organism:
    organism = Organism(seed=7)
    register(organism, OrganKind.ROOT, 1, "root")
    register(organism, OrganKind.STEM, 1, "stem")
    return organism


@pytest.fixture
def branching_organism(organism: Organism) -> Organism:
    """Two base roots appending two nodes per step; each sprouts a stem from its tip on step two."""

    organism.set_growth_policy(OrganKind.ROOT, AppendGrowth(per_step=2, branch=(OrganKind.STEM, 1)))
    organism.set_growth_policy(OrganKind.STEM, AppendGrowth(per_step=1))
    organism.create_base_organ(OrganKind.ROOT, 1, position=(0.0, 0.0, 0.0))
    organism.create_base_organ(OrganKind.ROOT, 1, position=(5.0, 0.0, 0.0))
    return organism
