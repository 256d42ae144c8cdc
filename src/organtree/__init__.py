"""Organ-tree growth simulation and node/segment indexing toolkit."""

from .errors import (
    ConfigurationError,
    GrowthContractError,
    IndexingFault,
    OrganTreeError,
    UnknownOrganKindError,
)
from .geometry import GrowthDirectionWeights, TropismInputs, Vector3, compute_growth_direction
from .growth import (
    BranchEvent,
    ElongationGrowth,
    GeometryDelta,
    GrowthPolicy,
    NoGrowth,
    SeedGrowth,
    default_growth_policies,
)
from .kinds import ORGAN_KIND_NAMES, OrganKind, organ_kind_name, organ_kind_number
from .organ import Organ
from .organism import DEFAULT_SEED, OrganDelta, Organism
from .parameters import (
    GrowthParameters,
    GrowthTypeParameter,
    OrganParameters,
    OrganTypeParameter,
    SeedParameters,
    SeedTypeParameter,
)
from .plant import Plant, default_organ_type_parameters
from .serialization import delta_to_dict, organ_to_dict, organism_to_dict, prototype_to_dict

__all__ = [
    "BranchEvent",
    "ConfigurationError",
    "DEFAULT_SEED",
    "ElongationGrowth",
    "GeometryDelta",
    "GrowthContractError",
    "GrowthDirectionWeights",
    "GrowthParameters",
    "GrowthPolicy",
    "GrowthTypeParameter",
    "IndexingFault",
    "NoGrowth",
    "ORGAN_KIND_NAMES",
    "Organ",
    "OrganDelta",
    "OrganKind",
    "OrganParameters",
    "OrganTreeError",
    "OrganTypeParameter",
    "Organism",
    "Plant",
    "SeedGrowth",
    "SeedParameters",
    "SeedTypeParameter",
    "TropismInputs",
    "UnknownOrganKindError",
    "Vector3",
    "compute_growth_direction",
    "default_growth_policies",
    "default_organ_type_parameters",
    "delta_to_dict",
    "organ_kind_name",
    "organ_kind_number",
    "organ_to_dict",
    "organism_to_dict",
    "prototype_to_dict",
]
