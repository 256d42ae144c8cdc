"""Serialization helpers for API and export clients."""

from __future__ import annotations

from .kinds import organ_kind_name
from .organ import Organ
from .organism import Organism
from .parameters import OrganTypeParameter


def organ_to_dict(organ: Organ) -> dict[str, object]:
    return {
        "id": organ.id,
        "organ_kind": organ_kind_name(organ.organ_kind),
        "subtype": organ.subtype,
        "parent_id": None if organ.parent is None else organ.parent.id,
        "alive": organ.alive,
        "active": organ.active,
        "age": organ.age,
        "length": organ.length,
        "nodes": [list(node) for node in organ.nodes],
        "node_ids": list(organ.node_ids),
        "node_cts": list(organ.node_cts),
        "children": [child.id for child in organ.children],
    }


def prototype_to_dict(p: OrganTypeParameter) -> dict[str, object]:
    return {
        "name": p.name,
        "organ_kind": organ_kind_name(p.organ_kind),
        "fields": p.fields(),
    }


def organism_to_dict(organism: Organism) -> dict[str, object]:
    return {
        "sim_time": organism.sim_time,
        "number_of_nodes": organism.number_of_nodes,
        "number_of_organs": organism.number_of_organs,
        "base_organs": [organ.id for organ in organism.base_organs],
        "organ_type_parameters": [prototype_to_dict(p) for p in organism.get_organ_type_parameters()],
        "nodes": [list(node) for node in organism.get_nodes()],
        "segments": [list(segment) for segment in organism.get_segments()],
        "organs": [organ_to_dict(organ) for base in organism.base_organs for organ in base.iter_organs()],
    }


def delta_to_dict(organism: Organism) -> dict[str, object]:
    return {
        "sim_time": organism.sim_time,
        "old_number_of_nodes": organism.old_number_of_nodes,
        "updated_node_indices": organism.get_updated_node_indices(),
        "updated_nodes": [list(node) for node in organism.get_updated_nodes()],
        "new_nodes": [list(node) for node in organism.get_new_nodes()],
        "new_segments": [list(segment) for segment in organism.get_new_segments()],
        "new_segment_cts": organism.get_new_segment_cts(),
        "new_segment_origins": [organ.id for organ in organism.get_new_segment_origins()],
    }
