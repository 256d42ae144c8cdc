"""Integration tests with the default seed/root/stem/leaf plant."""

import pytest

from organtree import (
    ConfigurationError,
    ElongationGrowth,
    GrowthParameters,
    GrowthTypeParameter,
    Organism,
    OrganKind,
    Plant,
    organism_to_dict,
    prototype_to_dict,
)
from organtree.growth import elongated_length


def _grown(seed=42, days=15):
    plant = Plant(seed=seed)
    plant.initialize()
    for _ in range(days):
        plant.simulate(1.0)
    return plant


def test_seed_emits_taproot_and_stem():
    plant = Plant()
    plant.initialize()

    plant.simulate(1.0)

    seed = plant.seed_organ
    assert seed.organ_kind == OrganKind.SEED
    assert seed.number_of_nodes == 1
    assert not seed.active
    assert [child.organ_kind for child in seed.children] == [OrganKind.ROOT, OrganKind.STEM]
    taproot, stem = seed.children
    assert taproot.nodes[0] == plant.seed_position
    assert taproot.nodes[-1][2] < plant.seed_position[2]
    assert stem.nodes[-1][2] > plant.seed_position[2]


def test_initialize_twice_fails():
    plant = Plant()
    plant.initialize()

    with pytest.raises(ConfigurationError):
        plant.initialize()
    with pytest.raises(ConfigurationError):
        Plant().seed_organ


def test_laterals_and_leaves_emerge():
    plant = _grown(days=20)

    assert plant.get_organs(OrganKind.LEAF)
    assert plant.get_organs(OrganKind.ROOT)[1:]
    for lateral in plant.seed_organ.children[0].children:
        assert lateral.organ_kind == OrganKind.ROOT
        assert lateral.subtype == 2


def test_node_bookkeeping_holds_every_step():
    plant = Plant(seed=5)
    plant.initialize()

    for _ in range(20):
        before = plant.number_of_nodes
        plant.simulate(1.0)
        new_nodes = plant.get_new_nodes()

        assert plant.number_of_nodes == before + len(new_nodes)
        assert len(plant.get_new_segments()) == len(new_nodes)
        assert new_nodes == plant.get_nodes()[before:]
        for organ in plant.get_organs():
            assert all(a < b for a, b in zip(organ.node_ids, organ.node_ids[1:]))
            if organ.parent is not None:
                assert organ.node_ids[0] in organ.parent.node_ids


def test_segments_respect_resolution():
    plant = _grown(days=10)

    nodes = plant.get_nodes()
    for organ, (a, b) in zip(plant.get_segment_origins(), plant.get_segments()):
        step = sum((p - q) ** 2 for p, q in zip(nodes[a], nodes[b])) ** 0.5
        assert step <= organ.param.dx + 1e-9


def test_length_follows_elongation_law():
    plant = _grown(days=6)
    taproot = plant.seed_organ.children[0]

    assert taproot.length == pytest.approx(elongated_length(taproot.param, taproot.age))


def test_taproot_stops_at_max_length():
    plant = Plant()
    plant.set_organ_type_parameter(
        GrowthTypeParameter(plant, OrganKind.ROOT, 1, "short taproot", lmax=2.0, r=4.0, dx=0.5)
    )
    plant.initialize()

    for _ in range(30):
        plant.simulate(1.0)

    taproot = plant.seed_organ.children[0]
    assert not taproot.active
    assert taproot.length <= 2.0


def test_same_seed_same_plant():
    first, second = _grown(seed=9), _grown(seed=9)

    assert first.get_nodes() == second.get_nodes()
    assert first.get_segments() == second.get_segments()
    assert first.get_parameter("lmax") == second.get_parameter("lmax")


def test_different_seed_different_plant():
    assert _grown(seed=1).get_nodes() != _grown(seed=2).get_nodes()


def test_clone_replays_identically():
    original = _grown(seed=17, days=5)
    clone = original.copy()

    for _ in range(10):
        original.simulate(1.0)
        clone.simulate(1.0)
        assert clone.get_new_nodes() == original.get_new_nodes()

    assert clone.get_nodes() == original.get_nodes()
    assert clone.get_segments() == original.get_segments()
    assert clone.get_segment_cts() == original.get_segment_cts()


def test_realized_parameters_are_attached_to_organs():
    plant = _grown(days=3)
    taproot = plant.seed_organ.children[0]

    assert isinstance(taproot.param, GrowthParameters)
    assert taproot.organ_type_parameter.name == "taproot"
    assert taproot.get_parameter("lmax") == taproot.param.lmax


def test_elongation_requires_positive_resolution():
    organism = Organism()
    organism.set_organ_type_parameter(GrowthTypeParameter(organism, OrganKind.ROOT, 1, dx=0.0, lmax=5.0, r=1.0))
    organism.create_base_organ(OrganKind.ROOT, 1)

    with pytest.raises(ConfigurationError):
        organism.simulate(1.0)

    assert isinstance(organism.growth_policy(OrganKind.ROOT), ElongationGrowth)


def test_dict_views():
    plant = _grown(days=4)

    state = organism_to_dict(plant)

    assert state["number_of_nodes"] == len(state["nodes"])
    assert len(state["organs"]) == plant.number_of_organs
    names = [p["name"] for p in state["organ_type_parameters"]]
    assert names == ["seed", "taproot", "lateral", "main stem", "leaf"]
    seed = prototype_to_dict(plant.get_organ_type_parameter(OrganKind.SEED, 0))
    assert seed["fields"] == {"organ_kind": 1, "subtype": 0, "taproot_subtype": 1, "shoot_subtype": 1}


def test_initialized_plant_reports_the_seed_node_as_new():
    plant = Plant()
    plant.initialize()

    assert plant.get_new_nodes() == [plant.seed_position]
    assert plant.get_new_segments() == []


def test_children_stay_attached_to_their_parent_node():
    plant = _grown(seed=11, days=20)

    for organ in plant.get_organs():
        if organ.parent is not None:
            index = organ.parent.node_ids.index(organ.node_ids[0])
            assert organ.nodes[0] == organ.parent.nodes[index]
