"""Tests for whole-tree queries, copies, and the simulation driver."""

import logging

import pytest

from organtree import ConfigurationError, Organism, OrganKind
from policies import AppendGrowth, register


def _run(organism, days):
    for _ in range(days):
        organism.simulate(1.0)


def test_initialize_hook_is_a_no_op():
    organism = Organism()

    organism.initialize()

    assert organism.base_organs == []
    assert organism.get_nodes() == []


def test_simulate_advances_time_and_snapshots(branching_organism):
    branching_organism.simulate(1.0)
    assert branching_organism.old_number_of_nodes == 2
    assert branching_organism.old_number_of_organs == 2

    branching_organism.simulate(0.5)
    assert branching_organism.sim_time == pytest.approx(1.5)
    assert branching_organism.old_number_of_nodes == 6
    assert branching_organism.number_of_new_organs == 2


def test_get_nodes_matches_every_organ(branching_organism):
    _run(branching_organism, 3)

    nodes = branching_organism.get_nodes()
    cts = branching_organism.get_node_cts()

    assert len(nodes) == branching_organism.number_of_nodes
    for organ in branching_organism.get_organs():
        assert organ.node_ids == sorted(set(organ.node_ids))
        for i, node_id in enumerate(organ.node_ids):
            assert nodes[node_id] == organ.nodes[i]
            assert cts[node_id] == organ.node_cts[i]


def test_get_nodes_includes_unemerged_base_organs(organism):
    organism.create_base_organ(OrganKind.ROOT, 1, position=(1.0, 1.0, 1.0))
    organism.create_base_organ(OrganKind.ROOT, 1, position=(2.0, 2.0, 2.0))

    assert organism.get_organs() == []
    assert organism.get_nodes() == [(1.0, 1.0, 1.0), (2.0, 2.0, 2.0)]
    assert organism.get_node_cts() == [0.0, 0.0]


def test_segments_and_segment_times(branching_organism):
    _run(branching_organism, 2)

    segments = branching_organism.get_segments()
    cts = branching_organism.get_segment_cts()
    origins = branching_organism.get_segment_origins()

    assert len(segments) == branching_organism.get_number_of_segments() == 10
    assert segments[:5] == [(0, 2), (2, 3), (3, 6), (6, 7), (3, 8)]
    assert cts[:5] == [1.0, 1.0, 2.0, 2.0, 2.0]
    assert origins[4] is branching_organism.base_organs[0].children[0]
    assert branching_organism.get_segments(OrganKind.STEM) == [(3, 8), (5, 11)]
    assert branching_organism.get_number_of_segments(OrganKind.STEM) == 2


def test_polylines(branching_organism):
    _run(branching_organism, 1)

    polylines = branching_organism.get_polylines()

    assert polylines[0] == [(0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -2.0)]
    assert branching_organism.get_polyline_cts()[1] == [0.0, 1.0, 1.0]


def test_summed_parameter_equals_sum_of_parameters(branching_organism):
    _run(branching_organism, 4)

    lengths = branching_organism.get_parameter("length", OrganKind.ROOT)

    assert len(lengths) == 2
    assert sum(lengths) == branching_organism.get_summed("length", OrganKind.ROOT)
    assert branching_organism.get_summed("length") == pytest.approx(16.0 + 6.0)


def test_unknown_parameter_gives_nan_per_organ(branching_organism):
    _run(branching_organism, 2)

    values = branching_organism.get_parameter("colour")

    assert len(values) == 4
    assert all(value != value for value in values)


def test_branching_into_unregistered_subtype_fails(organism):
    organism.set_growth_policy(OrganKind.ROOT, AppendGrowth(per_step=1, branch=(OrganKind.LEAF, 1)))
    organism.create_base_organ(OrganKind.ROOT, 1)
    organism.simulate(1.0)

    with pytest.raises(ConfigurationError):
        organism.simulate(1.0)


def test_missing_growth_policy(organism):
    organism.create_base_organ(OrganKind.ROOT, 1)
    del organism.growth_policies[OrganKind.ROOT]

    with pytest.raises(ConfigurationError):
        organism.simulate(1.0)


def test_add_base_organ_rejects_children(branching_organism):
    _run(branching_organism, 2)
    stem = branching_organism.base_organs[0].children[0]

    with pytest.raises(ConfigurationError):
        branching_organism.add_base_organ(stem)


def test_copy_is_independent(branching_organism):
    _run(branching_organism, 2)

    clone = branching_organism.copy()
    clone.simulate(1.0)

    assert clone.number_of_nodes > branching_organism.number_of_nodes
    assert branching_organism.sim_time == 2.0
    for organ in clone.get_organs():
        assert organ.organism is clone
    assert clone.base_organs[0].children[0].parent is clone.base_organs[0]
    p = clone.get_organ_type_parameter(OrganKind.ROOT, 1)
    assert p.organism is clone
    assert p is not branching_organism.get_organ_type_parameter(OrganKind.ROOT, 1)


def test_verbose_step_is_logged(branching_organism, caplog):
    with caplog.at_level(logging.INFO, logger="organtree"):
        branching_organism.simulate(1.0, verbose=True)

    assert "from 0 to 1 days" in caplog.text


def test_summary(branching_organism):
    _run(branching_organism, 1)

    assert str(branching_organism) == (
        "Organism with 2 base organs, 6 nodes, and a total of 2 organs, after 1 days"
    )
