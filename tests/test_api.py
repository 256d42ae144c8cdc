"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from api.main import app


@pytest.fixture
def client() -> TestClient:
    client = TestClient(app)
    response = client.post("/reset", json={"seed": 3})
    assert response.status_code == 200
    return client


def test_reset_returns_seeded_plant(client):
    body = client.get("/state").json()

    organism = body["organism"]
    assert organism["sim_time"] == 0.0
    assert organism["number_of_nodes"] == 1
    assert organism["nodes"] == [[0.0, 0.0, -3.0]]
    assert body["summary"].startswith("Organism with 1 base organs")


def test_step_reports_delta(client):
    response = client.post("/step", json={"dt": 1.0, "steps": 3})

    assert response.status_code == 200
    delta = response.json()["delta"]
    assert delta["sim_time"] == 3.0
    assert len(delta["new_nodes"]) == len(delta["new_segments"]) == len(delta["new_segment_cts"])
    assert client.get("/delta").json()["delta"] == delta


def test_step_validates_payload(client):
    assert client.post("/step", json={"dt": -1.0}).status_code == 422


def test_parameters_are_listed(client):
    prototypes = client.get("/parameters").json()["organ_type_parameters"]

    assert [p["organ_kind"] for p in prototypes] == ["seed", "root", "root", "stem", "leaf"]
    assert prototypes[1]["fields"]["successor_subtype"] == 2


def test_organ_lookup(client):
    client.post("/step", json={"dt": 1.0})

    seed = client.get("/organs/0").json()["organ"]
    assert seed["organ_kind"] == "seed"
    assert seed["children"] == [1, 2]
    assert client.get("/organs/999").status_code == 404


def test_delta_right_after_reset(client):
    response = client.get("/delta")

    assert response.status_code == 200
    delta = response.json()["delta"]
    assert delta["new_nodes"] == [[0.0, 0.0, -3.0]]
    assert delta["new_segments"] == []
    assert delta["updated_node_indices"] == []
