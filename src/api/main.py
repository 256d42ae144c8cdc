"""FastAPI app exposing the organ-tree simulation to viewers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from organtree import OrganTreeError, Plant
from organtree.serialization import delta_to_dict, organ_to_dict, organism_to_dict, prototype_to_dict

_LOGGER = logging.getLogger(__name__)

app = FastAPI(title="Organ Tree Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ResetRequest(BaseModel):
    seed: int = 5489
    seed_position: tuple[float, float, float] = (0.0, 0.0, -3.0)


class StepRequest(BaseModel):
    dt: float = Field(default=1.0, gt=0.0, le=365.0)
    steps: int = Field(default=1, ge=1, le=1000)
    verbose: bool = False


def _build_plant(request: ResetRequest | None) -> Plant:
    request = request or ResetRequest()
    plant = Plant(seed=request.seed, seed_position=request.seed_position)
    plant.initialize()
    return plant


CURRENT_PLANT = _build_plant(None)


@app.get("/state")
def get_state() -> dict[str, object]:
    return {"organism": organism_to_dict(CURRENT_PLANT), "summary": str(CURRENT_PLANT)}


@app.post("/reset")
def reset_plant(request: ResetRequest | None = None) -> dict[str, object]:
    global CURRENT_PLANT
    CURRENT_PLANT = _build_plant(request)
    return {"organism": organism_to_dict(CURRENT_PLANT), "summary": str(CURRENT_PLANT)}


@app.post("/step")
def step_simulation(request: StepRequest) -> dict[str, object]:
    try:
        for _ in range(request.steps):
            CURRENT_PLANT.simulate(request.dt, request.verbose)
        delta = delta_to_dict(CURRENT_PLANT)
    except OrganTreeError as exc:
        _LOGGER.error("simulation step failed: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"delta": delta, "summary": str(CURRENT_PLANT)}


@app.get("/delta")
def get_delta() -> dict[str, object]:
    try:
        return {"delta": delta_to_dict(CURRENT_PLANT)}
    except OrganTreeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/parameters")
def get_parameters() -> dict[str, object]:
    return {"organ_type_parameters": [prototype_to_dict(p) for p in CURRENT_PLANT.get_organ_type_parameters()]}


@app.get("/organs/{organ_id}")
def get_organ(organ_id: int) -> dict[str, object]:
    for base in CURRENT_PLANT.base_organs:
        for organ in base.iter_organs():
            if organ.id == organ_id:
                return {"organ": organ_to_dict(organ)}
    raise HTTPException(status_code=404, detail="Organ not found")
