"""API routes for the combat simulator."""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..config import build_scenario
from ..exceptions import ConfigurationError
from ..ship import NPC_TYPES, ShipType
from ..simulator import CombatSimulator

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_ITERATIONS = 100_000


# Request/Response models
class ShipRequest(BaseModel):
    type: str
    quantity: int = Field(1, ge=0)
    hull: int = Field(0, ge=0)
    computers: int = Field(0, ge=0)
    shields: int = Field(0, ge=0)
    initiative: int = Field(0, ge=0)
    cannons: Dict[str, int] = {}
    missiles: Dict[str, int] = {}
    rift: int = Field(0, ge=0)
    heal: int = Field(0, ge=0)


class FleetRequest(BaseModel):
    name: str
    antimatter_splitter: bool = False
    ships: List[ShipRequest] = []


class SimulateRequest(BaseModel):
    # Order of arrival in the hex; the last fleet attacks first
    fleets: List[FleetRequest]
    iterations: int = Field(1000, ge=1, le=MAX_ITERATIONS)
    seed: Optional[int] = Field(None, ge=0)


class SimulateResponse(BaseModel):
    victory_probability: Dict[str, float]
    draw_probability: float
    expected_survivors: Dict[str, Dict[str, float]]
    iterations: int
    time_taken: float


# ============================================================================
# Simulation
# ============================================================================

@router.post("/simulate", response_model=SimulateResponse)
def simulate(request: SimulateRequest) -> SimulateResponse:
    """Run the gauntlet ``iterations`` times and report the odds.

    Every request builds its own fleets, so concurrent requests never share
    ship state.
    """
    try:
        scenario = build_scenario(request.model_dump())
    except ConfigurationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    result = CombatSimulator().simulate(scenario.fleets, scenario.iterations)
    logger.debug("api simulate: %d fleets, %d iterations", len(scenario.fleets), result.iterations)
    return SimulateResponse(**result.to_dict())


@router.get("/ship-types")
async def list_ship_types() -> List[Dict[str, object]]:
    """List the ship types a fleet may contain."""
    return [
        {"type": ship_type.value, "player": ship_type not in NPC_TYPES}
        for ship_type in ShipType
    ]
