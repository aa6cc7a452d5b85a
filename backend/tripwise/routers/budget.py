"""Budget router - estimates, stage listing and destination multipliers."""

import logging

from fastapi import APIRouter, HTTPException, Query

from tripwise.data.destinations import get_destination_multiplier, get_destination_tier
from tripwise.schemas.budget import AnalysisStageResponse, BudgetAnalysis, EstimateRequest
from tripwise.services.analysis_stages import ANALYSIS_STAGES, analyze_trip

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stages", response_model=list[AnalysisStageResponse])
async def list_stages():
    """Progress stages shown while an analysis runs."""
    return [
        AnalysisStageResponse(name=s.name, message=s.message, duration_ms=s.duration_ms)
        for s in ANALYSIS_STAGES
    ]


@router.post("/estimate", response_model=BudgetAnalysis)
async def estimate_budget(req: EstimateRequest):
    """Estimate trip costs and classify them against the stated budget."""
    try:
        return await analyze_trip(
            req.trip,
            itinerary=req.itinerary,
            flight_prices=req.flight_prices,
            on_progress=lambda stage, pct: logger.debug(f"{stage} {pct:.0f}%"),
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/multiplier")
async def destination_multiplier(destination: str = Query(..., min_length=1)):
    return {
        "destination": destination,
        "tier": get_destination_tier(destination),
        "multiplier": get_destination_multiplier(destination),
    }
