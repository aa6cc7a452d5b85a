"""Flight search router - fare lookup feeding the budget estimate."""

import logging

from fastapi import APIRouter, HTTPException, Query

from tripwise.schemas.flight import FlightSearchRequest, FlightSearchResponse
from tripwise.services.flight_client import flight_client

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/search", response_model=FlightSearchResponse)
async def search_flights(req: FlightSearchRequest):
    """Top flight options for a trip, with the cheapest fares as a price selection."""
    if req.return_date is not None and req.return_date < req.departure_date:
        raise HTTPException(status_code=400, detail="return_date must not be before departure_date")

    return await flight_client.search_round_trip(
        origin=req.origin,
        destination=req.destination,
        departure_date=req.departure_date,
        return_date=req.return_date,
        adults=req.adults,
        cabin_class=req.cabin_class,
    )


@router.get("/airports")
async def resolve_airport(query: str = Query(..., min_length=1)):
    return {"query": query, "code": await flight_client.get_airport_code(query)}
