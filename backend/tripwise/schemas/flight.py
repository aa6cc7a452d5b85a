from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

CabinClass = Literal["economy", "premium_economy", "business", "first"]


class FlightOption(BaseModel):
    id: str
    airline_code: str
    airline_name: str
    origin_airport: str
    destination_airport: str
    departure_time: str
    arrival_time: str
    duration_minutes: int
    stops: int
    price: float
    currency: str = "USD"
    cabin_class: str = "economy"
    booking_link: str | None = None
    is_mock: bool = False


class FlightPriceSelection(BaseModel):
    """Chosen per-traveler fares that replace the flight cost formula."""
    outbound: float = Field(ge=0)
    return_fare: float | None = Field(default=None, ge=0)
    currency: str = "USD"

    @property
    def per_traveler(self) -> float:
        return self.outbound + (self.return_fare or 0)


class FlightSearchRequest(BaseModel):
    origin: str = Field(min_length=1)
    destination: str = Field(min_length=1)
    departure_date: date
    return_date: date | None = None
    adults: int = Field(default=1, ge=1)
    cabin_class: CabinClass = "economy"


class FlightSearchResponse(BaseModel):
    origin_code: str
    destination_code: str
    outbound: list[FlightOption]
    inbound: list[FlightOption] = []
    price_selection: FlightPriceSelection | None = None
