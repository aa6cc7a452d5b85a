from typing import Literal

from pydantic import BaseModel

from tripwise.schemas.flight import FlightPriceSelection
from tripwise.schemas.itinerary import ItineraryData
from tripwise.schemas.trip import TripParameters

BudgetStatus = Literal["under", "over", "on-track"]
CategoryName = Literal[
    "flights", "accommodation", "food", "activities", "transportation", "miscellaneous"
]

CATEGORIES: tuple[str, ...] = (
    "flights", "accommodation", "food", "activities", "transportation", "miscellaneous",
)


class CategoryEstimate(BaseModel):
    amount: int
    calculation: str
    details: list[str] = []
    percentage: float = 0.0
    source: Literal["estimate", "flights", "itinerary"] = "estimate"

    model_config = {"frozen": True}


class BudgetBreakdown(BaseModel):
    flights: CategoryEstimate
    accommodation: CategoryEstimate
    food: CategoryEstimate
    activities: CategoryEstimate
    transportation: CategoryEstimate
    miscellaneous: CategoryEstimate

    model_config = {"frozen": True}

    def items(self) -> list[tuple[str, CategoryEstimate]]:
        return [(name, getattr(self, name)) for name in CATEGORIES]


class CostSavingTip(BaseModel):
    category: str
    tip: str
    potential_savings: int


class RiskFactor(BaseModel):
    factor: str
    impact: Literal["low", "medium", "high"]
    description: str


class BudgetSummary(BaseModel):
    total_days: int
    travelers: int
    destination_multiplier: float
    cost_per_person: int
    average_daily_cost: int
    highest_category: CategoryName
    lowest_category: CategoryName
    currency: str = "USD"


class BudgetAnalysis(BaseModel):
    total_estimated: int
    original_budget: float
    budget_status: BudgetStatus
    variance: float
    variance_percentage: float | None
    breakdown: BudgetBreakdown
    recommendations: list[str]
    cost_saving_tips: list[CostSavingTip]
    risk_factors: list[RiskFactor]
    summary: BudgetSummary

    model_config = {"frozen": True}


class EstimateRequest(BaseModel):
    trip: TripParameters
    itinerary: ItineraryData | None = None
    flight_prices: FlightPriceSelection | None = None


class AnalysisStageResponse(BaseModel):
    name: str
    message: str
    duration_ms: int
