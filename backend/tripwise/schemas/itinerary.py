import datetime
from typing import Literal

from pydantic import BaseModel, Field


class ItineraryActivity(BaseModel):
    time: str | None = None
    title: str
    description: str | None = None
    location: str | None = None
    estimated_cost: float = Field(default=0, ge=0)
    category: Literal["sightseeing", "food", "activity", "transport", "shopping"]


class ItineraryMeal(BaseModel):
    type: Literal["breakfast", "lunch", "dinner"]
    name: str
    cost: float = Field(default=0, ge=0)


class ItineraryAccommodation(BaseModel):
    name: str
    type: str
    price_per_night: float = Field(default=0, ge=0)


class ItineraryDay(BaseModel):
    day: int
    date: datetime.date | None = None
    theme: str | None = None
    activities: list[ItineraryActivity] = []
    accommodation: ItineraryAccommodation | None = None
    meals: list[ItineraryMeal] = []


class ItineraryData(BaseModel):
    days: list[ItineraryDay] = []

    def activity_cost(self, *categories: str) -> float:
        """Sum of per-person activity costs in the given categories."""
        return sum(
            a.estimated_cost
            for d in self.days
            for a in d.activities
            if a.category in categories
        )

    def meal_cost(self) -> float:
        return sum(m.cost for d in self.days for m in d.meals)

    def accommodation_cost(self) -> float | None:
        """Sum of nightly rates, or None when the first day has no accommodation."""
        if not self.days or self.days[0].accommodation is None:
            return None
        return sum(d.accommodation.price_per_night for d in self.days if d.accommodation)
