"""Budget estimator - per-category trip cost breakdown and budget status.

Each category amount comes from a flat per-day rate scaled by trip length,
traveler count and the destination multiplier, unless actual flight fares or
an itinerary are supplied. Amounts are rounded per category before summing,
so the total always equals the sum of the displayed amounts.
"""

import logging
import math

from tripwise.config import settings
from tripwise.data.destinations import get_destination_multiplier
from tripwise.schemas.budget import (
    CATEGORIES,
    BudgetAnalysis,
    BudgetBreakdown,
    BudgetSummary,
    CategoryEstimate,
)
from tripwise.schemas.flight import FlightPriceSelection
from tripwise.schemas.itinerary import ItineraryData
from tripwise.schemas.trip import TripParameters
from tripwise.services.budget_rules import (
    generate_cost_saving_tips,
    generate_recommendations,
    generate_risk_factors,
)
from tripwise.services.rounding import round_half_up

logger = logging.getLogger(__name__)

# Base rates in USD
FLIGHT_BASE = 600
ACCOMMODATION_NIGHTLY = 85
FOOD_DAILY = 45
ACTIVITIES_DAILY = 35
TRANSPORT_DAILY = 25
MISC_DAILY = 20

LONG_TRIP_DAYS = 7
LONG_TRIP_FLIGHT_FACTOR = 1.2
ITINERARY_MISC_BUFFER = 0.10


class BudgetEstimator:
    """Builds a BudgetAnalysis from trip parameters. Holds no state."""

    def estimate(
        self,
        trip: TripParameters,
        itinerary: ItineraryData | None = None,
        flight_prices: FlightPriceSelection | None = None,
    ) -> BudgetAnalysis:
        days = trip.total_days
        travelers = trip.travelers
        multiplier = get_destination_multiplier(trip.destination)
        use_itinerary = itinerary is not None and bool(itinerary.days)

        categories: dict[str, dict] = {
            "flights": self._flights(trip, days, multiplier, flight_prices),
            "accommodation": self._accommodation(days, travelers, multiplier, itinerary if use_itinerary else None),
            "food": self._food(days, travelers, multiplier, itinerary if use_itinerary else None),
            "activities": self._activities(trip, days, multiplier, itinerary if use_itinerary else None),
            "transportation": self._transportation(days, travelers, multiplier, itinerary if use_itinerary else None),
        }
        categories["miscellaneous"] = self._miscellaneous(
            days, travelers, multiplier,
            itinerary if use_itinerary else None,
            sum(c["amount"] for c in categories.values()),
        )

        total = sum(c["amount"] for c in categories.values())
        breakdown = BudgetBreakdown(**{
            name: CategoryEstimate(
                **categories[name],
                percentage=round(categories[name]["amount"] / total * 100, 1) if total else 0.0,
            )
            for name in CATEGORIES
        })

        budget = trip.budget
        variance = total - budget
        status = self.classify(total, budget)
        if budget == 0:
            logger.warning(f"Zero budget for {trip.destination}; variance percentage left undefined")
            variance_pct = None
        else:
            variance_pct = variance / budget * 100

        amounts = {name: categories[name]["amount"] for name in CATEGORIES}
        summary = BudgetSummary(
            total_days=days,
            travelers=travelers,
            destination_multiplier=multiplier,
            cost_per_person=round_half_up(total / travelers),
            average_daily_cost=round_half_up(total / days),
            highest_category=max(amounts, key=amounts.get),
            lowest_category=min(amounts, key=amounts.get),
            currency=settings.currency,
        )

        logger.info(
            f"Budget estimate for {trip.destination}: {total} vs {budget:g} "
            f"({status}, {days}d x {travelers} travelers, multiplier {multiplier})"
        )

        return BudgetAnalysis(
            total_estimated=total,
            original_budget=budget,
            budget_status=status,
            variance=variance,
            variance_percentage=variance_pct,
            breakdown=breakdown,
            recommendations=generate_recommendations(status),
            cost_saving_tips=generate_cost_saving_tips(breakdown),
            risk_factors=generate_risk_factors(days, multiplier),
            summary=summary,
        )

    @staticmethod
    def classify(total: float, budget: float, tolerance: float | None = None) -> str:
        """Place the total against the budget with a symmetric tolerance band."""
        band = budget * (settings.budget_tolerance if tolerance is None else tolerance)
        variance = total - budget
        if variance < -band:
            return "under"
        if variance > band:
            return "over"
        return "on-track"

    # --- Categories ---

    @staticmethod
    def _flights(
        trip: TripParameters, days: int, multiplier: float, prices: FlightPriceSelection | None
    ) -> dict:
        travelers = trip.travelers
        people = "passengers" if travelers > 1 else "passenger"
        if prices is not None:
            fare = prices.per_traveler
            return {
                "amount": round_half_up(fare * travelers),
                "calculation": f"Selected fares: {prices.currency} {fare:g} × {travelers} travelers",
                "details": [
                    f"Outbound fare: {prices.currency} {prices.outbound:g}",
                    *([f"Return fare: {prices.currency} {prices.return_fare:g}"] if prices.return_fare else []),
                    f"{trip.source} ↔ {trip.destination}",
                    f"Round-trip flights for {travelers} {people}",
                ],
                "source": "flights",
            }

        long_trip = days > LONG_TRIP_DAYS
        factor = LONG_TRIP_FLIGHT_FACTOR if long_trip else 1.0
        calculation = f"Base flight cost: ${FLIGHT_BASE} × {travelers} travelers"
        if long_trip:
            calculation += f" × {factor:g} long-stay factor"
        return {
            "amount": round_half_up(FLIGHT_BASE * travelers * factor * multiplier),
            "calculation": f"{calculation} × {multiplier:g} destination multiplier",
            "details": [
                f"International round-trip flights for {travelers} {people}",
                f"{trip.source} ↔ {trip.destination}",
                "Peak season and booking timing considered",
                "Includes taxes and fees",
            ],
        }

    @staticmethod
    def _accommodation(
        days: int, travelers: int, multiplier: float, itinerary: ItineraryData | None
    ) -> dict:
        planned = itinerary.accommodation_cost() if itinerary else None
        if planned is not None:
            return {
                "amount": round_half_up(planned),
                "calculation": f"Sum of nightly rates across {len(itinerary.days)} planned days",
                "details": [
                    f"{d.accommodation.name} ({d.accommodation.type}): ${d.accommodation.price_per_night:g}"
                    for d in itinerary.days if d.accommodation
                ],
                "source": "itinerary",
            }

        people = "travelers" if travelers > 1 else "traveler"
        return {
            "amount": round_half_up(ACCOMMODATION_NIGHTLY * days * math.sqrt(travelers) * multiplier),
            "calculation": (
                f"${ACCOMMODATION_NIGHTLY} per night × {days} nights × √{travelers} travelers "
                f"× {multiplier:g} destination multiplier"
            ),
            "details": [
                f"Mid-range accommodation for {days} nights",
                f"Shared costs optimized for {travelers} {people}",
                "Mix of hotels, guesthouses, and local stays",
                "Private bathroom and central location",
            ],
        }

    @staticmethod
    def _food(days: int, travelers: int, multiplier: float, itinerary: ItineraryData | None) -> dict:
        if itinerary:
            per_person = itinerary.meal_cost()
            return {
                "amount": round_half_up(per_person * travelers),
                "calculation": f"Planned meals: ${per_person:g} per person × {travelers} travelers",
                "details": [f"{len(d.meals)} meals planned on day {d.day}" for d in itinerary.days],
                "source": "itinerary",
            }

        return {
            "amount": round_half_up(FOOD_DAILY * days * travelers * multiplier),
            "calculation": (
                f"${FOOD_DAILY} per person per day × {days} days × {travelers} travelers "
                f"× {multiplier:g} destination multiplier"
            ),
            "details": [
                "Breakfast: $12/day - mix of hotel and local options",
                "Lunch: $15/day - local restaurants and street food",
                "Dinner: $18/day - variety of dining experiences",
                "Includes local specialties and occasional fine dining",
            ],
        }

    @staticmethod
    def _activities(
        trip: TripParameters, days: int, multiplier: float, itinerary: ItineraryData | None
    ) -> dict:
        travelers = trip.travelers
        if itinerary:
            per_person = itinerary.activity_cost("activity", "sightseeing")
            return {
                "amount": round_half_up(per_person * travelers),
                "calculation": f"Planned activities: ${per_person:g} per person × {travelers} travelers",
                "details": [
                    f"Day {d.day}: {a.title} (${a.estimated_cost:g})"
                    for d in itinerary.days
                    for a in d.activities
                    if a.category in ("activity", "sightseeing")
                ],
                "source": "itinerary",
            }

        details = [
            "Entry fees to major attractions and museums",
            "Guided tours and cultural experiences",
            "Adventure activities based on interests",
            "Entertainment and nightlife expenses",
        ]
        if trip.interests:
            details.append(f"Tailored to: {', '.join(trip.interests)}")
        return {
            "amount": round_half_up(ACTIVITIES_DAILY * days * travelers * multiplier),
            "calculation": (
                f"${ACTIVITIES_DAILY} per person per day × {days} days × {travelers} travelers "
                f"× {multiplier:g} destination multiplier"
            ),
            "details": details,
        }

    @staticmethod
    def _transportation(
        days: int, travelers: int, multiplier: float, itinerary: ItineraryData | None
    ) -> dict:
        if itinerary:
            per_person = itinerary.activity_cost("transport")
            return {
                "amount": round_half_up(per_person * travelers),
                "calculation": f"Planned transport: ${per_person:g} per person × {travelers} travelers",
                "details": ["Local transport, taxis, and transfers from the itinerary"],
                "source": "itinerary",
            }

        return {
            "amount": round_half_up(TRANSPORT_DAILY * days * math.sqrt(travelers) * multiplier),
            "calculation": (
                f"${TRANSPORT_DAILY} per day × {days} days × √{travelers} group efficiency "
                f"× {multiplier:g} destination multiplier"
            ),
            "details": [
                "Local public transportation and metro passes",
                "Occasional taxis and ride-sharing",
                "Airport transfers",
                "Inter-city transport if applicable",
            ],
        }

    @staticmethod
    def _miscellaneous(
        days: int,
        travelers: int,
        multiplier: float,
        itinerary: ItineraryData | None,
        subtotal: int,
    ) -> dict:
        if itinerary:
            shopping = itinerary.activity_cost("shopping") * travelers
            buffer = subtotal * ITINERARY_MISC_BUFFER
            return {
                "amount": round_half_up(shopping + buffer),
                "calculation": (
                    f"Planned shopping ${shopping:g} + {ITINERARY_MISC_BUFFER:.0%} buffer on ${subtotal}"
                ),
                "details": [
                    "Shopping from the itinerary",
                    "Tips, gratuities, and unexpected expenses",
                ],
                "source": "itinerary",
            }

        return {
            "amount": round_half_up(MISC_DAILY * days * travelers * multiplier),
            "calculation": (
                f"${MISC_DAILY} per person per day × {days} days × {travelers} travelers "
                f"× {multiplier:g} destination multiplier"
            ),
            "details": [
                "Souvenirs and shopping",
                "Tips and gratuities",
                "Communication (SIM cards, WiFi)",
                "Emergency buffer and unexpected expenses",
            ],
        }


budget_estimator = BudgetEstimator()
