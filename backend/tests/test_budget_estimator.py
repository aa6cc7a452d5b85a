import math
from datetime import date, timedelta

import pytest

from tripwise.schemas.budget import CATEGORIES
from tripwise.schemas.flight import FlightPriceSelection
from tripwise.schemas.itinerary import ItineraryData
from tripwise.schemas.trip import TripParameters
from tripwise.services.budget_estimator import budget_estimator


def _trip(destination="Thailand", days=5, travelers=2, budget=1000, **extra) -> TripParameters:
    start = date(2025, 6, 1)
    return TripParameters(
        source="New York",
        destination=destination,
        start_date=start,
        end_date=start + timedelta(days=days),
        budget=budget,
        travelers=travelers,
        **extra,
    )


def _amounts(analysis) -> dict[str, int]:
    return {name: est.amount for name, est in analysis.breakdown.items()}


def test_thailand_scenario():
    analysis = budget_estimator.estimate(_trip())

    assert analysis.summary.destination_multiplier == 0.6
    assert _amounts(analysis) == {
        "flights": 720,
        "accommodation": 361,
        "food": 270,
        "activities": 210,
        "transportation": 106,
        "miscellaneous": 120,
    }
    assert analysis.total_estimated == 1787
    assert analysis.variance == 787
    assert analysis.variance_percentage == pytest.approx(78.7)
    assert analysis.budget_status == "over"


def test_generic_destination_uses_neutral_multiplier():
    analysis = budget_estimator.estimate(_trip(destination="Generic Place", days=3, travelers=1))
    assert analysis.summary.destination_multiplier == 1.0
    assert _amounts(analysis) == {
        "flights": 600,
        "accommodation": 255,
        "food": 135,
        "activities": 105,
        "transportation": 75,
        "miscellaneous": 60,
    }


def test_long_trip_flight_factor():
    short = budget_estimator.estimate(_trip(destination="Generic Place", days=7, travelers=1))
    long = budget_estimator.estimate(_trip(destination="Generic Place", days=8, travelers=1))
    assert short.breakdown.flights.amount == 600
    assert long.breakdown.flights.amount == 720
    assert "long-stay factor" in long.breakdown.flights.calculation


def test_round_then_sum():
    for days in range(1, 20):
        for travelers in range(1, 7):
            analysis = budget_estimator.estimate(_trip(destination="Japan", days=days, travelers=travelers))
            amounts = _amounts(analysis)
            assert all(isinstance(a, int) and a >= 0 for a in amounts.values())
            assert analysis.total_estimated == sum(amounts.values())


def test_monotonic_in_travelers_and_days():
    for dest in ("Thailand", "Spain", "Norway", "Monaco", "Generic Place"):
        totals_t = [budget_estimator.estimate(_trip(destination=dest, travelers=t)).total_estimated for t in range(1, 9)]
        assert totals_t == sorted(totals_t)
        totals_d = [budget_estimator.estimate(_trip(destination=dest, days=d)).total_estimated for d in range(1, 21)]
        assert totals_d == sorted(totals_d)


def test_estimate_is_deterministic():
    trip = _trip(destination="Vietnam", days=9, travelers=3, interests=["food"])
    assert budget_estimator.estimate(trip) == budget_estimator.estimate(trip)


@pytest.mark.parametrize(
    "total, budget, expected",
    [
        (1050, 1000, "on-track"),
        (1051, 1000, "over"),
        (950, 1000, "on-track"),
        (949, 1000, "under"),
        (1000, 1000, "on-track"),
    ],
)
def test_status_boundaries(total, budget, expected):
    assert budget_estimator.classify(total, budget) == expected


def test_status_from_estimate_at_band_edge():
    # Generic Place, 1 day, 1 traveler -> 600 + 85 + 45 + 35 + 25 + 20 = 810
    edge = _trip(destination="Generic Place", days=1, travelers=1, budget=810)
    assert budget_estimator.estimate(edge).total_estimated == 810
    assert budget_estimator.estimate(edge).budget_status == "on-track"

    under = _trip(destination="Generic Place", days=1, travelers=1, budget=5000)
    assert budget_estimator.estimate(under).budget_status == "under"


def test_zero_budget_is_flagged_not_raised():
    analysis = budget_estimator.estimate(_trip(budget=0))
    assert analysis.original_budget == 0
    assert analysis.variance == analysis.total_estimated
    assert analysis.variance_percentage is None
    assert analysis.budget_status == "over"


def test_cost_saving_tips_use_fixed_rates():
    analysis = budget_estimator.estimate(_trip())
    tips = {t.category: t.potential_savings for t in analysis.cost_saving_tips}
    assert tips == {
        "Flights": 108,         # 720 * 0.15
        "Accommodation": 90,    # 361 * 0.25 = 90.25
        "Food": 81,             # 270 * 0.30
        "Transportation": 21,   # 106 * 0.20 = 21.2
    }


def test_recommendations_order():
    over = budget_estimator.estimate(_trip()).recommendations
    assert len(over) == 5
    assert over[0].startswith("Consider booking flights earlier")
    assert over[-2:] == [
        "Book accommodation and major activities in advance for better rates",
        "Consider travel insurance to protect your investment",
    ]

    on_track = budget_estimator.estimate(
        _trip(destination="Generic Place", days=1, travelers=1, budget=810)
    ).recommendations
    assert on_track[0] == "Your budget looks well-balanced for this itinerary"
    assert len(on_track) == 4


def test_risk_factors():
    cheap = budget_estimator.estimate(_trip()).risk_factors
    assert [r.factor for r in cheap] == ["Currency fluctuation", "Seasonal pricing"]

    pricey = budget_estimator.estimate(_trip(destination="Switzerland", days=15)).risk_factors
    assert [r.factor for r in pricey] == [
        "High-cost destination",
        "Extended trip duration",
        "Currency fluctuation",
        "Seasonal pricing",
    ]
    assert pricey[0].impact == "high"

    # 0.9 is not above the 1.2 threshold, 14 days is not above 14
    medium = budget_estimator.estimate(_trip(destination="Spain", days=14)).risk_factors
    assert len(medium) == 2


def test_flight_prices_override_formula():
    prices = FlightPriceSelection(outbound=310.5, return_fare=289.25)
    analysis = budget_estimator.estimate(_trip(), flight_prices=prices)
    assert analysis.breakdown.flights.amount == 1200  # (310.5 + 289.25) * 2 = 1199.5
    assert analysis.breakdown.flights.source == "flights"
    assert analysis.breakdown.food.amount == 270
    assert analysis.total_estimated == sum(_amounts(analysis).values())


def test_itinerary_overrides_categories():
    itinerary = ItineraryData(days=[
        {
            "day": 1,
            "accommodation": {"name": "Riverside Inn", "type": "hotel", "price_per_night": 40},
            "meals": [
                {"type": "breakfast", "name": "Cafe", "cost": 5},
                {"type": "dinner", "name": "Night market", "cost": 10},
            ],
            "activities": [
                {"title": "Grand Palace", "estimated_cost": 15, "category": "sightseeing"},
                {"title": "Cooking class", "estimated_cost": 30, "category": "activity"},
                {"title": "Tuk-tuk", "estimated_cost": 4, "category": "transport"},
                {"title": "Silk scarf", "estimated_cost": 12, "category": "shopping"},
            ],
        },
        {
            "day": 2,
            "accommodation": {"name": "Riverside Inn", "type": "hotel", "price_per_night": 40},
            "meals": [{"type": "lunch", "name": "Street food", "cost": 3}],
            "activities": [{"title": "Skytrain", "estimated_cost": 2, "category": "transport"}],
        },
    ])
    analysis = budget_estimator.estimate(_trip(), itinerary=itinerary)
    amounts = _amounts(analysis)

    assert amounts["flights"] == 720
    assert amounts["accommodation"] == 80
    assert amounts["food"] == 36            # 18 * 2 travelers
    assert amounts["activities"] == 90      # 45 * 2
    assert amounts["transportation"] == 12  # 6 * 2
    # 12 * 2 shopping + 10% of (720 + 80 + 36 + 90 + 12)
    assert amounts["miscellaneous"] == round(24 + 93.8)
    assert analysis.breakdown.miscellaneous.source == "itinerary"
    assert analysis.total_estimated == sum(amounts.values())


def test_itinerary_without_accommodation_keeps_formula():
    itinerary = ItineraryData(days=[{"day": 1, "meals": [{"type": "lunch", "name": "Deli", "cost": 8}]}])
    analysis = budget_estimator.estimate(_trip(), itinerary=itinerary)
    assert analysis.breakdown.accommodation.amount == 361
    assert analysis.breakdown.accommodation.source == "estimate"
    assert analysis.breakdown.food.amount == 16


def test_empty_itinerary_is_ignored():
    plain = budget_estimator.estimate(_trip())
    assert budget_estimator.estimate(_trip(), itinerary=ItineraryData()) == plain


def test_summary_and_percentages():
    analysis = budget_estimator.estimate(_trip())
    summary = analysis.summary
    assert summary.total_days == 5
    assert summary.travelers == 2
    assert summary.cost_per_person == 894   # 1787 / 2 = 893.5
    assert summary.average_daily_cost == 357
    assert summary.highest_category == "flights"
    assert summary.lowest_category == "transportation"
    total_pct = sum(est.percentage for _, est in analysis.breakdown.items())
    assert math.isclose(total_pct, 100, abs_tol=0.5)


def test_interests_only_change_details():
    plain = budget_estimator.estimate(_trip())
    tagged = budget_estimator.estimate(_trip(interests=["culture", "food"]))
    assert plain.total_estimated == tagged.total_estimated
    assert "Tailored to: culture, food" in tagged.breakdown.activities.details


def test_breakdown_order():
    analysis = budget_estimator.estimate(_trip())
    assert [name for name, _ in analysis.breakdown.items()] == list(CATEGORIES)


def test_summary_currency_stays_base_currency_with_foreign_fares():
    prices = FlightPriceSelection(outbound=300, return_fare=300, currency="EUR")
    analysis = budget_estimator.estimate(_trip(), flight_prices=prices)
    assert analysis.summary.currency == "USD"
    assert "EUR" in analysis.breakdown.flights.calculation
