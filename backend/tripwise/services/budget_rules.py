"""Budget rules - recommendations, cost-saving tips and risk factors."""

from tripwise.schemas.budget import BudgetBreakdown, CostSavingTip, RiskFactor
from tripwise.services.rounding import round_half_up

# (category, tip, discount rate)
SAVING_TIPS: tuple[tuple[str, str, float], ...] = (
    ("flights", "Book 2-3 months in advance and consider nearby airports", 0.15),
    ("accommodation", "Stay in local guesthouses or use vacation rental platforms", 0.25),
    ("food", "Eat at local markets and cook some meals if possible", 0.30),
    ("transportation", "Use public transport and walk when possible", 0.20),
)

HIGH_COST_MULTIPLIER = 1.2
EXTENDED_TRIP_DAYS = 14

STATUS_RECOMMENDATIONS: dict[str, tuple[str, ...]] = {
    "over": (
        "Consider booking flights earlier or being flexible with travel dates to reduce costs",
        "Look into alternative accommodation options like hostels or vacation rentals",
        "Plan some free activities like hiking, beaches, or free museum days",
    ),
    "under": (
        "You have room in your budget for some premium experiences or upgrades",
        "Consider extending your trip or adding day trips to nearby destinations",
        "Allocate extra budget for unique local experiences and cultural activities",
    ),
    "on-track": (
        "Your budget looks well-balanced for this itinerary",
        "Keep a small emergency fund for unexpected opportunities",
    ),
}

GENERAL_RECOMMENDATIONS: tuple[str, ...] = (
    "Book accommodation and major activities in advance for better rates",
    "Consider travel insurance to protect your investment",
)


def generate_recommendations(status: str) -> list[str]:
    return [*STATUS_RECOMMENDATIONS[status], *GENERAL_RECOMMENDATIONS]


def generate_cost_saving_tips(breakdown: BudgetBreakdown) -> list[CostSavingTip]:
    return [
        CostSavingTip(
            category=category.capitalize(),
            tip=tip,
            potential_savings=round_half_up(getattr(breakdown, category).amount * rate),
        )
        for category, tip, rate in SAVING_TIPS
    ]


def generate_risk_factors(total_days: int, multiplier: float) -> list[RiskFactor]:
    factors: list[RiskFactor] = []

    if multiplier > HIGH_COST_MULTIPLIER:
        factors.append(RiskFactor(
            factor="High-cost destination",
            impact="high",
            description="Prices may be 20-50% higher than estimated due to expensive local costs",
        ))

    if total_days > EXTENDED_TRIP_DAYS:
        factors.append(RiskFactor(
            factor="Extended trip duration",
            impact="medium",
            description="Longer trips tend to have higher daily expenses due to fatigue and convenience choices",
        ))

    factors.append(RiskFactor(
        factor="Currency fluctuation",
        impact="medium",
        description="Exchange rates may impact your actual spending power",
    ))
    factors.append(RiskFactor(
        factor="Seasonal pricing",
        impact="low",
        description="Peak tourist season may increase accommodation and activity costs",
    ))

    return factors
