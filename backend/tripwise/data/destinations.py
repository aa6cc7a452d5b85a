"""Destination cost tiers - country-name lookup and cost-of-living multipliers."""

from types import MappingProxyType

# Checked in this order; the first tier with a matching country wins.
COST_TIERS: tuple[tuple[str, float, tuple[str, ...]], ...] = (
    ("very_high", 1.5, ("monaco", "luxembourg", "iceland", "liechtenstein")),
    ("high", 1.3, (
        "japan", "switzerland", "norway", "denmark",
        "singapore", "australia", "new zealand", "uk",
    )),
    ("medium", 0.9, (
        "spain", "portugal", "greece", "czech republic",
        "poland", "hungary", "mexico", "turkey",
    )),
    ("low", 0.6, (
        "thailand", "vietnam", "india", "nepal",
        "cambodia", "laos", "guatemala", "bolivia",
    )),
)

NEUTRAL_TIER = "standard"
NEUTRAL_MULTIPLIER = 1.0

TIER_MULTIPLIERS = MappingProxyType(
    {name: multiplier for name, multiplier, _ in COST_TIERS} | {NEUTRAL_TIER: NEUTRAL_MULTIPLIER}
)


def get_destination_tier(destination: str) -> str:
    """Return the cost tier name for a destination.

    Matching is a case-insensitive substring test, so "uk" also matches
    "Ukraine" and "india" matches "Indiana".
    """
    dest = (destination or "").lower()
    for name, _, countries in COST_TIERS:
        if any(country in dest for country in countries):
            return name
    return NEUTRAL_TIER


def get_destination_multiplier(destination: str) -> float:
    """Cost-of-living multiplier for a destination. Unmatched places get 1.0."""
    return TIER_MULTIPLIERS[get_destination_tier(destination)]
