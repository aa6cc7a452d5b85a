from tripwise.data.destinations import get_destination_multiplier, get_destination_tier


def test_tier_multipliers():
    assert get_destination_multiplier("Monaco") == 1.5
    assert get_destination_multiplier("Tokyo, Japan") == 1.3
    assert get_destination_multiplier("Lisbon, Portugal") == 0.9
    assert get_destination_multiplier("Thailand") == 0.6


def test_unmatched_destination_is_neutral():
    assert get_destination_multiplier("Generic Place") == 1.0
    assert get_destination_tier("Generic Place") == "standard"
    assert get_destination_multiplier("") == 1.0


def test_matching_is_case_insensitive_substring():
    assert get_destination_multiplier("BANGKOK THAILAND") == 0.6
    # known fragility: substring match catches unrelated names
    assert get_destination_tier("Ukraine") == "high"
    assert get_destination_tier("Indianapolis, Indiana") == "low"


def test_first_matching_tier_wins():
    # "iceland" (very high) is checked before "india" (low)
    assert get_destination_multiplier("Iceland and India") == 1.5
