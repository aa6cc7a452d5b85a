"""Rounding for displayed currency amounts."""


def round_half_up(value: float) -> int:
    """Round .5 away from zero, so 1199.5 -> 1200 and 0.5 -> 1.

    Python's round() would send halves to the even neighbour, which shifts
    category amounts and therefore totals.
    """
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
