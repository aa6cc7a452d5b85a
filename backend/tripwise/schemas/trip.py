import logging
import math
import re
from datetime import date

from pydantic import BaseModel, Field, field_validator

from tripwise.config import settings

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int_prefix(value) -> int | None:
    """Parse the leading integer of a text value ("1500 USD" -> 1500).

    Numbers pass through truncated; anything else yields None.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


class TripParameters(BaseModel):
    source: str = Field(min_length=1)
    destination: str = Field(min_length=1)
    start_date: date
    end_date: date
    budget: float = settings.default_budget
    travelers: int = 1
    interests: list[str] = []

    model_config = {"frozen": True}

    @field_validator("source", "destination")
    @classmethod
    def _strip_location(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("location must not be blank")
        return v

    @field_validator("budget", mode="before")
    @classmethod
    def _coerce_budget(cls, v):
        if isinstance(v, float) and math.isfinite(v) and v >= 0:
            return v
        parsed = parse_int_prefix(v)
        if parsed is None or parsed < 0:
            logger.debug(f"Unusable budget {v!r}, using default {settings.default_budget}")
            return settings.default_budget
        return parsed

    @field_validator("travelers", mode="before")
    @classmethod
    def _coerce_travelers(cls, v):
        parsed = parse_int_prefix(v)
        if parsed is None or parsed < 1:
            logger.debug(f"Unusable traveler count {v!r}, using 1")
            return 1
        return parsed

    @field_validator("interests", mode="before")
    @classmethod
    def _dedupe_interests(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        elif not isinstance(v, (list, tuple, set)):
            raise ValueError("interests must be a list or comma-separated string")
        seen: list[str] = []
        for tag in v:
            tag = str(tag).strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen

    @property
    def total_days(self) -> int:
        """Whole days between start and end, never less than one."""
        return max(1, (self.end_date - self.start_date).days)
