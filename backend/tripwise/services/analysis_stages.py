"""Analysis stages - paced progress reporting around a budget estimate."""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from tripwise.config import settings
from tripwise.schemas.budget import BudgetAnalysis
from tripwise.schemas.flight import FlightPriceSelection
from tripwise.schemas.itinerary import ItineraryData
from tripwise.schemas.trip import TripParameters
from tripwise.services.budget_estimator import budget_estimator

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, float], Awaitable[None] | None]


@dataclass(frozen=True)
class AnalysisStage:
    name: str
    message: str
    duration_ms: int


ANALYSIS_STAGES: tuple[AnalysisStage, ...] = (
    AnalysisStage("initializing", "Initializing budget analysis engine...", 1000),
    AnalysisStage("flights", "Analyzing flight costs and pricing trends...", 2000),
    AnalysisStage("accommodation", "Evaluating accommodation options and rates...", 1800),
    AnalysisStage("food", "Calculating dining and meal expenses...", 1500),
    AnalysisStage("activities", "Assessing activity and attraction costs...", 1700),
    AnalysisStage("transportation", "Computing local transportation expenses...", 1200),
    AnalysisStage("miscellaneous", "Factoring in miscellaneous and unexpected costs...", 1000),
    AnalysisStage("compiling", "Compiling comprehensive budget report...", 1300),
)


async def run_stages(
    on_progress: ProgressCallback | None = None,
    delay_scale: float | None = None,
    stages: tuple[AnalysisStage, ...] = ANALYSIS_STAGES,
) -> float:
    """Step through the stages, reporting (stage name, percent complete).

    Progress is reported when a stage starts and the delay follows, so the
    last report is 100.0. Returns the final progress value.
    """
    scale = settings.analysis_stage_delay_scale if delay_scale is None else delay_scale
    progress = 0.0
    for i, stage in enumerate(stages):
        progress = (i + 1) / len(stages) * 100
        if on_progress is not None:
            result = on_progress(stage.name, progress)
            if inspect.isawaitable(result):
                await result
        logger.debug(f"Stage {stage.name}: {progress:.1f}%")
        if scale > 0:
            await asyncio.sleep(stage.duration_ms / 1000 * scale)
    return progress


async def analyze_trip(
    trip: TripParameters,
    itinerary: ItineraryData | None = None,
    flight_prices: FlightPriceSelection | None = None,
    on_progress: ProgressCallback | None = None,
    delay_scale: float | None = None,
) -> BudgetAnalysis:
    """Run the paced stages, then the estimate. Pacing never changes the result."""
    await run_stages(on_progress, delay_scale)
    return budget_estimator.estimate(trip, itinerary=itinerary, flight_prices=flight_prices)
