"""Display router - screen sequence and cycle transitions for the TV wall."""

import logging
import math
from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from config import get_settings
from dependencies import get_cache, get_metricool
from models.base import CamelModel
from models.brand import ProcessedBrand
from services.brand_processor import load_brands
from services.cache import ResultCache
from services.content_performance import load_content_performance
from services.display_cycle import (
    DisplayCycle,
    DisplayState,
    DwellTimes,
    Event,
    EventKind,
    Phase,
    PhaseKind,
    build_phases,
    spotlight_brands,
    support_brands,
)
from services.metricool_client import MetricoolClient

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/display", tags=["display"])
settings = get_settings()


class PhaseView(CamelModel):
    kind: PhaseKind
    index: int
    dwell_seconds: float
    brand_id: Optional[int] = None


class SequenceResponse(CamelModel):
    phases: list[PhaseView]
    grid_page_size: int
    brand_count: int


class TransitionRequest(CamelModel):
    state: DisplayState = DisplayState()
    event: Event
    elapsed_seconds: Optional[float] = None  # tick only: time the phase has been up


class TransitionResponse(CamelModel):
    state: DisplayState
    autoplay: bool
    phase: PhaseView


def dwell_times() -> DwellTimes:
    return DwellTimes(
        spotlight=settings.spotlight_dwell_seconds,
        grid=settings.grid_dwell_seconds,
        content=settings.content_dwell_seconds,
    )


async def build_sequence(
    metricool: MetricoolClient, cache: ResultCache
) -> tuple[tuple[Phase, ...], list[ProcessedBrand], list[ProcessedBrand], int]:
    """Phases for the current brands and content, with the brands they show."""
    try:
        brands = await load_brands(metricool, cache)
    except Exception as e:
        logger.warning(f"Brand list unavailable for display sequence: {e}")
        brands = []

    performance = await load_content_performance(
        metricool,
        cache,
        display_size=settings.content_display_size,
        concurrency=settings.fetch_concurrency,
    )

    leads = spotlight_brands(brands, settings.spotlight_count)
    supports = support_brands(brands, settings.support_spotlight_count)
    phases = build_phases(
        spotlights=len(leads),
        grid_pages=math.ceil(len(brands) / settings.grid_page_size),
        has_best=bool(performance.best),
        has_worst=bool(performance.worst),
        supports=len(supports),
    )
    return phases, leads, supports, len(brands)


def phase_view(
    phase: Phase,
    dwell: DwellTimes,
    leads: list[ProcessedBrand],
    supports: list[ProcessedBrand],
) -> PhaseView:
    brand_id = None
    if phase.kind == PhaseKind.SPOTLIGHT:
        brand_id = leads[phase.index].id
    elif phase.kind == PhaseKind.SUPPORT:
        brand_id = supports[phase.index].id
    return PhaseView(
        kind=phase.kind,
        index=phase.index,
        dwell_seconds=dwell.for_phase(phase),
        brand_id=brand_id,
    )


@router.get("/sequence", response_model=SequenceResponse)
async def get_sequence(
    cache: Annotated[ResultCache, Depends(get_cache)],
    metricool: Annotated[MetricoolClient, Depends(get_metricool)],
):
    """One loop of screens for the current brands and content.

    Degrades to a single empty grid page when nothing can be fetched.
    """
    phases, leads, supports, brand_count = await build_sequence(metricool, cache)
    dwell = dwell_times()

    return SequenceResponse(
        phases=[phase_view(p, dwell, leads, supports) for p in phases],
        grid_page_size=settings.grid_page_size,
        brand_count=brand_count,
    )


@router.post("/transition", response_model=TransitionResponse)
async def apply_transition(
    body: TransitionRequest,
    cache: Annotated[ResultCache, Depends(get_cache)],
    metricool: Annotated[MetricoolClient, Depends(get_metricool)],
):
    """Apply one event to a display state over the current sequence.

    A ``tick`` with ``elapsedSeconds`` only advances once the current phase
    has been up for its dwell time.
    """
    phases, leads, supports, _ = await build_sequence(metricool, cache)
    dwell = dwell_times()
    cycle = DisplayCycle(phases, dwell, body.state)

    if body.event.kind == EventKind.TICK and body.elapsed_seconds is not None:
        phase = cycle.tick(body.elapsed_seconds)
    else:
        phase = cycle.dispatch(body.event)

    return TransitionResponse(
        state=cycle.state,
        autoplay=cycle.state.autoplay,
        phase=phase_view(phase, dwell, leads, supports),
    )
