"""TV display cycle as an explicit state machine.

The dashboard loops through brand spotlights, the best-content screen, the
client grid pages, the worst-content screen and the support spotlights. Each
phase stays up for its dwell time, then a ``tick`` advances it. Manual
``next``/``prev``/``select`` always work; ``tick`` is ignored while a detail
overlay is open, a search filter is active or the search box has focus.
"""

import enum
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from models.base import CamelModel
from models.brand import BrandStatus, ProcessedBrand
from services.estimations import brand_status


class PhaseKind(str, enum.Enum):
    SPOTLIGHT = "spotlight"
    BEST = "best"
    GRID = "grid"
    WORST = "worst"
    SUPPORT = "support"


class Phase(CamelModel):
    kind: PhaseKind
    index: int = 0


class EventKind(str, enum.Enum):
    TICK = "tick"
    NEXT = "next"
    PREV = "prev"
    SELECT = "select"
    OVERLAY_OPEN = "overlay_open"
    OVERLAY_CLOSE = "overlay_close"
    SEARCH_ACTIVE = "search_active"
    SEARCH_CLEARED = "search_cleared"
    INPUT_FOCUS = "input_focus"
    INPUT_BLUR = "input_blur"


class Event(CamelModel):
    kind: EventKind
    index: Optional[int] = None  # select only


class DisplayState(CamelModel):
    position: int = 0
    overlay_open: bool = False
    search_active: bool = False
    input_focused: bool = False

    @property
    def autoplay(self) -> bool:
        return not (self.overlay_open or self.search_active or self.input_focused)


@dataclass(frozen=True)
class DwellTimes:
    spotlight: float = 6.0
    grid: float = 8.0
    content: float = 8.0

    def for_phase(self, phase: Phase) -> float:
        if phase.kind in (PhaseKind.SPOTLIGHT, PhaseKind.SUPPORT):
            return self.spotlight
        if phase.kind == PhaseKind.GRID:
            return self.grid
        return self.content


def build_phases(
    spotlights: int,
    grid_pages: int,
    has_best: bool,
    has_worst: bool,
    supports: int,
) -> tuple[Phase, ...]:
    """Phase order for one loop. Empty content screens are skipped.

    There is always at least one grid page so an empty dashboard still has a
    screen to show.
    """
    phases = [Phase(kind=PhaseKind.SPOTLIGHT, index=i) for i in range(spotlights)]
    if has_best:
        phases.append(Phase(kind=PhaseKind.BEST))
    phases.extend(Phase(kind=PhaseKind.GRID, index=i) for i in range(max(grid_pages, 1)))
    if has_worst:
        phases.append(Phase(kind=PhaseKind.WORST))
    phases.extend(Phase(kind=PhaseKind.SUPPORT, index=i) for i in range(supports))
    return tuple(phases)


def _step(state: DisplayState, offset: int, phase_count: int) -> DisplayState:
    if phase_count <= 0:
        return state.model_copy(update={"position": 0})
    return state.model_copy(update={"position": (state.position + offset) % phase_count})


def _on_tick(state: DisplayState, event: Event, phase_count: int) -> DisplayState:
    if not state.autoplay:
        return state
    return _step(state, 1, phase_count)


def _on_next(state: DisplayState, event: Event, phase_count: int) -> DisplayState:
    return _step(state, 1, phase_count)


def _on_prev(state: DisplayState, event: Event, phase_count: int) -> DisplayState:
    return _step(state, -1, phase_count)


def _on_select(state: DisplayState, event: Event, phase_count: int) -> DisplayState:
    if event.index is None or not 0 <= event.index < phase_count:
        return state
    return state.model_copy(update={"position": event.index})


def _set_flag(field: str, value: bool) -> Callable[[DisplayState, Event, int], DisplayState]:
    def handler(state: DisplayState, event: Event, phase_count: int) -> DisplayState:
        return state.model_copy(update={field: value})
    return handler


TRANSITIONS: dict[EventKind, Callable[[DisplayState, Event, int], DisplayState]] = {
    EventKind.TICK: _on_tick,
    EventKind.NEXT: _on_next,
    EventKind.PREV: _on_prev,
    EventKind.SELECT: _on_select,
    EventKind.OVERLAY_OPEN: _set_flag("overlay_open", True),
    EventKind.OVERLAY_CLOSE: _set_flag("overlay_open", False),
    EventKind.SEARCH_ACTIVE: _set_flag("search_active", True),
    EventKind.SEARCH_CLEARED: _set_flag("search_active", False),
    EventKind.INPUT_FOCUS: _set_flag("input_focused", True),
    EventKind.INPUT_BLUR: _set_flag("input_focused", False),
}


def transition(state: DisplayState, event: Event, phase_count: int) -> DisplayState:
    """Apply one event; returns a new state."""
    return TRANSITIONS[event.kind](state, event, phase_count)


class DisplayCycle:
    """A phase list plus the current state."""

    def __init__(
        self,
        phases: tuple[Phase, ...],
        dwell: Optional[DwellTimes] = None,
        state: Optional[DisplayState] = None,
    ):
        self.phases = phases
        self.dwell = dwell or DwellTimes()
        self.state = state or DisplayState()

    @property
    def current(self) -> Phase:
        return self.phases[self.state.position % len(self.phases)]

    def current_dwell(self) -> float:
        return self.dwell.for_phase(self.current)

    def dispatch(self, event: Event) -> Phase:
        self.state = transition(self.state, event, len(self.phases))
        return self.current

    def tick(self, elapsed_seconds: float) -> Phase:
        """Advance if the current phase has been up for its dwell time."""
        if elapsed_seconds >= self.current_dwell():
            return self.dispatch(Event(kind=EventKind.TICK))
        return self.current


def spotlight_brands(brands: Sequence[ProcessedBrand], count: int) -> list[ProcessedBrand]:
    """Most-connected brands first, ties by name."""
    ranked = sorted(brands, key=lambda b: (-len(b.platforms), b.name.casefold()))
    return ranked[:count]


def support_brands(brands: Sequence[ProcessedBrand], count: int) -> list[ProcessedBrand]:
    """Brands still setting up or growing, least connected first."""
    candidates = [
        b for b in brands if brand_status(len(b.platforms)) != BrandStatus.ACTIVE
    ]
    ranked = sorted(candidates, key=lambda b: (len(b.platforms), b.name.casefold()))
    return ranked[:count]
