from models.brand import Platform, ProcessedBrand
from services.display_cycle import (
    DisplayCycle,
    DisplayState,
    DwellTimes,
    Event,
    EventKind,
    PhaseKind,
    build_phases,
    spotlight_brands,
    support_brands,
    transition,
)


def kinds(phases):
    return [(p.kind.value, p.index) for p in phases]


def test_phase_order():
    phases = build_phases(spotlights=2, grid_pages=2, has_best=True, has_worst=True, supports=1)
    assert kinds(phases) == [
        ("spotlight", 0),
        ("spotlight", 1),
        ("best", 0),
        ("grid", 0),
        ("grid", 1),
        ("worst", 0),
        ("support", 0),
    ]


def test_empty_screens_are_skipped_but_one_grid_page_remains():
    phases = build_phases(spotlights=0, grid_pages=0, has_best=False, has_worst=False, supports=0)
    assert kinds(phases) == [("grid", 0)]


def test_tick_and_next_advance_the_same_way_and_wrap():
    state = DisplayState(position=2)
    ticked = transition(state, Event(kind=EventKind.TICK), 3)
    nexted = transition(state, Event(kind=EventKind.NEXT), 3)
    assert ticked == nexted == DisplayState(position=0)


def test_prev_wraps_backwards():
    state = transition(DisplayState(), Event(kind=EventKind.PREV), 4)
    assert state.position == 3


def test_tick_is_ignored_while_paused():
    for pause in (EventKind.OVERLAY_OPEN, EventKind.SEARCH_ACTIVE, EventKind.INPUT_FOCUS):
        state = transition(DisplayState(position=1), Event(kind=pause), 5)
        assert not state.autoplay
        assert transition(state, Event(kind=EventKind.TICK), 5).position == 1


def test_manual_navigation_works_while_paused():
    paused = DisplayState(position=1, overlay_open=True)
    assert transition(paused, Event(kind=EventKind.NEXT), 5).position == 2
    assert transition(paused, Event(kind=EventKind.PREV), 5).position == 0
    assert transition(paused, Event(kind=EventKind.SELECT, index=4), 5).position == 4


def test_autoplay_resumes_only_when_every_pause_clears():
    state = DisplayState()
    state = transition(state, Event(kind=EventKind.OVERLAY_OPEN), 3)
    state = transition(state, Event(kind=EventKind.INPUT_FOCUS), 3)
    state = transition(state, Event(kind=EventKind.OVERLAY_CLOSE), 3)
    assert not state.autoplay
    state = transition(state, Event(kind=EventKind.INPUT_BLUR), 3)
    assert state.autoplay


def test_select_out_of_range_is_ignored():
    state = DisplayState(position=1)
    assert transition(state, Event(kind=EventKind.SELECT, index=9), 3) == state
    assert transition(state, Event(kind=EventKind.SELECT), 3) == state


def test_cycle_advances_after_dwell():
    phases = build_phases(spotlights=1, grid_pages=1, has_best=True, has_worst=False, supports=0)
    cycle = DisplayCycle(phases, DwellTimes(spotlight=6, grid=8, content=8))

    assert cycle.current.kind == PhaseKind.SPOTLIGHT
    assert cycle.current_dwell() == 6
    assert cycle.tick(5.9).kind == PhaseKind.SPOTLIGHT
    assert cycle.tick(6.0).kind == PhaseKind.BEST
    assert cycle.current_dwell() == 8
    assert cycle.tick(8).kind == PhaseKind.GRID
    assert cycle.tick(8).kind == PhaseKind.SPOTLIGHT


def _brand(brand_id, name, platform_count):
    platforms = tuple(list(Platform)[:platform_count])
    return ProcessedBrand(id=brand_id, name=name, picture="", platforms=platforms)


def test_spotlight_and_support_selection():
    brands = [
        _brand(1, "Alpha", 4),
        _brand(2, "Bravo", 1),
        _brand(3, "Charlie", 0),
        _brand(4, "Delta", 3),
    ]
    assert [b.id for b in spotlight_brands(brands, 2)] == [1, 4]
    assert [b.id for b in support_brands(brands, 5)] == [3, 2]
