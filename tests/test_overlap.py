from datetime import date, datetime

from helpers import lesson, window
from lesson_calendar.domain.models import CellState, LessonSelection, SlotSelection, TimeSlot
from lesson_calendar.domain.overlap import OverlapEngine
from lesson_calendar.domain.timegrid import TimeGrid

DAY = date(2025, 8, 25)


def make_engine(windows=(), lessons=()):
    return OverlapEngine.build(TimeGrid(), windows, lessons)


def test_occupied_takes_precedence_over_available():
    engine = make_engine(
        windows=[window("2025-08-25T08:00", "2025-08-25T12:00")],
        lessons=[lesson(1, "2025-08-25T09:00", "2025-08-25T10:00")],
    )
    assert engine.is_available(DAY, TimeSlot(9, 0))
    assert engine.cell_state(DAY, TimeSlot(9, 0)) is CellState.OCCUPIED
    assert engine.cell_state(DAY, TimeSlot(9, 30)) is CellState.OCCUPIED
    assert engine.cell_state(DAY, TimeSlot(10, 0)) is CellState.AVAILABLE
    assert engine.cell_state(DAY, TimeSlot(12, 0)) is CellState.EMPTY


def test_partial_overlap_marks_cell():
    engine = make_engine(windows=[window("2025-08-25T19:00", "2025-08-25T19:29:59")])
    assert engine.cell_state(DAY, TimeSlot(19, 0)) is CellState.AVAILABLE
    assert engine.cell_state(DAY, TimeSlot(19, 30)) is CellState.EMPTY


def test_first_lesson_in_input_order_wins():
    first = lesson("a", "2025-08-25T09:00", "2025-08-25T10:00")
    second = lesson("b", "2025-08-25T09:15", "2025-08-25T09:45")
    engine = make_engine(lessons=[first, second])
    assert engine.occupying_lesson(DAY, TimeSlot(9, 0)) is first
    engine = make_engine(lessons=[second, first])
    assert engine.occupying_lesson(DAY, TimeSlot(9, 0)) is second


def test_select_available_emits_slot_interval():
    engine = make_engine(windows=[window("2025-08-25T08:10", "2025-08-25T12:00")])
    event = engine.select(DAY, TimeSlot(8, 0))
    assert event == SlotSelection(start_time=datetime(2025, 8, 25, 8, 0), end_time=datetime(2025, 8, 25, 8, 30))


def test_select_occupied_emits_lesson():
    booked = lesson(3, "2025-08-28T23:30", "2025-08-29T01:00", duration=90, student="John")
    engine = make_engine(
        windows=[window("2025-08-28T23:00", "2025-08-29T08:30")],
        lessons=[booked],
    )
    event = engine.select(date(2025, 8, 29), TimeSlot(0, 30))
    assert isinstance(event, LessonSelection)
    assert event.lesson is booked
    assert event.overlap_start == datetime(2025, 8, 29, 0, 0)
    assert event.overlap_end == datetime(2025, 8, 29, 1, 0)


def test_select_empty_emits_nothing():
    assert make_engine().select(DAY, TimeSlot(9, 0)) is None


def test_inverted_records_are_ignored():
    engine = make_engine(
        windows=[window("2025-08-25T12:00", "2025-08-25T08:00")],
        lessons=[lesson(1, "2025-08-25T10:00", "2025-08-25T09:00")],
    )
    assert engine.cell_state(DAY, TimeSlot(9, 0)) is CellState.EMPTY


def test_empty_inputs_give_empty_grid():
    engine = make_engine()
    grid = TimeGrid()
    days = [DAY, date(2025, 8, 26)]
    cells = engine.cell_states(days, grid.slots())
    assert len(cells) == 48
    assert all(c is CellState.EMPTY for row in cells for c in row)
    assert all(engine.select(d, s) is None for d in days for s in grid.slots())


def test_cell_states_shape_is_slot_major():
    engine = make_engine(windows=[window("2025-08-26T00:00", "2025-08-26T01:00")])
    cells = engine.cell_states([DAY, date(2025, 8, 26)], [TimeSlot(0, 0), TimeSlot(0, 30), TimeSlot(1, 0)])
    assert cells == [
        [CellState.EMPTY, CellState.AVAILABLE],
        [CellState.EMPTY, CellState.AVAILABLE],
        [CellState.EMPTY, CellState.EMPTY],
    ]


def test_last_cell_running_past_midnight_is_occupied_by_next_day_lesson():
    # 45分刻みだと 23:45 のセルは翌 0:30 まで伸びる
    booked = lesson(1, "2025-08-26T00:00", "2025-08-26T00:15", duration=15)
    engine = OverlapEngine.build(TimeGrid(step_minutes=45), [], [booked])
    assert engine.cell_state(DAY, TimeSlot(23, 45)) is CellState.OCCUPIED
    event = engine.select(DAY, TimeSlot(23, 45))
    assert isinstance(event, LessonSelection)
    assert event.lesson is booked
    assert event.overlap_start == datetime(2025, 8, 26, 0, 0)
    assert event.overlap_end == datetime(2025, 8, 26, 0, 15)


def test_last_cell_lesson_crossing_midnight_is_cut_to_the_cell_day():
    booked = lesson(2, "2025-08-25T23:50", "2025-08-26T00:10", duration=20)
    engine = OverlapEngine.build(TimeGrid(step_minutes=45), [], [booked])
    event = engine.select(DAY, TimeSlot(23, 45))
    assert event.overlap_start == datetime(2025, 8, 25, 23, 50)
    assert event.overlap_end == datetime(2025, 8, 26, 0, 0)


def test_ninety_minute_cell_past_midnight():
    grid = TimeGrid(step_minutes=90)
    engine = OverlapEngine.build(grid, [window("2025-08-26T00:10", "2025-08-26T01:00")], [])
    assert grid.slots()[-1] == TimeSlot(23, 0)
    assert engine.cell_state(DAY, TimeSlot(23, 0)) is CellState.AVAILABLE
    event = engine.select(DAY, TimeSlot(23, 0))
    assert event == SlotSelection(start_time=datetime(2025, 8, 25, 23, 0), end_time=datetime(2025, 8, 26, 0, 30))
