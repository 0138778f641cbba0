from datetime import date, datetime

from helpers import lesson
from lesson_calendar.domain.blocks import project_lesson_blocks, select_block

AUG28 = date(2025, 8, 28)
AUG29 = date(2025, 8, 29)


def test_lesson_split_across_midnight():
    booked = lesson(3, "2025-08-28T23:30", "2025-08-29T01:00", duration=90)
    blocks = project_lesson_blocks([booked], [AUG28, AUG29])
    assert len(blocks) == 2
    first, second = blocks
    assert (first.day, first.day_index, first.start_minutes, first.duration_minutes) == (AUG28, 0, 1410, 30)
    assert (second.day, second.day_index, second.start_minutes, second.duration_minutes) == (AUG29, 1, 0, 60)
    assert first.overlap_end == datetime(2025, 8, 29, 0, 0)
    assert second.overlap_start == datetime(2025, 8, 29, 0, 0)


def test_lesson_within_one_day():
    booked = lesson(1, "2025-08-25T09:00", "2025-08-25T10:00")
    blocks = project_lesson_blocks([booked], [date(2025, 8, 24), date(2025, 8, 25)])
    assert len(blocks) == 1
    assert blocks[0].day_index == 1
    assert blocks[0].start_minutes == 540
    assert blocks[0].duration_minutes == 60


def test_only_visible_days_are_projected():
    booked = lesson(3, "2025-08-28T23:30", "2025-08-29T01:00")
    assert len(project_lesson_blocks([booked], [AUG29])) == 1
    assert project_lesson_blocks([booked], [date(2025, 9, 1)]) == []


def test_multi_day_lesson():
    booked = lesson(9, "2025-08-28T22:00", "2025-08-30T02:00")
    blocks = project_lesson_blocks([booked], [AUG28, AUG29, date(2025, 8, 30)])
    assert [b.duration_minutes for b in blocks] == [120, 1440, 120]
    assert sum(b.duration_minutes for b in blocks) == booked.interval.minutes


def test_fractional_minutes_are_kept():
    booked = lesson(4, "2025-08-25T10:00:00", "2025-08-25T10:29:30")
    (block,) = project_lesson_blocks([booked], [date(2025, 8, 25)])
    assert block.duration_minutes == 29.5


def test_duration_field_is_not_used_for_geometry():
    booked = lesson(5, "2025-08-25T09:00", "2025-08-25T09:30", duration=240)
    (block,) = project_lesson_blocks([booked], [date(2025, 8, 25)])
    assert block.duration_minutes == 30


def test_empty_lesson_has_no_block():
    booked = lesson(6, "2025-08-25T10:00", "2025-08-25T10:00")
    assert project_lesson_blocks([booked], [date(2025, 8, 25)]) == []


def test_projection_is_repeatable():
    lessons = [
        lesson(1, "2025-08-25T09:00", "2025-08-25T10:00"),
        lesson(3, "2025-08-28T23:30", "2025-08-29T01:00"),
    ]
    days = [date(2025, 8, 25), AUG28, AUG29]
    assert project_lesson_blocks(lessons, days) == project_lesson_blocks(lessons, days)


def test_select_block_carries_clamped_overlap():
    booked = lesson(3, "2025-08-28T23:30", "2025-08-29T01:00")
    blocks = project_lesson_blocks([booked], [AUG28, AUG29])
    event = select_block(blocks[0])
    assert event.lesson is booked
    assert event.overlap_start == datetime(2025, 8, 28, 23, 30)
    assert event.overlap_end == datetime(2025, 8, 29, 0, 0)
