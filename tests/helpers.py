from datetime import datetime

from lesson_calendar.domain.models import AvailabilityWindow, Lesson, TimeInterval


def iv(start: str, end: str) -> TimeInterval:
    return TimeInterval(start=datetime.fromisoformat(start), end=datetime.fromisoformat(end))


def window(start: str, end: str) -> AvailabilityWindow:
    return AvailabilityWindow(interval=iv(start, end))


def lesson(lesson_id, start: str, end: str, duration: int = 60, student=None) -> Lesson:
    return Lesson(id=lesson_id, duration=duration, interval=iv(start, end), student=student)


SCHEDULE = [
    {"startTime": "2025-08-23T22:30:00+00:00", "endTime": "2025-08-24T02:29:59+00:00"},
    {"startTime": "2025-08-25T01:30:00+00:00", "endTime": "2025-08-25T04:59:59+00:00"},
    {"startTime": "2025-08-25T11:00:00+00:00", "endTime": "2025-08-25T19:29:59+00:00"},
    {"startTime": "2025-08-27T02:30:00+00:00", "endTime": "2025-08-27T06:59:59+00:00"},
    {"startTime": "2025-08-28T23:00:00+00:00", "endTime": "2025-08-29T08:29:59+00:00"},
    {"startTime": "2025-08-30T22:30:00+00:00", "endTime": "2025-08-31T02:29:59+00:00"},
    {"startTime": "2025-09-01T01:30:00+00:00", "endTime": "2025-09-01T04:59:59+00:00"},
    {"startTime": "2025-09-01T11:00:00+00:00", "endTime": "2025-09-01T19:29:59+00:00"},
]

LESSONS = [
    {"id": 1, "duration": 60, "startTime": "2025-08-25T09:00:00", "endTime": "2025-08-25T10:00:00", "student": "Alex"},
    {"id": 2, "duration": 90, "startTime": "2025-08-27T03:00:00", "endTime": "2025-08-27T04:30:00", "student": "Sam"},
    {"id": 3, "duration": 90, "startTime": "2025-08-28T23:30:00", "endTime": "2025-08-29T01:00:00", "student": "John"},
]
