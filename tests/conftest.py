import pytest

from helpers import LESSONS, SCHEDULE
from lesson_calendar.config import DEFAULT_CONFIG
from lesson_calendar.io_layer.record_reader import RecordReader


@pytest.fixture
def cfg():
    return DEFAULT_CONFIG


@pytest.fixture
def reader(cfg):
    return RecordReader(cfg=cfg)


@pytest.fixture
def sample_data(reader):
    return reader.build_from_records(SCHEDULE, LESSONS)
