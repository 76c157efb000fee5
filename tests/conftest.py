import datetime as dt

import pytest


@pytest.fixture
def now() -> dt.datetime:
    return dt.datetime(2025, 1, 15, 9, 30, tzinfo=dt.timezone.utc)


@pytest.fixture
def today(now: dt.datetime) -> dt.date:
    return now.date()
