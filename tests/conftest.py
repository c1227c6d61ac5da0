from datetime import datetime, timedelta, timezone

import pytest

from leaderboard.models import Record, Settings


T0 = datetime(2024, 5, 1, 8, 0, 0, tzinfo=timezone.utc)


def rec(score, seconds=0):
    """Record at T0 + seconds"""
    return Record(score=score, time=T0 + timedelta(seconds=seconds))


@pytest.fixture
def settings(tmp_path):
    return Settings(
        store={"data": str(tmp_path / "history.json"), "secret": "s3cret", "write_back": 5},
        meta={"title": "Ghost Hunter", "year": 2024, "utc_offset": 8},
    )
