"""
Tests for the submission gate
"""
import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import T0, rec
from leaderboard.core.gate import SubmissionGate
from leaderboard.core.store import RecordStore
from leaderboard.errors import Conflict, Unauthorized


@pytest.fixture
def gate():
    return SubmissionGate(RecordStore(), "s3cret")


def test_first_submission_accepted(gate):
    """Team with no history accepts its first submission"""
    record = gate.submit("red", 4.0, T0, "s3cret")
    assert record == rec(4.0, 0)
    assert gate.store.get("red") == rec(4.0, 0)


def test_wrong_secret_unauthorized(gate):
    """Secret mismatch is rejected before touching the store"""
    with pytest.raises(Unauthorized):
        gate.submit("red", 4.0, T0, "guess")
    assert gate.store.get("red") is None


def test_regression_conflict(gate):
    """Lower score than the current best is a conflict"""
    gate.submit("red", 10.0, T0, "s3cret")
    with pytest.raises(Conflict):
        gate.submit("red", 9.0, T0, "s3cret")
    assert gate.store.history_of("red") == [rec(10.0, 0)]


def test_tie_with_later_time_conflict(gate):
    """Equal score, later time loses"""
    gate.submit("red", 10.0, T0, "s3cret")
    with pytest.raises(Conflict):
        gate.submit("red", 10.0, rec(0, 60).time, "s3cret")
    assert gate.store.get("red") == rec(10.0, 0)


def test_improvement_accepted(gate):
    """Higher score replaces the best"""
    gate.submit("red", 10.0, T0, "s3cret")
    gate.submit("red", 12.0, rec(0, 60).time, "s3cret")
    assert gate.store.get("red") == rec(12.0, 60)


def test_teams_are_independent(gate):
    """A high score for one team does not block another"""
    gate.submit("red", 100.0, T0, "s3cret")
    gate.submit("blue", 1.0, T0, "s3cret")
    assert gate.store.get("blue") == rec(1.0, 0)


def test_outcomes_are_logged(gate, caplog):
    """Each outcome emits a log event with team and score"""
    with caplog.at_level(logging.INFO, logger="leaderboard.core.gate"):
        gate.submit("red", 10.0, T0, "s3cret")
        with pytest.raises(Conflict):
            gate.submit("red", 1.0, T0, "s3cret")
        with pytest.raises(Unauthorized):
            gate.submit("red", 1.0, T0, "nope")
    messages = [r.getMessage() for r in caplog.records]
    assert any("red" in m and "10.0" in m and "accepted" in m for m in messages)
    assert any("conflict" in m for m in messages)
    assert any("unauthorized" in m for m in messages)


def test_concurrent_increasing_submissions():
    """Concurrent increasing scores end with the highest on the board"""
    gate = SubmissionGate(RecordStore(), "s3cret")
    scores = [float(i) for i in range(1, 41)]

    def submit(score):
        try:
            gate.submit("red", score, T0, "s3cret")
            return True
        except Conflict:
            return False

    with ThreadPoolExecutor(max_workers=8) as executor:
        outcomes = list(executor.map(submit, scores))

    assert outcomes[-1] is True
    assert gate.store.get("red").score == max(scores)
    assert len(gate.store.history_of("red")) == sum(outcomes)
