"""
Tests for the ranking rule and best_of
"""
from conftest import rec
from leaderboard.core.ranking import best_of, rank_key, ranks_above, ranks_below


def test_higher_score_ranks_above():
    """Higher score wins regardless of time"""
    assert ranks_above(rec(11, 100), rec(10, 0))
    assert ranks_below(rec(10, 0), rec(11, 100))


def test_equal_score_earlier_time_ranks_above():
    """Equal score: the earlier submission ranks above the later one"""
    assert ranks_above(rec(10, 0), rec(10, 5))
    assert ranks_below(rec(10, 5), rec(10, 0))


def test_identical_records_are_neither_above_nor_below():
    """Same score and time are tied"""
    assert not ranks_above(rec(10, 0), rec(10, 0))
    assert not ranks_below(rec(10, 0), rec(10, 0))


def test_best_of_empty():
    """Empty history has no best"""
    assert best_of([]) is None


def test_best_of_picks_highest_score():
    """Best is the highest score in the history"""
    history = [rec(3, 0), rec(9, 1), rec(5, 2)]
    assert best_of(history) == rec(9, 1)


def test_best_of_tie_keeps_earliest():
    """A later equal score does not override the earlier one"""
    history = [rec(7, 0), rec(7, 10)]
    assert best_of(history) == rec(7, 0)


def test_rank_key_sorts_best_first():
    """Sorting by rank_key orders records best first"""
    records = [rec(1, 0), rec(5, 3), rec(5, 1), rec(2, 0)]
    assert sorted(records, key=rank_key) == [rec(5, 1), rec(5, 3), rec(2, 0), rec(1, 0)]
