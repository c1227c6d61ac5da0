"""
Ranking rule for score records

A record ranks above another when its score is higher. On equal scores the
EARLIER submission ranks above the later one, so a later equal score never
displaces the record already on the board.
"""
from datetime import datetime
from typing import Iterable, Optional, Tuple

from leaderboard.models import Record


def rank_key(record: Record) -> Tuple[float, datetime]:
    """Sort key, best record first when sorted ascending"""
    return (-record.score, record.time)


def ranks_above(a: Record, b: Record) -> bool:
    """True if a is strictly better than b"""
    return rank_key(a) < rank_key(b)


def ranks_below(a: Record, b: Record) -> bool:
    """True if a is strictly worse than b"""
    return rank_key(a) > rank_key(b)


def best_of(history: Iterable[Record]) -> Optional[Record]:
    """
    Highest-ranked record in a team history

    Args:
        history: Records in arrival order

    Returns:
        The best record, or None if history is empty. Among records with an
        identical (score, time) the latest appended one is returned, matching
        what RecordStore.append leaves on the board.
    """
    best = None
    for record in history:
        if best is None or not ranks_below(record, best):
            best = record
    return best
