"""
In-memory record store: per-team history plus the derived leaderboard

History and leaderboard are guarded together by a single lock. Every
mutation appends to the history and refreshes the board entry inside one
critical section, so readers never see one without the other.
"""
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Mapping, NamedTuple, Optional, Sequence

from leaderboard.core.ranking import best_of, ranks_below
from leaderboard.models import History, Leaderboard, Record


class Admission(NamedTuple):
    """Outcome of RecordStore.admit"""
    accepted: bool
    best: Optional[Record]  # team's best after the call


@dataclass(frozen=True)
class StoreSnapshot:
    """Point-in-time copy of history and leaderboard"""
    history: History
    leaderboard: Leaderboard
    taken_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class RecordStore:
    """Thread-safe store of team histories and best records"""

    def __init__(self):
        self._lock = threading.Lock()
        self._history: History = {}
        self._board: Leaderboard = {}

    @classmethod
    def from_history(cls, history: Mapping[str, Sequence[Record]]) -> "RecordStore":
        """Build a store whose leaderboard is derived from the given history"""
        store = cls()
        for team, records in history.items():
            if not records:
                continue
            store._history[team] = list(records)
            store._board[team] = best_of(records)
        return store

    def _append_locked(self, team: str, record: Record) -> Record:
        self._history.setdefault(team, []).append(record)
        current = self._board.get(team)
        if current is None or not ranks_below(record, current):
            self._board[team] = record
            return record
        return current

    def append(self, team: str, record: Record) -> Record:
        """
        Append a record unconditionally

        The board entry is replaced when the record ranks at or above the
        current best. Returns the team's best after the append.
        """
        with self._lock:
            return self._append_locked(team, record)

    def admit(self, team: str, record: Record) -> Admission:
        """
        Append a record unless it ranks below the team's current best

        The check and the append run in the same critical section, so two
        concurrent submissions for one team are decided against the state
        each of them actually observes.
        """
        with self._lock:
            current = self._board.get(team)
            if current is not None and ranks_below(record, current):
                return Admission(accepted=False, best=current)
            return Admission(accepted=True, best=self._append_locked(team, record))

    def get(self, team: str) -> Optional[Record]:
        """Current best record for a team, or None"""
        with self._lock:
            return self._board.get(team)

    def history_of(self, team: str) -> List[Record]:
        with self._lock:
            return list(self._history.get(team, ()))

    def teams(self) -> List[str]:
        with self._lock:
            return list(self._history)

    def snapshot(self) -> StoreSnapshot:
        """
        Consistent copy of the whole store

        Records are immutable, so copying the containers is a deep copy.
        """
        with self._lock:
            history = {team: list(records) for team, records in self._history.items()}
            board: Dict[str, Record] = dict(self._board)
        return StoreSnapshot(history=history, leaderboard=board)

    def __len__(self) -> int:
        with self._lock:
            return len(self._history)
