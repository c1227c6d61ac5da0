"""
Persistence controller: load at startup, periodic and final flush

The history file is the source of truth. The leaderboard is always derived
from it at load time; the optional board export is written for consumers
only and never read back.
"""
import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import TypeAdapter

from leaderboard.core.store import RecordStore, StoreSnapshot
from leaderboard.models import Record, StoreConfig


logger = logging.getLogger(__name__)

_HISTORY_ADAPTER = TypeAdapter(Dict[str, List[Record]])


def write_atomic(path: Path, data: bytes) -> None:
    """
    Replace a file's content all-or-nothing

    Data goes to a temporary file in the same directory which is fsynced
    and then renamed over the target.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def encode_history(snapshot: StoreSnapshot) -> bytes:
    payload = {
        team: [record.model_dump(mode="json") for record in records]
        for team, records in snapshot.history.items()
    }
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


def encode_board(snapshot: StoreSnapshot) -> bytes:
    payload = {team: record.model_dump(mode="json") for team, record in snapshot.leaderboard.items()}
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


class PersistenceController:
    """Moves store state between memory and the data file"""

    def __init__(self, data_path: str, write_back: int = 5, board_path: Optional[str] = None):
        self.data_path = Path(data_path)
        self.board_path = Path(board_path) if board_path else None
        self.write_back = max(1, int(write_back))
        self.store: Optional[RecordStore] = None

    @classmethod
    def from_config(cls, config: StoreConfig) -> "PersistenceController":
        return cls(config.data, write_back=config.write_back, board_path=config.board)

    def load(self) -> RecordStore:
        """
        Load the history file into a new store

        A missing file yields an empty store. A corrupt file also yields an
        empty store, with a warning, rather than failing startup.
        """
        self.store = RecordStore.from_history(self._read_history())
        logger.info(f"✅ Loaded {len(self.store)} teams from {self.data_path}")
        return self.store

    def _read_history(self) -> Dict[str, List[Record]]:
        if not self.data_path.exists():
            logger.info(f"No data file at {self.data_path}, starting with an empty board")
            return {}
        try:
            raw = self.data_path.read_bytes()
            if not raw.strip():
                return {}
            return _HISTORY_ADAPTER.validate_json(raw)
        except (OSError, ValueError) as e:
            logger.warning(
                f"⚠️ Discarding unreadable data file {self.data_path} "
                f"({type(e).__name__}: {e}); starting with an empty board"
            )
            return {}

    def flush(self) -> bool:
        """
        Write a snapshot of the store to disk

        Returns:
            True on success. Failures are logged and reported as False.
        """
        if self.store is None:
            logger.error("❌ Flush requested before the store was loaded")
            return False

        snapshot = self.store.snapshot()
        targets = [(self.data_path, encode_history)]
        if self.board_path is not None:
            targets.append((self.board_path, encode_board))

        for path, encode in targets:
            try:
                write_atomic(path, encode(snapshot))
            except (OSError, TypeError, ValueError) as e:
                logger.error(f"❌ Failed to write back to {path}: {type(e).__name__}: {e}")
                return False

        logger.info(
            f"Wrote back {len(snapshot.history)} teams to {self.data_path} "
            f"(snapshot at {snapshot.taken_at.isoformat()})"
        )
        return True

    async def run_periodic(self, stop: asyncio.Event) -> None:
        """Flush every write_back seconds until stop is set"""
        logger.info(f"Periodic write-back every {self.write_back}s")
        while not stop.is_set():
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.write_back)
            except asyncio.TimeoutError:
                try:
                    await asyncio.to_thread(self.flush)
                except Exception:
                    logger.exception("❌ Periodic write-back failed, retrying next interval")
        logger.info("Periodic write-back stopped")
