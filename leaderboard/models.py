"""
Data models for the leaderboard server
"""
import math
from datetime import datetime, timezone
from typing import Annotated, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _finite(value: float) -> float:
    if not math.isfinite(value):
        raise ValueError("score must be a finite number")
    return value


# Shared by stored records and request bodies
Score = Annotated[float, AfterValidator(_finite)]
UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]  # naive means UTC


class Record(BaseModel):
    """One score observation for a team (immutable)"""
    model_config = ConfigDict(frozen=True)

    score: Score
    time: UtcDatetime


class ScorePost(BaseModel):
    """Body of POST /"""
    team: str = Field(min_length=1)
    score: Score
    time: UtcDatetime
    secret: str


class BoardRow(BaseModel):
    """One rendered leaderboard line"""
    rank: int
    team: str
    score: float
    time: datetime


class ListenConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str = "0.0.0.0"
    port: int = Field(default=8000, ge=0, le=65535)


class StoreConfig(BaseModel):
    """Where state lives and how often it is written back"""
    model_config = ConfigDict(frozen=True)

    data: str                     # history snapshot file
    secret: str                   # shared submission secret
    write_back: int = 5           # seconds between periodic flushes
    board: Optional[str] = None   # optional leaderboard export file

    @field_validator("write_back")
    @classmethod
    def _at_least_one_second(cls, value: int) -> int:
        return max(1, value)


class MetaConfig(BaseModel):
    """Display settings for the rendered board"""
    model_config = ConfigDict(frozen=True)

    title: str = "Leaderboard"
    year: Optional[int] = None
    utc_offset: float = 0.0  # hours, used for HTML timestamps only


class Settings(BaseModel):
    """Process-wide configuration, loaded once at startup"""
    model_config = ConfigDict(frozen=True)

    listen: ListenConfig = ListenConfig()
    store: StoreConfig
    meta: MetaConfig = MetaConfig()


History = Dict[str, List[Record]]
Leaderboard = Dict[str, Record]
