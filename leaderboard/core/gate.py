"""
Submission gate: authorisation and monotonicity checks before a record
is admitted to the store
"""
import hmac
import logging
from datetime import datetime

from leaderboard.core.store import RecordStore
from leaderboard.errors import Conflict, Unauthorized
from leaderboard.models import Record


logger = logging.getLogger(__name__)


class SubmissionGate:
    """Validates and admits score observations"""

    def __init__(self, store: RecordStore, secret: str):
        self.store = store
        self._secret = secret.encode("utf-8")

    def authorized(self, presented: str) -> bool:
        return hmac.compare_digest(presented.encode("utf-8"), self._secret)

    def submit(self, team: str, score: float, time: datetime, secret: str) -> Record:
        """
        Admit a score observation for a team

        Args:
            team: Team name
            score: Observed score
            time: Observation timestamp (normalised to UTC)
            secret: Shared secret presented by the client

        Returns:
            The stored Record

        Raises:
            Unauthorized: If the secret does not match
            Conflict: If the record ranks below the team's current best
        """
        if not self.authorized(secret):
            logger.warning(f"🔒 team {team} posted score {score}: unauthorized")
            raise Unauthorized("secret mismatch")

        record = Record(score=score, time=time)
        admission = self.store.admit(team, record)

        if not admission.accepted:
            best = admission.best
            logger.info(
                f"❌ team {team} posted score {score}: conflict "
                f"(best {best.score} at {best.time.isoformat()})"
            )
            raise Conflict("score is lower than current")

        logger.info(f"✅ team {team} posted score {score}: accepted")
        return record
