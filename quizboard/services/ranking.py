"""
Ranking service for the quiz leaderboard.

Answers two questions about a configuration's leaderboard:
- would this result be a new high score (asked before the nickname prompt)
- where does a stored score rank and how many scores compete with it

Ordering policy (shared with LeaderboardService through RankingUtility):
higher score first, then higher percentage, then the smaller id. No two
scores in a configuration ever share a rank number.
"""

import logging
from typing import Optional

from quizboard.constants import LeaderboardConstants, StorageConstants
from quizboard.data_models.leaderboard import GameConfiguration, HighScoreCheck, RankResult
from quizboard.services.base import BaseService
from quizboard.utils.leaderboard_exceptions import ScoreValidationError
from quizboard.utils.validators import validate_configuration, validate_result

logger = logging.getLogger(__name__)


class RankingService(BaseService):
    """Service for high-score detection and rank computation."""

    async def check_high_score(
        self,
        configuration: GameConfiguration,
        score: int,
        percentage: Optional[int] = None
    ) -> HighScoreCheck:
        """
        Compare a candidate result with the best stored score of its configuration.

        Read-only, so it is safe to call before the score is submitted and as
        often as needed. Only a strictly higher score counts; matching the
        current best does not.
        """
        validate_configuration(configuration)
        validate_result(configuration, score, percentage)

        best = await self.score_store.best_in_configuration(configuration)
        if best is None:
            logger.debug(f"No scores yet for {configuration}, {score} is a high score")
            return HighScoreCheck(
                is_high_score=True,
                previous_best=LeaderboardConstants.EMPTY_PREVIOUS_BEST
            )

        return HighScoreCheck(
            is_high_score=score > best.score,
            previous_best=best.score
        )

    async def compute_rank(self, score_id: int) -> Optional[RankResult]:
        """
        Rank of a stored score within its configuration, or None if the id is unknown.

        rank is 1 + the number of scores ranked strictly ahead, total counts the
        whole configuration including this score. Both come from one snapshot.
        """
        if not isinstance(score_id, int) or isinstance(score_id, bool):
            raise ScoreValidationError("score_id", "score id must be a whole number")
        if score_id < 1 or score_id > StorageConstants.MAX_INTEGER:
            return None

        async with self.snapshot("compute_rank") as session:
            record = await self.score_store.get_by_id(score_id, session=session)
            if record is None:
                logger.info(f"Rank requested for unknown score id {score_id}")
                return None

            ahead = await self.score_store.count_better_than(record, session=session)
            total = await self.score_store.count_in_configuration(record.configuration, session=session)

        rank = ahead + 1
        logger.debug(f"Score {score_id} ranks {rank} of {total}")
        return RankResult(rank=rank, total=total)
