"""
Score Operations - the calls the quiz UI makes into the leaderboard core.

Each public method takes plain values, runs the matching service and returns
a result object that says explicitly whether it worked. Leaderboard failures
(bad input, unreachable store) never escape as exceptions: a missed
leaderboard write must not stop a child from playing again.

Calls:
- submit_score: store a finished game
- check_high_score: would this result beat the configuration's best
- get_scoped_leaderboard / get_global_leaderboard: top-N views
- get_user_rank: rank and competitor count for a stored score
"""

import logging
from typing import Optional

from quizboard.constants import LeaderboardConstants
from quizboard.data_models.leaderboard import (
    GameConfiguration, SubmitScoreResult, HighScoreResult,
    UserRankResult, LeaderboardResult
)
from quizboard.utils.leaderboard_exceptions import LeaderboardException
from quizboard.utils.validators import build_new_score

logger = logging.getLogger(__name__)


class ScoreOperations:
    """Transport-agnostic entry points for the game UI."""

    def __init__(self, score_store, ranking_service, leaderboard_service):
        self.score_store = score_store
        self.ranking_service = ranking_service
        self.leaderboard_service = leaderboard_service

    async def submit_score(
        self,
        nickname: str,
        operation: str,
        number_used: int,
        rounds: int,
        timer_duration: int,
        difficulty: str,
        score: int,
        percentage: Optional[int] = None
    ) -> SubmitScoreResult:
        """Validate and store one finished game."""
        configuration = GameConfiguration(operation, number_used, rounds, timer_duration, difficulty)
        try:
            new_score = build_new_score(nickname, configuration, score, percentage)
            score_id = await self.score_store.insert(new_score)
        except LeaderboardException as e:
            logger.error(f"Error saving score: {e}")
            return SubmitScoreResult(success=False, error=e.user_message)

        return SubmitScoreResult(success=True, id=score_id)

    async def check_high_score(
        self,
        operation: str,
        number_used: int,
        rounds: int,
        timer_duration: int,
        difficulty: str,
        score: int,
        percentage: Optional[int] = None,
        nickname: Optional[str] = None
    ) -> HighScoreResult:
        """Nickname is accepted for symmetry with submit_score and ignored."""
        configuration = GameConfiguration(operation, number_used, rounds, timer_duration, difficulty)
        try:
            check = await self.ranking_service.check_high_score(configuration, score, percentage)
        except LeaderboardException as e:
            logger.error(f"Error checking high score: {e}")
            return HighScoreResult(is_high_score=False, error=e.user_message)

        return HighScoreResult(is_high_score=check.is_high_score, previous_best=check.previous_best)

    async def get_scoped_leaderboard(
        self,
        operation: str,
        number_used: int,
        rounds: int,
        timer_duration: int,
        difficulty: str,
        limit: int = LeaderboardConstants.DEFAULT_LIMIT
    ) -> LeaderboardResult:
        configuration = GameConfiguration(operation, number_used, rounds, timer_duration, difficulty)
        try:
            entries = await self.leaderboard_service.scoped_leaderboard(configuration, limit)
        except LeaderboardException as e:
            logger.error(f"Error fetching leaderboard: {e}")
            return LeaderboardResult(success=False, entries=[], error=e.user_message)

        return LeaderboardResult(success=True, entries=entries)

    async def get_global_leaderboard(self, limit: int = LeaderboardConstants.DEFAULT_LIMIT) -> LeaderboardResult:
        try:
            entries = await self.leaderboard_service.global_leaderboard(limit)
        except LeaderboardException as e:
            logger.error(f"Error fetching all leaderboard entries: {e}")
            return LeaderboardResult(success=False, entries=[], error=e.user_message)

        return LeaderboardResult(success=True, entries=entries)

    async def get_user_rank(self, score_id: int) -> UserRankResult:
        try:
            result = await self.ranking_service.compute_rank(score_id)
        except LeaderboardException as e:
            logger.error(f"Error getting user rank: {e}")
            return UserRankResult(rank=None, error=e.user_message)

        if result is None:
            return UserRankResult(rank=None, error="Score not found")
        return UserRankResult(rank=result.rank, total=result.total)
