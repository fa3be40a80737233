"""
Game-completion session state.

Holds the per-game flags the quiz UI needs once the last round is answered:
whether the high-score alert was already shown and whether the score was
already submitted. Keeping them on one object per finished game (instead of
module globals) means two games never share them.
"""

import logging
from typing import Optional

from quizboard.data_models.leaderboard import GameConfiguration, SubmitScoreResult, UserRankResult
from quizboard.utils.validators import validate_configuration, validate_result

logger = logging.getLogger(__name__)


class GameCompletionSession:
    """
    One finished game on its way to the leaderboard.

    Raises ScoreValidationError at construction if the configuration or score
    could never be stored.
    """

    def __init__(self, operations, configuration: GameConfiguration, score: int):
        validate_configuration(configuration)
        self.operations = operations
        self.configuration = configuration
        self.score = score
        self.percentage = validate_result(configuration, score)

        self.high_score_alert_shown = False
        self.submission: Optional[SubmitScoreResult] = None
        self.rank: Optional[UserRankResult] = None
        self.nickname: Optional[str] = None

    @property
    def has_submitted(self) -> bool:
        return self.submission is not None and self.submission.success

    @property
    def score_id(self) -> Optional[int]:
        return self.submission.id if self.has_submitted else None

    async def check_high_score(self) -> bool:
        """
        True the first time this game is found to be a new high score.

        Every later call returns False so the alert is shown at most once.
        """
        if self.high_score_alert_shown:
            return False

        result = await self.operations.check_high_score(
            score=self.score,
            percentage=self.percentage,
            **self.configuration.as_dict()
        )
        if not result.success or not result.is_high_score:
            return False

        self.high_score_alert_shown = True
        return True

    async def submit(self, nickname: str) -> SubmitScoreResult:
        """
        Store the game under `nickname` and look up its rank.

        After one successful submission the stored result is returned again
        without writing a second row. A failed submission can be retried.
        """
        if self.has_submitted:
            logger.debug(f"Score {self.submission.id} already submitted, skipping")
            return self.submission

        result = await self.operations.submit_score(
            nickname=nickname,
            score=self.score,
            percentage=self.percentage,
            **self.configuration.as_dict()
        )
        if not result.success:
            return result

        self.submission = result
        self.nickname = nickname.strip()

        # A missing rank only hides the rank display
        self.rank = await self.operations.get_user_rank(result.id)
        if not self.rank.success:
            logger.warning(f"Rank unavailable for score {result.id}: {self.rank.error}")
        return result
