"""
Shared ranking utilities for the score store, ranking and leaderboard services.

Keeps the comparison and tie-break policy in one place so rank numbers from
the ranking service and display ranks from leaderboard pages always agree:
higher score first, then higher percentage, then the earlier (smaller) id.
"""

from typing import Tuple
from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from quizboard.data_models.leaderboard import GameConfiguration
from quizboard.database.models import Score


class RankingUtility:
    """Shared ranking logic for consistent ordering across services."""

    @staticmethod
    def configuration_filter(configuration: GameConfiguration) -> ColumnElement:
        """Exact match on all five configuration columns."""
        return and_(
            Score.operation == configuration.operation,
            Score.number_used == configuration.number_used,
            Score.rounds == configuration.rounds,
            Score.timer_duration == configuration.timer_duration,
            Score.difficulty == configuration.difficulty,
        )

    @staticmethod
    def best_first_order() -> Tuple[ColumnElement, ...]:
        """ORDER BY clauses, best score first with the earlier id winning ties."""
        return (Score.score.desc(), Score.percentage.desc(), Score.id.asc())

    @staticmethod
    def strictly_better_than(score: int, percentage: int, score_id: int) -> ColumnElement:
        """
        Rows that rank ahead of the given one.

        Within one configuration percentage follows score, so this is the same
        as `score > s OR (score = s AND id < id)`.
        """
        return or_(
            Score.score > score,
            and_(Score.score == score, Score.percentage > percentage),
            and_(Score.score == score, Score.percentage == percentage, Score.id < score_id),
        )

