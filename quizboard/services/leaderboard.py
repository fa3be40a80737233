"""
Leaderboard service for the quiz leaderboard core.

Provides ranked, size-limited leaderboard views with pagination support,
either for one game configuration or across every configuration.
"""

from datetime import datetime, timezone
from typing import List, Optional
import logging

from quizboard.config import Config
from quizboard.constants import LeaderboardConstants
from quizboard.data_models.leaderboard import (
    GameConfiguration, ScoreRecord, LeaderboardPage,
    ScopedLeaderboardEntry, GlobalLeaderboardEntry
)
from quizboard.services.base import BaseService
from quizboard.utils.validators import (
    validate_configuration, validate_limit, validate_page, validate_page_size
)

logger = logging.getLogger(__name__)


def format_display_date(created_at: Optional[datetime]) -> str:
    """Local calendar date of a stored timestamp (stored naive, in UTC)."""
    if created_at is None:
        return ""
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at.astimezone().strftime(Config.DISPLAY_DATE_FORMAT)


class LeaderboardService(BaseService):
    """Service for leaderboard queries and ranking."""

    @staticmethod
    def _scoped_entry(rank: int, record: ScoreRecord) -> ScopedLeaderboardEntry:
        return ScopedLeaderboardEntry(
            rank=rank,
            id=record.id,
            nickname=record.nickname,
            score=record.score,
            percentage=record.percentage,
            created_at=format_display_date(record.created_at)
        )

    @staticmethod
    def _global_entry(rank: int, record: ScoreRecord) -> GlobalLeaderboardEntry:
        configuration = record.configuration
        return GlobalLeaderboardEntry(
            rank=rank,
            id=record.id,
            nickname=record.nickname,
            score=record.score,
            percentage=record.percentage,
            created_at=format_display_date(record.created_at),
            operation=configuration.operation,
            number_used=configuration.number_used,
            rounds=configuration.rounds,
            timer_duration=configuration.timer_duration,
            difficulty=configuration.difficulty
        )

    @staticmethod
    def _total_pages(total_entries: int, page_size: int) -> int:
        return (total_entries + page_size - 1) // page_size if total_entries > 0 else 1

    async def get_scoped_page(
        self,
        configuration: GameConfiguration,
        page: int = 1,
        page_size: int = LeaderboardConstants.DEFAULT_LIMIT
    ) -> LeaderboardPage:
        """Get one page of a configuration's leaderboard, best first."""
        validate_configuration(configuration)
        validate_page_size(page_size)
        validate_page(page, page_size)
        return await self._scoped_page(configuration, page, page_size)

    async def _scoped_page(self, configuration: GameConfiguration, page: int, page_size: int) -> LeaderboardPage:
        offset = (page - 1) * page_size
        async with self.snapshot("scoped_leaderboard") as session:
            total_entries = await self.score_store.count_in_configuration(configuration, session=session)
            records = await self.score_store.query_by_configuration(
                configuration, limit=page_size, offset=offset, session=session
            )

        entries = [
            self._scoped_entry(rank, record)
            for rank, record in enumerate(records, start=offset + 1)
        ]
        return LeaderboardPage(
            entries=entries,
            current_page=page,
            total_pages=self._total_pages(total_entries, page_size),
            total_entries=total_entries,
            configuration=configuration
        )

    async def get_global_page(
        self,
        page: int = 1,
        page_size: int = LeaderboardConstants.DEFAULT_LIMIT
    ) -> LeaderboardPage:
        """
        Get one page of the all-configurations leaderboard.

        Scores from different configurations are ordered together by score and
        percentage alone, so a 30-round game outranks a perfect 5-round game.
        These ranks are for display only.
        """
        validate_page_size(page_size)
        validate_page(page, page_size)
        return await self._global_page(page, page_size)

    async def _global_page(self, page: int, page_size: int) -> LeaderboardPage:
        offset = (page - 1) * page_size
        async with self.snapshot("global_leaderboard") as session:
            total_entries = await self.score_store.count_all(session=session)
            records = await self.score_store.query_all(limit=page_size, offset=offset, session=session)

        entries = [
            self._global_entry(rank, record)
            for rank, record in enumerate(records, start=offset + 1)
        ]
        return LeaderboardPage(
            entries=entries,
            current_page=page,
            total_pages=self._total_pages(total_entries, page_size),
            total_entries=total_entries
        )

    async def scoped_leaderboard(
        self,
        configuration: GameConfiguration,
        limit: int = LeaderboardConstants.DEFAULT_LIMIT
    ) -> List[ScopedLeaderboardEntry]:
        """Top `limit` scores of one configuration with ranks 1..n."""
        validate_configuration(configuration)
        validate_limit(limit)
        leaderboard_page = await self._scoped_page(configuration, 1, limit)
        return leaderboard_page.entries

    async def global_leaderboard(self, limit: int = LeaderboardConstants.DEFAULT_LIMIT) -> List[GlobalLeaderboardEntry]:
        """Top `limit` scores across every configuration with ranks 1..n."""
        validate_limit(limit)
        leaderboard_page = await self._global_page(1, limit)
        return leaderboard_page.entries
