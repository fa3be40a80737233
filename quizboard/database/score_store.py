"""
Score Store - append-only persistence for finished quiz games.

This module is the only place that talks to the `scores` table. It offers
inserts and reads, never updates or deletes, so a score cannot change once it
has been ranked.

Boundary rules:
- Every SQLAlchemy failure is logged once and re-raised as StorageError
- Aggregate values (COUNT) are coerced to int here, callers never see
  driver-specific types
- Reads can share one session so a composite lookup sees a single snapshot
"""

from contextlib import asynccontextmanager
from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from quizboard.data_models.leaderboard import GameConfiguration, NewScore, ScoreRecord
from quizboard.database.models import Score
from quizboard.utils.leaderboard_exceptions import StorageError
from quizboard.utils.logger import setup_logger
from quizboard.utils.ranking import RankingUtility

logger = setup_logger(__name__)


class ScoreStore:
    """
    Core data access class for Score records.

    Ids come from the database's autoincrement primary key, so they stay
    unique and increasing under concurrent inserts without any locking here.
    """

    def __init__(self, database):
        """Initialize with database instance"""
        self.db = database
        self.logger = logger

    @asynccontextmanager
    async def session_scope(self, operation: str = "read", session: Optional[AsyncSession] = None):
        """
        Provides a session context. Uses the provided session if available,
        otherwise creates one and translates storage failures.
        """
        if session is not None:
            # If a session is provided, the outer scope owns it and its errors
            yield session
            return

        try:
            async with self.db.get_session() as new_session:
                yield new_session
        except SQLAlchemyError as e:
            self.logger.error(f"Storage failure during {operation}: {e}")
            raise StorageError(operation, str(e)) from e

    @staticmethod
    def _to_int(value, operation: str) -> int:
        if value is None or isinstance(value, bool):
            raise StorageError(operation, f"unexpected aggregate value {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise StorageError(operation, f"unexpected aggregate value {value!r}") from e

    @staticmethod
    def _to_record(row: Score) -> ScoreRecord:
        return ScoreRecord(
            id=row.id,
            nickname=row.nickname,
            configuration=GameConfiguration(
                operation=row.operation,
                number_used=row.number_used,
                rounds=row.rounds,
                timer_duration=row.timer_duration,
                difficulty=row.difficulty
            ),
            score=row.score,
            percentage=row.percentage,
            created_at=row.created_at
        )

    # ============================================================================
    # Writes
    # ============================================================================

    async def insert(self, new_score: NewScore) -> int:
        """
        Append a score and return its assigned id.

        The caller is expected to have validated the record already. Calling
        this twice for the same game stores two rows.
        """
        configuration = new_score.configuration
        row = Score(
            nickname=new_score.nickname,
            operation=configuration.operation,
            number_used=configuration.number_used,
            rounds=configuration.rounds,
            timer_duration=configuration.timer_duration,
            difficulty=configuration.difficulty,
            score=new_score.score,
            percentage=new_score.percentage
        )

        try:
            async with self.db.transaction() as session:
                session.add(row)
                await session.flush()
                score_id = row.id
        except SQLAlchemyError as e:
            self.logger.error(f"Storage failure during insert: {e}")
            raise StorageError("insert", str(e)) from e

        if score_id is None:
            raise StorageError("insert", "no id returned for inserted score")

        self.logger.info(
            f"Stored score {score_id}: {new_score.score}/{configuration.rounds} "
            f"({configuration.operation}, number {configuration.number_used}, {configuration.difficulty})"
        )
        return self._to_int(score_id, "insert")

    # ============================================================================
    # Reads
    # ============================================================================

    async def get_by_id(self, score_id: int, session: Optional[AsyncSession] = None) -> Optional[ScoreRecord]:
        """Return the score with this id, or None when it does not exist."""
        async with self.session_scope("get_by_id", session) as s:
            row = await s.get(Score, score_id)
            return self._to_record(row) if row else None

    async def query_by_configuration(
        self,
        configuration: GameConfiguration,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None
    ) -> List[ScoreRecord]:
        """All scores of one configuration, best first."""
        query = (
            select(Score)
            .where(RankingUtility.configuration_filter(configuration))
            .order_by(*RankingUtility.best_first_order())
        )
        if limit is not None:
            query = query.limit(limit).offset(offset)

        async with self.session_scope("query_by_configuration", session) as s:
            result = await s.scalars(query)
            return [self._to_record(row) for row in result]

    async def query_all(
        self,
        limit: Optional[int] = None,
        offset: int = 0,
        session: Optional[AsyncSession] = None
    ) -> List[ScoreRecord]:
        """All scores regardless of configuration, best first."""
        query = select(Score).order_by(*RankingUtility.best_first_order())
        if limit is not None:
            query = query.limit(limit).offset(offset)

        async with self.session_scope("query_all", session) as s:
            result = await s.scalars(query)
            return [self._to_record(row) for row in result]

    async def best_in_configuration(
        self,
        configuration: GameConfiguration,
        session: Optional[AsyncSession] = None
    ) -> Optional[ScoreRecord]:
        """The single best score of a configuration, or None when it is empty."""
        records = await self.query_by_configuration(configuration, limit=1, session=session)
        return records[0] if records else None

    async def count_better_than(self, record: ScoreRecord, session: Optional[AsyncSession] = None) -> int:
        """Number of scores in the record's configuration that rank ahead of it."""
        query = (
            select(func.count(Score.id))
            .where(
                RankingUtility.configuration_filter(record.configuration),
                RankingUtility.strictly_better_than(record.score, record.percentage, record.id)
            )
        )
        async with self.session_scope("count_better_than", session) as s:
            value = await s.scalar(query)
        return self._to_int(value, "count_better_than")

    async def count_in_configuration(
        self,
        configuration: GameConfiguration,
        session: Optional[AsyncSession] = None
    ) -> int:
        query = select(func.count(Score.id)).where(RankingUtility.configuration_filter(configuration))
        async with self.session_scope("count_in_configuration", session) as s:
            value = await s.scalar(query)
        return self._to_int(value, "count_in_configuration")

    async def count_all(self, session: Optional[AsyncSession] = None) -> int:
        async with self.session_scope("count_all", session) as s:
            value = await s.scalar(select(func.count(Score.id)))
        return self._to_int(value, "count_all")
