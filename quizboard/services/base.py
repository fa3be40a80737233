"""
Base service class for the quiz leaderboard core.

Provides read snapshots over the score store for all service layer
operations.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

class BaseService:
    """Base class for all services reading from the score store."""
    
    def __init__(self, score_store):
        """
        Initialize base service with the score store.
        
        Args:
            score_store: ScoreStore shared by every service
        """
        self.score_store = score_store
    
    @asynccontextmanager
    async def snapshot(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        """
        One session for a composite read.
        
        All queries issued with the yielded session see the same store state,
        and any storage failure aborts the whole operation as one StorageError.
        """
        async with self.score_store.session_scope(operation) as session:
            yield session
