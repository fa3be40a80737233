import asyncio
import logging
import traceback
from typing import Optional

from quizboard.config import Config
from quizboard.database.database import Database
from quizboard.database.score_store import ScoreStore
from quizboard.operations.score_operations import ScoreOperations
from quizboard.services.leaderboard import LeaderboardService
from quizboard.services.ranking import RankingService
from quizboard.utils.logger import setup_logger

class QuizBoard:
    """Wires the database, score store, services and operations together."""
    
    def __init__(self, database_url: Optional[str] = None):
        self.db = Database(database_url)
        self.score_store: Optional[ScoreStore] = None
        self.ranking_service: Optional[RankingService] = None
        self.leaderboard_service: Optional[LeaderboardService] = None
        self.operations: Optional[ScoreOperations] = None
        self.logger = setup_logger(__name__)
    
    async def setup(self):
        """Called once before serving any call"""
        self.logger.info("Setting up Quizboard...")
        
        await self.db.initialize()
        
        self.score_store = ScoreStore(self.db)
        self.ranking_service = RankingService(self.score_store)
        self.leaderboard_service = LeaderboardService(self.score_store)
        self.operations = ScoreOperations(
            self.score_store, self.ranking_service, self.leaderboard_service
        )
        
        self.logger.info("Quizboard setup complete!")
        return self
    
    async def close(self):
        """Cleanup when shutting down"""
        self.logger.info("Shutting down Quizboard...")
        await self.db.close()

async def create_quizboard(database_url: Optional[str] = None) -> QuizBoard:
    """Build and set up a QuizBoard"""
    return await QuizBoard(database_url).setup()

async def main():
    """Main entry point: create the schema and print the global top 10"""
    Config.validate()
    
    board = QuizBoard()
    try:
        await board.setup()
        result = await board.operations.get_global_leaderboard()
        if not result.success:
            board.logger.error(f"Leaderboard unavailable: {result.error}")
            return
        for entry in result.entries:
            print(
                f"{entry.rank:>3}. {entry.nickname:<20} {entry.score:>3}/{entry.rounds:<3} "
                f"{entry.percentage:>3}%  {entry.operation} x{entry.number_used} "
                f"{entry.timer_duration}s ({entry.difficulty})  {entry.created_at}"
            )
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        traceback.print_exc()
    finally:
        await board.close()

if __name__ == "__main__":
    asyncio.run(main())
