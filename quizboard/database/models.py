from sqlalchemy import (
    Column, Integer, String, DateTime, CheckConstraint, Index
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func
from enum import Enum

from quizboard.constants import GameConstants, NicknameConstants

Base = declarative_base()

class Operation(Enum):
    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"
    DIVISION = "division"

class Score(Base):
    """
    One finished quiz game, appended to the shared leaderboard.
    
    Rows are written once at game end and never updated or deleted. The five
    configuration columns (operation, number_used, rounds, timer_duration,
    difficulty) decide which leaderboard a score belongs to; ranking only ever
    compares rows whose five values match exactly.
    """
    __tablename__ = 'scores'
    
    id = Column(Integer, primary_key=True)
    nickname = Column(String(NicknameConstants.MAX_LENGTH), nullable=False)
    
    # Game configuration (leaderboard partition key)
    operation = Column(String(GameConstants.OPERATION_MAX_LENGTH), nullable=False)
    number_used = Column(Integer, nullable=False)
    rounds = Column(Integer, nullable=False)
    timer_duration = Column(Integer, nullable=False)
    difficulty = Column(String(GameConstants.DIFFICULTY_MAX_LENGTH), nullable=False)
    
    # Result
    score = Column(Integer, nullable=False)       # Correct answers
    percentage = Column(Integer, nullable=False)  # round(100 * score / rounds), stored at insert
    
    # Metadata (display only, never used for ranking)
    created_at = Column(DateTime, default=func.now())
    
    __table_args__ = (
        CheckConstraint('score >= 0 AND score <= rounds', name='ck_scores_score_range'),
        CheckConstraint('percentage >= 0 AND percentage <= 100', name='ck_scores_percentage_range'),
        Index(
            'idx_scores_configuration',
            'operation', 'number_used', 'rounds', 'timer_duration', 'difficulty'
        ),
        # Never reuse ids, they are the insertion-order tie-break
        {'sqlite_autoincrement': True},
    )
    
    def __repr__(self):
        return (
            f"<Score(id={self.id}, nickname='{self.nickname}', operation='{self.operation}', "
            f"number_used={self.number_used}, rounds={self.rounds}, score={self.score})>"
        )
