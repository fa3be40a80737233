"""
Operations Layer

Entry points the quiz UI calls, composed from the services:
- ScoreOperations: submit score, check high score, leaderboards, user rank
- GameCompletionSession: per-game alert and submission guards
"""

from .score_operations import ScoreOperations
from .game_session import GameCompletionSession

__all__ = ['ScoreOperations', 'GameCompletionSession']
