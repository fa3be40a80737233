"""
Services package for the quiz leaderboard core.
"""

from .base import BaseService
from .ranking import RankingService
from .leaderboard import LeaderboardService

__all__ = ['BaseService', 'RankingService', 'LeaderboardService']
