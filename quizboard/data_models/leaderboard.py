"""
Leaderboard data models for the quiz leaderboard core.

Provides immutable data transfer objects passed between the score store,
the ranking and leaderboard services and the external game UI.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import List, Optional, Union


@dataclass(frozen=True)
class GameConfiguration:
    """The five settings that decide which leaderboard a score belongs to."""
    operation: str
    number_used: int
    rounds: int
    timer_duration: int
    difficulty: str

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class NewScore:
    """A score about to be inserted (no id or timestamp yet)."""
    nickname: str
    configuration: GameConfiguration
    score: int
    percentage: int


@dataclass(frozen=True)
class ScoreRecord:
    """Persisted score row."""
    id: int
    nickname: str
    configuration: GameConfiguration
    score: int
    percentage: int
    created_at: Optional[datetime]


@dataclass(frozen=True)
class HighScoreCheck:
    """Outcome of comparing a candidate score with its configuration's best."""
    is_high_score: bool
    previous_best: int


@dataclass(frozen=True)
class RankResult:
    """Position of one score within its configuration."""
    rank: int
    total: int


@dataclass(frozen=True)
class ScopedLeaderboardEntry:
    """Single row of a leaderboard for one configuration."""
    rank: int
    id: int
    nickname: str
    score: int
    percentage: int
    created_at: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class GlobalLeaderboardEntry:
    """Single row of the all-configurations leaderboard."""
    rank: int
    id: int
    nickname: str
    score: int
    percentage: int
    created_at: str
    operation: str
    number_used: int
    rounds: int
    timer_duration: int
    difficulty: str

    def to_dict(self) -> dict:
        return asdict(self)


LeaderboardEntry = Union[ScopedLeaderboardEntry, GlobalLeaderboardEntry]


@dataclass(frozen=True)
class LeaderboardPage:
    """Paginated leaderboard data."""
    entries: List[LeaderboardEntry]
    current_page: int
    total_pages: int
    total_entries: int
    configuration: Optional[GameConfiguration] = None


# ============================================================================
# External interface results
# ============================================================================

@dataclass(frozen=True)
class SubmitScoreResult:
    success: bool
    id: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        if self.success:
            return {'success': True, 'id': self.id}
        return {'success': False, 'error': self.error}


@dataclass(frozen=True)
class HighScoreResult:
    is_high_score: bool
    previous_best: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result = {'isHighScore': self.is_high_score, 'previousBest': self.previous_best}
        if self.error is not None:
            result['error'] = self.error
        return result


@dataclass(frozen=True)
class UserRankResult:
    rank: Optional[int]
    total: Optional[int] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.rank is not None

    def to_dict(self) -> dict:
        if self.success:
            return {'rank': self.rank, 'total': self.total}
        return {'rank': None, 'error': self.error}


@dataclass(frozen=True)
class LeaderboardResult:
    success: bool
    entries: List[LeaderboardEntry]
    error: Optional[str] = None

    def to_dict(self) -> dict:
        result = {'success': self.success, 'entries': [entry.to_dict() for entry in self.entries]}
        if self.error is not None:
            result['error'] = self.error
        return result
