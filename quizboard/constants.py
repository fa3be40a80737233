"""
Quiz-wide constants for the leaderboard core.

This module contains the fixed product limits shared by validation, the
score store schema and the leaderboard queries.
"""

class GameConstants:
    """Constants describing a quiz game configuration."""

    # Column sizes for the scores table
    OPERATION_MAX_LENGTH = 20
    DIFFICULTY_MAX_LENGTH = 20

class NicknameConstants:
    """Constants for player nicknames."""
    
    MAX_LENGTH = 50

class LeaderboardConstants:
    """Constants for leaderboard views."""
    
    # Default number of rows in a leaderboard view
    DEFAULT_LIMIT = 10
    
    # Upper bound for one page of the paging API
    MAX_PAGE_SIZE = 50
    
    # previousBest reported for an empty configuration
    EMPTY_PREVIOUS_BEST = 0

class StorageConstants:
    """Constants for the score store."""
    
    # Largest value an INTEGER column can hold (signed 64-bit)
    MAX_INTEGER = 2 ** 63 - 1
