"""
Custom exceptions for the leaderboard core with player-friendly error messages.
"""

class LeaderboardException(Exception):
    """Base exception for leaderboard-related errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class ScoreValidationError(LeaderboardException):
    """Raised when a submission or query argument is malformed."""
    def __init__(self, field: str, reason: str):
        self.field = field
        super().__init__(
            f"Invalid {field}: {reason}",
            reason
        )

class StorageError(LeaderboardException):
    """Raised when the score store is unreachable or returns something unexpected."""
    def __init__(self, operation: str, details: str = None):
        self.operation = operation
        super().__init__(
            f"Storage error during {operation}: {details}",
            "Leaderboard is unavailable right now. Please try again later."
        )
