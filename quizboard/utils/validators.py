"""
Input validation for score submissions and leaderboard queries.

Everything here runs before the score store is touched and raises
ScoreValidationError with a message the player can act on.
"""

from typing import Optional

from quizboard.constants import GameConstants, NicknameConstants, LeaderboardConstants, StorageConstants
from quizboard.data_models.leaderboard import GameConfiguration, NewScore
from quizboard.database.models import Operation
from quizboard.utils.leaderboard_exceptions import ScoreValidationError

VALID_OPERATIONS = tuple(op.value for op in Operation)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_int(field: str, value, minimum: int) -> int:
    if not _is_int(value):
        raise ScoreValidationError(field, f"{field} must be a whole number")
    if value < minimum:
        raise ScoreValidationError(field, f"{field} must be at least {minimum}")
    if value > StorageConstants.MAX_INTEGER:
        raise ScoreValidationError(field, f"{field} is too large")
    return value


def compute_percentage(score: int, rounds: int) -> int:
    """Percentage of correct answers, halves rounded up like the score screen."""
    return (200 * score + rounds) // (2 * rounds)


def validate_configuration(configuration: GameConfiguration) -> GameConfiguration:
    if configuration.operation not in VALID_OPERATIONS:
        raise ScoreValidationError(
            "operation",
            f"operation must be one of: {', '.join(VALID_OPERATIONS)}"
        )
    _require_int("number_used", configuration.number_used, 0)
    _require_int("rounds", configuration.rounds, 1)
    _require_int("timer_duration", configuration.timer_duration, 1)

    difficulty = configuration.difficulty
    if not isinstance(difficulty, str) or not difficulty.strip():
        raise ScoreValidationError("difficulty", "difficulty must not be empty")
    if len(difficulty) > GameConstants.DIFFICULTY_MAX_LENGTH:
        raise ScoreValidationError(
            "difficulty",
            f"difficulty must be at most {GameConstants.DIFFICULTY_MAX_LENGTH} characters"
        )
    return configuration


def validate_nickname(nickname) -> str:
    """Return the stripped nickname or raise if it cannot be shown on the board."""
    if not isinstance(nickname, str) or not nickname.strip():
        raise ScoreValidationError("nickname", "Please enter a nickname")
    nickname = nickname.strip()
    if len(nickname) > NicknameConstants.MAX_LENGTH:
        raise ScoreValidationError(
            "nickname",
            f"Nickname must be {NicknameConstants.MAX_LENGTH} characters or less"
        )
    return nickname


def validate_result(configuration: GameConfiguration, score, percentage: Optional[int] = None) -> int:
    """
    Check score against the configuration and return the stored percentage.

    A missing percentage is derived from score and rounds. A supplied one must
    agree with that derivation.
    """
    if not _is_int(score):
        raise ScoreValidationError("score", "score must be a whole number")
    if score < 0 or score > configuration.rounds:
        raise ScoreValidationError(
            "score",
            f"score must be between 0 and {configuration.rounds}"
        )

    expected = compute_percentage(score, configuration.rounds)
    if percentage is None:
        return expected
    if not _is_int(percentage) or percentage < 0 or percentage > 100:
        raise ScoreValidationError("percentage", "percentage must be between 0 and 100")
    if percentage != expected:
        raise ScoreValidationError(
            "percentage",
            f"percentage {percentage} does not match {score}/{configuration.rounds}"
        )
    return percentage


def build_new_score(nickname, configuration: GameConfiguration, score, percentage: Optional[int] = None) -> NewScore:
    """Validate a full submission and return the record to insert."""
    validate_configuration(configuration)
    nickname = validate_nickname(nickname)
    percentage = validate_result(configuration, score, percentage)
    return NewScore(
        nickname=nickname,
        configuration=configuration,
        score=score,
        percentage=percentage
    )


def validate_limit(limit) -> int:
    """Any positive row count for a top-N view."""
    return _require_int("limit", limit, 1)


def validate_page_size(page_size) -> int:
    _require_int("page_size", page_size, 1)
    if page_size > LeaderboardConstants.MAX_PAGE_SIZE:
        raise ScoreValidationError(
            "page_size",
            f"page_size must be between 1 and {LeaderboardConstants.MAX_PAGE_SIZE}"
        )
    return page_size


def validate_page(page, page_size: int) -> int:
    _require_int("page", page, 1)
    if (page - 1) * page_size > StorageConstants.MAX_INTEGER:
        raise ScoreValidationError("page", "page is too large")
    return page
