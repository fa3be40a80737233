"""Tests for submission validation."""

import pytest

from quizboard.data_models.leaderboard import GameConfiguration
from quizboard.utils.leaderboard_exceptions import ScoreValidationError
from quizboard.utils.validators import (
    build_new_score, compute_percentage, validate_configuration, validate_limit, validate_nickname
)


@pytest.mark.parametrize(
    "score, rounds, expected",
    [(0, 5, 0), (5, 5, 100), (1, 3, 33), (2, 3, 67), (1, 8, 13), (3, 8, 38)],
)
def test_compute_percentage_rounds_halves_up(score, rounds, expected):
    assert compute_percentage(score, rounds) == expected


def test_nickname_is_stripped_and_bounded():
    assert validate_nickname("  ada ") == "ada"
    assert validate_nickname("x" * 50) == "x" * 50

    with pytest.raises(ScoreValidationError):
        validate_nickname("   ")
    with pytest.raises(ScoreValidationError):
        validate_nickname("x" * 51)


def test_unknown_operation_is_rejected():
    with pytest.raises(ScoreValidationError) as exc_info:
        validate_configuration(GameConfiguration("modulo", 3, 5, 10, "easy"))

    assert exc_info.value.field == "operation"


def test_booleans_are_not_numbers(addition_config):
    with pytest.raises(ScoreValidationError):
        validate_configuration(GameConfiguration("addition", True, 5, 10, "easy"))
    with pytest.raises(ScoreValidationError):
        build_new_score("ada", addition_config, True)
    with pytest.raises(ScoreValidationError):
        validate_limit(True)


def test_values_past_64_bit_integer_are_rejected():
    with pytest.raises(ScoreValidationError) as exc_info:
        validate_configuration(GameConfiguration("addition", 2 ** 63, 5, 10, "easy"))

    assert exc_info.value.field == "number_used"
    assert validate_limit(2 ** 63 - 1) == 2 ** 63 - 1
    with pytest.raises(ScoreValidationError):
        validate_limit(2 ** 63)


def test_new_score_derives_or_checks_percentage(addition_config):
    assert build_new_score("ada", addition_config, 3).percentage == 60
    assert build_new_score("ada", addition_config, 3, 60).percentage == 60

    with pytest.raises(ScoreValidationError):
        build_new_score("ada", addition_config, 3, 61)
    with pytest.raises(ScoreValidationError):
        build_new_score("ada", addition_config, -1)
