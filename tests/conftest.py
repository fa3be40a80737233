"""Shared test fixtures for quizboard tests."""

import os

# Keep test runs from writing daily log files
os.environ.setdefault("LOG_TO_FILE", "False")

import pytest
import pytest_asyncio

from quizboard.data_models.leaderboard import GameConfiguration
from quizboard.database.models import Base
from quizboard.main import create_quizboard
from quizboard.utils.validators import build_new_score


@pytest.fixture
def addition_config() -> GameConfiguration:
    """The partition used by the worked examples: addition with 3, 5 rounds, 10s, easy."""
    return GameConfiguration(
        operation="addition",
        number_used=3,
        rounds=5,
        timer_duration=10,
        difficulty="easy",
    )


@pytest.fixture
def ten_round_config() -> GameConfiguration:
    return GameConfiguration(
        operation="multiplication",
        number_used=7,
        rounds=10,
        timer_duration=15,
        difficulty="hard",
    )


@pytest_asyncio.fixture
async def board(tmp_path):
    """A fully wired QuizBoard on a fresh SQLite file."""
    quizboard = await create_quizboard(f"sqlite:///{tmp_path / 'quizboard.db'}")
    yield quizboard
    await quizboard.close()


@pytest.fixture
def add_score(board):
    """Insert a validated score straight into the store and return its id."""
    async def _add(nickname: str, configuration: GameConfiguration, score: int) -> int:
        return await board.score_store.insert(build_new_score(nickname, configuration, score))
    return _add


@pytest.fixture
def break_storage(board):
    """Drop the scores table so every following query fails at the database."""
    async def _break():
        async with board.db.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
    return _break
