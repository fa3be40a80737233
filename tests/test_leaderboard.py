"""Tests for scoped and global leaderboard views."""

import re
from datetime import datetime, timezone

import pytest

from quizboard.config import Config
from quizboard.data_models.leaderboard import GlobalLeaderboardEntry, ScopedLeaderboardEntry
from quizboard.services.leaderboard import format_display_date
from quizboard.utils.leaderboard_exceptions import ScoreValidationError


SEVEN_SCORES = [("ada", 6), ("bo", 9), ("cy", 6), ("dee", 2), ("eli", 10), ("fay", 9), ("gus", 0)]


async def seed_seven(add_score, configuration):
    return {nickname: await add_score(nickname, configuration, score) for nickname, score in SEVEN_SCORES}


@pytest.mark.asyncio
async def test_limit_cuts_the_sorted_list(board, add_score, ten_round_config):
    await seed_seven(add_score, ten_round_config)

    top_five = await board.leaderboard_service.scoped_leaderboard(ten_round_config, limit=5)
    everyone = await board.leaderboard_service.scoped_leaderboard(ten_round_config, limit=10)

    assert [e.rank for e in top_five] == [1, 2, 3, 4, 5]
    assert [e.nickname for e in top_five] == ["eli", "bo", "fay", "ada", "cy"]
    assert [e.rank for e in everyone] == list(range(1, 8))
    assert [e.nickname for e in everyone][-2:] == ["dee", "gus"]


@pytest.mark.asyncio
async def test_display_rank_agrees_with_computed_rank(board, add_score, ten_round_config):
    ids = await seed_seven(add_score, ten_round_config)

    entries = await board.leaderboard_service.scoped_leaderboard(ten_round_config)

    for entry in entries:
        computed = await board.ranking_service.compute_rank(ids[entry.nickname])
        assert computed.rank == entry.rank


@pytest.mark.asyncio
async def test_scoped_entries_carry_display_fields(board, add_score, addition_config):
    score_id = await add_score("ada", addition_config, 4)

    [entry] = await board.leaderboard_service.scoped_leaderboard(addition_config)

    assert isinstance(entry, ScopedLeaderboardEntry)
    assert entry.id == score_id
    assert entry.percentage == 80
    assert re.fullmatch(r"\d{2}/\d{2}/\d{4}", entry.created_at)
    assert not hasattr(entry, "operation")


@pytest.mark.asyncio
async def test_empty_configuration_gives_empty_list(board, addition_config):
    assert await board.leaderboard_service.scoped_leaderboard(addition_config) == []


@pytest.mark.asyncio
async def test_global_leaderboard_mixes_configurations(board, add_score, addition_config, ten_round_config):
    await add_score("perfect", addition_config, 5)
    await add_score("long_game", ten_round_config, 8)
    await add_score("short_miss", addition_config, 4)

    entries = await board.leaderboard_service.global_leaderboard()

    assert [e.nickname for e in entries] == ["long_game", "perfect", "short_miss"]
    assert [e.rank for e in entries] == [1, 2, 3]
    assert all(isinstance(e, GlobalLeaderboardEntry) for e in entries)
    assert entries[0].operation == "multiplication"
    assert entries[0].rounds == 10
    assert entries[1].difficulty == "easy"
    assert entries[1].timer_duration == 10


@pytest.mark.asyncio
async def test_global_equal_scores_prefer_higher_percentage(board, add_score, addition_config, ten_round_config):
    await add_score("ten_rounds", ten_round_config, 5)
    await add_score("five_rounds", addition_config, 5)

    entries = await board.leaderboard_service.global_leaderboard()

    assert [e.nickname for e in entries] == ["five_rounds", "ten_rounds"]


@pytest.mark.asyncio
async def test_pages_continue_rank_numbers(board, add_score, ten_round_config):
    await seed_seven(add_score, ten_round_config)

    second = await board.leaderboard_service.get_scoped_page(ten_round_config, page=2, page_size=3)
    past_end = await board.leaderboard_service.get_scoped_page(ten_round_config, page=4, page_size=3)

    assert [e.rank for e in second.entries] == [4, 5, 6]
    assert [e.nickname for e in second.entries] == ["ada", "cy", "dee"]
    assert second.total_entries == 7
    assert second.total_pages == 3
    assert second.configuration == ten_round_config
    assert past_end.entries == []


@pytest.mark.asyncio
async def test_empty_global_page(board):
    page = await board.leaderboard_service.get_global_page()

    assert page.entries == []
    assert page.total_pages == 1
    assert page.total_entries == 0


@pytest.mark.asyncio
async def test_limit_must_be_positive_but_has_no_upper_cap(board, add_score, addition_config):
    for score in range(55):
        await add_score(f"p{score}", addition_config, score % 6)

    scoped = await board.leaderboard_service.scoped_leaderboard(addition_config, limit=100)
    everything = await board.leaderboard_service.global_leaderboard(limit=100)

    assert len(scoped) == 55
    assert len(everything) == 55
    with pytest.raises(ScoreValidationError):
        await board.leaderboard_service.scoped_leaderboard(addition_config, limit=0)
    with pytest.raises(ScoreValidationError):
        await board.leaderboard_service.global_leaderboard(limit=2 ** 63)


@pytest.mark.asyncio
async def test_page_size_is_capped(board):
    with pytest.raises(ScoreValidationError):
        await board.leaderboard_service.get_global_page(page_size=51)
    with pytest.raises(ScoreValidationError):
        await board.leaderboard_service.get_global_page(page=0)
    with pytest.raises(ScoreValidationError):
        await board.leaderboard_service.get_global_page(page=2 ** 62, page_size=50)

    page = await board.leaderboard_service.get_global_page(page_size=50)
    assert page.entries == []


def test_display_date_is_local_calendar_day_of_utc_timestamp():
    stored = datetime(2024, 1, 2, 23, 30)
    expected = datetime(2024, 1, 2, 23, 30, tzinfo=timezone.utc).astimezone().strftime(Config.DISPLAY_DATE_FORMAT)

    assert format_display_date(stored) == expected
    assert format_display_date(None) == ""
