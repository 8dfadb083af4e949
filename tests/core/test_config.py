"""Unit tests for mrchess/core/config.py"""

import pytest
from pydantic import ValidationError

from mrchess.core.config import AISettings, DatabaseSettings, Settings
from mrchess.core.exceptions import InvalidRequestError
from mrchess.core.shared_types import Color, DifficultyLevel


def test_defaults() -> None:
    settings = Settings()
    assert settings.ai.difficulty == DifficultyLevel.MEDIUM
    assert settings.ai.max_depth == 4
    assert settings.ai.time_limit == 5.0
    assert settings.ai.thinking_delay == 1.0
    assert settings.ai.machine_color == Color.BLACK
    assert settings.ai.show_thinking
    assert settings.database == DatabaseSettings()
    assert settings.log_level == "INFO"


@pytest.mark.parametrize(
    "difficulty, max_depth, expected",
    [
        (DifficultyLevel.EASY, 4, 2),
        (DifficultyLevel.MEDIUM, 4, 3),
        (DifficultyLevel.HARD, 4, 4),
        (DifficultyLevel.EXPERT, 4, 5),
        (DifficultyLevel.EASY, 1, 1),
        (DifficultyLevel.MEDIUM, 1, 2),
        (DifficultyLevel.EXPERT, 8, 8),  # clamped
    ],
)
def test_search_depth_per_tier(difficulty: DifficultyLevel, max_depth: int, expected: int) -> None:
    assert AISettings(difficulty=difficulty, max_depth=max_depth).search_depth == expected


@pytest.mark.parametrize("max_depth", [0, 9])
def test_max_depth_bounds(max_depth: int) -> None:
    with pytest.raises(ValidationError):
        AISettings(max_depth=max_depth)


def test_negative_time_limit() -> None:
    with pytest.raises(ValidationError):
        AISettings(time_limit=-1.0)


def test_unknown_log_level() -> None:
    with pytest.raises(InvalidRequestError):
        Settings(log_level="loud")


def test_from_env() -> None:
    environ = {
        "MRCHESS_DIFFICULTY": "expert",
        "MRCHESS_MAX_DEPTH": "3",
        "MRCHESS_TIME_LIMIT": "2.5",
        "MRCHESS_MACHINE_COLOR": "white",
        "MRCHESS_SHOW_THINKING": "false",
        "MRCHESS_DATABASE_URL": "sqlite:///:memory:",
        "MRCHESS_LOG_LEVEL": "debug",
        "UNRELATED": "ignored",
    }
    settings = Settings.from_env(environ)
    assert settings.ai.difficulty == DifficultyLevel.EXPERT
    assert settings.ai.search_depth == 4
    assert settings.ai.time_limit == 2.5
    assert settings.ai.thinking_delay == 1.0  # not set: default
    assert settings.ai.machine_color == Color.WHITE
    assert not settings.ai.show_thinking
    assert settings.database.url == "sqlite:///:memory:"
    assert not settings.database.echo
    assert settings.log_level == "DEBUG"


def test_from_empty_env() -> None:
    assert Settings.from_env({}) == Settings()
