"""
Settings of the engine and the application around it.

Defaults mirror the values the game shipped with. Everything can be overridden through `MRCHESS_*` environment variables.
"""

import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, Field, field_validator

from mrchess.core.exceptions import InvalidRequestError
from mrchess.core.shared_types import Color, DifficultyLevel

MIN_SEARCH_DEPTH = 1
MAX_SEARCH_DEPTH = 8
ENV_PREFIX = "MRCHESS_"


class AISettings(BaseModel):
    """How the machine opponent searches"""

    difficulty: DifficultyLevel = DifficultyLevel.MEDIUM
    max_depth: int = Field(default=4, ge=MIN_SEARCH_DEPTH, le=MAX_SEARCH_DEPTH)
    time_limit: float = Field(default=5.0, ge=0.0)  # seconds
    thinking_delay: float = Field(default=1.0, ge=0.0)  # seconds
    machine_color: Color = Color.BLACK
    show_thinking: bool = True

    @property
    def search_depth(self) -> int:
        """
        Depth per difficulty tier, based on `max_depth`:

        * easy: two plies less (at least 1)
        * medium: one ply less (at least 2)
        * hard: max_depth
        * expert: one ply more

        always clamped to [1, 8]
        """
        depth_by_tier: dict[DifficultyLevel, int] = {
            DifficultyLevel.EASY: max(1, self.max_depth - 2),
            DifficultyLevel.MEDIUM: max(2, self.max_depth - 1),
            DifficultyLevel.HARD: self.max_depth,
            DifficultyLevel.EXPERT: self.max_depth + 1,
        }
        depth = depth_by_tier[self.difficulty]
        return min(max(depth, MIN_SEARCH_DEPTH), MAX_SEARCH_DEPTH)


class DatabaseSettings(BaseModel):
    url: str = "sqlite:///mrchess.db"
    echo: bool = False


class Settings(BaseModel):
    ai: AISettings = Field(default_factory=AISettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        if value.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise InvalidRequestError(f"Unknown log level: {value!r}")
        return value.upper()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """
        Read overrides from the environment, ex.

        MRCHESS_DIFFICULTY=hard MRCHESS_TIME_LIMIT=2.5 MRCHESS_DATABASE_URL=sqlite:///:memory:
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> Optional[str]:
            return env.get(f"{ENV_PREFIX}{name}")

        ai_fields = {
            "difficulty": _get("DIFFICULTY"),
            "max_depth": _get("MAX_DEPTH"),
            "time_limit": _get("TIME_LIMIT"),
            "thinking_delay": _get("THINKING_DELAY"),
            "machine_color": _get("MACHINE_COLOR"),
            "show_thinking": _get("SHOW_THINKING"),
        }
        database_fields = {"url": _get("DATABASE_URL"), "echo": _get("DATABASE_ECHO")}
        log_level = _get("LOG_LEVEL")

        # only pass what was set, so pydantic falls back to the defaults for the rest
        return cls(
            ai=AISettings(**{k: v for k, v in ai_fields.items() if v is not None}),
            database=DatabaseSettings(
                **{k: v for k, v in database_fields.items() if v is not None}
            ),
            **({"log_level": log_level} if log_level is not None else {}),
        )
