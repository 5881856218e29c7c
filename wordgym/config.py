"""
Configuration settings for wordgym.

Uses Pydantic Settings for environment variable management with .env file support.
Session-level settings are a frozen snapshot handed to the engine at build time.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wordgym.core.models import Direction


class SessionSettings(BaseModel):
    """Per-session options a game reads when building a session."""

    model_config = ConfigDict(frozen=True)

    questions_per_session: int = Field(default=15, ge=1)
    time_limit_seconds: int = Field(default=10, ge=1)
    direction: Direction = Direction.A_TO_B
    fuzzy_match_enabled: bool = True


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WORDGYM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Session defaults
    # ========================================
    questions_per_session: int = Field(
        default=15,
        ge=1,
        description="Rounds per session when the caller does not ask for a count",
    )
    time_limit_seconds: int = Field(
        default=10,
        ge=1,
        description="Per-round deadline for time-boxed shapes",
    )
    direction: Direction = Field(
        default=Direction.A_TO_B,
        description="a-to-b shows the term and asks for the translation",
    )
    fuzzy_match_enabled: bool = Field(
        default=True,
        description="Tolerate typos in free-text answers",
    )

    # ========================================
    # Similarity thresholds
    # ========================================
    latin_threshold: float = Field(default=0.75, ge=0.0, le=1.0)
    other_threshold: float = Field(default=0.70, ge=0.0, le=1.0)

    # ========================================
    # Storage & logging
    # ========================================
    words_file: Path = Field(
        default=Path.home() / ".wordgym" / "words.json",
        description="JSON word store used by the CLI",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    def session_settings(self) -> SessionSettings:
        """Project the session-level subset."""
        return SessionSettings(
            questions_per_session=self.questions_per_session,
            time_limit_seconds=self.time_limit_seconds,
            direction=self.direction,
            fuzzy_match_enabled=self.fuzzy_match_enabled,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
