"""Runtime settings, read from the environment (and a local .env when present)."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from pack_planner.queue import DuplicatePolicy

ENV_PREFIX = "PACK_PLANNER_"


class Settings(BaseModel):
    duplicate_policy: DuplicatePolicy = Field(
        default=DuplicatePolicy.COLLAPSE,
        description="How equal items are handled when queued",
    )
    log_level: str = Field(default="INFO", description="Root log level for the CLI")
    max_sessions: int = Field(default=100, gt=0, description="Maximum open API planning sessions")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level '{value}'")
        return level


def load_settings(env_file: str | None = None) -> Settings:
    """
    Build Settings from PACK_PLANNER_* environment variables.

    A .env file is loaded first but never overrides variables already set.
    """
    load_dotenv(env_file, override=False)

    values: dict[str, str] = {}
    for field_name in Settings.model_fields:
        raw = os.getenv(ENV_PREFIX + field_name.upper())
        if raw is not None and raw.strip():
            values[field_name] = raw.strip().lower() if field_name == "duplicate_policy" else raw.strip()
    return Settings(**values)
