from __future__ import annotations

import os

import pytest
from pydantic import ValidationError

from pack_planner.config import load_settings
from pack_planner.queue import DuplicatePolicy


@pytest.fixture
def no_env_file(tmp_path):
    return str(tmp_path / "missing.env")


def test_defaults(monkeypatch, no_env_file) -> None:
    for name in ("DUPLICATE_POLICY", "LOG_LEVEL", "MAX_SESSIONS"):
        monkeypatch.delenv(f"PACK_PLANNER_{name}", raising=False)

    settings = load_settings(no_env_file)

    assert settings.duplicate_policy is DuplicatePolicy.COLLAPSE
    assert settings.log_level == "INFO"
    assert settings.max_sessions == 100


def test_environment_overrides(monkeypatch, no_env_file) -> None:
    monkeypatch.setenv("PACK_PLANNER_DUPLICATE_POLICY", "KEEP")
    monkeypatch.setenv("PACK_PLANNER_LOG_LEVEL", "debug")
    monkeypatch.setenv("PACK_PLANNER_MAX_SESSIONS", "5")

    settings = load_settings(no_env_file)

    assert settings.duplicate_policy is DuplicatePolicy.KEEP
    assert settings.log_level == "DEBUG"
    assert settings.max_sessions == 5


def test_dotenv_file_is_read(monkeypatch, tmp_path) -> None:
    monkeypatch.delenv("PACK_PLANNER_DUPLICATE_POLICY", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("PACK_PLANNER_DUPLICATE_POLICY=keep\n", encoding="utf-8")

    try:
        settings = load_settings(str(env_file))
    finally:
        os.environ.pop("PACK_PLANNER_DUPLICATE_POLICY", None)

    assert settings.duplicate_policy is DuplicatePolicy.KEEP


def test_invalid_values(monkeypatch, no_env_file) -> None:
    monkeypatch.setenv("PACK_PLANNER_DUPLICATE_POLICY", "merge")
    with pytest.raises(ValidationError):
        load_settings(no_env_file)

    monkeypatch.setenv("PACK_PLANNER_DUPLICATE_POLICY", "collapse")
    monkeypatch.setenv("PACK_PLANNER_LOG_LEVEL", "loud")
    with pytest.raises(ValidationError):
        load_settings(no_env_file)
