"""
Shared pytest fixtures for the Declutter Advisor test suite.

Provides:
  - Questionnaire answer factories for the common scenarios.
  - Personality profile factories.
  - ``settings_file``: writes a settings-store export to ``tmp_path``.
  - ``cli_config``: a minimal TOML config with file logging disabled.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from declutter_advisor.models.item import ItemAnswers, PersonalityProfile


# ── Answers ───────────────────────────────────────────────────────────────────

@pytest.fixture
def keep_answers() -> ItemAnswers:
    """Regularly used, treasured item: scores keep=9 under default weights."""
    return ItemAnswers(
        name="Grandma's teapot",
        used="yes",
        sentimental="high",
        condition="good",
        value="medium",
        replace="moderate",
        space="yes",
    )


@pytest.fixture
def letting_go_answers() -> ItemAnswers:
    """Unused, unloved, worn-out item."""
    return ItemAnswers(
        name="Broken toaster",
        used="no",
        sentimental="none",
        condition="poor",
        value="low",
        replace="easy",
        space="no",
    )


# ── Profiles ──────────────────────────────────────────────────────────────────

@pytest.fixture
def extreme_minimalist() -> PersonalityProfile:
    return PersonalityProfile(minimalist_level="extreme")


@pytest.fixture
def maximalist() -> PersonalityProfile:
    return PersonalityProfile(minimalist_level="maximalist")


# ── Files ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def settings_file(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Return a writer: ``settings_file(document) -> path``."""

    def _write(document: dict[str, Any], name: str = "settings.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cli_config(tmp_path: Path) -> Path:
    """TOML config for CLI tests: no log file, output under tmp_path."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    path = config_dir / "default.toml"
    path.write_text(
        "[engine]\n"
        "\n"
        "[output]\n"
        f'output_dir = "{(tmp_path / "out").as_posix()}"\n'
        "\n"
        "[logging]\n"
        'level = "WARNING"\n'
        'log_file = ""\n',
        encoding="utf-8",
    )
    return path
