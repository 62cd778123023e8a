"""Shared pytest fixtures for the nestify test suite.

Provides reusable fixtures for:
- Project configurations built from keyword answers
- Fast tool settings
- A scripted stand-in for ``run_command``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest

from nestify.config import Settings
from nestify.models import ProjectAnswers, ProjectConfiguration


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., ProjectConfiguration]:
    """Factory for ``ProjectConfiguration`` rooted under ``tmp_path``.

    Usage:
        def test_something(make_config):
            config = make_config(database="postgres", orm="prisma")
    """
    def factory(name: str = "demo-api", **answers: Any) -> ProjectConfiguration:
        return ProjectConfiguration.for_name(name, ProjectAnswers(**answers), cwd=tmp_path)

    return factory


@pytest.fixture
def auth_answers() -> dict[str, Any]:
    """Keyword answers enabling JWT authentication on PostgreSQL."""
    return {
        "database": "postgres",
        "orm": "typeorm",
        "use_auth": True,
        "auth_strategies": frozenset({"jwt"}),
    }


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture
def fast_settings() -> Settings:
    """Settings with short timeouts so a hung fake never stalls the suite."""
    return Settings(install_timeout=5, prisma_timeout=5, format_timeout=5, git_timeout=5)


# ---------------------------------------------------------------------------
# External commands
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_run_command() -> Callable[..., AsyncMock]:
    """Build an ``AsyncMock`` replacing ``nestify.utils.run_command``.

    Results are matched by substring against the command string; the first
    matching rule wins and unmatched commands succeed with empty output.

    Usage:
        def test_install(fake_run_command):
            fake = fake_run_command({"--save-dev": (1, "", "npm ERR! boom")})
            with patch("nestify.services.installer.run_command", fake):
                ...
    """
    def factory(
        rules: dict[str, tuple[int, str, str]] | None = None,
        on_call: Callable[[str, Any], None] | None = None,
    ) -> AsyncMock:
        rules = rules or {}

        async def _run(cmd: str, cwd: Any = None, timeout: int = 120, **kwargs: Any) -> tuple[int, str, str]:
            if on_call is not None:
                on_call(cmd, cwd)
            for fragment, result in rules.items():
                if fragment in cmd:
                    return result
            return (0, "", "")

        return AsyncMock(side_effect=_run)

    return factory
