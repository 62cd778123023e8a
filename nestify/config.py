"""Tool-level settings for nestify.

Timeouts for external tools and the runtime versions written into generated
CI workflows.  Settings are Pydantic v2 models so they validate at
construction time and round-trip through JSON or environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Global nestify settings.

    Created once by the CLI entry point and passed to the command flow and
    the external-process services.
    """

    install_timeout: int = Field(default=300, ge=1, description="Seconds per package-manager install")
    prisma_timeout: int = Field(default=120, ge=1, description="Seconds per Prisma CLI invocation")
    format_timeout: int = Field(default=120, ge=1, description="Seconds for the formatter")
    git_timeout: int = Field(default=60, ge=1, description="Seconds per git command")
    node_versions: list[str] = Field(
        default_factory=lambda: ["18.x", "20.x"],
        min_length=2,
        description="Runtime versions in the generated CI test matrix",
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the settings to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Settings":
        """Load previously-saved settings from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            NESTIFY_INSTALL_TIMEOUT, NESTIFY_PRISMA_TIMEOUT,
            NESTIFY_FORMAT_TIMEOUT, NESTIFY_GIT_TIMEOUT,
            NESTIFY_NODE_VERSIONS (comma-separated).
        """
        kwargs: dict[str, Any] = {}
        for field_name in ("install_timeout", "prisma_timeout", "format_timeout", "git_timeout"):
            env_name = f"NESTIFY_{field_name.upper()}"
            if os.environ.get(env_name):
                kwargs[field_name] = int(os.environ[env_name])

        versions = os.environ.get("NESTIFY_NODE_VERSIONS", "")
        if versions.strip():
            kwargs["node_versions"] = [v.strip() for v in versions.split(",") if v.strip()]

        return cls(**kwargs)
