"""Version-control initialisation."""

from __future__ import annotations

from pathlib import Path

from ..errors import ExternalToolError
from ..utils import run_command

GIT_COMMANDS: tuple[str, ...] = ("git init", "git add .")


async def init_repository(project_path: Path, timeout: int = 60) -> None:
    """Initialise a repository in *project_path* and stage every file.

    Raises:
        ExternalToolError: git is missing, or a command failed or timed out.
    """
    for command in GIT_COMMANDS:
        returncode, _stdout, stderr = await run_command(command, cwd=project_path, timeout=timeout)
        if returncode != 0:
            raise ExternalToolError("Git initialization", command, returncode, stderr)
