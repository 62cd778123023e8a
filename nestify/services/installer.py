"""Dependency installation through the selected package manager.

Runtime and development packages go in as two sequential commands so a
failure can be attributed to one batch.  A zero exit is not trusted on its
own: stderr is scanned for the package manager's hard-error marker.
Warning-level noise on stderr is ignored.
"""

from __future__ import annotations

import re
from pathlib import Path

from ..constants import PACKAGE_MANAGERS
from ..errors import InstallError
from ..models import PackageManager, ProjectAnswers
from ..resolvers.commands import get_install_command
from ..resolvers.dependencies import resolve_dependencies
from ..utils import run_command


def install_commands(answers: ProjectAnswers) -> list[str]:
    """The two install commands for *answers*: runtime batch, then dev batch.

    These are also the manual-recovery instructions printed on failure and
    the follow-up steps printed under ``--skip-install``.
    """
    deps = resolve_dependencies(answers)
    return [
        get_install_command(answers.package_manager, deps.dependencies),
        get_install_command(answers.package_manager, deps.dev_dependencies, is_dev=True),
    ]


def has_fatal_output(package_manager: PackageManager, stderr: str) -> bool:
    """True when *stderr* carries the tool's hard-error marker."""
    pattern = PACKAGE_MANAGERS[PackageManager(package_manager)].error_pattern
    return re.search(pattern, stderr or "", re.MULTILINE) is not None


async def install_dependencies(
    project_path: Path,
    answers: ProjectAnswers,
    timeout: int = 300,
) -> list[str]:
    """Install both package batches inside *project_path*.

    Args:
        project_path: Root of the generated project.
        answers: Resolved preferences; select package manager and packages.
        timeout: Seconds allowed per command.

    Returns:
        The commands that ran, in order.

    Raises:
        InstallError: A command exited non-zero, timed out, or reported a
            fatal error on stderr.  ``recovery_commands`` holds both batches.
    """
    commands = install_commands(answers)
    for command in commands:
        returncode, _stdout, stderr = await run_command(command, cwd=project_path, timeout=timeout, echo=True)
        if returncode != 0 or has_fatal_output(answers.package_manager, stderr):
            raise InstallError(
                command=command,
                returncode=returncode,
                stderr=stderr,
                recovery_commands=list(commands),
            )
    return commands
