"""Code formatting via the generated project's own ``format`` script."""

from __future__ import annotations

from pathlib import Path

from ..errors import ExternalToolError
from ..models import PackageManager
from ..resolvers.commands import get_exec_command, get_run_command
from ..utils import run_command


def check_command(package_manager: PackageManager) -> str:
    return get_exec_command(package_manager, "prettier", '--check "src/**/*.ts" "test/**/*.ts"')


async def format_project(project_path: Path, package_manager: PackageManager, timeout: int = 120) -> str:
    """Run ``<pm> run format`` in *project_path*.

    Raises:
        ExternalToolError: The script failed or timed out.  The command flow
            downgrades this to a warning.
    """
    command = get_run_command(package_manager, "format")
    returncode, stdout, stderr = await run_command(command, cwd=project_path, timeout=timeout)
    if returncode != 0:
        raise ExternalToolError("Code formatting", command, returncode, stderr or stdout)
    return command


async def check_formatting(project_path: Path, package_manager: PackageManager, timeout: int = 120) -> bool:
    """True when prettier reports every source file as already formatted."""
    returncode, _stdout, _stderr = await run_command(
        check_command(package_manager), cwd=project_path, timeout=timeout
    )
    return returncode == 0


async def verify_formatting(project_path: Path, package_manager: PackageManager, timeout: int = 120) -> None:
    """Raise ``ExternalToolError`` when the formatted tree still fails ``prettier --check``."""
    if not await check_formatting(project_path, package_manager, timeout=timeout):
        raise ExternalToolError(
            "Formatting check",
            check_command(package_manager),
            1,
            "prettier reported files that are not formatted",
        )
