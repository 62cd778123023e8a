"""Package-manager command strings.

The only place that knows how each package manager spells install, add,
run and exec.  The CI workflow, Docker assets, README, installer and the
manual-recovery guidance all read from here so they can never drift apart.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..constants import PACKAGE_MANAGERS
from ..models import PackageManager


def get_install_command(
    package_manager: PackageManager,
    packages: Optional[Iterable[str]] = None,
    is_dev: bool = False,
    frozen: bool = False,
) -> str:
    """Return the literal install invocation for *package_manager*.

    Args:
        package_manager: Tool the command is written for.
        packages: Packages to add.  ``None`` or empty gives the bare install.
        is_dev: Add *packages* as development dependencies.
        frozen: Bare install that refuses to touch the lockfile (used in CI).

    Examples::

        get_install_command(PackageManager.YARN)                      -> "yarn"
        get_install_command(PackageManager.PNPM, ["rxjs"], is_dev=True) -> "pnpm add -D rxjs"
    """
    profile = PACKAGE_MANAGERS[PackageManager(package_manager)]
    names = list(packages or ())
    if not names:
        return profile.frozen_install if frozen else profile.install
    verb = profile.add_dev if is_dev else profile.add
    return f"{verb} {' '.join(names)}"


def get_run_command(package_manager: PackageManager, script: str) -> str:
    """``npm run build``, ``yarn run build`` ..."""
    return f"{PACKAGE_MANAGERS[PackageManager(package_manager)].runner} {script}"


def get_exec_command(package_manager: PackageManager, binary: str, args: str = "") -> str:
    """Invoke a locally installed binary, e.g. ``npx prisma generate``."""
    prefix = PACKAGE_MANAGERS[PackageManager(package_manager)].exec_prefix
    command = f"{prefix} {binary}"
    return f"{command} {args}" if args else command
