"""GitHub Actions test workflow."""

from __future__ import annotations

from typing import Optional, Sequence

from ..config import Settings
from ..constants import PACKAGE_MANAGERS
from ..models import PackageManager
from ..rendering import get_renderer
from .commands import get_install_command

WORKFLOW_PATH = ".github/workflows/tests.yml"

# Written literally into the workflow; GitHub expands it per matrix entry.
_MATRIX_NODE_VERSION = "${{ matrix.node-version }}"


def resolve_test_workflow(
    package_manager: PackageManager,
    node_versions: Optional[Sequence[str]] = None,
) -> str:
    """Render the two-stage workflow: a test matrix, then a build gated on it.

    The install step uses the lockfile-respecting form of the same command
    table the installer uses, and the dependency cache is keyed by the
    package manager name.
    """
    package_manager = PackageManager(package_manager)
    versions = list(node_versions or Settings().node_versions)
    if len(versions) < 2:
        raise ValueError("the test matrix needs at least two runtime versions")

    context = {
        "node_versions": versions,
        "build_node_version": versions[0],
        "matrix_node_version": _MATRIX_NODE_VERSION,
        "cache_key": PACKAGE_MANAGERS[package_manager].cache_key,
        "install_command": get_install_command(package_manager, frozen=True),
        "run": PACKAGE_MANAGERS[package_manager].runner,
    }
    return get_renderer().render("github/tests.yml.j2", context)
