"""Pure resolvers mapping configuration enums to emitted text.

Nothing here touches the filesystem or spawns processes.
"""

from nestify.resolvers.commands import get_exec_command, get_install_command, get_run_command
from nestify.resolvers.dependencies import DependencySet, resolve_dependencies
from nestify.resolvers.docker import DockerAssets, app_start_command, resolve_docker_assets
from nestify.resolvers.env import DatabaseEnv, connection_url, default_env, resolve_database_env
from nestify.resolvers.github_actions import WORKFLOW_PATH, resolve_test_workflow

__all__ = [
    "DatabaseEnv",
    "DependencySet",
    "DockerAssets",
    "WORKFLOW_PATH",
    "app_start_command",
    "connection_url",
    "default_env",
    "get_exec_command",
    "get_install_command",
    "get_run_command",
    "resolve_database_env",
    "resolve_dependencies",
    "resolve_docker_assets",
    "resolve_test_workflow",
]
