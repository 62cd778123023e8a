"""External tools driven during project creation.

Every command goes through ``nestify.utils.run_command`` with an explicit
timeout; failures surface as ``ExternalToolError`` subclasses and the
pipeline decides whether they are fatal.
"""

from nestify.services.formatter import check_formatting, format_project, verify_formatting
from nestify.services.git import init_repository
from nestify.services.installer import has_fatal_output, install_commands, install_dependencies

__all__ = [
    "check_formatting",
    "format_project",
    "has_fatal_output",
    "init_repository",
    "install_commands",
    "install_dependencies",
    "verify_formatting",
]
