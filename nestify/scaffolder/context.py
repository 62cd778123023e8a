"""Template context shared by every generator."""

from __future__ import annotations

from typing import Any

from .. import constants
from ..constants import PACKAGE_MANAGERS, orm_label
from ..models import Database, ProjectConfiguration
from ..resolvers.commands import get_install_command


def build_context(config: ProjectConfiguration) -> dict[str, Any]:
    """Flatten a ``ProjectConfiguration`` into template variables.

    Everything here is derived from the configuration alone, so rendering the
    same configuration twice yields byte-identical files.
    """
    answers = config.answers
    profile = PACKAGE_MANAGERS[answers.package_manager]
    return {
        "project_name": config.name,
        "description": answers.description,
        "author": answers.author,
        "package_manager": answers.package_manager.value,
        "install_command": get_install_command(answers.package_manager),
        "run": profile.runner,
        "exec": profile.exec_prefix,
        "database": answers.database.value if answers.database else None,
        "document_store": answers.database is Database.MONGODB,
        "orm_label": orm_label(answers.orm, answers.database),
        "uses_typeorm": answers.uses_typeorm,
        "uses_mongoose": answers.uses_mongoose,
        "uses_prisma": answers.uses_prisma,
        "uses_jwt": answers.uses_jwt,
        "use_docker": answers.use_docker,
        "use_compose": answers.use_docker and answers.database is not None,
        "use_swagger": answers.use_swagger,
        "use_graphql": answers.use_graphql,
        "use_github_actions": answers.use_github_actions,
        "app_port": constants.APP_PORT,
        "jwt_expires_in": constants.JWT_EXPIRES_IN,
    }
