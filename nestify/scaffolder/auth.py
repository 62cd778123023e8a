"""JWT authentication scaffolding.

Auth sources import packages (bcrypt, passport, @nestjs/jwt) that only exist
after dependency installation, so this generator is not part of the ordered
registry: the command flow invokes it explicitly once the install step has
succeeded.
"""

from __future__ import annotations

from typing import Optional

from ..config import Settings
from ..models import FileSet, ProjectConfiguration
from ..rendering import get_renderer
from .context import build_context

USER_MODEL_NOTE_PATH = "prisma/USER_MODEL.md"

# Files every ORM variant shares: output path -> template.
_COMMON_TEMPLATES: dict[str, str] = {
    "src/modules/auth/auth.module.ts": "auth/auth.module.ts.j2",
    "src/modules/auth/controllers/auth.controller.ts": "auth/auth.controller.ts.j2",
    "src/modules/auth/services/auth.service.ts": "auth/auth.service.ts.j2",
    "src/modules/auth/services/auth.service.spec.ts": "auth/auth.service.spec.ts.j2",
    "src/modules/auth/dto/register.dto.ts": "auth/register.dto.ts.j2",
    "src/modules/auth/dto/login.dto.ts": "auth/login.dto.ts.j2",
    "src/modules/auth/strategies/jwt.strategy.ts": "auth/jwt.strategy.ts.j2",
    "src/modules/auth/strategies/local.strategy.ts": "auth/local.strategy.ts.j2",
    "src/common/guards/jwt-auth.guard.ts": "auth/jwt-auth.guard.ts.j2",
    "src/common/guards/local-auth.guard.ts": "auth/local-auth.guard.ts.j2",
    "src/modules/user/user.module.ts": "auth/user.module.ts.j2",
    "src/modules/user/controllers/user.controller.ts": "auth/user.controller.ts.j2",
    "src/modules/user/services/user.service.ts": "auth/user.service.ts.j2",
    "src/modules/user/services/user.service.spec.ts": "auth/user.service.spec.ts.j2",
    "test/auth.e2e-spec.ts": "auth/auth.e2e-spec.ts.j2",
}

TYPEORM_ENTITY_PATH = "src/database/entities/user.entity.ts"
MONGOOSE_SCHEMA_PATH = "src/modules/user/schemas/user.schema.ts"


def render_auth_user_model(document_store: bool) -> str:
    """Prisma ``User`` model block used by the auth module."""
    return get_renderer().render("prisma/auth_user.prisma.j2", {"document_store": document_store})


def generate_auth_files(config: ProjectConfiguration, settings: Optional[Settings] = None) -> FileSet:
    """Auth module, user module, guards and strategies.

    Returns an empty set unless authentication with the ``jwt`` strategy was
    requested.  Exactly one user adapter is emitted: a TypeORM entity, a
    Mongoose schema, or (for Prisma) a note describing the model the schema
    must contain.
    """
    answers = config.answers
    if not answers.uses_jwt:
        return {}

    context = build_context(config)
    renderer = get_renderer()
    files: FileSet = {path: renderer.render(tpl, context) for path, tpl in _COMMON_TEMPLATES.items()}

    if answers.uses_typeorm:
        files[TYPEORM_ENTITY_PATH] = renderer.render("auth/user.entity.ts.j2", context)
    elif answers.uses_mongoose:
        files[MONGOOSE_SCHEMA_PATH] = renderer.render("auth/user.schema.ts.j2", context)
    else:
        user_model = render_auth_user_model(context["document_store"])
        files[USER_MODEL_NOTE_PATH] = renderer.render(
            "auth/USER_MODEL.md.j2", {**context, "user_model": user_model}
        )
    return files
