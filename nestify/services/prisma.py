"""Prisma bootstrap: CLI init, schema patch, client generation and sources.

``prisma init`` exiting zero does not guarantee ``prisma/schema.prisma``
exists, so the file is checked explicitly before it is patched.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path

from ..constants import DATABASES
from ..errors import ExternalToolError, SchemaBootstrapError
from ..models import Database, PackageManager, ProjectConfiguration
from ..rendering import get_renderer
from ..resolvers.commands import get_exec_command
from ..scaffolder.auth import render_auth_user_model
from ..scaffolder.materializer import materialize
from ..utils import run_command

SCHEMA_PATH = "prisma/schema.prisma"

_GENERATOR_BLOCK_RE = re.compile(r"generator\s+client\s*\{[^}]*\}")
_GENERATOR_BLOCK = 'generator client {\n  provider = "prisma-client-js"\n}'


def init_command(package_manager: PackageManager, database: Database) -> str:
    provider = DATABASES[Database(database)].prisma_provider
    return get_exec_command(package_manager, "prisma", f"init --datasource-provider {provider}")


def generate_command(package_manager: PackageManager) -> str:
    return get_exec_command(package_manager, "prisma", "generate")


def migrate_command(package_manager: PackageManager, name: str = "init") -> str:
    return get_exec_command(package_manager, "prisma", f"migrate dev --name {name}")


def patch_schema(schema: str, database: Database, use_auth: bool) -> str:
    """Normalise the generator block and append the model definitions.

    With auth the ``User`` model the auth module expects is appended;
    otherwise example ``User``/``Post`` models for the database family.
    """
    database = Database(database)
    document_store = database is Database.MONGODB
    patched = _GENERATOR_BLOCK_RE.sub(_GENERATOR_BLOCK, schema, count=1)
    if use_auth:
        models = render_auth_user_model(document_store)
    else:
        models = get_renderer().render("prisma/example_models.prisma.j2", {"document_store": document_store})
    if not patched.endswith("\n"):
        patched += "\n"
    return f"{patched}\n{models}"


async def _run_prisma(command: str, step: str, project_path: Path, timeout: int) -> tuple[str, str]:
    returncode, stdout, stderr = await run_command(command, cwd=project_path, timeout=timeout, echo=True)
    if returncode != 0:
        raise ExternalToolError(step, command, returncode, stderr)
    return stdout, stderr


async def initialize(config: ProjectConfiguration, timeout: int = 120) -> Path:
    """Run ``prisma init`` and patch the resulting schema.

    Returns:
        Path of the patched schema file.

    Raises:
        ExternalToolError: The CLI exited non-zero or timed out.
        SchemaBootstrapError: The CLI reported success but no schema exists.
    """
    answers = config.answers
    project_path = config.target_path
    command = init_command(answers.package_manager, answers.database)
    stdout, stderr = await _run_prisma(command, "Prisma init", project_path, timeout)

    schema_path = project_path / SCHEMA_PATH
    if not schema_path.is_file():
        raise SchemaBootstrapError(schema_path, command, stdout, stderr)

    schema = await asyncio.to_thread(schema_path.read_text, encoding="utf-8")
    patched = patch_schema(schema, answers.database, answers.uses_jwt)
    await asyncio.to_thread(schema_path.write_text, patched, encoding="utf-8")
    return schema_path


async def write_client_sources(config: ProjectConfiguration) -> list[Path]:
    """``src/prisma/prisma.service.ts`` and ``prisma.module.ts``."""
    renderer = get_renderer()
    files = {
        "src/prisma/prisma.service.ts": renderer.render("prisma/prisma.service.ts.j2", {}),
        "src/prisma/prisma.module.ts": renderer.render("prisma/prisma.module.ts.j2", {}),
    }
    return await materialize(files, config.target_path)


async def generate_client(config: ProjectConfiguration, timeout: int = 120) -> None:
    await _run_prisma(
        generate_command(config.answers.package_manager), "Prisma generate", config.target_path, timeout
    )


async def migrate(config: ProjectConfiguration, timeout: int = 120, name: str = "init") -> None:
    await _run_prisma(
        migrate_command(config.answers.package_manager, name), "Prisma migrate", config.target_path, timeout
    )


async def bootstrap(config: ProjectConfiguration, timeout: int = 120) -> Path:
    """Init, schema patch, then client generation.

    The ``src/prisma`` sources are written separately by
    ``write_client_sources`` because they do not need installed packages.
    """
    schema_path = await initialize(config, timeout=timeout)
    await generate_client(config, timeout=timeout)
    return schema_path
