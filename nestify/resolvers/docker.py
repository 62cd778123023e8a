"""Docker assets: container recipe, ignore list and compose document.

The compose document always declares the app, a primary and a test database,
a cache and a test cache, one shared network and one named volume per
stateful service.  Volume names carry the database engine so regenerating a
project for another engine never reuses an incompatible data volume.
"""

from __future__ import annotations

from typing import Any, NamedTuple, Optional

from .. import constants
from ..constants import DATABASES, PACKAGE_MANAGERS
from ..models import ORM, Database, PackageManager
from ..rendering import get_renderer
from .commands import get_exec_command, get_install_command, get_run_command


class DockerAssets(NamedTuple):
    dockerfile: str
    dockerignore: str
    compose: str


# Container environment per engine.  ``{db_name}`` is the compose-level
# database-name expression for the service being rendered.
_DB_ENVIRONMENT: dict[Database, list[tuple[str, str]]] = {
    Database.MYSQL: [
        ("MYSQL_ROOT_PASSWORD", "'${DB_PASSWORD}'"),
        ("MYSQL_ROOT_HOST", "'%'"),
        ("MYSQL_DATABASE", "'{db_name}'"),
        ("MYSQL_USER", "'${DB_USERNAME}'"),
        ("MYSQL_PASSWORD", "'${DB_PASSWORD}'"),
        ("MYSQL_ALLOW_EMPTY_PASSWORD", "1"),
    ],
    Database.POSTGRES: [
        ("POSTGRES_USER", "'${DB_USERNAME}'"),
        ("POSTGRES_PASSWORD", "'${DB_PASSWORD}'"),
        ("POSTGRES_DB", "'{db_name}'"),
    ],
    Database.MONGODB: [
        ("MONGO_INITDB_ROOT_USERNAME", "'${DB_USERNAME}'"),
        ("MONGO_INITDB_ROOT_PASSWORD", "'${DB_PASSWORD}'"),
        ("MONGO_INITDB_DATABASE", "'{db_name}'"),
    ],
}

_HEALTHCHECKS: dict[Database, str] = {
    Database.MYSQL: "['CMD', 'mysqladmin', 'ping', '-p${{DB_PASSWORD}}']",
    Database.POSTGRES: "['CMD-SHELL', 'pg_isready -U ${{DB_USERNAME}}']",
    Database.MONGODB: (
        "echo 'db.runCommand(\"ping\").ok' | mongosh localhost:{port}/{db_name} --quiet"
    ),
}


def app_start_command(package_manager: PackageManager, orm: Optional[ORM] = None) -> str:
    """Shell line the app container runs on start.

    Dependencies are reinstalled inside the container; the Prisma client is
    generated before the dev server only when Prisma is the ORM.
    """
    orm = ORM(orm) if orm is not None else None
    steps = ["rm -rf node_modules dist", get_install_command(package_manager)]
    if orm is ORM.PRISMA:
        steps.append(get_exec_command(package_manager, "prisma", "generate"))
    steps.append(get_run_command(package_manager, "start:dev"))
    return " && ".join(steps)


def _db_service(database: Database, name: str, db_name: str, testing: bool) -> dict[str, Any]:
    profile = DATABASES[database]
    environment = [
        (key, value.replace("{db_name}", db_name)) for key, value in _DB_ENVIRONMENT[database]
    ]
    return {
        "name": name,
        "forward": not testing,
        "environment": environment,
        "volume": f"{profile.volume}-testing" if testing else profile.volume,
        "healthcheck": _HEALTHCHECKS[database].format(port=profile.port, db_name=db_name),
    }


def resolve_docker_assets(
    database: Database,
    package_manager: PackageManager,
    orm: Optional[ORM] = None,
) -> DockerAssets:
    """Render the three Docker artifacts for one database/package-manager pair."""
    database = Database(database)
    package_manager = PackageManager(package_manager)
    orm = ORM(orm) if orm is not None else None
    profile = DATABASES[database]
    renderer = get_renderer()

    context: dict[str, Any] = {
        "db": profile,
        "package_manager": package_manager.value,
        "corepack": PACKAGE_MANAGERS[package_manager].corepack,
        "app_port": constants.APP_PORT,
        "redis_port": constants.REDIS_PORT,
        "app_command": app_start_command(package_manager, orm),
        "db_services": [
            _db_service(database, "db", "${DB_NAME}", testing=False),
            _db_service(database, "db-test", "${DB_NAME}_test", testing=True),
        ],
        "volumes": [
            profile.volume,
            f"{profile.volume}-testing",
            "app-redis",
            "app-redis-testing",
        ],
    }

    return DockerAssets(
        dockerfile=renderer.render("docker/Dockerfile.j2", context),
        dockerignore=renderer.render("docker/dockerignore.j2", context),
        compose=renderer.render("docker/docker-compose.yml.j2", context),
    )
