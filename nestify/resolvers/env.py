"""Environment-file bodies for a project with a database.

``resolve_database_env`` returns the ``.env`` and ``.env.testing`` bodies.
Host names follow the Docker service aliases when the app runs in compose
and ``localhost`` otherwise; ports, images and URL schemes come from the
per-database table in :mod:`nestify.constants`.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from .. import constants
from ..constants import DATABASES
from ..models import ORM, Database


class DatabaseEnv(NamedTuple):
    """The two environment bodies generated for one database choice."""

    main: str
    test: str


def connection_url(database: Database, host: str, port: int, name: str) -> str:
    """Assemble the single connection-string variable for *database*."""
    profile = DATABASES[database]
    return (
        f"{profile.url_scheme}://{constants.DB_USERNAME}:{constants.DB_PASSWORD}"
        f"@{host}:{port}/{name}{profile.url_options}"
    )


def _database_block(
    database: Database,
    host: str,
    port: int,
    name: str,
    with_url: bool,
    heading: str,
) -> list[str]:
    lines = [
        f"# {heading} - {DATABASES[database].label}",
        f"DB_TYPE={database.value}",
        f"DB_HOST={host}",
        f"DB_PORT={port}",
        f"DB_NAME={name}",
        f"DB_USERNAME={constants.DB_USERNAME}",
        f"DB_PASSWORD={constants.DB_PASSWORD}",
    ]
    if with_url:
        lines.append(f"DATABASE_URL={connection_url(database, host, port, name)}")
    return lines


def _api_block() -> list[str]:
    return [
        "# API",
        f"API_PREFIX={constants.API_PREFIX}",
        f"API_VERSION={constants.API_VERSION}",
    ]


def _join(blocks: list[list[str]]) -> str:
    return "\n\n".join("\n".join(block) for block in blocks) + "\n"


def resolve_database_env(
    project_name: str,
    database: Database,
    use_docker: bool,
    orm: Optional[ORM] = None,
) -> DatabaseEnv:
    """Build the main and testing environment bodies.

    ``DATABASE_URL`` is emitted for Prisma and for MongoDB (Mongoose connects
    by URI).  Without Docker the test database is expected on the alternate
    local port so it can run next to the development instance.
    """
    database = Database(database)
    orm = ORM(orm) if orm is not None else None
    profile = DATABASES[database]
    with_url = orm is ORM.PRISMA or database is Database.MONGODB

    if use_docker:
        db_host, db_test_host = "db", "db-test"
        redis_host, redis_test_host = "redis", "redis-test"
        test_port = profile.port
        redis_port = constants.REDIS_PORT
    else:
        db_host = db_test_host = "localhost"
        redis_host = redis_test_host = "localhost"
        test_port = profile.forward_port
        redis_port = constants.REDIS_LOCAL_PORT

    main_blocks = [
        [
            "# Application",
            f"APP_NAME={project_name}",
            f"APP_PORT={constants.APP_PORT}",
            "NODE_ENV=development",
        ],
        _database_block(database, db_host, profile.port, project_name, with_url, "Database"),
    ]
    if use_docker:
        main_blocks.append(
            [
                "# Database Forwarding Ports (for local access)",
                f"FORWARD_DB_PORT={profile.forward_port}",
            ]
        )
    redis_block = ["# Redis", f"REDIS_HOST={redis_host}", f"REDIS_PORT={redis_port}"]
    if use_docker:
        redis_block.append(f"FORWARD_REDIS_PORT={constants.REDIS_LOCAL_PORT}")
    main_blocks += [
        redis_block,
        [
            "# JWT",
            f"JWT_SECRET={constants.JWT_SECRET}",
            f"JWT_EXPIRES_IN={constants.JWT_EXPIRES_IN}",
        ],
        _api_block(),
    ]

    test_blocks = [
        [
            "# Testing Environment",
            f"APP_NAME={project_name}",
            "NODE_ENV=testing",
        ],
        _database_block(
            database, db_test_host, test_port, f"{project_name}_test", with_url, "Test Database"
        ),
        ["# Test Redis", f"REDIS_HOST={redis_test_host}", f"REDIS_PORT={redis_port}"],
        [
            "# JWT for testing",
            f"JWT_SECRET={constants.JWT_TEST_SECRET}",
            f"JWT_EXPIRES_IN={constants.JWT_TEST_EXPIRES_IN}",
        ],
        _api_block(),
    ]

    return DatabaseEnv(main=_join(main_blocks), test=_join(test_blocks))


def default_env(project_name: str) -> DatabaseEnv:
    """Fallback bodies for a project without a database.

    Points ``DATABASE_URL`` at a local MongoDB so template code that reads it
    needs no separate no-database branch.
    """
    main = _join(
        [
            ["# Environment variables", "NODE_ENV=development", "PORT=3000"],
            ["# Database", f"DATABASE_URL=mongodb://localhost:27017/{project_name}"],
            ["# JWT", "JWT_SECRET=your-secret-key-here", "JWT_EXPIRES_IN=7d"],
            _api_block(),
        ]
    )
    test = _join(
        [
            ["# Testing Environment variables", "NODE_ENV=testing", "PORT=3001"],
            ["# Test Database", f"DATABASE_URL=mongodb://localhost:27017/{project_name}-test"],
            [
                "# JWT for testing",
                f"JWT_SECRET={constants.JWT_TEST_SECRET}",
                f"JWT_EXPIRES_IN={constants.JWT_TEST_EXPIRES_IN}",
            ],
            _api_block(),
        ]
    )
    return DatabaseEnv(main=main, test=test)
