"""Tests for Docker asset rendering (nestify.resolvers.docker).

Covers:
- Compose services, health checks and volumes per database
- App start command with and without Prisma
- Dockerfile client package and corepack line per package manager
- .dockerignore contents
"""

from __future__ import annotations

import pytest

from nestify.models import ORM, Database, PackageManager
from nestify.resolvers.docker import app_start_command, resolve_docker_assets

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# app_start_command
# ---------------------------------------------------------------------------


class TestAppStartCommand:
    def test_npm_without_prisma(self):
        assert app_start_command(PackageManager.NPM) == (
            "rm -rf node_modules dist && npm install && npm run start:dev"
        )

    def test_prisma_generates_client_first(self):
        assert app_start_command(PackageManager.PNPM, ORM.PRISMA) == (
            "rm -rf node_modules dist && pnpm install && pnpm prisma generate && pnpm run start:dev"
        )

    def test_plain_string_values(self):
        assert "npx prisma generate" in app_start_command("npm", "prisma")


# ---------------------------------------------------------------------------
# Compose document
# ---------------------------------------------------------------------------


class TestCompose:
    def test_mysql_services_and_volumes(self):
        compose = resolve_docker_assets(Database.MYSQL, PackageManager.NPM).compose
        assert "  db:\n" in compose
        assert "  db-test:\n" in compose
        assert "  redis:\n" in compose
        assert "  redis-test:\n" in compose
        assert "image: 'mysql/mysql-server:8.0'" in compose
        assert "mysqladmin" in compose and "'ping'" in compose
        assert "- 'app-mysql:/var/lib/mysql'" in compose
        assert "- 'app-mysql-testing:/var/lib/mysql'" in compose
        assert "  app-mysql:\n    driver: local" in compose
        assert "  app-mysql-testing:\n    driver: local" in compose

    def test_mysql_healthcheck_keeps_env_reference(self):
        compose = resolve_docker_assets(Database.MYSQL, PackageManager.NPM).compose
        assert "'-p${DB_PASSWORD}'" in compose

    def test_postgres_environment(self):
        compose = resolve_docker_assets(Database.POSTGRES, PackageManager.NPM).compose
        assert "POSTGRES_DB: '${DB_NAME}'" in compose
        assert "POSTGRES_DB: '${DB_NAME}_test'" in compose
        assert "pg_isready -U ${DB_USERNAME}" in compose
        assert "app-postgres-testing" in compose

    def test_mongodb_healthcheck(self):
        compose = resolve_docker_assets(Database.MONGODB, PackageManager.NPM).compose
        assert "mongosh localhost:27017/${DB_NAME} --quiet" in compose
        assert "MONGO_INITDB_DATABASE: '${DB_NAME}_test'" in compose

    def test_only_primary_database_forwards_port(self):
        compose = resolve_docker_assets(Database.POSTGRES, PackageManager.NPM).compose
        assert compose.count("${FORWARD_DB_PORT:-5432}:5432") == 1

    def test_app_command_and_port(self):
        compose = resolve_docker_assets(Database.POSTGRES, PackageManager.YARN, ORM.PRISMA).compose
        assert "'${APP_PORT:-3000}:3000'" in compose
        assert 'command: bash -c "rm -rf node_modules dist && yarn && yarn prisma generate' in compose

    def test_plain_string_values_match_enums(self):
        from_strings = resolve_docker_assets("postgres", "npm", "prisma")
        assert from_strings == resolve_docker_assets(Database.POSTGRES, PackageManager.NPM, ORM.PRISMA)
        assert "npx prisma generate" in from_strings.compose

    def test_shared_network(self):
        compose = resolve_docker_assets(Database.MYSQL, PackageManager.NPM).compose
        assert "networks:\n  app-net:\n    driver: bridge" in compose


# ---------------------------------------------------------------------------
# Dockerfile and .dockerignore
# ---------------------------------------------------------------------------


class TestDockerfile:
    @pytest.mark.parametrize(
        "database, client",
        [
            (Database.MYSQL, "mysql-client"),
            (Database.POSTGRES, "postgresql-client"),
            (Database.MONGODB, "mongodb-clients"),
        ],
    )
    def test_client_package(self, database: Database, client: str):
        dockerfile = resolve_docker_assets(database, PackageManager.NPM).dockerfile
        assert f"apt-get install -y {client}" in dockerfile

    def test_npm_has_no_corepack(self):
        dockerfile = resolve_docker_assets(Database.MYSQL, PackageManager.NPM).dockerfile
        assert "corepack" not in dockerfile
        assert 'CMD ["npm", "run", "start:dev"]' in dockerfile

    def test_pnpm_enables_corepack(self):
        dockerfile = resolve_docker_assets(Database.MYSQL, PackageManager.PNPM).dockerfile
        assert "RUN corepack enable && corepack prepare pnpm@latest --activate" in dockerfile
        assert 'CMD ["pnpm", "run", "start:dev"]' in dockerfile

    def test_dockerignore_excludes_node_modules(self):
        assert "node_modules" in resolve_docker_assets(Database.MYSQL, PackageManager.NPM).dockerignore
