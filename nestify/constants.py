"""Decision tables shared by every resolver and generator.

Each axis of variation (database, package manager) is described exactly once
here.  Resolvers look values up instead of re-deriving them with their own
``if``/``elif`` chains.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import ORM, Database, PackageManager


# ---------------------------------------------------------------------------
# Package managers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PackageManagerProfile:
    """Command vocabulary of one package manager."""

    install: str
    frozen_install: str
    add: str
    add_dev: str
    runner: str
    exec_prefix: str
    cache_key: str
    error_pattern: str
    corepack: str | None = None


PACKAGE_MANAGERS: dict[PackageManager, PackageManagerProfile] = {
    PackageManager.NPM: PackageManagerProfile(
        install="npm install",
        frozen_install="npm ci",
        add="npm install",
        add_dev="npm install --save-dev",
        runner="npm run",
        exec_prefix="npx",
        cache_key="npm",
        error_pattern=r"^npm (ERR!|error)",
    ),
    PackageManager.YARN: PackageManagerProfile(
        install="yarn",
        frozen_install="yarn --frozen-lockfile",
        add="yarn add",
        add_dev="yarn add -D",
        runner="yarn run",
        exec_prefix="yarn",
        cache_key="yarn",
        error_pattern=r"^error\s",
        corepack="corepack enable && corepack prepare yarn@stable --activate",
    ),
    PackageManager.PNPM: PackageManagerProfile(
        install="pnpm install",
        frozen_install="pnpm install --frozen-lockfile",
        add="pnpm add",
        add_dev="pnpm add -D",
        runner="pnpm run",
        exec_prefix="pnpm",
        cache_key="pnpm",
        error_pattern=r"ERR_PNPM_",
        corepack="corepack enable && corepack prepare pnpm@latest --activate",
    ),
}


# ---------------------------------------------------------------------------
# Databases
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatabaseProfile:
    """Everything that differs between the supported database engines."""

    label: str
    port: int
    forward_port: int
    image: str
    client_package: str
    volume: str
    data_dir: str
    prisma_provider: str
    url_scheme: str
    url_options: str
    typeorm_driver: str | None


DATABASES: dict[Database, DatabaseProfile] = {
    Database.MYSQL: DatabaseProfile(
        label="MySQL",
        port=3306,
        forward_port=3307,
        image="mysql/mysql-server:8.0",
        client_package="mysql-client",
        volume="app-mysql",
        data_dir="/var/lib/mysql",
        prisma_provider="mysql",
        url_scheme="mysql",
        url_options="",
        typeorm_driver="mysql2",
    ),
    Database.POSTGRES: DatabaseProfile(
        label="PostgreSQL",
        port=5432,
        forward_port=5433,
        image="postgres:16-alpine",
        client_package="postgresql-client",
        volume="app-postgres",
        data_dir="/var/lib/postgresql/data",
        prisma_provider="postgresql",
        url_scheme="postgresql",
        url_options="?schema=public",
        typeorm_driver="pg",
    ),
    Database.MONGODB: DatabaseProfile(
        label="MongoDB",
        port=27017,
        forward_port=27018,
        image="mongo:7",
        # Not in the ubuntu:24.04 archive; the app image build needs a MongoDB apt
        # source or a different client package before it succeeds.
        client_package="mongodb-clients",
        volume="app-mongo",
        data_dir="/data/db",
        prisma_provider="mongodb",
        url_scheme="mongodb",
        url_options="?authSource=admin",
        typeorm_driver=None,
    ),
}


# ---------------------------------------------------------------------------
# Development placeholders written into generated env files
# ---------------------------------------------------------------------------

APP_PORT = 3000
REDIS_PORT = 6379
REDIS_LOCAL_PORT = 6380
DB_USERNAME = "app_user"
DB_PASSWORD = "app_password_123"
JWT_SECRET = "your-secret-key-here-change-in-production"
JWT_TEST_SECRET = "test-secret-key"
JWT_EXPIRES_IN = "7d"
JWT_TEST_EXPIRES_IN = "1d"
API_PREFIX = "api"
API_VERSION = "1"


# ---------------------------------------------------------------------------
# Node dependencies installed into the generated project
# ---------------------------------------------------------------------------

BASE_DEPENDENCIES: tuple[str, ...] = (
    "@nestjs/common",
    "@nestjs/core",
    "@nestjs/platform-express",
    "@nestjs/config",
    "reflect-metadata",
    "rxjs",
)

SWAGGER_DEPENDENCIES: tuple[str, ...] = ("@nestjs/swagger",)

TYPEORM_DEPENDENCIES: tuple[str, ...] = ("@nestjs/typeorm", "typeorm")

MONGOOSE_DEPENDENCIES: tuple[str, ...] = ("@nestjs/mongoose", "mongoose")

PRISMA_DEPENDENCIES: tuple[str, ...] = ("@prisma/client",)

GRAPHQL_DEPENDENCIES: tuple[str, ...] = (
    "@nestjs/graphql",
    "@nestjs/apollo",
    "@apollo/server",
    "graphql",
    "dataloader",
)

JWT_DEPENDENCIES: tuple[str, ...] = (
    "@nestjs/jwt",
    "@nestjs/passport",
    "passport",
    "passport-jwt",
    "passport-local",
    "bcrypt",
    "class-validator",
    "class-transformer",
)

BASE_DEV_DEPENDENCIES: tuple[str, ...] = (
    "@nestjs/cli",
    "@nestjs/schematics",
    "@nestjs/testing",
    "@types/express",
    "@types/jest",
    "@types/node",
    "@types/supertest",
    "@typescript-eslint/eslint-plugin",
    "@typescript-eslint/parser",
    "@eslint/js",
    "eslint",
    "eslint-config-prettier",
    "eslint-plugin-prettier",
    "jest",
    "prettier",
    "source-map-support",
    "supertest",
    "ts-jest",
    "ts-loader",
    "ts-node",
    "tsconfig-paths",
    "typescript",
    "typescript-eslint",
)

PRISMA_DEV_DEPENDENCIES: tuple[str, ...] = ("prisma",)

JWT_DEV_DEPENDENCIES: tuple[str, ...] = (
    "@types/passport-jwt",
    "@types/passport-local",
    "@types/bcrypt",
)


def orm_label(orm: ORM | None, database: Database | None) -> str:
    """Human-readable name of the mapping layer a configuration ends up with."""
    if database is None:
        return "none"
    if orm is ORM.PRISMA:
        return "Prisma"
    if database is Database.MONGODB:
        return "Mongoose"
    return "TypeORM"
