"""Tests for the file generators (nestify.scaffolder.generators).

Covers:
- Registry order and path collision detection
- Determinism of the full generator run
- .env / .env.example symmetry
- Docker, database-module and GraphQL gating
- package.json scripts with and without Prisma
- Source boilerplate toggles (Swagger, ValidationPipe, module imports)
- End-to-end scenarios for common configurations
"""

from __future__ import annotations

import json

import pytest

from nestify.config import Settings
from nestify.errors import GenerationError
from nestify.scaffolder.generators import (
    DATABASE_MODULE_PATH,
    GENERATORS,
    PRISMA_MARKER_PATH,
    SKELETON_DIRECTORIES,
    generate_all,
    generate_base_files,
    generate_config_files,
    generate_database_files,
    generate_docker_files,
    generate_environment_files,
    generate_github_actions_files,
    generate_graphql_files,
    generate_readme,
    generate_source_files,
    generate_structure,
    generate_test_files,
    iter_file_sets,
)

pytestmark = pytest.mark.unit

CONFIG_VARIANTS = [
    {},
    {"database": "mysql", "use_docker": True},
    {"database": "postgres", "orm": "prisma", "package_manager": "pnpm"},
    {"database": "mongodb", "use_docker": True, "use_graphql": True, "package_manager": "yarn"},
    {"database": "mongodb", "orm": "prisma", "use_swagger": False, "use_github_actions": False},
    {"database": "postgres", "use_auth": True, "auth_strategies": frozenset({"jwt"})},
]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_order(self):
        assert [name for name, _ in GENERATORS] == [
            "base",
            "source",
            "database",
            "test",
            "environment",
            "config",
            "docker",
            "graphql",
            "github-actions",
            "readme",
        ]

    @pytest.mark.parametrize("answers", CONFIG_VARIANTS)
    def test_no_path_collisions(self, make_config, answers):
        seen: set[str] = set()
        for _name, files in iter_file_sets(make_config(**answers)):
            assert seen.isdisjoint(files)
            seen.update(files)

    def test_collision_raises(self, make_config):
        generators = (
            ("first", lambda config, settings: {"README.md": "a"}),
            ("second", lambda config, settings: {"README.md": "b"}),
        )
        with pytest.raises(GenerationError, match="already generated by the first generator"):
            list(iter_file_sets(make_config(), generators=generators))

    def test_generator_exception_is_wrapped(self, make_config):
        def broken(config, settings):
            raise KeyError("missing")

        with pytest.raises(GenerationError) as excinfo:
            list(iter_file_sets(make_config(), generators=(("broken", broken),)))
        assert excinfo.value.generator == "broken"
        assert isinstance(excinfo.value.__cause__, KeyError)

    @pytest.mark.parametrize("answers", CONFIG_VARIANTS)
    def test_deterministic(self, make_config, answers):
        config = make_config(**answers)
        assert generate_all(config) == generate_all(config)

    def test_paths_are_relative_forward_slash(self, make_config):
        for path in generate_all(make_config(database="mysql", use_docker=True, use_graphql=True)):
            assert not path.startswith("/")
            assert "\\" not in path


# ---------------------------------------------------------------------------
# Structure and base files
# ---------------------------------------------------------------------------


class TestStructureAndBase:
    def test_structure_markers(self, make_config):
        files = generate_structure(make_config())
        assert len(files) == len(SKELETON_DIRECTORIES)
        assert "src/common/guards/.gitkeep" in files
        assert all(content == "" for content in files.values())

    def test_base_files(self, make_config):
        files = generate_base_files(make_config())
        assert set(files) == {"package.json", "tsconfig.json", "tsconfig.build.json", "nest-cli.json"}

    def test_package_json_scripts(self, make_config):
        data = json.loads(generate_base_files(make_config("shop", description="Shop API"))["package.json"])
        assert data["name"] == "shop"
        assert data["description"] == "Shop API"
        for script in ("build", "start", "start:dev", "start:prod", "lint", "test", "test:cov", "test:e2e"):
            assert script in data["scripts"]
        assert not any(name.startswith("prisma:") for name in data["scripts"])
        assert data["dependencies"] == {}

    def test_package_json_prisma_scripts(self, make_config):
        config = make_config(database="postgres", orm="prisma")
        scripts = json.loads(generate_base_files(config)["package.json"])["scripts"]
        assert scripts["prisma:generate"] == "prisma generate"
        assert scripts["prisma:migrate"] == "prisma migrate dev"
        assert scripts["prisma:studio"] == "prisma studio"


# ---------------------------------------------------------------------------
# Source files
# ---------------------------------------------------------------------------


class TestSourceFiles:
    def test_file_set(self, make_config):
        assert set(generate_source_files(make_config())) == {
            "src/main.ts",
            "src/app.module.ts",
            "src/app.controller.ts",
            "src/app.service.ts",
            "src/app.controller.spec.ts",
            "src/app.service.spec.ts",
        }

    def test_swagger_wiring(self, make_config):
        main = generate_source_files(make_config("shop"))["src/main.ts"]
        assert "SwaggerModule.setup('api/docs', app, document);" in main
        assert '.setTitle("shop")' in main
        assert "ValidationPipe" not in main

    def test_swagger_disabled(self, make_config):
        main = generate_source_files(make_config(use_swagger=False))["src/main.ts"]
        assert "Swagger" not in main

    def test_description_is_quoted(self, make_config):
        main = generate_source_files(make_config(description="It's \"quoted\""))["src/main.ts"]
        assert '.setDescription("It\\u0027s \\"quoted\\"")' in main

    def test_auth_adds_validation_pipe(self, make_config, auth_answers):
        files = generate_source_files(make_config(**auth_answers))
        assert "new ValidationPipe(" in files["src/main.ts"]
        assert "AuthModule," in files["src/app.module.ts"]

    def test_module_imports(self, make_config):
        typeorm = generate_source_files(make_config(database="mysql"))["src/app.module.ts"]
        prisma = generate_source_files(make_config(database="mysql", orm="prisma"))["src/app.module.ts"]
        graphql = generate_source_files(make_config(use_graphql=True))["src/app.module.ts"]
        assert "DatabaseModule," in typeorm and "PrismaModule" not in typeorm
        assert "PrismaModule," in prisma and "DatabaseModule" not in prisma
        assert "GraphqlModule," in graphql


# ---------------------------------------------------------------------------
# Database module
# ---------------------------------------------------------------------------


class TestDatabaseFiles:
    def test_no_database(self, make_config):
        assert generate_database_files(make_config()) == {}

    def test_prisma_emits_only_marker(self, make_config):
        files = generate_database_files(make_config(database="postgres", orm="prisma"))
        assert files == {PRISMA_MARKER_PATH: ""}

    @pytest.mark.parametrize("database", ["mysql", "postgres"])
    def test_typeorm_module(self, make_config, database):
        files = generate_database_files(make_config(database=database))
        assert list(files) == [DATABASE_MODULE_PATH]
        module = files[DATABASE_MODULE_PATH]
        assert "TypeOrmModule.forRootAsync" in module
        assert f"type: '{database}'" in module
        assert "configService.get<string>('DB_PASSWORD')" in module
        assert "app_password_123" not in module

    def test_mongoose_module(self, make_config):
        module = generate_database_files(make_config(database="mongodb"))[DATABASE_MODULE_PATH]
        assert "MongooseModule.forRootAsync" in module
        assert "configService.get<string>('DATABASE_URL')" in module
        assert "mongodb://" not in module


# ---------------------------------------------------------------------------
# Environment, test and config files
# ---------------------------------------------------------------------------


class TestEnvironmentFiles:
    @pytest.mark.parametrize("answers", CONFIG_VARIANTS)
    def test_example_copies_are_identical(self, make_config, answers):
        files = generate_environment_files(make_config(**answers))
        assert set(files) == {".env", ".env.example", ".env.testing", ".env.testing.example"}
        assert files[".env"] == files[".env.example"]
        assert files[".env.testing"] == files[".env.testing.example"]


class TestTestAndConfigFiles:
    def test_test_files(self, make_config):
        files = generate_test_files(make_config())
        assert set(files) == {"test/app.e2e-spec.ts", "test/jest-e2e.json"}
        assert json.loads(files["test/jest-e2e.json"])["testRegex"] == ".e2e-spec.ts$"

    def test_config_files(self, make_config):
        files = generate_config_files(make_config())
        assert set(files) == {".gitignore", "eslint.config.mjs", ".prettierrc"}
        assert json.loads(files[".prettierrc"])["singleQuote"] is True
        assert "node_modules" in files[".gitignore"]


# ---------------------------------------------------------------------------
# Optional features
# ---------------------------------------------------------------------------


class TestOptionalFeatures:
    def test_docker_requires_flag(self, make_config):
        assert generate_docker_files(make_config(database="mysql")) == {}

    def test_docker_requires_database(self, make_config):
        assert generate_docker_files(make_config(use_docker=True)) == {}

    def test_docker_emits_three_files(self, make_config):
        files = generate_docker_files(make_config(database="postgres", use_docker=True))
        assert set(files) == {"Dockerfile", ".dockerignore", "docker-compose.yml"}

    def test_graphql_gating(self, make_config):
        assert generate_graphql_files(make_config()) == {}
        assert set(generate_graphql_files(make_config(use_graphql=True))) == {
            "src/graphql/graphql.module.ts",
            "src/graphql/schemas/base.schema.ts",
            "src/graphql/resolvers/app.resolver.ts",
        }

    def test_github_actions_gating(self, make_config):
        assert generate_github_actions_files(make_config(use_github_actions=False)) == {}
        files = generate_github_actions_files(make_config())
        assert list(files) == [".github/workflows/tests.yml"]

    def test_github_actions_uses_settings(self, make_config):
        settings = Settings(node_versions=["20.x", "22.x"])
        workflow = generate_github_actions_files(make_config(), settings)[".github/workflows/tests.yml"]
        assert "node-version: [20.x, 22.x]" in workflow


class TestReadme:
    def test_sections_follow_features(self, make_config):
        readme = generate_readme(make_config("shop", use_github_actions=False))["README.md"]
        assert readme.startswith("# shop\n")
        assert "npm install" in readme
        assert "Prisma" not in readme
        assert "docker-compose up" not in readme

    def test_prisma_and_docker_sections(self, make_config):
        config = make_config(database="postgres", orm="prisma", use_docker=True, package_manager="pnpm")
        readme = generate_readme(config)["README.md"]
        assert "pnpm prisma migrate dev" in readme
        assert "docker-compose up" in readme

    def test_auth_endpoints(self, make_config, auth_answers):
        readme = generate_readme(make_config(**auth_answers))["README.md"]
        assert "/api/auth/register" in readme


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_mysql_typeorm_docker_npm(self, make_config):
        files = generate_all(make_config(database="mysql", orm="typeorm", use_docker=True))
        compose = files["docker-compose.yml"]
        assert "mysqladmin" in compose
        assert "app-mysql:" in compose and "app-mysql-testing:" in compose
        assert DATABASE_MODULE_PATH in files
        env_lines = files[".env"].splitlines()
        assert "DB_TYPE=mysql" in env_lines
        assert "DB_PORT=3306" in env_lines

    def test_postgres_prisma_without_docker(self, make_config):
        files = generate_all(make_config(database="postgres", orm="prisma"))
        assert "docker-compose.yml" not in files
        assert "DATABASE_URL=postgresql://" in files[".env"]
        assert DATABASE_MODULE_PATH not in files
        assert "prisma/schema.prisma" not in files

    def test_no_database(self, make_config):
        files = generate_all(make_config("shop", use_docker=True))
        assert "DATABASE_URL=mongodb://localhost:27017/shop" in files[".env"].splitlines()
        assert DATABASE_MODULE_PATH not in files
        assert "Dockerfile" not in files
        assert "docker-compose.yml" not in files
