"""File generators.

Each generator takes the full ``ProjectConfiguration`` and returns a
``FileSet`` (relative forward-slash path -> content) for one logical group of
files.  Generators are pure: no filesystem access, no clock, no randomness.
``iter_file_sets`` runs them in the fixed order the command flow relies on
and enforces that no two generators claim the same path.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Iterator, Optional

from ..config import Settings
from ..errors import GenerationError, NestifyError
from ..models import FileSet, ProjectConfiguration
from ..rendering import get_renderer
from ..resolvers.docker import resolve_docker_assets
from ..resolvers.env import default_env, resolve_database_env
from ..resolvers.github_actions import WORKFLOW_PATH, resolve_test_workflow
from .context import build_context

Generator = Callable[[ProjectConfiguration, Optional[Settings]], FileSet]

# Conventional empty directories of a NestJS project.
SKELETON_DIRECTORIES: tuple[str, ...] = (
    "src/common/decorators",
    "src/common/enums",
    "src/common/filters",
    "src/common/guards",
    "src/common/interceptors",
    "src/common/pipes",
    "src/common/middleware",
    "src/modules",
    "src/shared/services",
    "src/shared/utils",
)


def _json(data: Any) -> str:
    return json.dumps(data, indent=2) + "\n"


def _render_all(templates: dict[str, str], context: dict[str, Any]) -> FileSet:
    """Render ``{output path: template path}`` into a file set."""
    renderer = get_renderer()
    return {path: renderer.render(template, context) for path, template in templates.items()}


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------


def generate_structure(config: ProjectConfiguration, settings: Optional[Settings] = None) -> FileSet:
    """``.gitkeep`` markers so the conventional directories exist on disk."""
    return {f"{directory}/.gitkeep": "" for directory in SKELETON_DIRECTORIES}


# ---------------------------------------------------------------------------
# Base files
# ---------------------------------------------------------------------------


def package_json(config: ProjectConfiguration) -> dict[str, Any]:
    """The ``package.json`` document.

    Dependencies are left empty: the installer adds them with the package
    manager so the lockfile records resolved versions.
    """
    answers = config.answers
    scripts = {
        "build": "nest build",
        "format": 'prettier --write "src/**/*.ts" "test/**/*.ts"',
        "start": "nest start",
        "start:dev": "nest start --watch",
        "start:debug": "nest start --debug --watch",
        "start:prod": "node dist/main",
        "lint": 'eslint "{src,apps,libs,test}/**/*.ts" --fix',
        "test": "jest",
        "test:watch": "jest --watch",
        "test:cov": "jest --coverage",
        "test:debug": (
            "node --inspect-brk -r tsconfig-paths/register -r ts-node/register "
            "node_modules/.bin/jest --runInBand"
        ),
        "test:e2e": "jest --config ./test/jest-e2e.json",
    }
    if answers.uses_prisma:
        scripts["prisma:generate"] = "prisma generate"
        scripts["prisma:migrate"] = "prisma migrate dev"
        scripts["prisma:studio"] = "prisma studio"

    return {
        "name": config.name,
        "version": "0.0.1",
        "description": answers.description,
        "author": answers.author,
        "private": True,
        "license": "UNLICENSED",
        "scripts": scripts,
        "dependencies": {},
        "devDependencies": {},
        "jest": {
            "moduleFileExtensions": ["js", "json", "ts"],
            "rootDir": "src",
            "testRegex": ".*\\.spec\\.ts$",
            "transform": {"^.+\\.(t|j)s$": "ts-jest"},
            "collectCoverageFrom": ["**/*.(t|j)s"],
            "coverageDirectory": "../coverage",
            "testEnvironment": "node",
        },
    }


_TSCONFIG: dict[str, Any] = {
    "compilerOptions": {
        "module": "commonjs",
        "declaration": True,
        "removeComments": True,
        "emitDecoratorMetadata": True,
        "experimentalDecorators": True,
        "allowSyntheticDefaultImports": True,
        "target": "ES2021",
        "sourceMap": True,
        "outDir": "./dist",
        "baseUrl": "./",
        "incremental": True,
        "skipLibCheck": True,
        "strictNullChecks": False,
        "noImplicitAny": False,
        "strictBindCallApply": False,
        "forceConsistentCasingInFileNames": False,
        "noFallthroughCasesInSwitch": False,
    },
}

_TSCONFIG_BUILD: dict[str, Any] = {
    "extends": "./tsconfig.json",
    "exclude": ["node_modules", "test", "dist", "**/*spec.ts"],
}

_NEST_CLI: dict[str, Any] = {
    "$schema": "https://json.schemastore.org/nest-cli",
    "collection": "@nestjs/schematics",
    "sourceRoot": "src",
    "compilerOptions": {"deleteOutDir": True},
}


def generate_base_files(config: ProjectConfiguration, settings: Optional[Settings] = None) -> FileSet:
    return {
        "package.json": _json(package_json(config)),
        "tsconfig.json": _json(_TSCONFIG),
        "tsconfig.build.json": _json(_TSCONFIG_BUILD),
        "nest-cli.json": _json(_NEST_CLI),
    }


# ---------------------------------------------------------------------------
# Source, database and test files
# ---------------------------------------------------------------------------


def generate_source_files(config: ProjectConfiguration, settings: Optional[Settings] = None) -> FileSet:
    return _render_all(
        {
            "src/main.ts": "source/main.ts.j2",
            "src/app.module.ts": "source/app.module.ts.j2",
            "src/app.controller.ts": "source/app.controller.ts.j2",
            "src/app.service.ts": "source/app.service.ts.j2",
            "src/app.controller.spec.ts": "source/app.controller.spec.ts.j2",
            "src/app.service.spec.ts": "source/app.service.spec.ts.j2",
        },
        build_context(config),
    )


DATABASE_MODULE_PATH = "src/database/database.module.ts"
PRISMA_MARKER_PATH = "src/prisma/.gitkeep"


def generate_database_files(config: ProjectConfiguration, settings: Optional[Settings] = None) -> FileSet:
    """The persistence module, sourcing every connection parameter from config.

    With Prisma only a marker is emitted: the schema and client come from the
    Prisma CLI after dependencies are installed.
    """
    answers = config.answers
    if answers.database is None:
        return {}
    if answers.uses_prisma:
        return {PRISMA_MARKER_PATH: ""}
    template = "database/typeorm.module.ts.j2" if answers.uses_typeorm else "database/mongoose.module.ts.j2"
    return _render_all({DATABASE_MODULE_PATH: template}, build_context(config))


def generate_test_files(config: ProjectConfiguration, settings: Optional[Settings] = None) -> FileSet:
    files = _render_all({"test/app.e2e-spec.ts": "test/app.e2e-spec.ts.j2"}, build_context(config))
    files["test/jest-e2e.json"] = _json(
        {
            "moduleFileExtensions": ["js", "json", "ts"],
            "rootDir": ".",
            "testEnvironment": "node",
            "testRegex": ".e2e-spec.ts$",
            "transform": {"^.+\\.(t|j)s$": "ts-jest"},
            "collectCoverageFrom": ["**/*.(t|j)s"],
            "coverageDirectory": "../coverage-e2e",
        }
    )
    return files


# ---------------------------------------------------------------------------
# Environment and config files
# ---------------------------------------------------------------------------


def generate_environment_files(config: ProjectConfiguration, settings: Optional[Settings] = None) -> FileSet:
    """``.env`` and ``.env.testing`` plus byte-identical ``.example`` copies."""
    answers = config.answers
    if answers.database is not None:
        env = resolve_database_env(config.name, answers.database, answers.use_docker, answers.orm)
    else:
        env = default_env(config.name)
    return {
        ".env": env.main,
        ".env.example": env.main,
        ".env.testing": env.test,
        ".env.testing.example": env.test,
    }


_PRETTIER: dict[str, Any] = {
    "singleQuote": True,
    "trailingComma": "all",
    "printWidth": 100,
    "tabWidth": 2,
    "semi": True,
    "bracketSpacing": True,
    "arrowParens": "always",
    "endOfLine": "auto",
}


def generate_config_files(config: ProjectConfiguration, settings: Optional[Settings] = None) -> FileSet:
    files = _render_all(
        {
            ".gitignore": "config/gitignore.j2",
            "eslint.config.mjs": "config/eslint.config.mjs.j2",
        },
        build_context(config),
    )
    files[".prettierrc"] = _json(_PRETTIER)
    return files


# ---------------------------------------------------------------------------
# Optional feature files
# ---------------------------------------------------------------------------


def generate_docker_files(config: ProjectConfiguration, settings: Optional[Settings] = None) -> FileSet:
    """Dockerfile, .dockerignore and docker-compose.yml, only with Docker and a database."""
    answers = config.answers
    if not answers.use_docker or answers.database is None:
        return {}
    assets = resolve_docker_assets(answers.database, answers.package_manager, answers.orm)
    return {
        "Dockerfile": assets.dockerfile,
        ".dockerignore": assets.dockerignore,
        "docker-compose.yml": assets.compose,
    }


def generate_graphql_files(config: ProjectConfiguration, settings: Optional[Settings] = None) -> FileSet:
    if not config.answers.use_graphql:
        return {}
    return _render_all(
        {
            "src/graphql/graphql.module.ts": "graphql/graphql.module.ts.j2",
            "src/graphql/schemas/base.schema.ts": "graphql/base.schema.ts.j2",
            "src/graphql/resolvers/app.resolver.ts": "graphql/app.resolver.ts.j2",
        },
        build_context(config),
    )


def generate_github_actions_files(
    config: ProjectConfiguration, settings: Optional[Settings] = None
) -> FileSet:
    if not config.answers.use_github_actions:
        return {}
    settings = settings or Settings()
    return {WORKFLOW_PATH: resolve_test_workflow(config.answers.package_manager, settings.node_versions)}


def generate_readme(config: ProjectConfiguration, settings: Optional[Settings] = None) -> FileSet:
    return _render_all({"README.md": "readme/README.md.j2"}, build_context(config))


# ---------------------------------------------------------------------------
# Ordered registry
# ---------------------------------------------------------------------------

GENERATORS: tuple[tuple[str, Generator], ...] = (
    ("base", generate_base_files),
    ("source", generate_source_files),
    ("database", generate_database_files),
    ("test", generate_test_files),
    ("environment", generate_environment_files),
    ("config", generate_config_files),
    ("docker", generate_docker_files),
    ("graphql", generate_graphql_files),
    ("github-actions", generate_github_actions_files),
    ("readme", generate_readme),
)


def iter_file_sets(
    config: ProjectConfiguration,
    settings: Optional[Settings] = None,
    generators: tuple[tuple[str, Generator], ...] = GENERATORS,
) -> Iterator[tuple[str, FileSet]]:
    """Yield ``(generator name, file set)`` in registry order.

    Raises:
        GenerationError: A generator raised, or emitted a path an earlier
            generator already produced.
    """
    owners: dict[str, str] = {}
    for name, generator in generators:
        try:
            files = generator(config, settings)
        except NestifyError:
            raise
        except Exception as exc:
            raise GenerationError(name, str(exc)) from exc

        for path in files:
            if path in owners:
                raise GenerationError(name, f"{path} was already generated by the {owners[path]} generator")
            owners[path] = name
        yield name, files


def generate_all(config: ProjectConfiguration, settings: Optional[Settings] = None) -> FileSet:
    """Union of every registered generator's output, in registry order."""
    merged: FileSet = {}
    for _name, files in iter_file_sets(config, settings):
        merged.update(files)
    return merged
