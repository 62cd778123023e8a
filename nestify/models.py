"""Pydantic v2 models describing one project-generation request.

``ProjectConfiguration`` is built once per ``nestify new`` invocation from the
command-line arguments and the questionnaire answers, and is never mutated
afterwards.  Every resolver and generator reads from it.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class PackageManager(str, Enum):
    """Node package manager used for every emitted install/run command."""
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


class Database(str, Enum):
    """Persistence layer wired into the generated application."""
    MYSQL = "mysql"
    POSTGRES = "postgres"
    MONGODB = "mongodb"


class ORM(str, Enum):
    """Mapping library.  MongoDB without Prisma always uses Mongoose."""
    TYPEORM = "typeorm"
    PRISMA = "prisma"


class AuthStrategy(str, Enum):
    """Supported authentication strategies."""
    JWT = "jwt"


SUPPORTED_AUTH_STRATEGIES: frozenset[str] = frozenset(s.value for s in AuthStrategy)

RELATIONAL_DATABASES: frozenset[Database] = frozenset({Database.MYSQL, Database.POSTGRES})

# A generated file set: relative forward-slash path -> file content.
FileSet = dict[str, str]

_PROJECT_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9._-]*$")


def validate_project_name(name: str) -> str:
    """Return *name* unchanged if it is usable as directory and package name.

    Raises:
        ValueError: *name* is empty or contains unsafe characters.
    """
    if not name:
        raise ValueError("project name must not be empty")
    if not _PROJECT_NAME_RE.match(name):
        raise ValueError(
            f"project name {name!r} is not filesystem/package safe "
            "(lowercase letters, digits, '.', '_' and '-')"
        )
    return name


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------

class ProjectAnswers(BaseModel):
    """The resolved preference set collected by the questionnaire."""

    model_config = ConfigDict(frozen=True)

    package_manager: PackageManager = Field(default=PackageManager.NPM)
    description: str = Field(default="A NestJS application")
    author: str = Field(default="")
    use_docker: bool = Field(default=False)
    database: Optional[Database] = Field(default=None, description="None means no persistence layer")
    orm: Optional[ORM] = Field(default=None, description="Ignored for MongoDB unless Prisma")
    use_auth: bool = Field(default=False)
    auth_strategies: Optional[frozenset[str]] = Field(default=None)
    use_swagger: bool = Field(default=True)
    use_graphql: bool = Field(default=False)
    use_github_actions: bool = Field(default=True)

    @model_validator(mode="after")
    def _check_combinations(self) -> "ProjectAnswers":
        if self.orm is not None and self.database is None:
            raise ValueError("an ORM was selected without a database")
        if self.orm is ORM.TYPEORM and self.database is Database.MONGODB:
            raise ValueError("TypeORM is not offered for MongoDB; use Prisma or the Mongoose default")
        if self.use_auth:
            if self.database is None:
                raise ValueError("authentication needs a database to store users")
            if not self.auth_strategies:
                raise ValueError("authentication requested without a strategy")
            unknown = set(self.auth_strategies) - SUPPORTED_AUTH_STRATEGIES
            if unknown:
                raise ValueError(f"unsupported auth strategies: {', '.join(sorted(unknown))}")
        elif self.auth_strategies:
            raise ValueError("auth strategies given but authentication is disabled")
        return self

    # -- Derived flags ----------------------------------------------------

    @property
    def uses_prisma(self) -> bool:
        return self.database is not None and self.orm is ORM.PRISMA

    @property
    def uses_typeorm(self) -> bool:
        return self.database in RELATIONAL_DATABASES and self.orm is not ORM.PRISMA

    @property
    def uses_mongoose(self) -> bool:
        return self.database is Database.MONGODB and self.orm is not ORM.PRISMA

    @property
    def uses_jwt(self) -> bool:
        return self.use_auth and AuthStrategy.JWT.value in (self.auth_strategies or ())


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class ProjectConfiguration(BaseModel):
    """Immutable record describing one project-generation request."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project, directory, package and default database name")
    target_path: Path = Field(..., description="Absolute path of the directory to create")
    answers: ProjectAnswers = Field(default_factory=ProjectAnswers)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_project_name(value)

    @field_validator("target_path")
    @classmethod
    def _check_target(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError(f"target path must be absolute: {value}")
        return value

    @classmethod
    def for_name(
        cls,
        name: str,
        answers: ProjectAnswers,
        cwd: Path | None = None,
    ) -> "ProjectConfiguration":
        """Build a configuration whose target is ``<cwd>/<name>``, resolved once."""
        base = Path(cwd) if cwd is not None else Path.cwd()
        return cls(name=name, target_path=(base / name).resolve(), answers=answers)
