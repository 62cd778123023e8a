"""Node packages installed into a generated project."""

from __future__ import annotations

from typing import NamedTuple

from .. import constants
from ..constants import DATABASES
from ..models import ProjectAnswers


class DependencySet(NamedTuple):
    """Runtime and development package batches, installed as two commands."""

    dependencies: list[str]
    dev_dependencies: list[str]


def resolve_dependencies(answers: ProjectAnswers) -> DependencySet:
    """Collect the packages the selected features import.

    Order is stable (feature order, then table order) and duplicates are
    dropped, so the emitted install commands are deterministic.
    """
    deps: list[str] = list(constants.BASE_DEPENDENCIES)
    dev: list[str] = list(constants.BASE_DEV_DEPENDENCIES)

    if answers.use_swagger:
        deps += constants.SWAGGER_DEPENDENCIES

    if answers.uses_typeorm:
        driver = DATABASES[answers.database].typeorm_driver
        deps += constants.TYPEORM_DEPENDENCIES
        if driver:
            deps.append(driver)
    elif answers.uses_mongoose:
        deps += constants.MONGOOSE_DEPENDENCIES
    elif answers.uses_prisma:
        deps += constants.PRISMA_DEPENDENCIES
        dev += constants.PRISMA_DEV_DEPENDENCIES

    if answers.use_graphql:
        deps += constants.GRAPHQL_DEPENDENCIES

    if answers.uses_jwt:
        deps += constants.JWT_DEPENDENCIES
        dev += constants.JWT_DEV_DEPENDENCIES

    return DependencySet(
        dependencies=list(dict.fromkeys(deps)),
        dev_dependencies=list(dict.fromkeys(dev)),
    )
