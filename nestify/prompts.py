"""Interactive questionnaire for ``nestify new``.

Collects raw answers with ``rich.prompt`` and validates them into a
``ProjectAnswers``.  With ``assume_defaults`` every question takes its
default without touching stdin.
"""

from __future__ import annotations

from typing import Optional

from rich.prompt import Confirm, Prompt

from .models import ORM, AuthStrategy, Database, PackageManager, ProjectAnswers
from .utils import console

NO_DATABASE = "none"
MONGOOSE = "mongoose"


class Questionnaire:
    """Asks the questions in order; each answer may gate later questions."""

    def __init__(self, assume_defaults: bool = False) -> None:
        self.assume_defaults = assume_defaults

    def choose(self, question: str, choices: list[str], default: str) -> str:
        if self.assume_defaults:
            return default
        return Prompt.ask(question, choices=choices, default=default, console=console)

    def text(self, question: str, default: str) -> str:
        if self.assume_defaults:
            return default
        return Prompt.ask(question, default=default, console=console)

    def confirm(self, question: str, default: bool) -> bool:
        if self.assume_defaults:
            return default
        return Confirm.ask(question, default=default, console=console)

    # ------------------------------------------------------------------

    def ask_orm(self, database: Optional[Database]) -> Optional[ORM]:
        if database is None:
            return None
        if database is Database.MONGODB:
            choice = self.choose("Which ODM/ORM would you like to use?", [MONGOOSE, ORM.PRISMA.value], MONGOOSE)
            return None if choice == MONGOOSE else ORM(choice)
        choice = self.choose(
            "Which ORM would you like to use?",
            [o.value for o in ORM],
            ORM.TYPEORM.value,
        )
        return ORM(choice)

    def run(
        self,
        package_manager: Optional[PackageManager] = None,
        skip_install: bool = False,
    ) -> ProjectAnswers:
        """Ask every question and return validated answers.

        Args:
            package_manager: Pre-selected default from ``--package-manager``.
            skip_install: Authentication is only offered when dependencies
                will be installed, because its sources are generated after
                the install step.
        """
        pm = self.choose(
            "Which package manager would you like to use?",
            [p.value for p in PackageManager],
            (package_manager or PackageManager.NPM).value,
        )
        description = self.text("Project description", "A NestJS application")
        author = self.text("Author", "")
        use_docker = self.confirm("Add Docker support?", False)

        db_choice = self.choose(
            "Which database would you like to use?",
            [NO_DATABASE] + [d.value for d in Database],
            NO_DATABASE,
        )
        database = None if db_choice == NO_DATABASE else Database(db_choice)
        orm = self.ask_orm(database)

        use_swagger = self.confirm("Add Swagger documentation?", True)
        use_graphql = self.confirm("Add GraphQL support?", False)

        use_auth = False
        if database is not None and not skip_install:
            use_auth = self.confirm("Add JWT authentication?", False)

        use_github_actions = self.confirm("Add GitHub Actions for CI/CD?", True)

        return ProjectAnswers(
            package_manager=PackageManager(pm),
            description=description,
            author=author,
            use_docker=use_docker,
            database=database,
            orm=orm,
            use_auth=use_auth,
            auth_strategies=frozenset({AuthStrategy.JWT.value}) if use_auth else None,
            use_swagger=use_swagger,
            use_graphql=use_graphql,
            use_github_actions=use_github_actions,
        )


def collect_answers(
    package_manager: Optional[PackageManager] = None,
    skip_install: bool = False,
    assume_defaults: bool = False,
) -> ProjectAnswers:
    return Questionnaire(assume_defaults=assume_defaults).run(package_manager, skip_install)
