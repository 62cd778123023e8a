"""Final report printed after a successful (or partially successful) run."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from . import constants
from .models import ProjectConfiguration
from .resolvers.commands import get_run_command
from .resolvers.github_actions import WORKFLOW_PATH
from .services import prisma
from .services.installer import install_commands
from .utils import console, print_success, print_warning


def next_steps(
    config: ProjectConfiguration,
    skip_install: bool,
    cwd: Optional[Path] = None,
) -> list[str]:
    """Numbered follow-up commands, without the numbers."""
    answers = config.answers
    pm = answers.package_manager
    steps: list[str] = []

    if (cwd or Path.cwd()).resolve() != config.target_path:
        steps.append(f"cd {config.name}")

    if skip_install:
        steps.extend(install_commands(answers))
        if answers.uses_prisma:
            steps.append(prisma.init_command(pm, answers.database))
            steps.append(prisma.generate_command(pm))

    dev = get_run_command(pm, "start:dev")
    if answers.use_docker and answers.database is not None:
        steps.append(f"docker-compose up  (or {dev})")
    else:
        steps.append(dev)
    return steps


def show_success(
    config: ProjectConfiguration,
    skip_install: bool,
    partial: bool = False,
    cwd: Optional[Path] = None,
) -> None:
    answers = config.answers
    if partial:
        print_warning(f"\nProject {config.name} created with warnings.\n")
    else:
        print_success(f"\nProject {config.name} created successfully!\n")

    console.print("[cyan]Next steps:[/cyan]")
    for index, step in enumerate(next_steps(config, skip_install, cwd), start=1):
        console.print(f"  {index}. {step}", markup=False, highlight=False)

    base_url = f"http://localhost:{constants.APP_PORT}"
    if answers.use_swagger:
        console.print("\n[cyan]Swagger documentation will be available at:[/cyan]")
        console.print(f"   {base_url}/api/docs")

    if answers.use_graphql:
        console.print("\n[cyan]GraphQL playground:[/cyan]")
        console.print(f"   {base_url}/graphql")

    if answers.use_github_actions:
        console.print("\n[cyan]GitHub Actions workflow added:[/cyan]")
        console.print(f"   - {WORKFLOW_PATH} (automated testing)")

    console.print("\n[cyan]Happy coding![/cyan]\n")
