"""``nestify new <project-name>``: the sequencing authority.

Order: validate target -> questionnaire -> create root and skeleton ->
generators (base, source, database, test, environment, config, docker,
graphql, github-actions, readme) -> install (or skip with a warning) ->
Prisma -> auth -> format -> format check -> git -> report.

A failed run leaves the partially-created directory in place for
inspection; nothing is rolled back.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..config import Settings
from ..errors import TargetExistsError
from ..messages import show_success
from ..models import PackageManager, ProjectAnswers, ProjectConfiguration, validate_project_name
from ..pipeline import Outcome, Pipeline, PipelineResult, StepPolicy, StepStatus
from ..prompts import collect_answers
from ..scaffolder import generate_auth_files, generate_structure, iter_file_sets, materialize
from ..services import prisma
from ..services.formatter import format_project, verify_formatting
from ..services.git import init_repository
from ..services.installer import install_dependencies
from ..utils import print_error, print_step_header


@dataclass
class NewCommandOptions:
    package_manager: Optional[PackageManager] = None
    skip_install: bool = False
    assume_defaults: bool = False
    prisma_migrate: bool = False


def ensure_target_available(target: Path) -> None:
    """Raise ``TargetExistsError`` if anything already lives at *target*."""
    if target.exists():
        raise TargetExistsError(target)


async def create_root(config: ProjectConfiguration) -> None:
    await asyncio.to_thread(config.target_path.mkdir, parents=True, exist_ok=False)
    await materialize(generate_structure(config), config.target_path)


async def write_generated_files(config: ProjectConfiguration, settings: Settings) -> list[str]:
    """Run every generator in order, writing each set before the next runs."""
    written: list[str] = []
    for _name, files in iter_file_sets(config, settings):
        await materialize(files, config.target_path)
        written.extend(files)
    return written


async def write_auth_files(config: ProjectConfiguration, settings: Settings) -> list[str]:
    files = generate_auth_files(config, settings)
    await materialize(files, config.target_path)
    return list(files)


def build_pipeline(
    config: ProjectConfiguration,
    options: NewCommandOptions,
    settings: Settings,
) -> Pipeline:
    """Assemble the ordered steps for one project.

    Guards are evaluated when a step is reached, so steps that depend on the
    install can look at its final status.
    """
    answers = config.answers
    root = config.target_path
    pipeline = Pipeline()

    pipeline.add("Create project directory", lambda: create_root(config))
    pipeline.add("Generate project files", lambda: write_generated_files(config, settings))

    install = pipeline.add(
        "Install dependencies",
        lambda: install_dependencies(root, answers, timeout=settings.install_timeout),
        guard=lambda: not options.skip_install,
        skip_warning="Dependencies not installed (--skip-install flag used)",
    )

    def installed() -> bool:
        return install.status is StepStatus.SUCCEEDED

    pipeline.add(
        "Write Prisma client sources",
        lambda: prisma.write_client_sources(config),
        guard=lambda: answers.uses_prisma,
    )
    pipeline.add(
        "Initialize Prisma",
        lambda: prisma.bootstrap(config, timeout=settings.prisma_timeout),
        guard=lambda: answers.uses_prisma and installed(),
    )
    pipeline.add(
        "Run Prisma migration",
        lambda: prisma.migrate(config, timeout=settings.prisma_timeout),
        policy=StepPolicy.WARN,
        guard=lambda: answers.uses_prisma and options.prisma_migrate and installed(),
    )
    pipeline.add(
        "Generate authentication",
        lambda: write_auth_files(config, settings),
        guard=lambda: answers.uses_jwt and installed(),
        skip_warning="Authentication not generated (requires dependencies)" if answers.uses_jwt else None,
    )
    formatted = pipeline.add(
        "Format code",
        lambda: format_project(root, answers.package_manager, timeout=settings.format_timeout),
        policy=StepPolicy.WARN,
        guard=installed,
        skip_warning="Code formatting skipped (requires dependencies)",
    )
    pipeline.add(
        "Verify formatting",
        lambda: verify_formatting(root, answers.package_manager, timeout=settings.format_timeout),
        policy=StepPolicy.WARN,
        guard=lambda: formatted.status is StepStatus.SUCCEEDED,
    )
    pipeline.add(
        "Initialize git repository",
        lambda: init_repository(root, timeout=settings.git_timeout),
        policy=StepPolicy.WARN,
    )
    return pipeline


async def new_project(
    project_name: str,
    options: Optional[NewCommandOptions] = None,
    settings: Optional[Settings] = None,
    answers: Optional[ProjectAnswers] = None,
    cwd: Optional[Path] = None,
) -> int:
    """Create a project and return the process exit code.

    Args:
        project_name: Directory, package and default database name.
        options: Command-line switches.
        settings: Timeouts and CI runtime versions.
        answers: Pre-collected answers; the questionnaire runs when omitted.
        cwd: Directory the project is created in (defaults to the CWD).
    """
    options = options or NewCommandOptions()
    settings = settings or Settings()
    base = Path(cwd) if cwd is not None else Path.cwd()

    try:
        validate_project_name(project_name)
        ensure_target_available((base / project_name).resolve())
    except TargetExistsError as exc:
        print_error(str(exc))
        return 1
    except ValueError as exc:
        print_error(f"Invalid project name: {exc}")
        return 1

    if answers is None:
        answers = collect_answers(options.package_manager, options.skip_install, options.assume_defaults)

    try:
        config = ProjectConfiguration.for_name(project_name, answers, cwd=base)
    except ValidationError as exc:
        print_error(f"Invalid configuration: {exc}")
        return 1

    print_step_header(f"Creating project: {config.name}")
    result: PipelineResult = await build_pipeline(config, options, settings).run()

    if result.outcome is not Outcome.FAILED:
        show_success(
            config,
            skip_install=options.skip_install,
            partial=result.outcome is Outcome.PARTIAL,
            cwd=base,
        )
    return result.exit_code
