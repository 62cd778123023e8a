"""Command-line entry point.

Usage::

    nestify new my-api
    nestify new my-api --package-manager pnpm --skip-install --yes
    nestify generate service users
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError
from rich.panel import Panel

from . import __version__
from .commands.generate import generate_schematic
from .commands.new import NewCommandOptions, new_project
from .config import Settings
from .models import PackageManager
from .utils import console


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nestify",
        description="A CLI tool for scaffolding NestJS applications",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  nestify new my-api\n"
            "  nestify new my-api -p yarn --skip-install\n"
            "  nestify new my-api --yes --settings nestify.json\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    new = subparsers.add_parser("new", help="Create a new NestJS project")
    new.add_argument("project_name", metavar="project-name", help="Directory and package name")
    new.add_argument(
        "--package-manager", "-p",
        choices=[pm.value for pm in PackageManager],
        default=None,
        help="Default package manager offered by the questionnaire (default: npm)",
    )
    new.add_argument("--skip-install", action="store_true", help="Skip package installation")
    new.add_argument("--yes", "-y", action="store_true", help="Accept every default without prompting")
    new.add_argument(
        "--prisma-migrate",
        action="store_true",
        help="Run an initial 'prisma migrate dev' after bootstrapping Prisma",
    )
    new.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="JSON settings file (timeouts, CI Node.js versions); defaults to NESTIFY_* env vars",
    )

    generate = subparsers.add_parser(
        "generate",
        aliases=["g"],
        help="Generate a component (module, controller, service)",
    )
    generate.add_argument("schematic")
    generate.add_argument("name")
    return parser


def load_settings(path: Optional[Path]) -> Settings:
    if path is None:
        return Settings.from_env()
    return Settings.load(path)


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Parse *argv*, dispatch the sub-command and return its exit code."""
    args = build_parser().parse_args(argv)

    if args.command in ("generate", "g"):
        return generate_schematic(args.schematic, args.name)

    console.print(
        Panel(
            "[bold bright_cyan]nestify[/bold bright_cyan]\nNestJS project generator",
            border_style="bright_cyan",
            expand=False,
        )
    )

    try:
        settings = load_settings(args.settings)
    except (OSError, ValueError, ValidationError) as exc:
        console.print(f"[bold red]Error:[/bold red] Could not load settings: {exc}", highlight=False)
        return 1

    options = NewCommandOptions(
        package_manager=PackageManager(args.package_manager) if args.package_manager else None,
        skip_install=args.skip_install,
        assume_defaults=args.yes,
        prisma_migrate=args.prisma_migrate,
    )
    return asyncio.run(new_project(args.project_name, options, settings))


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Console-script entry point."""
    code = run(argv)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
