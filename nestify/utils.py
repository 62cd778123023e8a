"""Console output and external command execution.

Everything user-facing is printed through the single ``console`` defined
here so tests can capture it in one place.  External tools (package
managers, the Prisma CLI, prettier, git) are all spawned by ``run_command``.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import NamedTuple

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.rule import Rule
from rich.table import Table

console = Console()

TIMEOUT_RETURNCODE = -1
NOT_FOUND_RETURNCODE = 127


# ---------------------------------------------------------------------------
# External commands
# ---------------------------------------------------------------------------


class CommandResult(NamedTuple):
    returncode: int
    stdout: str
    stderr: str


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace").strip()


async def run_command(
    command: str,
    cwd: str | Path | None = None,
    timeout: float = 120,
    env: dict[str, str] | None = None,
    echo: bool = False,
) -> CommandResult:
    """Run *command* through the shell and capture its output.

    Failures are reported in the result, never raised, so each caller decides
    what a non-zero exit means for its step.

    Args:
        command: Shell command line, exactly as it would be typed.
        cwd: Working directory; usually the generated project root.
        timeout: Seconds before the process is killed.
        env: Extra variables layered over ``os.environ``.
        echo: Print the command (dimmed) before running it.

    Returns:
        ``CommandResult``.  A timeout gives returncode ``TIMEOUT_RETURNCODE``
        and a missing working directory or shell gives
        ``NOT_FOUND_RETURNCODE``, both with an explanatory stderr.
    """
    if echo:
        console.print(f"  [dim]$ {escape(command)}[/dim]")

    try:
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd) if cwd else None,
            env={**os.environ, **env} if env else None,
        )
    except FileNotFoundError as exc:
        return CommandResult(NOT_FOUND_RETURNCODE, "", f"Command not found: {command} ({exc})")

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return CommandResult(TIMEOUT_RETURNCODE, "", f"Command timed out after {timeout}s: {command}")

    return CommandResult(process.returncode or 0, _decode(stdout), _decode(stderr))


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """``3.7`` -> ``"3.7s"``, ``65.2`` -> ``"1m 5s"``."""
    if seconds < 0:
        return "0.0s"
    minutes, secs = divmod(seconds, 60)
    if minutes:
        return f"{int(minutes)}m {int(secs)}s"
    return f"{secs:.1f}s"


def print_step_header(title: str) -> None:
    console.print(Rule(f"[bold bright_cyan]{escape(title)}[/bold bright_cyan]", style="bright_cyan"))


def print_summary_table(rows: dict[str, str], title: str = "Summary") -> None:
    """Two-column table: step name, final status."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Step", style="dim", no_wrap=True)
    table.add_column("Status")
    for key, value in rows.items():
        table.add_row(key, value)
    console.print(table)
    console.print()


def print_success(message: str) -> None:
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def create_progress() -> Progress:
    """Transient spinner shown while a pipeline step runs."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
