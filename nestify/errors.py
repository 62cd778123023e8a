"""Exception hierarchy for project generation.

Resolvers and generators never catch these; the pipeline decides whether a
failure is fatal or downgraded to a warning and renders the user-facing text.
"""

from __future__ import annotations

from pathlib import Path


class NestifyError(Exception):
    """Base class for every error raised by nestify."""


class TargetExistsError(NestifyError):
    """Raised before any side effect when the target directory already exists."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Directory {path.name} already exists: {path}")


class GenerationError(NestifyError):
    """Raised when a generator fails or two generators emit the same path."""

    def __init__(self, generator: str, message: str) -> None:
        self.generator = generator
        super().__init__(f"{generator} generator: {message}")


class ExternalToolError(NestifyError):
    """Raised when an external command exits non-zero, times out or reports a fatal error."""

    def __init__(
        self,
        step: str,
        command: str,
        returncode: int,
        stderr: str = "",
    ) -> None:
        self.step = step
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = f"\n{stderr}" if stderr else ""
        super().__init__(f"{step} failed (exit {returncode}): {command}{detail}")


class InstallError(ExternalToolError):
    """Dependency installation failure carrying literal manual-recovery commands."""

    def __init__(
        self,
        command: str,
        returncode: int,
        stderr: str,
        recovery_commands: list[str],
    ) -> None:
        self.recovery_commands = recovery_commands
        super().__init__("Dependency install", command, returncode, stderr)


class SchemaBootstrapError(NestifyError):
    """Prisma init reported success but the schema file is missing."""

    def __init__(self, path: Path, command: str, stdout: str = "", stderr: str = "") -> None:
        self.path = path
        self.command = command
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f"Prisma schema file was not created at {path}. "
            f"Please check the Prisma CLI installation.\n"
            f"Command: {command}\nstdout: {stdout}\nstderr: {stderr}"
        )
