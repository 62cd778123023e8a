"""Write generated file sets to disk."""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath

from ..models import FileSet


def resolve_relative(root: Path, relative: str) -> Path:
    """Map a forward-slash relative path onto *root*.

    Raises:
        ValueError: *relative* is absolute or climbs out of *root*.
    """
    posix = PurePosixPath(relative)
    if posix.is_absolute() or ".." in posix.parts or not posix.parts:
        raise ValueError(f"generated path must stay inside the project: {relative!r}")
    return root.joinpath(*posix.parts)


def _write_all(file_set: FileSet, root: Path) -> list[Path]:
    written: list[Path] = []
    for relative, content in file_set.items():
        target = resolve_relative(root, relative)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8", newline="\n")
        written.append(target)
    return written


async def materialize(file_set: FileSet, root: str | Path) -> list[Path]:
    """Create missing directories and write every entry, overwriting existing files.

    Additive only: files not in *file_set* are left alone.  The first failing
    write aborts the call and its ``OSError`` propagates; files written before
    it stay on disk.

    Returns:
        The written paths, in file-set order.
    """
    return await asyncio.to_thread(_write_all, file_set, Path(root))
