"""nestify scaffolder -- turns a ``ProjectConfiguration`` into files on disk.

Generators are pure functions returning ``{relative path: content}``; the
materializer writes those sets under the project root.

Quick usage::

    from nestify.scaffolder import iter_file_sets, materialize

    for name, files in iter_file_sets(config):
        await materialize(files, config.target_path)
"""

from nestify.scaffolder.auth import generate_auth_files
from nestify.scaffolder.context import build_context
from nestify.scaffolder.generators import (
    GENERATORS,
    generate_all,
    generate_structure,
    iter_file_sets,
)
from nestify.scaffolder.materializer import materialize

__all__ = [
    "GENERATORS",
    "build_context",
    "generate_all",
    "generate_auth_files",
    "generate_structure",
    "iter_file_sets",
    "materialize",
]
