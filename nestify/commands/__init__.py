"""Sub-command implementations behind the ``nestify`` CLI."""

from nestify.commands.generate import generate_schematic
from nestify.commands.new import NewCommandOptions, build_pipeline, new_project

__all__ = [
    "NewCommandOptions",
    "build_pipeline",
    "generate_schematic",
    "new_project",
]
