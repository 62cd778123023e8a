"""Jinja2 rendering of the NestJS boilerplate shipped in ``nestify/templates/``.

Templates hold the TypeScript, YAML and Markdown bodies of generated files;
Python code decides which templates apply and builds their context.
Rendering never touches the target project, so every generator stays a pure
function of its configuration.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Loads ``.j2`` templates from one directory and renders them.

    Block tags are trimmed so ``{% if %}`` lines leave no blank lines behind,
    trailing newlines are kept, and an undefined variable raises instead of
    silently rendering as an empty string.  Autoescaping is off: output is
    source code, not HTML.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir is not None else TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["pascal_case"] = pascal_case

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render *template_path* (relative, e.g. ``"docker/Dockerfile.j2"``)."""
        return self.env.get_template(template_path).render(**context)

    def render_string(self, source: str, context: dict[str, Any]) -> str:
        return self.env.from_string(source).render(**context)


@lru_cache(maxsize=1)
def get_renderer() -> TemplateRenderer:
    """Shared renderer over the packaged templates."""
    return TemplateRenderer()


def pascal_case(value: str) -> str:
    """``order-items`` / ``order_items`` -> ``OrderItems``."""
    return "".join(word.capitalize() for word in re.split(r"[-_.\s]+", value) if word)
