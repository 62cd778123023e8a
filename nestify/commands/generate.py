"""``nestify generate <schematic> <name>`` placeholder."""

from __future__ import annotations

from ..rendering import get_renderer
from ..utils import console, print_warning

_CLASS_NAME = "{{ name|pascal_case }}{{ schematic|pascal_case }}"


def generate_schematic(schematic: str, name: str) -> int:
    """Announce the schematic that would be generated; always exits 0."""
    class_name = get_renderer().render_string(_CLASS_NAME, {"schematic": schematic, "name": name})
    print_warning("Generate command coming soon!")
    console.print(f"[cyan]Will generate: {schematic} named {name}[/cyan]", highlight=False)
    console.print(f"[dim]Class name: {class_name}[/dim]", highlight=False)
    console.print("[dim]This feature is under development...[/dim]")
    return 0
