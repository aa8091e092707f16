"""Rich Console factory and theme for pimctl output.

Consoles render to a StringIO buffer, preserving the
``format_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich disables color codes automatically.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PIM_THEME = Theme(
    {
        "pim.ok": "bold green",
        "pim.error": "bold red",
        "pim.warning": "bold yellow",
        "pim.op": "bold cyan",
        "pim.key": "dim",
        "pim.path": "dim",
        "pim.enabled": "green",
        "pim.disabled": "red",
        "pim.mode.all": "green",
        "pim.mode.allowlist": "yellow",
        "pim.mode.blocklist": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=PIM_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_mode(mode: str) -> str:
    """Return the Rich style name for a filter mode."""
    return f"pim.mode.{mode}" if mode in ("all", "allowlist", "blocklist") else ""
