"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from pimctl.output.console import create_console, get_output, style_for_mode

if TYPE_CHECKING:
    from rich.console import Console

    from pimctl.services.result import ServiceResult

_DOMAIN_LABELS = {
    "calendars": "Calendars",
    "reminders": "Reminders",
    "contacts": "Contacts",
    "mail": "Mail",
}


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "profile_list":
        return "\n".join(result.data.get("profiles", []))
    if result.op == "access_filter":
        return "\n".join(_item_label(item) for item in result.data.get("items", []))
    if result.op == "access_target":
        return _item_label(result.data.get("item"))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _item_label(item: Any) -> str:
    if isinstance(item, dict):
        return str(item.get("name") or item.get("title") or item.get("id") or "")
    return "" if item is None else str(item)


def _tilde(path: str) -> str:
    home = str(Path.home())
    return "~" + path[len(home) :] if path.startswith(home) else path


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="pim.ok"), Text(f"  {result.op}", style="pim.op"), sep="")


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="pim.key")
    style = "pim.path" if key.endswith(("path", "_dir")) else ""
    console.print(k, Text(str(value), style=style), sep="")


def _domain_table(console: Console, config: dict[str, Any]) -> None:
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Domain")
    table.add_column("Status")
    table.add_column("Mode")
    table.add_column("Items")
    for key, label in _DOMAIN_LABELS.items():
        section = config.get(key) or {}
        enabled = section.get("enabled", True)
        status = Text("enabled" if enabled else "disabled")
        status.stylize("pim.enabled" if enabled else "pim.disabled")
        mode = section.get("mode")
        items = section.get("items") or []
        shown = ", ".join(items) if mode and mode != "all" and items else ""
        mode_text = Text(mode or "-", style=style_for_mode(mode or ""))
        table.add_row(label, status, mode_text, Text(shown))
    console.print(table)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="pim.error"),
        Text(f"  {result.op}", style="pim.op"),
        Text(f" — {msg}"),
        sep="",
    )
    if err is None:
        return
    hint = err.detail.get("hint")
    if hint:
        console.print(Text("  hint: ", style="pim.key"), Text(hint), sep="")
    if verbose:
        console.print(Text(f"  code: {err.code}", style="dim"))
        for k, v in err.detail.items():
            if k != "hint":
                console.print(Text(f"    {k}: {v}"))


def _render_config_show(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    console.print(Text("Apple PIM Configuration", style="bold"))
    _field(console, "config_path", _tilde(data["config_path"]))
    _field(console, "profiles_dir", _tilde(data["profiles_dir"]))
    _field(console, "active_profile", data.get("active_profile") or "(none)")
    console.print()

    config = data.get("config", {})
    _domain_table(console, config)

    if config.get("default_calendar") or config.get("default_reminder_list"):
        console.print()
        if config.get("default_calendar"):
            _field(console, "default_calendar", config["default_calendar"])
        if config.get("default_reminder_list"):
            _field(console, "default_reminder_list", config["default_reminder_list"])


def _render_domains(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _domain_table(console, result.data)


def _render_filter(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "domain", data["domain"])
    _field(console, "mode", data["mode"])
    _field(console, "count", data["count"])
    _field(console, "filtered_out", data["filtered_out"])
    if data["items"]:
        table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
        table.add_column("Name")
        table.add_column("ID", style="dim")
        for item in data["items"]:
            table.add_row(Text(_item_label(item)), Text(str(item.get("id") or "")))
        console.print(table)


def _render_target(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "domain", result.data["domain"])
    _field(console, "source", result.data["source"])
    _field(console, "target", _item_label(result.data["item"]))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":"), ensure_ascii=False))
        elif value is not None:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "config_show": _render_config_show,
    "access_domains": _render_domains,
    "access_filter": _render_filter,
    "access_target": _render_target,
}
