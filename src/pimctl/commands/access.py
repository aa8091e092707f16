"""Command group: access decisions for scripts and agent adapters.

Item lists are read as JSON: either an array of objects or an object
holding the array under the domain name or ``"items"``. The output of
the platform listing commands can be piped straight in.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TextIO

import click

from pimctl.commands._base import DOMAIN_CHOICE, PimGroup
from pimctl.policy.engine import Domain
from pimctl.services.access import AccessService

if TYPE_CHECKING:
    from pimctl.commands._context import AppContext

_ACCESS_EXAMPLES = """\
  pimctl access domains
  pimctl access check calendars "Work"
  pimctl --profile travel access check calendars "✈️ Travel" --id ABC-123
  pimctl access filter reminders lists.json
  pimctl access target calendars calendars.json --name Work
  pimctl access write-check reminders Groceries"""


def read_items(source: TextIO, domain: str) -> list[dict[str, Any]]:
    """Parse an item list from *source*, raising ``click.BadParameter`` on bad input."""
    try:
        payload = json.load(source)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"invalid JSON: {exc}", param_hint="SOURCE") from exc

    if isinstance(payload, dict):
        payload = payload.get(domain, payload.get("items"))
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise click.BadParameter("expected a JSON array of objects", param_hint="SOURCE")
    return payload


@click.group(cls=PimGroup, examples=_ACCESS_EXAMPLES)
def access() -> None:
    """Ask the active policy whether items may be read or written."""


@access.command()
@click.pass_obj
def domains(app: AppContext) -> None:
    """Show which domains are enabled and how each one filters."""
    app.emit(AccessService(app.policy("access_domains")).domains())


@access.command(
    examples="""\
  pimctl access check calendars Work
  pimctl access check contacts Family --id 1F2E-...
  pimctl --json access check reminders Groceries"""
)
@click.argument("domain", type=DOMAIN_CHOICE)
@click.argument("name")
@click.option("--id", "item_id", default=None, help="Stable identifier of the item.")
@click.pass_obj
def check(app: AppContext, domain: str, name: str, item_id: str | None) -> None:
    """Exit 0 if NAME is allowed in DOMAIN, 1 if it is not."""
    svc = AccessService(app.policy("access_check"))
    app.emit(svc.check(Domain(domain), name, item_id))


@access.command(
    name="filter",
    examples="""\
  pimctl access filter calendars calendars.json
  calendar-cli list | pimctl --json access filter calendars -""",
)
@click.argument("domain", type=DOMAIN_CHOICE)
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.pass_obj
def filter_items(app: AppContext, domain: str, source: TextIO) -> None:
    """Print the items from SOURCE that the policy allows."""
    items = read_items(source, domain)
    app.emit(AccessService(app.policy("access_filter")).filter(Domain(domain), items))


@access.command(
    examples="""\
  pimctl access target calendars calendars.json
  pimctl access target calendars calendars.json --name Work
  pimctl access target reminders lists.json --platform-default Reminders"""
)
@click.argument("domain", type=DOMAIN_CHOICE)
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--name", "explicit", default=None, help="Explicitly requested container.")
@click.option(
    "--platform-default",
    default=None,
    help="Name or id of the platform's own default container.",
)
@click.pass_obj
def target(
    app: AppContext,
    domain: str,
    source: TextIO,
    explicit: str | None,
    platform_default: str | None,
) -> None:
    """Resolve where a new item would be created.

    Precedence: --name, then the configured default, then --platform-default.
    """
    items = read_items(source, domain)
    svc = AccessService(app.policy("access_target"))
    app.emit(
        svc.target(Domain(domain), items, explicit=explicit, platform_default=platform_default)
    )


@access.command(
    name="write-check",
    examples="""\
  pimctl access write-check calendars Work
  pimctl access write-check reminders""",
)
@click.argument("domain", type=DOMAIN_CHOICE)
@click.argument("name", required=False)
@click.pass_obj
def write_check(app: AppContext, domain: str, name: str | None) -> None:
    """Pre-flight a mutation against container NAME. Run before writing."""
    svc = AccessService(app.policy("access_write_check"))
    app.emit(svc.write_check(Domain(domain), name))
