"""Command group: manage named profile overrides."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from pimctl.commands._base import PimGroup
from pimctl.services.config import ConfigService

if TYPE_CHECKING:
    from pimctl.commands._context import AppContext


@click.group(
    cls=PimGroup,
    examples="""\
  pimctl profile list
  pimctl profile show work
  pimctl profile write work work.json
  echo '{"mail": {"enabled": false}}' | pimctl profile write no-mail -""",
)
def profile() -> None:
    """List, show and write profiles under profiles/."""


@profile.command(name="list")
@click.pass_obj
def list_profiles(app: AppContext) -> None:
    """List profile names on disk."""
    app.emit(ConfigService(app.config_root).list_profiles())


@profile.command(
    examples="""\
  pimctl profile show work
  pimctl --json profile show work"""
)
@click.argument("name")
@click.pass_obj
def show(app: AppContext, name: str) -> None:
    """Show the raw override stored for NAME."""
    app.emit(ConfigService(app.config_root).show_profile(name))


@profile.command(
    examples="""\
  pimctl profile write work work.json
  cat travel.json | pimctl profile write travel -"""
)
@click.argument("name")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.pass_obj
def write(app: AppContext, name: str, source: TextIO) -> None:
    """Validate the JSON override in SOURCE and save it as profile NAME.

    Sections present in the override replace the base section wholesale.
    """
    svc = ConfigService(app.config_root)
    app.emit(svc.write_profile(name, source.read(), source=getattr(source, "name", "<stdin>")))
