"""Command group: inspect and initialise the base configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pimctl.commands._base import PimGroup
from pimctl.services.config import ConfigService

if TYPE_CHECKING:
    from pimctl.commands._context import AppContext


@click.group(
    cls=PimGroup,
    examples="""\
  pimctl config show
  pimctl --profile work config show
  pimctl --json config show
  pimctl config init""",
)
def config() -> None:
    """Show or initialise config.json."""


@config.command(
    examples="""\
  pimctl config show
  APPLE_PIM_PROFILE=travel pimctl config show
  pimctl --config-dir ./agent-a config show"""
)
@click.pass_obj
def show(app: AppContext) -> None:
    """Display the resolved configuration (base + profile)."""
    app.emit(ConfigService(app.config_root).show(app.settings.profile))


@config.command(
    examples="""\
  pimctl config init
  pimctl config init --force"""
)
@click.option("--force", is_flag=True, help="Overwrite an existing config.json.")
@click.pass_obj
def init(app: AppContext, force: bool) -> None:
    """Write an all-access config.json and create the profiles directory."""
    app.emit(ConfigService(app.config_root).init(force=force))
