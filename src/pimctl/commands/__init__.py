"""Subcommand modules for pimctl.

Provides register_commands() which uses deferred imports to keep
``pimctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command groups on the root CLI group."""
    from pimctl.commands.access import access
    from pimctl.commands.config_cmd import config
    from pimctl.commands.profile import profile

    cli.add_command(config)
    cli.add_command(profile)
    cli.add_command(access)
