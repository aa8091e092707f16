"""Root CLI group for pimctl with global flags and command registration."""

from __future__ import annotations

import click

from pimctl import __version__
from pimctl.commands import register_commands
from pimctl.commands._context import AppContext
from pimctl.config.settings import PimSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pimctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "-p",
    "--profile",
    default=None,
    help="Profile name (profiles/{name}.json). Overrides APPLE_PIM_PROFILE.",
)
@click.option(
    "--config-dir",
    default=None,
    help="Config root directory. Overrides APPLE_PIM_CONFIG_DIR.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    profile: str | None,
    config_dir: str | None,
) -> None:
    """pimctl — access policy for calendars, reminders, contacts and mail."""
    settings = PimSettings.from_cli(
        config_dir=config_dir,
        profile=profile,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
