"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. It is the single boundary that turns results and
loader failures into output and exit codes:

* success: stdout, exit 0 (warnings to stderr)
* failure: stderr, exit 1
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click

from pimctl.errors import ConfigError
from pimctl.output.formatters import OutputSettings, format_result
from pimctl.services.result import ServiceResult

if TYPE_CHECKING:
    from pathlib import Path

    from pimctl.config.settings import PimSettings
    from pimctl.policy.engine import AccessPolicy


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The access policy is resolved lazily on first use and memoized for the
    rest of this invocation only, so ``--help`` never touches disk and a
    new invocation always sees the current files.
    """

    def __init__(self, settings: PimSettings) -> None:
        self.settings = settings
        self._policy: AccessPolicy | None = None

        from pimctl.config.logging import bind_invocation, configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        bind_invocation(config_root=str(settings.config_root), profile=settings.profile)

    @property
    def config_root(self) -> Path:
        return self.settings.config_root

    def policy(self, op: str) -> AccessPolicy:
        """The resolved policy. Loader failures end the invocation here."""
        if self._policy is not None:
            return self._policy

        from pimctl.policy.engine import AccessPolicy

        try:
            policy = AccessPolicy.load(self.settings.profile, self.config_root)
        except ConfigError as exc:
            self.fail(ServiceResult.failure(op, exc, profile=self.settings.profile))
        self._policy = policy
        return policy

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics."""
        if not result.ok:
            self.fail(result)
        click.echo(self._format(result))
        if not self.settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)

    def fail(self, result: ServiceResult) -> NoReturn:
        """Print a failed result to stderr and exit 1."""
        click.echo(self._format(result), err=True)
        raise SystemExit(1)

    def _format(self, result: ServiceResult) -> str:
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        return format_result(result, settings=settings)
