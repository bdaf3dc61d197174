"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides a lazily built rule registry (with plugin
rules loaded) and centralized result emission.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from fieldcheck.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from fieldcheck.config.settings import FieldcheckSettings
    from fieldcheck.domain.checks import RuleRegistry
    from fieldcheck.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The registry is built on first use so ``--help`` and ``--version``
    never trigger plugin discovery.
    """

    def __init__(self, settings: FieldcheckSettings) -> None:
        self.settings = settings
        self._registry: RuleRegistry | None = None

        from fieldcheck.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def registry(self) -> RuleRegistry:
        """Built-in rules plus any rules contributed by plugins."""
        if self._registry is None:
            from fieldcheck.domain.checks import default_registry

            registry = default_registry()
            if self.settings.plugins.enabled:
                from fieldcheck.plugins.manager import PluginManager

                names = PluginManager(registry).discover_and_load(
                    local_dir=self.settings.plugin_dir
                )
                logger.debug("Loaded plugins: %s", names)
            self._registry = registry
        return self._registry

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
