"""AppContext — shared Click context for all commands.

Created by the root group and passed down with ``@click.pass_obj``. It
configures logging and telemetry from the settings, builds the domain
lazily, and routes ServiceResults to stdout/stderr with exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from erdomain.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from erdomain.config.settings import ErdSettings
    from erdomain.services.domain import DomainService
    from erdomain.services.result import ServiceResult


class AppContext:
    """Settings plus a lazily created :class:`DomainService`."""

    def __init__(self, settings: ErdSettings) -> None:
        self.settings = settings
        self._service: DomainService | None = None

        from erdomain.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from erdomain.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def service(self) -> DomainService:
        """Service over a fresh domain seeded with the configured link types."""
        if self._service is None:
            from erdomain.services.domain import DomainService, build_domain

            domain = build_domain(self.settings.link_types)
            self._service = DomainService(domain, self.settings.domain)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; failures go to stderr and exit with code 1."""
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if not result.ok:
            click.echo(output, err=True)
            raise SystemExit(1)
        click.echo(output)
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
