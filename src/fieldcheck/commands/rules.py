"""Command: list available validation rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fieldcheck.commands._base import FieldcheckCommand

if TYPE_CHECKING:
    from fieldcheck.commands._context import AppContext


@click.command(
    cls=FieldcheckCommand,
    examples="""\
  fieldcheck rules
  fieldcheck --json rules""",
)
@click.pass_obj
def rules(app: AppContext) -> None:
    """List built-in and plugin-provided validation rules."""
    from fieldcheck.services.validate import ValidateService

    app.emit(ValidateService(app.registry).list_rules())
