"""Command: validate a JSON record against a rule table."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from fieldcheck.commands._base import FieldcheckCommand

if TYPE_CHECKING:
    from fieldcheck.commands._context import AppContext


@click.command(
    cls=FieldcheckCommand,
    examples="""\
  fieldcheck validate signup.json --rules signup.rules.toml
  fieldcheck validate signup.json            # uses [rules] file from fieldcheck.toml
  fieldcheck --json validate signup.json --rules rules.json
  fieldcheck -q validate signup.json --rules signup.rules.toml""",
)
@click.argument("data_file", type=click.Path(path_type=Path))
@click.option(
    "-r",
    "--rules",
    "rules_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Rule table (TOML or JSON). Defaults to [rules] file in fieldcheck.toml.",
)
@click.pass_obj
def validate(app: AppContext, data_file: Path, rules_file: Path | None) -> None:
    """Validate DATA_FILE and report the first failing rule per field."""
    from fieldcheck.services.validate import ValidateService

    rules_path = rules_file or app.settings.default_rules_file
    if rules_path is None:
        raise click.UsageError("No rule table given: pass --rules or set [rules] file.")

    app.emit(ValidateService(app.registry).validate_files(data_file, rules_path))
