"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from fieldcheck.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from fieldcheck.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    if verbose:
        _render_meta(console, result)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Failing validations print one ``field: message`` line per field.
    """
    if result.ok:
        return f"OK: {result.op}"
    errors = result.data.get("errors")
    if errors:
        return "\n".join(f"{path}: {message}" for path, message in errors.items())
    msg = result.error.message if result.error else "Unknown error"
    return f"ERROR: {result.op}: {msg}"


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="fc.ok")
    op = Text(f"  {result.op}", style="fc.op")
    console.print(label, op)


def _error_table(errors: dict[str, str]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="fc.field")
    table.add_column("Error")
    for path, message in errors.items():
        table.add_row(Text(path), Text(message))
    return table


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="fc.error")
    op = Text(f"  {result.op}", style="fc.op")
    console.print(label, op, Text(": "), Text(msg), sep="")

    errors = result.data.get("errors")
    if errors:
        console.print(_error_table(errors))
        return

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    checked = result.data.get("fields_checked", 0)
    console.print(f"  {checked} field{'s' if checked != 1 else ''} passed validation")


def _render_list_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Rule")
    table.add_column("Source")
    for name in result.data.get("builtin", []):
        table.add_row(Text(name, style="fc.rule"), "builtin")
    for name in result.data.get("plugin", []):
        table.add_row(Text(name, style="fc.rule.plugin"), "plugin")
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="fc.key"), Text(str(value)), sep="")


_OP_RENDERERS: dict[str, Callable[..., Any]] = {
    "validate": _render_validate,
    "list_rules": _render_list_rules,
}
