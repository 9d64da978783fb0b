"""Rich renderers for ServiceResult.

Successful results print a status line and their data as key-value
fields, with the operation's headline value highlighted. Failures print
the error code and message, plus the detail block in verbose mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text

from dtutil.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from dtutil.services.result import ServiceResult

# The data key holding each operation's answer.
PRIMARY_KEYS: dict[str, str] = {
    "format": "text",
    "parse": "iso",
    "diff": "value",
}


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        _render_success(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render only the answer (or a one-line error) for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    key = PRIMARY_KEYS.get(result.op)
    if key is not None and key in result.data:
        return str(result.data[key])
    return f"OK: {result.op}"


def _field(console: Console, key: str, value: Any, *, primary: bool = False) -> None:
    k = Text(f"  {key}: ", style="dt.key")
    v = Text(str(value), style="dt.value" if primary else "")
    console.print(k, v, sep="")


def _render_success(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    console.print(Text("OK", style="dt.ok"), Text(f"  {result.op}", style="dt.op"), sep="")
    primary = PRIMARY_KEYS.get(result.op)
    for key, value in result.data.items():
        _field(console, key, value, primary=key == primary)
    if verbose and result.meta:
        console.print(Text("  meta:", style="dim"))
        for k, v in result.meta.items():
            console.print(Text(f"    {k}: {v}"))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="dt.error"),
        Text(f"  {result.op}", style="dt.op"),
        Text(f" [{err.code}]" if err else "", style="dt.code"),
        Text(f" — {msg}"),
        sep="",
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))
