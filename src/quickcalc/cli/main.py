"""Command-line interface for quickcalc."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import Optional, Tuple

import click

from ..calc.engine import calculate
from ..config import get_settings
from ..errors import UnitCalcError
from ..launcher.dispatcher import build_dispatcher
from ..launcher.entries import LOWEST_PRIORITY
from ..launcher.interpreters import describe_unit
from ..observability import run_scope
from ..units.registry import default_registry


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log at DEBUG level.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """quickcalc command suite."""

    level = logging.DEBUG if verbose else getattr(logging, get_settings().log_level, logging.WARNING)
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
    ctx.with_resource(run_scope())


@cli.command("eval")
@click.argument("expression", nargs=-1, required=True)
@click.option(
    "--long-names/--short-names",
    default=None,
    help="Render unit names instead of abbreviations.",
)
@click.option("--json", "as_json", is_flag=True, help="Emit the structured result as JSON.")
def eval_command(expression: Tuple[str, ...], long_names: Optional[bool], as_json: bool) -> None:
    """Evaluate EXPRESSION, e.g. ``quickcalc eval 5 km/h as m/s``."""

    text = " ".join(expression)
    try:
        result = calculate(text, long_names=long_names)
    except UnitCalcError as exc:
        if as_json:
            click.echo(json.dumps({"ok": False, "kind": exc.kind, "message": str(exc)}, indent=2))
        else:
            click.echo(f"error: {exc}", err=True)
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps({"ok": True, **asdict(result)}, indent=2, ensure_ascii=False))
    else:
        click.echo(result.display)


@cli.command("units")
@click.argument("query", required=False, default="")
def units_command(query: str) -> None:
    """List catalog units, optionally filtered by QUERY."""

    registry = default_registry()
    units = registry.search(query) if query else registry.units
    for unit in units:
        click.echo(describe_unit(unit))


@cli.command("query")
@click.argument("text")
@click.option("--limit", type=int, default=10, show_default=True, help="Maximum entries to print.")
def query_command(text: str, limit: int) -> None:
    """Run TEXT through every interpreter and print the ranked entries."""

    with build_dispatcher() as dispatcher:
        for entry in dispatcher.dispatch(text, limit=limit):
            click.echo(f"{_format_priority(entry.priority)}  [{entry.source}] {entry.text}")


def _format_priority(priority: float) -> str:
    if priority == LOWEST_PRIORITY:
        return f"{'-inf':>8}"
    return f"{priority:8.2f}"


@cli.command("repl")
def repl_command() -> None:
    """Evaluate expressions interactively until an empty line or EOF."""

    while True:
        try:
            text = click.prompt(">", default="", show_default=False, prompt_suffix=" ")
        except click.Abort:
            break
        if not text.strip():
            break
        try:
            click.echo(calculate(text).display)
        except UnitCalcError as exc:
            click.echo(f"error: {exc}")


if __name__ == "__main__":
    cli()
