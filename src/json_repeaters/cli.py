"""Click CLI group: inspect declarations and run the mapper on payload files."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click

from json_repeaters.blocks.loader import build_registry
from json_repeaters.config import get_settings
from json_repeaters.errors import JsonRepeatersError
from json_repeaters.logging import configure_logging, log_context
from json_repeaters.repeaters.behavior import JsonRepeaters


def _load_payload(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"invalid JSON: {exc}", param_hint="PAYLOAD") from exc
    if not isinstance(payload, dict):
        raise click.BadParameter("payload must be a JSON object", param_hint="PAYLOAD")
    return payload


def _handler() -> JsonRepeaters:
    try:
        return JsonRepeaters.from_settings(get_settings())
    except JsonRepeatersError as exc:
        click.echo(f"configuration error: {exc}", err=True)
        sys.exit(2)


def _echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, sort_keys=True, default=str))


@click.group()
@click.option("--log-level", type=str, default=None, help="Override LOG_LEVEL.")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """JSON repeaters mapping CLI."""
    configure_logging(log_level)
    ctx.with_resource(log_context(command=ctx.invoked_subcommand))


@cli.command()
def names() -> None:
    """Print the repeater names that will be processed."""
    for name in _handler().repeater_names:
        click.echo(name)


@cli.command("types")
def list_types() -> None:
    """Print the registered repeater types: name, component, title field."""
    try:
        registry = build_registry(get_settings())
    except JsonRepeatersError as exc:
        click.echo(f"configuration error: {exc}", err=True)
        sys.exit(2)
    for definition in registry.all():
        click.echo(f"{definition.name}\t{definition.component_type}\t{definition.title_field or '-'}")


@cli.command()
@click.argument("payload", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--create",
    "create_only",
    is_flag=True,
    help="Run the create-time variant: copy repeaters without lifting media.",
)
def prepare(payload: Path, create_only: bool) -> None:
    """Normalize a submitted payload the way a repository does before persisting."""
    fields = _load_payload(payload)
    handler = _handler()
    if create_only:
        _echo_json(handler.prepare_fields_before_create(fields))
    else:
        _echo_json(handler.prepare_fields_before_save(None, fields))


@cli.command("form-fields")
@click.argument("payload", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def form_fields(payload: Path) -> None:
    """Flatten stored repeaters into the collections the form layer reads."""
    _echo_json(_handler().get_form_fields(None, _load_payload(payload)))


if __name__ == "__main__":
    cli()
