"""Command line interface for typed-prompt."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from typed_prompt.config import PromptConfig, load_config
from typed_prompt.engine import PromptEngine
from typed_prompt.errors import AttemptsExhausted, ConfigError, StreamFatal
from typed_prompt.parsers import TYPE_TAGS, parser_for, type_tags
from typed_prompt.requests import RequestList


def _load_config(config_path: str | None, type_hint: bool) -> PromptConfig:
    try:
        config = load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    if type_hint:
        config = config.model_copy(update={"show_type_hint": True})
    return config


def _engine(config: PromptConfig) -> PromptEngine:
    # Prompts and diagnostics go to stderr so stdout carries only results
    return PromptEngine(output=sys.stderr, errors=sys.stderr, config=config)


def _parse_field(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> list[tuple[str, str, str]]:
    """Split NAME:TYPE[:PROMPT] field specs."""
    fields: list[tuple[str, str, str]] = []
    seen: set[str] = set()
    for value in values:
        parts = value.split(":", 2)
        if len(parts) < 2 or not parts[0]:
            raise click.BadParameter(f"expected NAME:TYPE[:PROMPT], got '{value}'")
        name, type_tag = parts[0], parts[1]
        if type_tag not in TYPE_TAGS:
            raise click.BadParameter(
                f"unknown type '{type_tag}' for field '{name}', "
                f"choose from {', '.join(type_tags())}"
            )
        if name in seen:
            raise click.BadParameter(f"duplicate field name '{name}'")
        seen.add(name)
        prompt = parts[2] if len(parts) == 3 else f"{name}: "
        fields.append((name, type_tag, prompt))
    return fields


def _jsonable(value: Any) -> Any:
    if isinstance(value, bool | int | float | str) or value is None:
        return value
    return str(value)


@click.group()
@click.version_option(package_name="typed-prompt")
@click.option("--verbose", "-v", is_flag=True, help="Log engine state transitions")
def cli(verbose: bool) -> None:
    """typed-prompt - ask for typed values until they parse."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("type_tag", metavar="TYPE", type=click.Choice(type_tags()))
@click.argument("prompt", default="")
@click.option(
    "--type-hint", is_flag=True, help="Append the expected type to the prompt"
)
@click.option(
    "--max-attempts",
    type=click.IntRange(min=1),
    default=None,
    help="Give up after this many attempts (default: retry forever)",
)
@click.option("--config", "config_path", default=None, help="YAML config file")
@click.option("--json", "as_json", is_flag=True, help="Print the value as JSON")
def ask(
    type_tag: str,
    prompt: str,
    type_hint: bool,
    max_attempts: int | None,
    config_path: str | None,
    as_json: bool,
) -> None:
    """Prompt for one value of TYPE until the input parses."""
    engine = _engine(_load_config(config_path, type_hint))
    try:
        value = engine.request_value(type_tag, prompt, max_attempts=max_attempts)
    except (StreamFatal, AttemptsExhausted) as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        Console().print_json(data={"value": _jsonable(value), "type": type_tag})
    else:
        click.echo(value)


@cli.command()
@click.option(
    "--field",
    "-f",
    "fields",
    multiple=True,
    required=True,
    callback=_parse_field,
    help="Field to request as NAME:TYPE[:PROMPT]; repeat for more",
)
@click.option("--type-hint", is_flag=True, help="Append the expected type to prompts")
@click.option("--config", "config_path", default=None, help="YAML config file")
@click.option("--json", "as_json", is_flag=True, help="Print the values as JSON")
def form(
    fields: list[tuple[str, str, str]],
    type_hint: bool,
    config_path: str | None,
    as_json: bool,
) -> None:
    """Prompt for several values in order."""
    engine = _engine(_load_config(config_path, type_hint))
    requests = RequestList()
    for name, type_tag, prompt in fields:
        requests.add(type_tag, prompt, name=name)

    try:
        values = requests.collect_as_dict(engine)
    except StreamFatal as e:
        raise click.ClickException(
            f"{e} after {len(e.partial)} of {len(requests)} field(s)"
        ) from e
    except AttemptsExhausted as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        Console().print_json(data={k: _jsonable(v) for k, v in values.items()})
        return

    table = Table(title="Collected values")
    table.add_column("Field", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Value", style="green")
    for name, type_tag, _ in fields:
        table.add_row(name, parser_for(type_tag).type_name, str(values[name]))
    Console().print(table)


@cli.command()
def types() -> None:
    """List the type names accepted by ask and form."""
    for tag in type_tags():
        click.echo(tag)


if __name__ == "__main__":
    cli()
