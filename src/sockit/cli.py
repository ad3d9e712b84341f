"""Click CLI entry point for sockit."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
import yaml

from sockit import __version__
from sockit.config import configure_logging, find_config, load_config
from sockit.errors import CompileError, ConfigError, PatternModeError, ResolutionError
from sockit.models import SockitConfig
from sockit.parser import compile_pattern
from sockit.pattern import Pattern


@click.group()
@click.version_option(version=__version__, prog_name="sockit")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to a sockit.yaml config (default: nearest sockit.yaml)",
)
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Match, extract and render parenthesized string templates."""
    ctx.ensure_object(dict)
    path = config_path or find_config(Path.cwd())
    try:
        config = load_config(path) if path else SockitConfig()
    except ConfigError as e:
        raise click.ClickException(str(e))
    configure_logging(config, verbose=verbose)
    ctx.obj["config"] = config


def _compile(ctx: click.Context, template: str) -> Pattern:
    try:
        return compile_pattern(template, ctx.obj["config"])
    except CompileError as e:
        raise click.ClickException(str(e)) from e


@cli.command("compile")
@click.argument("template")
@click.option("--json", "as_json", is_flag=True, default=False, help="Output JSON")
@click.pass_context
def compile_command(ctx: click.Context, template: str, as_json: bool) -> None:
    """Show how TEMPLATE is split and classified."""
    pattern = _compile(ctx, template)
    data: dict[str, Any] = {
        "template": pattern.template,
        "mode": pattern.mode.value,
        "segments": [
            {"kind": s.kind.value, "text": s.text} for s in pattern.segments
        ],
    }
    if pattern.is_outbound:
        data["operation"] = pattern.operation_name
        data["constructor"] = pattern.is_constructor
    else:
        data["key_paths"] = list(pattern.key_paths)

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"Mode: {data['mode']}")
    for segment in pattern.segments:
        label = "param" if segment.is_parameter else "literal"
        click.echo(f"  {label:<8}{segment.text!r}")
    if pattern.is_outbound:
        click.echo(f"Operation: {pattern.operation_name}")
    elif pattern.key_paths:
        click.echo(f"Key paths: {', '.join(pattern.key_paths)}")


@cli.command()
@click.argument("template")
@click.argument("text")
@click.pass_context
def match(ctx: click.Context, template: str, text: str) -> None:
    """Check whether TEXT conforms to TEMPLATE."""
    pattern = _compile(ctx, template)
    if pattern.matches(text):
        click.echo("conforms")
    else:
        click.echo("does not conform")
        ctx.exit(1)


@cli.command()
@click.argument("template")
@click.argument("text")
@click.option("--json", "as_json", is_flag=True, default=False, help="Output JSON")
@click.pass_context
def extract(ctx: click.Context, template: str, text: str, as_json: bool) -> None:
    """Print the parameter values TEXT binds in TEMPLATE."""
    pattern = _compile(ctx, template)
    values = pattern.extract(text)
    if values is None:
        click.echo(f"Error: '{text}' does not conform to '{template}'", err=True)
        ctx.exit(1)
        return

    if as_json:
        click.echo(json.dumps(values))
        return
    tokens = [s.text for s in pattern.segments if s.is_parameter]
    for token, value in zip(tokens, values):
        click.echo(f"{token}\t{value}")


@cli.command()
@click.argument("template")
@click.option(
    "--data",
    "data_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML or JSON file holding the object to render",
)
@click.option("--set", "assignments", multiple=True, help="KEY=VALUE, dotted keys nest")
@click.pass_context
def render(
    ctx: click.Context, template: str, data_path: Path | None, assignments: tuple[str, ...]
) -> None:
    """Render TEMPLATE from a data file and/or --set values."""
    pattern = _compile(ctx, template)

    data: dict[str, Any] = {}
    if data_path is not None:
        try:
            loaded = yaml.safe_load(data_path.read_text())
        except yaml.YAMLError as e:
            raise click.ClickException(f"Invalid data file {data_path}: {e}")
        if loaded is not None:
            if not isinstance(loaded, dict):
                raise click.ClickException(f"Data in {data_path} must be a mapping")
            data.update(loaded)

    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{assignment}'", param_hint="--set")
        _assign(data, key.split("."), value)

    try:
        click.echo(pattern.render(data))
    except (ResolutionError, PatternModeError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def _assign(data: dict[str, Any], keys: list[str], value: str) -> None:
    for key in keys[:-1]:
        nested = data.get(key)
        if not isinstance(nested, dict):
            nested = {}
            data[key] = nested
        data = nested
    data[keys[-1]] = value
