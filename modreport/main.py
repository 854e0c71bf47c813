"""
modreport — CLI entrypoint.

Usage:
    python -m modreport.main --help
    python -m modreport.main describe path/to/module.yml
    python -m modreport.main find-target std.compile path/to/module.yml
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from modreport import __version__
from modreport.core.observability.logging_config import (
    FILE_ENV,
    FILE_LEVEL_ENV,
    level_from_flags,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="modreport")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--repository",
    "-r",
    "repository",
    type=click.Path(file_okay=False),
    default=None,
    help="Module repository root (default: MODREPORT_REPOSITORY or the parent of the module directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    repository: str | None,
) -> None:
    """Module report: inspect what a build module inherits from its imports."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["repository"] = Path(repository) if repository else None

    setup_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(FILE_ENV),
        log_file_level=os.environ.get(FILE_LEVEL_ENV),
        quiet_third_party=not debug,
    )


@cli.command()
@click.argument("module_file", required=False, type=click.Path(dir_okay=False))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def describe(ctx: click.Context, module_file: str | None, as_json: bool) -> None:
    """List the targets, extension points and properties a module sees."""
    from modreport.core.use_cases.describe import describe_module

    result = describe_module(
        Path(module_file) if module_file else None,
        repository=ctx.obj.get("repository"),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.report is not None  # guaranteed after error check above
    if not ctx.obj.get("quiet"):
        click.secho(f"\n📦 {result.report.label}", fg="cyan", bold=True)
        for imp in result.imports:
            alias = f" as {imp['alias']}" if imp["alias"] else ""
            click.echo(f"   imports {imp['module']}{alias}")
        click.echo()

    click.secho(f"   Extension points: {len(result.extension_points)}", bold=True)
    for ep in result.extension_points:
        bound = ", ".join(ep["targets"]) or "-"
        click.echo(f"     • {ep['name']}  ← {bound}")

    click.secho(f"   Unbound targets: {len(result.unbound_targets)}", bold=True)
    for name in result.unbound_targets:
        click.echo(f"     • {name}")

    click.secho(f"   Properties: {len(result.properties)}", bold=True)
    for name, prop in result.properties.items():
        required = " (required)" if prop["required"] else ""
        default = f" = {prop['default_value']}" if prop["default_value"] is not None else ""
        click.echo(f"     • {name}{default}{required}")

    click.echo()


@cli.command("find-target")
@click.argument("name")
@click.argument("module_file", required=False, type=click.Path(dir_okay=False))
@click.option("--no-imports", is_flag=True, help="Only search the module itself.")
@click.pass_context
def find_target(
    ctx: click.Context, name: str, module_file: str | None, no_imports: bool
) -> None:
    """Show one target by its (alias-prefixed) name."""
    from modreport.core.config.descriptor_loader import find_module_file
    from modreport.core.report.errors import ReportError
    from modreport.core.use_cases.describe import load_module

    path = Path(module_file) if module_file else find_module_file()
    if path is None:
        click.secho("❌ No module.yml found.", fg="red")
        sys.exit(1)

    try:
        report = load_module(path, ctx.obj.get("repository"))
        target = report.get_target(name, include_imports=not no_imports)
    except ReportError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if target is None:
        click.secho(f"❌ Target '{name}' not found", fg="red")
        sys.exit(1)

    click.secho(target.name, bold=True)
    if target.description:
        click.echo(f"   {target.description}")
    if target.depends:
        click.echo(f"   depends: {', '.join(target.depends)}")
    if target.extension_point:
        click.echo(f"   extends: {target.extension_point}")


if __name__ == "__main__":
    cli()
