"""
hostspec — CLI entrypoint.

Usage:
    python -m hostspec.main --help
    python -m hostspec.main detect
    python -m hostspec.main --package deb check package openssh-server
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from hostspec import __version__
from hostspec.core.observability.logging_config import configure_logging, resolve_level


@click.group()
@click.version_option(version=__version__, prog_name="hostspec")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to hostspec.yml (default: auto-detect).",
)
@click.option(
    "--package",
    type=click.Choice(["rpm", "deb"]),
    default=None,
    help="Force the package manager instead of detecting it.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    package: str | None,
) -> None:
    """hostspec — validate live server state."""
    from hostspec.core.config.loader import ConfigError, apply_env_overrides, load_config

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet

    try:
        config = apply_env_overrides(load_config(Path(config_path) if config_path else None))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    # CLI flag > HOSTSPEC_PACKAGE > hostspec.yml
    if package:
        config = config.model_copy(update={"package": package})
    ctx.obj["config"] = config

    # ── Logging setup (once, before the System is built) ─────────
    level = resolve_level(config.log_level, debug=debug, verbose=verbose, quiet=quiet)
    configure_logging(level, config)


def _build_system(ctx: click.Context):
    """Build the run's System context, exiting on the fatal bus error."""
    from hostspec.core.system.context import new_system
    from hostspec.core.system.errors import FatalSystemError

    config = ctx.obj["config"]
    try:
        return new_system(package=config.package)
    except FatalSystemError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def detect(ctx: click.Context, as_json: bool) -> None:
    """Show which service and package strategies this host uses."""
    info = _build_system(ctx).describe()

    if as_json:
        click.echo(json.dumps(info, indent=2))
        return

    click.secho("\n🔍 Host environment", fg="cyan", bold=True)
    click.echo(f"   Init system:      {info['init_system']}  [{info['service_strategy']}]")
    click.echo(f"   Package manager:  {info['package_manager']}  [{info['package_strategy']}]")
    channel = "connected" if info["control_channel"] else "none"
    click.echo(f"   Control channel:  {channel}")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def ports(ctx: click.Context, as_json: bool) -> None:
    """List listening ports and the processes that own them."""
    import psutil

    system = _build_system(ctx)
    try:
        table = system.ports()
    except (psutil.Error, OSError) as e:
        click.secho(f"❌ Port scan failed: {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(
            {key: entry.model_dump() for key, entry in sorted(table.items())},
            indent=2,
        ))
        return

    if not table:
        click.echo("No listening ports found.")
        return

    for key, entry in sorted(table.items()):
        owner = f"{entry.name or '?'} ({entry.pid})" if entry.pid else "-"
        click.echo(f"   {key:<12} {entry.address:<24} {owner}")


@cli.command()
@click.argument("kind")
@click.argument("ids", nargs=-1, required=True)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, kind: str, ids: tuple[str, ...], as_json: bool) -> None:
    """Check one or more resources of KIND (package, service, port, ...)."""
    from hostspec.core.use_cases.check import run_checks

    system = _build_system(ctx)
    try:
        result = run_checks(
            system,
            [(kind, id) for id in ids],
            max_workers=ctx.obj["config"].max_concurrent,
        )
    except ValueError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(2)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        for state in result.states:
            if state.ok:
                click.secho(f"   ✓ {state.resource}:{state.id}", fg="green")
            elif state.status == "missing":
                click.secho(f"   ✗ {state.resource}:{state.id} missing", fg="red")
            else:
                click.secho(f"   ! {state.resource}:{state.id} {state.status}: {state.error}", fg="yellow")

    if not result.ok:
        sys.exit(1)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
