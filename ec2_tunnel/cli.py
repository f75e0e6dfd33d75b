"""Typer CLI application for ec2-tunnel.

Provides ``connect`` to open SSH port forwards to an EC2 instance by its
public address, and ``config`` to inspect the active settings.
"""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from ec2_tunnel import __version__
from ec2_tunnel.config import ConfigError, TunnelSettings, load_config
from ec2_tunnel.parsing import InvalidInput
from ec2_tunnel.utils import console, print_error

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="ec2-tunnel",
    help="Open SSH port forwards to an EC2 instance from its public IPv4 address.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=True,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_config_or_exit(**overrides: str | None) -> TunnelSettings:
    """Load config and apply CLI overrides, printing a helpful error and exiting on failure."""
    try:
        return load_config().with_overrides(**overrides)
    except ConfigError as exc:
        print_error(str(exc))
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Default callback
# ---------------------------------------------------------------------------


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool, typer.Option("--version", "-V", help="Show version and exit.")
    ] = False,
):
    """Connect to a development EC2 instance with local port forwards."""
    if version:
        console.print(f"ec2-tunnel [bold]{__version__}[/bold]")
        raise typer.Exit()


# ---------------------------------------------------------------------------
# ec2-tunnel connect
# ---------------------------------------------------------------------------


@app.command("connect")
def cmd_connect(
    address: Annotated[str, typer.Argument(help="Public IPv4 address of the instance.")],
    port: Annotated[
        Optional[list[str]],
        typer.Option("--port", "-p", help="Forward LOCAL:REMOTE. Repeatable."),
    ] = None,
    region: Annotated[
        Optional[str], typer.Option("--region", help="Override the AWS region.")
    ] = None,
    user: Annotated[
        Optional[str], typer.Option("--user", "-u", help="Override the remote user.")
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Print the ssh command instead of running it.")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Do not preview the command before running.")
    ] = False,
    propagate_exit: Annotated[
        bool, typer.Option("--propagate-exit", help="Exit with the ssh process's exit code.")
    ] = False,
):
    """Open an SSH session with the requested local port forwards."""
    settings = _load_config_or_exit(region=region, remote_user=user)

    from ec2_tunnel.executor import LaunchFailure, run_interactive
    from ec2_tunnel.ssh import build_command_for

    try:
        cmd = build_command_for(address, port or [], settings)
    except InvalidInput as exc:
        print_error(str(exc))
        raise typer.Exit(1)

    if dry_run:
        console.print(cmd.render(), markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit()

    try:
        exit_code = run_interactive(cmd, preview=not quiet)
    except LaunchFailure as exc:
        print_error(str(exc))
        raise typer.Exit(127)

    if propagate_exit:
        raise typer.Exit(exit_code)


# ---------------------------------------------------------------------------
# ec2-tunnel config
# ---------------------------------------------------------------------------


@app.command("config")
def cmd_config():
    """Show active config path and validate it."""
    from ec2_tunnel.config import ENV_CONFIG_VAR, get_config_path, validate_config_file
    from ec2_tunnel.utils import settings_panel

    ok, msg = validate_config_file()
    if not ok:
        print_error(msg)
        raise typer.Exit(1)

    settings = load_config()
    settings_panel(
        config_path=str(settings.config_path or f"{get_config_path()} (not found, using defaults)"),
        region=settings.region,
        domain=settings.domain,
        remote_user=settings.remote_user,
    )
    console.print(f"[dim]Override the path with {ENV_CONFIG_VAR}.[/dim]")
    console.print(f"[green]✓ {msg}[/green]")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def app_entry() -> None:
    """Console script entry point for ``ec2-tunnel``."""
    app()
