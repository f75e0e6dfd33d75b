"""Console singletons and display helpers."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel

# ---------------------------------------------------------------------------
# Console singletons
# ---------------------------------------------------------------------------

console = Console(emoji=False)
err_console = Console(stderr=True, emoji=False)

# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------


def print_command_preview(cmd: str) -> None:
    """Show the command that is about to be executed in dim style."""
    console.print(f"\n  $ {cmd}\n", style="dim", markup=False, highlight=False, soft_wrap=True)


def print_error(msg: str) -> None:
    """Print an error message to stderr, verbatim and on a single line."""
    err_console.print(msg, style="bold red", markup=False, highlight=False, soft_wrap=True)


def settings_panel(config_path: str, region: str, domain: str, remote_user: str) -> None:
    """Display the active configuration."""
    body = (
        f"[bold]Config path:[/bold] {config_path}\n"
        f"[bold]Region:[/bold]      {region}\n"
        f"[bold]Domain:[/bold]      {domain}\n"
        f"[bold]Remote user:[/bold] {remote_user}"
    )
    console.print(Panel(
        body,
        title="[bold]ec2-tunnel config[/bold]",
        border_style="blue",
    ))
