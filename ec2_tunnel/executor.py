"""Subprocess runner for the ssh tunnel session.

The child inherits the terminal's stdin/stdout/stderr. Launch errors are
raised as ``LaunchFailure``; the caller decides what to do with the exit code.
"""

from __future__ import annotations

import os
import subprocess

from ec2_tunnel.ssh import CommandDescriptor
from ec2_tunnel.utils import console, print_command_preview


class LaunchFailure(Exception):
    """Raised when the ssh process could not be started."""


def run_interactive(cmd: CommandDescriptor, *, preview: bool = True) -> int:
    """Run a command interactively and wait for it to exit.

    Returns the process exit code.
    """
    if preview:
        print_command_preview(cmd.render())

    try:
        result = subprocess.run(cmd.argv, env=os.environ.copy())
        return result.returncode
    except OSError as exc:
        raise LaunchFailure(str(exc)) from exc
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        return 130
