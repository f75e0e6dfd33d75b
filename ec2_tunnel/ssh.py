"""EC2 host name derivation and SSH tunnel command building.

Builds ``ssh -L local:host:remote ... user@host`` as discrete argv tokens.
Nothing here touches the network or spawns processes.
"""

from __future__ import annotations

import shlex
from collections.abc import Iterable
from dataclasses import dataclass

from ec2_tunnel.config import TunnelSettings
from ec2_tunnel.parsing import PortPair, parse_address, parse_port_pairs

FORWARD_FLAG = "-L"

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class HostResolutionError(Exception):
    """Raised when an address cannot be turned into an EC2 host name."""


# ---------------------------------------------------------------------------
# Command descriptor
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CommandDescriptor:
    """Program name plus its ordered arguments, ready to hand to the executor."""

    program: str
    args: tuple[str, ...]

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def render(self) -> str:
        """Return a shell-quoted single line, for display only."""
        return shlex.join(self.argv)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def derive_host_name(address: Iterable[int], settings: TunnelSettings) -> str:
    """Return the public DNS name EC2 assigns to the given address.

    ``192.168.0.1`` in ap-southeast-2 becomes
    ``ec2-192-168-0-1.ap-southeast-2.compute.amazonaws.com``.
    Raises ``HostResolutionError`` unless there are exactly four components.
    """
    octets = list(address)
    if len(octets) != 4:
        raise HostResolutionError(
            f"Could not get ec2 host name: expected 4 address components, got {len(octets)}."
        )
    dashed = "-".join(str(o) for o in octets)
    return f"ec2-{dashed}.{settings.region}.compute.{settings.domain}"


def build_tunnel_command(
    host_name: str,
    port_pairs: Iterable[PortPair],
    settings: TunnelSettings,
) -> CommandDescriptor:
    """Build the ssh command forwarding each pair through *host_name*.

    Parameters
    ----------
    host_name:
        Derived EC2 public DNS name.
    port_pairs:
        Forwards in the order they should appear on the command line.
    settings:
        Supplies the program name, extra ssh options and remote user.
    """
    args: list[str] = list(settings.ssh_options)

    # Each flag must stay adjacent to its value
    for pair in port_pairs:
        args.extend([FORWARD_FLAG, f"{pair.local}:{host_name}:{pair.remote}"])

    # Target
    args.append(f"{settings.remote_user}@{host_name}")

    return CommandDescriptor(program=settings.ssh_program, args=tuple(args))


def build_command_for(
    raw_address: str,
    raw_ports: Iterable[str],
    settings: TunnelSettings,
) -> CommandDescriptor:
    """Validate raw CLI input and build the tunnel command in one step.

    The address is checked before any port pair.
    """
    address = parse_address(raw_address)
    pairs = parse_port_pairs(raw_ports)
    return build_tunnel_command(derive_host_name(address, settings), pairs, settings)
