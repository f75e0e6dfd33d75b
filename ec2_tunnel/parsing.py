"""Address and port-pair parsing for tunnel requests.

Both parsers accept raw CLI text and either return immutable values or raise
an ``InvalidInput`` subclass carrying the offending text.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

# ASCII digits only; ``\d`` would also accept other Unicode decimal digits.
ADDRESS_PATTERN = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)\.([0-9]+)")
PORT_PAIR_PATTERN = re.compile(r"([0-9]+):([0-9]+)")

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class InvalidInput(Exception):
    """Base class for rejected user input. ``raw`` holds the offending text."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(self.describe(raw))

    @staticmethod
    def describe(raw: str) -> str:
        return f"{raw} is not valid"


class InvalidAddressFormat(InvalidInput):
    """Raised when an address is not four dot-separated digit groups."""

    @staticmethod
    def describe(raw: str) -> str:
        return f"{raw} is not a valid IPv4 address"


class InvalidPortPairFormat(InvalidInput):
    """Raised when a forwarding spec is not ``<digits>:<digits>``."""

    @staticmethod
    def describe(raw: str) -> str:
        return f"{raw} is not a valid port pair"


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Address:
    """Four numeric components of the instance's public address.

    Values are not range-checked; ``999.1.1.1`` is a valid Address.
    """

    octets: tuple[int, ...]

    def __iter__(self):
        return iter(self.octets)

    def __len__(self) -> int:
        return len(self.octets)

    def __str__(self) -> str:
        return ".".join(str(o) for o in self.octets)


@dataclass(frozen=True, slots=True)
class PortPair:
    """A local listening port and the remote port it forwards to, kept as text."""

    local: str
    remote: str


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------


def parse_address(raw: str) -> Address:
    """Parse ``A.B.C.D`` into an Address, raising ``InvalidAddressFormat`` otherwise."""
    match = ADDRESS_PATTERN.fullmatch(raw)
    if match is None:
        raise InvalidAddressFormat(raw)
    return Address(octets=tuple(int(group) for group in match.groups()))


def parse_port_pair(raw: str) -> PortPair:
    match = PORT_PAIR_PATTERN.fullmatch(raw)
    if match is None:
        raise InvalidPortPairFormat(raw)
    local, remote = match.groups()
    return PortPair(local=local, remote=remote)


def parse_port_pairs(raws: Iterable[str]) -> list[PortPair]:
    """Parse forwarding specs in order, stopping at the first invalid one.

    Elements after the first failure are never inspected.
    """
    return [parse_port_pair(raw) for raw in raws]
