# core/hosts.py
"""
Host identities.

A Host is a name as given on the command line, the IPv4 address it resolved
to at startup, and its role. The address is the identity used everywhere
else; it is resolved once and never refreshed.
"""

import socket
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

from core.utils import get_logger

logger = get_logger("hosts")


class Role(Enum):
    NEIGHBOUR = "neighbour"
    UNIVERSE_MEMBER = "universe"


class HostResolutionError(Exception):
    pass


@dataclass(frozen=True)
class Host:
    name: str
    address: str
    role: Role


def resolve_hostname(host: str) -> str:
    """Return the first IPv4 address for the given hostname."""
    try:
        replies = socket.getaddrinfo(host, None, socket.AF_INET)
    except (socket.gaierror, UnicodeError) as e:
        raise HostResolutionError(f"Could not resolve {host} ({e})") from e
    for family, _, _, _, sockaddr in replies:
        if family == socket.AF_INET:
            return sockaddr[0]
    raise HostResolutionError(f"Could not resolve {host} (no IPv4 address)")


def resolve_hosts(neighbour: str, universe: Iterable[str]) -> Tuple[Host, List[Host]]:
    neighbour_host = Host(neighbour, resolve_hostname(neighbour), Role.NEIGHBOUR)
    logger.info("Neighbour %s resolved to %s", neighbour, neighbour_host.address)

    members = []
    for name in universe:
        member = Host(name, resolve_hostname(name), Role.UNIVERSE_MEMBER)
        logger.debug("Universe member %s resolved to %s", name, member.address)
        members.append(member)
    return neighbour_host, members
