# SPDX-License-Identifier: BUSL-1.1
"""Host port selection for new containers."""

import socket
from typing import Optional

from dv.errors import ConfigurationError, ResourceExhaustionError

MIN_PORT = 1
MAX_PORT = 65535


def _bind_fails(family: int, address: str, port: int) -> bool:
    try:
        sock = socket.socket(family, socket.SOCK_STREAM)
    except OSError:
        # Address family not supported on this host
        return False
    try:
        if family == socket.AF_INET6:
            sock.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 1)
        sock.bind((address, port))
        sock.listen(1)
    except OSError:
        return True
    finally:
        sock.close()
    return False


def is_port_in_use(port: int) -> bool:
    """Return True when the TCP port cannot be bound on all local interfaces.

    Both the IPv4 and, where the host supports it, the IPv6 wildcard address
    are checked, since docker publishes on both.
    """
    if _bind_fails(socket.AF_INET, "", port):
        return True
    return socket.has_ipv6 and _bind_fails(socket.AF_INET6, "::", port)


def check_port(value, name: str) -> int:
    """Return value as an int, raising ConfigurationError unless it is a valid TCP port."""
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if not MIN_PORT <= port <= MAX_PORT:
        raise ConfigurationError(f"{name} must be between {MIN_PORT} and {MAX_PORT}, got {port}")
    return port


def find_free_port(start: int, limit: Optional[int] = None) -> int:
    """Return the first port >= start that is free right now.

    Nothing is reserved: another process may take the port before docker
    binds it.
    """
    check_port(start, "starting port")
    last = MAX_PORT if limit is None else min(limit, MAX_PORT)
    port = start
    while port <= last:
        if not is_port_in_use(port):
            return port
        port += 1
    raise ResourceExhaustionError(f"no free TCP port between {start} and {last}")
