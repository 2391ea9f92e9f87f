"""
Address check — can this host open a TCP connection to HOST:PORT?

Identifiers look like ``tcp://example.com:443`` or ``example.com:443``;
IPv6 literals go in brackets (``tcp://[::1]:22``).
"""

from __future__ import annotations

import socket
from typing import ClassVar

from hostspec.core.models.resource import ResourceState
from hostspec.resources.base import Resource


def parse_address(address: str) -> tuple[str, int]:
    """Split ``[tcp://]HOST:PORT`` into (host, port).

    Raises:
        ValueError: On a non-tcp scheme or a missing/invalid port.
    """
    scheme, sep, rest = address.partition("://")
    if not sep:
        scheme, rest = "tcp", address
    if scheme != "tcp":
        raise ValueError(f"Unsupported scheme {scheme!r}, only tcp is supported")

    host, sep, port = rest.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"Expected HOST:PORT, got {rest!r}")
    return host.strip("[]"), int(port)


class Addr(Resource):
    resource = "addr"
    timeout: ClassVar[float] = 0.5

    def exists(self) -> ResourceState:
        try:
            host, port = parse_address(self.id)
        except ValueError as e:
            return self._failure(str(e))

        try:
            with socket.create_connection((host, port), timeout=self.timeout):
                pass
        except ValueError as e:
            return self._failure(str(e))
        except OSError as e:
            return self._missing(reachable=False, reason=str(e) or e.__class__.__name__)

        return self._found(reachable=True, host=host, port=port)
