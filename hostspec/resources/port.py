"""
Port check — is anything listening on PROTO:PORT?

Reads the system context's shared port table, so however many port
checks run, the host's sockets are scanned once.
"""

from __future__ import annotations

import logging

from hostspec.core.models.resource import ResourceState
from hostspec.core.system.ports import port_key
from hostspec.resources.base import Resource

logger = logging.getLogger(__name__)


def normalize_port(id: str) -> str:
    """``"22"`` → ``"tcp:22"``; ``"udp:53"`` stays as it is.

    Raises:
        ValueError: If the port part is not a number.
    """
    protocol, sep, port = id.rpartition(":")
    if not sep:
        protocol = "tcp"
    if not port.isdigit():
        raise ValueError(f"Invalid port {id!r}")
    return port_key(protocol, int(port))


class Port(Resource):
    resource = "port"

    def exists(self) -> ResourceState:
        try:
            key = normalize_port(self.id)
        except ValueError as e:
            return self._failure(str(e))

        try:
            table = self.system.ports()
        except Exception as e:
            logger.warning("Port scan failed while checking %s: %s", self.id, e)
            return self._failure(f"Port scan failed: {e}")

        entry = table.get(key)
        if entry is None:
            return self._missing(listening=False)

        return self._found(
            listening=True,
            address=entry.address,
            pid=entry.pid,
            process=entry.name,
        )
