"""
DNS check — does a name resolve through the host's resolver?

Identifiers are a hostname, optionally prefixed with the record family:
``A:example.com`` (IPv4 only), ``AAAA:example.com`` (IPv6 only).
"""

from __future__ import annotations

import socket

from hostspec.core.models.resource import ResourceState
from hostspec.resources.base import Resource

_FAMILIES = {
    "A": socket.AF_INET,
    "AAAA": socket.AF_INET6,
}


class DNS(Resource):
    resource = "dns"

    def _target(self) -> tuple[str, int]:
        prefix, sep, host = self.id.partition(":")
        if sep and prefix.upper() in _FAMILIES:
            return host, _FAMILIES[prefix.upper()]
        return self.id, socket.AF_UNSPEC

    def exists(self) -> ResourceState:
        host, family = self._target()
        try:
            infos = socket.getaddrinfo(host, None, family, socket.SOCK_STREAM)
        except socket.gaierror as e:
            return self._missing(resolvable=False, reason=e.strerror or str(e))
        except (ValueError, OSError) as e:
            return self._failure(str(e))

        addrs = sorted({info[4][0] for info in infos})
        return self._found(resolvable=True, addrs=addrs)
