"""
Port scan — one pass over the host's sockets.

Builds the port table the system context caches: listening TCP sockets
and bound UDP sockets, keyed ``"<proto>:<port>"`` (``tcp:22``,
``tcp6:22``, ``udp:53``, ``udp6:53``), each mapped to the owning process.
"""

from __future__ import annotations

import logging

import psutil

from hostspec.core.models.environment import PortProcess

logger = logging.getLogger(__name__)

# psutil connection kind → table protocol
_KINDS: tuple[tuple[str, str], ...] = (
    ("tcp4", "tcp"),
    ("tcp6", "tcp6"),
    ("udp4", "udp"),
    ("udp6", "udp6"),
)


def port_key(protocol: str, port: int | str) -> str:
    """Key a port table entry: ``port_key("tcp", 22) == "tcp:22"``."""
    return f"{protocol}:{port}"


def _process_name(pid: int | None, cache: dict[int, str]) -> str:
    if pid is None:
        return ""
    if pid not in cache:
        try:
            cache[pid] = psutil.Process(pid).name()
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            cache[pid] = ""
    return cache[pid]


def get_ports() -> dict[str, PortProcess]:
    """Scan every inet socket once and return the port table.

    Sockets owned by other users may carry no pid when not running as
    root; they are still listed, with ``pid=None``.  When several
    sockets share a key the first one seen wins.
    """
    ports: dict[str, PortProcess] = {}
    names: dict[int, str] = {}

    for kind, protocol in _KINDS:
        try:
            conns = psutil.net_connections(kind=kind)
        except psutil.AccessDenied as e:
            logger.warning("Cannot list %s sockets: %s", kind, e)
            continue

        for conn in conns:
            if protocol.startswith("tcp") and conn.status != psutil.CONN_LISTEN:
                continue
            if not conn.laddr:
                continue

            key = port_key(protocol, conn.laddr.port)
            if key in ports:
                continue

            ports[key] = PortProcess(
                protocol=protocol,
                port=conn.laddr.port,
                address=conn.laddr.ip,
                state=conn.status,
                pid=conn.pid,
                name=_process_name(conn.pid, names),
            )

    logger.debug("Port scan found %d sockets", len(ports))
    return ports
