"""
systemd control channel — a D-Bus connection to org.freedesktop.systemd1.

Opened once per run when the host runs systemd and shared by every
service check.  The underlying jeepney connection is not thread-safe,
so calls are serialized with a lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from jeepney import DBusAddress, Properties, new_method_call
from jeepney.io.blocking import open_dbus_connection
from jeepney.wrappers import unwrap_msg

from hostspec.core.system.errors import SystemBusError

logger = logging.getLogger(__name__)

SYSTEMD_BUS_NAME = "org.freedesktop.systemd1"
SYSTEMD_OBJECT_PATH = "/org/freedesktop/systemd1"
MANAGER_INTERFACE = "org.freedesktop.systemd1.Manager"
UNIT_INTERFACE = "org.freedesktop.systemd1.Unit"

_MANAGER = DBusAddress(
    SYSTEMD_OBJECT_PATH,
    bus_name=SYSTEMD_BUS_NAME,
    interface=MANAGER_INTERFACE,
)

_UNIT_PROPERTIES = ("LoadState", "ActiveState", "SubState")


def unit_name(name: str) -> str:
    """Full unit name; bare service names get the ``.service`` suffix."""
    return name if "." in name else f"{name}.service"


class SystemdBus:
    """Blocking client for the systemd manager on the system bus."""

    def __init__(self, connection: Any):
        self._conn = connection
        self._lock = threading.Lock()

    @classmethod
    def connect(cls) -> SystemdBus:
        """Open the system bus.

        Raises:
            SystemBusError: If the bus cannot be reached or authenticated.
        """
        try:
            conn = open_dbus_connection(bus="SYSTEM")
        except Exception as e:
            logger.error("Cannot connect to the systemd D-Bus: %s", e)
            raise SystemBusError(f"Cannot connect to the systemd D-Bus: {e}") from e
        logger.debug("Connected to system bus as %s", getattr(conn, "unique_name", "?"))
        return cls(conn)

    def _call(self, msg: Any) -> tuple:
        with self._lock:
            reply = self._conn.send_and_get_reply(msg)
        return unwrap_msg(reply)

    def unit_properties(self, name: str) -> dict[str, str]:
        """LoadState, ActiveState and SubState of a unit.

        Units systemd knows nothing about still load, with
        ``LoadState == "not-found"``.

        Raises:
            jeepney.wrappers.DBusErrorResponse: If systemd rejects the call.
        """
        (path,) = self._call(new_method_call(_MANAGER, "LoadUnit", "s", (unit_name(name),)))
        unit = DBusAddress(path, bus_name=SYSTEMD_BUS_NAME, interface=UNIT_INTERFACE)
        props = Properties(unit)

        result: dict[str, str] = {}
        for prop in _UNIT_PROPERTIES:
            # Variants come back as (signature, value)
            (variant,) = self._call(props.get(prop))
            result[prop] = variant[1]
        return result

    def unit_file_state(self, name: str) -> str:
        """UnitFileState (enabled, disabled, static, masked, ...).

        Raises:
            jeepney.wrappers.DBusErrorResponse: NoSuchUnit when no unit file exists.
        """
        (state,) = self._call(
            new_method_call(_MANAGER, "GetUnitFileState", "s", (unit_name(name),))
        )
        return state
