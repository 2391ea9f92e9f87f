"""
Service checks — one strategy per init system.

    ServiceDbus → asks systemd over the shared D-Bus control channel
    ServiceInit → SysV init scripts: /etc/init.d/NAME, rc?.d links,
                  ``service NAME status``
"""

from __future__ import annotations

import glob
import logging
import shutil
import subprocess
from pathlib import Path
from typing import ClassVar

from jeepney.wrappers import DBusErrorResponse

from hostspec.core.models.resource import ResourceState
from hostspec.resources.base import Resource

logger = logging.getLogger(__name__)

_TIMEOUT = 10


class Service(Resource):
    """Base for service strategies."""

    resource = "service"
    init_system: ClassVar[str] = ""


class ServiceDbus(Service):
    init_system = "systemd"

    def exists(self) -> ResourceState:
        bus = self.system.dbus
        if bus is None:
            return self._failure("no systemd control channel", init_system=self.init_system)

        try:
            props = bus.unit_properties(self.id)
        except DBusErrorResponse as e:
            return self._failure(f"systemd: {e}", init_system=self.init_system)
        except Exception as e:
            logger.warning("D-Bus query for %s failed: %s", self.id, e)
            return self._failure(f"D-Bus error: {e}", init_system=self.init_system)

        if props.get("LoadState") == "not-found":
            return self._missing(init_system=self.init_system, running=False, enabled=False)

        try:
            file_state = bus.unit_file_state(self.id)
        except DBusErrorResponse:
            # Transient and generated units have no unit file
            file_state = ""

        return self._found(
            init_system=self.init_system,
            running=props.get("ActiveState") == "active",
            enabled=file_state == "enabled",
            active_state=props.get("ActiveState", ""),
            sub_state=props.get("SubState", ""),
            unit_file_state=file_state,
        )


class ServiceInit(Service):
    init_system = "init"

    init_dir: ClassVar[Path] = Path("/etc/init.d")
    rc_root: ClassVar[Path] = Path("/etc")

    def _enabled(self) -> bool:
        """Enabled when a start link exists in any runlevel directory."""
        return any(self.rc_root.glob(f"rc*.d/S??{glob.escape(self.id)}"))

    def _running(self, script: Path) -> bool:
        """Ask the init script; LSB status exits 0 only when running."""
        argv = (
            ["service", self.id, "status"]
            if shutil.which("service")
            else [str(script), "status"]
        )
        r = subprocess.run(argv, capture_output=True, text=True, timeout=_TIMEOUT)
        return r.returncode == 0

    def exists(self) -> ResourceState:
        script = self.init_dir / self.id
        if not script.exists():
            return self._missing(init_system=self.init_system, running=False, enabled=False)

        try:
            running = self._running(script)
        except subprocess.TimeoutExpired:
            return self._failure(
                f"status check timed out after {_TIMEOUT}s", init_system=self.init_system,
            )
        except OSError as e:
            return self._failure(f"status check failed: {e}", init_system=self.init_system)

        return self._found(
            init_system=self.init_system,
            running=running,
            enabled=self._enabled(),
            script=str(script),
        )
