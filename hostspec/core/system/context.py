"""
System context — the per-run wiring between this host and every check.

Built ONCE at startup by ``new_system()`` and passed by reference to
every resource constructor for the rest of the run:

    system = new_system(package=config.package)
    state = system.new_package("nginx", system).exists()

Design notes:
    - The package and service strategies are chosen at construction
      and never change.  Each is a Resource class bound as a
      constructor (``new_package``, ``new_service``).
    - ``dbus`` is set if and only if the service strategy is
      ServiceDbus.  Failing to open it is the one fatal error here:
      ``new_system()`` raises SystemBusError and the caller exits.
    - Package detection never fails.  Ambiguity selects PackageNull,
      which reports "unavailable" per query.
    - The port table is computed lazily, at most once, under a lock.
      No invalidation: it is a snapshot for the life of the run.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable, Literal

from hostspec.core.models.environment import PortProcess
from hostspec.core.system.bus import SystemdBus
from hostspec.core.system.detection import detect_package_manager, is_running_systemd
from hostspec.core.system.ports import get_ports
from hostspec.resources.addr import Addr
from hostspec.resources.base import Resource
from hostspec.resources.command import Command
from hostspec.resources.dns import DNS
from hostspec.resources.file import File
from hostspec.resources.group import Group
from hostspec.resources.include import Include
from hostspec.resources.package import PackageDeb, PackageNull, PackageRpm
from hostspec.resources.port import Port
from hostspec.resources.process import Process
from hostspec.resources.service import ServiceDbus, ServiceInit
from hostspec.resources.user import User

logger = logging.getLogger(__name__)

ResourceFactory = Callable[[str, "System"], Resource]
PortTable = dict[str, PortProcess]
PortCacheState = Literal["uninitialized", "computing", "ready"]

PACKAGE_STRATEGIES: dict[str, type[PackageRpm | PackageDeb | PackageNull]] = {
    "rpm": PackageRpm,
    "deb": PackageDeb,
    "none": PackageNull,
}

# Resource kind → System attribute holding its constructor
RESOURCE_KINDS: tuple[str, ...] = (
    "package", "file", "addr", "port", "service", "user",
    "group", "command", "dns", "process", "include",
)


class System:
    """Per-run system context handed to every resource check.

    Attributes:
        new_<kind>: Constructor ``(id, system) -> Resource`` for each
            kind in RESOURCE_KINDS.
        dbus: systemd control channel, or None on non-systemd hosts.
    """

    def __init__(
        self,
        new_package: ResourceFactory,
        new_service: ResourceFactory,
        dbus: SystemdBus | None = None,
        port_scanner: Callable[[], PortTable] = get_ports,
    ):
        if new_service is ServiceDbus and dbus is None:
            raise ValueError("ServiceDbus requires a systemd control channel")
        if dbus is not None and new_service is not ServiceDbus:
            raise ValueError("A systemd control channel is only used by ServiceDbus")

        self.new_package = new_package
        self.new_service = new_service
        self.new_file: ResourceFactory = File
        self.new_addr: ResourceFactory = Addr
        self.new_port: ResourceFactory = Port
        self.new_user: ResourceFactory = User
        self.new_group: ResourceFactory = Group
        self.new_command: ResourceFactory = Command
        self.new_dns: ResourceFactory = DNS
        self.new_process: ResourceFactory = Process
        self.new_include: ResourceFactory = Include
        self.dbus = dbus

        self._port_scanner = port_scanner
        self._ports: PortTable | None = None
        self._ports_state: PortCacheState = "uninitialized"
        self._ports_lock = threading.Lock()

    # ── Port cache ───────────────────────────────────────────────

    def ports(self) -> PortTable:
        """The host's port table, scanned on first use.

        Safe to call from any number of threads: the first caller scans,
        everyone else waits on the lock and gets the same mapping.

        A successful scan is never repeated.  If the scanner raises, the
        exception propagates and the cache goes back to uninitialized, so
        a later call scans again.
        """
        if self._ports_state == "ready":
            return self._ports  # type: ignore[return-value]

        with self._ports_lock:
            if self._ports_state != "ready":
                self._ports_state = "computing"
                logger.debug("Scanning host ports")
                try:
                    self._ports = self._port_scanner()
                except Exception:
                    self._ports_state = "uninitialized"
                    raise
                self._ports_state = "ready"
        return self._ports  # type: ignore[return-value]

    @property
    def ports_state(self) -> PortCacheState:
        return self._ports_state

    # ── Lookup ───────────────────────────────────────────────────

    def factory(self, kind: str) -> ResourceFactory:
        """Constructor for a resource kind.

        Raises:
            ValueError: If ``kind`` is not a known resource kind.
        """
        if kind not in RESOURCE_KINDS:
            raise ValueError(
                f"Unknown resource kind '{kind}'. Valid: {', '.join(RESOURCE_KINDS)}"
            )
        return getattr(self, f"new_{kind}")

    def resource(self, kind: str, id: str) -> Resource:
        """Build the check for ``kind`` / ``id`` bound to this context."""
        return self.factory(kind)(id, self)

    @property
    def package_manager(self) -> str:
        return getattr(self.new_package, "manager", "")

    @property
    def init_system(self) -> str:
        return getattr(self.new_service, "init_system", "")

    def describe(self) -> dict[str, Any]:
        """Selected strategies, for display."""
        return {
            "init_system": self.init_system,
            "package_manager": self.package_manager,
            "package_strategy": _name(self.new_package),
            "service_strategy": _name(self.new_service),
            "control_channel": self.dbus is not None,
            "ports": self._ports_state,
        }

    def __repr__(self) -> str:
        return (
            f"<System package={_name(self.new_package)} "
            f"service={_name(self.new_service)}>"
        )


def _name(factory: ResourceFactory) -> str:
    return getattr(factory, "__name__", repr(factory))


# ── Strategy selection ───────────────────────────────────────────


def select_package(
    override: str | None = None,
    root: Path = Path("/"),
    path: str | None = None,
) -> ResourceFactory:
    """Pick the package strategy.

    An explicit ``"rpm"`` / ``"deb"`` override wins over whatever the
    host looks like.  Otherwise detection decides, with PackageNull
    when it can't.

    Raises:
        ValueError: On an override other than rpm or deb.
    """
    if override:
        if override not in ("rpm", "deb"):
            raise ValueError(f"Invalid package override {override!r}, expected rpm or deb")
        logger.info("Package manager forced to %s", override)
        return PACKAGE_STRATEGIES[override]

    detected = detect_package_manager(root, path)
    if detected == "none":
        logger.info("No package manager detected; package checks will report unavailable")
    else:
        logger.info("Detected package manager: %s", detected)
    return PACKAGE_STRATEGIES[detected]


def new_system(
    package: str | None = None,
    root: Path = Path("/"),
    path: str | None = None,
    connect_bus: Callable[[], SystemdBus] = SystemdBus.connect,
    port_scanner: Callable[[], PortTable] = get_ports,
) -> System:
    """Detect the host and build its System context.

    Args:
        package: Package manager override, ``"rpm"``, ``"deb"`` or None.
        root: Filesystem root for marker-file probes.
        path: Executable search path for probes (default: $PATH).
        connect_bus: Opens the systemd control channel.
        port_scanner: Produces the port table on first ``ports()`` call.

    Returns:
        A fully wired System with an uninitialized port cache.

    Raises:
        SystemBusError: The host runs systemd but its bus can't be opened.
        ValueError: Invalid package override.
    """
    new_package = select_package(package, root, path)

    dbus: SystemdBus | None = None
    if is_running_systemd(root):
        logger.info("Init system: systemd")
        new_service: ResourceFactory = ServiceDbus
        dbus = connect_bus()
    else:
        logger.info("Init system: init scripts")
        new_service = ServiceInit

    return System(
        new_package=new_package,
        new_service=new_service,
        dbus=dbus,
        port_scanner=port_scanner,
    )
