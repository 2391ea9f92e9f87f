"""
Package checks — one strategy per package ecosystem.

    PackageRpm  → rpm -q --qf '%{VERSION}\\n' NAME
    PackageDeb  → dpkg-query -f '${Status} ${Version}\\n' -W NAME
    PackageNull → no package manager on this host; every query is
                  reported as unavailable
"""

from __future__ import annotations

import logging
import subprocess
from typing import ClassVar

from hostspec.core.models.resource import ResourceState
from hostspec.resources.base import Resource

logger = logging.getLogger(__name__)

_TIMEOUT = 10


class Package(Resource):
    """Base for package strategies."""

    resource = "package"
    manager: ClassVar[str] = ""

    def _query(self, argv: list[str]) -> subprocess.CompletedProcess[str] | ResourceState:
        """Run a package query, or return the failure state if it can't run."""
        try:
            return subprocess.run(
                argv,
                capture_output=True, text=True, timeout=_TIMEOUT,
            )
        except FileNotFoundError:
            logger.warning("Package checker %s not found (checking %s)", argv[0], self.id)
            return self._failure(f"{argv[0]} not found on PATH", manager=self.manager)
        except subprocess.TimeoutExpired:
            logger.warning("Timeout checking package %s with %s", self.id, argv[0])
            return self._failure(f"{argv[0]} timed out after {_TIMEOUT}s", manager=self.manager)
        except OSError as e:
            logger.warning("OS error checking package %s with %s: %s", self.id, argv[0], e)
            return self._failure(str(e), manager=self.manager)


class PackageRpm(Package):
    manager = "rpm"

    def exists(self) -> ResourceState:
        r = self._query([
            "rpm", "-q", "--nosignature", "--nohdrchk", "--nodigest",
            "--qf", "%{VERSION}\n", self.id,
        ])
        if isinstance(r, ResourceState):
            return r

        # rpm exits 1 with "package X is not installed"
        if r.returncode != 0:
            return self._missing(manager=self.manager, installed=False)

        versions = [line.strip() for line in r.stdout.splitlines() if line.strip()]
        return self._found(manager=self.manager, installed=True, versions=versions)


class PackageDeb(Package):
    manager = "deb"

    def exists(self) -> ResourceState:
        r = self._query(["dpkg-query", "-f", "${Status} ${Version}\n", "-W", self.id])
        if isinstance(r, ResourceState):
            return r

        if r.returncode != 0:
            return self._missing(manager=self.manager, installed=False)

        # "install ok installed 1.2.3-1"; removed packages keep a
        # "deinstall ok config-files" line and don't count
        versions: list[str] = []
        for line in r.stdout.splitlines():
            fields = line.split()
            if len(fields) >= 4 and fields[2] == "installed":
                versions.append(fields[3])

        if not versions:
            return self._missing(manager=self.manager, installed=False)
        return self._found(manager=self.manager, installed=True, versions=versions)


class PackageNull(Package):
    """Stand-in when no package manager was detected."""

    manager = "none"

    def exists(self) -> ResourceState:
        return ResourceState.unavailable(
            self.resource, self.id, "no package manager available",
        )
