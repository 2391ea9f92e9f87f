"""
Environment detection — which init system and package manager this host uses.

Read-only probes: ``stat`` calls on well-known marker files and PATH
lookups.  Nothing here executes a program or reads its output.

Every probe takes an optional ``root`` (filesystem prefix for marker
files) and ``path`` (search path for executables, ``os.pathsep``
separated) so a fake host can be described in a temp directory.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from hostspec.core.models.environment import EnvironmentProfile

logger = logging.getLogger(__name__)

_ROOT = Path("/")

# systemd creates this directory at boot; its presence is how
# sd_booted(3) decides that systemd is PID 1.
SYSTEMD_RUN_DIR = "run/systemd/system"

DEB_MARKERS = ("etc/debian_version",)
RPM_MARKERS = ("etc/redhat-release", "etc/system-release")

DPKG = "dpkg"
RPM = "rpm"


def has_command(cmd: str, path: str | None = None) -> bool:
    """Whether ``cmd`` resolves to an executable on the search path."""
    return shutil.which(cmd, path=path) is not None


def is_running_systemd(root: Path = _ROOT) -> bool:
    """Whether the host was booted with systemd as its init system."""
    return (root / SYSTEMD_RUN_DIR).is_dir()


def _has_marker(root: Path, markers: tuple[str, ...]) -> str | None:
    for marker in markers:
        if (root / marker).exists():
            return marker
    return None


def _only_command(wanted: str, other: str, path: str | None) -> bool:
    return has_command(wanted, path) and not has_command(other, path)


def is_deb(root: Path = _ROOT, path: str | None = None) -> bool:
    """Whether the host's packages are managed by dpkg.

    A Debian marker file is authoritative.  Without one, the host is
    Debian-family only if ``dpkg`` is on PATH and ``rpm`` is not.
    """
    marker = _has_marker(root, DEB_MARKERS)
    if marker:
        logger.debug("deb: marker /%s present", marker)
        return True

    if _only_command(DPKG, RPM, path):
        logger.debug("deb: only %s on PATH", DPKG)
        return True

    return False


def is_rpm(root: Path = _ROOT, path: str | None = None) -> bool:
    """Whether the host's packages are managed by rpm.

    A Red Hat or system-release marker is authoritative.  Without one,
    the host is RPM-family only if ``rpm`` is on PATH and ``dpkg`` is not.
    """
    marker = _has_marker(root, RPM_MARKERS)
    if marker:
        logger.debug("rpm: marker /%s present", marker)
        return True

    if _only_command(RPM, DPKG, path):
        logger.debug("rpm: only %s on PATH", RPM)
        return True

    return False


def detect_package_manager(root: Path = _ROOT, path: str | None = None) -> str:
    """Classify the package ecosystem: ``rpm``, ``deb`` or ``none``.

    RPM is asked first, so a host that passes both ``is_rpm`` and
    ``is_deb`` (say a Debian marker next to a lone ``rpm`` binary) is
    RPM.  Ambiguity resolves to ``none``, never an error.
    """
    if is_rpm(root, path):
        return "rpm"
    if is_deb(root, path):
        return "deb"

    logger.debug("No package manager detected")
    return "none"


def detect_environment(root: Path = _ROOT, path: str | None = None) -> EnvironmentProfile:
    """Run every probe once and return the host's EnvironmentProfile."""
    profile = EnvironmentProfile(
        init_system="systemd" if is_running_systemd(root) else "init",
        package_manager=detect_package_manager(root, path),
    )
    logger.debug(
        "Environment: init=%s package=%s",
        profile.init_system, profile.package_manager,
    )
    return profile
