"""
System context errors.

Only one failure in building the system context is unrecoverable: the
systemd control channel cannot be opened although the host runs
systemd.  It is raised as a FatalSystemError so the entrypoint decides
how to terminate.
"""

from __future__ import annotations


class FatalSystemError(Exception):
    """The system context cannot be built; the run must stop."""


class SystemBusError(FatalSystemError):
    """Connecting to the systemd D-Bus control channel failed."""
