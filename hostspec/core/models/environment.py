"""
Host environment models — what detection found out about this machine.

EnvironmentProfile is derived once per run and never persisted.
PortProcess is one entry of the port table snapshot.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

InitSystem = Literal["systemd", "init"]
PackageManager = Literal["rpm", "deb", "none"]


class EnvironmentProfile(BaseModel):
    """Classification of the host along two independent axes."""

    model_config = ConfigDict(frozen=True)

    init_system: InitSystem = "init"
    package_manager: PackageManager = "none"

    @property
    def is_systemd(self) -> bool:
        return self.init_system == "systemd"


class PortProcess(BaseModel):
    """A socket in the port table and the process that owns it."""

    model_config = ConfigDict(frozen=True)

    protocol: str                   # tcp, tcp6, udp, udp6
    port: int
    address: str = ""               # local bind address
    state: str = ""                 # LISTEN for tcp, NONE for udp
    pid: int | None = None          # None when the owner is not visible to us
    name: str = ""                  # process name, "" when unknown
