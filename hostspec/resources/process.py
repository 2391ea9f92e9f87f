"""
Process check — is a process with this name running?
"""

from __future__ import annotations

import psutil

from hostspec.core.models.resource import ResourceState
from hostspec.resources.base import Resource


class Process(Resource):
    resource = "process"

    def exists(self) -> ResourceState:
        pids: list[int] = []
        try:
            for proc in psutil.process_iter(["pid", "name"]):
                if proc.info["name"] == self.id:
                    pids.append(proc.info["pid"])
        except psutil.Error as e:
            return self._failure(f"cannot list processes: {e}")

        if not pids:
            return self._missing(running=False)
        return self._found(running=True, pids=sorted(pids))
