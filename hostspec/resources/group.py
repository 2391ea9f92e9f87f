from __future__ import annotations

import grp

from hostspec.core.models.resource import ResourceState
from hostspec.resources.base import Resource


class Group(Resource):
    resource = "group"

    def exists(self) -> ResourceState:
        try:
            entry = grp.getgrnam(self.id)
        except KeyError:
            return self._missing()
        except ValueError as e:
            return self._failure(f"Invalid group name: {e}")
        return self._found(gid=entry.gr_gid, members=list(entry.gr_mem))
