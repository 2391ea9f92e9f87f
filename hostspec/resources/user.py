"""
User check — local account lookup through NSS.
"""

from __future__ import annotations

import grp
import pwd

from hostspec.core.models.resource import ResourceState
from hostspec.resources.base import Resource


class User(Resource):
    resource = "user"

    def exists(self) -> ResourceState:
        try:
            entry = pwd.getpwnam(self.id)
        except KeyError:
            return self._missing()
        except ValueError as e:
            return self._failure(f"Invalid user name: {e}")

        groups = {g.gr_name for g in grp.getgrall() if self.id in g.gr_mem}
        try:
            groups.add(grp.getgrgid(entry.pw_gid).gr_name)
        except KeyError:
            pass

        return self._found(
            uid=entry.pw_uid,
            gid=entry.pw_gid,
            home=entry.pw_dir,
            shell=entry.pw_shell,
            groups=sorted(groups),
        )
