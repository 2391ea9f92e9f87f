"""
File check — stat a path without following a final symlink.
"""

from __future__ import annotations

import grp
import os
import pwd
import stat

from hostspec.core.models.resource import ResourceState
from hostspec.resources.base import Resource


def _filetype(mode: int) -> str:
    if stat.S_ISREG(mode):
        return "file"
    if stat.S_ISDIR(mode):
        return "directory"
    if stat.S_ISLNK(mode):
        return "symlink"
    if stat.S_ISSOCK(mode):
        return "socket"
    if stat.S_ISFIFO(mode):
        return "pipe"
    if stat.S_ISBLK(mode):
        return "block-device"
    if stat.S_ISCHR(mode):
        return "character-device"
    return "unknown"


def _owner(uid: int) -> str:
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


def _group(gid: int) -> str:
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


class File(Resource):
    resource = "file"

    def exists(self) -> ResourceState:
        path = os.path.expanduser(self.id)
        try:
            st = os.lstat(path)
        except FileNotFoundError:
            return self._missing()
        except (OSError, ValueError) as e:
            # ValueError: embedded null byte
            return self._failure(str(e))

        filetype = _filetype(st.st_mode)
        metadata: dict = {
            "filetype": filetype,
            "mode": f"{stat.S_IMODE(st.st_mode):04o}",
            "owner": _owner(st.st_uid),
            "group": _group(st.st_gid),
            "size": st.st_size,
        }
        if filetype == "symlink":
            try:
                metadata["linked_to"] = os.readlink(path)
            except OSError as e:
                return self._failure(f"cannot read link: {e}")

        return self._found(**metadata)
