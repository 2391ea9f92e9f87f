"""
Include check — is an included spec file present and readable?

The spec parser follows includes itself; this check only reports
whether the file it would open is there.
"""

from __future__ import annotations

import os
from pathlib import Path

from hostspec.core.models.resource import ResourceState
from hostspec.resources.base import Resource


class Include(Resource):
    resource = "include"

    def exists(self) -> ResourceState:
        path = Path(self.id).expanduser()
        if not path.is_file():
            return self._missing(path=str(path))
        if not os.access(path, os.R_OK):
            return self._failure(f"Permission denied: {path}", path=str(path))
        try:
            size = path.stat().st_size
        except OSError as e:
            return self._failure(str(e), path=str(path))
        return self._found(path=str(path.resolve()), size=size)
