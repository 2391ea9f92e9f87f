"""
Command check — run a shell command and capture what it did.

A command that ran always "exists"; its exit status and output are
metadata for the caller to judge.  Only a command that could not be
run at all (timeout, no shell) is an error.
"""

from __future__ import annotations

import logging
import subprocess
import time
from typing import ClassVar

from hostspec.core.models.resource import ResourceState
from hostspec.resources.base import Resource

logger = logging.getLogger(__name__)


class Command(Resource):
    resource = "command"
    timeout: ClassVar[int] = 10

    def exists(self) -> ResourceState:
        logger.debug("Executing: %s", self.id)
        start = time.monotonic()

        try:
            r = subprocess.run(
                self.id,
                shell=True,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            return self._failure(f"Command timed out after {self.timeout}s")
        except OSError as e:
            return self._failure(f"Command execution error: {e}")

        return self._found(
            exit_status=r.returncode,
            stdout=r.stdout,
            stderr=r.stderr,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
