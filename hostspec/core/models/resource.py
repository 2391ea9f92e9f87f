"""
ResourceState — the result contract for every resource check.

A resource check answers one question about the live host ("is this
package installed?", "is port tcp:22 listening?") and returns a
ResourceState.  Checks NEVER raise out of ``exists()`` — anything that
prevents an answer is captured here with status ``error`` or
``unavailable``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class ResourceState(BaseModel):
    """Observed state of a single resource on this host.

    Status values:
        ok          — the resource exists; ``metadata`` describes it
        missing     — the probe ran and the resource is absent
        unavailable — no strategy on this host can answer (e.g. no
                      package manager detected)
        error       — the probe itself failed
    """

    resource: str                   # resource kind: package, service, port, ...
    id: str                         # identifier the check was built with
    status: Literal["ok", "missing", "unavailable", "error"] = "ok"
    checked_at: str = Field(default_factory=_now_iso)

    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the resource exists."""
        return self.status == "ok"

    @classmethod
    def found(cls, resource: str, id: str, **metadata: Any) -> ResourceState:
        """Create a state for a resource that exists."""
        return cls(resource=resource, id=id, status="ok", metadata=metadata)

    @classmethod
    def missing(cls, resource: str, id: str, **metadata: Any) -> ResourceState:
        """Create a state for a resource that does not exist."""
        return cls(resource=resource, id=id, status="missing", metadata=metadata)

    @classmethod
    def unavailable(cls, resource: str, id: str, reason: str) -> ResourceState:
        """Create a state for a resource no strategy can check on this host."""
        return cls(resource=resource, id=id, status="unavailable", error=reason)

    @classmethod
    def failure(cls, resource: str, id: str, error: str, **metadata: Any) -> ResourceState:
        """Create a state for a probe that could not complete."""
        return cls(
            resource=resource,
            id=id,
            status="error",
            error=error,
            metadata=metadata,
        )
