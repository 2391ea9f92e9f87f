"""
Resource base — the contract between the system context and checks.

Every resource kind (package, service, file, port, ...) is a Resource
subclass.  The class itself is the constructor the system context binds:
``cls(id, system) -> Resource``.  The system context picks WHICH class
serves a kind on this host; the class decides HOW to probe it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from hostspec.core.models.resource import ResourceState

if TYPE_CHECKING:
    from hostspec.core.system.context import System


class Resource(ABC):
    """Abstract base class for all resource checks.

    Resources probe live host state and return a ResourceState.
    They NEVER raise from ``exists()`` — failures are captured in the
    state with status ``error`` or ``unavailable``.

    To add a resource kind:
        1. Subclass Resource and set ``resource``
        2. Implement exists()
        3. Bind it in the System constructor
    """

    resource: ClassVar[str] = ""

    def __init__(self, id: str, system: System):
        self.id = id
        self.system = system

    @abstractmethod
    def exists(self) -> ResourceState:
        """Probe the host and describe the resource."""

    # ── State helpers ────────────────────────────────────────────

    def _found(self, **metadata) -> ResourceState:
        return ResourceState.found(self.resource, self.id, **metadata)

    def _missing(self, **metadata) -> ResourceState:
        return ResourceState.missing(self.resource, self.id, **metadata)

    def _failure(self, error: str, **metadata) -> ResourceState:
        return ResourceState.failure(self.resource, self.id, error, **metadata)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id!r}>"
