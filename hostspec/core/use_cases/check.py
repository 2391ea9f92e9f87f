"""
Check use case — run resource checks against one system context.

Checks are independent, so they run in parallel via ThreadPoolExecutor;
they share the context's port table and control channel.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from hostspec.core.models.resource import ResourceState
from hostspec.core.system.context import System

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Result of the check use case."""

    states: list[ResourceState] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(s.ok for s in self.states)

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "total": len(self.states),
            "failed": sum(1 for s in self.states if not s.ok),
            "results": [s.model_dump() for s in self.states],
        }


def _run_one(system: System, kind: str, id: str) -> ResourceState:
    try:
        return system.resource(kind, id).exists()
    except Exception as e:
        # Resources should never raise, but one bad check can't sink the run
        logger.error("Check %s:%s raised: %s", kind, id, e)
        return ResourceState.failure(kind, id, f"Unexpected error: {e}")


def run_checks(
    system: System,
    requests: list[tuple[str, str]],
    max_workers: int = 50,
) -> CheckResult:
    """Run ``(kind, id)`` checks concurrently, preserving request order.

    Raises:
        ValueError: If any request names an unknown resource kind.
    """
    for kind, _ in requests:
        system.factory(kind)

    if not requests:
        return CheckResult()

    workers = max(1, min(max_workers, len(requests)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(_run_one, system, kind, id) for kind, id in requests]
        states = [f.result() for f in futures]

    logger.info(
        "Ran %d checks, %d not ok",
        len(states), sum(1 for s in states if not s.ok),
    )
    return CheckResult(states=states)
