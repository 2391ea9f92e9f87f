"""
Domain models — Pydantic types for hostspec.

All models are re-exported here for convenient access:

    from hostspec.core.models import EnvironmentProfile, ResourceState, RunConfig
"""

from hostspec.core.models.config import PackageOverride, RunConfig
from hostspec.core.models.environment import (
    EnvironmentProfile,
    InitSystem,
    PackageManager,
    PortProcess,
)
from hostspec.core.models.resource import ResourceState

__all__ = [
    # environment.py
    "EnvironmentProfile",
    "InitSystem",
    "PackageManager",
    # config.py
    "PackageOverride",
    "PortProcess",
    # resource.py
    "ResourceState",
    "RunConfig",
]
