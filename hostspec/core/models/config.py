"""
RunConfig — settings for a single validation run.

Loaded from hostspec.yml by ``hostspec.core.config.loader`` and then
overlaid with environment variables and CLI flags.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

PackageOverride = Literal["rpm", "deb"]


class RunConfig(BaseModel):
    """Run-wide configuration.

    ``package`` forces the package-manager strategy and skips detection
    for it entirely.  ``None`` means detect.
    """

    package: PackageOverride | None = None
    log_level: str = "WARNING"
    log_file: str | None = None
    log_file_level: str | None = None
    max_concurrent: int = Field(default=50, ge=1)
