"""
Logging for a hostspec run.

main.py calls ``configure_logging`` once, after the RunConfig is final
and before the System context is built.  Modules log through
``logging.getLogger(__name__)`` and never add handlers themselves.

Console verbosity, from ``resolve_level``:
    --debug  >  --verbose  >  --quiet  >  RunConfig.log_level

The optional log file (``RunConfig.log_file``) has its own threshold,
``RunConfig.log_file_level``, defaulting to the console level.
"""

from __future__ import annotations

import logging
import sys

from hostspec.core.models.config import RunConfig

# Checks run in a thread pool, so anything chattier than WARNING
# names the thread that logged.
_FMT_DEBUG = "%(asctime)s %(levelname)-5s [%(threadName)s] %(name)s:%(lineno)d %(message)s"
_FMT_INFO = "%(asctime)s [%(threadName)s] %(name)s: %(message)s"
_FMT_QUIET = "hostspec: %(levelname)s: %(message)s"
_DATEFMT_CONSOLE = "%H:%M:%S"

_FMT_FILE = "%(asctime)s %(process)d %(levelname)-5s [%(threadName)s] %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%dT%H:%M:%S"

# D-Bus message traffic and psutil internals
THIRD_PARTY_LOGGERS = ("jeepney", "psutil")


def parse_level(name: str | None, default: int = logging.WARNING) -> int:
    """Numeric level for a name such as ``"info"``; unknown names give ``default``."""
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def resolve_level(
    configured: str | None,
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> int:
    """Console level for this run; CLI flags beat the configured name."""
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    return parse_level(configured)


def _console_formatter(level: int) -> logging.Formatter:
    if level <= logging.DEBUG:
        return logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_CONSOLE)
    if level <= logging.INFO:
        return logging.Formatter(_FMT_INFO, datefmt=_DATEFMT_CONSOLE)
    return logging.Formatter(_FMT_QUIET)


def configure_logging(level: int, config: RunConfig) -> None:
    """Install the console handler and, if configured, the log file.

    The root logger sits at the lower of the two thresholds so each
    handler filters for itself.  ``jeepney`` and ``psutil`` stay at
    WARNING unless the console is at DEBUG.
    """
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(_console_formatter(level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = level

    if config.log_file:
        file_level = parse_level(config.log_file_level, default=level)
        handler = logging.FileHandler(config.log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    third_party = logging.NOTSET if level <= logging.DEBUG else logging.WARNING
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(third_party)
