"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
from jeepney.low_level import HeaderFields
from jeepney.wrappers import DBusErrorResponse


def dbus_error(name: str, text: str = "") -> DBusErrorResponse:
    """A DBusErrorResponse as jeepney builds it from an error reply."""
    msg = SimpleNamespace(
        header=SimpleNamespace(fields={HeaderFields.error_name: name}),
        body=(text,) if text else (),
    )
    return DBusErrorResponse(msg)


@pytest.fixture(name="dbus_error")
def dbus_error_fixture():
    return dbus_error


class FakeHost:
    """A host described in a temp directory.

    ``root`` stands in for ``/`` (marker files, /run/systemd/system) and
    ``bin`` is the only directory on the search path.
    """

    def __init__(self, base: Path):
        self.root = base / "root"
        self.bin = base / "bin"
        self.root.mkdir()
        self.bin.mkdir()

    @property
    def path(self) -> str:
        return str(self.bin)

    def marker(self, relpath: str) -> FakeHost:
        target = self.root / relpath
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("fake\n")
        return self

    def command(self, name: str) -> FakeHost:
        exe = self.bin / name
        exe.write_text("#!/bin/sh\nexit 0\n")
        exe.chmod(0o755)
        return self

    def systemd(self) -> FakeHost:
        (self.root / "run" / "systemd" / "system").mkdir(parents=True)
        return self


@pytest.fixture
def fake_host(tmp_path: Path) -> FakeHost:
    """An empty fake host: no markers, nothing on PATH, no systemd."""
    return FakeHost(tmp_path)


class FakeBus:
    """Stand-in for SystemdBus with canned unit data."""

    def __init__(self, units: dict[str, dict[str, str]] | None = None,
                 file_states: dict[str, str] | None = None):
        self.units = units or {}
        self.file_states = file_states or {}

    def unit_properties(self, name: str) -> dict[str, str]:
        return self.units.get(
            name,
            {"LoadState": "not-found", "ActiveState": "inactive", "SubState": "dead"},
        )

    def unit_file_state(self, name: str) -> str:
        if name not in self.file_states:
            raise dbus_error("org.freedesktop.systemd1.NoSuchUnit")
        return self.file_states[name]


@pytest.fixture
def fake_bus() -> FakeBus:
    return FakeBus(
        units={
            "sshd": {"LoadState": "loaded", "ActiveState": "active", "SubState": "running"},
            "cups": {"LoadState": "loaded", "ActiveState": "inactive", "SubState": "dead"},
        },
        file_states={"sshd": "enabled", "cups": "disabled"},
    )
