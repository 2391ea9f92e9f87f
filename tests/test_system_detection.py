"""
Tests for environment detection — init system, package family, PATH lookup.
"""

import itertools

import pytest

from hostspec.core.system.detection import (
    detect_environment,
    detect_package_manager,
    has_command,
    is_deb,
    is_rpm,
    is_running_systemd,
)

MARKERS = {
    None: [],
    "deb": ["etc/debian_version"],
    "redhat": ["etc/redhat-release"],
    "system": ["etc/system-release"],
    "both": ["etc/debian_version", "etc/redhat-release"],
}


def _expected(marker, dpkg, rpm) -> str:
    """The documented cascade, written out longhand: RPM first, then Debian."""
    if marker in ("redhat", "system", "both") or (rpm and not dpkg):
        return "rpm"
    if marker == "deb" or (dpkg and not rpm):
        return "deb"
    return "none"


def _host(fake_host, marker, dpkg, rpm):
    for path in MARKERS[marker]:
        fake_host.marker(path)
    if dpkg:
        fake_host.command("dpkg")
    if rpm:
        fake_host.command("rpm")
    return fake_host


# ── PATH lookup ─────────────────────────────────────────────────────


class TestHasCommand:
    def test_present(self, fake_host):
        fake_host.command("dpkg")
        assert has_command("dpkg", fake_host.path)

    def test_absent(self, fake_host):
        assert not has_command("dpkg", fake_host.path)

    def test_not_executable(self, fake_host):
        (fake_host.bin / "rpm").write_text("not a program")
        assert not has_command("rpm", fake_host.path)

    def test_does_not_run_the_command(self, fake_host):
        exe = fake_host.bin / "dpkg"
        sentinel = fake_host.root / "ran"
        exe.write_text(f"#!/bin/sh\ntouch {sentinel}\n")
        exe.chmod(0o755)
        assert has_command("dpkg", fake_host.path)
        assert not sentinel.exists()


# ── Init system ─────────────────────────────────────────────────────


class TestIsRunningSystemd:
    def test_systemd(self, fake_host):
        fake_host.systemd()
        assert is_running_systemd(fake_host.root)

    def test_traditional_init(self, fake_host):
        assert not is_running_systemd(fake_host.root)

    def test_run_systemd_without_system_dir(self, fake_host):
        (fake_host.root / "run" / "systemd").mkdir(parents=True)
        assert not is_running_systemd(fake_host.root)


# ── Per-family probes ───────────────────────────────────────────────


class TestIsDeb:
    def test_marker_is_authoritative(self, fake_host):
        fake_host.marker("etc/debian_version").command("rpm")
        assert is_deb(fake_host.root, fake_host.path)

    def test_only_dpkg(self, fake_host):
        fake_host.command("dpkg")
        assert is_deb(fake_host.root, fake_host.path)

    def test_both_binaries(self, fake_host):
        fake_host.command("dpkg").command("rpm")
        assert not is_deb(fake_host.root, fake_host.path)

    def test_nothing(self, fake_host):
        assert not is_deb(fake_host.root, fake_host.path)


class TestIsRpm:
    @pytest.mark.parametrize("marker", ["etc/redhat-release", "etc/system-release"])
    def test_marker_is_authoritative(self, fake_host, marker):
        fake_host.marker(marker).command("dpkg")
        assert is_rpm(fake_host.root, fake_host.path)

    def test_only_rpm(self, fake_host):
        fake_host.command("rpm")
        assert is_rpm(fake_host.root, fake_host.path)

    def test_both_binaries(self, fake_host):
        fake_host.command("dpkg").command("rpm")
        assert not is_rpm(fake_host.root, fake_host.path)

    def test_debian_marker_is_not_rpm(self, fake_host):
        fake_host.marker("etc/debian_version")
        assert not is_rpm(fake_host.root, fake_host.path)


# ── Combined cascade ────────────────────────────────────────────────


class TestDetectPackageManager:
    @pytest.mark.parametrize(
        "marker,dpkg,rpm",
        list(itertools.product(MARKERS, [False, True], [False, True])),
    )
    def test_cascade(self, fake_host, marker, dpkg, rpm):
        host = _host(fake_host, marker, dpkg, rpm)
        assert detect_package_manager(host.root, host.path) == _expected(marker, dpkg, rpm)

    def test_lone_rpm_binary_beats_debian_marker(self, fake_host):
        fake_host.marker("etc/debian_version").command("rpm")
        assert detect_package_manager(fake_host.root, fake_host.path) == "rpm"
        assert is_rpm(fake_host.root, fake_host.path)
        assert is_deb(fake_host.root, fake_host.path)

    def test_ambiguity_is_none_not_error(self, fake_host):
        fake_host.command("dpkg").command("rpm")
        assert detect_package_manager(fake_host.root, fake_host.path) == "none"


class TestDetectEnvironment:
    def test_systemd_deb(self, fake_host):
        fake_host.systemd().marker("etc/debian_version")
        profile = detect_environment(fake_host.root, fake_host.path)
        assert profile.init_system == "systemd"
        assert profile.is_systemd
        assert profile.package_manager == "deb"

    def test_init_none(self, fake_host):
        profile = detect_environment(fake_host.root, fake_host.path)
        assert profile.init_system == "init"
        assert not profile.is_systemd
        assert profile.package_manager == "none"

    def test_profile_is_immutable(self, fake_host):
        profile = detect_environment(fake_host.root, fake_host.path)
        with pytest.raises(Exception):
            profile.package_manager = "rpm"
