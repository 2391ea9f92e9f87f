"""
Tests for configuration loading — hostspec.yml parsing, env overrides.
"""

import textwrap
from pathlib import Path

import pytest

from hostspec.core.config.loader import (
    ConfigError,
    apply_env_overrides,
    find_config_file,
    load_config,
)
from hostspec.core.models.config import RunConfig


@pytest.fixture
def valid_config(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        package: deb
        log_level: INFO
        log_file: /tmp/hostspec.log
        max_concurrent: 8
    """)
    path = tmp_path / "hostspec.yml"
    path.write_text(content)
    return path


class TestLoadConfig:
    def test_load_valid(self, valid_config: Path):
        config = load_config(valid_config)
        assert config.package == "deb"
        assert config.log_level == "INFO"
        assert config.log_file == "/tmp/hostspec.log"
        assert config.max_concurrent == 8

    def test_empty_file_is_defaults(self, tmp_path: Path):
        path = tmp_path / "hostspec.yml"
        path.write_text("")
        assert load_config(path) == RunConfig()

    def test_defaults(self):
        config = RunConfig()
        assert config.package is None
        assert config.max_concurrent == 50

    def test_missing_explicit_file_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nonexistent.yml")

    def test_no_file_found_is_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_config() == RunConfig()

    def test_invalid_yaml_raises(self, tmp_path: Path):
        path = tmp_path / "hostspec.yml"
        path.write_text(":: invalid: yaml: [")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_non_mapping_raises(self, tmp_path: Path):
        path = tmp_path / "hostspec.yml"
        path.write_text("- rpm\n- deb\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_bad_package_raises(self, tmp_path: Path):
        path = tmp_path / "hostspec.yml"
        path.write_text("package: pacman\n")
        with pytest.raises(ConfigError, match="Invalid run configuration"):
            load_config(path)


class TestFindConfigFile:
    def test_walks_up(self, valid_config: Path):
        nested = valid_config.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == valid_config

    def test_not_found(self, tmp_path: Path):
        assert find_config_file(tmp_path) is None


class TestEnvOverrides:
    def test_package(self):
        config = apply_env_overrides(RunConfig(package="deb"), {"HOSTSPEC_PACKAGE": "RPM"})
        assert config.package == "rpm"

    def test_empty_is_ignored(self):
        config = apply_env_overrides(RunConfig(package="deb"), {"HOSTSPEC_PACKAGE": ""})
        assert config.package == "deb"

    def test_logging(self):
        config = apply_env_overrides(
            RunConfig(),
            {
                "HOSTSPEC_LOG_LEVEL": "DEBUG",
                "HOSTSPEC_LOG_FILE": "/tmp/x.log",
                "HOSTSPEC_LOG_FILE_LEVEL": "INFO",
            },
        )
        assert config.log_level == "DEBUG"
        assert config.log_file == "/tmp/x.log"
        assert config.log_file_level == "INFO"

    def test_invalid_package(self):
        with pytest.raises(ConfigError, match="environment override"):
            apply_env_overrides(RunConfig(), {"HOSTSPEC_PACKAGE": "apk"})

    def test_nothing_set(self):
        config = RunConfig(package="rpm")
        assert apply_env_overrides(config, {}) is config
