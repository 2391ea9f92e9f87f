"""
Tests for logging setup — level resolution, file output, third-party noise.
"""

import logging

import pytest

from hostspec.core.models.config import RunConfig
from hostspec.core.observability.logging_config import (
    THIRD_PARTY_LOGGERS,
    configure_logging,
    parse_level,
    resolve_level,
)


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    third_party = {name: logging.getLogger(name).level for name in THIRD_PARTY_LOGGERS}
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, lvl in third_party.items():
        logging.getLogger(name).setLevel(lvl)


class TestParseLevel:
    @pytest.mark.parametrize("name,level", [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        (" error ", logging.ERROR),
    ])
    def test_names(self, name, level):
        assert parse_level(name) == level

    @pytest.mark.parametrize("bad", [None, "", "LOUD", "Formatter"])
    def test_fallback(self, bad):
        assert parse_level(bad) == logging.WARNING

    def test_custom_default(self):
        assert parse_level(None, default=logging.INFO) == logging.INFO


class TestResolveLevel:
    def test_configured(self):
        assert resolve_level("info") == logging.INFO

    def test_debug_beats_everything(self):
        assert resolve_level("error", debug=True, verbose=True, quiet=True) == logging.DEBUG

    def test_verbose_beats_quiet(self):
        assert resolve_level("error", verbose=True, quiet=True) == logging.INFO

    def test_quiet(self):
        assert resolve_level("debug", quiet=True) == logging.ERROR


class TestConfigureLogging:
    def test_console_only(self):
        configure_logging(logging.INFO, RunConfig())
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_file_level_lowers_root(self, tmp_path):
        log_file = tmp_path / "hostspec.log"
        config = RunConfig(log_file=str(log_file), log_file_level="DEBUG")
        configure_logging(logging.WARNING, config)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert [h.level for h in root.handlers] == [logging.WARNING, logging.DEBUG]

        logging.getLogger("hostspec.test").debug("detected deb")
        for h in root.handlers:
            h.flush()
        assert "detected deb" in log_file.read_text()

    def test_file_level_defaults_to_console(self, tmp_path):
        config = RunConfig(log_file=str(tmp_path / "hostspec.log"))
        configure_logging(logging.ERROR, config)
        assert [h.level for h in logging.getLogger().handlers] == [logging.ERROR, logging.ERROR]

    def test_quiets_third_party(self):
        configure_logging(logging.INFO, RunConfig())
        assert logging.getLogger("jeepney").level == logging.WARNING

    def test_debug_lets_third_party_through(self):
        configure_logging(logging.DEBUG, RunConfig())
        assert logging.getLogger("psutil").level == logging.NOTSET
