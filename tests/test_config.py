"""
Home directory resolution and logging setup
"""

import logging
from pathlib import Path

import pytest

from hackerlog_agent import config


@pytest.fixture
def clean_logger():
    yield config.log
    for handler in list(config.log.handlers):
        config.log.removeHandler(handler)
        handler.close()
    config.log.propagate = True
    config.log.setLevel(logging.NOTSET)


def test_home_override(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("HACKERLOG_HOME", str(tmp_path))
    assert config.hackerlog_home() == tmp_path
    assert config.config_file() == tmp_path / ".hackerlog.config.json"
    assert config.install_root() == tmp_path / ".hackerlog"


def test_home_defaults_to_user_home(monkeypatch, tmp_path) -> None:
    monkeypatch.delenv("HACKERLOG_HOME", raising=False)
    monkeypatch.setattr(config, "user_home_dir", lambda: Path(tmp_path))
    assert config.hackerlog_home() == tmp_path


def test_configure_logging_writes_file(tmp_path, clean_logger) -> None:
    log_path = tmp_path / "agent.log"
    log = config.configure_logging(log_path, debug=True)
    log.debug("hello from test")
    for handler in log.handlers:
        handler.flush()
    assert log.level == logging.DEBUG
    assert "[DEBUG] hello from test" in log_path.read_text(encoding="utf-8")


def test_oversized_log_is_truncated(tmp_path, clean_logger) -> None:
    log_path = tmp_path / "agent.log"
    log_path.write_text("x" * (config.MAX_LOG_BYTES + 1))
    config.configure_logging(log_path)
    assert log_path.stat().st_size < config.MAX_LOG_BYTES
