"""
CLI contract for the settings commands
"""

import pytest

from hackerlog_agent import runner
from hackerlog_agent.options import Options, Settings

from conftest import VALID_KEY


@pytest.fixture
def home(monkeypatch, tmp_path):
    monkeypatch.setenv("HACKERLOG_HOME", str(tmp_path))
    monkeypatch.setattr(runner, "configure_logging", lambda *a, **k: None)
    monkeypatch.setattr(runner, "set_debug", lambda enabled: None)
    return tmp_path


def test_set_key(home) -> None:
    assert runner.main(["set-key", VALID_KEY]) == 0
    assert Options(home / ".hackerlog.config.json").get_setting(Settings.EDITOR_KEY) == VALID_KEY


def test_set_bad_key_fails(home, capsys) -> None:
    assert runner.main(["set-key", "not-a-token"]) == 1
    assert "Invalid editor key" in capsys.readouterr().err
    assert not (home / ".hackerlog.config.json").exists()


def test_set_proxy_and_flags(home) -> None:
    assert runner.main(["set-proxy", "domain\\user:pass"]) == 0
    assert runner.main(["set-debug", "true"]) == 0
    assert runner.main(["set-status-bar", "false"]) == 0
    options = Options(home / ".hackerlog.config.json")
    assert options.get_setting(Settings.PROXY) == "domain\\user:pass"
    assert options.get_bool(Settings.DEBUG)
    assert not options.get_bool(Settings.STATUS_BAR_ICON, default=True)


def test_unknown_command_exits() -> None:
    with pytest.raises(SystemExit):
        runner.main(["bogus"])
