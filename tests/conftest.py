"""
Shared fixtures: a throwaway settings file and POSIX fake-core scripts.
"""

import os
import stat
import sys

import pytest

from hackerlog_agent.options import Options, Settings

VALID_KEY = "A1B2C3D4-E5F6-7890-ABCD-1234567890AB"

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="fake core is a /bin/sh script")


@pytest.fixture
def options(tmp_path):
    return Options(tmp_path / "hackerlog.config.json", log_path=tmp_path / "hackerlog.log")


@pytest.fixture
def keyed_options(options):
    assert options.set_setting(Settings.EDITOR_KEY, VALID_KEY) is None
    return options


@pytest.fixture
def make_script(tmp_path):
    """Write an executable /bin/sh script and return its path."""

    def _make(body, name="core"):
        path = tmp_path / name
        path.write_text("#!/bin/sh\n" + body + "\n")
        os.chmod(path, os.stat(path).st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make
