"""
Paths, logging setup, safe_print.
"""

import os
import sys
import logging
from pathlib import Path

from .constants import INSTALL_FOLDER, CONFIG_FILE_NAME, LOG_FILE_NAME

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 1_000_000

log = logging.getLogger("hackerlog")


# ─── Paths ───────────────────────────────────────────────────────

def user_home_dir():
    """USERPROFILE on Windows, HOME elsewhere; Path.home() if neither is set."""
    var = "USERPROFILE" if sys.platform == "win32" else "HOME"
    value = os.environ.get(var)
    return Path(value) if value else Path.home()


def hackerlog_home():
    """HACKERLOG_HOME override, else the user's home directory."""
    home = os.environ.get("HACKERLOG_HOME")
    if home:
        return Path(home)
    return user_home_dir()


def install_root(home=None):
    return Path(home or hackerlog_home()) / INSTALL_FOLDER


def config_file(home=None):
    return Path(home or hackerlog_home()) / CONFIG_FILE_NAME


def log_file(home=None):
    return Path(home or hackerlog_home()) / LOG_FILE_NAME


# ─── Safe print (no crash when there is no console) ──────────────

def safe_print(*args, **kwargs):
    try:
        print(*args, **kwargs)
    except Exception:
        pass


# ─── Logging ─────────────────────────────────────────────────────

def configure_logging(path=None, debug=False):
    """
    Attach file + console handlers to the "hackerlog" logger.
    Safe to call again: existing handlers are replaced, and the level follows `debug`.
    """
    path = Path(path) if path else log_file()

    try:
        if path.exists() and path.stat().st_size > MAX_LOG_BYTES:
            path.write_text("")
    except OSError:
        pass

    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(path), encoding="utf-8")
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)
    except OSError as e:
        safe_print(f"Could not open log file {path}: {e}", file=sys.stderr)

    # stdout belongs to the editor bridge; console logging goes to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    log.addHandler(console_handler)

    set_debug(debug)
    log.propagate = False
    return log


def set_debug(enabled):
    log.setLevel(logging.DEBUG if enabled else logging.INFO)
