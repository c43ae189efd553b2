"""
Constants, thresholds, wire names, and exit codes.
"""

import os

AGENT_VERSION = "0.3.0"
EDITOR_TYPE = "vscode"

# ─── Thresholds ──────────────────────────────────────────────────
DEBOUNCE_MS = 120_000          # Non-save activity on the same file → at most 1 pulse / 2 min

# ─── Timeouts (seconds) ──────────────────────────────────────────
VERSION_CHECK_TIMEOUT = 15
DOWNLOAD_TIMEOUT = 120
CORE_PROBE_TIMEOUT = 10
PULSE_TIMEOUT = 30
DOWNLOAD_CHUNK_SIZE = 64 * 1024

# ─── Remote API ──────────────────────────────────────────────────
_PROD_API_URL = "http://api.hackerlog.io/v1"
_DEV_API_URL = "http://localhost:8000/v1"

IS_PROD = os.environ.get("HACKERLOG_ENV") == "production"
API_BASE_URL = os.environ.get("HACKERLOG_API_URL") or (_PROD_API_URL if IS_PROD else _DEV_API_URL)
CORE_VERSION_PATH = "/core/version"
PULSE_PATH = "/units"
DASHBOARD_URL = "https://hackerlog.io/me"

EDITOR_TOKEN_HEADER = "X-Hackerlog-EditorToken"

# ─── Install layout ──────────────────────────────────────────────
INSTALL_FOLDER = ".hackerlog"
CORE_DIR_NAME = "core"
CORE_BINARY = "core"
CONFIG_FILE_NAME = ".hackerlog.config.json"
LOG_FILE_NAME = ".hackerlog.log"

# ─── Core exit codes (shared with the core binary, do not renumber) ─
EXIT_SUCCESS = 0
EXIT_OFFLINE = 102
EXIT_CONFIG_ERROR = 103
EXIT_INVALID_KEY = 104
EXIT_SPAWN_FAILED = -1         # Local only: the core could not be started

UNKNOWN_PROJECT = "unknown-project"
