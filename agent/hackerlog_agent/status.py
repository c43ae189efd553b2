"""
StatusReporter — turns agent events and dispatch outcomes into status text.

Rendering is the editor's job; this keeps the text/tooltip in AgentState and
logs each change, so a bridge (or a test) can read it back.
"""

from datetime import datetime

from .config import log as default_log
from .pulse import DispatchOutcome, Outcome
from .state import AgentState, ICON

_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def format_date(dt: datetime) -> str:
    """Jan 5, 2024 3:07 PM"""
    hour = dt.hour % 12 or 12
    ampm = "PM" if dt.hour > 11 else "AM"
    return f"{_MONTHS[dt.month - 1]} {dt.day}, {dt.year} {hour}:{dt.minute:02d} {ampm}"


class StatusReporter:
    def __init__(self, log_file, state=None, logger=None):
        self._log_file = log_file
        self.state = state or AgentState()
        self._log = logger or default_log

    def _set(self, text, tooltip=""):
        self.state.text = text
        self.state.tooltip = tooltip
        self._log.debug("Status: %s | %s", text, tooltip)

    def set_visible(self, visible):
        self.state.visible = bool(visible)

    def initialized(self, core_ready):
        self.state.core_ready = core_ready
        if core_ready:
            self._set(ICON, "Hackerlog: Initialized")
        else:
            self._set(ICON + " Hackerlog Error",
                      "Hackerlog: core is not installed; heartbeats are paused.")

    def missing_editor_key(self):
        self.state.needs_editor_key = True
        self._set(ICON + " Hackerlog Error",
                  "Hackerlog: Set your editor key from hackerlog.io/me")

    def editor_key_ok(self):
        self.state.needs_editor_key = False

    def report(self, outcome: DispatchOutcome, now=None):
        self.state.last_outcome = outcome
        kind = outcome.kind

        if kind is Outcome.SUCCESS:
            self.state.heartbeats_sent += 1
            self._set(ICON, "Hackerlog: Last heartbeat sent " + format_date(now or datetime.now()))
        elif kind is Outcome.OFFLINE_QUEUED:
            self._set(ICON, "Hackerlog: Working offline... coding activity will "
                            "sync next time we are online.")
            self._log.warning("API Error (102); Check your %s file for more details.",
                              self._log_file)
        elif kind is Outcome.CONFIG_ERROR:
            msg = f"Config Parsing Error (103); Check your {self._log_file} file for more details."
            self._set(ICON + " Hackerlog Error", "Hackerlog: " + msg)
        elif kind is Outcome.INVALID_CREDENTIAL:
            msg = "Invalid API Key (104); Make sure your API Key is correct!"
            self._set(ICON + " Hackerlog Error", "Hackerlog: " + msg)
        else:
            msg = (f"Unknown Error ({outcome.exit_code}); Check your {self._log_file} "
                   "file for more details.")
            self._set(ICON + " Hackerlog Error", "Hackerlog: " + msg)
