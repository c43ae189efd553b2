"""
HackerlogAgent — wires installer → activity filter → dispatcher → status.

Lifecycle:
  initialize()  → make sure the core is installed, then arm the filter
  on_event()    → one editor activity notification → maybe one heartbeat
  run(events)   → drive on_event() from an async event source until it ends

Everything runs on one asyncio loop; each event is fully dispatched before
the next one is looked at.
"""

import time
from datetime import datetime, timezone
from pathlib import Path

from .config import log as default_log
from .constants import API_BASE_URL, PULSE_PATH, EDITOR_TYPE, UNKNOWN_PROJECT
from .dependencies import DependencyInstaller
from .options import Settings
from .pulse import HeartbeatDispatcher, HeartbeatEvent
from .status import StatusReporter
from .tracker import ActivityFilter
from .validators import validate_editor_key


def project_name_for(file_path, workspace_folders=()):
    """Name of the deepest workspace folder containing `file_path`."""
    try:
        path = Path(file_path).resolve()
    except (OSError, ValueError):
        return UNKNOWN_PROJECT

    best = None
    for folder in workspace_folders:
        try:
            root = Path(folder).resolve()
        except (OSError, ValueError):
            continue
        if root == path or root in path.parents:
            if best is None or len(root.parts) > len(best.parts):
                best = root
    if best is None or not best.name:
        return UNKNOWN_PROJECT
    return best.name


def _utc_now():
    return datetime.now(timezone.utc)


class HackerlogAgent:
    def __init__(self, options, logger=None, installer=None, dispatcher=None,
                 reporter=None, activity_filter=None, editor_type=EDITOR_TYPE,
                 api_url=API_BASE_URL, clock=time.monotonic, wall_clock=_utc_now):
        self._options = options
        self._log = logger or default_log
        self._installer = installer or DependencyInstaller(options, logger=self._log, api_url=api_url)
        self._dispatcher = dispatcher or HeartbeatDispatcher(
            self._installer.core_location,
            api_url.rstrip("/") + PULSE_PATH,
            logger=self._log,
        )
        self.reporter = reporter or StatusReporter(options.log_file, logger=self._log)
        self._filter = activity_filter or ActivityFilter()
        self._editor_type = editor_type
        self._clock = clock
        self._wall_clock = wall_clock
        self._last_pulse_at = None
        self._armed = False

    @property
    def state(self):
        return self.reporter.state

    @property
    def armed(self) -> bool:
        return self._armed

    async def initialize(self) -> bool:
        """Install/update the core, then start accepting activity. Returns core readiness."""
        self._log.info("Initializing Hackerlog agent (editor=%s)", self._editor_type)
        self.reporter.set_visible(self._options.get_bool(Settings.STATUS_BAR_ICON, default=True))
        self._check_editor_key()

        core_ready = await self._installer.ensure_installed()
        self.reporter.initialized(core_ready)
        self._armed = True
        self._log.info("Agent ready (core %s)", "installed" if core_ready else "missing")
        return core_ready

    def _check_editor_key(self):
        key = self._options.get_setting(Settings.EDITOR_KEY)
        if validate_editor_key(key) is not None:
            self._log.warning("No valid editor key configured; heartbeats are paused")
            self.reporter.missing_editor_key()
            return None
        self.reporter.editor_key_ok()
        return key.strip()

    async def on_event(self, file_path, is_write=False, project_name=None, workspace_folders=()):
        """
        Handle one activity notification.
        Returns the DispatchOutcome when a heartbeat was dispatched, else None.
        """
        if not self._armed or not file_path:
            return None

        now_ms = self._clock() * 1000
        if not self._filter.should_emit(file_path, is_write, now_ms):
            return None

        stopped_at = self._wall_clock()
        started_at = self._last_pulse_at or stopped_at
        self._last_pulse_at = stopped_at

        # A pulse dropped below still consumes the debounce window and moves started_at.
        editor_key = self._check_editor_key()
        if editor_key is None:
            return None

        if not self._installer.is_core_installed():
            self._log.warning("Core is not installed, skipping heartbeat for %s", file_path)
            return None

        if project_name:
            project_name = str(project_name)
        else:
            project_name = project_name_for(file_path, workspace_folders)

        event = HeartbeatEvent(
            file_path=file_path,
            project_name=project_name,
            editor_token=editor_key,
            editor_type=self._editor_type,
            is_write=bool(is_write),
            started_at=started_at,
            stopped_at=stopped_at,
        )
        self._log.debug("Heartbeat: %s (write=%s, project=%s)",
                        event.file_name, event.is_write, event.project_name)
        outcome = await self._dispatcher.dispatch(event)
        self.reporter.report(outcome)
        return outcome

    async def run(self, events):
        """Consume an async iterator of EditorEvents until it is exhausted."""
        async for event in events:
            try:
                await self.on_event(
                    event.file_path,
                    is_write=event.is_write,
                    project_name=event.project_name,
                    workspace_folders=event.workspace_folders,
                )
            except Exception as e:
                self._log.error("Event handling error: %s", e, exc_info=True)
        self._log.info("Agent shut down.")
