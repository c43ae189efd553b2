"""
Heartbeat dispatch — run the core once per heartbeat and classify its exit code.

The core owns delivery: exit 102 means it already queued the pulse for later
sync, so nothing here ever retries.
"""

import asyncio
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from .config import log as default_log
from .constants import (
    PULSE_TIMEOUT, EXIT_SUCCESS, EXIT_OFFLINE, EXIT_CONFIG_ERROR,
    EXIT_INVALID_KEY, EXIT_SPAWN_FAILED,
)
from .validators import obfuscate_key

FLAGS = {
    "api_url": "--api-url",
    "editor_token": "--editor-token",
    "editor_type": "--editor-type",
    "project_name": "--project-name",
    "file_name": "--file-name",
    "started_at": "--started-at",
    "stopped_at": "--stopped-at",
}


def iso_utc(dt: datetime) -> str:
    """2024-01-02T03:04:05.678Z"""
    return (
        dt.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


@dataclass(frozen=True)
class HeartbeatEvent:
    file_path: str
    project_name: str
    editor_token: str
    editor_type: str
    is_write: bool
    started_at: datetime
    stopped_at: datetime

    @property
    def file_name(self) -> str:
        return os.path.basename(self.file_path)


class Outcome(Enum):
    SUCCESS = "success"
    OFFLINE_QUEUED = "offline_queued"
    CONFIG_ERROR = "config_error"
    INVALID_CREDENTIAL = "invalid_credential"
    UNKNOWN = "unknown"


_OUTCOME_BY_CODE = {
    EXIT_SUCCESS: Outcome.SUCCESS,
    EXIT_OFFLINE: Outcome.OFFLINE_QUEUED,
    EXIT_CONFIG_ERROR: Outcome.CONFIG_ERROR,
    EXIT_INVALID_KEY: Outcome.INVALID_CREDENTIAL,
}


@dataclass(frozen=True)
class DispatchOutcome:
    kind: Outcome
    exit_code: int

    @classmethod
    def from_exit_code(cls, code: int) -> "DispatchOutcome":
        return cls(_OUTCOME_BY_CODE.get(code, Outcome.UNKNOWN), code)

    @property
    def ok(self) -> bool:
        return self.kind is Outcome.SUCCESS


class HeartbeatDispatcher:
    """Builds the core's argv from a HeartbeatEvent and runs it without a shell."""

    def __init__(self, core_location, api_url, logger=None, timeout=PULSE_TIMEOUT):
        self._core_location = str(core_location)
        self._api_url = api_url
        self._log = logger or default_log
        self._timeout = timeout

    def build_command(self, event: HeartbeatEvent) -> list:
        values = {
            "api_url": self._api_url,
            "editor_token": event.editor_token,
            "editor_type": event.editor_type,
            "project_name": event.project_name,
            "file_name": event.file_name,
            "started_at": iso_utc(event.started_at),
            "stopped_at": iso_utc(event.stopped_at),
        }
        args = []
        for name, flag in FLAGS.items():
            args.extend([flag, values[name]])
        return args

    async def dispatch(self, event: HeartbeatEvent) -> DispatchOutcome:
        args = self.build_command(event)
        self._log.debug(
            "Sending pulse: %s",
            " ".join(obfuscate_key(a) if a == event.editor_token else str(a) for a in args),
        )

        try:
            process = await asyncio.create_subprocess_exec(
                self._core_location, *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (OSError, ValueError, TypeError) as e:
            self._log.error("Could not start core: %s", e)
            return self._classify(EXIT_SPAWN_FAILED, b"", b"")

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            stdout, stderr = b"", b""
            self._log.error("Core did not exit within %ss, killed", self._timeout)

        return self._classify(process.returncode, stdout, stderr)

    def _classify(self, code, stdout, stderr) -> DispatchOutcome:
        outcome = DispatchOutcome.from_exit_code(code)

        if code != EXIT_SUCCESS:
            for stream in (stderr, stdout):
                text = _decode(stream)
                if text:
                    self._log.error(text)
        elif _decode(stderr):
            self._log.warning(_decode(stderr))

        if outcome.kind is Outcome.SUCCESS:
            self._log.debug("Pulse accepted by core")
        elif outcome.kind is Outcome.OFFLINE_QUEUED:
            self._log.info("Core offline (102), pulse queued for next sync")
        elif outcome.kind is Outcome.CONFIG_ERROR:
            self._log.error("Core config parsing error (103)")
        elif outcome.kind is Outcome.INVALID_CREDENTIAL:
            self._log.error("Core rejected editor key (104)")
        else:
            self._log.error("Core unknown error (%s)", code)
        return outcome


def _decode(stream) -> str:
    return (stream or b"").decode(errors="replace").strip()
