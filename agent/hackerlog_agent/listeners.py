"""
Editor event listener — reads activity notifications from the editor bridge.

The editor side writes one JSON object per line to the agent's stdin:
    {"event": "selection" | "focus" | "save", "file": "/abs/path.py",
     "project": "optional-name", "workspaceFolders": ["/abs/root", ...]}
    {"event": "shutdown"}

Lines are read one at a time and each is fully handled before the next is
read, so events reach the filter in order and never overlap.
"""

import asyncio
import json
import sys
from dataclasses import dataclass, field
from typing import Optional

from .config import log

ACTIVITY_EVENTS = frozenset({"selection", "focus", "change", "save"})
SHUTDOWN_EVENT = "shutdown"


@dataclass(frozen=True)
class EditorEvent:
    kind: str
    file_path: str = ""
    project_name: Optional[str] = None
    workspace_folders: tuple = field(default_factory=tuple)

    @property
    def is_write(self) -> bool:
        return self.kind == "save"


def parse_event(line) -> Optional[EditorEvent]:
    """One bridge line → EditorEvent. Blank or malformed lines give None."""
    line = (line or "").strip()
    if not line:
        return None
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        log.warning("Ignoring malformed editor event: %s", e)
        return None
    if not isinstance(data, dict):
        log.warning("Ignoring editor event that is not an object")
        return None

    kind = str(data.get("event", "")).lower()
    if kind == SHUTDOWN_EVENT:
        return EditorEvent(kind=kind)
    if kind not in ACTIVITY_EVENTS:
        log.debug("Ignoring editor event %r", kind)
        return None

    project = data.get("project")
    if project is not None and not isinstance(project, str):
        project = str(project)

    folders = data.get("workspaceFolders") or ()
    if not isinstance(folders, (list, tuple)):
        folders = ()
    return EditorEvent(
        kind=kind,
        file_path=str(data.get("file") or ""),
        project_name=project or None,
        workspace_folders=tuple(str(f) for f in folders),
    )


async def read_events(stream=None):
    """Yield EditorEvents from `stream` (stdin by default) until EOF or shutdown."""
    stream = stream or sys.stdin
    while True:
        line = await asyncio.to_thread(stream.readline)
        if not line:
            log.info("Editor bridge closed")
            return
        event = parse_event(line)
        if event is None:
            continue
        if event.kind == SHUTDOWN_EVENT:
            log.info("Shutdown requested by editor")
            return
        yield event
