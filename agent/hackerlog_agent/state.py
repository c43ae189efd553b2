"""
AgentState — the user-visible status the editor renders.

Mutated only by StatusReporter, on the agent's single event loop.
"""

from dataclasses import dataclass
from typing import Optional

from .pulse import DispatchOutcome

ICON = "$(clock)"


@dataclass
class AgentState:
    text: str = ICON + " Hackerlog Initializing..."
    tooltip: str = ""
    visible: bool = True

    core_ready: bool = False
    needs_editor_key: bool = False
    last_outcome: Optional[DispatchOutcome] = None
    heartbeats_sent: int = 0

    def as_dict(self) -> dict:
        return {
            "text": self.text,
            "tooltip": self.tooltip,
            "visible": self.visible,
            "coreReady": self.core_ready,
            "needsEditorKey": self.needs_editor_key,
            "lastExitCode": self.last_outcome.exit_code if self.last_outcome else None,
            "heartbeatsSent": self.heartbeats_sent,
        }
