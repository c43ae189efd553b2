"""
Hackerlog Agent — editor activity agent
=======================================
Keeps the Hackerlog core binary installed and current, then turns editor
activity (selection changes, editor switches, saves) into heartbeats that
the core sends on our behalf.

PRIVACY: only file names, project names, and timestamps leave the editor.

Usage:
    python agent.py run
    python agent.py set-key XXXXXXXX-XXXX-XXXX-XXXX-XXXXXXXXXXXX
"""

import sys

from hackerlog_agent.runner import main

if __name__ == "__main__":
    sys.exit(main())
