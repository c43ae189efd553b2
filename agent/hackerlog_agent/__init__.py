"""
hackerlog_agent — editor activity agent for the Hackerlog core
==============================================================
Architecture: one asyncio loop, strictly sequential awaits.

  constants.py     → Version, debounce window, timeouts, exit codes, URLs
  config.py        → Paths, logging setup, safe_print
  options.py       → Options (JSON settings file: key, proxy, debug, icon)
  validators.py    → Editor key / proxy validation
  platform_info.py → PlatformTarget (os + arch → endpoint identifiers)
  http_client.py   → HTTP session with retry/pooling, CA bundle, proxy
  version.py       → Core version probe (`core -v`)
  dependencies.py  → DependencyInstaller (check → download → extract → chmod)
  tracker.py       → ActivityFilter (save / file switch / 2-minute debounce)
  pulse.py         → HeartbeatEvent + HeartbeatDispatcher (exit code → outcome)
  state.py         → AgentState (status text shown by the editor)
  status.py        → StatusReporter (outcome → status text)
  listeners.py     → Editor event stream (JSON lines on stdin)
  app.py           → HackerlogAgent (install, then filter → dispatch → status)
  runner.py        → main() CLI
"""
