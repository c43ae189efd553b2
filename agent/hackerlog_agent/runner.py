"""
Entry point: argparse CLI around the agent.

    hackerlog-agent run            # editor bridge: JSON-lines events on stdin
    hackerlog-agent install        # install/update the core once
    hackerlog-agent version
    hackerlog-agent set-key <KEY>
    hackerlog-agent set-proxy <PROXY|"">
    hackerlog-agent set-debug true|false
    hackerlog-agent set-status-bar true|false
    hackerlog-agent dashboard
"""

import argparse
import asyncio
import sys
import webbrowser

from .app import HackerlogAgent
from .config import configure_logging, log, safe_print, set_debug
from .constants import AGENT_VERSION, API_BASE_URL, DASHBOARD_URL, EDITOR_TYPE
from .dependencies import DependencyInstaller
from .listeners import read_events
from .options import Options, Settings
from .platform_info import resolve
from .version import probe


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hackerlog-agent")
    sub = parser.add_subparsers(dest="command", required=True)

    p_run = sub.add_parser("run", help="Install the core, then read editor events from stdin")
    p_run.add_argument("--editor-type", default=EDITOR_TYPE)
    p_run.add_argument("--api-url", default=API_BASE_URL)

    p_install = sub.add_parser("install", help="Install or update the core and exit")
    p_install.add_argument("--api-url", default=API_BASE_URL)

    sub.add_parser("version", help="Show agent, platform, and core versions")

    p_key = sub.add_parser("set-key", help="Save the editor key")
    p_key.add_argument("value")

    p_proxy = sub.add_parser("set-proxy", help="Save the proxy (empty string for direct)")
    p_proxy.add_argument("value")

    p_debug = sub.add_parser("set-debug", help="Enable or disable debug logging")
    p_debug.add_argument("value", choices=["true", "false"])

    p_icon = sub.add_parser("set-status-bar", help="Show or hide the status bar item")
    p_icon.add_argument("value", choices=["true", "false"])

    sub.add_parser("dashboard", help="Open the Hackerlog dashboard in a browser")
    return parser


def _set(options, key, value) -> int:
    error = options.set_setting(key, value)
    if error:
        safe_print(error, file=sys.stderr)
        return 1
    safe_print(f"{key.value} saved to {options.config_file}")
    return 0


async def _run(options, args) -> int:
    agent = HackerlogAgent(options, editor_type=args.editor_type, api_url=args.api_url)
    await agent.initialize()
    await agent.run(read_events())
    return 0


async def _install(options, args) -> int:
    installer = DependencyInstaller(options, api_url=args.api_url)
    if await installer.ensure_installed():
        safe_print(f"Core installed at {installer.core_location}")
        return 0
    safe_print("Core is not installed; see the log for details.", file=sys.stderr)
    return 1


async def _version(options) -> int:
    installer = DependencyInstaller(options)
    target = resolve()
    core_version = await probe(installer.core_location)
    safe_print(f"hackerlog-agent v{AGENT_VERSION}")
    safe_print(f"os={target.os.value} arch={target.arch.value}")
    safe_print(f"core={core_version or 'not installed'} ({installer.core_location})")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    options = Options()
    configure_logging(options.log_file, debug=options.get_bool(Settings.DEBUG))

    try:
        if args.command == "run":
            return asyncio.run(_run(options, args))
        if args.command == "install":
            return asyncio.run(_install(options, args))
        if args.command == "version":
            return asyncio.run(_version(options))
        if args.command == "set-key":
            return _set(options, Settings.EDITOR_KEY, args.value)
        if args.command == "set-proxy":
            return _set(options, Settings.PROXY, args.value)
        if args.command == "set-debug":
            code = _set(options, Settings.DEBUG, args.value)
            set_debug(args.value == "true")
            log.debug("Debug enabled")
            return code
        if args.command == "set-status-bar":
            return _set(options, Settings.STATUS_BAR_ICON, args.value)
        if args.command == "dashboard":
            webbrowser.open(DASHBOARD_URL)
            return 0
    except KeyboardInterrupt:
        log.info("Agent stopped by user (Ctrl+C)")
        return 0
    return 2
