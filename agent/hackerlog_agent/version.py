"""
VersionProbe — ask the installed core for its version.

Never raises: a missing, unexecutable, failing, or hung core all read as "".
"""

import asyncio
import os

from .config import log as default_log
from .constants import CORE_PROBE_TIMEOUT

VERSION_FLAG = "-v"


async def probe(core_path, timeout=CORE_PROBE_TIMEOUT, logger=None):
    """Run `<core> -v` once and return its trimmed stdout, or "" on any failure."""
    log = logger or default_log
    core_path = str(core_path)
    if not os.path.isfile(core_path):
        log.debug("Core not found at %s", core_path)
        return ""

    try:
        process = await asyncio.create_subprocess_exec(
            core_path, VERSION_FLAG,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        log.error("Could not run core for version check: %s", e)
        return ""

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        log.error("Core version check timed out after %ss", timeout)
        return ""

    if process.returncode != 0:
        for stream in (stderr, stdout):
            text = stream.decode(errors="replace").strip()
            if text:
                log.error(text)
        log.error("Core version check exited with code %d", process.returncode)
        return ""

    return stdout.decode(errors="replace").strip()
