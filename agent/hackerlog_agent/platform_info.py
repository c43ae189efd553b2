"""
Platform resolution: OS / CPU architecture → supported target identifiers.

Values are the strings the version-check endpoint expects. Anything outside
the supported set maps to NOT_SUPPORTED instead of raising, so URL building
and executable naming stay total.
"""

import sys
import platform
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from .constants import CORE_BINARY


class Os(str, Enum):
    LINUX = "linux"
    DARWIN = "darwin"
    WINDOWS = "windows"
    NOT_SUPPORTED = "not-supported"


class Arch(str, Enum):
    X86 = "386"
    X64 = "amd64"
    NOT_SUPPORTED = "not-supported"


_OS_BY_PLATFORM = {
    "linux": Os.LINUX,
    "darwin": Os.DARWIN,
    "win32": Os.WINDOWS,
    "cygwin": Os.WINDOWS,
}

_ARCH_BY_MACHINE = {
    "x86_64": Arch.X64,
    "amd64": Arch.X64,
    "x64": Arch.X64,
    "i386": Arch.X86,
    "i686": Arch.X86,
    "x86": Arch.X86,
}


@dataclass(frozen=True)
class PlatformTarget:
    os: Os
    arch: Arch

    @property
    def is_windows(self) -> bool:
        return self.os is Os.WINDOWS

    @property
    def core_filename(self) -> str:
        return CORE_BINARY + (".exe" if self.is_windows else "")


def detect_os(sys_platform=None) -> Os:
    sys_platform = sys_platform if sys_platform is not None else sys.platform
    if sys_platform.startswith("linux"):
        return Os.LINUX
    return _OS_BY_PLATFORM.get(sys_platform, Os.NOT_SUPPORTED)


def detect_arch(machine=None) -> Arch:
    machine = machine if machine is not None else platform.machine()
    return _ARCH_BY_MACHINE.get((machine or "").lower(), Arch.NOT_SUPPORTED)


@lru_cache(maxsize=1)
def resolve() -> PlatformTarget:
    """Computed once per process."""
    return PlatformTarget(os=detect_os(), arch=detect_arch())
