"""OS and architecture detection."""

from __future__ import annotations

import platform
import sys

__all__ = [
    "IS_LINUX",
    "IS_MAC",
    "IS_WINDOWS",
    "arch_name",
    "full_version",
    "is_linux",
    "is_mac",
    "os_name",
]

_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
}


def is_mac() -> bool:
    return sys.platform == "darwin"


def is_linux() -> bool:
    return sys.platform.startswith("linux")


def os_name() -> str:
    """Short OS name: darwin, linux, windows, or sys.platform otherwise."""
    if is_mac():
        return "darwin"
    if is_linux():
        return "linux"
    if sys.platform == "win32":
        return "windows"
    return sys.platform


def arch_name() -> str:
    """Normalised machine name (amd64, arm64, 386, ...)."""
    machine = platform.machine().lower()
    return _ARCH_ALIASES.get(machine, machine)


def full_version(version: str) -> str:
    """Return "<version>-<os>-<arch>", e.g. "1.2.0-linux-amd64"."""
    return f"{version}-{os_name()}-{arch_name()}"


IS_MAC = is_mac()
IS_LINUX = is_linux()
IS_WINDOWS = sys.platform == "win32"
