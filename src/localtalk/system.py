"""Platform, distribution and command detection."""

from __future__ import annotations

from pathlib import Path
import platform
import shutil
import sys
from typing import Dict, Optional

from .errors import UnsupportedPlatformError

OS_RELEASE_PATH = Path("/etc/os-release")

# Checked in order; the first family whose markers appear wins.
DISTRIBUTION_MARKERS = (
    ("debian", ("ubuntu", "debian")),
    ("redhat", ("centos", "rhel", "fedora", "red hat")),
    ("arch", ("arch",)),
    ("alpine", ("alpine",)),
    ("suse", ("suse",)),
)

_PLATFORMS = {
    "darwin": "macos",
    "win32": "windows",
    "linux": "linux",
}


def get_platform(system: Optional[str] = None) -> str:
    """Return 'macos', 'windows' or 'linux' for the running interpreter."""

    system = system or sys.platform
    for prefix, name in _PLATFORMS.items():
        if system.startswith(prefix):
            return name
    raise UnsupportedPlatformError(f"Unsupported platform: {system}", platform=system)


def _match_distribution(text: str) -> Optional[str]:
    lowered = text.lower()
    for family, markers in DISTRIBUTION_MARKERS:
        if any(marker in lowered for marker in markers):
            return family
    return None


def detect_linux_distribution() -> str:
    """Return the distribution family used to pick install commands."""

    try:
        release = OS_RELEASE_PATH.read_text(encoding="utf-8")
    except OSError:
        release = None

    if release is not None:
        return _match_distribution(release) or "unknown"

    uname = " ".join(platform.uname())
    return _match_distribution(uname) or "unknown"


def is_command_available(command: str) -> bool:
    return shutil.which(command) is not None


def get_platform_info() -> Dict[str, str]:
    """Describe the running platform; Linux also reports its distribution."""

    name = get_platform()
    info = {
        "platform": name,
        "architecture": platform.machine(),
        "python_version": platform.python_version(),
    }
    if name == "linux":
        info["distribution"] = detect_linux_distribution()
    return info
