"""Dependency report used by ``talk --check``."""

from __future__ import annotations

import sys

from .engines.linux import SUPPORTED_BACKENDS, LinuxVoiceEngine, get_install_command
from .errors import UnsupportedPlatformError
from .system import detect_linux_distribution, get_platform, is_command_available


def _check_macos() -> bool:
    if is_command_available("say"):
        print("✓ 'say' command is available")
        return True
    print("✗ 'say' command not found", file=sys.stderr)
    print("Update macOS to the latest version.", file=sys.stderr)
    return False


def _check_windows() -> bool:
    if is_command_available("powershell"):
        print("✓ PowerShell is available")
        print("Note: for speech output also make sure that:")
        print("  - speech is enabled under Settings > Time & Language > Speech")
        print("  - the Japanese language pack is installed")
        return True
    print("✗ PowerShell not found", file=sys.stderr)
    print("Install Windows PowerShell.", file=sys.stderr)
    return False


def _check_linux() -> bool:
    engine = LinuxVoiceEngine()
    backend = engine.detect_available_engine()
    if backend is not None:
        print(f"✓ Speech engine available: {backend.command}")
        return True
    broken = [
        candidate.command
        for candidate in engine.candidate_backends()
        if is_command_available(candidate.command)
    ]
    preferred = SUPPORTED_BACKENDS[0].package
    print("✗ No working speech synthesis engine found", file=sys.stderr)
    if broken:
        print(f"Installed but failing the self-test: {', '.join(broken)}", file=sys.stderr)
    print("Install one of the supported engines, for example:", file=sys.stderr)
    print(
        f"  {get_install_command(detect_linux_distribution(), preferred)}",
        file=sys.stderr,
    )
    return False


_CHECKS = {
    "macos": _check_macos,
    "windows": _check_windows,
    "linux": _check_linux,
}


def check_dependencies() -> bool:
    """Print whether the native speech facility is installed."""

    print("Checking localtalk dependencies...")
    try:
        platform = get_platform()
    except UnsupportedPlatformError as exc:
        print(str(exc), file=sys.stderr)
        return False
    print(f"Platform: {platform}")
    return _CHECKS[platform]()
