"""Native voice engines and the factory that picks one per platform."""

from __future__ import annotations

from typing import Dict, Optional, Type

from ..config import Settings
from ..errors import UnsupportedPlatformError
from ..system import get_platform
from .base import VoiceEngine
from .linux import LinuxVoiceEngine
from .macos import MacOSVoiceEngine
from .windows import WindowsVoiceEngine

ENGINES: Dict[str, Type[VoiceEngine]] = {
    "macos": MacOSVoiceEngine,
    "windows": WindowsVoiceEngine,
    "linux": LinuxVoiceEngine,
}


def create_engine(
    platform: Optional[str] = None, settings: Optional[Settings] = None
) -> VoiceEngine:
    """Construct the engine for ``platform`` (default: the running OS)."""

    platform = platform or get_platform()
    try:
        engine_cls = ENGINES[platform]
    except KeyError:
        raise UnsupportedPlatformError(
            f"Unsupported platform: {platform}", platform=platform
        ) from None
    return engine_cls(settings)


def create_and_initialize(
    platform: Optional[str] = None, settings: Optional[Settings] = None
) -> VoiceEngine:
    engine = create_engine(platform, settings)
    engine.initialize()
    return engine


__all__ = [
    "ENGINES",
    "LinuxVoiceEngine",
    "MacOSVoiceEngine",
    "VoiceEngine",
    "WindowsVoiceEngine",
    "create_and_initialize",
    "create_engine",
]
