"""Exception and warning types shared by the engines and the facade."""

from __future__ import annotations

from typing import Optional


class LocalTalkError(RuntimeError):
    """Base class for every error raised by localtalk."""


class ConfigError(LocalTalkError):
    """Raised when an environment override cannot be parsed."""


class EngineUnavailableError(LocalTalkError):
    """Raised when no usable native speech facility is found."""

    def __init__(self, message: str, platform: Optional[str] = None) -> None:
        super().__init__(message)
        self.platform = platform


class UnsupportedPlatformError(EngineUnavailableError):
    """Raised when the running OS is not macOS, Windows or Linux."""


class SynthesisFailedError(LocalTalkError):
    """Raised when the native command for a single utterance fails."""

    def __init__(self, platform: str, message: str) -> None:
        super().__init__(f"Speech output error ({platform}): {message}")
        self.platform = platform
        self.message = message


class VoiceUnavailableWarning(UserWarning):
    """A requested voice was missing or did not match the text language."""
