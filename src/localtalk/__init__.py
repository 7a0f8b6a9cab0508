"""
localtalk public package interface.

Speak Japanese, English or mixed text through the operating system's own
speech synthesizer (``say`` on macOS, System.Speech on Windows and one of
espeak-ng, espeak, festival or speech-dispatcher on Linux).
"""

__version__ = "0.1.0"

from .errors import (
    ConfigError,
    EngineUnavailableError,
    LocalTalkError,
    SynthesisFailedError,
    UnsupportedPlatformError,
    VoiceUnavailableWarning,
)
from .models import SpeakOptions, Token, VoiceDescriptor
from .speaker import (
    EngineHandle,
    get_available_voices,
    is_japanese_voice,
    is_voice_available,
    reset_engine,
    speak,
    speak_tokenized,
)
from .system import get_platform_info
from .tokenizer import is_japanese_script, tokenize

__all__ = [
    "ConfigError",
    "EngineHandle",
    "EngineUnavailableError",
    "LocalTalkError",
    "SpeakOptions",
    "SynthesisFailedError",
    "Token",
    "UnsupportedPlatformError",
    "VoiceDescriptor",
    "VoiceUnavailableWarning",
    "get_available_voices",
    "get_platform_info",
    "is_japanese_script",
    "is_japanese_voice",
    "is_voice_available",
    "reset_engine",
    "speak",
    "speak_tokenized",
    "tokenize",
]
