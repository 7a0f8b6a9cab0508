"""Process-wide speech facade with a lazily created engine."""

from __future__ import annotations

import sys
import threading
from typing import Callable, List, Optional

from .engines import VoiceEngine, create_and_initialize
from .errors import EngineUnavailableError
from .models import SpeakOptions, VoiceDescriptor
from .tokenizer import tokenize


class EngineHandle:
    """Holds one initialized engine, created on first use.

    Concurrent first calls construct a single engine. ``reset`` discards
    the engine and invalidates it so stale references re-initialize.
    """

    def __init__(self, factory: Optional[Callable[[], VoiceEngine]] = None) -> None:
        self._factory = factory
        self._engine: Optional[VoiceEngine] = None
        self._lock = threading.Lock()

    def get(self) -> VoiceEngine:
        engine = self._engine
        if engine is not None:
            return engine
        with self._lock:
            if self._engine is None:
                try:
                    factory = self._factory or create_and_initialize
                    self._engine = factory()
                except EngineUnavailableError as exc:
                    print(f"Failed to initialize the speech engine: {exc}", file=sys.stderr)
                    raise
            return self._engine

    def reset(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.invalidate()
            self._engine = None

    def speak(self, text: str, options: Optional[SpeakOptions] = None) -> bool:
        return self.get().speak(text, options or SpeakOptions())

    def speak_tokenized(self, text: str, options: Optional[SpeakOptions] = None) -> bool:
        options = options or SpeakOptions()
        if not options.tokenize:
            return self.speak(text, options)
        engine = self.get()
        tokens = [token for token in tokenize(text) if not token.is_blank]
        return engine.speak_tokenized(tokens, options)


_default_handle = EngineHandle()


def get_engine() -> VoiceEngine:
    return _default_handle.get()


def speak(text: str, voice: Optional[str] = None, rate: Optional[int] = None) -> bool:
    """Speak ``text`` with a voice chosen for its language.

    Raises EngineUnavailableError when no speech facility exists and
    SynthesisFailedError when the native command fails.
    """

    return _default_handle.speak(text, SpeakOptions(voice=voice, rate=rate))


def speak_tokenized(
    text: str,
    voice: Optional[str] = None,
    rate: Optional[int] = None,
    tokenize: bool = False,
) -> bool:
    """Speak mixed Japanese/English text, one voice per language run.

    Without ``tokenize=True`` this is the same as :func:`speak`.
    """

    options = SpeakOptions(voice=voice, rate=rate, tokenize=tokenize)
    return _default_handle.speak_tokenized(text, options)


def get_available_voices() -> List[VoiceDescriptor]:
    return get_engine().get_available_voices()


def is_voice_available(name: str) -> bool:
    return get_engine().is_voice_available(name)


def is_japanese_voice(name: str) -> Optional[bool]:
    return get_engine().is_japanese_voice(name)


def reset_engine() -> None:
    """Drop the shared engine; the next call detects everything again."""

    _default_handle.reset()
