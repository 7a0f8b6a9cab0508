"""Platform independent contract shared by every native voice engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence
import sys
import warnings

from ..config import Settings, resolve_settings
from ..errors import EngineUnavailableError, SynthesisFailedError, VoiceUnavailableWarning
from ..models import SpeakOptions, Token, VoiceDescriptor
from ..process import CommandError, run_command
from ..tokenizer import is_japanese_script


class VoiceEngine(ABC):
    """Wraps one native text-to-speech facility.

    Subclasses describe how to detect the facility, list its voices and
    build the command for a single utterance. Voice resolution, tokenized
    playback and error wrapping live here so every platform behaves alike.
    """

    platform: str = "unknown"
    japanese_voice: str = ""
    english_voice: str = ""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or resolve_settings()
        self.available_voices: List[VoiceDescriptor] = []
        self.is_initialized = False

    # lifecycle -----------------------------------------------------------

    def initialize(self) -> None:
        """Detect the native facility once and cache its voices."""

        if self.is_initialized:
            return
        if not self.check_availability():
            self.show_install_instructions()
            raise EngineUnavailableError(self.unavailable_message(), platform=self.platform)
        self.available_voices = self.get_available_voices()
        self.is_initialized = True

    def invalidate(self) -> None:
        """Forget detection results so the next call initializes again."""

        self.available_voices = []
        self.is_initialized = False

    def unavailable_message(self) -> str:
        return f"No speech synthesis facility is available on {self.platform}"

    @abstractmethod
    def check_availability(self) -> bool:
        """Return True if the native facility can be used."""

    @abstractmethod
    def show_install_instructions(self) -> None:
        """Print platform specific setup guidance to stderr."""

    # voices --------------------------------------------------------------

    @abstractmethod
    def list_voices(self) -> List[VoiceDescriptor]:
        """Query the native voice list; may raise on failure."""

    def get_available_voices(self) -> List[VoiceDescriptor]:
        """Return the native voices, or an empty list if they cannot be read."""

        try:
            voices = self.list_voices()
        except (CommandError, ValueError) as exc:
            print(f"Warning: could not list voices: {exc}", file=sys.stderr)
            voices = []
        if self.is_initialized:
            self.available_voices = voices
        return voices

    def find_voice(self, name: str) -> Optional[VoiceDescriptor]:
        """Look ``name`` up in the cached voice list once initialized."""

        voices = self.available_voices if self.is_initialized else self.get_available_voices()
        for voice in voices:
            if voice.name == name:
                return voice
        return None

    def is_voice_available(self, name: str) -> bool:
        return self.find_voice(name) is not None

    def is_japanese_voice(self, name: str) -> Optional[bool]:
        """True/False for a known voice, None if the voice is not installed."""

        voice = self.find_voice(name)
        if voice is None:
            return None
        return self.matches_japanese_voice(voice)

    @abstractmethod
    def matches_japanese_voice(self, voice: VoiceDescriptor) -> bool:
        """Platform specific name/locale check for Japanese voices."""

    def get_default_japanese_voice(self) -> str:
        return self.settings.japanese_voice or self.japanese_voice

    def get_default_english_voice(self) -> str:
        return self.settings.english_voice or self.english_voice

    def get_default_voice(self, is_japanese: bool) -> str:
        if is_japanese:
            return self.get_default_japanese_voice()
        return self.get_default_english_voice()

    def default_rate(self, is_japanese: bool) -> Optional[int]:
        return None

    # speech --------------------------------------------------------------

    def speak(self, text: str, options: Optional[SpeakOptions] = None) -> bool:
        """Speak ``text`` as a single utterance."""

        options = options or SpeakOptions()
        self.initialize()
        is_japanese = is_japanese_script(text)
        voice = self._resolve_voice(options.voice, is_japanese)
        self._say(text, voice, options.rate, is_japanese)
        return True

    def speak_tokenized(
        self, tokens: Iterable[Token], options: Optional[SpeakOptions] = None
    ) -> bool:
        """Speak each token in order, switching voices with the language."""

        options = options or SpeakOptions()
        self.initialize()

        pinned_is_japanese: Optional[bool] = None
        if options.voice:
            pinned_is_japanese = self.is_japanese_voice(options.voice)
            if pinned_is_japanese is None:
                self._warn_unavailable(options.voice)

        replaced = False
        for token in tokens:
            if token.is_blank:
                continue
            if pinned_is_japanese is not None and pinned_is_japanese == token.is_japanese:
                voice = options.voice
            else:
                voice = self.get_default_voice(token.is_japanese)
                if pinned_is_japanese is not None and not replaced:
                    replaced = True
                    warnings.warn(
                        f'Voice "{options.voice}" does not match every part of the text; '
                        "other-language parts use the default voice.",
                        VoiceUnavailableWarning,
                        stacklevel=2,
                    )
            self._say(token.text, voice, options.rate, token.is_japanese)
        return True

    def _resolve_voice(self, requested: Optional[str], is_japanese: bool) -> str:
        default = self.get_default_voice(is_japanese)
        if not requested:
            return default

        requested_is_japanese = self.is_japanese_voice(requested)
        if requested_is_japanese is None:
            self._warn_unavailable(requested)
            return default
        if requested_is_japanese != is_japanese:
            language = "Japanese" if is_japanese else "non-Japanese"
            warnings.warn(
                f'Voice "{requested}" does not match {language} text; using "{default}".',
                VoiceUnavailableWarning,
                stacklevel=3,
            )
            return default
        return requested

    def _warn_unavailable(self, voice: str) -> None:
        warnings.warn(
            f'Voice "{voice}" is not available; using the default voice.',
            VoiceUnavailableWarning,
            stacklevel=3,
        )

    def _say(self, text: str, voice: str, rate: Optional[int], is_japanese: bool) -> None:
        if rate is None:
            rate = self.default_rate(is_japanese)
        try:
            self.synthesize(text, voice, rate, is_japanese)
        except CommandError as exc:
            raise SynthesisFailedError(self.platform, str(exc)) from exc

    @abstractmethod
    def synthesize(
        self, text: str, voice: str, rate: Optional[int], is_japanese: bool
    ) -> None:
        """Run the native command for one utterance and wait for it."""

    def run(self, args: Sequence[str], **kwargs) -> str:
        kwargs.setdefault("timeout", self.settings.command_timeout)
        return run_command(args, **kwargs)
