import pytest

from localtalk.config import Settings
from localtalk.engines import linux
from localtalk.engines.linux import (
    SUPPORTED_BACKENDS,
    LinuxVoiceEngine,
    get_install_command,
    map_spd_rate,
    parse_espeak_voices,
    parse_spd_voices,
)
from localtalk.errors import EngineUnavailableError, SynthesisFailedError, VoiceUnavailableWarning
from localtalk.models import SpeakOptions
from localtalk.tokenizer import tokenize

ESPEAK_VOICES = """\
Pty Language       Age/Gender VoiceName          File                 Other Languages
 5  af              --/M      Afrikaans          gmw/af
 2  en-us           --/M      English_(America)  gmw/en-US            (en 3)
 5  en              --/M      English_(Great_Britain) gmw/en          (en 2)
 5  ja              --/M      Japanese           jpx/ja
"""

SPD_MODULES = """\
OUTPUT MODULES
espeak-ng
festival
"""


def _installed(*commands):
    return lambda command: command in commands


@pytest.fixture
def espeak_engine(runner, monkeypatch):
    monkeypatch.setattr(linux, "is_command_available", _installed("espeak-ng"))
    runner.add(["espeak-ng", "--voices"], ESPEAK_VOICES)
    return LinuxVoiceEngine(Settings())


def test_parse_espeak_voices():
    voices = parse_espeak_voices(ESPEAK_VOICES, "espeak-ng")
    assert [voice.name for voice in voices] == ["af", "en-us", "en", "ja"]
    japanese = voices[-1]
    assert japanese.lang == "ja"
    assert japanese.gender == "M"
    assert japanese.engine == "espeak-ng"
    assert japanese.description == "Japanese jpx/ja"


def test_parse_spd_voices_skips_header():
    voices = parse_spd_voices(SPD_MODULES)
    assert [voice.name for voice in voices] == ["espeak-ng", "festival"]
    assert all(voice.lang is None for voice in voices)


@pytest.mark.parametrize("rate, expected", [(200, 0), (100, -50), (1, -99), (500, 100), (201, 1)])
def test_map_spd_rate(rate, expected):
    assert map_spd_rate(rate) == expected


def test_backends_are_in_priority_order():
    commands = [backend.command for backend in SUPPORTED_BACKENDS]
    assert commands == ["espeak-ng", "espeak", "festival", "spd-say"]
    assert [backend.priority for backend in SUPPORTED_BACKENDS] == [1, 2, 3, 4]


def test_detection_skips_broken_backends(runner, monkeypatch):
    monkeypatch.setattr(linux, "is_command_available", _installed("espeak-ng", "festival"))
    runner.fail(["espeak-ng", "--voices"], "segfault")
    engine = LinuxVoiceEngine(Settings(selftest_timeout=1.5))

    engine.initialize()

    assert engine.active_engine.command == "festival"
    selftests = [call for call in runner.calls if call.args[-1] in ("--voices", "--version")]
    assert [call.args[0] for call in selftests][:2] == ["espeak-ng", "festival"]
    assert all(call.timeout == 1.5 for call in selftests[:2])


def test_no_backend_raises_and_prints_instructions(runner, monkeypatch, capsys):
    monkeypatch.setattr(linux, "is_command_available", _installed())
    monkeypatch.setattr(linux, "detect_linux_distribution", lambda: "debian")
    engine = LinuxVoiceEngine(Settings())

    with pytest.raises(EngineUnavailableError):
        engine.initialize()

    err = capsys.readouterr().err
    assert "sudo apt-get install espeak-ng" in err
    assert "sudo apt-get install speech-dispatcher" in err


def test_forced_backend_limits_detection(runner, monkeypatch):
    monkeypatch.setattr(linux, "is_command_available", _installed("espeak-ng", "spd-say"))
    engine = LinuxVoiceEngine(Settings(linux_engine="spd-say"))
    engine.initialize()
    assert engine.active_engine.command == "spd-say"


@pytest.mark.parametrize(
    "distribution, expected",
    [
        ("redhat", "sudo yum install espeak"),
        ("arch", "sudo pacman -S espeak"),
        ("alpine", "sudo apk add espeak"),
        ("suse", "sudo zypper install espeak"),
        ("gentoo", "# install espeak with your package manager"),
    ],
)
def test_install_commands(distribution, expected):
    assert get_install_command(distribution, "espeak") == expected


def test_espeak_command(espeak_engine, runner):
    espeak_engine.speak("Hello", SpeakOptions(rate=180))
    assert runner.commands()[-1] == ["espeak-ng", "-v", "en", "-s", "180", "--", "Hello"]


def test_espeak_japanese_default(espeak_engine, runner):
    espeak_engine.speak("こんにちは")
    assert runner.commands()[-1] == ["espeak-ng", "-v", "ja", "--", "こんにちは"]


def test_espeak_voice_queries(espeak_engine):
    espeak_engine.initialize()
    assert espeak_engine.is_voice_available("en-us")
    assert espeak_engine.is_japanese_voice("ja") is True
    assert espeak_engine.is_japanese_voice("en-us") is False
    assert espeak_engine.is_japanese_voice("Japanese") is None


def test_espeak_tokenized(espeak_engine, runner):
    with pytest.warns(VoiceUnavailableWarning, match="en-us"):
        espeak_engine.speak_tokenized(tokenize("Good morning 日本"), SpeakOptions(voice="en-us"))
    spoken = [args for args in runner.commands("espeak-ng") if "--" in args]
    assert spoken == [
        ["espeak-ng", "-v", "en-us", "--", "Good morning "],
        ["espeak-ng", "-v", "ja", "--", "日本"],
    ]


def test_festival_reads_text_from_stdin(runner, monkeypatch):
    monkeypatch.setattr(linux, "is_command_available", _installed("festival"))
    engine = LinuxVoiceEngine(Settings())

    engine.speak("Hello there", SpeakOptions(rate=300))

    call = runner.calls[-1]
    assert call.args == ["festival", "--tts"]
    assert call.input_text == "Hello there"


def test_festival_warns_about_japanese(runner, monkeypatch):
    monkeypatch.setattr(linux, "is_command_available", _installed("festival"))
    engine = LinuxVoiceEngine(Settings())
    with pytest.warns(VoiceUnavailableWarning, match="festival"):
        engine.speak("日本語")


def test_festival_voice_list_is_fixed(runner, monkeypatch):
    monkeypatch.setattr(linux, "is_command_available", _installed("festival"))
    engine = LinuxVoiceEngine(Settings())
    engine.initialize()
    assert [voice.name for voice in engine.available_voices] == ["default", "us1", "us2", "us3"]


def test_spd_say_command(runner, monkeypatch):
    monkeypatch.setattr(linux, "is_command_available", _installed("spd-say"))
    runner.add(["spd-say", "-O"], SPD_MODULES)
    engine = LinuxVoiceEngine(Settings())

    engine.speak("Hello", SpeakOptions(voice="espeak-ng", rate=100))
    engine.speak("日本語")

    spoken = [args for args in runner.commands("spd-say") if "--" in args]
    assert spoken == [
        ["spd-say", "--wait", "-o", "espeak-ng", "-r", "-50", "--", "Hello"],
        ["spd-say", "--wait", "-l", "ja", "--", "日本語"],
    ]


def test_spd_configured_module_is_passed_as_output_module(runner, monkeypatch):
    monkeypatch.setattr(linux, "is_command_available", _installed("spd-say"))
    runner.add(["spd-say", "-O"], SPD_MODULES)
    engine = LinuxVoiceEngine(Settings(english_voice="festival"))

    engine.speak("Hello")
    engine.speak("日本語")

    spoken = [args for args in runner.commands("spd-say") if "--" in args]
    assert spoken == [
        ["spd-say", "--wait", "-o", "festival", "--", "Hello"],
        ["spd-say", "--wait", "-l", "ja", "--", "日本語"],
    ]


def test_spd_voice_list_falls_back_to_default(runner, monkeypatch):
    monkeypatch.setattr(linux, "is_command_available", _installed("spd-say"))
    runner.fail(["spd-say", "-O"], "no daemon")
    engine = LinuxVoiceEngine(Settings())
    engine.initialize()
    assert [voice.name for voice in engine.available_voices] == ["default"]


def test_synthesis_failure(espeak_engine, runner):
    runner.fail(["espeak-ng", "-v"], "audio device busy")
    with pytest.raises(SynthesisFailedError) as exc:
        espeak_engine.speak("Hello")
    assert exc.value.platform == "linux"


def test_invalidate_clears_active_engine(espeak_engine):
    espeak_engine.initialize()
    espeak_engine.invalidate()
    assert espeak_engine.active_engine is None
    assert espeak_engine.get_available_voices() == []
