"""Command line interface: ``talk <text>``."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, List, Optional

from . import __version__
from .config import describe_environment
from .diagnostics import check_dependencies
from .errors import LocalTalkError
from .models import VoiceDescriptor
from .speaker import get_available_voices, speak_tokenized
from .system import get_platform_info


class _ArgumentParser(argparse.ArgumentParser):
    """Exit with status 1 on usage errors, like every other failure."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not an integer") from None
    if number <= 0:
        raise argparse.ArgumentTypeError("rate must be a positive integer")
    return number


def _voice_lines(voices: Iterable[VoiceDescriptor]) -> List[str]:
    lines = []
    for voice in voices:
        details = [voice.lang or "unknown"]
        if voice.gender:
            details.append(voice.gender)
        if voice.engine:
            details.append(voice.engine)
        lines.append(f"{voice.name} ({', '.join(details)})")
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="talk",
        description="Speak text aloud with the system voice, picking Japanese or English voices automatically.",
    )
    parser.add_argument("text", nargs="*", help="Text to speak. Words are joined with spaces.")
    parser.add_argument("-v", "--voice", help="Voice name to use instead of the default.")
    parser.add_argument("-r", "--rate", type=_positive_int, help="Speaking rate (words per minute).")
    parser.add_argument(
        "-t",
        "--tokenize",
        action="store_true",
        help="Split mixed Japanese/English text and speak each part with a matching voice.",
    )
    parser.add_argument("--voices", action="store_true", help="List available voices.")
    parser.add_argument("--check", action="store_true", help="Check that a speech engine is installed.")
    parser.add_argument("--describe", action="store_true", help="Print platform and configuration info.")
    parser.add_argument(
        "--version",
        action="version",
        version=f"localtalk {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.check:
        return 0 if check_dependencies() else 1

    if args.describe:
        info = get_platform_info()
        print(", ".join(f"{key}={value}" for key, value in info.items()))
        print(describe_environment())
        if not args.text and not args.voices:
            return 0

    try:
        if args.voices:
            voices = get_available_voices()
            if not voices:
                print("No voices could be listed.", file=sys.stderr)
            for line in _voice_lines(voices):
                print(line)
            return 0

        text = " ".join(args.text).strip()
        if not text:
            parser.error("no text given. Usage: talk <text>")

        speak_tokenized(text, voice=args.voice, rate=args.rate, tokenize=args.tokenize)
    except LocalTalkError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


def entry_point() -> None:
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover
    entry_point()
