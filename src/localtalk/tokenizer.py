"""Japanese script detection and mixed-language tokenization."""

from __future__ import annotations

import re
from typing import List, Optional

from .models import Token

# Hiragana, Katakana and the CJK Unified Ideographs used for Kanji.
_JAPANESE_RE = re.compile(r"[\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF]")


def is_japanese_script(text: str) -> bool:
    """Return True if ``text`` contains at least one Japanese code point."""

    return _JAPANESE_RE.search(text) is not None


def tokenize(text: str) -> List[Token]:
    """Split ``text`` into runs of Japanese and non-Japanese characters.

    Whitespace is never Japanese, so a space after an English word stays in
    the English run ("Good morning" is spoken as one unit) while a space
    after a Japanese run closes it and opens a new non-Japanese token.
    Punctuation outside the Japanese ranges behaves like any other Latin
    character. Concatenating the token texts always gives back ``text``.
    """

    tokens: List[Token] = []
    buffer = ""
    buffer_is_japanese: Optional[bool] = None

    for char in text:
        char_is_japanese = is_japanese_script(char)
        if buffer_is_japanese is not None and char_is_japanese != buffer_is_japanese:
            tokens.append(Token(buffer, buffer_is_japanese))
            buffer = ""
        buffer += char
        buffer_is_japanese = char_is_japanese

    if buffer:
        tokens.append(Token(buffer, bool(buffer_is_japanese)))

    return tokens
