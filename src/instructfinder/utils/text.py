"""Text helpers for lexical matching."""

from __future__ import annotations

from typing import List

MIN_TOKEN_LENGTH = 2


def _is_word_char(char: str) -> bool:
    return char.isalpha() or char.isnumeric()


def tokenize(text: str) -> List[str]:
    """Split text into runs of letters and digits.

    Runs shorter than two characters are dropped. Case is left untouched and
    duplicates are kept in order of appearance, so term frequency survives.
    """
    tokens: List[str] = []
    current: List[str] = []

    for char in text:
        if _is_word_char(char):
            current.append(char)
            continue
        if len(current) >= MIN_TOKEN_LENGTH:
            tokens.append("".join(current))
        current = []

    # Last token
    if len(current) >= MIN_TOKEN_LENGTH:
        tokens.append("".join(current))

    return tokens
