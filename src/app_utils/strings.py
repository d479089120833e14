"""String helpers. Case handling is Unicode-aware."""

import unicodedata

_VOWELS = frozenset("aeiou")


def to_title_case(s: str) -> str:
    """'hello WORLD' -> 'Hello World'; runs of whitespace collapse to one space."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in s.split())


def count_vowels(s: str) -> int:
    normalized = unicodedata.normalize("NFC", s)
    return sum(1 for ch in normalized if ch.lower() in _VOWELS)


def reverse(s: str) -> str:
    # Code-point reversal; grapheme clusters are not kept together
    return s[::-1]
