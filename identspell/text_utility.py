"""
Casing helpers used when a fix replaces a flagged word.
"""

from enum import Enum


class TextCasing(Enum):
    LOWER = "lower"
    UPPER = "upper"
    FIRST_UPPER = "first_upper"
    MIXED = "mixed"


def get_text_casing(value: str) -> TextCasing:
    """Classify the casing of a word (non-letters are ignored)."""
    letters = [ch for ch in value if ch.isalpha()]
    if not letters:
        return TextCasing.MIXED

    if all(ch.islower() for ch in letters):
        return TextCasing.LOWER

    if all(ch.isupper() for ch in letters):
        # A single capital reads as a capitalized word, not an acronym
        return TextCasing.UPPER if len(letters) > 1 else TextCasing.FIRST_UPPER

    if letters[0].isupper() and all(ch.islower() for ch in letters[1:]):
        return TextCasing.FIRST_UPPER

    return TextCasing.MIXED


def set_text_casing(value: str, casing: TextCasing) -> str:
    """Return ``value`` rewritten in ``casing``; MIXED leaves it as is."""
    if not value or get_text_casing(value) == casing:
        return value

    if casing == TextCasing.LOWER:
        return value.lower()
    if casing == TextCasing.UPPER:
        return value.upper()
    if casing == TextCasing.FIRST_UPPER:
        return value[0].upper() + value[1:].lower()

    return value


def replace_range(value: str, replacement: str, index: int, length: int) -> str:
    """Replace ``value[index:index + length]`` with ``replacement``."""
    return value[:index] + replacement + value[index + length:]
