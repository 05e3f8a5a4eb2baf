"""Small text helpers used when parsing command lines and environment values."""

from __future__ import annotations

__all__ = ["split_fields", "strncmp"]


def split_fields(text: str, sep: str) -> list[str]:
    """Split *text* on the single character *sep*, dropping empty fields.

    Runs of separators count as one, and leading or trailing separators
    produce no empty entries.
    """
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    return [field for field in text.split(sep) if field]


def _code_at(text: str | bytes, index: int) -> int:
    if index >= len(text):
        return 0
    item = text[index]
    return item if isinstance(item, int) else ord(item)


def strncmp(first: str | bytes, second: str | bytes, n: int) -> int:
    """Compare at most *n* characters of two strings.

    The end of a string compares as a zero character, as with C strings.
    Returns zero when the compared prefixes are equal, otherwise the
    difference between the first pair of differing character codes.
    """
    if n < 0:
        raise ValueError("n must not be negative")
    for index in range(n):
        left = _code_at(first, index)
        right = _code_at(second, index)
        if left != right:
            return left - right
        if left == 0:
            break
    return 0