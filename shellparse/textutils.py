"""Small character and string helpers shared by the parser."""

from __future__ import annotations

INT_MAX = 2**31 - 1

_ATOI_BLANKS = frozenset(" \t\n\v\f\r")


def mini_atoi(text: str) -> int:
    """Parse a leading signed decimal integer.

    Leading whitespace and one optional sign are skipped and parsing stops
    at the first non-digit. Returns -1 when the value does not fit in a
    32-bit signed integer.
    """
    pos = 0
    while pos < len(text) and text[pos] in _ATOI_BLANKS:
        pos += 1
    sign = 1
    if pos < len(text) and text[pos] in "+-":
        if text[pos] == "-":
            sign = -1
        pos += 1
    limit = INT_MAX if sign == 1 else INT_MAX + 1
    value = 0
    for c in text[pos:]:
        if not is_digit(c):
            break
        value = value * 10 + int(c)
        if value > limit:
            return -1
    return sign * value


def is_name_char(c: str) -> bool:
    """True for characters allowed inside a variable name."""
    return ("a" <= c <= "z") or ("A" <= c <= "Z") or ("0" <= c <= "9") or c == "_"


def is_name_start(c: str) -> bool:
    """True for characters allowed at the start of a variable name."""
    return ("a" <= c <= "z") or ("A" <= c <= "Z") or c == "_"


def is_digit(c: str) -> bool:
    """True for an ASCII decimal digit."""
    return "0" <= c <= "9"


def has_blank(text: str) -> bool:
    """True if the text holds a space or a tab."""
    return " " in text or "\t" in text


def split_words(text: str, sep: str) -> list[str]:
    """Split on a separator character, dropping empty pieces."""
    return [word for word in text.split(sep) if word]


def compare(s1: str | None, s2: str | None) -> int:
    """Compare two strings, returning the difference of the first mismatch.

    Returns 0 when either string is missing.
    """
    if s1 is None or s2 is None:
        return 0
    for a, b in zip(s1, s2):
        if a != b:
            return ord(a) - ord(b)
    if len(s1) == len(s2):
        return 0
    if len(s1) > len(s2):
        return ord(s1[len(s2)])
    return -ord(s2[len(s1)])


def compare_prefix(s1: str, s2: str, n: int) -> int:
    """Compare at most ``n`` leading characters of two strings."""
    if n <= 0:
        return 0
    return compare(s1[:n], s2[:n])