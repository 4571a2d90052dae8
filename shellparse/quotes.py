"""Quote tracking and quote removal for shell words."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

_QUOTES = ("'", '"')
_ESCAPABLE = ("'", '"', "\\")


@dataclass
class QuoteState:
    """Tracks whether the scan is inside single or double quotes."""

    single: bool = False
    double: bool = False

    def toggle(self, c: str) -> None:
        """Open or close a quote context for the character ``c``.

        A single quote inside double quotes, or a double quote inside single
        quotes, is literal and leaves the state alone.
        """
        if c == "'" and not self.double:
            self.single = not self.single
        elif c == '"' and not self.single:
            self.double = not self.double


def is_escaped_quote(text: str, i: int) -> bool:
    """True if ``text[i]`` is a backslash before a quote or another backslash."""
    return text[i : i + 1] == "\\" and text[i + 1 : i + 2] in _ESCAPABLE


def is_empty_quotes(text: str, i: int) -> bool:
    """True if an empty pair of matching quotes starts at ``i``."""
    return text[i : i + 2] in ('""', "''")


def skip_quotes(text: str, i: int) -> int:
    """Return the index just past the quoted section starting at ``i``.

    Inside double quotes a backslash skips the following character. When
    the quote is never closed, the length of the text is returned.
    """
    quote = text[i]
    i += 1
    while i < len(text) and text[i] != quote:
        if text[i] == "\\" and quote == '"' and i + 1 < len(text):
            i += 2
        else:
            i += 1
    if i < len(text) and text[i] == quote:
        return i + 1
    return i


def strip_quotes(text: str | None) -> str | None:
    """Remove quoting from a word.

    Quoted sections lose their quotes, a backslash before a quote or a
    backslash yields that character, and an empty quote pair followed by a
    space becomes a single space.
    """
    if text is None:
        return None
    out: list[str] = []
    i = 0
    while i < len(text):
        c = text[i]
        if is_empty_quotes(text, i) and text[i + 2 : i + 3] == " ":
            out.append(" ")
            i += 2
        elif is_escaped_quote(text, i):
            out.append(text[i + 1])
            i += 2
        elif c in _QUOTES:
            close = text.find(c, i + 1)
            if close < 0:
                out.append(text[i + 1 :])
                i = len(text)
            else:
                out.append(text[i + 1 : close])
                i = close + 1
        else:
            out.append(c)
            i += 1
    return "".join(out)


def strip_quotes_all(items: Iterable[str] | None) -> list[str] | None:
    """Apply ``strip_quotes`` to every item; None stays None."""
    if items is None:
        return None
    return [strip_quotes(item) for item in items]