"""Variable expansion of shell words."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from shellparse.quotes import QuoteState
from shellparse.textutils import is_name_char, is_name_start
from shellparse.tokens import Token, TokenType, UnclosedQuoteError, split_fields

MAX_NAME_LENGTH = 255

_HIDDEN_SINGLE = "\x01"
_HIDDEN_DOUBLE = "\x02"


def read_var_name(text: str, pos: int) -> tuple[str | None, int]:
    """Read a variable name at ``pos``.

    Returns the name and the position after it. ``?`` is a name of its
    own. Names are cut at 255 characters. When no name is present the
    name is None and the position is unchanged.
    """
    if text[pos : pos + 1] == "?":
        return "?", pos + 1
    end = pos
    while end < len(text) and end - pos < MAX_NAME_LENGTH and is_name_char(text[end]):
        end += 1
    if end == pos:
        return None, pos
    return text[pos:end], end


def hide_quotes(value: str | None) -> str | None:
    """Replace quote characters with markers so later quote removal keeps them."""
    if value is None:
        return None
    return value.replace("'", _HIDDEN_SINGLE).replace('"', _HIDDEN_DOUBLE)


def restore_quotes(items: Iterable[str] | None) -> list[str] | None:
    """Turn quote markers back into quote characters."""
    if items is None:
        return None
    return [
        item.replace(_HIDDEN_SINGLE, "'").replace(_HIDDEN_DOUBLE, '"') for item in items
    ]


@dataclass
class Expander:
    """Expands ``$NAME`` and ``$?`` in words against an environment."""

    env: Mapping[str, str] = field(default_factory=dict)
    exit_status: int = 0

    def _lookup(self, name: str) -> str | None:
        if name == "?":
            return str(self.exit_status)
        return hide_quotes(self.env.get(name))

    def _expand_dollar(
        self, value: str, pos: int, state: QuoteState, out: list[str]
    ) -> int:
        end = pos
        while end < len(value) and value[end] == "$":
            end += 1
        count = end - pos
        nxt = value[end : end + 1]
        if count == 1 and nxt in ("'", '"') and not state.double:
            return end
        out.append("$" * (count // 2))
        if count % 2:
            if nxt and (is_name_start(nxt) or nxt == "?"):
                name, end = read_var_name(value, end)
                if name is not None:
                    expanded = self._lookup(name)
                    if expanded:
                        out.append(expanded)
            else:
                out.append("$")
        return end

    def expand_value(self, value: str) -> str:
        """Expand variables in a word, leaving single-quoted parts alone.

        Quote characters are kept; quotes inside variable values are hidden
        behind markers.
        """
        state = QuoteState()
        out: list[str] = []
        pos = 0
        while pos < len(value):
            c = value[pos]
            if (c == "'" and not state.double) or (c == '"' and not state.single):
                state.toggle(c)
                out.append(c)
                pos += 1
            elif c == "$" and not state.single:
                pos = self._expand_dollar(value, pos, state, out)
            else:
                out.append(c)
                pos += 1
        return "".join(out)

    def expand_tokens(self, tokens: Iterable[Token]) -> list[Token]:
        """Expand WORD tokens holding ``$`` and re-split them on whitespace.

        Other tokens pass through. A word whose expansion is empty, or
        leaves an unbalanced quote, disappears.
        """
        result: list[Token] = []
        for token in tokens:
            if token.kind is TokenType.WORD and "$" in token.value:
                try:
                    result.extend(split_fields(self.expand_value(token.value)))
                except UnclosedQuoteError:
                    continue
            else:
                result.append(token)
        return result