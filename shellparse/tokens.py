"""Tokens and the lexers that turn a command line into them."""

from __future__ import annotations

import enum
from dataclasses import dataclass

MAX_HEREDOCS = 17

_BLANKS = frozenset(" \t\n\v\f\r")
_OPERATORS = frozenset("|><()")
_QUOTES = frozenset("'\"")


class TokenType(enum.Enum):
    """Kinds of lexical token."""

    WORD = "word"
    PIPE = "pipe"
    OR = "or"
    APPEND = "append"
    HEREDOC = "heredoc"
    REDIRECT_IN = "redirect_in"
    REDIRECT_OUT = "redirect_out"
    OPEN_PAREN = "open_paren"
    SPACE = "space"
    FILE = "file"
    OPTION = "option"


REDIRECTIONS = frozenset(
    {TokenType.REDIRECT_IN, TokenType.REDIRECT_OUT, TokenType.APPEND, TokenType.HEREDOC}
)

_OPERATOR_TYPES = {
    "|": TokenType.PIPE,
    ">>": TokenType.APPEND,
    "||": TokenType.OR,
    "<<": TokenType.HEREDOC,
    "<": TokenType.REDIRECT_IN,
    ">": TokenType.REDIRECT_OUT,
    "(": TokenType.OPEN_PAREN,
    " ": TokenType.SPACE,
}


@dataclass
class Token:
    """One piece of a command line."""

    value: str
    kind: TokenType


class UnclosedQuoteError(ValueError):
    """A quote was opened and never closed."""

    def __init__(self) -> None:
        super().__init__("minishell: syntax error: unclosed quote")


class HeredocLimitError(RuntimeError):
    """Too many here-documents were seen."""

    exit_status = 2

    def __init__(self) -> None:
        super().__init__("minishell: maximum here-document count exceeded")


def is_blank(c: str) -> bool:
    """True for the whitespace characters that separate words."""
    return c in _BLANKS


def is_operator_char(c: str) -> bool:
    """True for characters that start a pipe, redirection or parenthesis."""
    return c in _OPERATORS


def _skip_blanks(line: str, pos: int) -> int:
    while pos < len(line) and line[pos] in _BLANKS:
        pos += 1
    return pos


def _scan_word(line: str, pos: int, *, stop_at_operators: bool, strict: bool) -> int:
    """Return the end of the word starting at ``pos``, honouring quotes."""
    end = len(line)
    while pos < end:
        c = line[pos]
        if c in _BLANKS or (stop_at_operators and c in _OPERATORS):
            break
        if c in _QUOTES:
            close = line.find(c, pos + 1)
            if close < 0:
                if strict:
                    raise UnclosedQuoteError()
                return end
            pos = close + 1
        else:
            pos += 1
    return pos


class Lexer:
    """Splits command lines into tokens, counting here-documents as it goes."""

    def __init__(self) -> None:
        self.heredoc_count = 0

    def classify(self, text: str) -> TokenType:
        """Return the token type of an operator text, or WORD."""
        if self.heredoc_count >= MAX_HEREDOCS:
            raise HeredocLimitError()
        kind = _OPERATOR_TYPES.get(text, TokenType.WORD)
        if kind is TokenType.HEREDOC:
            self.heredoc_count += 1
        return kind

    def _operator(self, line: str, pos: int) -> tuple[Token, int]:
        c = line[pos]
        width = 2 if c in "<>" and line[pos + 1 : pos + 2] == c else 1
        text = line[pos : pos + width]
        return Token(text, self.classify(text)), pos + width

    def tokenize(self, line: str) -> list[Token]:
        """Split a line into words and operators, dropping whitespace.

        Raises UnclosedQuoteError when a quote is left open.
        """
        tokens: list[Token] = []
        pos = _skip_blanks(line, 0)
        while pos < len(line):
            c = line[pos]
            if c in _BLANKS:
                pos += 1
            elif c in _OPERATORS:
                token, pos = self._operator(line, pos)
                tokens.append(token)
            else:
                end = _scan_word(line, pos, stop_at_operators=True, strict=True)
                tokens.append(Token(line[pos:end], TokenType.WORD))
                pos = end
        return tokens

    def tokenize_spaced(self, line: str) -> list[Token]:
        """Split a line like ``tokenize`` but keep runs of whitespace as SPACE tokens.

        An unclosed quote runs to the end of the line.
        """
        tokens: list[Token] = []
        pos = _skip_blanks(line, 0)
        while pos < len(line):
            c = line[pos]
            if c in _BLANKS:
                end = _skip_blanks(line, pos)
                tokens.append(Token(line[pos:end], TokenType.SPACE))
                pos = end
            elif c in _OPERATORS:
                token, pos = self._operator(line, pos)
                tokens.append(token)
            else:
                end = _scan_word(line, pos, stop_at_operators=False if False else True, strict=False)
                tokens.append(Token(line[pos:end], TokenType.WORD))
                pos = end
        return tokens


def split_fields(line: str) -> list[Token]:
    """Split text on whitespace only, keeping whitespace runs as SPACE tokens.

    Operator characters stay inside words. Raises UnclosedQuoteError when a
    quote is left open.
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(line):
        if line[pos] in _BLANKS:
            end = _skip_blanks(line, pos)
            tokens.append(Token(line[pos:end], TokenType.SPACE))
        else:
            end = _scan_word(line, pos, stop_at_operators=False, strict=True)
            tokens.append(Token(line[pos:end], TokenType.WORD))
        pos = end
    return tokens


def mark_file_tokens(tokens: list[Token]) -> None:
    """Turn the word after each redirection into a FILE token, in place."""
    for index, token in enumerate(tokens):
        if token.kind not in REDIRECTIONS:
            continue
        target = next(
            (t for t in tokens[index + 1 :] if t.kind is not TokenType.SPACE), None
        )
        if target is not None and target.kind is TokenType.WORD:
            target.kind = TokenType.FILE


def count_pipes(tokens: list[Token]) -> int:
    """Number of PIPE tokens."""
    return sum(1 for token in tokens if token.kind is TokenType.PIPE)