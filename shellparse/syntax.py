"""Syntax checks on token lists and here-document collection."""

from __future__ import annotations

import itertools
import os
import tempfile
from collections.abc import Callable, Iterable, Iterator, Sequence
from pathlib import Path

from shellparse.quotes import strip_quotes
from shellparse.tokens import REDIRECTIONS, Token, TokenType

SYNTAX_ERROR_STATUS = 258
HEREDOC_PREFIX = ".heredoc_tmp_"

_AFTER_REDIRECT = REDIRECTIONS | {TokenType.PIPE}
_PIPE_LIKE = frozenset({TokenType.PIPE, TokenType.OR})

LineExpander = Callable[[str], "str | None"]


class ShellSyntaxError(ValueError):
    """A command line is malformed.

    ``token`` is the offending token text, or None when a here-document
    has no delimiter. ``exit_status`` is the status the shell reports.
    """

    def __init__(self, token: str | None, exit_status: int = SYNTAX_ERROR_STATUS):
        self.token = token
        self.exit_status = exit_status
        if token is None:
            message = "minishell: here-document delimiter missing"
        else:
            message = f"minishell: syntax error near unexpected token '{token}'"
        super().__init__(message)


def _next(tokens: Sequence[Token], index: int) -> Token | None:
    return tokens[index + 1] if index + 1 < len(tokens) else None


def check_pipe_at_start(tokens: Sequence[Token]) -> None:
    """Raise if the line starts with a pipe."""
    if tokens and tokens[0].kind is TokenType.PIPE:
        raise ShellSyntaxError(tokens[0].value)


def _is_invalid_pipe_sequence(tokens: Sequence[Token], index: int) -> bool:
    nxt = _next(tokens, index)
    if nxt is None or nxt.kind in _PIPE_LIKE:
        return True
    after = _next(tokens, index + 1)
    return nxt.kind is TokenType.SPACE and after is not None and after.kind in _PIPE_LIKE


def check_pipes(tokens: Sequence[Token]) -> None:
    """Raise on a trailing or doubled pipe, or on any ``||``."""
    for index, token in enumerate(tokens):
        if token.kind is TokenType.PIPE and _is_invalid_pipe_sequence(tokens, index):
            raise ShellSyntaxError(token.value)
        if token.kind is TokenType.OR:
            raise ShellSyntaxError(token.value)


def is_redir_syntax_error(tokens: Sequence[Token], index: int) -> bool:
    """True if the token at ``index`` is a redirection or pipe misplaced."""
    kind = tokens[index].kind
    nxt = _next(tokens, index)
    if nxt is None:
        return kind in REDIRECTIONS
    if kind is TokenType.PIPE and nxt.kind is TokenType.PIPE:
        return True
    return kind in REDIRECTIONS and nxt.kind in _AFTER_REDIRECT


def check_redir_pair(tokens: Sequence[Token], index: int) -> None:
    """Raise on ``>`` before a pipe or ``<`` before another ``<``."""
    token = tokens[index]
    nxt = _next(tokens, index)
    if nxt is None:
        return
    if token.kind is TokenType.REDIRECT_OUT and nxt.kind is TokenType.PIPE:
        raise ShellSyntaxError(token.value)
    if token.kind is TokenType.REDIRECT_IN and nxt.kind is TokenType.REDIRECT_IN:
        raise ShellSyntaxError(token.value)


def check_syntax(tokens: Sequence[Token]) -> Sequence[Token]:
    """Check a token list, raising ShellSyntaxError on the first problem.

    A here-document operator followed by its delimiter file is left to
    ``collect_heredocs``. Returns the tokens unchanged.
    """
    check_pipe_at_start(tokens)
    check_pipes(tokens)
    for index, token in enumerate(tokens):
        nxt = _next(tokens, index)
        if (
            token.kind is TokenType.HEREDOC
            and nxt is not None
            and nxt.kind is TokenType.FILE
        ):
            continue
        if is_redir_syntax_error(tokens, index):
            raise ShellSyntaxError(token.value)
        check_redir_pair(tokens, index)
    return tokens


def sanitize_heredocs(tokens: Iterable[Token]) -> None:
    """Rewrite every ``<<`` token text to ``<``, in place."""
    for token in tokens:
        if token.value == "<<":
            token.value = "<"


def leading_dollars(text: str) -> int:
    """Number of ``$`` characters at the start of the text."""
    return len(text) - len(text.lstrip("$"))


def heredoc_delimiter(raw: str, quoted: bool) -> str:
    """Work out the delimiter a here-document ends on.

    ``raw`` is the delimiter with its quotes removed and ``quoted`` tells
    whether it had any. For a quoted delimiter, leading dollars not followed
    by a quote are reduced to an even count.
    """
    n = leading_dollars(raw)
    if n and raw[n : n + 1] not in ("'", '"') and quoted:
        return "$" * (n - n % 2) + raw[n:]
    return raw


def make_heredoc_filename(directory: str | os.PathLike[str] | None = None) -> str:
    """Return the first free here-document file name in a directory."""
    base = Path(directory) if directory is not None else Path(tempfile.gettempdir())
    for number in itertools.count():
        candidate = base / f"{HEREDOC_PREFIX}{number}"
        if not candidate.exists():
            return str(candidate)
    raise AssertionError("unreachable")


def is_end_of_heredoc(line: str | None, delimiter: str) -> bool:
    """True at end of input or on the delimiter line."""
    return line is None or line == delimiter


def should_expand_line(line: str, expand_flag: bool) -> bool:
    """True when expansion is on and the line holds a ``$``."""
    return bool(expand_flag) and "$" in line


def read_heredoc(
    lines: Iterable[str], delimiter: str, expand: LineExpander | None
) -> str:
    """Read here-document lines up to the delimiter and return the body.

    Each line is ended with a newline. When ``expand`` is given, lines
    holding ``$`` are passed through it; a None result keeps the line.
    Lines after the delimiter are left in ``lines`` when it is an iterator.
    """
    body: list[str] = []
    for line in lines:
        if is_end_of_heredoc(line, delimiter):
            break
        if expand is not None and should_expand_line(line, True):
            expanded = expand(line)
            line = line if expanded is None else expanded
        body.append(line + "\n")
    return "".join(body)


def collect_heredocs(
    tokens: Sequence[Token],
    lines: Iterable[str],
    directory: str | os.PathLike[str] | None = None,
    expand: LineExpander | None = None,
) -> list[str]:
    """Read every here-document in the tokens into its own file.

    Each ``<<`` token becomes an input redirection and its delimiter token
    takes the file's path. Quoted delimiters turn expansion off. Returns
    the paths written. Raises ShellSyntaxError with status 1 when a
    here-document has no delimiter.
    """
    source: Iterator[str] = iter(lines)
    written: list[str] = []
    for index, token in enumerate(tokens):
        if token.kind is not TokenType.HEREDOC:
            continue
        delim = _next(tokens, index)
        if delim is None or delim.kind is not TokenType.FILE:
            raise ShellSyntaxError(None, exit_status=1)
        original = delim.value
        quoted = "'" in original or '"' in original
        delimiter = heredoc_delimiter(strip_quotes(original) or "", quoted)
        body = read_heredoc(source, delimiter, None if quoted else expand)
        filename = make_heredoc_filename(directory)
        Path(filename).write_text(body)
        token.kind = TokenType.REDIRECT_IN
        delim.value = filename
        written.append(filename)
    return written