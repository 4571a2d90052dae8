"""Grouping of tokens into the simple commands of a pipeline."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from shellparse.tokens import REDIRECTIONS, Token, TokenType

_WORD_KINDS = frozenset({TokenType.WORD, TokenType.OPTION, TokenType.FILE})


@dataclass
class Command:
    """One simple command: its words and its redirections.

    ``redirections`` and ``files`` run in parallel: the operator at a given
    position applies to the file at the same position. A redirection with
    no target has an empty file name.
    """

    cmd: list[str] = field(default_factory=list)
    redirections: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)


def build_commands(tokens: Iterable[Token]) -> list[Command]:
    """Split a token list on pipes into commands.

    Words, options and files go to the command's words. A redirection takes
    the next FILE token, skipping whitespace, as its target. Other tokens
    are ignored.
    """
    queue = deque(tokens)
    commands: list[Command] = []
    while queue:
        command = Command()
        while queue and queue[0].kind is not TokenType.PIPE:
            token = queue.popleft()
            if token.kind in _WORD_KINDS:
                command.cmd.append(token.value)
            elif token.kind in REDIRECTIONS:
                command.redirections.append(token.value)
                while queue and queue[0].kind is TokenType.SPACE:
                    queue.popleft()
                if queue and queue[0].kind is TokenType.FILE:
                    command.files.append(queue.popleft().value)
                else:
                    command.files.append("")
        commands.append(command)
        if queue:
            queue.popleft()
    return commands


def split_cmd_args(
    full: Sequence[str] | None,
) -> tuple[list[str] | None, list[str] | None]:
    """Split a word list into the command name and its arguments.

    Returns ``(None, None)`` for no words and ``([name], None)`` for a
    command without arguments.
    """
    if not full:
        return None, None
    if len(full) == 1:
        return [full[0]], None
    return [full[0]], list(full[1:])