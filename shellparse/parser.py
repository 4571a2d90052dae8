"""Turning a command line into a pipeline of commands."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping, Sequence

from shellparse.commands import Command, build_commands
from shellparse.expand import Expander, restore_quotes
from shellparse.quotes import strip_quotes_all
from shellparse.syntax import (
    SYNTAX_ERROR_STATUS,
    ShellSyntaxError,
    check_syntax,
    collect_heredocs,
    sanitize_heredocs,
)
from shellparse.tokens import (
    REDIRECTIONS,
    Lexer,
    Token,
    TokenType,
    UnclosedQuoteError,
    count_pipes,
    mark_file_tokens,
)


class AmbiguousRedirectError(ValueError):
    """A redirection target is a variable reference."""

    exit_status = 1

    def __init__(self, target: str) -> None:
        self.target = target
        super().__init__(f"minishell: {target}: ambiguous redirect")


def _find_ambiguous(tokens: Sequence[Token]) -> Token | None:
    for index, token in enumerate(tokens):
        if token.kind not in REDIRECTIONS:
            continue
        target = next(
            (t for t in tokens[index + 1 :] if t.kind is not TokenType.SPACE), None
        )
        if (
            target is not None
            and target.kind is TokenType.FILE
            and target.value.startswith("$")
        ):
            return target
    return None


class Parser:
    """Parses command lines against an environment, tracking the exit status.

    ``heredoc_lines`` supplies the input lines of here-documents and
    ``heredoc_dir`` the directory their files are written to (the system
    temporary directory when None).
    """

    def __init__(
        self, env: Mapping[str, str] | None = None, exit_status: int = 0
    ) -> None:
        self.env: Mapping[str, str] = dict(env) if env is not None else {}
        self.exit_status = exit_status
        self.lexer = Lexer()
        self.heredoc_lines: Iterable[str] = ()
        self.heredoc_dir: str | os.PathLike[str] | None = None
        self.pipeline_length = 0

    def _expand_heredoc_line(self, line: str) -> str:
        expanded = Expander(self.env, self.exit_status).expand_value(line)
        return restore_quotes([expanded])[0]

    def prepare_tokens(self, line: str | None) -> list[Token]:
        """Tokenize, check, read here-documents and expand a line.

        Raises UnclosedQuoteError, ShellSyntaxError or AmbiguousRedirectError,
        setting ``exit_status`` to the status the shell reports.
        """
        if line is None:
            return []
        try:
            tokens = self.lexer.tokenize(line)
        except UnclosedQuoteError:
            self.exit_status = SYNTAX_ERROR_STATUS
            raise
        if not tokens:
            return []
        pipes = count_pipes(tokens)
        self.pipeline_length = pipes + 1
        if pipes > 0:
            self.exit_status = 0
        mark_file_tokens(tokens)
        try:
            check_syntax(tokens)
        except ShellSyntaxError:
            self.exit_status = SYNTAX_ERROR_STATUS
            raise
        try:
            written = collect_heredocs(
                tokens,
                self.heredoc_lines,
                self.heredoc_dir,
                self._expand_heredoc_line,
            )
        except ShellSyntaxError as err:
            self.exit_status = err.exit_status
            raise
        sanitize_heredocs(tokens)
        if written:
            self.exit_status = 0
        target = _find_ambiguous(tokens)
        if target is not None:
            self.exit_status = AmbiguousRedirectError.exit_status
            raise AmbiguousRedirectError(target.value)
        return Expander(self.env, self.exit_status).expand_tokens(tokens)

    def parse(self, line: str | None) -> list[Command]:
        """Parse a line into the commands of its pipeline, quotes removed."""
        tokens = self.prepare_tokens(line)
        if not tokens:
            return []
        commands = build_commands(tokens)
        for command in commands:
            command.cmd = strip_quotes_all(command.cmd) or []
            command.redirections = strip_quotes_all(command.redirections) or []
            command.files = strip_quotes_all(command.files) or []
        if commands:
            commands[0].cmd = restore_quotes(commands[0].cmd) or []
        return commands