from pathlib import Path

import pytest

from shellparse.syntax import (
    HEREDOC_PREFIX,
    ShellSyntaxError,
    check_pipe_at_start,
    check_pipes,
    check_redir_pair,
    check_syntax,
    collect_heredocs,
    heredoc_delimiter,
    is_end_of_heredoc,
    is_redir_syntax_error,
    leading_dollars,
    make_heredoc_filename,
    read_heredoc,
    sanitize_heredocs,
    should_expand_line,
)
from shellparse.tokens import Lexer, Token, TokenType, mark_file_tokens


def _tokens(line):
    tokens = Lexer().tokenize(line)
    mark_file_tokens(tokens)
    return tokens


def test_pipe_at_start_raises():
    with pytest.raises(ShellSyntaxError) as info:
        check_pipe_at_start(_tokens("| ls"))
    assert info.value.token == "|"
    assert info.value.exit_status == 258


def test_trailing_pipe_raises():
    with pytest.raises(ShellSyntaxError) as info:
        check_pipes(_tokens("ls |"))
    assert info.value.token == "|"


def test_double_pipe_raises():
    with pytest.raises(ShellSyntaxError):
        check_pipes(_tokens("ls | | wc"))


def test_pipe_space_pipe_raises():
    tokens = [
        Token("ls", TokenType.WORD),
        Token("|", TokenType.PIPE),
        Token(" ", TokenType.SPACE),
        Token("|", TokenType.PIPE),
    ]
    with pytest.raises(ShellSyntaxError):
        check_pipes(tokens)


def test_or_token_raises():
    tokens = [
        Token("ls", TokenType.WORD),
        Token("||", TokenType.OR),
        Token("wc", TokenType.WORD),
    ]
    with pytest.raises(ShellSyntaxError) as info:
        check_pipes(tokens)
    assert info.value.token == "||"


def test_is_redir_syntax_error_cases():
    assert is_redir_syntax_error(_tokens("cat >"), 1) is True
    assert is_redir_syntax_error(_tokens("cat > f"), 1) is False
    assert is_redir_syntax_error(_tokens("> > f"), 0) is True
    assert is_redir_syntax_error(_tokens("< | f"), 0) is True
    assert is_redir_syntax_error(_tokens("cat"), 0) is False


def test_check_redir_pair_out_then_pipe():
    tokens = [Token(">", TokenType.REDIRECT_OUT), Token("|", TokenType.PIPE)]
    with pytest.raises(ShellSyntaxError) as info:
        check_redir_pair(tokens, 0)
    assert info.value.token == ">"


def test_check_redir_pair_in_then_in():
    tokens = [Token("<", TokenType.REDIRECT_IN), Token("<", TokenType.REDIRECT_IN)]
    with pytest.raises(ShellSyntaxError) as info:
        check_redir_pair(tokens, 0)
    assert info.value.token == "<"


def test_check_syntax_accepts_valid_line():
    tokens = _tokens("cat << EOF | wc > out")
    values = [t.value for t in tokens]
    assert [t.value for t in check_syntax(tokens)] == values


def test_check_syntax_reports_heredoc_before_redirect():
    with pytest.raises(ShellSyntaxError) as info:
        check_syntax(_tokens("cat << > f"))
    assert info.value.token == "<<"


def test_check_syntax_pipe_error_takes_priority():
    with pytest.raises(ShellSyntaxError) as info:
        check_syntax(_tokens("cat > > f | "))
    assert info.value.token == "|"


def test_sanitize_heredocs():
    tokens = _tokens("cat << EOF < in")
    sanitize_heredocs(tokens)
    assert [t.value for t in tokens] == ["cat", "<", "EOF", "<", "in"]


def test_leading_dollars():
    assert leading_dollars("$$$abc") == 3
    assert leading_dollars("abc") == 0
    assert leading_dollars("") == 0


def test_heredoc_delimiter_unquoted_unchanged():
    for raw in ("$EOF", "$$$EOF", "EOF"):
        assert heredoc_delimiter(raw, False) == raw


def test_heredoc_delimiter_quoted_reduces_to_even():
    assert heredoc_delimiter("$EOF", True) == "EOF"
    assert heredoc_delimiter("$$$EOF", True) == "$$EOF"
    assert heredoc_delimiter("$$EOF", True) == "$$EOF"


def test_make_heredoc_filename(tmp_path):
    first = make_heredoc_filename(tmp_path)
    assert Path(first).name == HEREDOC_PREFIX + "0"
    Path(first).write_text("")
    second = make_heredoc_filename(tmp_path)
    assert Path(second).name == HEREDOC_PREFIX + "1"


def test_is_end_of_heredoc():
    assert is_end_of_heredoc(None, "EOF") is True
    assert is_end_of_heredoc("EOF", "EOF") is True
    assert is_end_of_heredoc("EOFX", "EOF") is False


def test_should_expand_line():
    assert should_expand_line("a $X", True) is True
    assert should_expand_line("a $X", False) is False
    assert should_expand_line("plain", True) is False


def test_read_heredoc_stops_at_delimiter():
    lines = iter(["a", "$X", "EOF", "rest"])
    assert read_heredoc(lines, "EOF", None) == "a\n$X\n"
    assert next(lines) == "rest"


def test_read_heredoc_expands_dollar_lines():
    body = read_heredoc(["a", "$X", "EOF"], "EOF", lambda line: line.replace("$X", "val"))
    assert body == "a\nval\n"


def test_read_heredoc_expander_none_keeps_line():
    assert read_heredoc(["$X"], "EOF", lambda line: None) == "$X\n"


def test_collect_heredocs_writes_files(tmp_path):
    tokens = _tokens("cat << EOF | wc << END")
    written = collect_heredocs(tokens, ["hello", "EOF", "x", "END"], tmp_path)
    assert len(written) == 2
    assert Path(written[0]).read_text() == "hello\n"
    assert Path(written[1]).read_text() == "x\n"
    file_values = [t.value for t in tokens if t.kind is TokenType.FILE]
    assert file_values == written
    assert TokenType.HEREDOC not in [t.kind for t in tokens]


def test_collect_heredocs_quoted_delimiter_disables_expansion(tmp_path):
    def fail(line):
        raise AssertionError("expansion must not run")

    tokens = _tokens("cat << 'E'")
    written = collect_heredocs(tokens, ["$HOME", "E"], tmp_path, fail)
    assert Path(written[0]).read_text() == "$HOME\n"


def test_collect_heredocs_missing_delimiter(tmp_path):
    tokens = [Token("<<", TokenType.HEREDOC), Token("|", TokenType.PIPE)]
    with pytest.raises(ShellSyntaxError) as info:
        collect_heredocs(tokens, [], tmp_path)
    assert info.value.exit_status == 1
    assert info.value.token is None