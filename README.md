# shellparse

`shellparse` turns a line of shell input into a list of commands ready to be
run. It covers the front half of a small POSIX-like shell:

- **Lexing**: words, quotes, pipes, `<`, `>`, `>>`, `<<`, `(` and `||`
  (`shellparse.tokens.Lexer`, `TokenType`, `Token`, `split_fields`,
  `mark_file_tokens`, `count_pipes`).
- **Syntax checks**: a leading pipe, trailing or doubled pipes, dangling or
  doubled redirections, and `||`, which is not supported
  (`shellparse.syntax.check_syntax`, raising `ShellSyntaxError`).
- **Here-documents**: delimiter handling, quoted delimiters that switch off
  expansion, and temporary file naming (`shellparse.syntax.collect_heredocs`,
  `read_heredoc`, `heredoc_delimiter`, `make_heredoc_filename`).
- **Expansion**: `$NAME`, `$?`, runs of `$`, and no expansion inside single
  quotes (`shellparse.expand.Expander`).
- **Command building**: grouping words, redirection operators and their
  target files per pipeline stage (`shellparse.commands.build_commands`,
  `Command`, `split_cmd_args`).
- **Quote removal**: `shellparse.quotes.strip_quotes`, `strip_quotes_all`,
  `QuoteState`.
- **Small helpers**: `shellparse.textutils.mini_atoi`, `compare`,
  `compare_prefix`, `split_words` and character tests.

The whole pipeline is wrapped by `shellparse.parser.Parser`.

## Installing

```
pip install .
```

## Using it

```python
from shellparse.parser import Parser

parser = Parser(env={"USER": "alice", "HOME": "/home/alice"}, exit_status=0)
commands = parser.parse('echo "hello $USER" | grep hi > out.txt')

for command in commands:
    print(command.cmd, command.redirections, command.files)
```

Each `Command` holds the words of one pipeline stage (`cmd`), the redirection
operators that apply to it (`redirections`) and, in the same order, the files
they name (`files`). A redirection with no target has an empty file name.

`Parser.prepare_tokens` runs the same steps as `parse` but stops at the
expanded token list. After a call, `Parser.exit_status` holds the status the
shell would report and `Parser.pipeline_length` the number of stages.

Here-documents read their lines from `Parser.heredoc_lines` (any iterable of
strings, without newlines) and are written to files in `Parser.heredoc_dir`,
or the system temporary directory when it is `None`. In the parsed commands a
`<<` becomes `<` and its delimiter is replaced by the path of that file:

```python
parser = Parser(env={"NAME": "world"})
parser.heredoc_lines = ["hello $NAME", "EOF"]
parser.heredoc_dir = "/tmp"
commands = parser.parse("cat << EOF")
```

Lower-level pieces may be used on their own:

```python
from shellparse.tokens import Lexer
from shellparse.expand import Expander

tokens = Lexer().tokenize("cat < in.txt | wc -l")
print([(t.kind.name, t.value) for t in tokens])

print(Expander({"X": "42"}, exit_status=1).expand_value("$X and $?"))
```

## Errors

Errors are raised as exceptions whose messages match what an interactive
shell prints:

- `shellparse.tokens.UnclosedQuoteError`: a quote is left open.
- `shellparse.tokens.HeredocLimitError`: once a `Lexer` has counted
  seventeen here-document operators, classifying any further operator raises
  it; its `exit_status` is 2.
- `shellparse.syntax.ShellSyntaxError`: a malformed pipeline or redirection
  (`exit_status` 258), or a here-document with no delimiter (`exit_status` 1).
- `shellparse.parser.AmbiguousRedirectError`: a redirection target starts
  with `$` (`exit_status` 1).

## What it does not do

`shellparse` only parses. It does not run commands, set up pipes or open
redirection files, has no built-in commands, no interactive prompt or line
editing, and no signal handling. It provides no command-line program.

## Running the tests

```
pip install .[test]
pytest
```