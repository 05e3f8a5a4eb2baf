# pipex

`pipex` runs a chain of commands the way a shell pipeline does. It reads
from a file or a here-document and writes to a file.

## Usage

Plain mode behaves like `< infile cmd1 | cmd2 | ... | cmdN > outfile`:

```
pipex infile "grep foo" "sort" "uniq -c" outfile
```

The output file is created if needed and truncated. At least two commands
are required. Fewer than four arguments is an error: `Expected 4 arguments`
is written to standard error and the exit status is 1.

Here-document mode behaves like `cmd1 << LIMITER | ... | cmdN >> outfile`:

```
pipex here_doc END "cat" "wc -l" outfile
```

A `> ` prompt is written to standard output before each line is read. Lines
are read from standard input until a line that is exactly the limiter, or
until end of input. The limiter line is not passed on. The collected text is
the first command's input. The output file is created if needed and appended
to. One command is enough in this mode.

## Behaviour

- Each command is split on spaces only. Empty fields are dropped.
- The command name is looked up in the directories listed in `PATH`. The
  first executable match is used. If there is no match,
  `<name>: command not found` is written to standard error, and the name is
  then tried relative to the working directory. A stage that cannot be
  executed at all, or an empty command, counts as exit status 127.
- If `PATH` is not set, `couldn't extract PATH` is written to standard error
  and the exit status is 1.
- If the input file cannot be opened, the error is written to standard error
  and the first command reads from `/dev/null`.
- If the output file cannot be opened, the error is written to standard
  error and the last command writes to `/dev/null`.
- The exit status is that of the last command. It is 1 if the last command
  was killed by a signal. It is also 1 whenever either file failed to open
  for lack of permission.

## What it does not do

Commands are not passed through a shell. Quotes, escapes, variables,
globbing and redirections inside a command argument have no special meaning.
Only one input and one output file are supported. Standard error of the
commands is not redirected.

## Library use

The pieces can also be imported:

- `pipex.cli.main(argv=None)` is the command's entry point. It returns the
  exit status.
- `pipex.pipeline.build_pipeline(argv, environ=None, stdin=None, prompt_stream=None)`
  opens the files and resolves the commands, and returns a `Pipeline`. It
  raises `PipexError` on fatal errors. `PipexError` carries `message` and
  `exit_code`. A `Pipeline` is a context manager that closes its
  descriptors on exit.
- `pipex.pipeline.read_heredoc(limiter, stdin=None, prompt_stream=None)`
  returns the here-document text as bytes.
- `pipex.runner.run_pipeline(pipeline, environ=None)` runs the commands and
  returns the exit status.
- `pipex.paths.get_path_dirs(environ)` and
  `pipex.paths.find_command_path(dirs, command)` resolve commands via
  `PATH`.
- `pipex.lines.LineReader(stream, buffer_size=42)` reads lines from a
  file-like object or a file descriptor. It offers `read_line()`, `reset()`
  and iteration.
- `pipex.textutils.split_fields(text, sep)` splits text and drops empty
  fields. `pipex.textutils.strncmp(first, second, n)` compares strings the
  way C's `strncmp` does.
- `pipex.formatting.format_string(template, *args)` and
  `pipex.formatting.printf(template, *args)` do printf-style formatting.
  They support the conversions `c s p d i u x X %` and the flags `# 0 - +`
  and space, plus width and precision. `FormatSpec.parse(template, start)`
  parses a single conversion.

## Tests

```
pip install -e .[test]
pytest
```