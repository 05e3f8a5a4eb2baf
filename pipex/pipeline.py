"""Building a pipeline description from command-line arguments."""

from __future__ import annotations

import errno
import os
import sys
import tempfile
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import IO, Any

from .lines import LineReader
from .paths import find_command_path, get_path_dirs
from .textutils import split_fields

__all__ = ["HEREDOC_KEYWORD", "PipexError", "Pipeline", "read_heredoc", "build_pipeline"]

HEREDOC_KEYWORD = "here_doc"
PROMPT = "> "
_FILE_MODE = 0o644


class PipexError(Exception):
    """A fatal error; carries the message to print and the exit status."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


@dataclass
class Pipeline:
    """Commands to run in a chain together with the input and output files.

    Each command is its argument list, with the first item replaced by the
    full path of the executable when it was found in PATH. A descriptor of
    -1 means the file could not be opened.
    """

    commands: list[list[str]] = field(default_factory=list)
    outfile: str = ""
    infile: str | None = None
    infile_fd: int = -1
    outfile_fd: int = -1
    limiter: str | None = None
    permission_denied: bool = False

    @property
    def heredoc(self) -> bool:
        return self.limiter is not None

    def close(self) -> None:
        """Close the input and output descriptors; safe to call twice."""
        for name in ("infile_fd", "outfile_fd"):
            fd = getattr(self, name)
            if fd >= 0:
                try:
                    os.close(fd)
                except OSError:
                    pass
            setattr(self, name, -1)

    def __enter__(self) -> Pipeline:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _default_stdin() -> Any:
    try:
        return sys.stdin.fileno()
    except (AttributeError, OSError, ValueError):
        return sys.stdin


def _prompt(stream: IO | int) -> None:
    if isinstance(stream, int):
        os.write(stream, PROMPT.encode())
        return
    try:
        stream.write(PROMPT)
    except TypeError:
        stream.write(PROMPT.encode())
    flush = getattr(stream, "flush", None)
    if flush is not None:
        flush()


def read_heredoc(
    limiter: str,
    stdin: IO | int | None = None,
    prompt_stream: IO | int | None = None,
) -> bytes:
    """Read lines until one equals *limiter* or input ends; return them.

    A prompt is written before every line read. The limiter line itself is
    not included.
    """
    if stdin is None:
        stdin = _default_stdin()
    if prompt_stream is None:
        prompt_stream = sys.stdout
    terminator = limiter.encode() + b"\n"
    reader = LineReader(stdin)
    collected: list[bytes] = []
    while True:
        _prompt(prompt_stream)
        line = reader.read_line()
        if line is None:
            break
        if isinstance(line, str):
            line = line.encode()
        if line == terminator:
            break
        collected.append(bytes(line))
    return b"".join(collected)


def _spool(data: bytes) -> int:
    with tempfile.TemporaryFile() as spool:
        spool.write(data)
        spool.flush()
        spool.seek(0)
        return os.dup(spool.fileno())


def _open_reporting(pipeline: Pipeline, path: str, flags: int) -> int:
    try:
        return os.open(path, flags, _FILE_MODE)
    except OSError as exc:
        sys.stderr.write(f"{path}: {exc.strerror}\n")
        sys.stderr.flush()
        if exc.errno == errno.EACCES:
            pipeline.permission_denied = True
        return -1


def _resolve_commands(commands: list[list[str]], dirs: list[str]) -> None:
    for argv in commands:
        name = argv[0] if argv else None
        path = find_command_path(dirs, name)
        if path is None:
            sys.stderr.write(f"{name or ''}: command not found\n")
            sys.stderr.flush()
        else:
            argv[0] = path


def build_pipeline(
    argv: Sequence[str],
    environ: Mapping[str, str] | None = None,
    stdin: IO | int | None = None,
    prompt_stream: IO | int | None = None,
) -> Pipeline:
    """Open the files and resolve the commands named by *argv*.

    *argv* is ``infile cmd1 ... cmdN outfile`` or
    ``here_doc LIMITER cmd1 ... cmdN outfile``. In here-document mode the
    input is read from *stdin* first and the output file is appended to;
    otherwise it is truncated. Files that cannot be opened are reported on
    standard error and left at -1.
    """
    args = list(argv)
    if len(args) < 4:
        raise PipexError("Expected 4 arguments")
    if environ is None:
        environ = os.environ
    outfile = args[-1]

    if args[0] == HEREDOC_KEYWORD:
        limiter = args[1]
        data = read_heredoc(limiter, stdin, prompt_stream)
        pipeline = Pipeline(outfile=outfile, limiter=limiter)
        try:
            pipeline.infile_fd = _spool(data)
        except OSError:
            raise PipexError("heredoc pipe failed") from None
        out_flags = os.O_CREAT | os.O_WRONLY | os.O_APPEND
        specs = args[2:-1]
    else:
        pipeline = Pipeline(outfile=outfile, infile=args[0])
        pipeline.infile_fd = _open_reporting(pipeline, args[0], os.O_RDONLY)
        out_flags = os.O_CREAT | os.O_WRONLY | os.O_TRUNC
        specs = args[1:-1]
    pipeline.outfile_fd = _open_reporting(pipeline, outfile, out_flags)

    try:
        pipeline.commands = [split_fields(spec, " ") for spec in specs]
        dirs = get_path_dirs(environ)
        if dirs is None:
            raise PipexError("couldn't extract PATH")
    except BaseException:
        pipeline.close()
        raise
    _resolve_commands(pipeline.commands, dirs)
    return pipeline