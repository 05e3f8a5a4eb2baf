"""Running a built pipeline as a chain of child processes."""

from __future__ import annotations

import errno
import os
import subprocess
from collections.abc import Mapping
from contextlib import ExitStack

from .pipeline import Pipeline, PipexError

__all__ = ["COMMAND_FAILED", "run_pipeline"]

COMMAND_FAILED = 127

_EXEC_ERRORS = frozenset(
    {
        errno.ENOENT,
        errno.EACCES,
        errno.ENOEXEC,
        errno.ENOTDIR,
        errno.EISDIR,
        errno.ELOOP,
        errno.ENAMETOOLONG,
        errno.E2BIG,
        errno.ETXTBSY,
        errno.EPERM,
    }
)


def _executable(name: str) -> str:
    # A bare name is looked up relative to the working directory, never PATH.
    return name if "/" in name else os.path.join(".", name)


def _open_null(stack: ExitStack, flags: int) -> int | None:
    try:
        fd = os.open(os.devnull, flags)
    except OSError:
        return None
    stack.callback(os.close, fd)
    return fd


def _spawn(
    pipeline: Pipeline,
    pipes: list[tuple[int, int]],
    index: int,
    argv: list[str],
    environ: Mapping[str, str],
) -> subprocess.Popen | int:
    last = len(pipeline.commands) - 1
    with ExitStack() as stack:
        if index == 0:
            stdin = pipeline.infile_fd if pipeline.infile_fd >= 0 else _open_null(stack, os.O_RDONLY)
        else:
            stdin = pipes[index - 1][0]
        if index == last:
            stdout = pipeline.outfile_fd if pipeline.outfile_fd >= 0 else _open_null(stack, os.O_WRONLY)
        else:
            stdout = pipes[index][1]
        if not argv:
            return COMMAND_FAILED
        try:
            return subprocess.Popen(
                argv,
                executable=_executable(argv[0]),
                stdin=stdin,
                stdout=stdout,
                env=dict(environ),
                close_fds=True,
            )
        except OSError as exc:
            if exc.errno in _EXEC_ERRORS:
                return COMMAND_FAILED
            raise PipexError(f"fork: {exc.strerror}\n") from exc


def run_pipeline(pipeline: Pipeline, environ: Mapping[str, str] | None = None) -> int:
    """Run every command, each reading the previous one's output.

    The first command reads the input file (or nothing if it could not be
    opened) and the last writes the output file. Returns the exit status:
    1 if a file was refused for lack of permission, otherwise the last
    command's status, 127 if it could not be executed, or 1 if it was
    killed by a signal. The pipeline's descriptors are closed afterwards.
    """
    if environ is None:
        environ = os.environ
    count = len(pipeline.commands)
    pipes: list[tuple[int, int]] = []
    children: list[subprocess.Popen | int] = []
    try:
        try:
            for _ in range(count - 1):
                pipes.append(os.pipe())
        except OSError:
            raise PipexError("pipe creation failed") from None
        for index, argv in enumerate(pipeline.commands):
            children.append(_spawn(pipeline, pipes, index, argv, environ))
    finally:
        for read_end, write_end in pipes:
            os.close(read_end)
            os.close(write_end)
        pipeline.close()

    status = 1
    for child in children:
        status = child if isinstance(child, int) else child.wait()
    if pipeline.permission_denied:
        return 1
    return status if status >= 0 else 1