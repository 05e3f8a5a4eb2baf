"""Command-line entry point: ``pipex infile cmd1 ... cmdN outfile``."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from .pipeline import PipexError, build_pipeline
from .runner import run_pipeline

__all__ = ["main"]


def main(argv: Sequence[str] | None = None) -> int:
    """Build and run the pipeline named by *argv*; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        pipeline = build_pipeline(args)
        return run_pipeline(pipeline)
    except PipexError as exc:
        sys.stderr.write(exc.message)
        sys.stderr.flush()
        return exc.exit_code


if __name__ == "__main__":
    sys.exit(main())