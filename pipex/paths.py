"""Locating executables through the PATH variable."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

from .textutils import split_fields

__all__ = ["get_path_dirs", "find_command_path"]


def get_path_dirs(environ: Mapping[str, str]) -> list[str] | None:
    """Return the directories listed in PATH, or None if PATH is not set.

    Empty entries are dropped.
    """
    value = environ.get("PATH")
    if value is None:
        return None
    return split_fields(value, ":")


def find_command_path(dirs: Iterable[str], command: str | None) -> str | None:
    """Return the first ``dir/command`` that is executable, or None.

    An empty or missing command is never found.
    """
    if not command:
        return None
    for directory in dirs:
        candidate = f"{directory}/{command}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None