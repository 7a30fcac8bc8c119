"""Path and file helpers with fail-fast semantics."""

from __future__ import annotations

import os
from collections.abc import Iterable
from typing import IO, Any

from .console import Console

__all__ = ["contains", "exists", "join", "open_file", "open_rw"]


def join(*parts: str | os.PathLike[str]) -> str:
    return os.path.join(*parts)


def exists(path: str | os.PathLike[str]) -> bool:
    return os.path.exists(path)


def contains(items: Iterable[str], value: str) -> bool:
    return any(item == value for item in items)


def open_file(
    path: str | os.PathLike[str],
    mode: str = "r+b",
    console: Console | None = None,
) -> IO[Any]:
    """Open an existing file, exiting the process when that is impossible.

    Args:
        path: File to open; must already exist
        mode: Mode passed to open()
        console: Console used for error reports (default: a new stdout Console)

    Returns:
        The open file object
    """
    console = console or Console()
    console.fail_if_not_exists(path)
    try:
        return open(path, mode)
    except OSError as e:
        console.fail_if(e, "%s", e)
        raise


def open_rw(path: str | os.PathLike[str], console: Console | None = None) -> IO[Any]:
    """Open an existing file for reading and writing in binary mode."""
    return open_file(path, "r+b", console)
