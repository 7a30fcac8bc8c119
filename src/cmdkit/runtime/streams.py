"""Stream helpers handed to process hooks.

The runner owns every stream; hooks only borrow them. Closing a borrowed
stream from inside a hook never stops capture.
"""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Callable
from functools import partial
from typing import BinaryIO

from ..console import Console

__all__ = [
    "CHUNK_SIZE",
    "Hook",
    "StdinBuffer",
    "TeeReader",
    "drain_stream",
    "print_output",
]

logger = logging.getLogger(__name__)

CHUNK_SIZE = 65536

# Hook signature shared by on_stdin / on_stdout / on_stderr
Hook = Callable[[BinaryIO], None]


class StdinBuffer(io.BytesIO):
    """Writable stream for the stdin hook; keeps its payload after close()."""

    payload: bytes = b""

    def close(self) -> None:
        if not self.closed:
            self.payload = self.getvalue()
        super().close()


class TeeReader(io.RawIOBase):
    """Readable stream that copies every byte it yields into a sink."""

    def __init__(self, source: BinaryIO, sink: bytearray) -> None:
        super().__init__()
        self._source = source
        self._sink = sink

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[override]
        n = self._source.readinto(buffer)  # type: ignore[attr-defined]
        if n:
            self._sink.extend(memoryview(buffer)[:n])
        return n or 0


def drain_stream(
    fd: int,
    hook: Hook | None,
    sink: bytearray,
    hook_errors: list[Exception],
) -> None:
    """Read fd to end-of-stream into sink, letting hook observe the bytes first.

    Runs in a worker thread. Closes fd. A hook that stops reading early, or
    closes its reader, does not stop capture: the rest of the stream is still
    drained into sink. Hook exceptions are collected in hook_errors for the
    caller to re-raise once the process has finished.
    """
    with os.fdopen(fd, "rb", buffering=0) as raw:
        if hook is not None:
            reader = io.BufferedReader(TeeReader(raw, sink))
            try:
                hook(reader)
            except Exception as e:
                logger.debug(f"Stream hook failed fd={fd}: {e!r}")
                hook_errors.append(e)

        for chunk in iter(partial(raw.read, CHUNK_SIZE), b""):
            sink.extend(chunk)


def print_output(stream: BinaryIO, console: Console | None = None) -> None:
    """Hook that prints every line of stream through console.printf."""
    console = console or Console()
    for line in stream:
        console.printf("%s", line.decode("utf-8", errors="replace").rstrip("\r\n"))
