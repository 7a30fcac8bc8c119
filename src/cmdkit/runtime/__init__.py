"""Runtime module for external process execution.

Runs one command per call, wiring its standard streams to optional hooks
and always capturing the full stdout/stderr text.
"""

from __future__ import annotations

from .process_runner import (
    CommandResult,
    CommandSpec,
    ProcessRunner,
    StartedCommand,
    StreamHooks,
    command,
    commandf,
    run_command,
)
from .streams import Hook, print_output

__all__ = [
    "CommandResult",
    "CommandSpec",
    "Hook",
    "ProcessRunner",
    "StartedCommand",
    "StreamHooks",
    "command",
    "commandf",
    "print_output",
    "run_command",
]
