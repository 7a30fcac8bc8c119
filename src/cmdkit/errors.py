"""cmdkit exception classes.

The process wrapper returns these inside ``CommandResult`` instead of raising
them, so a non-zero exit can be a legitimate outcome for the caller.
"""

from __future__ import annotations

from collections.abc import Sequence

__all__ = [
    "CmdkitError",
    "CommandError",
    "SetupError",
    "LaunchError",
    "NonZeroExitError",
    "MissingFileError",
]


class CmdkitError(Exception):
    """Base exception for cmdkit."""
    pass


class CommandError(CmdkitError):
    """A single command run failed.

    Attributes:
        command: Program name
        command_args: Program arguments (``args`` is reserved by Exception)
    """

    def __init__(self, command: str, args: Sequence[str], message: str) -> None:
        self.command = command
        self.command_args = tuple(args)
        super().__init__(message)

    @property
    def command_line(self) -> str:
        return " ".join([self.command, *self.command_args])


class SetupError(CommandError):
    """Pipe or handle creation failed before the process existed.

    Attributes:
        cause: The underlying OS error
    """

    def __init__(self, command: str, args: Sequence[str], cause: OSError) -> None:
        self.cause = cause
        super().__init__(command, args, f"failed to set up pipes for {command}: {cause}")


class LaunchError(CommandError):
    """The OS could not start the program (missing binary, not executable, ...).

    Attributes:
        cause: The underlying OS error, or ValueError for arguments the OS
            cannot represent (embedded NUL)
    """

    def __init__(self, command: str, args: Sequence[str], cause: Exception) -> None:
        self.cause = cause
        super().__init__(command, args, f"failed to launch {command}: {cause}")


class NonZeroExitError(CommandError):
    """The program ran to completion but returned a failure status.

    Attributes:
        returncode: Exit code reported by the OS (negative signal number
            when the child was killed by a signal)
    """

    def __init__(self, command: str, args: Sequence[str], returncode: int) -> None:
        self.returncode = returncode
        super().__init__(command, args, f"{command} exited with status {returncode}")


class MissingFileError(CmdkitError):
    """A file-existence precondition failed.

    Attributes:
        path: The path that was expected to exist
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File '{path}' is not found")
