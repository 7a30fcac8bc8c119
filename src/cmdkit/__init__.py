"""cmdkit - helpers for command-line tools.

OS/arch detection, leveled console output, file checks and an external
process wrapper with piped stdout/stderr capture.

Usage:
    from cmdkit import Console, ProcessRunner, command

    console = Console()
    result = ProcessRunner(console=console).run_sync(command("echo", "hello"))
    result.fail_if("echo failed", console)
"""

__version__ = "0.1.0"

from .config import Config, LogLevel, load_config
from .console import Console, fail, success
from .errors import (
    CmdkitError,
    CommandError,
    LaunchError,
    MissingFileError,
    NonZeroExitError,
    SetupError,
)
from .fs import contains, exists, join, open_file, open_rw
from .runtime import (
    CommandResult,
    CommandSpec,
    ProcessRunner,
    StreamHooks,
    command,
    commandf,
    print_output,
    run_command,
)
from .sysinfo import IS_LINUX, IS_MAC, IS_WINDOWS, full_version

__all__ = [
    "__version__",
    "CmdkitError",
    "CommandError",
    "CommandResult",
    "CommandSpec",
    "Config",
    "Console",
    "IS_LINUX",
    "IS_MAC",
    "IS_WINDOWS",
    "LaunchError",
    "LogLevel",
    "MissingFileError",
    "NonZeroExitError",
    "ProcessRunner",
    "SetupError",
    "StreamHooks",
    "command",
    "commandf",
    "contains",
    "exists",
    "fail",
    "full_version",
    "join",
    "load_config",
    "open_file",
    "open_rw",
    "print_output",
    "run_command",
    "success",
]
