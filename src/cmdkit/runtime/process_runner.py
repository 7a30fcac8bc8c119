"""Process runner with piped stdout/stderr capture.

cmdkit runtime module

This module provides:
- Two-phase execution: start() feeds the stdin hook and opens pipes,
  wait() launches the process and collects its output
- Concurrent stdout/stderr draining, one worker thread per stream
- Tee readers so output hooks see exactly the bytes that are captured
- Distinct setup, launch and non-zero exit errors

Key design points:
- The anyio task group is the join barrier: wait() only returns after both
  drains and the exit wait have finished, so captured text is complete
- The runner owns every pipe and closes it; hooks only borrow streams
- Errors are returned in CommandResult, never raised, except for exceptions
  raised by user hooks
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import partial

import anyio
from anyio import to_thread
from anyio.abc import ByteSendStream, Process

from ..console import Console
from ..errors import CommandError, LaunchError, NonZeroExitError, SetupError
from .streams import Hook, StdinBuffer, drain_stream

__all__ = [
    "CommandResult",
    "CommandSpec",
    "ProcessRunner",
    "StartedCommand",
    "StreamHooks",
    "command",
    "commandf",
    "run_command",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandSpec:
    """Program name and arguments for one run.

    Attributes:
        program: Executable name or path
        args: Arguments, stored as given
    """

    program: str
    args: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class StreamHooks:
    """Optional callbacks granted access to the child's standard streams.

    Attributes:
        on_stdin: Called during start() with a writable stream; whatever it
            writes becomes the child's stdin. Closed as soon as it returns.
        on_stdout: Called with a reader that tees into the captured stdout
        on_stderr: Called with a reader that tees into the captured stderr
    """

    on_stdin: Hook | None = None
    on_stdout: Hook | None = None
    on_stderr: Hook | None = None


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one run.

    ``status`` is only meaningful when ``error`` is None (then it is 0) or a
    NonZeroExitError (then it holds the exit code).
    """

    command: str
    args: tuple[str, ...]
    status: int = 0
    stdout_bytes: bytes = b""
    stderr_bytes: bytes = b""
    error: CommandError | None = None

    @property
    def stdout(self) -> str:
        return self.stdout_bytes.decode("utf-8", errors="replace")

    @property
    def stderr(self) -> str:
        return self.stderr_bytes.decode("utf-8", errors="replace")

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def launched(self) -> bool:
        """False when the process never started."""
        return not isinstance(self.error, (SetupError, LaunchError))

    def fail_if(self, message: str, console: Console | None = None) -> None:
        """Report message and exit the host process with 1 when the run failed."""
        (console or Console()).fail_if(self.error, message)


@dataclass
class StartedCommand:
    """Handle returned by ProcessRunner.start() and consumed by wait().

    Use it as a context manager, or call close(), when it might not reach
    wait(); otherwise its pipes stay open.

    Attributes:
        spec: The command being run
        hooks: Stream hooks for this run
        stdin_payload: Bytes written by the stdin hook (None = no stdin hook)
        stdout_pipe: (read_fd, write_fd) for stdout
        stderr_pipe: (read_fd, write_fd) for stderr
        error: Set when start() failed; wait() then returns it immediately
    """

    spec: CommandSpec
    hooks: StreamHooks
    stdin_payload: bytes | None = None
    stdout_pipe: tuple[int, int] | None = None
    stderr_pipe: tuple[int, int] | None = None
    error: SetupError | None = None
    waited: bool = field(default=False, repr=False)

    def close_pipes(self) -> None:
        """Close every pipe end still owned by this handle."""
        for pipe in (self.stdout_pipe, self.stderr_pipe):
            if pipe is not None:
                _close_fds(*pipe)
        self.stdout_pipe = None
        self.stderr_pipe = None

    def close(self) -> None:
        """Release the pipes of a handle that will not be waited."""
        self.close_pipes()

    def __enter__(self) -> "StartedCommand":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def failed_result(self) -> CommandResult:
        return CommandResult(
            command=self.spec.program,
            args=self.spec.args,
            error=self.error,
        )


@dataclass
class ProcessRunner:
    """Runs one external command per call and captures its output.

    Example:
        runner = ProcessRunner()
        result = await runner.run(command("git", "status", "--short"))
        if result.error is not None:
            ...

        # Synchronous callers
        result = runner.run_sync(command("echo", "hello"))
        assert result.stdout == "hello\\n"
    """

    console: Console = field(default_factory=Console)

    def start(self, spec: CommandSpec, hooks: StreamHooks | None = None) -> StartedCommand:
        """Prepare a run without launching the process.

        Invokes the stdin hook synchronously and opens the output pipes. A
        pipe setup failure is recorded on the returned handle; no process is
        started and nothing is retried.

        Args:
            spec: Command to run
            hooks: Optional stream hooks

        Returns:
            Handle to pass to wait()
        """
        hooks = hooks or StreamHooks()
        self.console.info("%s %s", spec.program, " ".join(spec.args))

        started = StartedCommand(spec=spec, hooks=hooks)

        if hooks.on_stdin is not None:
            buffer = StdinBuffer()
            try:
                hooks.on_stdin(buffer)
            finally:
                buffer.close()
            started.stdin_payload = buffer.payload

        try:
            started.stdout_pipe = os.pipe()
            started.stderr_pipe = os.pipe()
        except OSError as e:
            started.close_pipes()
            started.error = SetupError(spec.program, spec.args, e)
            logger.debug(f"Pipe setup failed argv={spec.argv}: {e}")

        return started

    async def wait(self, started: StartedCommand) -> CommandResult:
        """Launch the prepared process and collect its result.

        stdout and stderr are drained concurrently while the exit wait runs;
        all three are joined before this returns.

        Args:
            started: Handle from start(); can only be waited once

        Returns:
            CommandResult with status, captured output and error

        Raises:
            RuntimeError: If the handle was already waited
            Exception: The first exception raised by an output hook, after
                the process has exited and every stream is closed
        """
        if started.waited:
            raise RuntimeError(f"{started.spec} has already been waited")
        started.waited = True

        if started.error is not None:
            return started.failed_result()

        spec = started.spec
        if started.stdout_pipe is None or started.stderr_pipe is None:
            raise RuntimeError(f"{spec} has no open pipes; it was closed or not built by start()")
        out_r, out_w = started.stdout_pipe
        err_r, err_w = started.stderr_pipe
        started.stdout_pipe = None
        started.stderr_pipe = None

        # DEVNULL gives the child an immediate end-of-input
        stdin = subprocess.PIPE if started.stdin_payload is not None else subprocess.DEVNULL

        process: Process | None = None
        try:
            process = await anyio.open_process(
                spec.argv,
                stdin=stdin,
                stdout=out_w,
                stderr=err_w,
            )
        except (OSError, ValueError) as e:
            # ValueError: arguments the OS cannot represent, e.g. an embedded NUL
            logger.debug(f"Launch failed argv={spec.argv}: {e}")
            return CommandResult(
                command=spec.program,
                args=spec.args,
                error=LaunchError(spec.program, spec.args, e),
            )
        finally:
            # The child holds its own copies; EOF arrives once it exits
            _close_fds(out_w, err_w)
            if process is None:
                _close_fds(out_r, err_r)

        logger.debug(f"Started subprocess pid={process.pid} argv={spec.argv}")

        stdout_sink = bytearray()
        stderr_sink = bytearray()
        hook_errors: list[Exception] = []

        async with process:
            async with anyio.create_task_group() as tg:
                tg.start_soon(
                    to_thread.run_sync,
                    drain_stream, out_r, started.hooks.on_stdout, stdout_sink, hook_errors,
                )
                tg.start_soon(
                    to_thread.run_sync,
                    drain_stream, err_r, started.hooks.on_stderr, stderr_sink, hook_errors,
                )
                if process.stdin is not None:
                    tg.start_soon(
                        self._feed_stdin, process.stdin, process.pid, started.stdin_payload or b"",
                    )

                returncode = await process.wait()

        logger.debug(f"Subprocess completed pid={process.pid} returncode={returncode}")

        if hook_errors:
            raise hook_errors[0]

        status = 0
        error: CommandError | None = None
        if returncode != 0:
            status = returncode
            error = NonZeroExitError(spec.program, spec.args, returncode)

        return CommandResult(
            command=spec.program,
            args=spec.args,
            status=status,
            stdout_bytes=bytes(stdout_sink),
            stderr_bytes=bytes(stderr_sink),
            error=error,
        )

    async def run(self, spec: CommandSpec, hooks: StreamHooks | None = None) -> CommandResult:
        """start() then wait(), returning early if start() failed."""
        started = self.start(spec, hooks)
        if started.error is not None:
            started.waited = True
            return started.failed_result()
        return await self.wait(started)

    def run_sync(self, spec: CommandSpec, hooks: StreamHooks | None = None) -> CommandResult:
        """Blocking run() on a fresh event loop, for synchronous CLI code."""
        return anyio.run(partial(self.run, spec, hooks))

    async def _feed_stdin(self, stdin: ByteSendStream, pid: int, payload: bytes) -> None:
        """Write the stdin hook's bytes, then close stdin."""
        try:
            if payload:
                await stdin.send(payload)
            await stdin.aclose()
        except (anyio.BrokenResourceError, anyio.ClosedResourceError, OSError) as e:
            # Child exited without reading all of its input
            logger.debug(f"stdin closed early pid={pid}: {e!r}")


def command(program: str, *args: str) -> CommandSpec:
    """Build a CommandSpec; no validation, no side effects."""
    return CommandSpec(program=program, args=tuple(args))


def commandf(fmt: str, *values: object) -> CommandSpec:
    """Build a CommandSpec from a %-format string split on single spaces.

    Example:
        commandf("git log -n %d", 5) == command("git", "log", "-n", "5")
    """
    text = fmt % values if values else fmt
    program, *args = text.split(" ")
    return command(program, *args)


def run_command(
    spec: CommandSpec | Sequence[str],
    hooks: StreamHooks | None = None,
    *,
    console: Console | None = None,
) -> CommandResult:
    """Run a command synchronously with a throwaway ProcessRunner.

    Args:
        spec: CommandSpec, or argv with the program first
        hooks: Optional stream hooks
        console: Console for the command announcement

    Returns:
        CommandResult
    """
    if not isinstance(spec, CommandSpec):
        spec = command(*spec)
    runner = ProcessRunner(console=console or Console())
    return runner.run_sync(spec, hooks)


def _close_fds(*fds: int) -> None:
    for fd in fds:
        try:
            os.close(fd)
        except OSError as e:
            logger.warning(f"Error closing fd={fd}: {e}")
