"""Running one external command.

A ``CommandSpec`` describes the invocation: argument vector, extra
environment, optional stdin payload, output mode and whether a non-zero
exit status is an error. ``run_command`` executes it and guarantees the
child's pipes are closed and the child reaped before returning.
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..__util__ import CommandFailed, SpawnFailed, StdinUnavailable, StdinWriteFailed

logger = logging.getLogger(__name__)


class OutputMode(Enum):
    """What happens to the child's stdout/stderr."""

    INHERIT = "inherit"  # stream to our own stdout/stderr
    CAPTURE = "capture"  # buffer, surface stderr on failure


@dataclass(frozen=True)
class CommandSpec:
    """One external command invocation.

    Attributes:
        argv: Program and arguments
        env: Variables overlaid on the inherited environment
        input: Text written to the child's stdin, which is then closed
        output: Output mode
        check: Treat a non-zero exit status as failure
    """

    argv: tuple[str, ...]
    env: tuple[tuple[str, str], ...] = ()
    input: Optional[str] = None
    output: OutputMode = OutputMode.CAPTURE
    check: bool = True

    def __post_init__(self):
        # Accept lists from callers but store tuples
        object.__setattr__(self, "argv", tuple(self.argv))
        object.__setattr__(self, "env", tuple(tuple(pair) for pair in self.env))
        if not self.argv:
            raise ValueError("CommandSpec requires a non-empty argv")

    def build_env(self) -> dict[str, str]:
        env = os.environ.copy()
        env.update(self.env)
        return env


def run_command(spec: CommandSpec) -> subprocess.CompletedProcess:
    """Run ``spec`` to completion.

    Returns:
        The completed process; stdout/stderr are bytes in capture mode and
        None in inherit mode

    Raises:
        SpawnFailed: The executable could not be started
        StdinUnavailable: No stdin pipe was available for the payload
        StdinWriteFailed: The payload could not be written
        CommandFailed: Non-zero exit status while ``spec.check`` is set
    """
    argv = list(spec.argv)
    logger.info("Running: %s", " ".join(argv))

    capture = spec.output is OutputMode.CAPTURE
    pipe_or_none = subprocess.PIPE if capture else None

    try:
        process = subprocess.Popen(
            argv,
            stdin=subprocess.PIPE if spec.input is not None else subprocess.DEVNULL,
            stdout=pipe_or_none,
            stderr=pipe_or_none,
            env=spec.build_env(),
        )
    except OSError as e:
        raise SpawnFailed(argv, e) from e

    # Popen.__exit__ closes every pipe and waits for the child
    with process:
        if spec.input is not None:
            if process.stdin is None:
                process.kill()
                raise StdinUnavailable(argv)
            try:
                process.stdin.write(spec.input.encode("utf-8"))
                process.stdin.flush()
            except OSError as e:
                process.kill()
                raise StdinWriteFailed(argv, e) from e

        # Closes stdin (EOF for the child), then drains stdout/stderr
        stdout, stderr = process.communicate()

    logger.debug("%s exited with status %d", argv[0], process.returncode)

    if spec.check and process.returncode != 0:
        stderr_text = stderr.decode("utf-8", errors="replace") if stderr else ""
        raise CommandFailed(argv, process.returncode, stderr_text)

    return subprocess.CompletedProcess(argv, process.returncode, stdout, stderr)

