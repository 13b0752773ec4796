# pyright: standard

"""backuper: backuper/__util__.py
Common helpers and the exception hierarchy shared by all modules.
"""

from datetime import timedelta

MINUTE = 60
HOUR = MINUTE * 60
DAY = HOUR * 24


class BackuperError(Exception):
    """Base class for all errors raised by backuper."""


class ConfigError(BackuperError):
    """Configuration loading or validation error."""


class ConfigMissing(ConfigError):
    """A required environment variable is not set."""

    def __init__(self, variable: str) -> None:
        self.variable = variable
        super().__init__(f"Missing required environment variable: {variable}")


class HomeDirUnavailable(BackuperError):
    """The current user's home directory could not be determined."""

    def __init__(self, reason: str = "") -> None:
        message = "Failed to get home dir"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class CredentialForwardFailure(BackuperError):
    """Credentials could not be registered for forwarding into WSL."""


class RunLocked(BackuperError):
    """Another backup run holds the run lock."""


class NotifyError(BackuperError):
    """Sending the end-of-run notification failed."""


class CommandError(BackuperError):
    """Base class for errors of a single external command."""

    def __init__(self, argv, message: str) -> None:
        self.argv = list(argv)
        super().__init__(message)


class SpawnFailed(CommandError):
    """The executable could not be located or started."""

    def __init__(self, argv, cause: OSError) -> None:
        self.cause = cause
        super().__init__(argv, f"Failed to start {argv[0]}: {cause}")


class StdinUnavailable(CommandError):
    """The child's standard input pipe could not be obtained."""

    def __init__(self, argv) -> None:
        super().__init__(argv, "Failed to get stdin")


class StdinWriteFailed(CommandError):
    """Writing the input payload to the child was interrupted."""

    def __init__(self, argv, cause: OSError) -> None:
        self.cause = cause
        super().__init__(argv, f"Failed to write stdin of {argv[0]}: {cause}")


class CommandFailed(CommandError):
    """The child exited with a non-zero status while checking was enabled."""

    def __init__(self, argv, returncode: int, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        message = stderr.strip() or f"{' '.join(argv)} exited with status {returncode}"
        super().__init__(argv, message)


def pretty_duration(elapsed) -> str:
    """Format an elapsed time as e.g. ``1hr 1min 1sec``.

    Accepts seconds (int or float) or a ``timedelta``. Sub-second precision
    is truncated and leading zero units are dropped.
    """
    if isinstance(elapsed, timedelta):
        elapsed = elapsed.total_seconds()
    total = max(int(elapsed), 0)

    seconds = total % MINUTE
    minutes = total % HOUR // MINUTE
    hours = total % DAY // HOUR
    days = total // DAY

    if days:
        return f"{days}d {hours}hr {minutes}min {seconds}sec"
    if hours:
        return f"{hours}hr {minutes}min {seconds}sec"
    if minutes:
        return f"{minutes}min {seconds}sec"
    return f"{seconds}sec"


def log_heading(caption: str) -> str:
    """Render a banner line for the log."""
    return f"--[ {caption} ]--"
