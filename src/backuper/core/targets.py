"""Turning backup dir tables into restic arguments."""

from collections.abc import Iterable
from pathlib import Path

from ..__util__ import HomeDirUnavailable
from ..config.schema import BackupDir, BackupDirKind


def home_dir() -> Path:
    """Return the current user's home directory."""
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirUnavailable(str(e)) from e


def resolve_targets(dirs: Iterable[BackupDir], home: Path | str | None = None) -> list[str]:
    """Resolve backup dirs to absolute path strings, preserving order.

    Home-relative entries are joined to ``home`` (looked up only when needed);
    root entries pass through. Raises HomeDirUnavailable without a partial
    result.
    """
    dirs = list(dirs)
    if home is None and any(d.kind is BackupDirKind.HOME for d in dirs):
        home = home_dir()

    paths = []
    for d in dirs:
        if d.kind is BackupDirKind.HOME:
            paths.append(str(Path(home) / d.path))
        else:
            paths.append(d.path)
    return paths


def build_exclude_args(patterns: Iterable[str]) -> list[str]:
    """``[a, b]`` -> ``["--exclude", a, "--exclude", b]``."""
    args = []
    for pattern in patterns:
        args += ["--exclude", pattern]
    return args
