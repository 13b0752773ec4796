"""Core backup operations: package upgrades and host filesystem backups."""

import logging
from collections.abc import Iterable, Sequence

from ..config.schema import BackupDir, RepositoryConfig
from .command import CommandSpec, OutputMode, run_command
from .targets import build_exclude_args, resolve_targets

logger = logging.getLogger(__name__)


def run_upgrades(commands: Iterable[Sequence[str]]) -> None:
    """Run package upgrade commands in order, stopping at the first failure.

    Output is inherited so upgrade progress shows on the console.
    """
    for cmd in commands:
        run_command(CommandSpec(tuple(cmd), output=OutputMode.INHERIT))


def build_backup_argv(
    tag: str,
    exclude_patterns: Iterable[str],
    extra_args: Iterable[str] = (),
    restic_binary: str = "restic",
) -> list[str]:
    """restic arguments for a backup reading its paths from stdin."""
    return [
        restic_binary,
        "backup",
        "--files-from",
        "-",
        *extra_args,
        "--tag",
        tag,
        *build_exclude_args(exclude_patterns),
    ]


def backup_filesystem(
    backup_dirs: Iterable[BackupDir],
    repo: RepositoryConfig,
    tag: str,
    exclude_patterns: Iterable[str],
    extra_args: Iterable[str] = (),
    restic_binary: str = "restic",
) -> None:
    """Back up ``backup_dirs`` to ``repo``.

    The resolved paths are fed to restic on stdin, one per line.
    """
    argv = build_backup_argv(tag, exclude_patterns, extra_args, restic_binary)
    paths = resolve_targets(backup_dirs)
    logger.debug("Backing up %d path(s) to %s", len(paths), repo.label)

    run_command(
        CommandSpec(tuple(argv), env=tuple(repo.env_pairs()), input="\n".join(paths))
    )
    logger.info("Backed up local filesystem to %s", repo.label)
