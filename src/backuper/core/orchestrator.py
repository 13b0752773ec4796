"""Run orchestration: planning the task sequence of a profile and running it."""

import getpass
import logging
import tempfile
import time
from functools import partial
from pathlib import Path

from filelock import FileLock, Timeout

from .. import __util__
from ..config.schema import ProfileConfig, RepositoryConfig
from .execution import RunReport, Task, execute_tasks
from .operations import backup_filesystem, run_upgrades
from .wsl import backup_wsl

logger = logging.getLogger(__name__)


def default_lock_path() -> Path:
    return Path(tempfile.gettempdir()) / f".backuper.{getpass.getuser()}.lock"


def plan_tasks(
    profile: ProfileConfig,
    repositories: list[tuple[RepositoryConfig, RepositoryConfig]],
    exclude_patterns: list[str],
    restic_binary: str = "restic",
) -> list[Task]:
    """Build the ordered task list of one run.

    Upgrades come first, then for each destination the filesystem backup
    and, when configured, the WSL backup.
    """
    tasks = []

    if profile.upgrade_commands:
        tasks.append(
            Task(f"{profile.label} Upgrades", partial(run_upgrades, profile.upgrade_commands))
        )

    for host_repo, wsl_repo in repositories:
        tasks.append(
            Task(
                f"Backup {profile.label} Filesystem ({host_repo.label})",
                partial(
                    backup_filesystem,
                    profile.backup_dirs,
                    host_repo,
                    profile.tag,
                    exclude_patterns,
                    profile.extra_backup_args,
                    restic_binary,
                ),
            )
        )
        if profile.wsl is not None and profile.wsl.enabled:
            tasks.append(
                Task(
                    f"Backup WSL ({wsl_repo.label})",
                    partial(backup_wsl, wsl_repo, profile.wsl, exclude_patterns),
                )
            )

    return tasks


def run_backup(tasks: list[Task], lock_path: Path | None = None) -> RunReport:
    """Run ``tasks`` while holding the run lock.

    Raises:
        RunLocked: If another run holds the lock
    """
    lock_path = lock_path or default_lock_path()
    lock = FileLock(lock_path, timeout=0)
    try:
        lock.acquire()
    except Timeout:
        raise __util__.RunLocked(f"Another backup run holds {lock_path}") from None

    try:
        logger.info(__util__.log_heading(f"Started at {time.ctime()}"))
        report = execute_tasks(tasks)
        logger.info(__util__.log_heading(f"Finished at {time.ctime()}"))
    finally:
        lock.release()

    if report.failed:
        logger.warning(
            "Completed with errors: %d succeeded, %d failed", report.passed, report.failed
        )
    else:
        logger.info("All %d task(s) completed successfully", report.passed)
    return report
