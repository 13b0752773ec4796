"""Core backup operations for backuper.

Command running, task execution and the per-profile run sequence.
"""

from .command import CommandSpec, OutputMode, run_command
from .execution import RunReport, Task, TaskResult, execute_tasks, run_task
from .operations import backup_filesystem, run_upgrades
from .orchestrator import plan_tasks, run_backup
from .targets import build_exclude_args, resolve_targets
from .wsl import backup_wsl, build_wslenv

__all__ = [
    "CommandSpec",
    "OutputMode",
    "run_command",
    "Task",
    "TaskResult",
    "RunReport",
    "run_task",
    "execute_tasks",
    "backup_filesystem",
    "run_upgrades",
    "plan_tasks",
    "run_backup",
    "resolve_targets",
    "build_exclude_args",
    "backup_wsl",
    "build_wslenv",
]
