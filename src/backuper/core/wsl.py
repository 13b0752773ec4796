"""Backing up the WSL filesystem from a Windows host.

Processes started through ``wsl.exe`` only see the Windows environment
variables whose names are listed in ``WSLENV``. Credentials are forwarded
by registering their names there and putting the values in the
environment of the ``wsl.exe`` process itself.
"""

import logging
import os
from collections.abc import Iterable, Mapping

from ..__util__ import CredentialForwardFailure
from ..config.schema import RepositoryConfig, WslConfig
from .command import CommandSpec, run_command
from .targets import build_exclude_args

logger = logging.getLogger(__name__)

WSLENV = "WSLENV"
WSL_EXE = "wsl.exe"


def _entry_name(entry: str) -> str:
    # WSLENV entries may carry flags, e.g. "PATH/l"
    return entry.split("/", 1)[0]


def build_wslenv(existing: str | None, names: Iterable[str]) -> str:
    """Return ``existing`` with ``names`` and WSLENV itself appended.

    Every name appears once; entries already present keep their flags.
    """
    entries = []
    seen = set()
    for entry in (existing or "").split(":"):
        if entry and _entry_name(entry) not in seen:
            entries.append(entry)
            seen.add(_entry_name(entry))

    for name in [*names, WSLENV]:
        if not name or any(c in name for c in ":/="):
            raise CredentialForwardFailure(f"Cannot forward variable {name!r} into WSL")
        if name not in seen:
            entries.append(name)
            seen.add(name)

    return ":".join(entries)


def wsl_backup_env(
    repo: RepositoryConfig,
    environ: Mapping[str, str] | None = None,
) -> list[tuple[str, str]]:
    """Credential pairs plus the updated WSLENV for the ``wsl.exe`` process."""
    if environ is None:
        environ = os.environ

    pairs = repo.env_pairs()
    wslenv = build_wslenv(environ.get(WSLENV), [name for name, _ in pairs])
    logger.debug("WSLENV for backup: %s", wslenv)
    return [*pairs, (WSLENV, wslenv)]


def build_wsl_backup_argv(wsl: WslConfig, exclude_patterns: Iterable[str]) -> list[str]:
    return [
        WSL_EXE,
        # No shell inside WSL, so exclude globs reach restic unexpanded
        "--shell-type",
        "none",
        wsl.restic_path,
        "backup",
        wsl.backup_path,
        "--tag",
        wsl.tag,
        *build_exclude_args(exclude_patterns),
    ]


def backup_wsl(
    repo: RepositoryConfig,
    wsl: WslConfig,
    exclude_patterns: Iterable[str],
) -> None:
    """Back up the WSL filesystem to ``repo`` with restic running inside WSL."""
    # A leftover `restic mount` would get backed up through its mountpoint;
    # "no process found" is fine
    run_command(CommandSpec((WSL_EXE, "killall", "restic"), check=False))

    env = wsl_backup_env(repo)
    run_command(CommandSpec(tuple(build_wsl_backup_argv(wsl, exclude_patterns)), env=tuple(env)))
    logger.info("Backed up WSL filesystem to %s", repo.label)
