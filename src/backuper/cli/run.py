"""Run command: upgrade packages, back up, and notify."""

import argparse
import logging

from .. import __util__
from ..__logger__ import create_logger
from ..config import ConfigError, find_config_file, load_config, load_repositories
from ..config.schema import Config, ProfileConfig
from ..core.operations import build_backup_argv
from ..core.orchestrator import plan_tasks, run_backup
from ..core.wsl import build_wsl_backup_argv
from ..notify import build_notification, select_notifier
from .common import detect_os, get_log_level

logger = logging.getLogger(__name__)


def execute_run(args: argparse.Namespace) -> int:
    """Execute the run command.

    Per-task failures only show up in the notification; the exit code is
    non-zero only when the run cannot start or the notification fails.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    create_logger(get_log_level(args))

    os_name = getattr(args, "os", None) or detect_os()
    if os_name is None:
        logger.error("No OS provided and the host platform is not supported")
        return 1

    try:
        config_path = find_config_file(getattr(args, "config", None))
        if config_path is not None:
            logger.info("Loading configuration from: %s", config_path)
        config, warnings = load_config(config_path)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return 1

    # Reconfigure now that the log file is known
    if config.global_config.log_file:
        create_logger(get_log_level(args), config.global_config.log_file)

    for warning in warnings:
        logger.warning("Config: %s", warning)

    profile = config.get_profile(os_name)

    if getattr(args, "dry_run", False):
        return _dry_run(config, profile)

    try:
        repositories = load_repositories(profile)
        notifier = select_notifier(
            getattr(args, "notify", None) or config.global_config.notify, config.email
        )
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return 1

    tasks = plan_tasks(
        profile,
        repositories,
        config.global_config.exclude_patterns,
        config.global_config.restic_binary,
    )
    logger.info("Backing up %s: %d task(s)", profile.label, len(tasks))

    try:
        report = run_backup(tasks)
    except __util__.RunLocked as e:
        logger.error("%s", e)
        return 1

    try:
        notifier.send(build_notification(profile.label, report))
    except __util__.NotifyError as e:
        logger.error("%s", e)
        return 1

    return 0


def _dry_run(config: Config, profile: ProfileConfig) -> int:
    """Show what would be done without running anything."""
    print("Dry run mode - showing what would be done:")
    print("")
    print(f"Profile: {profile.label}")

    if profile.upgrade_commands:
        print("  Upgrades:")
        for cmd in profile.upgrade_commands:
            print(f"    $ {' '.join(cmd)}")

    argv = build_backup_argv(
        profile.tag,
        config.global_config.exclude_patterns,
        profile.extra_backup_args,
        config.global_config.restic_binary,
    )
    print("  Backup dirs:")
    for d in profile.backup_dirs:
        print(f"    {d.kind.value}: {d.path}")
    print("  Destinations:")
    for dest in profile.destinations:
        repository = dest.repository or "$BACKUPER_RESTIC_REPOSITORY"
        cloud_note = " (cloud credentials)" if dest.cloud_credentials else ""
        print(f"    -> {dest.name}: {repository}{cloud_note}")
    print(f"  $ {' '.join(argv)}")

    if profile.wsl is not None and profile.wsl.enabled:
        wsl_argv = build_wsl_backup_argv(profile.wsl, config.global_config.exclude_patterns)
        print(f"  $ {' '.join(wsl_argv)}")

    return 0
