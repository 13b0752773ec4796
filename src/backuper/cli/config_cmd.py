"""Config command: Configuration management."""

import argparse
import logging

from ..__logger__ import create_logger
from ..config import ConfigError, find_config_file, load_config
from ..config.loader import config_paths, generate_example_config
from .common import get_log_level

logger = logging.getLogger(__name__)


def execute_config(args: argparse.Namespace) -> int:
    """Execute the config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    create_logger(get_log_level(args))

    action = getattr(args, "config_action", None)

    if action == "validate":
        return _validate_config(args)
    elif action == "init":
        return _init_config(args)
    else:
        print("Usage: backuper config <validate|init>")
        return 1


def _validate_config(args: argparse.Namespace) -> int:
    """Validate configuration file."""
    try:
        config_path = find_config_file(getattr(args, "config", None))
        if config_path is None:
            print("No configuration file found, built-in defaults apply.")
            print("Searched locations:")
            for path in config_paths():
                print(f"  {path}")
        else:
            print(f"Validating: {config_path}")

        config, warnings = load_config(config_path)

    except ConfigError as e:
        print(f"Configuration error: {e}")
        return 1

    if warnings:
        print("")
        print("Warnings:")
        for warning in warnings:
            print(f"  - {warning}")

    print("")
    print("Configuration is valid.")
    for name, profile in config.profiles.items():
        print(
            f"  {name}: {len(profile.backup_dirs)} dir(s), "
            f"{len(profile.destinations)} destination(s)"
        )
    print(f"  Exclude patterns: {len(config.global_config.exclude_patterns)}")
    print(f"  Notify: {config.global_config.notify}")

    return 0


def _init_config(args: argparse.Namespace) -> int:
    """Generate example configuration."""
    content = generate_example_config()

    output = getattr(args, "output", None)
    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(content)
            print(f"Example configuration written to: {output}")
        except OSError as e:
            print(f"Error writing file: {e}")
            return 1
    else:
        print(content)

    return 0
