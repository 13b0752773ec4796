"""Configuration system for backuper.

This module provides TOML-based configuration loading, the built-in
backup tables, and repository credentials taken from the environment.
"""

from ..__util__ import ConfigError, ConfigMissing
from .loader import find_config_file, load_config, load_repositories
from .schema import (
    BackupDir,
    BackupDirKind,
    Config,
    DestinationConfig,
    EmailConfig,
    GlobalConfig,
    ProfileConfig,
    RepositoryConfig,
    WslConfig,
)

__all__ = [
    "BackupDir",
    "BackupDirKind",
    "Config",
    "DestinationConfig",
    "EmailConfig",
    "GlobalConfig",
    "ProfileConfig",
    "RepositoryConfig",
    "WslConfig",
    "load_config",
    "load_repositories",
    "find_config_file",
    "ConfigError",
    "ConfigMissing",
]
