"""TOML configuration loading and validation.

Handles config file discovery, parsing, merging over the built-in tables,
and building repository credentials from the environment.
"""

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..__util__ import ConfigError, ConfigMissing
from .defaults import EXCLUDE_PATTERNS, default_profiles
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

logger = logging.getLogger(__name__)

ENV_REPOSITORY = "BACKUPER_RESTIC_REPOSITORY"
ENV_PASSWORD = "BACKUPER_RESTIC_PASSWORD"
ENV_AWS_ACCESS_KEY_ID = "BACKUPER_AWS_ACCESS_KEY_ID"
ENV_AWS_SECRET_ACCESS_KEY = "BACKUPER_AWS_SECRET_ACCESS_KEY"

PROFILE_NAMES = ("windows", "macos")
NOTIFY_MODES = ("auto", "email", "log")


def config_paths() -> list[Path]:
    """Config file search paths in priority order."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return [base / "backuper" / "config.toml"]


def find_config_file(explicit_path: str | None = None) -> Path | None:
    """Find configuration file.

    Args:
        explicit_path: Explicitly specified config path (highest priority)

    Returns:
        Path to config file, or None if not found
    """
    if explicit_path:
        path = Path(explicit_path).expanduser()
        if path.exists():
            return path
        raise ConfigError(f"Config file not found: {explicit_path}")

    for path in config_paths():
        if path.exists():
            return path

    return None


def _parse_backup_dir(data: Any) -> BackupDir:
    """Parse a ``{home = "..."}`` or ``{root = "..."}`` table."""
    if not isinstance(data, dict) or len(data) != 1:
        raise ConfigError(
            f"Backup dir must be a table with exactly one of 'home' or 'root': {data!r}"
        )
    key, value = next(iter(data.items()))
    try:
        kind = BackupDirKind(key)
    except ValueError:
        raise ConfigError(f"Unknown backup dir kind {key!r} (expected 'home' or 'root')")
    if not isinstance(value, str) or not value:
        raise ConfigError(f"Backup dir {key!r} must be a non-empty string")
    return BackupDir(kind, value)


def _table(data: Any, where: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ConfigError(f"'{where}' must be a table, got {type(data).__name__}")
    return data


def _array(data: Any, where: str) -> list[Any]:
    if not isinstance(data, list):
        raise ConfigError(f"'{where}' must be an array, got {type(data).__name__}")
    return data


def _string_list(data: Any, where: str) -> list[str]:
    """Check ``data`` is an array of strings; a bare string is an error."""
    items = _array(data, where)
    for item in items:
        if not isinstance(item, str):
            raise ConfigError(f"'{where}' must contain only strings, got {item!r}")
    return list(items)


def _parse_destination(data: Any, where: str) -> DestinationConfig:
    """Parse destination configuration from dict."""
    data = _table(data, where)
    if "name" not in data:
        raise ConfigError("Destination missing required 'name' field")

    return DestinationConfig(
        name=data["name"],
        repository=data.get("repository"),
        wsl_repository=data.get("wsl_repository"),
        cloud_credentials=data.get("cloud_credentials", False),
    )


def _parse_wsl(data: Any, default: WslConfig | None, where: str) -> WslConfig:
    """Parse WSL configuration from dict."""
    data = _table(data, where)
    base = default or WslConfig()
    return WslConfig(
        enabled=data.get("enabled", base.enabled),
        restic_path=data.get("restic_path", base.restic_path),
        backup_path=data.get("backup_path", base.backup_path),
        tag=data.get("tag", base.tag),
    )


def _parse_profile(name: str, data: Any, default: ProfileConfig) -> ProfileConfig:
    """Parse a profile table, keeping built-in values for missing keys."""
    data = _table(data, name)

    backup_dirs = default.backup_dirs
    if "backup_dirs" in data:
        backup_dirs = [
            _parse_backup_dir(d) for d in _array(data["backup_dirs"], f"{name}.backup_dirs")
        ]

    destinations = default.destinations
    if "destinations" in data:
        where = f"{name}.destinations"
        destinations = [
            _parse_destination(d, where) for d in _array(data["destinations"], where)
        ]
        if not destinations:
            raise ConfigError(f"Profile '{name}' has an empty destinations list")

    wsl = default.wsl
    if "wsl" in data:
        wsl = _parse_wsl(data["wsl"], default.wsl, f"{name}.wsl")

    upgrade_commands = default.upgrade_commands
    if "upgrade_commands" in data:
        where = f"{name}.upgrade_commands"
        upgrade_commands = [
            _string_list(cmd, where) for cmd in _array(data["upgrade_commands"], where)
        ]
        if any(not cmd for cmd in upgrade_commands):
            raise ConfigError(f"Profile '{name}' has an empty upgrade command")

    extra_backup_args = default.extra_backup_args
    if "extra_backup_args" in data:
        extra_backup_args = _string_list(data["extra_backup_args"], f"{name}.extra_backup_args")

    return ProfileConfig(
        label=data.get("label", default.label),
        tag=data.get("tag", default.tag),
        backup_dirs=backup_dirs,
        upgrade_commands=upgrade_commands,
        extra_backup_args=extra_backup_args,
        destinations=destinations,
        wsl=wsl,
    )


def _parse_email(data: Any) -> EmailConfig:
    """Parse email configuration from dict."""
    data = _table(data, "email")
    return EmailConfig(
        smtp_host=data.get("smtp_host", "smtp.gmail.com"),
        smtp_port=data.get("smtp_port", 465),
        sender_name=data.get("sender_name", "Backup Script"),
        recipient_name=data.get("recipient_name", ""),
        recipient=data.get("recipient"),
    )


def _parse_global(data: Any) -> GlobalConfig:
    """Parse global configuration from dict."""
    data = _table(data, "global")
    notify = data.get("notify", "auto")
    if notify not in NOTIFY_MODES:
        raise ConfigError(
            f"Invalid notify mode {notify!r} (expected one of {', '.join(NOTIFY_MODES)})"
        )

    exclude_patterns = list(EXCLUDE_PATTERNS)
    if "exclude_patterns" in data:
        exclude_patterns = _string_list(data["exclude_patterns"], "global.exclude_patterns")

    return GlobalConfig(
        log_file=data.get("log_file"),
        notify=notify,
        restic_binary=data.get("restic_binary", "restic"),
        exclude_patterns=exclude_patterns,
    )


def _validate_config(config: Config) -> list[str]:
    """Validate configuration and return list of warnings."""
    warnings = []

    for name, profile in config.profiles.items():
        if not profile.backup_dirs:
            warnings.append(f"Profile '{name}' has no backup dirs configured")

        names = [d.name for d in profile.destinations]
        if len(names) != len(set(names)):
            warnings.append(f"Profile '{name}' has duplicate destination names")

        if profile.wsl is not None and name != "windows":
            warnings.append(f"Profile '{name}' configures WSL, which only runs on Windows")

    if not config.global_config.exclude_patterns:
        warnings.append("No exclude patterns configured")

    return warnings


def build_config(data: dict[str, Any]) -> tuple[Config, list[str]]:
    """Build a Config from parsed TOML data merged over the built-in tables."""
    unknown = set(data) - {"global", "email", *PROFILE_NAMES}
    if unknown:
        raise ConfigError(f"Unknown configuration section(s): {', '.join(sorted(unknown))}")

    profiles = default_profiles()
    for name in PROFILE_NAMES:
        if name in data:
            profiles[name] = _parse_profile(name, data[name], profiles[name])

    config = Config(
        global_config=_parse_global(data.get("global", {})),
        email=_parse_email(data.get("email", {})),
        profiles=profiles,
    )
    return config, _validate_config(config)


def load_config(path: Path | str | None) -> tuple[Config, list[str]]:
    """Load and validate configuration from a TOML file.

    Args:
        path: Path to configuration file, or None for the built-in defaults

    Returns:
        Tuple of (Config object, list of warnings)

    Raises:
        ConfigError: If config is invalid or cannot be parsed
    """
    if path is None:
        return build_config({})

    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML syntax: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}")

    return build_config(data)


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name)
    if not value:
        raise ConfigMissing(name)
    return value


def load_repositories(
    profile: ProfileConfig,
    environ: Mapping[str, str] | None = None,
) -> list[tuple[RepositoryConfig, RepositoryConfig]]:
    """Build the repositories of every destination from the environment.

    Returns:
        One ``(host repository, WSL repository)`` pair per destination

    Raises:
        ConfigMissing: If a required variable is not set
    """
    if environ is None:
        environ = os.environ

    password = _require(environ, ENV_PASSWORD)

    repositories = []
    for dest in profile.destinations:
        uri = dest.repository or _require(environ, ENV_REPOSITORY)

        key_id = secret = None
        if dest.cloud_credentials:
            key_id = environ.get(ENV_AWS_ACCESS_KEY_ID) or None
            secret = environ.get(ENV_AWS_SECRET_ACCESS_KEY) or None
            if bool(key_id) != bool(secret):
                logger.warning(
                    "Only one of %s and %s is set; cloud credentials ignored for %s",
                    ENV_AWS_ACCESS_KEY_ID,
                    ENV_AWS_SECRET_ACCESS_KEY,
                    dest.name,
                )

        host = RepositoryConfig(
            repository=uri,
            password=password,
            name=dest.name,
            aws_access_key_id=key_id,
            aws_secret_access_key=secret,
        )
        wsl = RepositoryConfig(
            repository=dest.wsl_repository or uri,
            password=password,
            name=dest.name,
            aws_access_key_id=key_id,
            aws_secret_access_key=secret,
        )
        repositories.append((host, wsl))

    return repositories


def generate_example_config() -> str:
    """Generate example configuration file content."""
    return """# backuper configuration
# Secrets are never read from this file. Set them in the environment:
#   BACKUPER_RESTIC_REPOSITORY, BACKUPER_RESTIC_PASSWORD
#   BACKUPER_AWS_ACCESS_KEY_ID, BACKUPER_AWS_SECRET_ACCESS_KEY (optional)
#   BACKUPER_EMAIL_ADDRESS, BACKUPER_EMAIL_PASSWORD (optional)

[global]
notify = "auto"     # auto, email or log
restic_binary = "restic"
# log_file = "~/.local/state/backuper/backup.log"
# exclude_patterns = ["node_modules/**", ".cache/**", ".DS_Store"]

[email]
smtp_host = "smtp.gmail.com"
smtp_port = 465
sender_name = "Backup Script"
# recipient_name = "Your Name"
# recipient = "you@example.com"   # defaults to BACKUPER_EMAIL_ADDRESS

[macos]
tag = "macOS"
upgrade_commands = [["brew", "upgrade"]]
backup_dirs = [
    { home = "Documents" },
    { home = "Pictures" },
    { home = "Library/Application Support/Anki2" },
]

[[macos.destinations]]
name = "Cloud"
cloud_credentials = true    # repository from BACKUPER_RESTIC_REPOSITORY

# A second destination with a literal repository
# [[macos.destinations]]
# name = "External"
# repository = "/Volumes/Backup/restic"

# [windows]
# extra_backup_args = ["--use-fs-snapshot"]
#
# [windows.wsl]
# backup_path = "/home/you"   # your WSL home; defaults to all of /home
# restic_path = "/home/linuxbrew/.linuxbrew/bin/restic"
"""
