"""Configuration schema definitions using dataclasses.

Defines the backup tables per operating system and the repository
credentials derived from the environment.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class BackupDirKind(Enum):
    """Where a backup directory is anchored."""

    HOME = "home"  # relative to the current user's home directory
    ROOT = "root"  # absolute path, used as is


@dataclass(frozen=True)
class BackupDir:
    """A directory to back up, relative to home or absolute."""

    kind: BackupDirKind
    path: str

    @classmethod
    def home(cls, path: str) -> "BackupDir":
        return cls(BackupDirKind.HOME, path)

    @classmethod
    def root(cls, path: str) -> "BackupDir":
        return cls(BackupDirKind.ROOT, path)


@dataclass(frozen=True)
class RepositoryConfig:
    """A restic repository and the credentials needed to open it.

    Attributes:
        repository: Repository URI passed as RESTIC_REPOSITORY
        password: Repository password passed as RESTIC_PASSWORD
        name: Display label used in task names and logs
        aws_access_key_id: Optional S3 access key id
        aws_secret_access_key: Optional S3 secret key
    """

    repository: str
    password: str = field(repr=False)
    name: str = ""
    aws_access_key_id: Optional[str] = field(default=None, repr=False)
    aws_secret_access_key: Optional[str] = field(default=None, repr=False)

    @property
    def label(self) -> str:
        return self.name or self.repository

    @property
    def has_cloud_credentials(self) -> bool:
        return bool(self.aws_access_key_id) and bool(self.aws_secret_access_key)

    def env_pairs(self) -> list[tuple[str, str]]:
        """Environment variables restic needs to open this repository.

        The AWS pair is all-or-nothing: a half-configured pair is dropped.
        """
        pairs = [
            ("RESTIC_REPOSITORY", self.repository),
            ("RESTIC_PASSWORD", self.password),
        ]
        if self.has_cloud_credentials:
            pairs.append(("AWS_ACCESS_KEY_ID", self.aws_access_key_id))
            pairs.append(("AWS_SECRET_ACCESS_KEY", self.aws_secret_access_key))
        return pairs


@dataclass
class DestinationConfig:
    """A backup destination of a profile.

    Attributes:
        name: Display label, e.g. "Local" or "Cloud"
        repository: Literal repository URI; None reads BACKUPER_RESTIC_REPOSITORY
        wsl_repository: Repository URI as seen from inside WSL (defaults to repository)
        cloud_credentials: Attach the AWS credentials from the environment
    """

    name: str
    repository: Optional[str] = None
    wsl_repository: Optional[str] = None
    cloud_credentials: bool = False


@dataclass
class WslConfig:
    """Backup of the WSL filesystem from a Windows host.

    Attributes:
        enabled: Whether to back up WSL at all
        restic_path: restic binary inside WSL
        backup_path: Directory inside WSL to back up
        tag: Snapshot tag
    """

    enabled: bool = True
    restic_path: str = "/home/linuxbrew/.linuxbrew/bin/restic"
    backup_path: str = "/home"
    tag: str = "WSL"


@dataclass
class ProfileConfig:
    """Everything a run does for one operating system.

    Attributes:
        label: Pretty OS name used in task names and notifications
        tag: Snapshot tag for the filesystem backup
        backup_dirs: Ordered directories to back up
        upgrade_commands: Package upgrade commands run before backing up
        extra_backup_args: Extra restic arguments for the filesystem backup
        destinations: Repositories to back up to, in order
        wsl: WSL backup settings (Windows only)
    """

    label: str
    tag: str
    backup_dirs: list[BackupDir] = field(default_factory=list)
    upgrade_commands: list[list[str]] = field(default_factory=list)
    extra_backup_args: list[str] = field(default_factory=list)
    destinations: list[DestinationConfig] = field(default_factory=list)
    wsl: Optional[WslConfig] = None


@dataclass
class EmailConfig:
    """SMTP settings for the notification email."""

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    sender_name: str = "Backup Script"
    recipient_name: str = ""
    recipient: Optional[str] = None


@dataclass
class GlobalConfig:
    """Global configuration settings.

    Attributes:
        log_file: Path to a plain log file (None for console only)
        notify: Notification channel: auto, email or log
        restic_binary: restic executable for host backups
        exclude_patterns: Glob patterns excluded from every backup
    """

    log_file: Optional[str] = None
    notify: str = "auto"
    restic_binary: str = "restic"
    exclude_patterns: list[str] = field(default_factory=list)


@dataclass
class Config:
    """Root configuration object."""

    global_config: GlobalConfig = field(default_factory=GlobalConfig)
    email: EmailConfig = field(default_factory=EmailConfig)
    profiles: dict[str, ProfileConfig] = field(default_factory=dict)

    def get_profile(self, os_name: str) -> ProfileConfig:
        try:
            return self.profiles[os_name]
        except KeyError:
            raise KeyError(f"No profile configured for {os_name!r}") from None
