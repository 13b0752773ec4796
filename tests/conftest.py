"""Pytest configuration and shared fixtures."""

import pytest

from backuper.config.schema import (
    BackupDir,
    DestinationConfig,
    ProfileConfig,
    RepositoryConfig,
    WslConfig,
)


@pytest.fixture
def tmp_config_dir(tmp_path):
    """Create a temporary config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def sample_config_toml():
    """Return a sample valid TOML configuration string."""
    return """
[global]
notify = "log"
restic_binary = "/usr/local/bin/restic"
log_file = "/tmp/backuper-test.log"
exclude_patterns = ["node_modules/**", ".DS_Store"]

[email]
smtp_host = "smtp.example.com"
smtp_port = 587
recipient_name = "Backup Owner"

[macos]
tag = "mac"
upgrade_commands = [["brew", "upgrade"], ["mas", "upgrade"]]
backup_dirs = [
    { home = "Documents" },
    { root = "/Volumes/Photos" },
]

[[macos.destinations]]
name = "Cloud"
cloud_credentials = true

[[macos.destinations]]
name = "External"
repository = "/Volumes/Backup/restic"

[windows.wsl]
backup_path = "/home/tester"
"""


@pytest.fixture
def minimal_config_toml():
    """Return a minimal valid TOML configuration string."""
    return """
[global]
notify = "log"
"""


@pytest.fixture
def config_file(tmp_config_dir, sample_config_toml):
    """Create a temporary config file with sample content."""
    config_path = tmp_config_dir / "config.toml"
    config_path.write_text(sample_config_toml)
    return config_path


@pytest.fixture
def minimal_config_file(tmp_config_dir, minimal_config_toml):
    """Create a temporary config file with minimal content."""
    config_path = tmp_config_dir / "minimal.toml"
    config_path.write_text(minimal_config_toml)
    return config_path


@pytest.fixture
def backup_env():
    """Environment with every backuper variable set."""
    return {
        "BACKUPER_RESTIC_REPOSITORY": "s3:s3.amazonaws.com/bucket/restic",
        "BACKUPER_RESTIC_PASSWORD": "hunter2",
        "BACKUPER_AWS_ACCESS_KEY_ID": "AKIAEXAMPLE",
        "BACKUPER_AWS_SECRET_ACCESS_KEY": "secretkey",
    }


@pytest.fixture
def cloud_repo():
    """A repository with full cloud credentials."""
    return RepositoryConfig(
        repository="s3:s3.amazonaws.com/bucket/restic",
        password="hunter2",
        name="Cloud",
        aws_access_key_id="AKIAEXAMPLE",
        aws_secret_access_key="secretkey",
    )


@pytest.fixture
def local_repo():
    """A repository without cloud credentials."""
    return RepositoryConfig(repository="/mnt/backup/restic", password="hunter2", name="Local")


@pytest.fixture
def test_profile():
    """A small profile that needs no real home directory entries."""
    return ProfileConfig(
        label="Testix",
        tag="Testix",
        backup_dirs=[BackupDir.root("/data/a"), BackupDir.root("/data/b")],
        upgrade_commands=[["pkg", "upgrade"]],
        destinations=[
            DestinationConfig(name="Local", repository="/mnt/backup/restic"),
            DestinationConfig(name="Cloud", cloud_credentials=True),
        ],
    )


@pytest.fixture
def wsl_config():
    return WslConfig(restic_path="/usr/bin/restic", backup_path="/home/tester", tag="WSL")
