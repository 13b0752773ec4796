"""Tests for configuration schema objects."""

import dataclasses

import pytest

from backuper.config.defaults import default_profiles
from backuper.config.schema import BackupDir, BackupDirKind, Config, RepositoryConfig


class TestBackupDir:
    """Tests for BackupDir dataclass."""

    def test_home_constructor(self):
        d = BackupDir.home("Documents")
        assert d.kind is BackupDirKind.HOME
        assert d.path == "Documents"

    def test_root_constructor(self):
        assert BackupDir.root("/etc").kind is BackupDirKind.ROOT

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            BackupDir.home("a").path = "b"


class TestRepositoryConfig:
    """Tests for RepositoryConfig env pair derivation."""

    def test_base_pairs_only(self, local_repo):
        assert local_repo.env_pairs() == [
            ("RESTIC_REPOSITORY", "/mnt/backup/restic"),
            ("RESTIC_PASSWORD", "hunter2"),
        ]

    def test_full_cloud_credentials(self, cloud_repo):
        pairs = cloud_repo.env_pairs()
        assert len(pairs) == 4
        assert [name for name, _ in pairs] == [
            "RESTIC_REPOSITORY",
            "RESTIC_PASSWORD",
            "AWS_ACCESS_KEY_ID",
            "AWS_SECRET_ACCESS_KEY",
        ]

    @pytest.mark.parametrize(
        "key_id, secret",
        [("AKIAEXAMPLE", None), (None, "secretkey"), ("", "secretkey")],
    )
    def test_partial_cloud_credentials_dropped(self, key_id, secret):
        repo = RepositoryConfig(
            repository="s3:bucket",
            password="pw",
            aws_access_key_id=key_id,
            aws_secret_access_key=secret,
        )
        assert len(repo.env_pairs()) == 2
        assert repo.has_cloud_credentials is False

    def test_repr_hides_secrets(self, cloud_repo):
        text = repr(cloud_repo)
        assert "hunter2" not in text
        assert "secretkey" not in text
        assert "AKIAEXAMPLE" not in text
        assert "s3.amazonaws.com" in text

    def test_label_prefers_name(self, cloud_repo):
        assert cloud_repo.label == "Cloud"
        assert RepositoryConfig("/srv/restic", "pw").label == "/srv/restic"

    def test_frozen(self, local_repo):
        with pytest.raises(dataclasses.FrozenInstanceError):
            local_repo.password = "other"


class TestDefaultProfiles:
    """Tests for the built-in tables."""

    def test_profiles_present(self):
        profiles = default_profiles()
        assert set(profiles) == {"windows", "macos"}

    def test_windows_has_local_and_cloud(self):
        windows = default_profiles()["windows"]
        assert [d.name for d in windows.destinations] == ["Local", "Cloud"]
        assert windows.destinations[0].repository == "Z:\\restic"
        assert windows.destinations[0].wsl_repository == "/mnt/c/restic"
        assert windows.extra_backup_args == ["--use-fs-snapshot"]
        assert windows.wsl is not None

    def test_windows_wsl_backs_up_all_homes(self):
        assert default_profiles()["windows"].wsl.backup_path == "/home"

    def test_macos_has_no_wsl(self):
        macos = default_profiles()["macos"]
        assert macos.wsl is None
        assert macos.upgrade_commands == [["brew", "upgrade"]]

    def test_profiles_are_independent_copies(self):
        first = default_profiles()
        first["macos"].backup_dirs.append(BackupDir.root("/tmp"))
        assert BackupDir.root("/tmp") not in default_profiles()["macos"].backup_dirs

    def test_get_profile_unknown(self):
        with pytest.raises(KeyError, match="linux"):
            Config(profiles=default_profiles()).get_profile("linux")
