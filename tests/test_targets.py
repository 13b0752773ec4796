"""Tests for backup target resolution and exclude flags."""

from pathlib import Path

import pytest

from backuper.__util__ import HomeDirUnavailable
from backuper.config.defaults import EXCLUDE_PATTERNS
from backuper.config.schema import BackupDir
from backuper.core.targets import build_exclude_args, home_dir, resolve_targets


class TestResolveTargets:
    """Tests for resolve_targets function."""

    def test_home_entries_joined_to_home(self, tmp_path):
        dirs = [BackupDir.home("Documents"), BackupDir.home("Library/Application Support/Anki2")]
        assert resolve_targets(dirs, home=tmp_path) == [
            str(tmp_path / "Documents"),
            str(tmp_path / "Library/Application Support/Anki2"),
        ]

    def test_root_entries_pass_through(self):
        dirs = [BackupDir.root("/etc"), BackupDir.root("C:\\tools")]
        assert resolve_targets(dirs) == ["/etc", "C:\\tools"]

    def test_order_preserved(self, tmp_path):
        dirs = [BackupDir.root("/z"), BackupDir.home("a"), BackupDir.root("/b")]
        assert resolve_targets(dirs, home=tmp_path) == ["/z", str(tmp_path / "a"), "/b"]

    def test_uses_current_home_by_default(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert resolve_targets([BackupDir.home("Music")]) == [str(tmp_path / "Music")]

    def test_home_unavailable_fails_whole_resolution(self, monkeypatch):
        def no_home(cls):
            raise RuntimeError("Could not determine home directory.")

        monkeypatch.setattr(Path, "home", classmethod(no_home))
        dirs = [BackupDir.root("/etc"), BackupDir.home("Documents")]
        with pytest.raises(HomeDirUnavailable, match="Failed to get home dir"):
            resolve_targets(dirs)

    def test_home_not_needed_for_root_only(self, monkeypatch):
        def no_home(cls):
            raise RuntimeError("Could not determine home directory.")

        monkeypatch.setattr(Path, "home", classmethod(no_home))
        assert resolve_targets([BackupDir.root("/etc")]) == ["/etc"]

    def test_home_dir_wraps_key_error(self, monkeypatch):
        def no_home(cls):
            raise KeyError("HOME")

        monkeypatch.setattr(Path, "home", classmethod(no_home))
        with pytest.raises(HomeDirUnavailable):
            home_dir()


class TestBuildExcludeArgs:
    """Tests for build_exclude_args function."""

    def test_interleaves_flag(self):
        assert build_exclude_args(["a", "b", "c"]) == [
            "--exclude",
            "a",
            "--exclude",
            "b",
            "--exclude",
            "c",
        ]

    def test_empty(self):
        assert build_exclude_args([]) == []

    def test_default_patterns_double_length(self):
        args = build_exclude_args(EXCLUDE_PATTERNS)
        assert len(args) == 2 * len(EXCLUDE_PATTERNS)
        assert args[1::2] == EXCLUDE_PATTERNS
        assert set(args[0::2]) == {"--exclude"}
