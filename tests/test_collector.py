from __future__ import annotations

import os
import stat
from datetime import timedelta, timezone
from pathlib import Path

import pytest

import stat_collector
from stat_collector import classify, local_time, query_metadata


@pytest.fixture
def test_directory(tmp_path):
    """Create a directory with a file, an executable and two symlinks."""
    (tmp_path / "data").mkdir()
    (tmp_path / "README.md").write_text("# Test README\n")
    (tmp_path / "script.sh").write_text("#!/bin/bash\necho 'test'\n")
    (tmp_path / "script.sh").chmod(0o755)
    (tmp_path / "link_to_readme").symlink_to("README.md")
    (tmp_path / "dangling").symlink_to("does-not-exist")
    return tmp_path


class TestClassify:
    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            (stat.S_IFREG | 0o644, "regular"),
            (stat.S_IFDIR | 0o755, "directory"),
            (stat.S_IFLNK | 0o777, "symlink"),
            (stat.S_IFCHR | 0o666, "character_device"),
            (stat.S_IFBLK | 0o660, "block_device"),
            (stat.S_IFIFO | 0o644, "fifo"),
            (stat.S_IFSOCK | 0o755, "socket"),
            (0o644, "unknown"),
        ],
    )
    def test_mode_type_bits(self, mode, expected):
        assert classify(mode) == expected


class TestQueryMetadata:
    def test_regular_file(self, test_directory):
        path = str(test_directory / "README.md")
        record = query_metadata(path)

        assert record.path == path
        assert record.file_type == "regular"
        assert record.size == len("# Test README\n")
        assert record.target is None
        assert record.rdev_major is None

    def test_directory(self, test_directory):
        record = query_metadata(str(test_directory / "data"))
        assert record.file_type == "directory"

    def test_matches_os_stat(self, test_directory):
        path = test_directory / "script.sh"
        st = path.stat()
        record = query_metadata(str(path))

        assert record.inode == st.st_ino
        assert record.device == st.st_dev
        assert record.links == st.st_nlink
        assert record.uid == st.st_uid
        assert record.gid == st.st_gid
        assert stat.S_IMODE(record.mode) == 0o755

    def test_symlink_not_followed(self, test_directory):
        record = query_metadata(str(test_directory / "link_to_readme"))
        assert record.file_type == "symlink"
        assert record.is_symlink
        assert not record.is_device
        assert record.target == "README.md"

    def test_symlink_followed(self, test_directory):
        record = query_metadata(str(test_directory / "link_to_readme"), follow_symlinks=True)
        assert record.file_type == "regular"
        assert record.target is None

    def test_dangling_symlink_without_dereference(self, test_directory):
        record = query_metadata(str(test_directory / "dangling"))
        assert record.file_type == "symlink"
        assert record.target == "does-not-exist"

    def test_dangling_symlink_with_dereference_raises(self, test_directory):
        with pytest.raises(FileNotFoundError):
            query_metadata(str(test_directory / "dangling"), follow_symlinks=True)

    def test_missing_path_raises(self, test_directory):
        with pytest.raises(OSError):
            query_metadata(str(test_directory / "missing"))

    def test_unreadable_link_target(self, test_directory, monkeypatch):
        def fail_readlink(path):
            raise OSError(13, "Permission denied")

        monkeypatch.setattr(stat_collector.os, "readlink", fail_readlink)
        record = query_metadata(str(test_directory / "link_to_readme"))
        assert record.file_type == "symlink"
        assert record.target is None

    def test_fifo(self, tmp_path):
        fifo = tmp_path / "pipe"
        os.mkfifo(fifo)
        assert query_metadata(str(fifo)).file_type == "fifo"

    @pytest.mark.skipif(not Path("/dev/null").exists(), reason="/dev/null not available")
    def test_character_device_numbers(self):
        st = os.stat("/dev/null")
        record = query_metadata("/dev/null")

        assert record.file_type == "character_device"
        assert record.rdev_major == os.major(st.st_rdev)
        assert record.rdev_minor == os.minor(st.st_rdev)
        assert record.is_device
        assert not record.is_symlink


class TestIdentityResolution:
    def test_unknown_user(self, test_directory, monkeypatch):
        def no_such_user(uid):
            raise KeyError(uid)

        monkeypatch.setattr(stat_collector.pwd, "getpwuid", no_such_user)
        record = query_metadata(str(test_directory / "README.md"))

        assert record.user == "unknown"
        assert record.uid == (test_directory / "README.md").stat().st_uid

    def test_unknown_group(self, test_directory, monkeypatch):
        def no_such_group(gid):
            raise KeyError(gid)

        monkeypatch.setattr(stat_collector.grp, "getgrgid", no_such_group)
        record = query_metadata(str(test_directory / "README.md"))

        assert record.group == "unknown"


class TestTimestamps:
    def test_local_time_with_fixed_offset(self):
        dt = local_time(1517501132, tz=timezone(timedelta(hours=-5)))
        assert dt.strftime("%Y-%m-%d %H:%M:%S%z") == "2018-02-01 11:05:32-0500"

    def test_local_time_is_aware(self):
        assert local_time(0).tzinfo is not None

    def test_query_uses_given_timezone(self, test_directory):
        path = test_directory / "README.md"
        os.utime(path, (1517501132, 1516683698))
        record = query_metadata(str(path), tz=timezone(timedelta(hours=-5)))

        assert record.atime.strftime("%Y-%m-%d %H:%M:%S%z") == "2018-02-01 11:05:32-0500"
        assert record.mtime.strftime("%Y-%m-%d %H:%M:%S%z") == "2018-01-23 00:01:38-0500"
