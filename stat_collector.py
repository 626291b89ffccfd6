"""Query file system metadata and populate MetadataRecord models."""

import os
import stat
import pwd
import grp
from datetime import datetime, tzinfo
from typing import Callable, Optional
from models import DEVICE_TYPES, SYMLINK_TYPE, FileType, MetadataRecord


UNKNOWN_NAME = "unknown"

# Checked in order; door and event port only ever match on Solaris.
_TYPE_PREDICATES: tuple[tuple[FileType, Callable[[int], bool]], ...] = (
    ("fifo", stat.S_ISFIFO),
    ("character_device", stat.S_ISCHR),
    ("directory", stat.S_ISDIR),
    ("block_device", stat.S_ISBLK),
    ("regular", stat.S_ISREG),
    ("symlink", stat.S_ISLNK),
    ("socket", stat.S_ISSOCK),
    ("door", stat.S_ISDOOR),
    ("event_port", stat.S_ISPORT),
)


def classify(mode: int) -> FileType:
    """Map the type bits of a st_mode value to a FileType."""
    for file_type, predicate in _TYPE_PREDICATES:
        if predicate(mode):
            return file_type
    return "unknown"


def resolve_user(uid: int) -> str:
    """Look up the user name for a uid, or 'unknown'."""
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return UNKNOWN_NAME


def resolve_group(gid: int) -> str:
    """Look up the group name for a gid, or 'unknown'."""
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return UNKNOWN_NAME


def read_link_target(path: str) -> Optional[str]:
    """Return the symlink target, or None if it cannot be read."""
    try:
        return os.readlink(path)
    except OSError:
        return None


def local_time(timestamp: float, tz: Optional[tzinfo] = None) -> datetime:
    """Convert a Unix timestamp to an aware datetime.

    Uses the process local timezone unless ``tz`` is given.
    """
    if tz is not None:
        return datetime.fromtimestamp(timestamp, tz=tz)
    return datetime.fromtimestamp(timestamp).astimezone()


def query_metadata(
    path: str,
    follow_symlinks: bool = False,
    tz: Optional[tzinfo] = None,
) -> MetadataRecord:
    """Collect metadata for a single path.

    With ``follow_symlinks`` the final symlink component is resolved,
    otherwise the link itself is reported. Raises OSError if the path
    cannot be queried.
    """
    st = os.stat(path, follow_symlinks=follow_symlinks)
    file_type = classify(st.st_mode)

    record_data = {
        "path": path,
        "file_type": file_type,
        "mode": st.st_mode,
        "size": st.st_size,
        "blocks": getattr(st, "st_blocks", 0),
        "block_size": getattr(st, "st_blksize", 0),
        "device": st.st_dev,
        "inode": st.st_ino,
        "links": st.st_nlink,
        "uid": st.st_uid,
        "user": resolve_user(st.st_uid),
        "gid": st.st_gid,
        "group": resolve_group(st.st_gid),
        "atime": local_time(st.st_atime, tz),
        "mtime": local_time(st.st_mtime, tz),
        "ctime": local_time(st.st_ctime, tz),
    }

    if file_type in DEVICE_TYPES:
        record_data["rdev_major"] = os.major(st.st_rdev)
        record_data["rdev_minor"] = os.minor(st.st_rdev)

    if file_type == SYMLINK_TYPE:
        record_data["target"] = read_link_target(path)

    return MetadataRecord(**record_data)
