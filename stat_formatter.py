"""Render MetadataRecord models as stat(1)-style text."""

import stat
from datetime import datetime
from models import FileType, MetadataRecord


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S%z"
UNREADABLE_TARGET = "<unable to read target>"

FILE_TYPE_LABELS: dict[str, tuple[str, str]] = {
    "fifo": ("named fifo", "p"),
    "character_device": ("character device", "c"),
    "directory": ("directory", "d"),
    "block_device": ("block device", "b"),
    "regular": ("regular file", "-"),
    "symlink": ("symbolic link", "l"),
    "socket": ("socket", "s"),
    "door": ("door", "D"),
    "event_port": ("event port", "P"),
}
UNKNOWN_TYPE = ("<unknown>", "?")


def file_type_label(file_type: FileType) -> str:
    """Human-readable label for a file type."""
    return FILE_TYPE_LABELS.get(file_type, UNKNOWN_TYPE)[0]


def file_type_char(file_type: FileType) -> str:
    """Single type character used in the symbolic mode."""
    return FILE_TYPE_LABELS.get(file_type, UNKNOWN_TYPE)[1]


def _exec_char(mode: int, exec_bit: int, special_bit: int, special: str) -> str:
    # Lowercase when execute is also set, uppercase when it is not
    if mode & special_bit:
        return special if mode & exec_bit else special.upper()
    return "x" if mode & exec_bit else "-"


def permission_bits(mode: int) -> int:
    """Owner, group and other rwx bits, without setuid, setgid or sticky."""
    return mode & (stat.S_IRWXU | stat.S_IRWXG | stat.S_IRWXO)


def format_permissions(mode: int, file_type: FileType) -> str:
    """Convert numeric file mode to a 10-character symbolic mode string."""
    # Owner permissions
    owner = ""
    owner += "r" if mode & stat.S_IRUSR else "-"
    owner += "w" if mode & stat.S_IWUSR else "-"
    owner += _exec_char(mode, stat.S_IXUSR, stat.S_ISUID, "s")

    # Group permissions
    group = ""
    group += "r" if mode & stat.S_IRGRP else "-"
    group += "w" if mode & stat.S_IWGRP else "-"
    group += _exec_char(mode, stat.S_IXGRP, stat.S_ISGID, "s")

    # Other permissions
    other = ""
    other += "r" if mode & stat.S_IROTH else "-"
    other += "w" if mode & stat.S_IWOTH else "-"
    other += _exec_char(mode, stat.S_IXOTH, stat.S_ISVTX, "t")

    return f"{file_type_char(file_type)}{owner}{group}{other}"


def format_timestamp(dt: datetime) -> str:
    """Format an aware datetime as 'YYYY-MM-DD HH:MM:SS+ZZZZ'."""
    return dt.strftime(TIMESTAMP_FORMAT)


def format_identity(record: MetadataRecord) -> str:
    """Build the File: line, with the link target for symlinks."""
    if not record.is_symlink:
        return f"  File: '{record.path}'"
    if record.target is None:
        return f"  File: '{record.path}' -> {UNREADABLE_TARGET}"
    return f"  File: '{record.path}' -> '{record.target}'"


def format_record(record: MetadataRecord) -> str:
    """Render the full multi-line report for one record."""
    lines = [format_identity(record)]

    lines.append(
        f"  Size: {record.size:<10d}\tBlocks: {record.blocks:<10d} "
        f"IO Block: {record.block_size} {file_type_label(record.file_type)}"
    )

    device_line = (
        f"Device: {record.device:x}h/{record.device}d "
        f"Inode: {record.inode:<10d} Links: {record.links}"
    )
    if record.is_device:
        device_line += f" Device type: {record.rdev_major},{record.rdev_minor}"
    lines.append(device_line)

    lines.append(
        f"Access: ({permission_bits(record.mode):04o}/"
        f"{format_permissions(record.mode, record.file_type)})  "
        f"Uid: ({record.uid:5d}/{record.user:>8})   "
        f"Gid: ({record.gid:5d}/{record.group:>8})"
    )

    lines.append(f"Access: {format_timestamp(record.atime)}")
    lines.append(f"Modify: {format_timestamp(record.mtime)}")
    lines.append(f"Change: {format_timestamp(record.ctime)}")

    return "\n".join(lines)
