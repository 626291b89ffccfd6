"""Pydantic models for file metadata records."""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, ConfigDict


FileType = Literal[
    "regular",
    "directory",
    "symlink",
    "character_device",
    "block_device",
    "fifo",
    "socket",
    "door",
    "event_port",
    "unknown",
]

DEVICE_TYPES: tuple[FileType, ...] = ("character_device", "block_device")
SYMLINK_TYPE: FileType = "symlink"


class MetadataRecord(BaseModel):
    """Metadata reported by the operating system for a single path."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "path": "/",
                    "file_type": "directory",
                    "mode": 0o40755,
                    "size": 4096,
                    "blocks": 8,
                    "block_size": 4096,
                    "device": 66305,
                    "inode": 2,
                    "links": 19,
                    "uid": 0,
                    "user": "root",
                    "gid": 0,
                    "group": "root",
                    "atime": "2018-02-01T11:05:32-05:00",
                    "mtime": "2018-01-23T00:01:38-05:00",
                    "ctime": "2018-01-23T00:01:38-05:00",
                },
                {
                    "path": "/tmp/link",
                    "file_type": "symlink",
                    "mode": 0o120777,
                    "size": 11,
                    "blocks": 0,
                    "block_size": 4096,
                    "device": 66305,
                    "inode": 1311,
                    "links": 1,
                    "uid": 1000,
                    "user": "user",
                    "gid": 1000,
                    "group": "group",
                    "atime": "2025-01-15T10:31:02+00:00",
                    "mtime": "2025-01-15T10:31:02+00:00",
                    "ctime": "2025-01-15T10:31:02+00:00",
                    "target": "/etc/hosts",
                },
            ]
        },
    )

    path: str = Field(..., description="Path as given on the command line")
    file_type: FileType = Field(..., description="Entry type derived from the mode bits")
    mode: int = Field(..., description="Raw st_mode (type and permission bits)")
    size: int = Field(..., description="Size in bytes")
    blocks: int = Field(..., description="Number of allocated blocks")
    block_size: int = Field(..., description="Preferred I/O block size")
    device: int = Field(..., description="Identifier of the device holding the entry")
    inode: int = Field(..., description="Inode number")
    links: int = Field(..., description="Hard link count")
    uid: int = Field(..., description="Owner user id")
    user: str = Field(..., description="Owner user name, or 'unknown'")
    gid: int = Field(..., description="Owner group id")
    group: str = Field(..., description="Owner group name, or 'unknown'")
    atime: datetime = Field(..., description="Last access, local time")
    mtime: datetime = Field(..., description="Last modification, local time")
    ctime: datetime = Field(..., description="Last status change, local time")
    rdev_major: Optional[int] = Field(None, description="Major number (device files only)")
    rdev_minor: Optional[int] = Field(None, description="Minor number (device files only)")
    target: Optional[str] = Field(None, description="Symlink target (None if unreadable)")

    @property
    def is_symlink(self) -> bool:
        return self.file_type == SYMLINK_TYPE

    @property
    def is_device(self) -> bool:
        return self.file_type in DEVICE_TYPES
