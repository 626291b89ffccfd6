#!/usr/bin/env -S uv run
# /// script
# requires-python = ">=3.11"
# dependencies = [
#     "pydantic>=2.0.0",
# ]
# ///

"""Display file system metadata for one or more paths, stat(1) style.

    $ ./pystat.py /
      File: '/'
      Size: 4096      	Blocks: 8          IO Block: 4096 directory
    Device: 10301h/66305d Inode: 2          Links: 19
    Access: (0755/drwxr-xr-x)  Uid: (    0/    root)   Gid: (    0/    root)
    Access: 2018-02-01 11:05:32-0500
    Modify: 2018-01-23 00:01:38-0500
    Change: 2018-01-23 00:01:38-0500
"""

import argparse
import errno
import io
import sys
from typing import Optional, Sequence
from stat_collector import query_metadata
from stat_formatter import format_record


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pystat",
        usage="%(prog)s [options] <path> [<path> ...]",
        description="Display file system metadata for each path.",
    )
    p.add_argument("-L", "--dereference", action="store_true", help="follow symlinks")
    p.add_argument("paths", nargs="*", metavar="path", help="file or directory to query")
    return p


def use_surrogateescape() -> None:
    """Let undecodable path bytes pass through stdout and stderr unchanged."""
    for stream in (sys.stdout, sys.stderr):
        if isinstance(stream, io.TextIOWrapper):
            stream.reconfigure(errors="surrogateescape")


def report_path(path: str, follow_symlinks: bool) -> int:
    """Print the report for one path; return 0 or the OS error code."""
    try:
        record = query_metadata(path, follow_symlinks=follow_symlinks)
    except OSError as e:
        print(f"Error: Unable to stat '{path}': {e.strerror}", file=sys.stderr)
        return e.errno or 1

    print(format_record(record))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.paths:
        print("ERROR:  no files provided", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return errno.EINVAL

    use_surrogateescape()
    rc = 0
    for path in args.paths:
        path_rc = report_path(path, args.dereference)
        if path_rc:
            rc = path_rc

    return rc


if __name__ == "__main__":
    raise SystemExit(main())
