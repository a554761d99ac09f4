"""Command-line inspection of a V6 disk image: inode and pathname checksums."""

from __future__ import annotations

import getopt
import sys

from .checksum import checksum_inumber, checksum_pathname, checksums_equal, to_hex
from .diskimg import DiskImage
from .filesystem import ROOT_INUMBER, FileSystemError, UnixFileSystem

PROG = "diskimageaccess"
MAX_PATH = 1024
MAX_DIR_ENTRIES = 10000
INODES_PER_BLOCK = 16


def _streams(out, err):
    return (sys.stdout if out is None else out, sys.stderr if err is None else err)


def dump_inode_checksums(fs, out=None, err=None) -> None:
    """Write the checksum of every allocated inode."""
    out, err = _streams(out, err)
    for inumber in range(1, fs.superblock.isize * INODES_PER_BLOCK):
        try:
            inode = fs.iget(inumber)
        except FileSystemError:
            err.write(f"Can't read inode {inumber} \n")
            return
        if not inode.is_allocated():
            continue
        try:
            digest = checksum_inumber(fs, inumber)
        except FileSystemError:
            err.write(f"Inode {inumber} can't compute chksum\n")
            continue
        out.write(
            f"Inode {inumber} mode 0x{inode.mode:x} size {inode.size()} "
            f"checksum {to_hex(digest)}\n"
        )


def _dump_path_and_children(fs, pathname: str, inumber: int, out, err) -> None:
    try:
        inode = fs.iget(inumber)
    except FileSystemError:
        err.write(f"Can't read inode {inumber} \n")
        return

    try:
        by_inode = checksum_inumber(fs, inumber)
        by_path = checksum_pathname(fs, pathname)
    except FileSystemError:
        err.write(f"Can't checksum inode {inumber} path {pathname}\n")
        return

    if not checksums_equal(by_inode, by_path):
        err.write(f"Pathname checksum of {pathname} differs from inode {inumber}\n")
        return

    out.write(
        f"Path {pathname} {inumber} mode 0x{inode.mode:x} size {inode.size()} "
        f"checksum {to_hex(by_path)}\n"
    )

    if not inode.is_directory():
        return

    prefix = "" if pathname == "/" else pathname
    if len(prefix) > MAX_PATH - 16:
        err.write(f"Too deep of directories {prefix}\n")

    try:
        entries = fs.dir_entries(inumber, MAX_DIR_ENTRIES)
    except FileSystemError:
        entries = []
    for entry in entries:
        name = entry.name()
        if name in (".", ".."):
            continue
        _dump_path_and_children(fs, f"{prefix}/{name}", entry.inumber, out, err)


def dump_pathname_checksums(fs, out=None, err=None) -> None:
    """Walk the tree from the root, writing the checksum of every path."""
    out, err = _streams(out, err)
    _dump_path_and_children(fs, "/", ROOT_INUMBER, out, err)


def print_directory(fs, pathname: str, out=None, err=None) -> None:
    """Write every entry of the directory at pathname."""
    out, err = _streams(out, err)
    try:
        inumber = fs.lookup(pathname)
    except FileSystemError:
        err.write(f"Can't find {pathname}\n")
        return
    try:
        entries = fs.dir_entries(inumber, MAX_DIR_ENTRIES)
    except FileSystemError:
        err.write(f"Can't read entries from {pathname}\n")
        return
    for entry in entries:
        out.write(f"Direntry {pathname} Name {entry.name()} Inumber {entry.inumber}\n")


def _usage() -> int:
    sys.stderr.write(
        f"Usage: {PROG} <options> diskimagePath\n"
        "where <options> can be:\n"
        "-q     don't print extra info\n"
        "-i     print all inode checksums\n"
        "-p     print all pathname checksums\n"
    )
    return 1


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        opts, rest = getopt.gnu_getopt(args, "iqp")
    except getopt.GetoptError:
        return _usage()
    if len(rest) != 1:
        return _usage()
    flags = {flag for flag, _ in opts}
    diskpath = rest[0]

    try:
        disk = DiskImage(diskpath, read_only=True)
    except OSError:
        sys.stderr.write(f"Can't open diskimagePath {diskpath}\n")
        return 1

    try:
        fs = UnixFileSystem(disk)
    except FileSystemError as exc:
        sys.stderr.write(f"{exc}\n")
        sys.stderr.write("Failed to initialize unix filesystem\n")
        disk.close()
        return 1

    with fs:
        if "-q" not in flags:
            try:
                disksize = disk.size()
            except OSError:
                sys.stderr.write(f"Error getting the size of {diskpath}\n")
                return 1
            sb = fs.superblock
            sys.stdout.write(f"Disk {diskpath} is {disksize} bytes ({disksize // 1024} KB)\n")
            sys.stdout.write(f"Superblock s_isize {sb.isize}\n")
            sys.stdout.write(f"Superblock s_fsize {sb.fsize}\n")
            sys.stdout.write(f"Superblock s_nfree {sb.nfree}\n")
            sys.stdout.write(f"Superblock s_ninode {sb.ninode}\n")
        if "-i" in flags:
            dump_inode_checksums(fs, sys.stdout, sys.stderr)
        if "-p" in flags:
            dump_pathname_checksums(fs, sys.stdout, sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())