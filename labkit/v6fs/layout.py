"""On-disk structures of the Version 6 Unix file system."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass

_SUPERBLOCK = struct.Struct("<3H100HH100H4B2H48H")
_INODE = struct.Struct("<H4BH8H2H2H")
_DIRENT = struct.Struct("<H14s")

SUPERBLOCK_SIZE = _SUPERBLOCK.size
INODE_SIZE = _INODE.size
DIRENT_SIZE = _DIRENT.size
NAME_LENGTH = 14


class InodeMode(enum.IntFlag):
    """Bits of the inode mode word."""

    IALLOC = 0o100000
    IFMT = 0o60000
    IFDIR = 0o40000
    IFCHR = 0o20000
    IFBLK = 0o60000
    ILARG = 0o10000
    ISUID = 0o4000
    ISGID = 0o2000
    ISVTX = 0o1000
    IREAD = 0o400
    IWRITE = 0o200
    IEXEC = 0o100


def _require(data: bytes, size: int, what: str) -> None:
    if len(data) < size:
        raise ValueError(f"{what} needs {size} bytes, got {len(data)}")


@dataclass(frozen=True)
class SuperBlock:
    isize: int
    fsize: int
    nfree: int
    free: tuple
    ninode: int
    inode: tuple
    flock: int
    ilock: int
    fmod: int
    ronly: int
    time: tuple

    @classmethod
    def from_bytes(cls, data) -> "SuperBlock":
        data = bytes(data)
        _require(data, SUPERBLOCK_SIZE, "superblock")
        values = _SUPERBLOCK.unpack_from(data)
        isize, fsize, nfree = values[0:3]
        free = tuple(values[3:103])
        ninode = values[103]
        inodes = tuple(values[104:204])
        flock, ilock, fmod, ronly = values[204:208]
        time = tuple(values[208:210])
        return cls(isize, fsize, nfree, free, ninode, inodes,
                   flock, ilock, fmod, ronly, time)


@dataclass(frozen=True)
class Inode:
    mode: int
    nlink: int
    uid: int
    gid: int
    size0: int
    size1: int
    addr: tuple
    atime: tuple
    mtime: tuple

    @classmethod
    def from_bytes(cls, data) -> "Inode":
        data = bytes(data)
        _require(data, INODE_SIZE, "inode")
        values = _INODE.unpack_from(data)
        mode, nlink, uid, gid, size0, size1 = values[0:6]
        return cls(mode, nlink, uid, gid, size0, size1,
                   tuple(values[6:14]), tuple(values[14:16]), tuple(values[16:18]))

    def size(self) -> int:
        """File size in bytes, stored as a 24-bit number."""
        return (self.size0 << 16) | self.size1

    def is_allocated(self) -> bool:
        return bool(self.mode & InodeMode.IALLOC)

    def is_directory(self) -> bool:
        return (self.mode & InodeMode.IFMT) == InodeMode.IFDIR

    def is_large(self) -> bool:
        return bool(self.mode & InodeMode.ILARG)


@dataclass(frozen=True)
class DirEntry:
    inumber: int
    raw_name: bytes

    @classmethod
    def from_bytes(cls, data) -> "DirEntry":
        data = bytes(data)
        _require(data, DIRENT_SIZE, "directory entry")
        inumber, raw = _DIRENT.unpack_from(data)
        return cls(inumber, raw)

    def name(self) -> str:
        """The entry name, up to the first NUL byte."""
        return self.raw_name.split(b"\0", 1)[0].decode("latin-1")


def parse_dir_entries(data) -> list:
    """Split raw directory bytes into entries; a trailing partial entry is ignored."""
    data = bytes(data)
    return [
        DirEntry(inumber, raw)
        for inumber, raw in _DIRENT.iter_unpack(data[: len(data) - len(data) % DIRENT_SIZE])
    ]