"""Reading files and directories from a Version 6 Unix disk image."""

from __future__ import annotations

import itertools
import struct

from .diskimg import SECTOR_SIZE, DiskImage
from .layout import (
    DIRENT_SIZE,
    INODE_SIZE,
    NAME_LENGTH,
    DirEntry,
    Inode,
    SuperBlock,
    parse_dir_entries,
)

BOOTBLOCK_SECTOR = 0
SUPERBLOCK_SECTOR = 1
INODE_START_SECTOR = 2
ROOT_INUMBER = 1
BOOTBLOCK_MAGIC_NUM = 0o407

INODES_PER_SECTOR = SECTOR_SIZE // INODE_SIZE
ADDRS_PER_BLOCK = SECTOR_SIZE // 2
_ADDR_TABLE = struct.Struct(f"<{ADDRS_PER_BLOCK}H")
_MAX_PATH = 255


class FileSystemError(Exception):
    """Raised when the disk image cannot satisfy a request."""


def _name_key(raw: bytes) -> bytes:
    return raw[:NAME_LENGTH].split(b"\0", 1)[0]


class UnixFileSystem:
    """A mounted V6 file system on top of a disk image."""

    def __init__(self, disk):
        self.disk = disk
        boot = disk.read_sector(BOOTBLOCK_SECTOR)
        if len(boot) != SECTOR_SIZE:
            raise FileSystemError("Error reading bootblock")
        (magic,) = struct.unpack_from("<H", boot)
        if magic != BOOTBLOCK_MAGIC_NUM:
            raise FileSystemError(f"Bad magic number on disk(0x{magic:x})")
        sb = disk.read_sector(SUPERBLOCK_SECTOR)
        if len(sb) != SECTOR_SIZE:
            raise FileSystemError("Error reading superblock")
        self.superblock = SuperBlock.from_bytes(sb)

    @classmethod
    def open(cls, path) -> "UnixFileSystem":
        """Open the disk image at path read-only and mount it."""
        disk = DiskImage(path, read_only=True)
        try:
            return cls(disk)
        except Exception:
            disk.close()
            raise

    def _read_full_sector(self, sector: int) -> bytes:
        data = self.disk.read_sector(sector)
        if len(data) != SECTOR_SIZE:
            raise FileSystemError(f"Error reading sector {sector}")
        return data

    def iget(self, inumber: int) -> Inode:
        """Fetch inode number inumber (numbered from 1)."""
        if inumber < 1:
            raise FileSystemError(f"Invalid inode number {inumber}")
        sector, index = divmod(inumber - 1, INODES_PER_SECTOR)
        data = self._read_full_sector(sector + INODE_START_SECTOR)
        return Inode.from_bytes(data[index * INODE_SIZE:(index + 1) * INODE_SIZE])

    def _read_table(self, sector: int) -> tuple:
        return _ADDR_TABLE.unpack(self._read_full_sector(sector))

    def index_lookup(self, inode: Inode, block_num: int) -> int:
        """Map a file's logical block number to a disk sector number."""
        if not inode.is_allocated() or block_num < 0:
            raise FileSystemError(f"Cannot map block {block_num}")

        if not inode.is_large():
            if block_num >= len(inode.addr):
                raise FileSystemError(f"Block {block_num} beyond small file")
            physical = inode.addr[block_num]
        else:
            simple_max = 7 * ADDRS_PER_BLOCK
            if block_num < simple_max:
                outer, inner = divmod(block_num, ADDRS_PER_BLOCK)
                indirect = inode.addr[outer]
                if indirect == 0:
                    raise FileSystemError(f"Block {block_num} not mapped")
                physical = self._read_table(indirect)[inner]
            else:
                first_idx, second_idx = divmod(block_num - simple_max, ADDRS_PER_BLOCK)
                if first_idx >= ADDRS_PER_BLOCK:
                    raise FileSystemError(f"Block {block_num} beyond large file")
                first_level = inode.addr[7]
                if first_level == 0:
                    raise FileSystemError(f"Block {block_num} not mapped")
                second_level = self._read_table(first_level)[first_idx]
                if second_level == 0:
                    raise FileSystemError(f"Block {block_num} not mapped")
                physical = self._read_table(second_level)[second_idx]

        if physical == 0:
            raise FileSystemError(f"Block {block_num} not mapped")
        return physical

    def get_block(self, inumber: int, block_num: int) -> bytes:
        """Return the valid bytes of a file's logical block (empty past the end)."""
        inode = self.iget(inumber)
        physical = self.index_lookup(inode, block_num)
        data = self._read_full_sector(physical)
        remaining = inode.size() - block_num * SECTOR_SIZE
        if remaining <= 0:
            return b""
        return data[:min(remaining, SECTOR_SIZE)]

    def _iter_directory(self, dir_inumber: int):
        for blk in itertools.count():
            try:
                data = self.get_block(dir_inumber, blk)
            except FileSystemError:
                return
            if not data:
                return
            yield from parse_dir_entries(data)

    def find_name(self, name, dir_inumber: int) -> DirEntry:
        """Find the entry called name in a directory."""
        directory = self.iget(dir_inumber)
        if not directory.is_allocated() or not directory.is_directory():
            raise FileSystemError(f"Inode {dir_inumber} is not a directory")
        if isinstance(name, str):
            try:
                name = name.encode("latin-1")
            except UnicodeEncodeError as exc:
                raise FileSystemError(f"Name not found: {name!r}") from exc
        wanted = _name_key(bytes(name))
        total = directory.size() // DIRENT_SIZE
        for entry in itertools.islice(self._iter_directory(dir_inumber), total):
            if entry.inumber != 0 and _name_key(entry.raw_name) == wanted:
                return entry
        raise FileSystemError(f"Name not found: {name!r}")

    def lookup(self, pathname) -> int:
        """Return the inode number of an absolute pathname."""
        if not pathname or not pathname.startswith("/"):
            raise FileSystemError(f"Not an absolute path: {pathname!r}")
        inumber = ROOT_INUMBER
        for component in pathname[:_MAX_PATH].split("/"):
            if component:
                inumber = self.find_name(component, inumber).inumber
        return inumber

    def dir_entries(self, inumber: int, max_entries: int = 10000) -> list:
        """Return up to max_entries raw entries of a directory, empty slots included."""
        inode = self.iget(inumber)
        if not inode.is_allocated() or not inode.is_directory():
            raise FileSystemError(f"Inode {inumber} is not a directory")
        if max_entries < 1:
            raise FileSystemError("max_entries must be at least 1")
        size = inode.size()
        if size % DIRENT_SIZE:
            raise FileSystemError(f"Directory {inumber} has a ragged size {size}")
        entries = []
        for bno in range(-(-size // SECTOR_SIZE)):
            for entry in parse_dir_entries(self.get_block(inumber, bno)):
                entries.append(entry)
                if len(entries) >= max_entries:
                    return entries
        return entries

    def close(self) -> None:
        self.disk.close()

    def __enter__(self) -> "UnixFileSystem":
        return self

    def __exit__(self, *args) -> None:
        self.close()