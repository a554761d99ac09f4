"""SHA-1 checksums of files stored on a V6 file system."""

from __future__ import annotations

import hashlib

from .diskimg import SECTOR_SIZE
from .filesystem import FileSystemError

CHECKSUM_SIZE = 20
CHECKSUM_STRING_SIZE = 2 * CHECKSUM_SIZE


def checksum_inumber(fs, inumber: int) -> bytes:
    """Return the SHA-1 digest of the contents of an allocated inode."""
    inode = fs.iget(inumber)
    if not inode.is_allocated():
        raise FileSystemError(f"Inode {inumber} is not allocated")
    sha = hashlib.sha1()
    for block_num in range(-(-inode.size() // SECTOR_SIZE)):
        sha.update(fs.get_block(inumber, block_num))
    return sha.digest()


def checksum_pathname(fs, pathname: str) -> bytes:
    """Return the SHA-1 digest of the file at an absolute pathname."""
    return checksum_inumber(fs, fs.lookup(pathname))


def to_hex(digest) -> str:
    """Render a checksum as lower-case hexadecimal."""
    return bytes(digest)[:CHECKSUM_SIZE].hex()


def checksums_equal(first, second) -> bool:
    """Tell whether two checksums are the same."""
    return bytes(first)[:CHECKSUM_SIZE] == bytes(second)[:CHECKSUM_SIZE]