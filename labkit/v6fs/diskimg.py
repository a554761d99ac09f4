"""Sector-level access to a disk image file."""

from __future__ import annotations

import os

SECTOR_SIZE = 512


class DiskImage:
    """A disk image opened for reading (and optionally writing) whole sectors."""

    def __init__(self, path, read_only=True):
        self.path = os.fspath(path)
        self.read_only = bool(read_only)
        self._file = open(self.path, "rb" if self.read_only else "r+b")

    @property
    def closed(self) -> bool:
        return self._file.closed

    def size(self) -> int:
        """Return the size of the image in bytes."""
        return self._file.seek(0, os.SEEK_END)

    def _seek(self, sector_num: int) -> None:
        if sector_num < 0:
            raise ValueError(f"invalid sector number {sector_num}")
        self._file.seek(sector_num * SECTOR_SIZE, os.SEEK_SET)

    def read_sector(self, sector_num: int) -> bytes:
        """Read one sector; the result is shorter than a sector at the end of the image."""
        self._seek(sector_num)
        return self._file.read(SECTOR_SIZE)

    def write_sector(self, sector_num: int, data) -> int:
        """Write exactly one sector and return the number of bytes written."""
        payload = bytes(data)
        if len(payload) != SECTOR_SIZE:
            raise ValueError(
                f"sector data must be {SECTOR_SIZE} bytes, got {len(payload)}"
            )
        self._seek(sector_num)
        written = self._file.write(payload)
        self._file.flush()
        return written

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "DiskImage":
        return self

    def __exit__(self, *args) -> None:
        self.close()