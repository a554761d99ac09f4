"""Read-only access to Unix Version 6 disk images, with file checksums."""

__all__ = ["diskimg", "layout", "filesystem", "checksum", "cli"]