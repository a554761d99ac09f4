"""Unix V6 disk image reader, ARM simulator shell, typed string list and process tools."""

__version__ = "0.1.0"