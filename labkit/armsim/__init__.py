"""Memory model and interactive shell of an instruction-level ARM simulator."""

__all__ = ["memory", "shell"]