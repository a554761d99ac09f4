"""A ring of processes passing a value, and a minimal pipeline shell."""

__all__ = ["ring", "pipeline"]