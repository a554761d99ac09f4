"""An ordered list of typed strings and a report built from it."""

__all__ = ["proclist", "report"]