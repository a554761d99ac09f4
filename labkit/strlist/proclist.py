"""A list of typed string nodes that can be concatenated by type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

_TYPE_MASK = 0xFF


@dataclass
class StringProcNode:
    """One entry of a StringProcList: an 8-bit type tag and a string."""

    type: int
    hash: Optional[str]

    def __post_init__(self) -> None:
        self.type &= _TYPE_MASK


class StringProcList:
    """An ordered collection of StringProcNode entries."""

    def __init__(self):
        self._nodes: list[StringProcNode] = []

    @property
    def first(self) -> Optional[StringProcNode]:
        return self._nodes[0] if self._nodes else None

    @property
    def last(self) -> Optional[StringProcNode]:
        return self._nodes[-1] if self._nodes else None

    def add_node(self, type: int, hash: Optional[str]) -> StringProcNode:
        """Append a node with the given type and string; return it."""
        node = StringProcNode(type, hash)
        self._nodes.append(node)
        return node

    def concat(self, type: int, hash: str) -> str:
        """Return hash followed by the strings of every node of the given type, in order."""
        if hash is None:
            raise TypeError("hash must be a string")
        wanted = type & _TYPE_MASK
        return hash + "".join(
            node.hash for node in self._nodes
            if node.type == wanted and node.hash is not None
        )

    def __iter__(self) -> Iterator[StringProcNode]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def dump(self, file) -> None:
        """Write the list length and one line per node to file."""
        file.write(f"List length: {len(self._nodes)}\n")
        for node in self._nodes:
            text = "(null)" if node.hash is None else node.hash
            file.write(f"\tnode hash: {text} | type: {node.type}\n")


def str_concat(a: str, b: str) -> str:
    """Return a new string made of a followed by b."""
    return a + b