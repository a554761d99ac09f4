"""Sparse little-endian memory for the instruction-level simulator."""

from __future__ import annotations

from dataclasses import dataclass, field

MEM_DATA_START = 0x10000000
MEM_DATA_SIZE = 0x00100000
MEM_TEXT_START = 0x00400000
MEM_TEXT_SIZE = 0x00100000
MEM_STACK_START = 0xFFFFFFFC
MEM_STACK_SIZE = 0x00100000

DEFAULT_REGIONS = (
    (MEM_TEXT_START, MEM_TEXT_SIZE),
    (MEM_DATA_START, MEM_DATA_SIZE),
    (MEM_STACK_START, MEM_STACK_SIZE),
)

_ADDRESS_MASK = 0xFFFFFFFFFFFFFFFF
_WORD_MASK = 0xFFFFFFFF


@dataclass
class MemoryRegion:
    """A zero-filled block of memory mapped at a fixed start address."""

    start: int
    size: int
    # Three spare bytes let an unaligned word at the very end be accessed.
    data: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.data = bytearray(self.size + 3)

    def __contains__(self, address: int) -> bool:
        return self.start <= address < self.start + self.size


class Memory:
    """The simulator's address space: text, data and stack regions."""

    def __init__(self, regions=DEFAULT_REGIONS):
        self.regions = [MemoryRegion(start, size) for start, size in regions]

    def region_for(self, address: int):
        """Return the region that maps address, or None."""
        address &= _ADDRESS_MASK
        return next((region for region in self.regions if address in region), None)

    def read_32(self, address: int) -> int:
        """Read a little-endian 32-bit word; unmapped addresses read as 0."""
        address &= _ADDRESS_MASK
        region = self.region_for(address)
        if region is None:
            return 0
        offset = address - region.start
        return int.from_bytes(region.data[offset:offset + 4], "little")

    def write_32(self, address: int, value: int) -> None:
        """Write a little-endian 32-bit word; writes to unmapped addresses are dropped."""
        address &= _ADDRESS_MASK
        region = self.region_for(address)
        if region is None:
            return
        offset = address - region.start
        region.data[offset:offset + 4] = (value & _WORD_MASK).to_bytes(4, "little")