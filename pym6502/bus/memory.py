"""Flat 64 KiB address space for the 6502 core.

Every byte the CPU can see lives in a single ``bytearray``. Callers poke
programs in directly with :meth:`AddressSpace.write` or :meth:`AddressSpace.load`;
there is no memory map or device dispatch.
"""

from __future__ import annotations

from typing import Final

from pym6502.utils import debug_enabled, debug_log

ADDRESS_SPACE_SIZE: Final[int] = 0x10000


class AddressSpaceError(Exception):
    """Raised when the address space is misconfigured or used incorrectly."""


class AddressOutOfRangeError(AddressSpaceError):
    """Raised for an address outside ``0x0000-0xFFFF``."""


class AddressSpace:
    """Byte-addressable memory covering the full 16-bit address range."""

    def __init__(self, data: bytearray | bytes | None = None) -> None:
        if data is None:
            self._data = bytearray(ADDRESS_SPACE_SIZE)
            return
        if len(data) != ADDRESS_SPACE_SIZE:
            raise AddressSpaceError(
                f"address space must be {ADDRESS_SPACE_SIZE} bytes, got {len(data)}")
        self._data = bytearray(data)

    @property
    def size(self) -> int:
        return len(self._data)

    def reset(self) -> None:
        """Zero-fill every byte."""

        self._data[:] = bytes(ADDRESS_SPACE_SIZE)

    def _check(self, address: int) -> int:
        if not 0 <= address < ADDRESS_SPACE_SIZE:
            if debug_enabled("memory"):
                debug_log("memory", "rejected address %r", address)
            raise AddressOutOfRangeError(f"address {address:#06x} outside 0x0000-0xffff")
        return address

    def read(self, address: int) -> int:
        return self._data[self._check(address)]

    def write(self, address: int, value: int) -> None:
        self._data[self._check(address)] = value & 0xFF

    def read_word(self, address: int) -> int:
        """Read a little-endian word; the high byte comes from ``address + 1``."""

        low = self.read(address)
        high = self.read((address + 1) & 0xFFFF)
        return (high << 8) | low

    def write_word(self, address: int, value: int) -> None:
        self.write(address, value & 0xFF)
        self.write((address + 1) & 0xFFFF, (value >> 8) & 0xFF)

    def load(self, address: int, data: bytes) -> None:
        """Copy ``data`` into memory starting at ``address``."""

        start = self._check(address)
        end = start + len(data)
        if end > ADDRESS_SPACE_SIZE:
            raise AddressOutOfRangeError(
                f"block of {len(data)} bytes at {start:#06x} runs past 0xffff")
        self._data[start:end] = data

    def dump(self, address: int, length: int) -> bytes:
        start = self._check(address)
        if length < 0 or start + length > ADDRESS_SPACE_SIZE:
            raise AddressOutOfRangeError(
                f"block of {length} bytes at {start:#06x} outside address space")
        return bytes(self._data[start:start + length])
