"""Memory bus for the 6502 core."""

from .memory import (
    ADDRESS_SPACE_SIZE,
    AddressOutOfRangeError,
    AddressSpace,
    AddressSpaceError,
)

__all__ = [
    "ADDRESS_SPACE_SIZE",
    "AddressSpace",
    "AddressSpaceError",
    "AddressOutOfRangeError",
]
