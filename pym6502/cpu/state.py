"""6502 register file and status flags."""

from __future__ import annotations

from dataclasses import dataclass

FLAG_N = 0x80
FLAG_V = 0x40
FLAG_B = 0x10
FLAG_D = 0x08
FLAG_I = 0x04
FLAG_Z = 0x02
FLAG_C = 0x01

# Reset does not read the vector at 0xFFFC; execution starts at the vector itself.
RESET_PC = 0xFFFC
RESET_SP = 0x00
STACK_PAGE = 0x0100


def _flag_property(mask: int, doc: str) -> property:
    def getter(self: "CPUState") -> bool:
        return (self.p & mask) != 0

    def setter(self: "CPUState", enabled: bool) -> None:
        if enabled:
            self.p |= mask
        else:
            self.p &= ~mask & 0xFF

    return property(getter, setter, doc=doc)


@dataclass
class CPUState:
    """Snapshot of the 6502 register file.

    ``p`` packs the seven flags using the hardware bit layout (bit 5 is
    unused and stays clear). Each flag is also available as a boolean
    property so it can be read or set on its own.
    """

    a: int = 0x00
    x: int = 0x00
    y: int = 0x00
    sp: int = RESET_SP
    pc: int = RESET_PC
    p: int = 0x00

    carry = _flag_property(FLAG_C, "Carry flag.")
    zero = _flag_property(FLAG_Z, "Zero flag.")
    interrupt_disable = _flag_property(FLAG_I, "Interrupt disable flag.")
    decimal = _flag_property(FLAG_D, "Decimal mode flag.")
    brk = _flag_property(FLAG_B, "Break flag.")
    overflow = _flag_property(FLAG_V, "Overflow flag.")
    negative = _flag_property(FLAG_N, "Negative flag.")

    def reset(self) -> None:
        self.a = 0x00
        self.x = 0x00
        self.y = 0x00
        self.sp = RESET_SP
        self.pc = RESET_PC
        self.p = 0x00

    def clone(self) -> "CPUState":
        return CPUState(self.a, self.x, self.y, self.sp, self.pc, self.p)

    def stack_address(self, offset: int = 0) -> int:
        """Absolute address of ``sp + offset`` inside the stack page."""

        return STACK_PAGE | ((self.sp + offset) & 0xFF)
