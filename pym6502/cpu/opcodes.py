"""Opcode metadata for the 6502 CPU."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, Iterable, List, Sequence


class AddressingMode(Enum):
    """Addressing modes understood by the resolver table."""

    IMPLIED = auto()
    IMMEDIATE = auto()
    ZERO_PAGE = auto()
    ZERO_PAGE_X = auto()
    ZERO_PAGE_Y = auto()
    ABSOLUTE = auto()
    ABSOLUTE_X = auto()
    ABSOLUTE_Y = auto()
    INDEXED_INDIRECT = auto()
    INDIRECT_INDEXED = auto()


@dataclass(frozen=True)
class Instruction:
    """Metadata describing a single 6502 opcode.

    ``cycles`` is the fixed cost of the operation itself. The opcode fetch,
    the addressing-mode resolution and any memory traffic performed by the
    handler are charged separately.
    """

    opcode: int
    mnemonic: str
    mode: AddressingMode
    cycles: int
    handler: str
    register: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.opcode <= 0xFF:
            raise ValueError(f"opcode out of range: {self.opcode}")
        if self.cycles < 0:
            raise ValueError("cycles must not be negative")


class OpcodeTable:
    """Mutable builder for the 256-entry instruction table."""

    _TABLE_SIZE: Final[int] = 0x100

    def __init__(self) -> None:
        self._table: List[Instruction | None] = [None] * self._TABLE_SIZE

    def register(self, instruction: Instruction) -> None:
        opcode = instruction.opcode
        existing = self._table[opcode]
        if existing is not None:
            raise ValueError(
                f"opcode {opcode:#04x} already registered as {existing.mnemonic}")
        self._table[opcode] = instruction

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Sequence[Instruction | None]:
        return tuple(self._table)


def build_instruction_table(instructions: Iterable[Instruction]) -> Sequence[Instruction | None]:
    """Build a 256-entry instruction lookup table."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table.freeze()


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction(0xEA, "NOP", AddressingMode.IMPLIED, 1, "op_nop"),
    # LDA
    Instruction(0xA9, "LDA", AddressingMode.IMMEDIATE, 0, "op_ld_register", register="A"),
    Instruction(0xA5, "LDA", AddressingMode.ZERO_PAGE, 0, "op_ld_register", register="A"),
    Instruction(0xB5, "LDA", AddressingMode.ZERO_PAGE_X, 0, "op_ld_register", register="A"),
    Instruction(0xAD, "LDA", AddressingMode.ABSOLUTE, 0, "op_ld_register", register="A"),
    Instruction(0xBD, "LDA", AddressingMode.ABSOLUTE_X, 0, "op_ld_register", register="A"),
    Instruction(0xB9, "LDA", AddressingMode.ABSOLUTE_Y, 0, "op_ld_register", register="A"),
    Instruction(0xA1, "LDA", AddressingMode.INDEXED_INDIRECT, 0, "op_ld_register", register="A"),
    Instruction(0xB1, "LDA", AddressingMode.INDIRECT_INDEXED, 0, "op_ld_register", register="A"),
    # LDX
    Instruction(0xA2, "LDX", AddressingMode.IMMEDIATE, 0, "op_ld_register", register="X"),
    Instruction(0xA6, "LDX", AddressingMode.ZERO_PAGE, 0, "op_ld_register", register="X"),
    Instruction(0xB6, "LDX", AddressingMode.ZERO_PAGE_Y, 0, "op_ld_register", register="X"),
    Instruction(0xAE, "LDX", AddressingMode.ABSOLUTE, 0, "op_ld_register", register="X"),
    Instruction(0xBE, "LDX", AddressingMode.ABSOLUTE_Y, 0, "op_ld_register", register="X"),
    # LDY
    Instruction(0xA0, "LDY", AddressingMode.IMMEDIATE, 0, "op_ld_register", register="Y"),
    Instruction(0xA4, "LDY", AddressingMode.ZERO_PAGE, 0, "op_ld_register", register="Y"),
    Instruction(0xB4, "LDY", AddressingMode.ZERO_PAGE_X, 0, "op_ld_register", register="Y"),
    Instruction(0xAC, "LDY", AddressingMode.ABSOLUTE, 0, "op_ld_register", register="Y"),
    Instruction(0xBC, "LDY", AddressingMode.ABSOLUTE_X, 0, "op_ld_register", register="Y"),
    # Subroutine
    Instruction(0x20, "JSR", AddressingMode.ABSOLUTE, 1, "op_jsr"),
)


OPCODE_TABLE: Sequence[Instruction | None] = build_instruction_table(DEFAULT_INSTRUCTIONS)
