"""Addressing-mode resolvers.

Each resolver is a pure function of the register file and memory: it reads
the operand bytes that follow the opcode (starting at ``state.pc``) and
returns an :class:`Operand` describing the effective address, how many
operand bytes were consumed and how many cycles the computation cost. The
resolvers never touch ``state``; the CPU advances ``pc`` by
``Operand.length`` afterwards.

The data read from the effective address is not part of the resolver cost.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Mapping

from pym6502.bus import AddressSpace

from .opcodes import AddressingMode
from .state import CPUState


class PageCrossRule(Enum):
    """How indexed modes decide whether a page boundary was crossed."""

    HIGH_BYTE = auto()
    ADDRESS_DIFFERENCE = auto()


@dataclass(frozen=True)
class Operand:
    """Result of resolving an addressing mode."""

    address: int | None
    length: int
    cycles: int
    value: int | None = None
    page_crossed: bool = False


Resolver = Callable[[CPUState, AddressSpace, PageCrossRule], Operand]


def page_crossed(base: int, effective: int, rule: PageCrossRule) -> bool:
    if rule is PageCrossRule.ADDRESS_DIFFERENCE:
        return effective - base >= 0xFF
    return (base & 0xFF00) != (effective & 0xFF00)


def _operand_byte(state: CPUState, memory: AddressSpace, offset: int = 0) -> int:
    return memory.read((state.pc + offset) & 0xFFFF)


def _operand_word(state: CPUState, memory: AddressSpace) -> int:
    low = _operand_byte(state, memory)
    high = _operand_byte(state, memory, 1)
    return (high << 8) | low


def _zero_page_pointer(memory: AddressSpace, address: int) -> int:
    low = memory.read(address & 0xFF)
    high = memory.read((address + 1) & 0xFF)
    return (high << 8) | low


def resolve_implied(state: CPUState, memory: AddressSpace, rule: PageCrossRule) -> Operand:
    return Operand(address=None, length=0, cycles=0)


def resolve_immediate(state: CPUState, memory: AddressSpace, rule: PageCrossRule) -> Operand:
    return Operand(address=None, length=1, cycles=1, value=_operand_byte(state, memory))


def resolve_zero_page(state: CPUState, memory: AddressSpace, rule: PageCrossRule) -> Operand:
    return Operand(address=_operand_byte(state, memory), length=1, cycles=1)


def _zero_page_indexed(index: int, state: CPUState, memory: AddressSpace) -> Operand:
    # fetch + index add; the sum wraps inside the zero page
    address = (_operand_byte(state, memory) + index) & 0xFF
    return Operand(address=address, length=1, cycles=2)


def resolve_zero_page_x(state: CPUState, memory: AddressSpace, rule: PageCrossRule) -> Operand:
    return _zero_page_indexed(state.x, state, memory)


def resolve_zero_page_y(state: CPUState, memory: AddressSpace, rule: PageCrossRule) -> Operand:
    return _zero_page_indexed(state.y, state, memory)


def resolve_absolute(state: CPUState, memory: AddressSpace, rule: PageCrossRule) -> Operand:
    return Operand(address=_operand_word(state, memory), length=2, cycles=2)


def _absolute_indexed(index: int, state: CPUState, memory: AddressSpace, rule: PageCrossRule) -> Operand:
    base = _operand_word(state, memory)
    address = (base + index) & 0xFFFF
    crossed = page_crossed(base, address, rule)
    return Operand(address=address, length=2, cycles=2 + int(crossed), page_crossed=crossed)


def resolve_absolute_x(state: CPUState, memory: AddressSpace, rule: PageCrossRule) -> Operand:
    return _absolute_indexed(state.x, state, memory, rule)


def resolve_absolute_y(state: CPUState, memory: AddressSpace, rule: PageCrossRule) -> Operand:
    return _absolute_indexed(state.y, state, memory, rule)


def resolve_indexed_indirect(state: CPUState, memory: AddressSpace, rule: PageCrossRule) -> Operand:
    """``(zp,X)``: fetch, index add, two pointer reads."""

    pointer = (_operand_byte(state, memory) + state.x) & 0xFF
    return Operand(address=_zero_page_pointer(memory, pointer), length=1, cycles=4)


def resolve_indirect_indexed(state: CPUState, memory: AddressSpace, rule: PageCrossRule) -> Operand:
    """``(zp),Y``: fetch, two pointer reads, plus one cycle on a page cross."""

    base = _zero_page_pointer(memory, _operand_byte(state, memory))
    address = (base + state.y) & 0xFFFF
    crossed = page_crossed(base, address, rule)
    return Operand(address=address, length=1, cycles=3 + int(crossed), page_crossed=crossed)


RESOLVERS: Mapping[AddressingMode, Resolver] = {
    AddressingMode.IMPLIED: resolve_implied,
    AddressingMode.IMMEDIATE: resolve_immediate,
    AddressingMode.ZERO_PAGE: resolve_zero_page,
    AddressingMode.ZERO_PAGE_X: resolve_zero_page_x,
    AddressingMode.ZERO_PAGE_Y: resolve_zero_page_y,
    AddressingMode.ABSOLUTE: resolve_absolute,
    AddressingMode.ABSOLUTE_X: resolve_absolute_x,
    AddressingMode.ABSOLUTE_Y: resolve_absolute_y,
    AddressingMode.INDEXED_INDIRECT: resolve_indexed_indirect,
    AddressingMode.INDIRECT_INDEXED: resolve_indirect_indexed,
}


def resolve(mode: AddressingMode, state: CPUState, memory: AddressSpace,
            rule: PageCrossRule = PageCrossRule.HIGH_BYTE) -> Operand:
    return RESOLVERS[mode](state, memory, rule)
