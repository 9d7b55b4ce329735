"""MOS 6502 fetch/decode/execute engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from pym6502.bus import ADDRESS_SPACE_SIZE, AddressSpace
from pym6502.utils import TraceRecorder, debug_enabled, debug_log

from .addressing import Operand, PageCrossRule, resolve
from .opcodes import Instruction, OPCODE_TABLE
from .state import CPUState


class CPUError(Exception):
    """Base error for CPU-related failures."""


class UnknownOpcodeError(CPUError):
    """Raised for an opcode without a table entry when running in strict mode."""

    def __init__(self, diagnostic: "UnknownOpcode") -> None:
        super().__init__(f"unknown opcode {diagnostic.opcode:#04x} at {diagnostic.pc:#06x}")
        self.diagnostic = diagnostic


@dataclass(frozen=True)
class UnknownOpcode:
    """Diagnostic recorded when a fetched byte has no instruction."""

    pc: int
    opcode: int


@dataclass
class MOS6502:
    """6502 execution core bound to a single address space.

    ``run`` keeps calling ``step`` until the requested budget is used up.
    Instructions are never split, so the last one may overrun the budget and
    ``run`` then reports more cycles than were requested.
    """

    memory: AddressSpace
    instruction_table: Sequence[Instruction | None] = field(default=OPCODE_TABLE)
    page_cross_rule: PageCrossRule = PageCrossRule.HIGH_BYTE
    strict_unknown_opcodes: bool = False
    trace: TraceRecorder | None = None

    state: CPUState = field(default_factory=CPUState)
    cycle_count: int = 0
    diagnostics: List[UnknownOpcode] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.memory.size != ADDRESS_SPACE_SIZE:
            raise CPUError(f"address space must be {ADDRESS_SPACE_SIZE} bytes, got {self.memory.size}")
        if len(self.instruction_table) != 0x100:
            raise CPUError("instruction table must have 256 entries")

    def reset(self) -> None:
        """Reset registers and flags and zero-fill memory."""

        self.state.reset()
        self.memory.reset()
        self.cycle_count = 0
        self.diagnostics.clear()
        if self.trace is not None:
            self.trace.clear()

    def run(self, cycles: int) -> int:
        """Execute instructions until ``cycles`` are spent; return the cycles used."""

        remaining = cycles
        while remaining > 0:
            remaining -= self.step()
        return cycles - remaining

    def step(self) -> int:
        """Execute a single instruction and return the cycle count."""

        pc_before = self.state.pc
        opcode = self._fetch_byte()
        instruction = self.instruction_table[opcode]
        if instruction is None:
            cycles = self._unknown_opcode(pc_before, opcode)
            mnemonic = ""
        else:
            cycles = self._execute(instruction)
            mnemonic = instruction.mnemonic

        self.cycle_count += cycles
        if self.trace is not None:
            self.trace.record_step(
                self.state,
                pc_before,
                opcode,
                cycles,
                mnemonic=mnemonic,
                note="" if instruction is not None else "unknown",
            )
        if debug_enabled("cpu"):
            debug_log(
                "cpu",
                "pc=%04x opcode=%02x %s cycles=%d",
                pc_before,
                opcode,
                mnemonic or "???",
                cycles,
            )
        return cycles

    def _execute(self, instruction: Instruction) -> int:
        handler = getattr(self, instruction.handler, None)
        if handler is None:
            raise CPUError(f"handler '{instruction.handler}' not implemented")

        operand = resolve(instruction.mode, self.state, self.memory, self.page_cross_rule)
        self.state.pc = (self.state.pc + operand.length) & 0xFFFF
        handler_cycles = handler(instruction, operand) or 0
        # opcode fetch + address computation + fixed cost + handler memory traffic
        return 1 + operand.cycles + instruction.cycles + handler_cycles

    def _unknown_opcode(self, pc: int, opcode: int) -> int:
        diagnostic = UnknownOpcode(pc, opcode)
        if self.strict_unknown_opcodes:
            raise UnknownOpcodeError(diagnostic)
        self.diagnostics.append(diagnostic)
        debug_log("opcode", "unknown opcode %02x at %04x", opcode, pc)
        return 1

    # ------------------------------------------------------------------
    # Instruction handlers

    def op_nop(self, instruction: Instruction, operand: Operand) -> int:
        return 0

    def op_ld_register(self, instruction: Instruction, operand: Operand) -> int:
        register = self._require_register(instruction)
        value, cycles = self._operand_value(operand)
        self._set_register(register, value)
        self._update_nz_flags(value)
        return cycles

    def op_jsr(self, instruction: Instruction, operand: Operand) -> int:
        if operand.address is None:
            raise CPUError("JSR requires an address operand")
        # the pushed address points at the last byte of the JSR instruction
        return_address = (self.state.pc - 1) & 0xFFFF
        self._write_byte(self.state.stack_address(0), return_address & 0xFF)
        self._write_byte(self.state.stack_address(1), (return_address >> 8) & 0xFF)
        self.state.sp = (self.state.sp + 2) & 0xFF
        self.state.pc = operand.address
        return 2

    # ------------------------------------------------------------------
    # Fetch and memory helpers

    def _fetch_byte(self) -> int:
        value = self._read_byte(self.state.pc)
        self.state.pc = (self.state.pc + 1) & 0xFFFF
        return value

    def _read_byte(self, address: int) -> int:
        return self.memory.read(address & 0xFFFF)

    def _write_byte(self, address: int, value: int) -> None:
        self.memory.write(address & 0xFFFF, value & 0xFF)

    def _operand_value(self, operand: Operand) -> tuple[int, int]:
        """Return the operand's value and the cycles spent reading it."""

        if operand.value is not None:
            return operand.value, 0
        if operand.address is None:
            raise CPUError("operand has neither a value nor an address")
        return self._read_byte(operand.address), 1

    # ------------------------------------------------------------------
    # Register helpers

    def _set_register(self, which: str, value: int) -> None:
        value &= 0xFF
        if which == "A":
            self.state.a = value
        elif which == "X":
            self.state.x = value
        elif which == "Y":
            self.state.y = value
        else:
            raise CPUError(f"unknown register {which}")

    def _require_register(self, instruction: Instruction) -> str:
        if instruction.register is None:
            raise CPUError(f"instruction {instruction.mnemonic} missing register metadata")
        return instruction.register

    # ------------------------------------------------------------------
    # Flag helpers

    def _update_nz_flags(self, value: int) -> None:
        value &= 0xFF
        self.state.negative = (value & 0x80) != 0
        self.state.zero = value == 0
