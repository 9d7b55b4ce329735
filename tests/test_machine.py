"""Machine assembly and end-to-end execution tests."""

from __future__ import annotations

import pytest

from pym6502.cpu import PageCrossRule, UnknownOpcode, UnknownOpcodeError
from pym6502.system import MachineConfig, create_machine


def test_default_machine_is_reset() -> None:
    machine = create_machine()

    assert machine.cpu.memory is machine.memory
    assert machine.cpu.state.pc == 0xFFFC
    assert machine.cpu.page_cross_rule is PageCrossRule.HIGH_BYTE
    assert machine.cpu.trace is None


def test_program_loaded_after_reset() -> None:
    program = bytes([0x20, 0x42, 0x42])  # JSR $4242
    machine = create_machine(MachineConfig(program=(0xFFFC, program)))
    machine.memory.load(0x4242, bytes([0xA9, 0x84]))  # LDA #$84

    cycles = machine.run(8)

    assert cycles == 8
    assert machine.cpu.state.a == 0x84
    assert machine.cpu.state.negative
    assert machine.memory.read_word(0x0100) == 0xFFFE


def test_trace_records_each_instruction() -> None:
    machine = create_machine(MachineConfig(trace_capacity=8, program=(0xFFFC, bytes([0xEA, 0x02]))))

    machine.run(3)

    entries = list(machine.cpu.trace.entries())
    assert [entry.mnemonic for entry in entries] == ["NOP", ""]
    assert entries[1].note == "unknown"
    assert machine.cpu.diagnostics == [UnknownOpcode(0xFFFD, 0x02)]


def test_reset_clears_trace_and_diagnostics() -> None:
    machine = create_machine(MachineConfig(trace_capacity=4))
    machine.run(2)

    machine.cpu.reset()

    assert machine.cpu.diagnostics == []
    assert machine.cpu.cycle_count == 0
    assert machine.cpu.trace.last_entry() is None


def test_strict_machine_raises() -> None:
    machine = create_machine(MachineConfig(strict_unknown_opcodes=True))

    with pytest.raises(UnknownOpcodeError):
        machine.run(1)


def test_difference_rule_is_forwarded() -> None:
    machine = create_machine(MachineConfig(page_cross_rule=PageCrossRule.ADDRESS_DIFFERENCE))

    assert machine.cpu.page_cross_rule is PageCrossRule.ADDRESS_DIFFERENCE


def test_negative_trace_capacity_rejected() -> None:
    with pytest.raises(ValueError):
        create_machine(MachineConfig(trace_capacity=-1))
