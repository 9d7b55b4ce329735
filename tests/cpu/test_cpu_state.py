"""Tests for the register file and flag accessors."""

from __future__ import annotations

from pym6502.cpu.state import (
    FLAG_B,
    FLAG_C,
    FLAG_D,
    FLAG_I,
    FLAG_N,
    FLAG_V,
    FLAG_Z,
    CPUState,
)


def test_flags_are_independent() -> None:
    state = CPUState()
    names = {
        "carry": FLAG_C,
        "zero": FLAG_Z,
        "interrupt_disable": FLAG_I,
        "decimal": FLAG_D,
        "brk": FLAG_B,
        "overflow": FLAG_V,
        "negative": FLAG_N,
    }

    for name, mask in names.items():
        setattr(state, name, True)
        assert state.p == mask, name
        assert getattr(state, name)
        setattr(state, name, False)
        assert state.p == 0


def test_clearing_one_flag_keeps_the_rest() -> None:
    state = CPUState(p=FLAG_C | FLAG_Z | FLAG_N)

    state.zero = False

    assert state.carry
    assert state.negative
    assert state.p == FLAG_C | FLAG_N


def test_reset_and_clone() -> None:
    state = CPUState(a=1, x=2, y=3, sp=0x40, pc=0x1234, p=0xFF)
    copy = state.clone()

    state.reset()

    assert state == CPUState()
    assert state.pc == 0xFFFC
    assert copy.pc == 0x1234
    assert copy.p == 0xFF


def test_stack_address_stays_in_stack_page() -> None:
    state = CPUState(sp=0xFF)

    assert state.stack_address() == 0x01FF
    assert state.stack_address(1) == 0x0100
