"""Assembly of an address space and a CPU into a runnable machine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from pym6502.bus import AddressSpace
from pym6502.cpu import MOS6502, PageCrossRule
from pym6502.utils import TraceRecorder, debug_log


@dataclass
class MachineConfig:
    """Runtime configuration for the 6502 machine."""

    page_cross_rule: PageCrossRule = PageCrossRule.HIGH_BYTE
    strict_unknown_opcodes: bool = False
    trace_capacity: int = 0
    program: Optional[Tuple[int, bytes]] = None


@dataclass
class Machine:
    """Aggregates the core components."""

    memory: AddressSpace
    cpu: MOS6502

    def run(self, cycles: int) -> int:
        return self.cpu.run(cycles)


def create_machine(config: MachineConfig | None = None) -> Machine:
    """Instantiate a reset machine with the requested configuration."""

    config = config or MachineConfig()
    if config.trace_capacity < 0:
        raise ValueError("trace_capacity must not be negative")

    memory = AddressSpace()
    trace = TraceRecorder(config.trace_capacity) if config.trace_capacity else None
    cpu = MOS6502(
        memory,
        page_cross_rule=config.page_cross_rule,
        strict_unknown_opcodes=config.strict_unknown_opcodes,
        trace=trace,
    )
    cpu.reset()

    if config.program is not None:
        address, data = config.program
        memory.load(address, data)
        debug_log("memory", "loaded %d bytes at %04x", len(data), address)

    return Machine(memory=memory, cpu=cpu)
