"""MOS 6502 execution core.

The package is split into the memory bus, the CPU (register file, addressing
modes, opcode table and execution engine), machine assembly and small
diagnostics helpers.
"""

from __future__ import annotations

from . import bus, cpu, system, utils

__all__: list[str] = [
    "bus",
    "cpu",
    "system",
    "utils",
]
