"""CPU package for the 6502 core."""

from .addressing import Operand, PageCrossRule
from .core import MOS6502, CPUError, UnknownOpcode, UnknownOpcodeError
from .state import CPUState
from . import addressing, opcodes

__all__ = [
    "MOS6502",
    "CPUState",
    "CPUError",
    "UnknownOpcode",
    "UnknownOpcodeError",
    "Operand",
    "PageCrossRule",
    "addressing",
    "opcodes",
]
