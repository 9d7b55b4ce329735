"""6502 system assembly helpers."""

from __future__ import annotations

from .machine import Machine, MachineConfig, create_machine

__all__ = [
    "MachineConfig",
    "Machine",
    "create_machine",
]
