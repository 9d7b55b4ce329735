"""Lightweight execution trace buffer for diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .debug import debug_log


@dataclass
class TraceEntry:
    pc: int
    opcode: int | None
    mnemonic: str
    cycles: int
    a: int
    x: int
    y: int
    sp: int
    p: int
    note: str = ""


class TraceRecorder:
    """Ring buffer that stores recent CPU snapshots."""

    def __init__(self, capacity: int = 256) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._entries: List[TraceEntry | None] = [None] * capacity
        self._index = 0
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def record_step(
        self,
        cpu_state,
        pc: int,
        opcode: int | None,
        cycles: int,
        *,
        mnemonic: str = "",
        note: str = "",
    ) -> None:
        """Record the state left behind by the instruction fetched at ``pc``."""

        entry = TraceEntry(
            pc=pc & 0xFFFF,
            opcode=None if opcode is None else opcode & 0xFF,
            mnemonic=mnemonic,
            cycles=cycles,
            a=cpu_state.a & 0xFF,
            x=cpu_state.x & 0xFF,
            y=cpu_state.y & 0xFF,
            sp=cpu_state.sp & 0xFF,
            p=cpu_state.p & 0xFF,
            note=note,
        )
        self._append(entry)

    def clear(self) -> None:
        self._entries = [None] * self._capacity
        self._index = 0
        self._size = 0

    def entries(self, limit: int | None = None) -> Iterable[TraceEntry]:
        count = self._size if limit is None else min(self._size, max(limit, 0))
        for offset in range(count):
            index = (self._index - count + offset) % self._capacity
            entry = self._entries[index]
            if entry is not None:
                yield entry

    def last_entry(self) -> TraceEntry | None:
        if self._size == 0:
            return None
        index = (self._index - 1) % self._capacity
        return self._entries[index]

    def format_entries(self, limit: int | None = None) -> Sequence[str]:
        lines: list[str] = []
        for entry in self.entries(limit):
            opcode = "--" if entry.opcode is None else f"{entry.opcode:02X}"
            mnemonic = entry.mnemonic or "?"
            note = entry.note or "-"
            line = (
                f"pc={entry.pc:04X} opcode={opcode} {mnemonic:<3} cycles={entry.cycles:02d} "
                f"A={entry.a:02X} X={entry.x:02X} Y={entry.y:02X} SP={entry.sp:02X} P={entry.p:02X} "
                f"note={note}"
            )
            lines.append(line)
        return lines

    def dump(self, category: str, limit: int | None = None) -> None:
        for line in self.format_entries(limit):
            debug_log(category, line)

    def _append(self, entry: TraceEntry) -> None:
        self._entries[self._index] = entry
        self._index = (self._index + 1) % self._capacity
        if self._size < self._capacity:
            self._size += 1
