"""Interrupt descriptor table and gate encoding."""

from __future__ import annotations

import enum
from typing import List, Tuple

KERNEL_CS = 0x0008
IDT_ENTRIES = 256
SYSCALL_VECTOR = 0x80

Descriptor = Tuple[int, int]


class GateType(enum.IntEnum):
    """Type field of a gate descriptor."""

    INTERRUPT = 14
    TRAP = 15


def encode_gate(gate_type: int, dpl: int, addr: int) -> Descriptor:
    """Build the two 32-bit words of a gate pointing at ``addr`` in the kernel code segment."""
    gate_type = GateType(gate_type)
    if not 0 <= dpl <= 3:
        raise ValueError(f"privilege level must lie between 0 and 3, not {dpl}")
    if not 0 <= addr <= 0xFFFFFFFF:
        raise ValueError(f"handler address {addr:#x} does not fit in 32 bits")
    low = (KERNEL_CS << 16) | (addr & 0xFFFF)
    high = (addr & 0xFFFF0000) | 0x8000 | (dpl << 13) | (int(gate_type) << 8)
    return low, high


class InterruptTable:
    """The 256 gate descriptors of the interrupt table; unset entries read as (0, 0)."""

    def __init__(self) -> None:
        self._entries: List[Descriptor] = [(0, 0)] * IDT_ENTRIES

    @staticmethod
    def _check(n: int) -> int:
        n = int(n)
        if not 0 <= n < IDT_ENTRIES:
            raise IndexError(f"interrupt vector {n} lies outside the table")
        return n

    def _set_gate(self, n: int, gate_type: GateType, dpl: int, addr: int) -> None:
        self._entries[self._check(n)] = encode_gate(gate_type, dpl, addr)

    def set_trap_gate(self, n: int, addr: int) -> None:
        """Kernel-only trap gate."""
        self._set_gate(n, GateType.TRAP, 0, addr)

    def set_intr_gate(self, n: int, addr: int) -> None:
        """Kernel-only interrupt gate."""
        self._set_gate(n, GateType.INTERRUPT, 0, addr)

    def set_system_gate(self, n: int, addr: int) -> None:
        """Trap gate that user code may also invoke."""
        self._set_gate(n, GateType.TRAP, 3, addr)

    def __getitem__(self, n: int) -> Descriptor:
        return self._entries[self._check(n)]


def sched_init(idt: InterruptTable, system_call_addr: int) -> None:
    """Install the system call entry on vector 0x80."""
    idt.set_intr_gate(SYSCALL_VECTOR, system_call_addr)