"""Kernel start-up: memory sizing, table set-up and the first messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from minikern.console import BootParams, Console
from minikern.gates import SYSCALL_VECTOR, InterruptTable, sched_init
from minikern.memory import PageMap
from minikern.traps import Trap, trap_init
from minikern.tty import Tty

_MB = 1024 * 1024
_MAX_MEMORY = 16 * _MB

# The low-level entry stubs live outside this package; each vector gets its own slot.
_STUB_BASE = 0x6000
_STUB_SIZE = 8


@dataclass(frozen=True)
class MemoryLayout:
    """Where the buffer cache ends and main memory starts and ends."""

    memory_end: int
    buffer_memory_end: int
    main_memory_start: int


def memory_layout(ext_mem_k: int) -> MemoryLayout:
    """Split memory given the extended memory size in KiB reported at boot."""
    if not 0 <= ext_mem_k <= 0xFFFF:
        raise ValueError(f"extended memory size {ext_mem_k} does not fit in 16 bits")
    memory_end = ((1 << 20) + (ext_mem_k << 10)) & 0xFFFFF000
    memory_end = min(memory_end, _MAX_MEMORY)
    if memory_end > 12 * _MB:
        buffer_memory_end = 4 * _MB
    elif memory_end > 6 * _MB:
        buffer_memory_end = 2 * _MB
    else:
        buffer_memory_end = 1 * _MB
    return MemoryLayout(memory_end, buffer_memory_end, buffer_memory_end)


def start_kernel(
    ext_mem_k: int, params: Optional[BootParams] = None
) -> Tuple[MemoryLayout, PageMap, InterruptTable, Tty]:
    """Bring the kernel up and print its greeting.

    Returns the memory layout, page map, interrupt table and terminal.
    """
    layout = memory_layout(ext_mem_k)
    pages = PageMap()
    pages.mem_init(layout.main_memory_start, layout.memory_end)

    idt = InterruptTable()
    trap_init(idt, {trap: _STUB_BASE + _STUB_SIZE * trap for trap in Trap})
    sched_init(idt, _STUB_BASE + _STUB_SIZE * SYSCALL_VECTOR)

    tty = Tty(Console(params if params is not None else BootParams()))
    for line in range(25):
        tty.printk("this is line %d\n\r", line)
    tty.printk(
        "\n\rmemory start: %d, end: %d\n\r",
        layout.main_memory_start,
        layout.memory_end,
    )
    return layout, pages, idt, tty