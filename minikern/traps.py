"""CPU exception handlers and their installation in the interrupt table."""

from __future__ import annotations

import enum
from typing import Mapping, Tuple

from minikern.gates import InterruptTable
from minikern.vsprintf import vsprintf


class KernelDie(Exception):
    """A fatal exception: the kernel prints a message and stops."""

    def __init__(self, message: str, nr: int) -> None:
        self.message = message
        self.nr = nr & 0xFFFF
        self.text = vsprintf("%s: %04x\n\r", message, self.nr)
        super().__init__(self.text.rstrip())


class Trap(enum.IntEnum):
    """Processor exceptions with a handler, by vector."""

    DIVIDE_ERROR = 0
    DEBUG = 1
    NMI = 2
    INT3 = 3
    OVERFLOW = 4
    BOUNDS = 5
    INVALID_OP = 6
    DEVICE_NOT_AVAILABLE = 7
    DOUBLE_FAULT = 8
    COPROCESSOR_SEGMENT_OVERRUN = 9
    INVALID_TSS = 10
    SEGMENT_NOT_PRESENT = 11
    STACK_SEGMENT = 12
    GENERAL_PROTECTION = 13
    RESERVED = 15
    ALIGNMENT_CHECK = 17


_MESSAGES = {
    Trap.DIVIDE_ERROR: "divide error",
    Trap.DEBUG: "debug",
    Trap.NMI: "nmi",
    Trap.OVERFLOW: "overflow",
    Trap.BOUNDS: "bounds",
    Trap.INVALID_OP: "invalid_op",
    Trap.DEVICE_NOT_AVAILABLE: "device not available",
    Trap.DOUBLE_FAULT: "double fault",
    Trap.COPROCESSOR_SEGMENT_OVERRUN: "coprocessor segment overrun",
    Trap.INVALID_TSS: "invalid tss",
    Trap.SEGMENT_NOT_PRESENT: "segment not present",
    Trap.STACK_SEGMENT: "stack segment",
    Trap.GENERAL_PROTECTION: "general protection",
    Trap.RESERVED: "reserved (15,17-47) error",
    Trap.ALIGNMENT_CHECK: "alignment check",
}

_SYSTEM_GATES = frozenset({Trap.INT3, Trap.OVERFLOW, Trap.BOUNDS})
_INSTALLED: Tuple[Trap, ...] = tuple(t for t in Trap if t is not Trap.DEVICE_NOT_AVAILABLE)
_RESERVED_VECTORS = range(18, 48)

_INT3_KEYS = (
    "eax", "ebx", "ecx", "edx", "esi", "edi", "ebp", "esp",
    "ds", "es", "fs", "tr", "eip", "cs", "eflags",
)


def die(message: str, nr: int) -> None:
    """Stop with ``message`` and the low 16 bits of ``nr``."""
    raise KernelDie(message, nr)


def handle_trap(trap: Trap, error_code: int) -> None:
    """Run the handler for ``trap``; every fatal one raises :class:`KernelDie`."""
    trap = Trap(trap)
    if trap is Trap.INT3:
        raise ValueError("the breakpoint handler needs the saved registers; use format_int3")
    die(_MESSAGES[trap], error_code)


def format_int3(registers: Mapping[str, int]) -> str:
    """Register dump printed on a breakpoint."""
    missing = [key for key in _INT3_KEYS if key not in registers]
    if missing:
        raise KeyError(f"missing registers: {', '.join(missing)}")
    r = registers
    return "".join(
        (
            vsprintf(
                "eax\t\tebx\t\tecx\t\tedx\n\r%8x\t%8x\t%8x\t%8x\n\r",
                r["eax"], r["ebx"], r["ecx"], r["edx"],
            ),
            vsprintf(
                "esi\t\tedi\t\tebp\t\tesp\n\r%8x\t%8x\t%8x\t%8x\n\r",
                r["esi"], r["edi"], r["ebp"], r["esp"],
            ),
            vsprintf(
                "\n\rds\tes\tfs\ttr\n\r%4x\t%4x\t%4x\t%4x\n\r",
                r["ds"], r["es"], r["fs"], r["tr"],
            ),
            vsprintf(
                "EIP: %8x   CS: %4x  EFLAGS: %8x\n\r",
                r["eip"], r["cs"], r["eflags"],
            ),
        )
    )


def trap_init(idt: InterruptTable, handlers: Mapping[Trap, int]) -> None:
    """Install the exception gates, sending vectors 18 to 47 to the reserved handler."""

    def address(trap: Trap) -> int:
        try:
            return handlers[trap]
        except KeyError:
            raise KeyError(f"no handler address for {trap.name}") from None

    for trap in _INSTALLED:
        if trap in _SYSTEM_GATES:
            idt.set_system_gate(trap, address(trap))
        else:
            idt.set_trap_gate(trap, address(trap))
    reserved = address(Trap.RESERVED)
    for vector in _RESERVED_VECTORS:
        idt.set_trap_gate(vector, reserved)


def unmask_pic(master_mask: int, slave_mask: int) -> Tuple[int, int]:
    """New interrupt masks: cascade line enabled on the master, IRQ13 on the slave."""
    return master_mask & 0xFB, slave_mask & 0xDF