import pytest
from hypothesis import given, strategies as st

from minikern.boot import MemoryLayout, memory_layout, start_kernel
from minikern.console import BootParams
from minikern.gates import GateType
from minikern.memory import PAGE_SIZE

MB = 1024 * 1024


def test_full_sixteen_megabytes():
    layout = memory_layout(15 * 1024)
    assert layout == MemoryLayout(16 * MB, 4 * MB, 4 * MB)


def test_memory_is_capped():
    assert memory_layout(0xFFFF).memory_end == 16 * MB


def test_no_extended_memory():
    assert memory_layout(0) == MemoryLayout(1 * MB, 1 * MB, 1 * MB)


def test_buffer_thresholds():
    assert memory_layout(5 * 1024).buffer_memory_end == 1 * MB
    assert memory_layout(7 * 1024).buffer_memory_end == 2 * MB
    assert memory_layout(11 * 1024).buffer_memory_end == 2 * MB


@given(st.integers(0, 0xFFFF))
def test_layout_invariants(ext):
    layout = memory_layout(ext)
    assert layout.memory_end % PAGE_SIZE == 0
    assert layout.memory_end <= 16 * MB
    assert layout.main_memory_start == layout.buffer_memory_end
    assert layout.buffer_memory_end <= layout.memory_end


def test_layout_rejects_out_of_range():
    with pytest.raises(ValueError):
        memory_layout(-1)
    with pytest.raises(ValueError):
        memory_layout(0x10000)


def test_start_kernel_prints_and_sets_up():
    layout, pages, idt, tty = start_kernel(15 * 1024, BootParams())
    lines = tty.console.lines()
    assert any(line.startswith("this is line 24") for line in lines)
    summary = f"memory start: {layout.main_memory_start}, end: {layout.memory_end}"
    assert any(line.startswith(summary) for line in lines)
    assert pages.high_memory == layout.memory_end
    assert pages.free_pages() == (layout.memory_end - layout.main_memory_start) // PAGE_SIZE
    assert (idt[0x80][1] >> 8) & 0xF == GateType.INTERRUPT
    assert (idt[3][1] >> 13) & 3 == 3