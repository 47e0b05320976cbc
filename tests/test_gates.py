import pytest
from hypothesis import given, strategies as st

from minikern.gates import GateType, InterruptTable, encode_gate, sched_init


def _address(descriptor):
    low, high = descriptor
    return (high & 0xFFFF0000) | (low & 0xFFFF)


def _dpl(descriptor):
    return (descriptor[1] >> 13) & 3


def _type(descriptor):
    return (descriptor[1] >> 8) & 0xF


def test_interrupt_gate_for_kernel_has_documented_flags():
    low, high = encode_gate(GateType.INTERRUPT, 0, 0)
    assert high & 0xFFFF == 0x8E00
    assert low >> 16 == 0x0008


@given(
    st.sampled_from(list(GateType)),
    st.integers(0, 3),
    st.integers(0, 0xFFFFFFFF),
)
def test_encoded_gate_round_trips(gate_type, dpl, addr):
    descriptor = encode_gate(gate_type, dpl, addr)
    assert _address(descriptor) == addr
    assert _dpl(descriptor) == dpl
    assert _type(descriptor) == gate_type
    assert descriptor[1] & 0x8000
    assert descriptor[0] >> 16 == 0x0008


def test_encode_gate_rejects_bad_privilege():
    with pytest.raises(ValueError):
        encode_gate(GateType.TRAP, 4, 0)


def test_encode_gate_rejects_wide_address():
    with pytest.raises(ValueError):
        encode_gate(GateType.TRAP, 0, 1 << 32)


def test_unset_entries_are_zero():
    assert InterruptTable()[200] == (0, 0)


def test_gate_kinds():
    idt = InterruptTable()
    idt.set_trap_gate(1, 0x1234)
    idt.set_intr_gate(2, 0x5678)
    idt.set_system_gate(3, 0x9ABC)
    assert (_type(idt[1]), _dpl(idt[1])) == (GateType.TRAP, 0)
    assert (_type(idt[2]), _dpl(idt[2])) == (GateType.INTERRUPT, 0)
    assert (_type(idt[3]), _dpl(idt[3])) == (GateType.TRAP, 3)
    assert _address(idt[3]) == 0x9ABC


def test_vector_out_of_range():
    idt = InterruptTable()
    with pytest.raises(IndexError):
        idt.set_trap_gate(256, 0)
    with pytest.raises(IndexError):
        idt[-1]


def test_sched_init_installs_system_call():
    idt = InterruptTable()
    sched_init(idt, 0xC0DE)
    assert _address(idt[0x80]) == 0xC0DE
    assert _type(idt[0x80]) == GateType.INTERRUPT
    assert _dpl(idt[0x80]) == 0