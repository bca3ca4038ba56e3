import struct

import pytest

from quadkernel.descriptors import GlobalDescriptorTable
from quadkernel.interrupts import (
    GateDescriptor,
    Handler,
    InterruptManager,
    decode_scancode,
    scancode_for,
)
from quadkernel.ports import IOBus


@pytest.fixture
def setup():
    bus = IOBus()
    received = []
    manager = InterruptManager(0x20, GlobalDescriptorTable(), bus, received.append)
    return manager, bus, received


@pytest.mark.parametrize("char", list("1234567890-=qwertyuiop[]asdfghjkl;'`\\zxcvbnm,./* \n\b\t"))
def test_scancode_round_trip(char):
    assert decode_scancode(scancode_for(char)) == char


def test_known_scancodes():
    assert decode_scancode(0x10) == "q"
    assert decode_scancode(0x1C) == "\n"
    assert decode_scancode(0x39) == " "


@pytest.mark.parametrize("code", [0, 0x1D, 0x2A, 0x80, 0x9C, 0xFF])
def test_codes_without_character(code):
    assert decode_scancode(code) is None


def test_decode_out_of_range():
    with pytest.raises(ValueError):
        decode_scancode(0x100)


def test_scancode_for_unknown_char():
    with pytest.raises(ValueError):
        scancode_for("Q")


def test_pic_initialisation_sequence(setup):
    manager, bus, _ = setup
    assert bus.writes == [
        (0x20, 0x11), (0xA0, 0x11),
        (0x21, 0x20), (0xA1, 0x28),
        (0x21, 0x04), (0xA1, 0x02),
        (0x21, 0x01), (0xA1, 0x01),
        (0x21, 0x00), (0xA1, 0x00),
    ]
    assert bus.delays == len(bus.writes)


def test_table_entries(setup):
    manager, _, _ = setup
    gdt = GlobalDescriptorTable()
    assert len(manager.table) == 256
    keyboard_gate = manager.table[0x21]
    assert keyboard_gate.handler_address == Handler.IRQ1
    assert keyboard_gate.code_segment_selector == gdt.code_segment_selector()
    assert keyboard_gate.access == 0x8E
    assert manager.table[0x20].handler_address == Handler.IRQ0
    others = [g for i, g in enumerate(manager.table) if i not in (0x20, 0x21)]
    assert all(g.handler_address == Handler.IGNORE for g in others)


def test_set_entry_masks_privilege(setup):
    manager, _, _ = setup
    manager.set_entry(0x80, 0x10, 0x12345678, 7, 0xE)
    gate = manager.table[0x80]
    assert gate.access == 0x80 | (3 << 5) | 0xE
    assert gate.handler_address == 0x12345678


def test_gate_descriptor_bytes():
    gate = GateDescriptor(0x5678, 0x10, 0, 0x8E, 0x1234)
    raw = gate.to_bytes()
    assert len(raw) == 8
    assert struct.unpack("<HHBBH", raw) == (0x5678, 0x10, 0, 0x8E, 0x1234)


def test_table_pointer(setup):
    manager, _, _ = setup
    pointer = manager.table_pointer()
    assert pointer.size == 256 * 8 - 1
    assert struct.unpack("<HI", pointer.to_bytes()) == (pointer.size, pointer.base)


def test_keyboard_interrupt_delivers_key(setup):
    manager, bus, received = setup
    bus.feed(0x60, scancode_for("5"))
    bus.writes.clear()
    assert manager.handle_interrupt(0x21, 1234) == 1234
    assert received == ["5"]
    assert bus.writes == [(0x20, 0x20)]


def test_key_release_is_ignored(setup):
    manager, bus, received = setup
    bus.feed(0x60, scancode_for("5") | 0x80)
    manager.handle_interrupt(0x21, 0)
    assert received == []


def test_slave_interrupt_acknowledges_both(setup):
    manager, bus, _ = setup
    bus.writes.clear()
    manager.handle_interrupt(0x28, 0)
    assert bus.writes == [(0x20, 0x20), (0xA0, 0x20)]


def test_interrupt_outside_hardware_range(setup):
    manager, bus, received = setup
    bus.writes.clear()
    assert manager.handle_interrupt(0x0E, 77) == 77
    assert manager.handle_interrupt(0x30, 78) == 78
    assert bus.writes == []
    assert received == []


def test_activate_and_deactivate(setup):
    manager, _, _ = setup
    assert manager.interrupts_enabled is False
    manager.activate()
    assert manager.interrupts_enabled is True
    manager.deactivate()
    assert manager.interrupts_enabled is False