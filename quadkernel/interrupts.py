"""Interrupt descriptor table, PIC set-up and keyboard interrupt dispatch."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable

from quadkernel.descriptors import GlobalDescriptorTable
from quadkernel.ports import IOBus, Port8Bit, Port8BitSlow

IDT_ENTRIES = 256
IDT_DESC_PRESENT = 0x80
IDT_INTERRUPT_GATE = 0xE
KEYBOARD_DATA_PORT = 0x60
END_OF_INTERRUPT = 0x20
# Simulated load address of the interrupt descriptor table.
IDT_BASE = 0x00200000

_GATE_LAYOUT = struct.Struct("<HHBBH")
_POINTER_LAYOUT = struct.Struct("<HI")

# Scancode set 1, make codes only; NUL marks keys without a character.
_KEYMAP = (
    "\0\x1b1234567890-=\b\tqwertyuiop[]\n\0asdfghjkl;'`\0\\zxcvbnm,./\0*\0 "
).ljust(128, "\0")
_REVERSE_KEYMAP = {ch: code for code, ch in enumerate(_KEYMAP) if ch != "\0"}


class Handler(IntEnum):
    """Simulated entry-point addresses of the interrupt stubs."""

    IGNORE = 0x00100100
    IRQ0 = 0x00100110
    IRQ1 = 0x00100120


def decode_scancode(code: int) -> str | None:
    """Return the character for a scancode, or None if the key has none."""
    if not 0 <= code <= 0xFF:
        raise ValueError(f"scancode out of range: {code}")
    if code < len(_KEYMAP) and _KEYMAP[code] != "\0":
        return _KEYMAP[code]
    return None


def scancode_for(char: str) -> int:
    """Return the scancode that produces a character."""
    try:
        return _REVERSE_KEYMAP[char]
    except KeyError:
        raise ValueError(f"no key produces {char!r}") from None


@dataclass
class GateDescriptor:
    """One eight-byte entry of the interrupt descriptor table."""

    handler_address_low: int = 0
    code_segment_selector: int = 0
    reserved: int = 0
    access: int = 0
    handler_address_high: int = 0

    @property
    def handler_address(self) -> int:
        return (self.handler_address_high << 16) | self.handler_address_low

    def to_bytes(self) -> bytes:
        """Return the gate as it is laid out in memory."""
        return _GATE_LAYOUT.pack(
            self.handler_address_low,
            self.code_segment_selector,
            self.reserved,
            self.access,
            self.handler_address_high,
        )


@dataclass(frozen=True)
class TablePointer:
    """The operand of the table-load instruction: size minus one and base."""

    size: int
    base: int

    def to_bytes(self) -> bytes:
        return _POINTER_LAYOUT.pack(self.size, self.base)


class InterruptManager:
    """Owns the interrupt table and the two cascaded interrupt controllers."""

    def __init__(
        self,
        hardware_interrupt_offset: int,
        gdt: GlobalDescriptorTable,
        bus: IOBus,
        on_key: Callable[[str], None],
    ) -> None:
        self.hardware_interrupt_offset = hardware_interrupt_offset & 0xFFFF
        self.bus = bus
        self.on_key = on_key
        self.interrupts_enabled = False
        self.table = [GateDescriptor() for _ in range(IDT_ENTRIES)]

        self._master_command = Port8BitSlow(bus, 0x20)
        self._master_data = Port8BitSlow(bus, 0x21)
        self._slave_command = Port8BitSlow(bus, 0xA0)
        self._slave_data = Port8BitSlow(bus, 0xA1)

        code_segment = gdt.code_segment_selector()
        for interrupt in range(IDT_ENTRIES):
            self.set_entry(interrupt, code_segment, Handler.IGNORE, 0, IDT_INTERRUPT_GATE)
        offset = self.hardware_interrupt_offset
        self.set_entry(offset + 0x00, code_segment, Handler.IRQ0, 0, IDT_INTERRUPT_GATE)
        self.set_entry(offset + 0x01, code_segment, Handler.IRQ1, 0, IDT_INTERRUPT_GATE)

        self._master_command.write(0x11)
        self._slave_command.write(0x11)
        self._master_data.write(offset)
        self._slave_data.write(offset + 8)
        self._master_data.write(0x04)
        self._slave_data.write(0x02)
        self._master_data.write(0x01)
        self._slave_data.write(0x01)
        self._master_data.write(0x00)
        self._slave_data.write(0x00)

    def set_entry(
        self,
        interrupt: int,
        code_segment: int,
        handler_address: int,
        privilege_level: int,
        descriptor_type: int,
    ) -> None:
        """Point an interrupt vector at a handler."""
        address = int(handler_address) & 0xFFFFFFFF
        self.table[interrupt & 0xFF] = GateDescriptor(
            handler_address_low=address & 0xFFFF,
            code_segment_selector=code_segment & 0xFFFF,
            reserved=0,
            access=(IDT_DESC_PRESENT | ((privilege_level & 3) << 5) | descriptor_type) & 0xFF,
            handler_address_high=(address >> 16) & 0xFFFF,
        )

    def activate(self) -> None:
        self.interrupts_enabled = True

    def deactivate(self) -> None:
        self.interrupts_enabled = False

    def handle_interrupt(self, interrupt: int, esp: int) -> int:
        """Dispatch an interrupt and acknowledge hardware ones; return the stack pointer."""
        offset = self.hardware_interrupt_offset
        if offset <= interrupt < offset + 16:
            if interrupt == offset + 1:
                self.handle_keyboard_interrupt()
            self._master_command.write(END_OF_INTERRUPT)
            if offset + 8 <= interrupt:
                self._slave_command.write(END_OF_INTERRUPT)
        return esp

    def handle_keyboard_interrupt(self) -> None:
        """Read a scancode from the keyboard and pass on its character."""
        char = decode_scancode(Port8Bit(self.bus, KEYBOARD_DATA_PORT).read())
        if char is not None:
            self.on_key(char)

    def table_pointer(self) -> TablePointer:
        """Return the descriptor used to load the interrupt table."""
        return TablePointer(IDT_ENTRIES * _GATE_LAYOUT.size - 1, IDT_BASE)