"""A simulated machine that boots into the quadratic equation solver."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from quadkernel.console import TextScreen
from quadkernel.descriptors import GlobalDescriptorTable
from quadkernel.interrupts import KEYBOARD_DATA_PORT, InterruptManager, scancode_for
from quadkernel.ports import IOBus
from quadkernel.solver import QuadraticSolver, ShutdownRequested

HARDWARE_INTERRUPT_OFFSET = 0x20
KEYBOARD_IRQ = 1


class Machine:
    """Screen, I/O bus, descriptor tables and the solver wired together."""

    def __init__(self) -> None:
        self.screen = TextScreen()
        self.bus = IOBus()
        self.gdt: GlobalDescriptorTable | None = None
        self.interrupts: InterruptManager | None = None
        self.solver = QuadraticSolver(self._write)
        self.halted = False
        self._transcript: list[str] = []

    def _write(self, text: str) -> None:
        self.screen.write(text)
        self._transcript.append(text)

    @property
    def transcript(self) -> str:
        """Everything printed since power-on."""
        return "".join(self._transcript)

    def boot(self) -> None:
        """Load the tables, enable interrupts and start the solver."""
        self.gdt = GlobalDescriptorTable()
        self.interrupts = InterruptManager(
            HARDWARE_INTERRUPT_OFFSET, self.gdt, self.bus, self.solver.feed
        )
        self._write("Initializing system...\n")
        self.interrupts.activate()
        self.solver.start()

    def press(self, scancode: int) -> None:
        """Deliver a scancode through the keyboard interrupt."""
        if self.interrupts is None:
            raise RuntimeError("the machine has not been booted")
        if self.halted or not self.interrupts.interrupts_enabled:
            return
        self.bus.feed(KEYBOARD_DATA_PORT, scancode)
        try:
            self.interrupts.handle_interrupt(
                self.interrupts.hardware_interrupt_offset + KEYBOARD_IRQ, 0
            )
        except ShutdownRequested:
            self.interrupts.deactivate()
            self.halted = True

    def type_text(self, text: str) -> None:
        """Press the key for each character of the text."""
        for char in text:
            self.press(scancode_for(char))


def _typeable(text: str) -> str:
    result = []
    for char in text:
        try:
            scancode_for(char)
        except ValueError:
            continue
        result.append(char)
    return "".join(result)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="quadkernel",
        description="Boot the simulated machine and type standard input into it.",
    )
    parser.add_argument(
        "--screen",
        action="store_true",
        help="print the final screen contents instead of the transcript",
    )
    args = parser.parse_args(argv)

    machine = Machine()
    machine.boot()
    emitted = 0
    if not args.screen:
        sys.stdout.write(machine.transcript)
        emitted = len(machine.transcript)

    for line in sys.stdin:
        machine.type_text(_typeable(line.rstrip("\r\n") + "\n"))
        if not args.screen:
            transcript = machine.transcript
            sys.stdout.write(transcript[emitted:])
            emitted = len(transcript)
        if machine.halted:
            break

    if args.screen:
        print(machine.screen.text())
    sys.stdout.flush()
    return 0