"""A simulated 8-bit I/O port space."""

from __future__ import annotations

from collections import defaultdict, deque

_MAX_PORT = 0xFFFF


def _check_port(port: int) -> int:
    if not 0 <= port <= _MAX_PORT:
        raise ValueError(f"port number out of range: {port}")
    return port


class IOBus:
    """Records port writes and serves queued values to port reads."""

    def __init__(self) -> None:
        self.writes: list[tuple[int, int]] = []
        self.delays = 0
        self._pending: defaultdict[int, deque[int]] = defaultdict(deque)

    def read(self, port: int) -> int:
        """Return the next value queued for the port, or 0 if none is queued."""
        queue = self._pending.get(_check_port(port))
        return queue.popleft() if queue else 0

    def write(self, port: int, value: int) -> None:
        """Record a byte written to the port."""
        self.writes.append((_check_port(port), value & 0xFF))

    def feed(self, port: int, value: int) -> None:
        """Queue a byte for a later read from the port."""
        self._pending[_check_port(port)].append(value & 0xFF)


class Port8Bit:
    """An 8-bit I/O port on a bus."""

    def __init__(self, bus: IOBus, number: int) -> None:
        self.bus = bus
        self.number = _check_port(number)

    def read(self) -> int:
        return self.bus.read(self.number)

    def write(self, data: int) -> None:
        self.bus.write(self.number, data & 0xFF)


class Port8BitSlow(Port8Bit):
    """An 8-bit port that waits for the device after each write."""

    def write(self, data: int) -> None:
        self.bus.write(self.number, data & 0xFF)
        self.bus.delays += 1