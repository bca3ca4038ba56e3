import pytest

from quadkernel.ports import IOBus, Port8Bit, Port8BitSlow


def test_write_is_recorded():
    bus = IOBus()
    Port8Bit(bus, 0x20).write(0x11)
    assert bus.writes == [(0x20, 0x11)]


def test_write_keeps_low_byte():
    bus = IOBus()
    Port8Bit(bus, 0x21).write(0x1FF)
    assert bus.writes == [(0x21, 0xFF)]


def test_read_returns_fed_values_in_order():
    bus = IOBus()
    bus.feed(0x60, 0x10)
    bus.feed(0x60, 0x11)
    port = Port8Bit(bus, 0x60)
    assert [port.read(), port.read()] == [0x10, 0x11]


def test_read_without_data_is_zero():
    bus = IOBus()
    assert Port8Bit(bus, 0x60).read() == 0


def test_feeds_are_per_port():
    bus = IOBus()
    bus.feed(0x60, 0x1E)
    assert bus.read(0x61) == 0
    assert bus.read(0x60) == 0x1E


@pytest.mark.parametrize("number", [-1, 0x10000])
def test_invalid_port_number(number):
    with pytest.raises(ValueError):
        Port8Bit(IOBus(), number)


def test_bus_rejects_invalid_port():
    with pytest.raises(ValueError):
        IOBus().write(0x10000, 1)


def test_slow_write_records_and_waits():
    bus = IOBus()
    Port8BitSlow(bus, 0xA0).write(0x20)
    assert bus.writes == [(0xA0, 0x20)]
    assert bus.delays == 1


def test_plain_write_does_not_wait():
    bus = IOBus()
    Port8Bit(bus, 0xA0).write(0x20)
    assert bus.delays == 0