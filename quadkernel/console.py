"""An 80x25 text-mode screen and integer formatting."""

from __future__ import annotations

WIDTH = 80
HEIGHT = 25
_DEFAULT_ATTRIBUTE = 0x07
_INT32_MIN = -(2**31)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 2**32 if value & 0x80000000 else value


def format_number(num: int) -> str:
    """Format a 32-bit signed integer in decimal."""
    num = _to_int32(num)
    if num == 0:
        return "0"
    if num == _INT32_MIN:
        # Negating the smallest value overflows, leaving no digits.
        return "-"
    return str(num)


class TextScreen:
    """Video memory of attribute/character cells with a moving cursor."""

    def __init__(self) -> None:
        blank = (_DEFAULT_ATTRIBUTE << 8) | ord(" ")
        self._cells = [blank] * (WIDTH * HEIGHT)
        self._x = 0
        self._y = 0

    def _put(self, x: int, y: int, char_code: int) -> None:
        index = WIDTH * y + x
        self._cells[index] = (self._cells[index] & 0xFF00) | char_code

    def _clear(self) -> None:
        for y in range(HEIGHT):
            for x in range(WIDTH):
                self._put(x, y, ord(" "))

    def write(self, text: str) -> None:
        """Print text, stopping at the first NUL character."""
        for ch in text.split("\0", 1)[0]:
            if ch == "\n":
                self._x = 0
                self._y += 1
            elif ch == "\r":
                self._x = 0
            elif ch == "\b":
                if self._x > 0:
                    self._x -= 1
                    self._put(self._x, self._y, ord(" "))
            else:
                code = ord(ch)
                self._put(self._x, self._y, code if code <= 0xFF else ord("?"))
                self._x += 1

            if self._x >= WIDTH:
                self._x = 0
                self._y += 1
            if self._y >= HEIGHT:
                self._clear()
                self._x = 0
                self._y = 0

    def write_number(self, num: int) -> None:
        self.write(format_number(num))

    def text(self) -> str:
        """Return the visible rows, right-trimmed, without trailing blank rows."""
        rows = [
            "".join(chr(cell & 0xFF) for cell in self._cells[y * WIDTH:(y + 1) * WIDTH]).rstrip()
            for y in range(HEIGHT)
        ]
        while rows and not rows[-1]:
            rows.pop()
        return "\n".join(rows)

    def cursor(self) -> tuple[int, int]:
        """Return the cursor position as (column, row)."""
        return self._x, self._y