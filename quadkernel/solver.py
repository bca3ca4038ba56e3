"""Interactive keyboard-driven solver for integer quadratic equations."""

from __future__ import annotations

import math
from typing import Callable

from quadkernel.console import format_number

_BUFFER_CAPACITY = 31
_PRESS_ANY_KEY = "\nPress any key to solve another equation...\n"


class ShutdownRequested(Exception):
    """Raised when the user asks the machine to halt."""


def _int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 2**32 if value & 0x80000000 else value


def _div(numerator: int, denominator: int) -> int:
    """32-bit signed division truncating toward zero."""
    numerator, denominator = _int32(numerator), _int32(denominator)
    if denominator == 0:
        raise ZeroDivisionError("integer division by zero")
    quotient = abs(numerator) // abs(denominator)
    return _int32(-quotient if (numerator < 0) != (denominator < 0) else quotient)


def parse_coefficient(text: str) -> int:
    """Read a signed integer, ignoring any character that is not a digit."""
    negative = text.startswith("-")
    digits = text[1:] if negative else text
    number = 0
    for ch in digits:
        if "0" <= ch <= "9":
            number = _int32(number * 10 + (ord(ch) - ord("0")))
    return _int32(-number) if negative else number


def solve_quadratic(a: int, b: int, c: int) -> str:
    """Return the printed report for a*x^2 + b*x + c = 0 in 32-bit arithmetic."""
    a, b, c = _int32(a), _int32(b), _int32(c)
    num = format_number
    lines = [f"\nSolving equation: {num(a)}x^2 + {num(b)}x + {num(c)} = 0\n"]

    if a == 0:
        lines.append("Not a quadratic equation (a = 0)\n")
        if b != 0:
            lines.append(f"Linear solution: x = {num(_div(-c, b))}\n")
        else:
            lines.append("No solution\n")
        return "".join(lines)

    discriminant = _int32(b * b - 4 * a * c)
    two_a = _int32(2 * a)
    lines.append(f"Discriminant = {num(discriminant)}\n")

    if discriminant > 0:
        lines.append("Two real solutions exist\n")
        root = math.isqrt(discriminant)
        if root * root == discriminant:
            lines.append(f"x1 = {num(_div(-b + root, two_a))}\n")
            lines.append(f"x2 = {num(_div(-b - root, two_a))}\n")
        else:
            lines.append("Solutions involve square roots\n")
            for label, sign in (("x1", "+"), ("x2", "-")):
                lines.append(
                    f"{label} = (-{num(b)} {sign} sqrt({num(discriminant)})) / {num(two_a)}\n"
                )
    elif discriminant == 0:
        lines.append("One real solution exists\n")
        lines.append(f"x = {num(_div(-b, two_a))}\n")
    else:
        lines.append("No real solutions (complex solutions)\n")
    return "".join(lines)


class QuadraticSolver:
    """Collects three coefficients from keystrokes and solves the equation."""

    def __init__(self, write: Callable[[str], None]) -> None:
        self._write = write
        self._buffer: list[str] = []
        self._stage = 0
        self._a = self._b = self._c = 0

    def start(self) -> None:
        """Print the banner and prompt for the first coefficient."""
        self._write("QUADRATIC EQUATION SOLVER\n")
        self._write("ax^2 + bx + c = 0\n")
        self._write("Press 'q' to quit\n\n")
        self._write("Enter coefficient a: ")
        self._stage = 0

    def feed(self, key: str) -> None:
        """Handle one typed character."""
        if len(key) != 1:
            raise ValueError(f"expected a single character, got {key!r}")

        if key in "qQ":
            self._write("\nShutting down...\n")
            raise ShutdownRequested()

        if key in "\n\r":
            self._write("\n")
            number = parse_coefficient("".join(self._buffer))
            if self._stage == 0:
                self._a = number
                self._stage = 1
                self._write("Enter coefficient b: ")
            elif self._stage == 1:
                self._b = number
                self._stage = 2
                self._write("Enter coefficient c: ")
            elif self._stage == 2:
                self._c = number
                self._stage = 3
                self.solve()
            self._buffer.clear()
        elif key == "\b":
            if self._buffer:
                self._buffer.pop()
                self._write("\b \b")
        elif " " <= key <= "~" and len(self._buffer) < _BUFFER_CAPACITY:
            self._buffer.append(key)
            self._write(key)

    def solve(self) -> None:
        """Print the solution for the collected coefficients."""
        self._write(solve_quadratic(self._a, self._b, self._c))
        if self._a == 0:
            return
        self._write(_PRESS_ANY_KEY)
        self._stage = 0
        self._a = self._b = self._c = 0