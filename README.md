# quadkernel

quadkernel simulates a small 32-bit hobby kernel whose one job is to solve
quadratic equations `ax^2 + bx + c = 0` typed on its keyboard. All
arithmetic is done on signed 32-bit integers, so divisions truncate toward
zero and large values wrap around.

The package is made of these modules:

- `quadkernel.descriptors`: `SegmentDescriptor` (packed 8-byte segment
  descriptors, with `to_bytes`, `from_bytes`, `base` and `limit`) and
  `GlobalDescriptorTable` (null, unused, code and data segments covering
  64 MiB, with `code_segment_selector`, `data_segment_selector` and
  `to_bytes`).
- `quadkernel.ports`: `IOBus`, which records port writes and serves queued
  values to port reads, and the `Port8Bit` and `Port8BitSlow` ports on it.
- `quadkernel.console`: `TextScreen`, an 80x25 text screen handling
  newline, carriage return, backspace and line wrapping, and clearing itself
  once the last row is passed; and `format_number` for 32-bit integers.
- `quadkernel.interrupts`: `InterruptManager`, which fills a 256-entry
  interrupt table of `GateDescriptor` entries, programs the two cascaded
  interrupt controllers over the bus, and turns keyboard scancodes into
  characters; plus `decode_scancode` and `scancode_for`.
- `quadkernel.solver`: `solve_quadratic`, `parse_coefficient`, and the
  interactive `QuadraticSolver`, which raises `ShutdownRequested` when `q`
  or `Q` is typed.
- `quadkernel.kernel`: `Machine`, which wires all of the above together, and
  the command-line entry point `main`.

## Installation

```
pip install .
```

## Running

```
quadkernel
```

The command boots the machine and types standard input into it line by
line, printing everything the machine prints. The solver asks for `a`, `b`
and `c` in turn; put each number on its own line. Only characters that
have a key in the keyboard map are typed (lower-case letters, digits and
some punctuation); others are dropped. Within a number, characters other
than digits are ignored and a leading `-` makes it negative; a number holds
at most 31 characters. A `q` anywhere in the input shuts the machine down
and ends the run.

```
quadkernel --screen
```

prints the final contents of the 80x25 screen instead of the running
transcript.

After an equation with `a` not zero has been solved, the solver goes back to
asking for `a` (without printing the prompt again). When `a` is zero the
equation is reported as linear and no further coefficients are taken.

## Using the library

```python
from quadkernel.kernel import Machine

machine = Machine()
machine.boot()
machine.type_text("1\n-3\n2\n")
print(machine.screen.text())   # visible screen rows
print(machine.transcript)      # everything printed since boot
```

`Machine.press` delivers a single raw scancode through the keyboard
interrupt; keys are ignored once the machine has halted.

The solver can be used on its own:

```python
from quadkernel.solver import parse_coefficient, solve_quadratic

print(solve_quadratic(1, -3, 2))
print(parse_coefficient("-12"))
```

## What it does not do

Everything here is a simulation: nothing boots on real or virtual
hardware, no real I/O ports are touched, and the descriptor tables are only
built as bytes, never loaded into a processor. Solutions are integers only;
irrational roots are shown as expressions with `sqrt`, and complex roots
are only reported as existing.

## Tests

```
pip install .[test]
pytest
```