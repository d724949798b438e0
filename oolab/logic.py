"""Combinational logic simulation: wires, NAND gates and an exhaustive tester."""

from __future__ import annotations

import argparse
import sys
from contextlib import contextmanager
from enum import IntEnum
from typing import Iterable, Iterator, Optional, Sequence, TextIO

__all__ = [
    "LogicLevel",
    "Wire",
    "Component",
    "NandGate",
    "Tester",
    "format_result",
    "build_two_nand_circuit",
    "trace_interaction",
    "main",
]

TWO_NAND_MAX_FANOUT = 2


class LogicLevel(IntEnum):
    """The state of a logic line."""

    UNDEFINED = -1
    LOW = 0
    HIGH = 1

    def __str__(self) -> str:
        return str(int(self))


@contextmanager
def _traced(stream: Optional[TextIO], name: str) -> Iterator[None]:
    """Announce entry to and exit from ``name`` on ``stream`` when tracing."""
    if stream is None:
        yield
        return
    print(name, file=stream)
    yield
    print(f"{name} done", file=stream)


class Wire:
    """A single-source line that drives input pins of one or more components."""

    def __init__(self, max_fanout: Optional[int] = None, trace: Optional[TextIO] = None):
        self.max_fanout = max_fanout
        self.trace = trace
        self.targets: list[tuple[Component, int]] = []

    def connect(self, component: "Component", pin: int) -> None:
        """Make this wire drive input ``pin`` of ``component``."""
        if self.max_fanout is not None and len(self.targets) >= self.max_fanout:
            raise ValueError(f"wire fanout limit of {self.max_fanout} exceeded")
        self.targets.append((component, pin))

    def drive(self, level: LogicLevel) -> None:
        """Set the wire's level, propagating it to every connected input."""
        level = LogicLevel(level)
        with _traced(self.trace, f"{type(self).__name__}.drive"):
            for component, pin in self.targets:
                component.drive_input(pin, level)


class Component:
    """Base class for anything with input pins and output pins."""

    def __init__(self, num_inputs: int = 2, num_outputs: int = 1, trace: Optional[TextIO] = None):
        self.inputs: list[LogicLevel] = [LogicLevel.UNDEFINED] * num_inputs
        self.outputs: list[LogicLevel] = [LogicLevel.UNDEFINED] * num_outputs
        self.output_wires: list[tuple[Wire, int]] = []
        self.trace = trace

    def connect_output(self, wire: Wire, pin: int = 0) -> None:
        """Make output ``pin`` drive ``wire``."""
        if not 0 <= pin < len(self.outputs):
            raise IndexError(f"output pin {pin} out of range")
        self.output_wires.append((wire, pin))

    def drive_input(self, pin: int, level: LogicLevel) -> None:
        """Set input ``pin`` and recompute the outputs."""
        with _traced(self.trace, f"{type(self).__name__}.drive_input"):
            self.inputs[pin] = LogicLevel(level)
            self.compute_output()

    def output(self, pin: int = 0) -> LogicLevel:
        """Return the current level of output ``pin``."""
        return self.outputs[pin]

    def compute_output(self) -> None:
        """Drive every connected output wire with its pin's current level."""
        for wire, pin in self.output_wires:
            wire.drive(self.outputs[pin])


class NandGate(Component):
    """A two-input NAND gate."""

    def compute_output(self) -> None:
        with _traced(self.trace, f"{type(self).__name__}.compute_output"):
            a, b = self.inputs[0], self.inputs[1]
            if LogicLevel.UNDEFINED in (a, b):
                level = LogicLevel.UNDEFINED
            elif a == LogicLevel.HIGH and b == LogicLevel.HIGH:
                level = LogicLevel.LOW
            else:
                level = LogicLevel.HIGH
            self.outputs[0] = level
            super().compute_output()


class Tester:
    """Drives every combination of input levels and observes outputs."""

    def __init__(self) -> None:
        self.inputs: list[Wire] = []
        self.outputs: list[tuple[Component, int]] = []

    def add_input(self, wire: Wire) -> None:
        """Add a wire to drive; the first wire added is the least significant bit."""
        self.inputs.append(wire)

    def add_output(self, component: Component, pin: int = 0) -> None:
        """Add a component output pin to observe."""
        self.outputs.append((component, pin))

    def results(self) -> Iterator[tuple[tuple[LogicLevel, ...], tuple[LogicLevel, ...]]]:
        """Yield (inputs, outputs) for each state; inputs are most significant first."""
        count = len(self.inputs)
        for state in range(1 << count):
            levels = [
                LogicLevel.HIGH if (state >> bit) & 1 else LogicLevel.LOW
                for bit in range(count)
            ]
            for wire, level in zip(self.inputs, levels):
                wire.drive(level)
            observed = tuple(component.output(pin) for component, pin in self.outputs)
            yield tuple(reversed(levels)), observed

    def run(self, out: Optional[TextIO] = None) -> None:
        """Print one result line per input combination."""
        stream = sys.stdout if out is None else out
        for inputs, outputs in self.results():
            print(format_result(inputs, outputs), file=stream)


def format_result(inputs: Iterable[LogicLevel], outputs: Iterable[LogicLevel]) -> str:
    """Render one tester line."""
    ins = "".join(f"{int(level)} " for level in inputs)
    outs = "".join(f"{int(level)} " for level in outputs)
    return f"Testing input {ins} result: {outs}"


def _wire_two_nand(gates: Sequence[NandGate], wires: Sequence[Wire]) -> None:
    # wires 0 and 1 are the circuit inputs; wire 2 joins gate 0's output to gate 1
    wires[0].connect(gates[0], 0)
    wires[0].connect(gates[1], 0)
    wires[1].connect(gates[0], 1)
    wires[2].connect(gates[1], 1)
    gates[0].connect_output(wires[2], 0)


def build_two_nand_circuit() -> Tester:
    """Build the 2-input, 2-gate example circuit and return a tester attached to it."""
    gates = [NandGate() for _ in range(2)]
    wires = [Wire(max_fanout=TWO_NAND_MAX_FANOUT) for _ in range(3)]
    _wire_two_nand(gates, wires)

    tester = Tester()
    tester.add_output(gates[1], 0)
    tester.add_input(wires[1])
    tester.add_input(wires[0])
    return tester


def trace_interaction(out: Optional[TextIO] = None) -> None:
    """Print the call sequence produced by driving the example circuit's first input low."""
    stream = sys.stdout if out is None else out
    gates = [NandGate(trace=stream) for _ in range(2)]
    wires = [Wire(max_fanout=TWO_NAND_MAX_FANOUT, trace=stream) for _ in range(3)]
    for gate in gates:
        gate.compute_output()
    _wire_two_nand(gates, wires)

    print("start", file=stream)
    wires[0].drive(LogicLevel.LOW)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the example circuit's tester, or trace its call sequence."""
    parser = argparse.ArgumentParser(description="Simulate a two-gate NAND circuit.")
    parser.add_argument(
        "--trace",
        action="store_true",
        help="print the interaction sequence instead of the truth table",
    )
    args = parser.parse_args(argv)
    if args.trace:
        trace_interaction()
    else:
        build_two_nand_circuit().run()
    return 0


if __name__ == "__main__":
    sys.exit(main())