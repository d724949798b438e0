"""Polymorphic gates and composite circuits: half, full and three-bit adders."""

from __future__ import annotations

import argparse
import sys
from abc import ABC, abstractmethod
from typing import Optional, Sequence, TextIO

from oolab.logic import Component, LogicLevel, NandGate, Tester, Wire

__all__ = [
    "MAX_FANOUT",
    "MAX_COMPONENTS",
    "MAX_WIRES",
    "AndGate",
    "OrGate",
    "XorGate",
    "NandGate",
    "Circuit",
    "HalfAdder",
    "FullAdder",
    "ThreeBitAdder",
    "main",
]

MAX_FANOUT = 10
MAX_COMPONENTS = 10
MAX_WIRES = 10


class _TwoInputGate(Component):
    """A gate whose single output is a boolean function of two inputs."""

    def __init__(self, trace: Optional[TextIO] = None):
        super().__init__(num_inputs=2, num_outputs=1, trace=trace)

    @staticmethod
    def _evaluate(a: bool, b: bool) -> bool:
        raise NotImplementedError

    def compute_output(self) -> None:
        a, b = self.inputs[0], self.inputs[1]
        if LogicLevel.UNDEFINED in (a, b):
            level = LogicLevel.UNDEFINED
        elif self._evaluate(a == LogicLevel.HIGH, b == LogicLevel.HIGH):
            level = LogicLevel.HIGH
        else:
            level = LogicLevel.LOW
        self.outputs[0] = level
        super().compute_output()


class AndGate(_TwoInputGate):
    """A two-input AND gate."""

    @staticmethod
    def _evaluate(a: bool, b: bool) -> bool:
        return a and b


class OrGate(_TwoInputGate):
    """A two-input OR gate."""

    @staticmethod
    def _evaluate(a: bool, b: bool) -> bool:
        return a or b


class XorGate(_TwoInputGate):
    """A two-input XOR gate."""

    @staticmethod
    def _evaluate(a: bool, b: bool) -> bool:
        return a != b


class Circuit(Component, ABC):
    """A component built from other components joined by wires.

    Subclasses build their topology in ``__init__``, override
    ``compute_output`` to push their inputs through the internal wires,
    and say how a tester attaches to them in ``connect_tester``.
    """

    def __init__(self, num_inputs: int = 2, num_outputs: int = 1, trace: Optional[TextIO] = None):
        super().__init__(num_inputs=num_inputs, num_outputs=num_outputs, trace=trace)
        self.components: list[Component] = []
        self.wires: list[Wire] = []

    def add_component(self, component: Component) -> Component:
        """Take ownership of ``component`` and return it."""
        if len(self.components) >= MAX_COMPONENTS:
            raise ValueError(f"circuit component limit of {MAX_COMPONENTS} exceeded")
        self.components.append(component)
        return component

    def add_wire(self, component: Component, pin: int) -> Wire:
        """Create a wire driving input ``pin`` of ``component`` and return it."""
        if len(self.wires) >= MAX_WIRES:
            raise ValueError(f"circuit wire limit of {MAX_WIRES} exceeded")
        wire = Wire(max_fanout=MAX_FANOUT, trace=self.trace)
        wire.connect(component, pin)
        self.wires.append(wire)
        return wire

    @abstractmethod
    def connect_tester(self, tester: Tester) -> None:
        """Attach ``tester`` to this circuit's input wires and output pins."""


class HalfAdder(Circuit):
    """Adds two bits: output 0 is the sum, output 1 the carry."""

    def __init__(self, trace: Optional[TextIO] = None):
        super().__init__(num_inputs=2, num_outputs=2, trace=trace)
        xor = self.add_component(XorGate(trace=trace))
        self.add_wire(xor, 0)
        self.add_wire(xor, 1)

        carry = self.add_component(AndGate(trace=trace))
        self.wires[0].connect(carry, 0)
        self.wires[1].connect(carry, 1)

    def connect_tester(self, tester: Tester) -> None:
        tester.add_output(self.components[0], 0)
        tester.add_output(self.components[1], 0)
        tester.add_input(self.wires[0])
        tester.add_input(self.wires[1])

    def compute_output(self) -> None:
        self.wires[0].drive(self.inputs[0])
        self.wires[1].drive(self.inputs[1])
        self.outputs[0] = self.components[0].output(0)
        self.outputs[1] = self.components[1].output(0)
        super().compute_output()


class FullAdder(Circuit):
    """Adds two bits and a carry-in (input 2): output 0 is the sum, output 1 the carry."""

    def __init__(self, trace: Optional[TextIO] = None):
        super().__init__(num_inputs=3, num_outputs=2, trace=trace)
        xor_ab = self.add_component(XorGate(trace=trace))
        xor_sum = self.add_component(XorGate(trace=trace))
        and_carry = self.add_component(AndGate(trace=trace))
        and_ab = self.add_component(AndGate(trace=trace))
        or_out = self.add_component(OrGate(trace=trace))

        a = self.add_wire(xor_ab, 0)
        b = self.add_wire(xor_ab, 1)
        carry_in = self.add_wire(xor_sum, 1)
        between_xors = self.add_wire(xor_sum, 0)
        to_or_0 = self.add_wire(or_out, 0)
        to_or_1 = self.add_wire(or_out, 1)

        xor_ab.connect_output(between_xors, 0)
        and_carry.connect_output(to_or_0, 0)
        and_ab.connect_output(to_or_1, 0)

        a.connect(and_ab, 1)
        b.connect(and_ab, 0)
        carry_in.connect(and_carry, 0)
        between_xors.connect(and_carry, 1)

    def connect_tester(self, tester: Tester) -> None:
        tester.add_output(self.components[1], 0)
        tester.add_output(self.components[4], 0)
        for wire in self.wires[:3]:
            tester.add_input(wire)

    def compute_output(self) -> None:
        for wire, level in zip(self.wires[:3], self.inputs):
            wire.drive(level)
        self.outputs[0] = self.components[1].output(0)
        self.outputs[1] = self.components[4].output(0)
        super().compute_output()


class ThreeBitAdder(Circuit):
    """Adds two three-bit numbers.

    Inputs are ordered a0, b0, a1, b1, a2, b2 (least significant first);
    outputs are s0, s1, s2 and the final carry.
    """

    # internal wire driven by each input pin, matching the tester's bit order
    _INPUT_WIRES = (0, 3, 1, 4, 2, 5)

    def __init__(self, trace: Optional[TextIO] = None):
        super().__init__(num_inputs=6, num_outputs=4, trace=trace)
        half = self.add_component(HalfAdder(trace=trace))
        full_1 = self.add_component(FullAdder(trace=trace))
        full_2 = self.add_component(FullAdder(trace=trace))

        self.add_wire(half, 0)
        self.add_wire(full_1, 0)
        self.add_wire(full_2, 0)
        self.add_wire(half, 1)
        self.add_wire(full_1, 1)
        self.add_wire(full_2, 1)

        carry_0 = self.add_wire(full_1, 2)
        carry_1 = self.add_wire(full_2, 2)

        half.connect_output(carry_0, 1)
        full_1.connect_output(carry_1, 1)

    def connect_tester(self, tester: Tester) -> None:
        tester.add_output(self.components[0], 0)
        tester.add_output(self.components[1], 0)
        tester.add_output(self.components[2], 0)
        tester.add_output(self.components[2], 1)
        for index in self._INPUT_WIRES:
            tester.add_input(self.wires[index])

    def compute_output(self) -> None:
        for index, level in zip(self._INPUT_WIRES, self.inputs):
            self.wires[index].drive(level)
        self.outputs[0] = self.components[0].output(0)
        self.outputs[1] = self.components[1].output(0)
        self.outputs[2] = self.components[2].output(0)
        self.outputs[3] = self.components[2].output(1)
        super().compute_output()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Exercise a single gate, then run exhaustive tests on each adder."""
    parser = argparse.ArgumentParser(description="Test gates and adder circuits.")
    parser.parse_args(argv)

    gate = XorGate()
    gate.drive_input(0, LogicLevel.HIGH)
    gate.drive_input(1, LogicLevel.LOW)
    print(f"Test gate output: {gate.output(0)}")

    for circuit in (HalfAdder(), FullAdder(), ThreeBitAdder()):
        tester = Tester()
        circuit.connect_tester(tester)
        tester.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())