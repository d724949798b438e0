"""Build a logic circuit from a textual netlist and test it exhaustively."""

from __future__ import annotations

import argparse
import sys
from collections import deque
from typing import Iterable, Optional, Sequence, TextIO

from oolab.adders import AndGate, OrGate, XorGate
from oolab.logic import Component, LogicLevel, Tester, Wire

__all__ = [
    "NotGate",
    "NetlistCircuit",
    "gate_for",
    "main",
]


class NotGate(Component):
    """An inverter acting on input 0."""

    def compute_output(self) -> None:
        level = self.inputs[0]
        if level == LogicLevel.LOW:
            self.outputs[0] = LogicLevel.HIGH
        elif level == LogicLevel.HIGH:
            self.outputs[0] = LogicLevel.LOW
        else:
            self.outputs[0] = LogicLevel.UNDEFINED
        super().compute_output()


_GATE_TYPES = {
    "xor": XorGate,
    "and": AndGate,
    "or": OrGate,
    "not": NotGate,
}


def gate_for(type_name: str) -> Component:
    """Create a new gate of the named netlist type."""
    try:
        gate_type = _GATE_TYPES[type_name]
    except KeyError:
        raise ValueError(f"unknown gate type {type_name!r}") from None
    return gate_type()


class _Tokens:
    """Whitespace-separated tokens read across lines, able to drop the rest of a line."""

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self._pending: deque[str] = deque()

    def next(self) -> Optional[str]:
        while not self._pending:
            line = next(self._lines, None)
            if line is None:
                return None
            self._pending.extend(line.split())
        return self._pending.popleft()

    def require(self, what: str) -> str:
        token = self.next()
        if token is None:
            raise ValueError(f"unexpected end of netlist while reading {what}")
        return token

    def require_int(self, what: str) -> int:
        token = self.require(what)
        try:
            return int(token)
        except ValueError:
            raise ValueError(f"expected an integer for {what}, got {token!r}") from None

    def skip_line(self) -> None:
        self._pending.clear()


class NetlistCircuit:
    """A circuit of named components and named wires, with a tester attached."""

    def __init__(self) -> None:
        self.components: dict[str, Component] = {}
        self.wires: dict[str, Wire] = {}
        self.tester = Tester()

    def _component(self, name: str) -> Component:
        try:
            return self.components[name]
        except KeyError:
            raise KeyError(f"no component named {name!r}") from None

    def _wire(self, name: str) -> Wire:
        try:
            return self.wires[name]
        except KeyError:
            raise KeyError(f"no wire named {name!r}") from None

    def add_component(self, component: Component, name: str) -> None:
        """Register ``component`` under ``name``."""
        self.components[name] = component

    def add_wire(self, gate_name: str, pin: int, wire_name: str) -> Wire:
        """Create a wire named ``wire_name`` driving input ``pin`` of ``gate_name``."""
        component = self._component(gate_name)
        wire = Wire()
        wire.connect(component, pin)
        self.wires[wire_name] = wire
        return wire

    def connect(self, source: str, dest: str, pin: int) -> str:
        """Join a component output to a wire, or a wire to a component input.

        If ``source`` names a component, its output ``pin`` drives wire ``dest``;
        otherwise wire ``source`` drives input ``pin`` of component ``dest``.
        Returns a description of the connection made.
        """
        if source in self.components:
            wire = self._wire(dest)
            self.components[source].connect_output(wire, pin)
            return f"Adding connection from component {source} pin {pin} to wire {dest}"
        wire = self._wire(source)
        component = self._component(dest)
        wire.connect(component, pin)
        return f"Adding connection from wire {source} to component {dest} pin idx {pin}"

    def build(self, lines: Iterable[str], out: Optional[TextIO] = None) -> None:
        """Read netlist commands until ``end`` or the end of input."""
        stream = sys.stdout if out is None else out
        tokens = _Tokens(lines)
        while True:
            request = tokens.next()
            if request is None or request == "end":
                break
            if request.startswith("#"):
                tokens.skip_line()
            elif request == "component":
                gate_type = tokens.require("gate type")
                gate_name = tokens.require("gate name")
                print(f"Adding gate of type {gate_type} named {gate_name}", file=stream)
                self.add_component(gate_for(gate_type), gate_name)
            elif request == "wire":
                gate_name = tokens.require("gate name")
                pin = tokens.require_int("gate input index")
                wire_name = tokens.require("wire name")
                print(
                    f"Adding wire named {wire_name} driving {gate_name} input pin {pin}",
                    file=stream,
                )
                self.add_wire(gate_name, pin, wire_name)
            elif request == "connect":
                source = tokens.require("source name")
                dest = tokens.require("destination name")
                pin = tokens.require_int("pin index")
                print(self.connect(source, dest, pin), file=stream)
            elif request == "testerOutput":
                gate_name = tokens.require("gate name")
                pin = tokens.require_int("gate output index")
                self.tester.add_output(self._component(gate_name), pin)
            elif request == "testerInput":
                wire_name = tokens.require("wire name")
                self.tester.add_input(self._wire(wire_name))
            else:
                print(f"Unrecognised command {request}", file=stream)
                print("Continuing to next line", file=stream)
                tokens.skip_line()

    def run_test(self, out: Optional[TextIO] = None) -> None:
        """Run the attached tester over every input combination."""
        self.tester.run(out)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Build a circuit from a netlist file (or standard input) and test it."""
    parser = argparse.ArgumentParser(description="Simulate a circuit described by a netlist.")
    parser.add_argument(
        "netlist",
        nargs="?",
        help="netlist file to read; standard input when omitted",
    )
    args = parser.parse_args(argv)

    circuit = NetlistCircuit()
    if args.netlist is None:
        circuit.build(sys.stdin)
    else:
        with open(args.netlist, encoding="utf-8") as handle:
            circuit.build(handle)
    circuit.run_test()
    return 0


if __name__ == "__main__":
    sys.exit(main())