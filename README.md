# oolab

Small, self-contained programs for learning object-oriented design: a
combinational logic simulator that grows from a pair of NAND gates into
multi-bit adders and circuits described by a text netlist, plus examples of
callbacks, polymorphic sensor nodes fed by emulated hardware, thread
coordination, object lifetimes and a Monty Hall simulation.

Only the Python standard library is used.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Commands

| Command             | What it does |
|---------------------|--------------|
| `oolab-logic`       | Prints the truth table of a two-NAND-gate circuit; `--trace` instead prints the call sequence caused by driving its first input low |
| `oolab-adders`      | Prints one XOR gate result, then the truth tables of a half adder, a full adder and a 3-bit adder |
| `oolab-netlist`     | Builds a circuit from a netlist file (or standard input when no file is given) and prints its truth table |
| `oolab-driving`     | Drives a car in the `FAST` style, then tries a style below the valid range and exits with status 1 and an error message |
| `oolab-sensors`     | Feeds emulated sensor readings to a fire detector for a few seconds |
| `oolab-callbacks`   | Shows a camera notifying a plain function, one object and then two objects of a new frame |
| `oolab-concurrency` | Runs one of the threading demonstrations |
| `oolab-world`       | `planet` lists a planet's equatorial countries; `speakers` has six speakers greet the user |
| `oolab-montyhall`   | Plays many Monty Hall rounds and prints the win rate |

### Options

- `oolab-sensors [CHOICE] [--plain] [--seconds S] [--interval S]`:
  `CHOICE` is `0` for a camera-based detector or `1` for a photodiode-based
  one, asked for on standard input when omitted; `--plain` uses a receiver
  that only prints. Defaults: 5 seconds, one reading per second.
- `oolab-concurrency [buffer|counter|odometer|gate] [--scale F]`: `buffer`
  (the default) runs three consumers and two producers over a 20-slot
  circular buffer; `counter` prints 500 increments made by five threads;
  `odometer` prints 5000 counts added by five threads; `gate` releases four
  waiting threads at once. `--scale` multiplies every pause.
- `oolab-world speakers [K K K K K K]`: six speaker types, `0` talkative
  English, `1` English, `2` French, `3` Latin; read from standard input when
  omitted. Each speaker greets three times, then reports its count.
- `oolab-montyhall [--games N] [--doors N] [--seed N] [--stay] [--quiet]`:
  defaults are 10000 games and 52 doors; `--stay` never switches;
  `--quiet` prints only the win rate.

## Logic simulation (`oolab.logic`, `oolab.adders`)

`LogicLevel` has `UNDEFINED` (-1), `LOW` (0) and `HIGH` (1). A `Component`
has input and output pins; a `Wire` carries a level to any number of input
pins. Driving an input recomputes the component and pushes its outputs along
the wires connected with `connect_output`.

```python
from oolab.logic import LogicLevel, NandGate

gate = NandGate()
gate.drive_input(0, LogicLevel.HIGH)
gate.drive_input(1, LogicLevel.HIGH)
print(gate.output(0))   # 0
```

An input never driven is undefined, and so is any output depending on it.

A `Tester` drives its input wires through every combination (the first wire
added is the least significant bit); `Tester.results()` yields
`(inputs, outputs)` pairs and `Tester.run()` prints them.
`build_two_nand_circuit()` returns a tester attached to the example circuit.

`oolab.adders` adds `AndGate`, `OrGate`, `XorGate` and the abstract
`Circuit`, a component made of components and wires, with `HalfAdder`,
`FullAdder` and `ThreeBitAdder`. Each circuit's `connect_tester` attaches a
`Tester` to its inputs and outputs. A circuit holds at most 10 components
and 10 wires, and each of its wires drives at most 10 inputs.

## Netlists (`oolab.netlist`)

`NetlistCircuit.build` reads whitespace-separated commands:

```
# a half adder
component xor x1
component and a1
wire x1 0 inA
wire x1 1 inB
connect inA a1 0
connect inB a1 1
testerOutput x1 0
testerOutput a1 0
testerInput inA
testerInput inB
end
```

- `component <type> <name>` adds a gate: `xor`, `and`, `or` or `not`.
- `wire <gate> <pin> <wire>` creates a wire driving a gate's input pin.
- `connect <source> <dest> <pin>`: if `source` is a component, its output
  pin drives wire `dest`; otherwise wire `source` drives input `pin` of
  component `dest`.
- `testerOutput <gate> <pin>` observes a gate output.
- `testerInput <wire>` lets the tester drive a wire.
- A word starting with `#` skips the rest of its line; `end` or the end of
  input stops reading. Unrecognised commands are reported and their line
  skipped.

An unknown gate type raises `ValueError`; a name that does not exist raises
`KeyError`.

```
oolab-netlist half_adder.txt
```

## Other modules

- `oolab.callbacks`: `Camera` calls every registered callback with 3 on
  `new_frame()`; a callback is a function of one integer or an object with a
  `callback` method, such as `CameraUser` or `Logger`.
- `oolab.sensors`: `HardwareEmulator` calls `callback(0)`, `callback(1)`, …
  on a background thread once per interval, and stops on `stop()` or on
  leaving a `with` block. `make_fire_detector` builds a `FireDetectorCamera`
  or `FireDetectorPhotodiode`, each recording readings in `history`.
- `oolab.concurrency`: `CircularBuffer` (blocking bounded FIFO), `Counter`,
  `Odometer`, `SpinMutex`, `StartGate`, `producer`, `consumer` and
  `run_workers`.
- `oolab.driving`: `DrivingStyle` and a `Car` whose `drive` raises
  `ValueError` for an out-of-range style.
- `oolab.world`: `Planet` and `Country` announce their creation and
  disposal; `Speaker` subclasses greet and count greetings.
- `oolab.montyhall`: `Doors`, `Host`, `Player`, `Game` and `simulate`,
  which returns the win rate of a switching player.

## What this package does not do

- The sensors are emulated: `HardwareEmulator` produces counting values on a
  timer and talks to no real device, and `Node.publish` only prints; there
  is no message transport.
- Netlists cannot create NAND gates or nested circuits, only `xor`, `and`,
  `or` and `not` gates.
- Circuits are evaluated on the spot as inputs change; there is no timing
  or delay model, and feedback loops are not supported.