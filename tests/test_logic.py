import io
import itertools

import pytest

from oolab.logic import (
    Component,
    LogicLevel,
    NandGate,
    Tester,
    Wire,
    build_two_nand_circuit,
    format_result,
    main,
    trace_interaction,
)

L, H, U = LogicLevel.LOW, LogicLevel.HIGH, LogicLevel.UNDEFINED


@pytest.mark.parametrize(
    "a, b, expected",
    [(L, L, H), (L, H, H), (H, L, H), (H, H, L)],
)
def test_nand_truth_table(a, b, expected):
    gate = NandGate()
    gate.drive_input(0, a)
    gate.drive_input(1, b)
    assert gate.output(0) == expected


def test_nand_undefined_until_both_inputs_driven():
    gate = NandGate()
    gate.drive_input(0, L)
    assert gate.output() == U
    gate.drive_input(1, L)
    assert gate.output() == H


def test_gate_output_propagates_through_wire():
    first, second = NandGate(), NandGate()
    link = Wire()
    link.connect(second, 1)
    first.connect_output(link, 0)
    second.drive_input(0, H)
    first.drive_input(0, H)
    first.drive_input(1, H)
    assert second.inputs[1] == first.output()
    assert second.output() == H


def test_wire_drives_every_connection():
    gates = [NandGate(), NandGate()]
    wire = Wire()
    for gate in gates:
        wire.connect(gate, 0)
    wire.drive(H)
    assert [gate.inputs[0] for gate in gates] == [H, H]


def test_wire_fanout_limit():
    wire = Wire(max_fanout=1)
    wire.connect(NandGate(), 0)
    with pytest.raises(ValueError):
        wire.connect(NandGate(), 1)


def test_connect_output_rejects_bad_pin():
    with pytest.raises(IndexError):
        Component().connect_output(Wire(), 3)


def test_two_nand_circuit_truth_table():
    results = list(build_two_nand_circuit().results())
    assert [outputs for _, outputs in results] == [(H,), (H,), (L,), (H,)]


def test_tester_enumerates_inputs_most_significant_first():
    results = list(build_two_nand_circuit().results())
    assert [inputs for inputs, _ in results] == list(itertools.product((L, H), repeat=2))


def test_tester_without_inputs_runs_once():
    gate = NandGate()
    tester = Tester()
    tester.add_output(gate, 0)
    assert list(tester.results()) == [((), (U,))]


def test_format_result_layout():
    assert format_result([L, H], [H]) == "Testing input 0 1  result: 1 "


def test_run_writes_one_line_per_state():
    out = io.StringIO()
    build_two_nand_circuit().run(out)
    lines = out.getvalue().splitlines()
    assert len(lines) == 4
    assert all(line.startswith("Testing input ") for line in lines)
    assert lines[2] == format_result([H, L], [L])


def test_trace_interaction_is_balanced():
    out = io.StringIO()
    trace_interaction(out)
    lines = out.getvalue().splitlines()
    start = lines.index("start")
    after = lines[start + 1:]
    assert after[0] == "Wire.drive"
    assert after[-1] == "Wire.drive done"
    depth = 0
    for line in after:
        depth += -1 if line.endswith(" done") else 1
        assert depth >= 0
    assert depth == 0


def test_trace_includes_initial_evaluation_before_start():
    out = io.StringIO()
    trace_interaction(out)
    lines = out.getvalue().splitlines()
    start = lines.index("start")
    assert lines[:start].count("NandGate.compute_output") == 2


def test_main_prints_table(capsys):
    assert main([]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4


def test_main_trace(capsys):
    assert main(["--trace"]) == 0
    assert "start" in capsys.readouterr().out.splitlines()