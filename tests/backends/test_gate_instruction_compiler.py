import pytest

from qcompiler.backends import GateInstructionCompiler
from qcompiler.exceptions import BackendCompilationError
from qcompiler.ir import CNOT, RX, Circuit, Measure, Toffoli, X


def test_gate_instruction_code(gate_instruction_platform):
    circuit = Circuit(4, [X(0), X(1), X(2), CNOT(0, 1), CNOT(2, 3), Measure(0), Measure(1)])

    output = GateInstructionCompiler().compile("prog", circuit, gate_instruction_platform)

    assert output.code == (
        "smis s0, {0, 1}\n"
        "smis s1, {2}\n"
        "smit t0, {(0, 1)}\n"
        "smit t1, {(2, 3)}\n"
        "\n"
        "start:\n"
        "    bs 1    x s0\n"
        "    bs 1    x s1 | cnot t0\n"
        "    bs 2    cnot t1 | measz s0\n"
        "    br always, start\n"
        "    nop\n"
        "    nop\n"
    )


def test_traces_are_an_occupancy_table(gate_instruction_platform):
    circuit = Circuit(4, [X(0), CNOT(0, 1)])
    output = GateInstructionCompiler().compile("prog", circuit, gate_instruction_platform)
    lines = output.traces.splitlines()

    assert lines[0].split() == ["cycle", "|", "q0", "q1", "q2", "q3"]
    assert lines[1].split() == ["0", "|", "x", ".", ".", "."]
    assert lines[2].split() == ["1", "|", "cnot", "cnot", ".", "."]
    assert lines[3].split() == ["2", "|", "cnot", "cnot", ".", "."]
    assert len(lines) == 4


def test_parameters_are_part_of_the_instruction(gate_instruction_platform):
    circuit = Circuit(4, [RX(0, theta=0.5), RX(1, theta=0.25)])
    output = GateInstructionCompiler().compile("prog", circuit, gate_instruction_platform)
    assert "    bs 1    rx s0, 0.5 | rx s1, 0.25\n" in output.code


def test_channel_capacity_is_respected(gate_instruction_platform):
    circuit = Circuit(4, [CNOT(0, 1), CNOT(2, 3)])
    output = GateInstructionCompiler().compile("prog", circuit, gate_instruction_platform)
    assert "    bs 1    cnot t0\n    bs 2    cnot t1\n" in output.code


@pytest.mark.parametrize(
    ("gate", "message"),
    [(CNOT(0, 2), "not connected"), (Toffoli(0, 1, 2), "acts on 3 qubits")],
)
def test_invalid_gates_raise(gate_instruction_platform, gate, message):
    with pytest.raises(BackendCompilationError, match=message):
        GateInstructionCompiler().compile("prog", Circuit(4, [gate]), gate_instruction_platform)
