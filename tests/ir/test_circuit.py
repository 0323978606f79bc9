import pytest

from qcompiler.exceptions import OperandRangeError
from qcompiler.ir import CNOT, RX, Circuit, H, X


def test_add_gates_in_order():
    circuit = Circuit(2)
    circuit.add(H(0))
    circuit.add(CNOT(0, 1))
    assert circuit.gates == [H(0), CNOT(0, 1)]
    assert len(circuit) == 2
    assert list(circuit) == [H(0), CNOT(0, 1)]


def test_add_out_of_range_gate_raises():
    circuit = Circuit(2)
    with pytest.raises(OperandRangeError) as exc_info:
        circuit.add(CNOT(0, 2))
    assert exc_info.value.qubit == 2
    assert exc_info.value.gate == CNOT(0, 2)
    assert len(circuit) == 0


def test_gates_is_a_copy():
    circuit = Circuit(1, [X(0)])
    gates = circuit.gates
    gates.append(X(0))
    assert len(circuit) == 1


def test_negative_qubit_count_raises():
    with pytest.raises(ValueError):
        Circuit(-1)


def test_repeated():
    circuit = Circuit(2, [X(0), CNOT(0, 1)])
    repeated = circuit.repeated(3)
    assert len(repeated) == 6
    assert repeated.gates[2:4] == [X(0), CNOT(0, 1)]
    assert len(circuit) == 2


def test_qasm_lines():
    circuit = Circuit(2, [X(0), RX(1, theta=0.5)])
    assert circuit.qasm_lines() == ["    x q0", "    rx q1, 0.5"]


def test_equality():
    assert Circuit(2, [X(0)]) == Circuit(2, [X(0)])
    assert Circuit(2, [X(0)]) != Circuit(3, [X(0)])
    assert Circuit(2, [X(0)]) != Circuit(2, [X(1)])
