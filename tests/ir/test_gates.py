# Copyright 2025 Qilimanjaro Quantum Tech
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
import math

import numpy as np
import pytest

from qcompiler.exceptions import GateHasNoMatrixError
from qcompiler.ir import (
    CNOT,
    GATES_BY_NAME,
    RX,
    RZ,
    SWAP,
    Measure,
    PrepZ,
    Toffoli,
    X,
    build_gate,
)


def _example(name: str):
    gate_class = GATES_BY_NAME[name]
    qubits = list(range(gate_class.NQUBITS))
    angle = 0.3 if gate_class.PARAMETER_NAMES else None
    return build_gate(name, qubits, angle)


@pytest.mark.parametrize("name", [name for name, cls in GATES_BY_NAME.items() if cls.IS_UNITARY])
def test_unitary_gates_have_unitary_matrices(name: str):
    gate = _example(name)
    matrix = gate.matrix
    dim = 2**gate.nqubits
    assert matrix.shape == (dim, dim)
    assert np.allclose(matrix.conj().T @ matrix, np.eye(dim))


@pytest.mark.parametrize("gate", [PrepZ(0), Measure(1)])
def test_non_unitary_gates_have_no_matrix(gate):
    with pytest.raises(GateHasNoMatrixError):
        _ = gate.matrix


def test_gate_qasm():
    assert X(0).qasm() == "x q0"
    assert CNOT(0, 1).qasm() == "cnot q0,q1"
    assert Toffoli(2, 0, 1).qasm() == "toffoli q2,q0,q1"
    assert RX(2, theta=math.pi / 2).qasm() == "rx q2, 1.570796327"


def test_control_and_target_qubits():
    gate = Toffoli(0, 1, 2)
    assert gate.control_qubits == (0, 1)
    assert gate.target_qubits == (2,)
    assert gate.qubits == (0, 1, 2)
    assert SWAP(3, 1).control_qubits == ()


def test_gate_rejects_invalid_qubits():
    with pytest.raises(ValueError, match="Duplicate"):
        CNOT(1, 1)
    with pytest.raises(ValueError, match="non-negative"):
        X(-1)


def test_on_returns_new_gate():
    gate = RZ(0, phi=0.5)
    moved = gate.on(3)
    assert moved == RZ(3, phi=0.5)
    assert gate.qubits == (0,)
    with pytest.raises(ValueError):
        CNOT(0, 1).on(2)


def test_gate_equality_and_hash():
    assert RX(0, theta=1.0) == RX(0, theta=1.0)
    assert RX(0, theta=1.0) != RX(0, theta=2.0)
    assert RX(0, theta=1.0) != RX(1, theta=1.0)
    assert X(0) != PrepZ(0)
    assert len({X(0), X(0), X(1)}) == 2


def test_parameters():
    gate = RX(0, theta=0.25)
    assert gate.is_parameterized
    assert gate.parameters == {"theta": 0.25}
    assert gate.parameter_values == [0.25]
    assert not X(0).is_parameterized


def test_build_gate():
    assert build_gate("CNOT", [0, 1]) == CNOT(0, 1)
    assert build_gate("rz", (2,), angle=0.1) == RZ(2, phi=0.1)
    with pytest.raises(ValueError, match="Unknown gate"):
        build_gate("foo", [0])
    with pytest.raises(ValueError, match="requires an angle"):
        build_gate("rx", [0])
    with pytest.raises(ValueError, match="does not take an angle"):
        build_gate("x", [0], angle=1.0)


def test_cnot_matrix_uses_first_qubit_as_most_significant():
    matrix = CNOT(0, 1).matrix
    # |10> -> |11>
    assert matrix[3, 2] == 1
    assert matrix[2, 2] == 0
