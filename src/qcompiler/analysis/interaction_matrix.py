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
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from qcompiler.ir import Circuit


class InteractionMatrix:
    """
    Count how often every pair of qubits interacts through a two-qubit gate.

    Args:
        circuit (Circuit): The circuit to analyse.
        nqubits (int): Size of the matrix.
    """

    def __init__(self, circuit: Circuit, nqubits: int) -> None:
        self._nqubits = nqubits
        self._matrix = np.zeros((nqubits, nqubits), dtype=int)
        for gate in circuit.gates:
            if gate.nqubits == 2:  # noqa: PLR2004
                a, b = gate.qubits
                self._matrix[a, b] += 1
                self._matrix[b, a] += 1

    @property
    def matrix(self) -> np.ndarray:
        """The symmetric interaction counts. The diagonal is always zero."""
        return self._matrix.copy()

    def get_string(self) -> str:
        header = "     " + "".join(f"{qubit:>4}" for qubit in range(self._nqubits))
        rows = [header]
        for qubit in range(self._nqubits):
            rows.append(f"{qubit:>4} " + "".join(f"{count:>4}" for count in self._matrix[qubit]))
        return "\n".join(rows) + "\n"
