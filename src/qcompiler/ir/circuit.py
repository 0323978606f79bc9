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

from qcompiler.exceptions import OperandRangeError
from qcompiler.yaml import yaml

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .gates import Gate


@yaml.register_class
class Circuit:
    def __init__(self, nqubits: int, gates: Iterable[Gate] = ()) -> None:
        """
        Initialize a Circuit instance with a specified number of qubits.

        Args:
            nqubits (int): The number of qubits in the circuit.
            gates (Iterable[Gate]): Gates to add, in program order.

        Raises:
            ValueError: If ``nqubits`` is negative.
        """
        if nqubits < 0:
            raise ValueError("The number of qubits of a circuit cannot be negative.")
        self._nqubits: int = nqubits
        self._gates: list[Gate] = []
        self.extend(gates)

    @property
    def nqubits(self) -> int:
        """
        Retrieve the number of qubits in the circuit.

        Returns:
            int: The total number of qubits.
        """
        return self._nqubits

    @property
    def gates(self) -> list[Gate]:
        """
        Retrieve the gates of the circuit in program order.

        Returns:
            list[Gate]: A copy of the gate sequence. Modifying it does not modify the circuit.
        """
        return list(self._gates)

    def add(self, gate: Gate) -> None:
        """
        Add a gate at the end of the circuit.

        Args:
            gate (Gate): The gate to add to the circuit.

        Raises:
            OperandRangeError: If any qubit index used by the gate is not within the circuit's qubit range.
        """
        for qubit in gate.qubits:
            if qubit >= self._nqubits:
                raise OperandRangeError(
                    f"Qubit {qubit} of gate '{gate.name}' with qubits {list(gate.qubits)} is out of range "
                    f"for a circuit of {self._nqubits} qubits.",
                    gate=gate,
                    qubit=qubit,
                )
        self._gates.append(gate)

    def extend(self, gates: Iterable[Gate]) -> None:
        for gate in gates:
            self.add(gate)

    def repeated(self, times: int) -> Circuit:
        """
        Build a circuit holding this circuit's gates ``times`` times in a row.

        Args:
            times (int): Number of repetitions.

        Returns:
            Circuit: The repeated circuit.
        """
        return Circuit(self._nqubits, self._gates * times)

    def qasm_lines(self) -> list[str]:
        return [f"    {gate.qasm()}" for gate in self._gates]

    def __len__(self) -> int:
        return len(self._gates)

    def __iter__(self) -> Iterator[Gate]:
        return iter(list(self._gates))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Circuit):
            return NotImplemented
        return self._nqubits == other._nqubits and self._gates == other._gates

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Circuit(nqubits={self._nqubits}, gates={self._gates})"
