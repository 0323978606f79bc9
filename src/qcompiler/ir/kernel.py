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

from qcompiler.yaml import yaml

from .circuit import Circuit
from .gates import (
    CNOT,
    CZ,
    MX90,
    MY90,
    RX,
    RY,
    RZ,
    SWAP,
    X90,
    Y90,
    Gate,
    H,
    I,
    Measure,
    PrepZ,
    S,
    Sdag,
    T,
    Tdag,
    Toffoli,
    X,
    Y,
    Z,
    build_gate,
)


@yaml.register_class
class Kernel:
    """
    A named circuit that is repeated ``iterations`` times when the program is fused.

    Kernels are built against a logical qubit count; the program they are added to checks their operands
    again against its own qubit count.

    Example:

        .. code-block:: python

            kernel = Kernel("bell", nqubits=2)
            kernel.prepz(0)
            kernel.prepz(1)
            kernel.h(0)
            kernel.cnot(0, 1)
            kernel.measure(0)
            kernel.measure(1)
    """

    def __init__(self, name: str, nqubits: int, iterations: int = 1) -> None:
        """
        Args:
            name (str): Name of the kernel, used as section title in the generated text forms.
            nqubits (int): Logical number of qubits the kernel is built against.
            iterations (int): Number of times the kernel is repeated in the fused program. Defaults to 1.

        Raises:
            ValueError: If the name is empty or ``iterations`` is smaller than 1.
        """
        if not name:
            raise ValueError("A kernel needs a name.")
        if iterations < 1:
            raise ValueError(f"Kernel '{name}' must iterate at least once, got {iterations}.")
        self._name: str = name
        self._nqubits: int = nqubits
        self._iterations: int = iterations
        self._circuit: Circuit = Circuit(nqubits)

    @property
    def name(self) -> str:
        return self._name

    @property
    def nqubits(self) -> int:
        return self._nqubits

    @property
    def iterations(self) -> int:
        return self._iterations

    @property
    def circuit(self) -> Circuit:
        """
        Retrieve the circuit of the kernel.

        Returns:
            Circuit: The current circuit. Compilation passes replace it with their rewritten circuit.
        """
        return self._circuit

    @circuit.setter
    def circuit(self, circuit: Circuit) -> None:
        self._circuit = circuit

    def add(self, gate: Gate) -> None:
        self._circuit.add(gate)

    def gate(self, name: str, qubits: list[int] | tuple[int, ...], angle: float | None = None) -> None:
        """
        Add a gate by name.

        Args:
            name (str): The gate name, e.g. ``"cnot"`` or ``"rx"``.
            qubits (list[int] | tuple[int, ...]): The qubit operands.
            angle (float | None): The rotation angle of parameterized gates.
        """
        self.add(build_gate(name, qubits, angle))

    def identity(self, qubit: int) -> None:
        self.add(I(qubit))

    def x(self, qubit: int) -> None:
        self.add(X(qubit))

    def y(self, qubit: int) -> None:
        self.add(Y(qubit))

    def z(self, qubit: int) -> None:
        self.add(Z(qubit))

    def h(self, qubit: int) -> None:
        self.add(H(qubit))

    def s(self, qubit: int) -> None:
        self.add(S(qubit))

    def sdag(self, qubit: int) -> None:
        self.add(Sdag(qubit))

    def t(self, qubit: int) -> None:
        self.add(T(qubit))

    def tdag(self, qubit: int) -> None:
        self.add(Tdag(qubit))

    def x90(self, qubit: int) -> None:
        self.add(X90(qubit))

    def mx90(self, qubit: int) -> None:
        self.add(MX90(qubit))

    def y90(self, qubit: int) -> None:
        self.add(Y90(qubit))

    def my90(self, qubit: int) -> None:
        self.add(MY90(qubit))

    def rx(self, qubit: int, angle: float) -> None:
        self.add(RX(qubit, theta=angle))

    def ry(self, qubit: int, angle: float) -> None:
        self.add(RY(qubit, theta=angle))

    def rz(self, qubit: int, angle: float) -> None:
        self.add(RZ(qubit, phi=angle))

    def cnot(self, control: int, target: int) -> None:
        self.add(CNOT(control, target))

    def cz(self, control: int, target: int) -> None:
        self.add(CZ(control, target))

    def swap(self, qubit_a: int, qubit_b: int) -> None:
        self.add(SWAP(qubit_a, qubit_b))

    def toffoli(self, control_1: int, control_2: int, target: int) -> None:
        self.add(Toffoli(control_1, control_2, target))

    def prepz(self, qubit: int) -> None:
        self.add(PrepZ(qubit))

    def measure(self, qubit: int) -> None:
        self.add(Measure(qubit))

    def qasm(self) -> str:
        """
        Render the kernel in the portable text form: a ``.<name>`` title followed by one line per gate.

        Returns:
            str: The kernel section.
        """
        return "\n".join([f".{self._name}", *self._circuit.qasm_lines()]) + "\n"

    def __repr__(self) -> str:
        return f"Kernel(name={self._name!r}, nqubits={self._nqubits}, iterations={self._iterations}, gates={len(self._circuit)})"
