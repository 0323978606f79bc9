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

import copy
from abc import ABC, abstractmethod
from typing import ClassVar

import numpy as np
from typing_extensions import Self

from qcompiler.exceptions import GateHasNoMatrixError
from qcompiler.yaml import yaml


class Gate(ABC):
    """
    Represents an elementary operation of a circuit: a kind (its name) applied to an ordered tuple of qubits.

    Gates are value-like: they never change after construction. Passes that need a gate on other qubits
    create a new one through :meth:`on`.
    """

    PARAMETER_NAMES: ClassVar[list[str]] = []
    NQUBITS: ClassVar[int] = 1
    NCONTROLS: ClassVar[int] = 0
    IS_UNITARY: ClassVar[bool] = True

    def __init__(self, *qubits: int, parameters: dict[str, float] | None = None) -> None:
        if len(qubits) != self.NQUBITS:
            raise ValueError(f"{type(self).__name__} acts on {self.NQUBITS} qubit(s), got {len(qubits)}.")
        if len(qubits) != len(set(qubits)):
            raise ValueError("Duplicate qubits found.")
        if any(qubit < 0 for qubit in qubits):
            raise ValueError("Qubit indices must be non-negative.")

        self._qubits: tuple[int, ...] = tuple(int(qubit) for qubit in qubits)
        self._parameters: dict[str, float] = {key: float(value) for key, value in (parameters or {}).items()}

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Retrieve the name of the gate, as used in the portable text form and in the platform instructions.

        Returns:
            str: The name of the gate.
        """

    @property
    def matrix(self) -> np.ndarray:
        """
        Retrieve the matrix of the gate, in the basis ordered by :attr:`qubits` (first qubit most significant).

        Raises:
            GateHasNoMatrixError: If the gate is not unitary.

        Returns:
            np.ndarray: The matrix of the gate.
        """
        if not self.IS_UNITARY:
            raise GateHasNoMatrixError(f"Gate {self.name} has no matrix.")
        return self._generate_matrix()

    def _generate_matrix(self) -> np.ndarray:
        raise GateHasNoMatrixError(f"Gate {self.name} has no matrix.")

    @property
    def control_qubits(self) -> tuple[int, ...]:
        """
        Retrieve the indices of the control qubits.

        Returns:
            tuple[int, ...]: A tuple containing the indices of the control qubits.
        """
        return self._qubits[: self.NCONTROLS]

    @property
    def target_qubits(self) -> tuple[int, ...]:
        """
        Retrieve the indices of the target qubits.

        Returns:
            tuple[int, ...]: A tuple containing the indices of the target qubits.
        """
        return self._qubits[self.NCONTROLS :]

    @property
    def qubits(self) -> tuple[int, ...]:
        """
        Retrieve all qubits associated with the gate, including both control and target qubits.

        Returns:
            tuple[int, ...]: A tuple of all qubit indices on which the gate operates.
        """
        return self._qubits

    @property
    def nqubits(self) -> int:
        return len(self._qubits)

    @property
    def parameters(self) -> dict[str, float]:
        """
        Retrieve a mapping of parameter names to their corresponding values.

        Returns:
            dict[str, float]: A dictionary mapping each parameter name to its numeric value.
        """
        return dict(self._parameters)

    @property
    def parameter_values(self) -> list[float]:
        return list(self._parameters.values())

    @property
    def is_parameterized(self) -> bool:
        return len(self._parameters) != 0

    def on(self, *qubits: int) -> Self:
        """
        Build the same gate acting on other qubits.

        Args:
            *qubits (int): The new qubit operands, in the same order as :attr:`qubits`.

        Returns:
            Gate: A new gate of the same kind and parameters acting on ``qubits``.

        Raises:
            ValueError: If the number of operands differs or an operand is repeated.
        """
        if len(qubits) != self.nqubits:
            raise ValueError(f"{type(self).__name__} acts on {self.nqubits} qubit(s), got {len(qubits)}.")
        if len(qubits) != len(set(qubits)):
            raise ValueError("Duplicate qubits found.")
        gate = copy.copy(self)
        gate._qubits = tuple(int(qubit) for qubit in qubits)
        return gate

    def qasm(self) -> str:
        """
        Render the gate as a single line of the portable text form, e.g. ``cnot q0,q1`` or ``rx q2, 1.570796327``.

        Returns:
            str: The textual form of the gate.
        """
        operands = ",".join(f"q{qubit}" for qubit in self._qubits)
        if self.is_parameterized:
            values = ", ".join(format(value, ".10g") for value in self.parameter_values)
            return f"{self.name} {operands}, {values}"
        return f"{self.name} {operands}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Gate):
            return NotImplemented
        return type(self) is type(other) and self._qubits == other._qubits and self._parameters == other._parameters

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._qubits, tuple(sorted(self._parameters.items()))))

    def __repr__(self) -> str:
        qubits_str = f"({self._qubits[0]})" if self.nqubits == 1 else str(self._qubits)
        if self.is_parameterized:
            parameters_str = ", ".join(f"{key}={value}" for key, value in self._parameters.items())
            return f"{self.name}{qubits_str}[{parameters_str}]"
        return f"{self.name}{qubits_str}"


def _rx(theta: float) -> np.ndarray:
    cos = np.cos(theta / 2)
    sin = np.sin(theta / 2)
    return np.array([[cos, -1j * sin], [-1j * sin, cos]], dtype=complex)


def _ry(theta: float) -> np.ndarray:
    cos = np.cos(theta / 2)
    sin = np.sin(theta / 2)
    return np.array([[cos, -sin], [sin, cos]], dtype=complex)


def _rz(phi: float) -> np.ndarray:
    return np.array([[np.exp(-1j * phi / 2), 0], [0, np.exp(1j * phi / 2)]], dtype=complex)


@yaml.register_class
class I(Gate):  # noqa: E742
    """
    Represents the identity gate.

    The associated matrix is:

    .. code-block:: text

        [[1, 0],
         [0, 1]]
    """

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "i"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return np.eye(2, dtype=complex)


@yaml.register_class
class X(Gate):
    """
    Represents the Pauli-X gate, a pi rotation around the X-axis.

    The associated matrix is:

    .. code-block:: text

        [[0, 1],
         [1, 0]]
    """

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "x"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return np.array([[0, 1], [1, 0]], dtype=complex)


@yaml.register_class
class Y(Gate):
    """
    Represents the Pauli-Y gate, a pi rotation around the Y-axis.

    The associated matrix is:

    .. code-block:: text

        [[0, -i],
         [i,  0]]
    """

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "y"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return np.array([[0, -1j], [1j, 0]], dtype=complex)


@yaml.register_class
class Z(Gate):
    """
    Represents the Pauli-Z gate, a pi rotation around the Z-axis.

    The associated matrix is:

    .. code-block:: text

        [[1,  0],
         [0, -1]]
    """

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "z"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return np.array([[1, 0], [0, -1]], dtype=complex)


@yaml.register_class
class H(Gate):
    """
    Represents the Hadamard gate.

    The associated matrix is:

    .. code-block:: text

        1/sqrt(2) * [[1,  1],
                     [1, -1]]
    """

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "h"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return np.array([[1, 1], [1, -1]], dtype=complex) / np.sqrt(2)


@yaml.register_class
class S(Gate):
    """
    Represents the S (phase) gate, the square root of Z.

    The associated matrix is:

    .. code-block:: text

        [[1, 0],
         [0, i]]
    """

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "s"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return np.array([[1, 0], [0, 1j]], dtype=complex)


@yaml.register_class
class Sdag(Gate):
    """Represents the adjoint of the S gate."""

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "sdag"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return np.array([[1, 0], [0, -1j]], dtype=complex)


@yaml.register_class
class T(Gate):
    """
    Represents the T gate, the fourth root of Z.

    The associated matrix is:

    .. code-block:: text

        [[1, 0],
         [0, exp(i*pi/4)]]
    """

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "t"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return np.array([[1, 0], [0, np.exp(1j * np.pi / 4)]], dtype=complex)


@yaml.register_class
class Tdag(Gate):
    """Represents the adjoint of the T gate."""

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "tdag"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return np.array([[1, 0], [0, np.exp(-1j * np.pi / 4)]], dtype=complex)


@yaml.register_class
class X90(Gate):
    """Represents a pi/2 rotation around the X-axis, ``RX(pi/2)``."""

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "x90"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return _rx(np.pi / 2)


@yaml.register_class
class MX90(Gate):
    """Represents a -pi/2 rotation around the X-axis, ``RX(-pi/2)``."""

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "mx90"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return _rx(-np.pi / 2)


@yaml.register_class
class Y90(Gate):
    """Represents a pi/2 rotation around the Y-axis, ``RY(pi/2)``."""

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "y90"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return _ry(np.pi / 2)


@yaml.register_class
class MY90(Gate):
    """Represents a -pi/2 rotation around the Y-axis, ``RY(-pi/2)``."""

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "my90"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return _ry(-np.pi / 2)


@yaml.register_class
class RX(Gate):
    """
    Represents a `theta` angle rotation around the X-axis.

    The associated matrix is:

    .. code-block:: text

        [[cos(theta/2), -i*sin(theta/2)],
         [-i*sin(theta/2), cos(theta/2)]]
    """

    PARAMETER_NAMES: ClassVar[list[str]] = ["theta"]

    def __init__(self, qubit: int, *, theta: float) -> None:
        """
        Initialize an RX gate.

        Args:
            qubit (int): The target qubit index for the X rotation.
            theta (float): The rotation angle in radians.
        """
        super().__init__(qubit, parameters={"theta": theta})

    @property
    def name(self) -> str:
        return "rx"

    @property
    def theta(self) -> float:
        return self._parameters["theta"]

    def _generate_matrix(self) -> np.ndarray:
        return _rx(self.theta)


@yaml.register_class
class RY(Gate):
    """
    Represents a `theta` angle rotation around the Y-axis.

    The associated matrix is:

    .. code-block:: text

        [[cos(theta/2), -sin(theta/2)],
         [sin(theta/2),  cos(theta/2)]]
    """

    PARAMETER_NAMES: ClassVar[list[str]] = ["theta"]

    def __init__(self, qubit: int, *, theta: float) -> None:
        """
        Initialize an RY gate.

        Args:
            qubit (int): The target qubit index for the Y rotation.
            theta (float): The rotation angle in radians.
        """
        super().__init__(qubit, parameters={"theta": theta})

    @property
    def name(self) -> str:
        return "ry"

    @property
    def theta(self) -> float:
        return self._parameters["theta"]

    def _generate_matrix(self) -> np.ndarray:
        return _ry(self.theta)


@yaml.register_class
class RZ(Gate):
    """
    Represents a `phi` angle rotation around the Z-axis.

    The associated matrix is:

    .. code-block:: text

        [[exp(-i*phi/2), 0],
         [0, exp(i*phi/2)]]
    """

    PARAMETER_NAMES: ClassVar[list[str]] = ["phi"]

    def __init__(self, qubit: int, *, phi: float) -> None:
        """
        Initialize an RZ gate.

        Args:
            qubit (int): The target qubit index for the Z rotation.
            phi (float): The rotation angle in radians.
        """
        super().__init__(qubit, parameters={"phi": phi})

    @property
    def name(self) -> str:
        return "rz"

    @property
    def phi(self) -> float:
        return self._parameters["phi"]

    def _generate_matrix(self) -> np.ndarray:
        return _rz(self.phi)


@yaml.register_class
class CNOT(Gate):
    """
    Represents the CNOT gate.

    The associated matrix, in the ``(control, target)`` basis, is:

    .. code-block:: text

        [[1, 0, 0, 0],
         [0, 1, 0, 0],
         [0, 0, 0, 1],
         [0, 0, 1, 0]]
    """

    NQUBITS: ClassVar[int] = 2
    NCONTROLS: ClassVar[int] = 1

    def __init__(self, control: int, target: int) -> None:
        super().__init__(control, target)

    @property
    def name(self) -> str:
        return "cnot"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return np.array([[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 0, 1], [0, 0, 1, 0]], dtype=complex)


@yaml.register_class
class CZ(Gate):
    """
    Represents the CZ gate.

    The associated matrix is:

    .. code-block:: text

        [[1, 0, 0, 0],
         [0, 1, 0, 0],
         [0, 0, 1, 0],
         [0, 0, 0, -1]]

    This gate is symmetric with respect to control and target.
    """

    NQUBITS: ClassVar[int] = 2
    NCONTROLS: ClassVar[int] = 1

    def __init__(self, control: int, target: int) -> None:
        super().__init__(control, target)

    @property
    def name(self) -> str:
        return "cz"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return np.diag([1, 1, 1, -1]).astype(complex)


@yaml.register_class
class SWAP(Gate):
    """
    Represents the SWAP gate, exchanging the states of two qubits. The mapper inserts it to route operands.

    The associated matrix is:

    .. code-block:: text

        [[1, 0, 0, 0],
         [0, 0, 1, 0],
         [0, 1, 0, 0],
         [0, 0, 0, 1]]
    """

    NQUBITS: ClassVar[int] = 2

    def __init__(self, qubit_a: int, qubit_b: int) -> None:
        super().__init__(qubit_a, qubit_b)

    @property
    def name(self) -> str:
        return "swap"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        return np.array([[1, 0, 0, 0], [0, 0, 1, 0], [0, 1, 0, 0], [0, 0, 0, 1]], dtype=complex)


@yaml.register_class
class Toffoli(Gate):
    """
    Represents the Toffoli (CCNOT) gate: the target is flipped when both controls are set.

    The associated matrix is the 8x8 identity with its last two rows exchanged.
    """

    NQUBITS: ClassVar[int] = 3
    NCONTROLS: ClassVar[int] = 2

    def __init__(self, control_1: int, control_2: int, target: int) -> None:
        super().__init__(control_1, control_2, target)

    @property
    def name(self) -> str:
        return "toffoli"

    def _generate_matrix(self) -> np.ndarray:  # noqa: PLR6301
        matrix = np.eye(8, dtype=complex)
        matrix[[6, 7]] = matrix[[7, 6]]
        return matrix


@yaml.register_class
class PrepZ(Gate):
    """Represents the preparation of a qubit in the ``|0>`` state. It is not unitary."""

    IS_UNITARY: ClassVar[bool] = False

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "prepz"


@yaml.register_class
class Measure(Gate):
    """Represents a measurement of a qubit in the computational basis. It is not unitary."""

    IS_UNITARY: ClassVar[bool] = False

    def __init__(self, qubit: int) -> None:
        super().__init__(qubit)

    @property
    def name(self) -> str:
        return "measure"


GATES_BY_NAME: dict[str, type[Gate]] = {
    "i": I,
    "x": X,
    "y": Y,
    "z": Z,
    "h": H,
    "s": S,
    "sdag": Sdag,
    "t": T,
    "tdag": Tdag,
    "x90": X90,
    "mx90": MX90,
    "y90": Y90,
    "my90": MY90,
    "rx": RX,
    "ry": RY,
    "rz": RZ,
    "cnot": CNOT,
    "cz": CZ,
    "swap": SWAP,
    "toffoli": Toffoli,
    "prepz": PrepZ,
    "measure": Measure,
}


def build_gate(name: str, qubits: list[int] | tuple[int, ...], angle: float | None = None) -> Gate:
    """
    Build a gate from its name, as found in the portable text form.

    Args:
        name (str): The gate name, case insensitive (e.g. ``"cnot"``).
        qubits (list[int] | tuple[int, ...]): The qubit operands.
        angle (float | None): The rotation angle, required by parameterized gates.

    Returns:
        Gate: The new gate.

    Raises:
        ValueError: If the name is unknown, or if the angle is missing or not expected.
    """
    gate_class = GATES_BY_NAME.get(name.lower())
    if gate_class is None:
        raise ValueError(f"Unknown gate: {name}")
    if gate_class.PARAMETER_NAMES:
        if angle is None:
            raise ValueError(f"Gate {name} requires an angle.")
        return gate_class(*qubits, **{gate_class.PARAMETER_NAMES[0]: angle})  # type: ignore[call-arg]
    if angle is not None:
        raise ValueError(f"Gate {name} does not take an angle.")
    return gate_class(*qubits)  # type: ignore[call-arg]
