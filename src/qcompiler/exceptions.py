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

if TYPE_CHECKING:
    from qcompiler.ir.gates import Gate


class QCompilerError(Exception):
    """Base class for every error raised by the compiler."""


class ConfigurationError(QCompilerError):
    """Raised when an option, platform field or backend identifier is missing or not recognized."""


class CapacityError(QCompilerError):
    """Raised when a program requests more qubits than the platform provides."""


class OperandRangeError(QCompilerError):
    """Raised when a gate references a qubit index outside the valid range.

    Attributes:
        gate (Gate | None): The offending gate, when known.
        qubit (int | None): The offending qubit index, when known.
    """

    def __init__(self, message: str, *, gate: Gate | None = None, qubit: int | None = None) -> None:
        super().__init__(message)
        self.gate = gate
        self.qubit = qubit


class BackendCompilationError(QCompilerError):
    """Raised when a backend compiler cannot lower the fused circuit."""


class GateHasNoMatrixError(QCompilerError):
    """Raised when the matrix of a non-unitary gate is requested."""


class SchedulingInvariantError(RuntimeError):
    """Raised when the dependency graph of a circuit cannot be scheduled (it contains a cycle)."""
