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

from typing import List

from loguru import logger

from qcompiler.ir import CNOT, Circuit, Gate, H, T, Tdag, Toffoli
from qcompiler.options import ToffoliDecomposition, parse_option

from .circuit_transpiler_pass import CircuitTranspilerPass


class DecomposeToffoliPass(CircuitTranspilerPass):
    """Replace every Toffoli gate by an equivalent sequence of 1- and 2-qubit gates.

    Other gates pass through unchanged and keep their relative order.

    Args:
        scheme (ToffoliDecomposition | str): ``"AM"``, ``"NC"`` or ``"no"``.

    Raises:
        ConfigurationError: If ``scheme`` is not recognized.
    """

    def __init__(self, scheme: ToffoliDecomposition | str = ToffoliDecomposition.NC) -> None:
        self._scheme = parse_option(ToffoliDecomposition, scheme, "decompose_toffoli")

    @property
    def scheme(self) -> ToffoliDecomposition:
        return self._scheme

    def run(self, circuit: Circuit) -> Circuit:
        """Rewrite the circuit while decomposing Toffoli gates.

        Args:
            circuit (Circuit): Circuit whose gates should be rewritten.
        Returns:
            Circuit: Newly built circuit without Toffoli gates, unless the scheme is ``"no"``.
        """
        out = Circuit(circuit.nqubits)
        decomposed = 0
        for gate in circuit.gates:
            if isinstance(gate, Toffoli) and self._scheme is not ToffoliDecomposition.NO:
                out.extend(self._decompose(gate))
                decomposed += 1
            else:
                out.add(gate)

        if decomposed:
            logger.debug("Decomposed {} Toffoli gates with scheme {}", decomposed, self._scheme.value)
        self.add_output_to_context(out)
        return out

    def _decompose(self, gate: Toffoli) -> List[Gate]:
        a, b, c = gate.qubits
        if self._scheme is ToffoliDecomposition.AM:
            return _phase_polynomial_toffoli(a, b, c)
        return _textbook_toffoli(a, b, c)


def _textbook_toffoli(a: int, b: int, c: int) -> List[Gate]:
    """Toffoli with controls ``a``, ``b`` and target ``c`` using 6 CNOTs and 7 T/T-dagger gates."""
    return [
        H(c),
        CNOT(b, c),
        Tdag(c),
        CNOT(a, c),
        T(c),
        CNOT(b, c),
        Tdag(c),
        CNOT(a, c),
        T(b),
        T(c),
        H(c),
        CNOT(a, b),
        T(a),
        Tdag(b),
        CNOT(a, b),
    ]


def _phase_polynomial_toffoli(a: int, b: int, c: int) -> List[Gate]:
    """Toffoli with controls ``a``, ``b`` and target ``c`` with T-depth 3.

    Between the Hadamards the circuit applies the phase ``(-1)^(a*b*c)`` as a product of T gates on the parities
    ``a, b, c, a^b^c`` and T-dagger gates on ``a^b, b^c, a^c``, which the CNOT ladders compute and uncompute.
    """
    return [
        H(c),
        T(a),
        T(b),
        T(c),
        CNOT(b, a),
        CNOT(c, b),
        CNOT(a, c),
        Tdag(b),
        CNOT(a, b),
        Tdag(a),
        Tdag(b),
        T(c),
        CNOT(c, b),
        CNOT(a, c),
        CNOT(b, a),
        H(c),
    ]
