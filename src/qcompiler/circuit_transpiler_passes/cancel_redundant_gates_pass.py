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

from collections import defaultdict

import numpy as np
from loguru import logger

from qcompiler.ir import Circuit, Gate, PrepZ

from .circuit_transpiler_pass import CircuitTranspilerPass

IDEMPOTENT_GATES: tuple[type[Gate], ...] = (PrepZ,)


class CancelRedundantGatesPass(CircuitTranspilerPass):
    """Remove gates that have no effect on the circuit.

    Two rules are applied, both only between gates that are adjacent on *every* qubit they act on:

    - a unitary gate followed by a gate on the same ordered qubits whose product is the identity (up to a
      global phase) is removed together with it, e.g. ``x q0; x q0`` or ``rx q0, a; rx q0, -a``;
    - an idempotent gate (``prepz``) repeated on the same qubit is kept once.

    Kept gates are stacked per qubit, so removing a pair exposes the previous gate to the next one and
    nested pairs such as ``h; x; x; h`` vanish in a single run. Running the pass twice gives the same
    circuit as running it once.

    Args:
        atol (float): Absolute tolerance used when comparing a product with the identity.
    """

    def __init__(self, atol: float = 1e-9) -> None:
        self._atol = atol

    def run(self, circuit: Circuit) -> Circuit:
        """Rewrite the circuit without its redundant gates.

        Args:
            circuit (Circuit): Circuit to optimize.
        Returns:
            Circuit: The optimized circuit, with equal or fewer gates.
        """
        kept: list[Gate | None] = []
        stacks: dict[int, list[int]] = defaultdict(list)

        for gate in circuit.gates:
            previous_index = self._previous_index(gate, kept, stacks)
            if previous_index is not None:
                previous = kept[previous_index]
                assert previous is not None  # noqa: S101
                if self._cancels(previous, gate):
                    kept[previous_index] = None
                    for qubit in gate.qubits:
                        stacks[qubit].pop()
                    continue
                if isinstance(gate, IDEMPOTENT_GATES) and previous == gate:
                    continue

            index = len(kept)
            kept.append(gate)
            for qubit in gate.qubits:
                stacks[qubit].append(index)

        out = Circuit(circuit.nqubits, (gate for gate in kept if gate is not None))
        removed = len(circuit) - len(out)
        if removed:
            logger.debug("Removed {} redundant gates", removed)
        self.add_output_to_context(out)
        return out

    @staticmethod
    def _previous_index(gate: Gate, kept: list[Gate | None], stacks: dict[int, list[int]]) -> int | None:
        """Return the kept gate preceding ``gate`` on all of its qubits, if it acts on exactly the same qubits."""
        tops = {stacks[qubit][-1] if stacks[qubit] else None for qubit in gate.qubits}
        if len(tops) != 1:
            return None
        index = tops.pop()
        if index is None:
            return None
        previous = kept[index]
        if previous is None or previous.qubits != gate.qubits:
            return None
        return index

    def _cancels(self, first: Gate, second: Gate) -> bool:
        if not (first.IS_UNITARY and second.IS_UNITARY):
            return False
        product = second.matrix @ first.matrix
        phase = product[0, 0]
        if not np.isclose(abs(phase), 1.0, atol=self._atol):
            return False
        return bool(np.allclose(product, phase * np.eye(product.shape[0]), atol=self._atol))
