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

import networkx as nx
from loguru import logger

from qcompiler.exceptions import ConfigurationError, OperandRangeError
from qcompiler.ir import SWAP, Circuit, Gate

from .circuit_transpiler_pass import CircuitTranspilerPass

if TYPE_CHECKING:
    from qcompiler.platform import Platform


class QubitLayout:
    """Bidirectional assignment of logical qubits to physical qubits.

    Physical qubits that hold no logical qubit map to ``None``.
    """

    def __init__(self, nlogical: int, nphysical: int, initial: dict[int, int] | None = None) -> None:
        if nlogical > nphysical:
            raise ConfigurationError(f"Cannot place {nlogical} logical qubits on {nphysical} physical qubits.")
        placement = initial if initial is not None else {qubit: qubit for qubit in range(nlogical)}
        if sorted(placement) != list(range(nlogical)) or len(set(placement.values())) != nlogical:
            raise ConfigurationError(f"Initial placement {placement} must assign every logical qubit once.")
        if any(not 0 <= physical < nphysical for physical in placement.values()):
            raise ConfigurationError(f"Initial placement {placement} uses qubits outside the platform.")

        self._virtual_to_real: dict[int, int] = dict(placement)
        self._real_to_virtual: list[int | None] = [None] * nphysical
        for virtual, real in placement.items():
            self._real_to_virtual[real] = virtual

    def physical(self, logical: int) -> int:
        return self._virtual_to_real[logical]

    def swap(self, real_a: int, real_b: int) -> None:
        """Exchange the logical qubits held by two physical qubits."""
        virtual_a = self._real_to_virtual[real_a]
        virtual_b = self._real_to_virtual[real_b]
        self._real_to_virtual[real_a], self._real_to_virtual[real_b] = virtual_b, virtual_a
        if virtual_a is not None:
            self._virtual_to_real[virtual_a] = real_b
        if virtual_b is not None:
            self._virtual_to_real[virtual_b] = real_a

    def as_dict(self) -> dict[int, int]:
        return dict(sorted(self._virtual_to_real.items()))


class MapQubitsPass(CircuitTranspilerPass):
    """Rewrite a circuit on logical qubits into a circuit on the physical qubits of a platform.

    Gates are processed in program order against a logical to physical layout, initially the identity
    (or ``initial_placement``). Single-qubit gates are rewritten through the layout. When the physical operands
    of a 2-qubit gate are not connected in the platform topology, SWAP gates are inserted along a shortest path
    so that the first operand travels until it is adjacent to the second, updating the layout after each swap.
    Among several shortest paths the lexicographically smallest sequence of physical qubits is used, which keeps
    the output reproducible. A gate between ``d`` hops apart therefore costs ``d - 1`` swaps.

    Gates on three or more qubits are rewritten through the layout without routing.

    Args:
        platform (Platform): Platform providing the qubit count and the connectivity graph.
        initial_placement (dict[int, int] | None): Logical to physical assignment to start from.
    """

    def __init__(self, platform: Platform, initial_placement: dict[int, int] | None = None) -> None:
        self._platform = platform
        self._initial_placement = initial_placement

    def run(self, circuit: Circuit) -> Circuit:
        """Map the circuit onto the platform.

        Args:
            circuit (Circuit): Circuit on logical qubits.
        Returns:
            Circuit: Circuit on physical qubits, sized to the platform, including the inserted SWAP gates.

        Raises:
            OperandRangeError: If a gate uses a qubit beyond the platform qubit count.
            ConfigurationError: If two qubits that must interact are not connected in the topology.
        """
        nphysical = self._platform.qubit_number
        for gate in circuit.gates:
            for qubit in gate.qubits:
                if qubit >= nphysical:
                    raise OperandRangeError(
                        f"Qubit {qubit} of gate '{gate.name}' with qubits {list(gate.qubits)} is out of range "
                        f"for platform '{self._platform.name}' with {nphysical} qubits.",
                        gate=gate,
                        qubit=qubit,
                    )

        layout = QubitLayout(min(circuit.nqubits, nphysical), nphysical, self._initial_placement)
        out = Circuit(nphysical)
        nswaps = 0

        for gate in circuit.gates:
            if gate.nqubits == 2:  # noqa: PLR2004
                nswaps += self._route(gate, layout, out)
            elif gate.nqubits > 2:  # noqa: PLR2004
                logger.warning("Gate {} acts on {} qubits and is not routed by the mapper", gate, gate.nqubits)
            out.add(gate.on(*(layout.physical(qubit) for qubit in gate.qubits)))

        logger.debug("Mapped circuit with {} inserted swaps, final layout {}", nswaps, layout.as_dict())
        self.record_final_layout(layout.as_dict())
        self.add_output_to_context(out)
        return out

    def _route(self, gate: Gate, layout: QubitLayout, out: Circuit) -> int:
        source, target = (layout.physical(qubit) for qubit in gate.qubits)
        if self._platform.is_adjacent(source, target):
            return 0

        path = self._shortest_path(source, target)
        for real_a, real_b in zip(path[:-2], path[1:-1]):
            out.add(SWAP(real_a, real_b))
            layout.swap(real_a, real_b)
        logger.debug("Routed {} along {} with {} swaps", gate, path, len(path) - 2)
        return len(path) - 2

    def _shortest_path(self, source: int, target: int) -> list[int]:
        try:
            return min(nx.all_shortest_paths(self._platform.graph, source, target))
        except nx.NetworkXNoPath as exc:
            raise ConfigurationError(
                f"Qubits {source} and {target} are not connected in the topology of platform '{self._platform.name}'."
            ) from exc
