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

if TYPE_CHECKING:
    from qcompiler.ir import Circuit, Gate


class DependencyGraph:
    """
    Data dependencies between the gates of a circuit.

    There is one node per gate, identified by its position in the circuit, and an edge from gate ``a`` to gate
    ``b`` when ``b`` is the next gate after ``a`` acting on one of ``a``'s qubits. The edge carries the shared
    qubits. Any two gates sharing a qubit are connected by a path that follows program order, so the graph is
    acyclic and has the same reachability as the full "touches a qubit earlier" relation.
    """

    def __init__(self, circuit: Circuit) -> None:
        self._gates: list[Gate] = circuit.gates
        self._graph = nx.DiGraph()
        self._graph.add_nodes_from(range(len(self._gates)))

        last_on_qubit: dict[int, int] = {}
        for index, gate in enumerate(self._gates):
            for qubit in gate.qubits:
                previous = last_on_qubit.get(qubit)
                if previous is not None:
                    if self._graph.has_edge(previous, index):
                        self._graph.edges[previous, index]["qubits"].append(qubit)
                    else:
                        self._graph.add_edge(previous, index, qubits=[qubit])
                last_on_qubit[qubit] = index

    @property
    def graph(self) -> nx.DiGraph:
        return self._graph

    @property
    def gates(self) -> list[Gate]:
        return list(self._gates)

    def __len__(self) -> int:
        return len(self._gates)

    def predecessors(self, index: int) -> list[int]:
        return sorted(self._graph.predecessors(index))

    def successors(self, index: int) -> list[int]:
        return sorted(self._graph.successors(index))

    def is_acyclic(self) -> bool:
        return nx.is_directed_acyclic_graph(self._graph)

    def to_dot(self, name: str = "dependencies", cycles: dict[int, int] | None = None) -> str:
        """
        Render the graph in the Graphviz DOT language.

        Args:
            name (str): Name of the graph.
            cycles (dict[int, int] | None): Start cycle of each gate, added to the node labels when given.

        Returns:
            str: The DOT source. Nodes and edges are sorted, so equal graphs give equal text.
        """
        lines = [f'digraph "{name}" {{', "    node [shape=box, fontname=monospace];"]
        for index in sorted(self._graph.nodes):
            label = self._gates[index].qasm()
            if cycles is not None:
                label = f"{label}\\ncycle {cycles[index]}"
            lines.append(f'    n{index} [label="{label}"];')
        for source, target in sorted(self._graph.edges):
            qubits = ",".join(f"q{qubit}" for qubit in self._graph.edges[source, target]["qubits"])
            lines.append(f'    n{source} -> n{target} [label="{qubits}"];')
        lines.append("}")
        return "\n".join(lines) + "\n"
