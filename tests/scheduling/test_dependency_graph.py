import networkx as nx

from qcompiler.ir import CNOT, Circuit, H, X
from qcompiler.scheduling import DependencyGraph


def _circuit() -> Circuit:
    return Circuit(2, [X(0), CNOT(0, 1), H(1), X(0), CNOT(0, 1)])


def test_edges_follow_qubit_order():
    graph = DependencyGraph(_circuit())

    assert sorted(graph.graph.edges) == [(0, 1), (1, 2), (1, 3), (2, 4), (3, 4)]
    assert graph.predecessors(4) == [2, 3]
    assert graph.successors(1) == [2, 3]
    assert graph.graph.edges[1, 2]["qubits"] == [1]
    assert graph.is_acyclic()


def test_consecutive_two_qubit_gates_share_one_edge():
    graph = DependencyGraph(Circuit(2, [CNOT(0, 1), CNOT(0, 1)]))
    assert graph.graph.edges[0, 1]["qubits"] == [0, 1]


def test_every_pair_sharing_a_qubit_is_ordered():
    circuit = Circuit(3, [X(0), CNOT(1, 2), H(0), CNOT(0, 2), X(1), CNOT(2, 1)])
    graph = DependencyGraph(circuit)
    gates = circuit.gates
    for i, first in enumerate(gates):
        for j in range(i + 1, len(gates)):
            if set(first.qubits) & set(gates[j].qubits):
                assert nx.has_path(graph.graph, i, j)
                assert not nx.has_path(graph.graph, j, i)


def test_independent_gates_have_no_edges():
    graph = DependencyGraph(Circuit(3, [X(0), X(1), X(2)]))
    assert graph.graph.number_of_edges() == 0
    assert len(graph) == 3


def test_to_dot():
    dot = DependencyGraph(_circuit()).to_dot("kernel", cycles={0: 0, 1: 1, 2: 3, 3: 3, 4: 4})

    assert dot.startswith('digraph "kernel" {\n')
    assert '    n0 [label="x q0\\ncycle 0"];' in dot
    assert '    n0 -> n1 [label="q0"];' in dot
    assert dot.endswith("}\n")
    assert dot == DependencyGraph(_circuit()).to_dot("kernel", cycles={0: 0, 1: 1, 2: 3, 3: 3, 4: 4})
