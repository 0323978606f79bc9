from pathlib import Path

from qcompiler.circuit_transpiler import CircuitTranspiler
from qcompiler.circuit_transpiler_passes import CancelRedundantGatesPass, DecomposeToffoliPass, MapQubitsPass
from qcompiler.ir import CNOT, Circuit, Toffoli, X
from qcompiler.options import MapperMode, OptimizeMode, ResolvedOptions, ToffoliDecomposition


def _options(optimize="no", decompose="no", mapper="no") -> ResolvedOptions:
    return ResolvedOptions(
        optimize=OptimizeMode(optimize),
        decompose_toffoli=ToffoliDecomposition(decompose),
        mapper=MapperMode(mapper),
        output_dir=Path("unused"),
    )


def test_pipeline_follows_options(linear_platform):
    transpiler = CircuitTranspiler.from_options(_options("yes", "NC", "base"), linear_platform)
    assert [type(p) for p in transpiler.pipeline] == [CancelRedundantGatesPass, DecomposeToffoliPass, MapQubitsPass]

    assert CircuitTranspiler.from_options(_options(), linear_platform).pipeline == []


def test_empty_pipeline_returns_input(linear_platform):
    circuit = Circuit(2, [X(0), X(0)])
    assert CircuitTranspiler.from_options(_options(), linear_platform).transpile(circuit) == circuit


def test_default_pipeline_optimizes():
    out = CircuitTranspiler().transpile(Circuit(1, [X(0), X(0)]))
    assert len(out) == 0


def test_transpile_runs_passes_in_order(linear_platform):
    transpiler = CircuitTranspiler.from_options(_options("yes", "AM", "base"), linear_platform)
    circuit = Circuit(4, [X(3), X(3), Toffoli(0, 1, 2), CNOT(0, 3)])

    out = transpiler.transpile(circuit)

    names = [output.pass_name for output in transpiler.context.outputs]
    assert names == ["CancelRedundantGatesPass", "DecomposeToffoliPass", "MapQubitsPass"]
    assert transpiler.context.output_of("MapQubitsPass") is out
    assert not any(isinstance(gate, Toffoli) for gate in out.gates)
    for gate in out.gates:
        if gate.nqubits == 2:
            assert linear_platform.is_adjacent(*gate.qubits)
    assert transpiler.context.final_layout is not None
    assert len(circuit) == 4
