import pytest

from qcompiler.backends import SimulatorEventCompiler
from qcompiler.exceptions import BackendCompilationError
from qcompiler.ir import CNOT, Circuit, H, Measure, PrepZ, Toffoli
from qcompiler.platform import InstructionSettings, Platform


@pytest.fixture
def platform() -> Platform:
    return Platform(
        qubit_number=3,
        eqasm_compiler="quantumsim_compiler",
        instructions={"cnot": InstructionSettings(duration=40)},
    )


def test_event_log(platform):
    circuit = Circuit(2, [PrepZ(0), H(0), CNOT(0, 1), Measure(1)])

    output = SimulatorEventCompiler().compile("sim", circuit, platform)

    assert output.code == (
        "# event log of 'sim'\n"
        "qubits 3\n"
        "cycle_time 20\n"
        "0 20 prepz q0\n"
        "20 40 h q0\n"
        "40 80 cnot q0,q1\n"
        "80 100 measure q1\n"
    )
    assert output.traces == "q0: [0, 20) [20, 40) [40, 80)\nq1: [40, 80) [80, 100)\nq2: \n"


def test_three_qubit_gates_raise(platform):
    with pytest.raises(BackendCompilationError, match="at most 2"):
        SimulatorEventCompiler().compile("sim", Circuit(3, [Toffoli(0, 1, 2)]), platform)
