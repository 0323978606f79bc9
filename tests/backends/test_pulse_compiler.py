from concurrent.futures import ThreadPoolExecutor

import pytest

from qcompiler.backends import PulseCompiler
from qcompiler.exceptions import BackendCompilationError
from qcompiler.ir import CNOT, Circuit, Measure, PrepZ, X, Y, Z
from qcompiler.platform import InstructionSettings, Platform


def test_pulse_code(pulse_platform):
    circuit = Circuit(3, [PrepZ(0), X(0), Y(1), Measure(0)])

    output = PulseCompiler().compile("prog", circuit, pulse_platform)

    assert output.code == (
        "mov r11, 0 # counter\n"
        "mov r3, 10 # max iterations\n"
        "mov r0, 20000 # relaxation time / 2\n"
        "loop:\n"
        "     waitreg r0  # prepz q0\n"
        "     waitreg r0  # prepz q0\n"
        "     pulse 0000 0010 0000\n"
        "     wait 2\n"
        "     pulse 0001 0000 0000\n"
        "     wait 1\n"
        "     measure  # q0\n"
        "     beq  r3,  r3, loop   # infinite loop\n"
    )
    assert output.traces == "0 ns  prepz q0\n0 ns  y q1\n40 ns  x q0\n60 ns  measure q0\n"


def test_pulses_on_different_awgs_are_merged(pulse_platform):
    output = PulseCompiler().compile("prog", Circuit(3, [X(0), Y(1), X(2)]), pulse_platform)
    assert "     pulse 0001 0010 0001\n" in output.code


def test_write_code_and_traces(pulse_platform, tmp_path):
    compiler = PulseCompiler()
    with pytest.raises(BackendCompilationError):
        compiler.write_code(tmp_path / "prog.asm")

    output = compiler.compile("prog", Circuit(3, [X(0)]), pulse_platform)
    compiler.write_code(tmp_path / "prog.asm")
    compiler.write_traces(tmp_path / "trace.dat")

    assert (tmp_path / "prog.asm").read_text(encoding="utf-8") == output.code
    assert (tmp_path / "trace.dat").read_text(encoding="utf-8") == output.traces


@pytest.mark.parametrize(
    ("gates", "message"),
    [
        ([CNOT(0, 1)], "single-qubit"),
        ([Z(0)], "no codeword"),
    ],
)
def test_unsupported_gates_raise(pulse_platform, gates, message):
    with pytest.raises(BackendCompilationError, match=message):
        PulseCompiler().compile("prog", Circuit(3, gates), pulse_platform)


def test_qubit_without_awg_raises():
    platform = Platform(
        qubit_number=1,
        eqasm_compiler="qumis_compiler",
        instructions={"x": InstructionSettings(duration=20, codeword=1)},
        awg_of_qubit={0: 3},
    )
    with pytest.raises(BackendCompilationError, match="AWG"):
        PulseCompiler().compile("prog", Circuit(1, [X(0)]), platform)


def test_failed_compilation_discards_previous_output(pulse_platform):
    compiler = PulseCompiler()
    compiler.compile("prog", Circuit(3, [X(0)]), pulse_platform)
    with pytest.raises(BackendCompilationError):
        compiler.compile("prog", Circuit(3, [Z(0)]), pulse_platform)
    assert compiler.output is None


def test_operand_beyond_platform_raises(pulse_platform):
    with pytest.raises(BackendCompilationError, match="has 3 qubits"):
        PulseCompiler().compile("prog", Circuit(4, [X(3)]), pulse_platform)


def test_concurrent_compilations_do_not_mix(pulse_platform):
    compiler = PulseCompiler()
    circuits = [Circuit(3, [X(0)] * n) for n in range(1, 9)]
    expected = [PulseCompiler().compile("prog", circuit, pulse_platform).code for circuit in circuits]

    with ThreadPoolExecutor(max_workers=4) as executor:
        codes = list(executor.map(lambda c: compiler.compile("prog", c, pulse_platform).code, circuits))

    assert codes == expected
