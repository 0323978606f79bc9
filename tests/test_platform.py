import json

import pytest
from pydantic import ValidationError

from qcompiler.exceptions import ConfigurationError
from qcompiler.ir import CNOT, Measure, X, Y
from qcompiler.platform import InstructionSettings, Platform

PLATFORM_YAML = """\
name: linear-4
qubit_number: 4
eqasm_compiler: cc_light_compiler
cycle_time: 20
topology: [[0, 1], [1, 2], [2, 3]]
instructions:
  x: {duration: 20, codeword: 1, channel: mw}
  cnot: {duration: 40, opcode: cnot, channel: flux}
  measure: {duration: 300, channel: readout}
channels: {mw: 2, flux: 1, readout: 4}
"""


def test_load_yaml(tmp_path):
    path = tmp_path / "platform.yaml"
    path.write_text(PLATFORM_YAML, encoding="utf-8")

    platform = Platform.load(path)

    assert platform.name == "linear-4"
    assert platform.qubit_number == 4
    assert platform.eqasm_compiler == "cc_light_compiler"
    assert platform.topology == [(0, 1), (1, 2), (2, 3)]
    assert platform.instruction("cnot") == InstructionSettings(duration=40, opcode="cnot", channel="flux")
    assert platform.channels == {"mw": 2, "flux": 1, "readout": 4}


def test_load_json(tmp_path):
    path = tmp_path / "platform.json"
    path.write_text(json.dumps({"name": "json", "qubit_number": 2, "eqasm_compiler": "qumis_compiler"}), encoding="utf-8")

    platform = Platform.load(path)

    assert platform.name == "json"
    assert platform.topology is None
    assert platform.cycle_time == 20


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("- 1\n- 2\n", "must contain a mapping"),
        ("name: missing-qubits\n", "Invalid platform file"),
        ("qubit_number: 2\ntopology: [[0, 2]]\n", "Invalid platform file"),
        ("qubit_number: 2\nchannels: {mw: 0}\n", "Invalid platform file"),
        ("qubit_number: [2\n", "Cannot read platform file"),
    ],
)
def test_load_invalid_files(tmp_path, content, message):
    path = tmp_path / "platform.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError, match=message):
        Platform.load(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="Cannot read platform file"):
        Platform.load(tmp_path / "missing.yaml")


def test_self_loop_is_rejected():
    with pytest.raises(ValidationError, match="connects a qubit to itself"):
        Platform(qubit_number=2, topology=[(1, 1)])


def test_durations():
    platform = Platform(
        qubit_number=2,
        cycle_time=20,
        default_duration=10,
        instructions={"cnot": InstructionSettings(duration=50), "measure": InstructionSettings(duration=0)},
    )

    assert platform.duration(X(0)) == 10
    assert platform.duration(CNOT(0, 1)) == 50
    assert platform.duration_in_cycles(X(0)) == 1
    assert platform.duration_in_cycles(CNOT(0, 1)) == 3
    assert platform.duration_in_cycles(Measure(0)) == 1
    assert platform.instruction("y") is None
    assert platform.duration(Y(1)) == 10


def test_graph_of_omitted_topology_is_all_to_all():
    platform = Platform(qubit_number=3)

    assert platform.graph.number_of_edges() == 3
    assert platform.is_adjacent(0, 2)


def test_graph_of_declared_topology():
    platform = Platform(qubit_number=4, topology=[(0, 1), (1, 2)])

    assert sorted(platform.graph.nodes) == [0, 1, 2, 3]
    assert platform.is_adjacent(1, 0)
    assert not platform.is_adjacent(0, 2)
    assert platform.graph.degree(3) == 0


def test_platform_is_immutable():
    platform = Platform(qubit_number=2)

    with pytest.raises(ValidationError):
        platform.qubit_number = 3


def test_awg_defaults_to_qubit_index():
    platform = Platform(qubit_number=3, awg_of_qubit={2: 0})

    assert platform.awg(0) == 0
    assert platform.awg(1) == 1
    assert platform.awg(2) == 0


def test_codeword_is_four_bits():
    with pytest.raises(ValidationError):
        InstructionSettings(duration=20, codeword=16)
