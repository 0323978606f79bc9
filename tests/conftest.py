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

import pytest

from qcompiler.options import CompilerOptions
from qcompiler.platform import InstructionSettings, Platform


@pytest.fixture
def linear_platform() -> Platform:
    """Four qubits on a line: 0-1-2-3, no backend compiler."""
    return Platform(name="linear-4", qubit_number=4, topology=[(0, 1), (1, 2), (2, 3)])


@pytest.fixture
def all_to_all_platform() -> Platform:
    return Platform(name="all-to-all-3", qubit_number=3)


@pytest.fixture
def pulse_platform() -> Platform:
    return Platform(
        name="pulse-3",
        qubit_number=3,
        eqasm_compiler="qumis_compiler",
        instructions={
            "x": InstructionSettings(duration=20, codeword=1),
            "y": InstructionSettings(duration=20, codeword=2),
            "x90": InstructionSettings(duration=20, codeword=3),
            "measure": InstructionSettings(duration=300),
            "prepz": InstructionSettings(duration=40),
        },
    )


@pytest.fixture
def gate_instruction_platform() -> Platform:
    return Platform(
        name="gate-instruction-4",
        qubit_number=4,
        eqasm_compiler="cc_light_compiler",
        topology=[(0, 1), (1, 2), (2, 3)],
        instructions={
            "x": InstructionSettings(duration=20, channel="mw"),
            "h": InstructionSettings(duration=20, channel="mw"),
            "cnot": InstructionSettings(duration=40, opcode="cnot", channel="flux"),
            "measure": InstructionSettings(duration=300, opcode="measz", channel="readout"),
        },
        channels={"mw": 2, "flux": 1, "readout": 4},
    )


@pytest.fixture
def options(tmp_path) -> CompilerOptions:
    return CompilerOptions(output_dir=tmp_path / "out")
