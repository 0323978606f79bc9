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
import math
import re
from pathlib import Path

from qcompiler.exceptions import QCompilerError
from qcompiler.ir import (
    CNOT,
    CZ,
    MX90,
    MY90,
    RX,
    RY,
    RZ,
    SWAP,
    X90,
    Y90,
    Circuit,
    Gate,
    H,
    I,
    Measure,
    PrepZ,
    S,
    Sdag,
    T,
    Tdag,
    Toffoli,
    X,
    Y,
    Z,
)

OPENQASM2_MAP: dict[type[Gate], str] = {
    I: "id",
    X: "x",
    Y: "y",
    Z: "z",
    H: "h",
    S: "s",
    Sdag: "sdg",
    T: "t",
    Tdag: "tdg",
    RX: "rx",
    RY: "ry",
    RZ: "rz",
    CNOT: "cx",
    CZ: "cz",
    SWAP: "swap",
    Toffoli: "ccx",
    PrepZ: "reset",
}

# Fixed rotations have no qelib1.inc name and are exported as parameterized rotations.
FIXED_ROTATIONS: dict[type[Gate], tuple[str, float]] = {
    X90: ("rx", math.pi / 2),
    MX90: ("rx", -math.pi / 2),
    Y90: ("ry", math.pi / 2),
    MY90: ("ry", -math.pi / 2),
}


class UnsupportedGateError(QCompilerError):
    """Raised when an OpenQASM 2.0 instruction has no counterpart in the circuit IR."""


def to_qasm2(circuit: Circuit) -> str:
    """
    Convert the circuit to an OpenQASM 2.0 formatted string.

    Args:
        circuit: The circuit to convert to OpenQASM 2.0.

    Returns:
        str: The OpenQASM 2.0 representation of the circuit.
    """
    qasm_lines: list[str] = []
    qasm_lines.extend(("OPENQASM 2.0;", 'include "qelib1.inc";', f"qreg q[{circuit.nqubits}];"))

    if any(isinstance(gate, Measure) for gate in circuit.gates):
        qasm_lines.append(f"creg c[{circuit.nqubits}];")

    for gate in circuit.gates:
        if isinstance(gate, Measure):
            qubit = gate.qubits[0]
            qasm_lines.append(f"measure q[{qubit}] -> c[{qubit}];")
            continue
        if type(gate) in FIXED_ROTATIONS:
            qasm_name, angle = FIXED_ROTATIONS[type(gate)]
            param_str = f"({angle!r})"
        else:
            qasm_name = OPENQASM2_MAP.get(type(gate), gate.name.lower())
            param_str = ""
            if gate.is_parameterized:
                parameters = ", ".join(repr(p) for p in gate.parameter_values)
                param_str = f"({parameters})"
        qubit_str = ", ".join(f"q[{q}]" for q in gate.qubits)
        qasm_lines.append(f"{qasm_name}{param_str} {qubit_str};")

    return "\n".join(qasm_lines)


def to_qasm2_file(circuit: Circuit, filename: str | Path) -> None:
    """
    Save the QASM representation to a file.

    Args:
        circuit: The circuit to convert to OpenQASM 2.0.
        filename (str | Path): The path to the file where the QASM code will be saved.
    """
    Path(filename).write_text(to_qasm2(circuit), encoding="utf-8")


def _parse_parameter(expression: str) -> float:
    # Only plain numbers and multiples of pi, e.g. "pi/2" or "-pi".
    expression = expression.strip().replace(" ", "")
    match = re.fullmatch(r"(-?)(?:([\d.]+)\*)?pi(?:/([\d.]+))?", expression)
    if match:
        sign = -1.0 if match.group(1) else 1.0
        factor = float(match.group(2)) if match.group(2) else 1.0
        divisor = float(match.group(3)) if match.group(3) else 1.0
        return sign * factor * math.pi / divisor
    return float(expression)


def from_qasm2(qasm_str: str) -> Circuit:
    """
    Parse an OpenQASM 2.0 string and create a corresponding Circuit instance.

    This parser supports the following instructions:
        - Quantum register declaration (e.g., "qreg q[3];")
        - Classical register declaration (ignored)
        - Gate instructions on one, two or three qubits
        - Measurement instructions (e.g., "measure q[0] -> c[0];" or "measure q -> c;")

    Args:
        qasm_str (str): The QASM string to parse.

    Returns:
        Circuit: The constructed Circuit object.

    Raises:
        ValueError: If no quantum register is declared before the first instruction.
        UnsupportedGateError: If a gate has no counterpart in the circuit IR.
    """
    reverse_qasm2_map = {v: k for k, v in OPENQASM2_MAP.items()}

    circuit = None
    for raw_line in qasm_str.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("//"):
            continue
        if line.startswith(("OPENQASM", "include", "creg", "barrier")):
            continue
        if line.startswith("qreg"):
            m = re.match(r"qreg\s+\w+\[(\d+)\];", line)
            if m:
                circuit = Circuit(int(m.group(1)))
            continue
        if circuit is None:
            raise ValueError("Quantum register must be declared before adding gates.")
        if line.startswith("measure"):
            m = re.match(r"measure\s+q\[(\d+)\]\s*->\s*c\[\d+\];", line)
            if m:
                circuit.add(Measure(int(m.group(1))))
            elif re.match(r"measure\s+q\s*->\s*c\s*;", line):
                for qubit in range(circuit.nqubits):
                    circuit.add(Measure(qubit))
            continue

        m = re.match(r"^(\w+)(?:\(([^)]*)\))?\s+(.+);$", line)
        if not m:
            raise UnsupportedGateError(f"Cannot parse instruction: {line}")
        qasm_gate_name, params_str, operands_str = m.groups()
        gate_class = reverse_qasm2_map.get(qasm_gate_name.lower())
        if gate_class is None:
            raise UnsupportedGateError(f"Unknown gate: {qasm_gate_name}")

        qubits = [int(q) for q in re.findall(r"q\[(\d+)\]", operands_str)]
        parameters = [_parse_parameter(p) for p in params_str.split(",") if p.strip()] if params_str else []
        if len(qubits) != gate_class.NQUBITS:
            raise UnsupportedGateError(
                f"Gate {qasm_gate_name} acts on {gate_class.NQUBITS} qubit(s), got {len(qubits)}."
            )
        param_dict = dict(zip(gate_class.PARAMETER_NAMES, parameters))
        circuit.add(gate_class(*qubits, **param_dict))  # type: ignore[call-arg]

    if circuit is None:
        raise ValueError("No quantum register declaration found in QASM.")
    return circuit


def from_qasm2_file(filename: str | Path) -> Circuit:
    """
    Read an OpenQASM 2.0 file and create a corresponding Circuit instance.

    Args:
        filename (str | Path): The path to the QASM file.

    Returns:
        Circuit: The reconstructed Circuit object.
    """
    return from_qasm2(Path(filename).read_text(encoding="utf-8"))
