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

from qcompiler.exceptions import BackendCompilationError
from qcompiler.scheduling import ChannelResource

from .backend_compiler import BackendCompiler, BackendOutput

if TYPE_CHECKING:
    from qcompiler.ir import Gate
    from qcompiler.platform import Platform
    from qcompiler.scheduling import Resource, Schedule, ScheduledGate

MAX_SINGLE_QUBIT_REGISTERS = 32
MAX_TWO_QUBIT_REGISTERS = 64


class _RegisterFile:
    """Allocates one target register per distinct qubit mask, in order of first use."""

    def __init__(self, prefix: str, setter: str, limit: int) -> None:
        self._prefix = prefix
        self._setter = setter
        self._limit = limit
        self._registers: dict[tuple, str] = {}

    def register(self, mask: tuple) -> str:
        if mask not in self._registers:
            if len(self._registers) == self._limit:
                raise BackendCompilationError(
                    f"Out of '{self._prefix}' registers: more than {self._limit} distinct qubit masks are needed."
                )
            self._registers[mask] = f"{self._prefix}{len(self._registers)}"
        return self._registers[mask]

    def setup_lines(self) -> list[str]:
        lines = []
        for mask, register in self._registers.items():
            elements = ", ".join(str(element) for element in mask)
            lines.append(f"{self._setter} {register}, {{{elements}}}")
        return lines


class GateInstructionCompiler(BackendCompiler):
    """
    Gate-instruction target.

    Operations are issued in bundles of parallel instructions that address qubits through mask registers:
    ``s`` registers hold sets of qubits for single-qubit operations and ``t`` registers hold sets of qubit pairs
    for two-qubit operations. Operations of a bundle with the same opcode and parameters share one instruction,
    and each bundle is prefixed by the number of cycles since the previous one (``bs <delta>``).

    Besides per-qubit exclusivity, operations declaring a platform channel may not exceed the channel capacity in
    any cycle. Two-qubit operations must act on a topology edge, and operations on three or more qubits are
    rejected.
    """

    name = "cc_light_compiler"
    file_extension = "eqasm"

    def resources(self, platform: Platform) -> list[Resource]:  # noqa: PLR6301
        def channels_of(gate: Gate) -> list[str]:
            settings = platform.instruction(gate.name)
            if settings is None or settings.channel is None:
                return []
            return [settings.channel]

        return [ChannelResource(channels_of, dict(platform.channels))]

    def _lower(self, name: str, schedule: Schedule, platform: Platform) -> BackendOutput:
        for entry in schedule.entries:
            self._check_gate(entry.gate, platform)

        single = _RegisterFile("s", "smis", MAX_SINGLE_QUBIT_REGISTERS)
        pairs = _RegisterFile("t", "smit", MAX_TWO_QUBIT_REGISTERS)
        body = ["start:"]
        previous = -1
        for cycle, group in schedule.bundles():
            instructions = [
                self._instruction(opcode, parameters, operands, single, pairs)
                for (opcode, parameters), operands in self._group_by_operation(group, platform).items()
            ]
            body.append(f"    bs {cycle - previous}    {' | '.join(instructions)}")
            previous = cycle
        body.extend(["    br always, start", "    nop", "    nop"])

        lines = [*single.setup_lines(), *pairs.setup_lines(), "", *body]
        code = "".join(f"{line}\n" for line in lines)
        return BackendOutput(code=code, traces=self._occupancy_table(schedule, platform))

    @staticmethod
    def _check_gate(gate: Gate, platform: Platform) -> None:
        if gate.nqubits > 2:  # noqa: PLR2004
            raise BackendCompilationError(
                f"Gate {gate.qasm()!r} acts on {gate.nqubits} qubits; decompose it before targeting "
                f"'{platform.eqasm_compiler}'."
            )
        if gate.nqubits == 2 and not platform.is_adjacent(*gate.qubits):  # noqa: PLR2004
            raise BackendCompilationError(
                f"Gate {gate.qasm()!r} acts on qubits that are not connected in platform '{platform.name}'."
            )

    @staticmethod
    def _group_by_operation(
        group: list[ScheduledGate], platform: Platform
    ) -> dict[tuple[str, tuple[float, ...]], list[tuple[int, ...]]]:
        operations: dict[tuple[str, tuple[float, ...]], list[tuple[int, ...]]] = {}
        for entry in group:
            settings = platform.instruction(entry.gate.name)
            opcode = settings.opcode if settings is not None and settings.opcode else entry.gate.name
            key = (opcode, tuple(entry.gate.parameter_values))
            operations.setdefault(key, []).append(entry.gate.qubits)
        return operations

    @staticmethod
    def _instruction(
        opcode: str,
        parameters: tuple[float, ...],
        operands: list[tuple[int, ...]],
        single: _RegisterFile,
        pairs: _RegisterFile,
    ) -> str:
        if len(operands[0]) == 1:
            register = single.register(tuple(sorted(qubits[0] for qubits in operands)))
        else:
            register = pairs.register(tuple(sorted(operands)))
        suffix = "".join(f", {value:.10g}" for value in parameters)
        return f"{opcode} {register}{suffix}"

    @staticmethod
    def _occupancy_table(schedule: Schedule, platform: Platform) -> str:
        width = 10
        header = "cycle | " + "".join(f"q{qubit}".ljust(width) for qubit in range(platform.qubit_number))
        rows = [header.rstrip()]
        cells = [["."] * platform.qubit_number for _ in range(schedule.depth)]
        for entry in schedule.entries:
            for cycle in range(entry.cycle, entry.end):
                for qubit in entry.gate.qubits:
                    cells[cycle][qubit] = entry.gate.name
        for cycle, row in enumerate(cells):
            rows.append((f"{cycle:>5} | " + "".join(cell.ljust(width) for cell in row)).rstrip())
        return "\n".join(rows) + "\n"
