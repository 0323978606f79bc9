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

from .backend_compiler import BackendCompiler, BackendOutput

if TYPE_CHECKING:
    from qcompiler.platform import Platform
    from qcompiler.scheduling import Schedule

NON_UNITARY_EVENTS = frozenset({"prepz", "measure"})


class SimulatorEventCompiler(BackendCompiler):
    """
    Simulator-event target.

    Produces a time-ordered event log, one line ``<start_ns> <end_ns> <gate>`` per gate. The trace lists the busy
    intervals of every qubit. Gates on more than two qubits are rejected.
    """

    name = "quantumsim_compiler"
    file_extension = "qsim"

    def _lower(self, name: str, schedule: Schedule, platform: Platform) -> BackendOutput:  # noqa: PLR6301
        cycle_time = platform.cycle_time
        lines = [
            f"# event log of '{name}'",
            f"qubits {platform.qubit_number}",
            f"cycle_time {cycle_time}",
        ]
        busy: dict[int, list[str]] = {qubit: [] for qubit in range(platform.qubit_number)}
        for entry in schedule.entries:
            gate = entry.gate
            if gate.nqubits > 2:  # noqa: PLR2004
                raise BackendCompilationError(
                    f"Gate {gate.qasm()!r} acts on {gate.nqubits} qubits; the simulator accepts at most 2."
                )
            if not gate.IS_UNITARY and gate.name not in NON_UNITARY_EVENTS:
                raise BackendCompilationError(f"Gate '{gate.name}' has no simulator event.")
            start, end = entry.cycle * cycle_time, entry.end * cycle_time
            lines.append(f"{start} {end} {gate.qasm()}")
            for qubit in gate.qubits:
                busy[qubit].append(f"[{start}, {end})")

        traces = "".join(f"q{qubit}: {' '.join(intervals)}\n" for qubit, intervals in busy.items())
        return BackendOutput(code="".join(f"{line}\n" for line in lines), traces=traces)
