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
    from qcompiler.scheduling import Resource, Schedule

NUMBER_OF_AWGS = 3

HEADER = (
    "mov r11, 0 # counter\n"
    "mov r3, 10 # max iterations\n"
    "mov r0, 20000 # relaxation time / 2\n"
    "loop:\n"
)
EPILOGUE = "     beq  r3,  r3, loop   # infinite loop\n"


class PulseCompiler(BackendCompiler):
    """
    Pulse/microcode target.

    Every single-qubit gate plays a 4-bit codeword on the AWG that drives its qubit. Gates starting in the same
    cycle are merged into one ``pulse`` instruction with one codeword slot per AWG, and idle time between bundles
    becomes a ``wait`` on the number of cycles. ``prepz`` waits for the relaxation time held in ``r0`` and
    ``measure`` triggers the readout. The program is wrapped in a header and an infinite loop.

    Multi-qubit gates cannot be lowered.
    """

    name = "qumis_compiler"
    file_extension = "asm"

    def resources(self, platform: Platform) -> list[Resource]:  # noqa: PLR6301
        def awgs_of(gate: Gate) -> list[str]:
            if not gate.IS_UNITARY:
                return []
            return [f"awg{platform.awg(qubit)}" for qubit in gate.qubits]

        return [ChannelResource(awgs_of, {})]

    def _lower(self, name: str, schedule: Schedule, platform: Platform) -> BackendOutput:  # noqa: PLR6301
        body: list[str] = []
        traces: list[str] = []
        previous: int | None = None
        for cycle, group in schedule.bundles():
            if previous is not None:
                body.append(f"     wait {cycle - previous}")
            previous = cycle

            slots = ["0000"] * NUMBER_OF_AWGS
            has_pulse = False
            for entry in group:
                gate = entry.gate
                traces.append(f"{cycle * platform.cycle_time} ns  {gate.qasm()}")
                if gate.nqubits > 1:
                    raise BackendCompilationError(
                        f"Gate {gate.qasm()!r} acts on {gate.nqubits} qubits; the pulse target only plays "
                        "single-qubit pulses."
                    )
                qubit = gate.qubits[0]
                if gate.name == "prepz":
                    body.append(f"     waitreg r0  # prepz q{qubit}")
                    body.append(f"     waitreg r0  # prepz q{qubit}")
                elif gate.name == "measure":
                    body.append(f"     measure  # q{qubit}")
                else:
                    awg = platform.awg(qubit)
                    if awg >= NUMBER_OF_AWGS:
                        raise BackendCompilationError(
                            f"Qubit {qubit} is driven by AWG {awg}, but the pulse target has {NUMBER_OF_AWGS} AWGs."
                        )
                    slots[awg] = self._codeword(gate, platform)
                    has_pulse = True
            if has_pulse:
                body.append(f"     pulse {' '.join(slots)}")

        code = HEADER + "".join(f"{line}\n" for line in body) + EPILOGUE
        return BackendOutput(code=code, traces="".join(f"{line}\n" for line in traces))

    @staticmethod
    def _codeword(gate: Gate, platform: Platform) -> str:
        settings = platform.instruction(gate.name)
        if settings is None or settings.codeword is None:
            raise BackendCompilationError(
                f"Gate '{gate.name}' has no codeword in platform '{platform.name}' and cannot be played as a pulse."
            )
        return format(settings.codeword, "04b")
