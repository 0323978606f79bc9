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

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from loguru import logger

from qcompiler.exceptions import BackendCompilationError
from qcompiler.scheduling import Scheduler

if TYPE_CHECKING:
    from qcompiler.ir import Circuit
    from qcompiler.platform import Platform
    from qcompiler.scheduling import Resource, Schedule


@dataclass(frozen=True)
class BackendOutput:
    """Target code and trace produced by one backend compilation."""

    code: str
    traces: str


class BackendCompiler(ABC):
    """
    Lowers a fused circuit into the code of one target.

    The circuit is scheduled again against the resource model of the target (see :meth:`resources`) and the
    resulting schedule is handed to :meth:`_lower`. Calls to :meth:`compile` on the same instance are serialized and
    every call starts from an empty output, so nothing leaks from one compilation to the next.
    """

    name: ClassVar[str]
    file_extension: ClassVar[str | None] = None

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._output: BackendOutput | None = None

    @property
    def is_noop(self) -> bool:
        """Whether this compiler produces no target code."""
        return self.file_extension is None

    @property
    def output(self) -> BackendOutput | None:
        return self._output

    def resources(self, platform: Platform) -> list[Resource]:  # noqa: PLR6301
        """Target-specific resources the schedule must respect, besides the qubits themselves."""
        return []

    def compile(self, name: str, circuit: Circuit, platform: Platform) -> BackendOutput:
        """
        Compile a fused circuit.

        Args:
            name (str): Name of the program.
            circuit (Circuit): The fused circuit, on physical qubits.
            platform (Platform): The platform of the program.

        Returns:
            BackendOutput: The target code and trace. They are also kept for :meth:`write_code` and
                :meth:`write_traces`.

        Raises:
            BackendCompilationError: If the circuit cannot be lowered to this target.
        """
        with self._lock:
            self._output = None
            try:
                self._check_operands(circuit, platform)
                schedule = Scheduler(platform).schedule(circuit, name, self.resources(platform))
                output = self._lower(name, schedule, platform)
            except BackendCompilationError as exc:
                logger.error("{} failed to compile '{}': {}", type(self).__name__, name, exc)
                raise
            self._output = output
            logger.info("{} compiled '{}' ({} gates)", type(self).__name__, name, len(circuit))
            return output

    @abstractmethod
    def _lower(self, name: str, schedule: Schedule, platform: Platform) -> BackendOutput:
        """Produce target code and trace from a schedule."""

    def write_code(self, path: str | Path) -> None:
        Path(path).write_text(self._require_output().code, encoding="utf-8")

    def write_traces(self, path: str | Path) -> None:
        Path(path).write_text(self._require_output().traces, encoding="utf-8")

    def _require_output(self) -> BackendOutput:
        if self._output is None:
            raise BackendCompilationError(f"{type(self).__name__} has not compiled any circuit yet.")
        return self._output

    @staticmethod
    def _check_operands(circuit: Circuit, platform: Platform) -> None:
        for gate in circuit.gates:
            for qubit in gate.qubits:
                if qubit >= platform.qubit_number:
                    raise BackendCompilationError(
                        f"Gate {gate.qasm()!r} uses qubit {qubit}, but platform '{platform.name}' "
                        f"has {platform.qubit_number} qubits."
                    )


class NoOpCompiler(BackendCompiler):
    """Backend of platforms without target code. Compiling only schedules the circuit."""

    name = "none"

    def _lower(self, name: str, schedule: Schedule, platform: Platform) -> BackendOutput:  # noqa: PLR6301
        return BackendOutput(code="", traces="")
