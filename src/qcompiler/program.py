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

import json
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from qcompiler.analysis import InteractionMatrix
from qcompiler.backends import BackendCompiler, BackendOutput, select_backend_compiler
from qcompiler.circuit_transpiler import CircuitTranspiler
from qcompiler.exceptions import (
    BackendCompilationError,
    CapacityError,
    OperandRangeError,
    QCompilerError,
    SchedulingInvariantError,
)
from qcompiler.ir import Circuit
from qcompiler.options import CompilerOptions, MapperMode
from qcompiler.scheduling import Scheduler

if TYPE_CHECKING:
    from collections.abc import Iterable

    from qcompiler.ir import Kernel
    from qcompiler.platform import Platform
    from qcompiler.scheduling import Schedule

HEADER_COMMENT = "# this file has been automatically generated by the qcompiler, do not modify it manually"


class CompilationStatus(str, Enum):
    COMPILED = "compiled"
    PORTABLE_ONLY = "portable_only"
    NOTHING_TO_COMPILE = "nothing_to_compile"


@dataclass(frozen=True)
class CompilationResult:
    """
    Outcome of :meth:`Program.compile`.

    Attributes:
        status (CompilationStatus): ``COMPILED`` when target code was produced, ``PORTABLE_ONLY`` when the platform
            has no backend compiler, ``NOTHING_TO_COMPILE`` for a program without kernels.
        artifacts (dict[str, Path]): Written files, keyed by file name.
        backend_output (BackendOutput | None): Target code and trace, when a backend compiler ran.
    """

    status: CompilationStatus
    artifacts: dict[str, Path] = field(default_factory=dict)
    backend_output: BackendOutput | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is not CompilationStatus.NOTHING_TO_COMPILE


class Program:
    """
    A named sequence of kernels compiled together for one platform.

    The program owns copies of the kernels added to it. Compiling runs every kernel through the optimizer, the
    Toffoli decomposition, the mapper and the scheduler, then fuses the kernels (each repeated by its iteration
    count, in program order) and hands the fused circuit to the backend compiler selected by the platform.

    Args:
        name (str): Name of the program, used for the artifact file names.
        nqubits (int): Logical number of qubits.
        platform (Platform): Target platform.

    Raises:
        ConfigurationError: If the platform backend identifier is empty or not recognized.
        CapacityError: If ``nqubits`` exceeds the number of qubits of the platform.
    """

    def __init__(self, name: str, nqubits: int, platform: Platform) -> None:
        if not name:
            raise ValueError("A program needs a name.")
        self._name = name
        self._nqubits = nqubits
        self._backend_compiler = self._select(platform, nqubits)
        self._platform = platform
        self._kernels: list[Kernel] = []
        self._sweep_points: list[float] = []
        self._config_file: str | None = None

    @staticmethod
    def _select(platform: Platform, nqubits: int) -> BackendCompiler:
        try:
            backend_compiler = select_backend_compiler(platform.eqasm_compiler)
            if nqubits > platform.qubit_number:
                raise CapacityError(  # noqa: TRY301
                    f"Program requires {nqubits} qubits, but platform '{platform.name}' only has "
                    f"{platform.qubit_number}."
                )
        except QCompilerError as exc:
            logger.error("Cannot target platform '{}': {}", platform.name, exc)
            raise
        return backend_compiler

    @property
    def name(self) -> str:
        return self._name

    @property
    def nqubits(self) -> int:
        return self._nqubits

    @property
    def platform(self) -> Platform:
        return self._platform

    @property
    def backend_compiler(self) -> BackendCompiler:
        return self._backend_compiler

    @property
    def kernels(self) -> tuple[Kernel, ...]:
        """Copies of the kernels of the program. Changing them does not change the program."""
        return tuple(deepcopy(kernel) for kernel in self._kernels)

    @property
    def sweep_points(self) -> list[float]:
        return list(self._sweep_points)

    def set_platform(self, platform: Platform) -> None:
        """
        Replace the platform and select its backend compiler.

        Raises:
            ConfigurationError: If the backend identifier of the new platform is empty or not recognized.
            CapacityError: If the program needs more qubits than the new platform has.
        """
        self._backend_compiler = self._select(platform, self._nqubits)
        self._platform = platform

    def set_sweep_points(self, points: Iterable[float]) -> None:
        self._sweep_points = [float(point) for point in points]

    def set_config_file(self, file_name: str) -> None:
        """Write the sweep points to ``file_name`` instead of ``<program>_config.json``."""
        self._config_file = file_name

    def add(self, kernel: Kernel) -> None:
        """
        Append a copy of a kernel.

        Args:
            kernel (Kernel): The kernel. It is not modified, and later changes to it do not affect the program.

        Raises:
            OperandRangeError: If a gate of the kernel uses a qubit outside the program. The program is unchanged.
        """
        for gate in kernel.circuit:
            for qubit in gate.qubits:
                if not 0 <= qubit < self._nqubits:
                    message = (
                        f"Qubit {qubit} of gate '{gate.name}' in kernel '{kernel.name}' is out of range for program "
                        f"'{self._name}' with {self._nqubits} qubits."
                    )
                    logger.error(message)
                    raise OperandRangeError(message, gate=gate, qubit=qubit)
        self._kernels.append(deepcopy(kernel))

    def qasm(self) -> str:
        """
        Render the program in the portable text form.

        Returns:
            str: Header comment, ``qubits <N>`` and one blank-line separated section per kernel.
        """
        sections = [f"{HEADER_COMMENT}\nqubits {self._nqubits}\n"]
        sections.extend(kernel.qasm() for kernel in self._kernels)
        return "\n".join(sections)

    def print_interaction_matrix(self) -> None:
        for kernel in self._kernels:
            logger.info("Interaction matrix of kernel '{}':\n{}", kernel.name, self._interaction_matrix(kernel))

    def write_interaction_matrix(self, output_dir: str | Path | None = None) -> list[Path]:
        """
        Write the interaction matrix of every kernel to ``<kernel>InteractionMatrix.dat``.

        Args:
            output_dir (str | Path | None): Destination directory. Defaults to the configured output directory.

        Returns:
            list[Path]: The written files.
        """
        directory = Path(output_dir) if output_dir is not None else CompilerOptions.from_settings().output_dir
        directory.mkdir(parents=True, exist_ok=True)
        paths = []
        for kernel in self._kernels:
            path = directory / f"{kernel.name}InteractionMatrix.dat"
            path.write_text(self._interaction_matrix(kernel), encoding="utf-8")
            paths.append(path)
        return paths

    def _interaction_matrix(self, kernel: Kernel) -> str:
        # Mapped kernels live on the physical qubits of the platform.
        return InteractionMatrix(kernel.circuit, max(self._nqubits, kernel.circuit.nqubits)).get_string()

    def compile(self, options: CompilerOptions | None = None) -> CompilationResult:
        """
        Compile the program.

        Nothing is written and no kernel is modified until every stage succeeded.

        Args:
            options (CompilerOptions | None): Compiler options. Defaults to the environment settings.

        Returns:
            CompilationResult: The outcome and the written files.

        Raises:
            ConfigurationError: If an option is not recognized, or two qubits that must interact are not connected.
            OperandRangeError: If a gate uses a qubit beyond the platform.
            BackendCompilationError: If the backend compiler cannot lower the fused circuit.
        """
        options = options or CompilerOptions.from_settings()
        try:
            return self._compile(options)
        except BackendCompilationError:
            raise
        except (QCompilerError, SchedulingInvariantError) as exc:
            logger.error("Compilation of program '{}' failed: {}", self._name, exc)
            raise

    def _compile(self, options: CompilerOptions) -> CompilationResult:
        resolved = options.resolve()
        if not self._kernels:
            logger.warning("Program '{}' has no kernels, nothing to compile", self._name)
            return CompilationResult(CompilationStatus.NOTHING_TO_COMPILE)

        logger.info("Compiling program '{}' for platform '{}'", self._name, self._platform.name)
        transpiler = CircuitTranspiler.from_options(resolved, self._platform)
        scheduler = Scheduler(self._platform)
        nqubits = self._platform.qubit_number if resolved.mapper is MapperMode.BASE else self._nqubits

        schedules: list[Schedule] = []
        artifacts: dict[str, str] = {}
        for kernel in self._kernels:
            logger.info("Compiling kernel '{}'", kernel.name)
            schedule = scheduler.schedule(transpiler.transpile(kernel.circuit), kernel.name)
            schedules.append(schedule)
            artifacts[f"{self._name}_{kernel.name}_scheduled.qasm"] = self._scheduled_section(kernel, schedule)
            artifacts[f"{self._name}_{kernel.name}_dependence_graph.dot"] = schedule.dot()
        artifacts[f"{self._name}_scheduled.qasm"] = f"qubits {nqubits}\n" + "".join(
            f"\n{self._scheduled_section(kernel, schedule)}" for kernel, schedule in zip(self._kernels, schedules)
        )

        if self._backend_compiler.is_noop:
            logger.warning(
                "Platform '{}' has no backend compiler: only the portable output of '{}' is written",
                self._platform.name,
                self._name,
            )
            paths = self._write(artifacts, resolved.output_dir)
            self._commit(schedules)
            return CompilationResult(CompilationStatus.PORTABLE_ONLY, paths)

        fused = Circuit(nqubits)
        for kernel, schedule in zip(self._kernels, schedules):
            fused.extend(schedule.circuit.repeated(kernel.iterations))
        logger.debug("Fused {} kernels into {} gates", len(self._kernels), len(fused))

        backend_output = self._backend_compiler.compile(self._name, fused, self._platform)
        artifacts[f"{self._name}.{self._backend_compiler.file_extension}"] = backend_output.code
        artifacts["trace.dat"] = backend_output.traces

        if self._sweep_points:
            config_file = self._config_file or f"{self._name}_config.json"
            artifacts[config_file] = json.dumps({"measurement_points": self._sweep_points})
        else:
            logger.warning("Cannot write sweep point file: sweep point array is empty")

        paths = self._write(artifacts, resolved.output_dir)
        self._commit(schedules)
        logger.info("Program '{}' compiled into {}", self._name, resolved.output_dir)
        return CompilationResult(CompilationStatus.COMPILED, paths, backend_output)

    @staticmethod
    def _scheduled_section(kernel: Kernel, schedule: Schedule) -> str:
        title = f".{kernel.name}" if kernel.iterations == 1 else f".{kernel.name}({kernel.iterations})"
        return "".join(f"{line}\n" for line in [title, *schedule.qasm_lines()])

    @staticmethod
    def _write(artifacts: dict[str, str], output_dir: Path) -> dict[str, Path]:
        output_dir.mkdir(parents=True, exist_ok=True)
        paths = {}
        for file_name, content in artifacts.items():
            path = output_dir / file_name
            path.write_text(content, encoding="utf-8")
            logger.debug("Wrote '{}'", path)
            paths[file_name] = path
        return paths

    def _commit(self, schedules: list[Schedule]) -> None:
        for kernel, schedule in zip(self._kernels, schedules):
            kernel.circuit = schedule.circuit
