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

from loguru import logger

from qcompiler.circuit_transpiler_passes import (
    CancelRedundantGatesPass,
    CircuitTranspilerPass,
    DecomposeToffoliPass,
    MapQubitsPass,
    TranspilationContext,
)
from qcompiler.options import MapperMode, OptimizeMode, ResolvedOptions, ToffoliDecomposition

if TYPE_CHECKING:
    from qcompiler.ir import Circuit
    from qcompiler.platform import Platform


class CircuitTranspiler:
    """Apply an ordered pipeline of circuit transpilation passes.

    The transpiler acts as a thin orchestrator: each pass receives the circuit from the previous
    pass and must return a brand-new circuit, so the input circuit is never modified. The circuits
    produced by every pass are recorded in :attr:`context`.

    Args:
        pipeline (list[CircuitTranspilerPass] | None): Sequential list of passes to execute while transpiling.
    """

    def __init__(self, pipeline: list[CircuitTranspilerPass] | None = None) -> None:
        self._pipeline = pipeline if pipeline is not None else [CancelRedundantGatesPass()]
        self._context = TranspilationContext()

    @classmethod
    def from_options(cls, options: ResolvedOptions, platform: Platform) -> CircuitTranspiler:
        """Build the pipeline selected by the compiler options: optimize, then decompose Toffoli gates, then map.

        Args:
            options (ResolvedOptions): Validated compiler options.
            platform (Platform): Platform the circuits are mapped to.
        Returns:
            CircuitTranspiler: The transpiler.
        """
        pipeline: list[CircuitTranspilerPass] = []
        if options.optimize is OptimizeMode.YES:
            pipeline.append(CancelRedundantGatesPass())
        if options.decompose_toffoli is not ToffoliDecomposition.NO:
            pipeline.append(DecomposeToffoliPass(options.decompose_toffoli))
        if options.mapper is MapperMode.BASE:
            pipeline.append(MapQubitsPass(platform))
        return cls(pipeline)

    @property
    def pipeline(self) -> list[CircuitTranspilerPass]:
        return list(self._pipeline)

    @property
    def context(self) -> TranspilationContext:
        return self._context

    def transpile(self, circuit: Circuit) -> Circuit:
        """Run the configured pass pipeline over the provided circuit.

        Args:
            circuit (Circuit): Circuit to be rewritten by the transpiler passes.
        Returns:
            Circuit: The circuit returned by the last pass in the pipeline.
        """
        self._context = TranspilationContext()
        for transpiler_pass in self._pipeline:
            transpiler_pass.attach_context(self._context)
            size = len(circuit)
            circuit = transpiler_pass.run(circuit)
            logger.debug("{}: {} -> {} gates", type(transpiler_pass).__name__, size, len(circuit))
        return circuit
