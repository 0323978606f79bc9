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

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .transpilation_context import TranspilationContext, TranspilationPassOutput

if TYPE_CHECKING:
    from qcompiler.ir import Circuit


class CircuitTranspilerPass(ABC):
    """One compilation stage applied to a kernel circuit: optimization, Toffoli decomposition or qubit mapping.

    A pass never modifies the circuit it receives. It builds a new one, which the transpiler hands to the next
    pass. When a :class:`TranspilationContext` is attached, the pass records its output circuit there, and the
    mapper also records the final logical-to-physical layout.
    """

    context: TranspilationContext | None = None

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def run(self, circuit: Circuit) -> Circuit:
        """Rewrite a kernel circuit.

        Args:
            circuit (Circuit): The circuit produced by the previous pass. It is not modified.
        Returns:
            Circuit: The rewritten circuit.
        """

    def attach_context(self, ctx: TranspilationContext) -> None:
        self.context = ctx

    def add_output_to_context(self, circuit: Circuit) -> None:
        if self.context is not None:
            self.context.outputs.append(TranspilationPassOutput(self.name, circuit))

    def record_final_layout(self, layout: dict[int, int]) -> None:
        """Store where every logical qubit ended up, keyed by logical qubit."""
        if self.context is not None:
            self.context.final_layout = dict(layout)
