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

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from qcompiler.ir import Circuit


@dataclass(frozen=True)
class TranspilationPassOutput:
    pass_name: str
    circuit: Circuit


@dataclass
class TranspilationContext:
    """Record of the circuits produced by each pass of one transpilation, in execution order."""

    outputs: list[TranspilationPassOutput] = field(default_factory=list)
    final_layout: dict[int, int] | None = None

    def output_of(self, pass_name: str) -> Circuit | None:
        for output in reversed(self.outputs):
            if output.pass_name == pass_name:
                return output.circuit
        return None
