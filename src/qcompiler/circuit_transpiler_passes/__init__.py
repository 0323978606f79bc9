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

from .cancel_redundant_gates_pass import CancelRedundantGatesPass
from .circuit_transpiler_pass import CircuitTranspilerPass
from .decompose_toffoli_pass import DecomposeToffoliPass
from .map_qubits_pass import MapQubitsPass, QubitLayout
from .transpilation_context import TranspilationContext, TranspilationPassOutput

__all__ = [
    "CancelRedundantGatesPass",
    "CircuitTranspilerPass",
    "DecomposeToffoliPass",
    "MapQubitsPass",
    "QubitLayout",
    "TranspilationContext",
    "TranspilationPassOutput",
]
