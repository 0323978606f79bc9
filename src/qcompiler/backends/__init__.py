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

from .backend_compiler import BackendCompiler, BackendOutput, NoOpCompiler
from .gate_instruction_compiler import GateInstructionCompiler
from .pulse_compiler import PulseCompiler
from .registry import BACKEND_COMPILERS, select_backend_compiler
from .simulator_event_compiler import SimulatorEventCompiler

__all__ = [
    "BACKEND_COMPILERS",
    "BackendCompiler",
    "BackendOutput",
    "GateInstructionCompiler",
    "NoOpCompiler",
    "PulseCompiler",
    "SimulatorEventCompiler",
    "select_backend_compiler",
]
