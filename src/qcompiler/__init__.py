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

from ._logging import configure_logging
from .exceptions import (
    BackendCompilationError,
    CapacityError,
    ConfigurationError,
    OperandRangeError,
    QCompilerError,
    SchedulingInvariantError,
)
from .ir import Circuit, Gate, Kernel
from .options import CompilerOptions
from .platform import InstructionSettings, Platform
from .program import CompilationResult, CompilationStatus, Program

configure_logging()

__all__ = [
    "BackendCompilationError",
    "CapacityError",
    "Circuit",
    "CompilationResult",
    "CompilationStatus",
    "CompilerOptions",
    "ConfigurationError",
    "Gate",
    "InstructionSettings",
    "Kernel",
    "OperandRangeError",
    "Platform",
    "Program",
    "QCompilerError",
    "SchedulingInvariantError",
]
