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

from qcompiler.exceptions import ConfigurationError

from .backend_compiler import BackendCompiler, NoOpCompiler
from .gate_instruction_compiler import GateInstructionCompiler
from .pulse_compiler import PulseCompiler
from .simulator_event_compiler import SimulatorEventCompiler

BACKEND_COMPILERS: dict[str, type[BackendCompiler]] = {
    "none": NoOpCompiler,
    "qx": NoOpCompiler,
    "qumis_compiler": PulseCompiler,
    "cc_light_compiler": GateInstructionCompiler,
    "quantumsim_compiler": SimulatorEventCompiler,
}


def select_backend_compiler(identifier: str) -> BackendCompiler:
    """
    Create the backend compiler of a platform backend identifier.

    Args:
        identifier (str): The ``eqasm_compiler`` field of the platform.

    Returns:
        BackendCompiler: A new compiler instance.

    Raises:
        ConfigurationError: If the identifier is empty or not recognized.
    """
    if not identifier:
        raise ConfigurationError("The platform does not name a backend compiler (eqasm_compiler is empty).")
    try:
        compiler_type = BACKEND_COMPILERS[identifier]
    except KeyError as exc:
        recognized = ", ".join(BACKEND_COMPILERS)
        raise ConfigurationError(
            f"Unknown backend compiler '{identifier}' (expected one of: {recognized})."
        ) from exc
    return compiler_type()
