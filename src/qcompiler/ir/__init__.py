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

from .circuit import Circuit
from .gates import (
    CNOT,
    CZ,
    GATES_BY_NAME,
    MX90,
    MY90,
    RX,
    RY,
    RZ,
    SWAP,
    X90,
    Y90,
    Gate,
    H,
    I,
    Measure,
    PrepZ,
    S,
    Sdag,
    T,
    Tdag,
    Toffoli,
    X,
    Y,
    Z,
    build_gate,
)
from .kernel import Kernel

__all__ = [
    "CNOT",
    "CZ",
    "GATES_BY_NAME",
    "MX90",
    "MY90",
    "RX",
    "RY",
    "RZ",
    "SWAP",
    "X90",
    "Y90",
    "Circuit",
    "Gate",
    "H",
    "I",
    "Kernel",
    "Measure",
    "PrepZ",
    "S",
    "Sdag",
    "T",
    "Tdag",
    "Toffoli",
    "X",
    "Y",
    "Z",
    "build_gate",
]
