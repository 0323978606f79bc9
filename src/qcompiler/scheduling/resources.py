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
from collections import defaultdict
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from qcompiler.ir import Gate


class Resource(ABC):
    """A hardware resource that limits which gates may run at the same time.

    Resources are stateful: create a fresh instance for every schedule.
    """

    @abstractmethod
    def available(self, gate: Gate, cycle: int, duration: int) -> bool:
        """Return whether ``gate`` may occupy this resource during ``[cycle, cycle + duration)``."""

    @abstractmethod
    def reserve(self, gate: Gate, cycle: int, duration: int) -> None:
        """Record that ``gate`` occupies this resource during ``[cycle, cycle + duration)``."""


class QubitResource(Resource):
    """Each qubit runs at most one gate at a time."""

    def __init__(self) -> None:
        self._busy_until: dict[int, int] = {}

    def available(self, gate: Gate, cycle: int, duration: int) -> bool:
        return all(self._busy_until.get(qubit, 0) <= cycle for qubit in gate.qubits)

    def reserve(self, gate: Gate, cycle: int, duration: int) -> None:
        for qubit in gate.qubits:
            self._busy_until[qubit] = cycle + duration


class ChannelResource(Resource):
    """Shared control channels with a limited number of simultaneous operations.

    Args:
        channels_of (Callable[[Gate], list[str]]): Channels a gate occupies. Gates without channels are not limited.
        capacities (dict[str, int]): Maximum number of simultaneous operations per channel. Channels missing
            from the mapping have a capacity of 1.
    """

    def __init__(self, channels_of: Callable[[Gate], list[str]], capacities: dict[str, int]) -> None:
        self._channels_of = channels_of
        self._capacities = capacities
        self._occupancy: dict[tuple[str, int], int] = defaultdict(int)

    def available(self, gate: Gate, cycle: int, duration: int) -> bool:
        for channel in self._channels_of(gate):
            capacity = self._capacities.get(channel, 1)
            if any(self._occupancy[channel, c] >= capacity for c in range(cycle, cycle + duration)):
                return False
        return True

    def reserve(self, gate: Gate, cycle: int, duration: int) -> None:
        for channel in self._channels_of(gate):
            for c in range(cycle, cycle + duration):
                self._occupancy[channel, c] += 1
