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

import heapq
from dataclasses import dataclass
from itertools import groupby
from typing import TYPE_CHECKING

from loguru import logger

from qcompiler.exceptions import SchedulingInvariantError
from qcompiler.ir import Circuit

from .dependency_graph import DependencyGraph
from .resources import QubitResource, Resource

if TYPE_CHECKING:
    from collections.abc import Iterable

    from qcompiler.ir import Gate
    from qcompiler.platform import Platform


@dataclass(frozen=True)
class ScheduledGate:
    """A gate with its start cycle and its duration in cycles.

    ``index`` is the position of the gate in the circuit that was scheduled.
    """

    index: int
    gate: Gate
    cycle: int
    duration: int

    @property
    def end(self) -> int:
        return self.cycle + self.duration


class Schedule:
    """Result of scheduling one circuit.

    Args:
        name (str): Name of the scheduled circuit, used for the dependence graph.
        nqubits (int): Number of qubits of the scheduled circuit.
        entries (Iterable[ScheduledGate]): The scheduled gates.
        dependencies (DependencyGraph): Dependency graph the schedule respects.
    """

    def __init__(
        self, name: str, nqubits: int, entries: Iterable[ScheduledGate], dependencies: DependencyGraph
    ) -> None:
        self._name = name
        self._nqubits = nqubits
        self._entries = sorted(entries, key=lambda entry: (entry.cycle, entry.index))
        self._dependencies = dependencies

    @property
    def name(self) -> str:
        return self._name

    @property
    def entries(self) -> list[ScheduledGate]:
        return list(self._entries)

    @property
    def dependencies(self) -> DependencyGraph:
        return self._dependencies

    @property
    def depth(self) -> int:
        """Number of cycles from the start of the first gate to the end of the last one."""
        return max((entry.end for entry in self._entries), default=0)

    @property
    def circuit(self) -> Circuit:
        """The scheduled gates as a circuit, ordered by start cycle and then by original position."""
        return Circuit(self._nqubits, (entry.gate for entry in self._entries))

    def bundles(self) -> list[tuple[int, list[ScheduledGate]]]:
        """Group the gates that start in the same cycle.

        Returns:
            list[tuple[int, list[ScheduledGate]]]: ``(cycle, gates)`` pairs in increasing cycle order.
        """
        return [(cycle, list(group)) for cycle, group in groupby(self._entries, key=lambda entry: entry.cycle)]

    def qasm_lines(self) -> list[str]:
        """Render the schedule as bundled qasm.

        A bundle with one gate is printed as the gate itself, a bundle with several gates as
        ``{ g1 | g2 }``. Idle cycles between consecutive bundles are printed as ``wait k``.
        """
        lines: list[str] = []
        previous: int | None = None
        for cycle, group in self.bundles():
            if previous is not None and cycle - previous > 1:
                lines.append(f"    wait {cycle - previous - 1}")
            if len(group) == 1:
                lines.append(f"    {group[0].gate.qasm()}")
            else:
                lines.append("    { " + " | ".join(entry.gate.qasm() for entry in group) + " }")
            previous = cycle
        return lines

    def qasm(self) -> str:
        return "\n".join(self.qasm_lines())

    def dot(self) -> str:
        """Render the dependence graph annotated with the start cycle of every gate."""
        cycles = {entry.index: entry.cycle for entry in self._entries}
        return self._dependencies.to_dot(self._name or "circuit", cycles)


class Scheduler:
    """
    As-soon-as-possible list scheduler.

    Gates become ready once all their dependency predecessors are scheduled. Ready gates are taken in order of
    their earliest possible start cycle, ties broken by position in the circuit, so the result is fully
    deterministic. Each gate starts at the first cycle, not earlier than the end of its predecessors, at which
    every resource accepts it. Qubits are always a resource; targets add their own (for example control channels).

    Args:
        platform (Platform): Platform giving the gate durations.
    """

    def __init__(self, platform: Platform) -> None:
        self._platform = platform

    def schedule(self, circuit: Circuit, name: str = "", resources: Iterable[Resource] = ()) -> Schedule:
        """
        Assign a start cycle to every gate of a circuit.

        Args:
            circuit (Circuit): The circuit to schedule. It is not modified.
            name (str): Name of the circuit.
            resources (Iterable[Resource]): Extra resource constraints. They must be fresh instances.

        Returns:
            Schedule: The schedule.

        Raises:
            SchedulingInvariantError: If some gate could not be scheduled because the dependencies form a cycle.
        """
        dependencies = DependencyGraph(circuit)
        gates = dependencies.gates
        constraints: list[Resource] = [QubitResource(), *resources]

        pending = {index: dependencies.graph.in_degree(index) for index in range(len(gates))}
        earliest = dict.fromkeys(range(len(gates)), 0)
        ready = [(0, index) for index, count in pending.items() if count == 0]
        heapq.heapify(ready)

        entries: list[ScheduledGate] = []
        while ready:
            start, index = heapq.heappop(ready)
            gate = gates[index]
            duration = self._platform.duration_in_cycles(gate)
            cycle = start
            while not all(resource.available(gate, cycle, duration) for resource in constraints):
                cycle += 1
            for resource in constraints:
                resource.reserve(gate, cycle, duration)
            entries.append(ScheduledGate(index, gate, cycle, duration))

            for successor in dependencies.successors(index):
                earliest[successor] = max(earliest[successor], cycle + duration)
                pending[successor] -= 1
                if pending[successor] == 0:
                    heapq.heappush(ready, (earliest[successor], successor))

        if len(entries) != len(gates):
            raise SchedulingInvariantError(
                f"Scheduled {len(entries)} of {len(gates)} gates of '{name}': the dependence graph has a cycle."
            )

        schedule = Schedule(name, circuit.nqubits, entries, dependencies)
        logger.debug("Scheduled '{}': {} gates in {} cycles", name, len(entries), schedule.depth)
        return schedule
