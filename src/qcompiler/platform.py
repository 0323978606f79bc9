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

import math
from pathlib import Path
from typing import TYPE_CHECKING, Any

import networkx as nx
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, model_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from qcompiler.exceptions import ConfigurationError

if TYPE_CHECKING:
    from qcompiler.ir.gates import Gate


class InstructionSettings(BaseModel):
    """
    Hardware facts about one gate kind.

    Attributes:
        duration (int): Duration of the operation in nanoseconds.
        codeword (int | None): 4-bit pulse codeword used by the pulse/microcode target.
        opcode (str | None): Instruction mnemonic used by the gate-instruction target. Defaults to the gate name.
        channel (str | None): Control channel the operation is played on. Operations sharing a channel are
            limited by the channel capacity declared in :attr:`Platform.channels`.
    """

    model_config = ConfigDict(frozen=True)

    duration: int = Field(ge=0)
    codeword: int | None = Field(default=None, ge=0, le=15)
    opcode: str | None = None
    channel: str | None = None


class Platform(BaseModel):
    """
    Static description of the hardware a program is compiled for.

    A platform is immutable. The program, every pass and the backend compiler share the same instance.

    Example:

        .. code-block:: yaml

            name: linear-4
            qubit_number: 4
            eqasm_compiler: cc_light_compiler
            cycle_time: 20
            topology: [[0, 1], [1, 2], [2, 3]]
            instructions:
              x: {duration: 20, codeword: 1, channel: mw}
              cnot: {duration: 40, opcode: cnot, channel: flux}
              measure: {duration: 300, channel: readout}
            channels: {mw: 2, flux: 1, readout: 4}
    """

    model_config = ConfigDict(frozen=True)

    name: str = "default"
    qubit_number: int = Field(gt=0)
    eqasm_compiler: str = "none"
    cycle_time: int = Field(default=20, gt=0, description="Duration of one clock cycle in nanoseconds.")
    default_duration: int = Field(
        default=20, ge=0, description="Duration in nanoseconds of gates without an instruction entry."
    )
    topology: list[tuple[int, int]] | None = Field(
        default=None, description="Qubit pairs supporting a direct 2-qubit gate. None means all-to-all."
    )
    instructions: dict[str, InstructionSettings] = {}
    channels: dict[str, int] = {}
    awg_of_qubit: dict[int, int] = Field(
        default={}, description="AWG slot driving each qubit on the pulse target. Defaults to the qubit index."
    )

    _graph: nx.Graph = PrivateAttr()

    @model_validator(mode="after")
    def _check_topology(self) -> Platform:
        for edge in self.topology or []:
            if edge[0] == edge[1]:
                raise ValueError(f"Topology edge {edge} connects a qubit to itself.")
            for qubit in edge:
                if not 0 <= qubit < self.qubit_number:
                    raise ValueError(f"Topology edge {edge} references qubit {qubit} outside the platform.")
        for channel, capacity in self.channels.items():
            if capacity < 1:
                raise ValueError(f"Channel '{channel}' must have a capacity of at least 1.")
        return self

    def model_post_init(self, context: Any, /) -> None:
        if self.topology is None:
            graph = nx.complete_graph(self.qubit_number)
        else:
            graph = nx.Graph()
            graph.add_nodes_from(range(self.qubit_number))
            graph.add_edges_from(self.topology)
        self._graph = graph

    @property
    def graph(self) -> nx.Graph:
        """
        Retrieve the connectivity graph: one node per physical qubit, one edge per supported 2-qubit interaction.

        Returns:
            nx.Graph: The connectivity graph. It must not be modified.
        """
        return self._graph

    def is_adjacent(self, qubit_a: int, qubit_b: int) -> bool:
        return self._graph.has_edge(qubit_a, qubit_b)

    def instruction(self, gate_name: str) -> InstructionSettings | None:
        return self.instructions.get(gate_name)

    def duration(self, gate: Gate) -> int:
        """
        Retrieve the duration of a gate in nanoseconds.

        Args:
            gate (Gate): The gate.

        Returns:
            int: The duration from the instruction entry of the gate kind, or :attr:`default_duration`.
        """
        settings = self.instructions.get(gate.name)
        return self.default_duration if settings is None else settings.duration

    def duration_in_cycles(self, gate: Gate) -> int:
        """
        Retrieve the duration of a gate in clock cycles. Every gate takes at least one cycle.

        Args:
            gate (Gate): The gate.

        Returns:
            int: The number of cycles the gate occupies its qubits.
        """
        return max(1, math.ceil(self.duration(gate) / self.cycle_time))

    def awg(self, qubit: int) -> int:
        return self.awg_of_qubit.get(qubit, qubit)

    @classmethod
    def load(cls, path: str | Path) -> Platform:
        """
        Load a platform from a YAML or JSON file.

        Args:
            path (str | Path): The platform file.

        Returns:
            Platform: The platform.

        Raises:
            ConfigurationError: If the file cannot be read or does not describe a valid platform.
        """
        path = Path(path)
        logger.debug("Loading platform from '{}'", path)
        try:
            data = YAML(typ="safe").load(path)
        except (OSError, YAMLError) as exc:
            raise ConfigurationError(f"Cannot read platform file '{path}': {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Platform file '{path}' must contain a mapping.")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid platform file '{path}': {exc}") from exc
