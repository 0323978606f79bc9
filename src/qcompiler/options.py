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

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ConfigDict

from qcompiler.exceptions import ConfigurationError
from qcompiler.settings import QCompilerSettings, get_settings

TOption = TypeVar("TOption", bound=Enum)


class OptimizeMode(str, Enum):
    YES = "yes"
    NO = "no"


class ToffoliDecomposition(str, Enum):
    """
    Toffoli decomposition schemes.

    - ``AM``: phase-polynomial construction with 7 T gates and 7 CNOTs (T-depth 3).
    - ``NC``: the textbook construction with 6 CNOTs.
    - ``NO``: Toffoli gates are kept as they are.
    """

    AM = "AM"
    NC = "NC"
    NO = "no"


class MapperMode(str, Enum):
    BASE = "base"
    NO = "no"


def parse_option(option_type: type[TOption], value: str | TOption, key: str) -> TOption:
    """
    Convert a raw option value into its enumerated form.

    Args:
        option_type (type[Enum]): The enumeration listing the recognized values.
        value (str | Enum): The raw value.
        key (str): The option name, used in the error message.

    Returns:
        Enum: The recognized value.

    Raises:
        ConfigurationError: If ``value`` is not one of the recognized values.
    """
    try:
        return option_type(value)
    except ValueError as exc:
        recognized = ", ".join(str(member.value) for member in option_type)
        raise ConfigurationError(f"Unknown option '{value}' set for {key} (expected one of: {recognized}).") from exc


@dataclass(frozen=True)
class ResolvedOptions:
    """Compiler options after validation."""

    optimize: OptimizeMode
    decompose_toffoli: ToffoliDecomposition
    mapper: MapperMode
    output_dir: Path


class CompilerOptions(BaseModel):
    """
    Options of a compilation, passed explicitly to :meth:`~qcompiler.program.Program.compile`.

    Values are kept as given and only validated by :meth:`resolve`, which the pipeline calls once before any pass
    runs.
    """

    model_config = ConfigDict(frozen=True)

    optimize: str = "no"
    decompose_toffoli: str = "no"
    mapper: str = "no"
    output_dir: Path = Path("test_output")

    @classmethod
    def from_settings(cls, settings: QCompilerSettings | None = None) -> CompilerOptions:
        """
        Build options from the environment-based settings.

        Args:
            settings (QCompilerSettings | None): Settings to read. Defaults to :func:`~qcompiler.settings.get_settings`.

        Returns:
            CompilerOptions: The options.
        """
        settings = settings or get_settings()
        return cls(
            optimize=settings.optimize,
            decompose_toffoli=settings.decompose_toffoli,
            mapper=settings.mapper,
            output_dir=settings.output_dir,
        )

    def resolve(self) -> ResolvedOptions:
        """
        Validate every enumerated option.

        Returns:
            ResolvedOptions: The validated options.

        Raises:
            ConfigurationError: On the first unrecognized value.
        """
        return ResolvedOptions(
            optimize=parse_option(OptimizeMode, self.optimize, "optimize"),
            decompose_toffoli=parse_option(ToffoliDecomposition, self.decompose_toffoli, "decompose_toffoli"),
            mapper=parse_option(MapperMode, self.mapper, "mapper"),
            output_dir=self.output_dir,
        )
