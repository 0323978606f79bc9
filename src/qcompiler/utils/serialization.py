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

from io import StringIO
from pathlib import Path
from typing import Any, TypeVar, overload

from ruamel.yaml.error import YAMLError

from qcompiler.exceptions import QCompilerError
from qcompiler.yaml import yaml

T = TypeVar("T")


class DeserializationError(QCompilerError):
    """Raised when a YAML document cannot be turned back into the expected object."""


def serialize(obj: Any) -> str:
    """
    Serialize a gate, circuit, kernel or platform into a YAML string.

    Args:
        obj (Any): The object to serialize. Its class must be registered with :data:`qcompiler.yaml.yaml`.

    Returns:
        str: The YAML document.
    """
    with StringIO() as stream:
        yaml.dump(obj, stream)
        return stream.getvalue()


def serialize_to(obj: Any, file: str | Path) -> None:
    """
    Serialize an object into a YAML file.

    Args:
        obj (Any): The object to serialize.
        file (str | Path): The destination file.
    """
    with Path(file).open("w", encoding="utf-8") as stream:
        yaml.dump(obj, stream)


@overload
def deserialize(yaml_string: str) -> Any: ...


@overload
def deserialize(yaml_string: str, cls: type[T]) -> T: ...


def deserialize(yaml_string: str, cls: type[T] | None = None) -> Any:
    """
    Rebuild an object from a YAML string.

    Args:
        yaml_string (str): The YAML document.
        cls (type | None): The class the result must be an instance of.

    Returns:
        Any: The rebuilt object.

    Raises:
        DeserializationError: If the document is not valid YAML or the result is not an instance of ``cls``.
    """
    try:
        result = yaml.load(yaml_string)
    except YAMLError as exc:
        raise DeserializationError(f"Failed to deserialize YAML string: {exc}") from exc
    return _check_type(result, cls)


@overload
def deserialize_from(file: str | Path) -> Any: ...


@overload
def deserialize_from(file: str | Path, cls: type[T]) -> T: ...


def deserialize_from(file: str | Path, cls: type[T] | None = None) -> Any:
    """
    Rebuild an object from a YAML file.

    Args:
        file (str | Path): The source file.
        cls (type | None): The class the result must be an instance of.

    Returns:
        Any: The rebuilt object.

    Raises:
        DeserializationError: If the file cannot be read, is not valid YAML or does not hold an instance of ``cls``.
    """
    try:
        with Path(file).open(encoding="utf-8") as stream:
            result = yaml.load(stream)
    except (OSError, YAMLError) as exc:
        raise DeserializationError(f"Failed to deserialize YAML file {file}: {exc}") from exc
    return _check_type(result, cls)


def _check_type(result: Any, cls: type | None) -> Any:
    if cls is not None and not isinstance(result, cls):
        raise DeserializationError(
            f"Deserialized object is of type {type(result).__name__}, expected {cls.__name__}."
        )
    return result
