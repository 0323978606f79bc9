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

"""Loguru configuration for the compiler."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger
from pydantic import BaseModel, ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from qcompiler.exceptions import ConfigurationError
from qcompiler.settings import get_settings

if TYPE_CHECKING:
    from types import FrameType

STANDARD_STREAMS = ("stderr", "stdout")


class SinkConfig(BaseModel):
    """
    One Loguru sink: ``stderr``, ``stdout`` or a file path, plus the options passed to ``logger.add``.
    """

    sink: str | Path
    level: str = "INFO"
    format: str | None = None
    filter: str | dict[str, str] | None = None
    colorize: bool = False
    enqueue: bool = False
    rotation: str | None = None
    serialize: bool = False


class InterceptLibraryConfig(BaseModel):
    """A stdlib logger whose records are forwarded to Loguru from ``level`` upwards."""

    name: str
    level: str = "ERROR"


class LoggingSettings(BaseModel):
    """
    Logging configuration file: the sinks to install and the stdlib loggers to intercept.
    """

    sinks: list[SinkConfig] = []
    intercept_libraries: list[InterceptLibraryConfig] = []

    @classmethod
    def load(cls, path: str | Path) -> LoggingSettings:
        """
        Read a logging configuration from a YAML or JSON file.

        Raises:
            ConfigurationError: If the file cannot be read or is not a valid configuration.
        """
        path = Path(path)
        try:
            data = YAML(typ="safe").load(path)
        except (OSError, YAMLError) as exc:
            raise ConfigurationError(f"Cannot read logging configuration '{path}': {exc}") from exc
        try:
            return cls.model_validate(data or {})
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid logging configuration '{path}': {exc}") from exc


class InterceptHandler(logging.Handler):
    """
    Redirect stdlib 'logging' records to Loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:  # noqa: PLR6301
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno  # type: ignore[assignment]

        frame: FrameType | None = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _resolve_sink(sink: str | Path) -> Any:
    if isinstance(sink, str) and sink.lower() in STANDARD_STREAMS:
        return getattr(sys, sink.lower())
    path = Path(sink).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def configure_logging(config_path: str | Path | None = None) -> None:
    """
    Install the Loguru sinks of a logging configuration and route stdlib logging through Loguru.

    Args:
        config_path (str | Path | None): The configuration file. Defaults to the ``logging_config_path`` setting
            (``QCOMPILER_LOGGING_CONFIG_PATH``). Relative paths are resolved against the working directory.

    Raises:
        ConfigurationError: If the configuration file cannot be read or is invalid.
    """
    path = Path(config_path if config_path is not None else get_settings().logging_config_path).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()

    settings = LoggingSettings.load(path)

    logger.remove()
    for sink_conf in settings.sinks:
        params = {key: value for key, value in sink_conf.model_dump().items() if value is not None}
        logger.add(_resolve_sink(params.pop("sink")), **params)

    for library in settings.intercept_libraries:
        logging.getLogger(library.name).setLevel(library.level)

    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(logging.NOTSET)
    for name in list(logging.root.manager.loggerDict):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True
