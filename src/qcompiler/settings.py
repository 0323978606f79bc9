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

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def default_logging_config_path() -> Path:
    return Path(__file__).with_name("logging_config.yaml").resolve()


class QCompilerSettings(BaseSettings):
    """
    Environment-based configuration settings for the compiler.

    These settings are automatically loaded from environment variables
    prefixed with `QCOMPILER_`, or from a local `.env` file if present. They only provide
    defaults: a compilation always runs against an explicit
    :class:`~qcompiler.options.CompilerOptions` instance.
    """

    model_config = SettingsConfigDict(env_prefix="qcompiler_", env_file=".env", env_file_encoding="utf-8")

    optimize: str = Field(default="no", description="Run the optimizer pass (yes/no). [env: QCOMPILER_OPTIMIZE]")
    decompose_toffoli: str = Field(
        default="no",
        description="Toffoli decomposition scheme (AM/NC/no). [env: QCOMPILER_DECOMPOSE_TOFFOLI]",
    )
    mapper: str = Field(default="no", description="Qubit mapper (base/no). [env: QCOMPILER_MAPPER]")
    output_dir: Path = Field(
        default=Path("test_output"),
        description="Directory where compiled artifacts are written. [env: QCOMPILER_OUTPUT_DIR]",
    )
    logging_config_path: Path = Field(
        default_factory=default_logging_config_path,
        description="YAML file used for logging configuration. [env: QCOMPILER_LOGGING_CONFIG_PATH]",
    )


@lru_cache(maxsize=1)
def get_settings() -> QCompilerSettings:
    """
    Returns a singleton instance of QCompilerSettings.

    This function caches the parsed environment-based settings to avoid
    redundant re-parsing across the application lifecycle.

    Returns:
        QCompilerSettings: The cached configuration object populated from environment variables.
    """
    return QCompilerSettings()
