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

import logging
import sys
from types import SimpleNamespace

import pytest
from loguru_caplog import loguru_caplog as caplog  # noqa: F401

from qcompiler import _logging
from qcompiler._logging import InterceptHandler, LoggingSettings
from qcompiler.exceptions import ConfigurationError
from qcompiler.options import CompilerOptions
from qcompiler.platform import Platform
from qcompiler.program import Program


def test_log_output(caplog, tmp_path):  # noqa: F811
    program = Program("empty", 2, Platform(qubit_number=2))
    program.compile(CompilerOptions(output_dir=tmp_path))

    assert "Program 'empty' has no kernels, nothing to compile" in caplog.text


class FakeSink:
    def __init__(self, **kwargs):
        self._data = kwargs

    def model_dump(self):
        return dict(self._data)


def test_configure_logging_loads_resolved_path(monkeypatch):
    rel_path = "./nonexistent.yaml"

    monkeypatch.setattr(
        _logging,
        "get_settings",
        lambda: SimpleNamespace(logging_config_path=rel_path),
    )

    with pytest.raises(ConfigurationError, match=r"nonexistent.yaml"):
        _logging.configure_logging()


def test_configure_logging_adds_sinks(monkeypatch):
    sink_out = FakeSink(sink="stdout", level="DEBUG", format=None)
    sink_err = FakeSink(sink="STDERR", level="INFO", format=None)

    settings = SimpleNamespace(sinks=[sink_out, sink_err], intercept_libraries=[])

    monkeypatch.setattr(_logging.LoggingSettings, "load", staticmethod(lambda _: settings))

    added = []

    def fake_add(target, **kwargs):
        added.append({"target": target, "kwargs": kwargs})

    monkeypatch.setattr(_logging.logger, "add", fake_add)

    _logging.configure_logging()

    assert len(added) == 2
    assert added[0]["target"] == sys.stdout
    assert added[0]["kwargs"]["level"] == "DEBUG"
    assert "format" not in added[0]["kwargs"]
    assert added[1]["target"] == sys.stderr
    assert added[1]["kwargs"]["level"] == "INFO"


def test_configure_logging_writes_file_sink(tmp_path):
    log_file = tmp_path / "logs" / "qcompiler.log"
    config = tmp_path / "logging.yaml"
    config.write_text(
        f"sinks:\n  - sink: {log_file.as_posix()}\n    level: DEBUG\n    format: '{{level}} {{message}}'\n"
        "intercept_libraries:\n  - name: qcompiler.test.noisy\n    level: WARNING\n",
        encoding="utf-8",
    )

    try:
        _logging.configure_logging(config)
        _logging.logger.debug("scheduling kernel '{}'", "bell")
        logging.getLogger("qcompiler.test.noisy").info("dropped")
        logging.getLogger("qcompiler.test.noisy").warning("forwarded")
        _logging.logger.remove()

        content = log_file.read_text(encoding="utf-8")
        assert "DEBUG scheduling kernel 'bell'" in content
        assert "WARNING forwarded" in content
        assert "dropped" not in content
    finally:
        _logging.configure_logging()


def test_logging_settings_rejects_invalid_file(tmp_path):
    config = tmp_path / "logging.yaml"
    config.write_text("sinks: 3\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid logging configuration"):
        LoggingSettings.load(config)


def test_logging_settings_of_empty_file(tmp_path):
    config = tmp_path / "logging.yaml"
    config.write_text("", encoding="utf-8")

    settings = LoggingSettings.load(config)

    assert settings.sinks == []
    assert settings.intercept_libraries == []


def test_emit_falls_back_to_levelno(monkeypatch):
    handler = InterceptHandler()

    record = logging.LogRecord(
        name="test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=20,
        msg="warning",
        args=(),
        exc_info=None,
    )

    def raise_value_error(name):
        raise ValueError

    monkeypatch.setattr("qcompiler._logging.logger.level", raise_value_error)

    captured = {}

    monkeypatch.setattr(
        "qcompiler._logging.logger.opt",
        lambda **kwargs: SimpleNamespace(log=lambda level, msg: captured.update({"level": level, "message": msg})),
    )

    handler.emit(record)

    assert captured["level"] == logging.WARNING
    assert captured["message"] == "warning"


class FakeFrame:
    def __init__(self, filename, back=None):
        self.f_code = type("Code", (), {"co_filename": filename})
        self.f_back = back


def test_emit_skips_logging_frames(monkeypatch):
    handler = InterceptHandler()

    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="trigger while",
        args=(),
        exc_info=None,
    )

    fake_user_frame = FakeFrame("user.py", None)
    fake_logging_frame = FakeFrame(logging.__file__, fake_user_frame)

    monkeypatch.setattr(logging, "currentframe", lambda: fake_logging_frame)
    monkeypatch.setattr("qcompiler._logging.logger.level", lambda name: SimpleNamespace(name=name))

    depths = []

    def fake_opt(**kwargs):
        depths.append(kwargs["depth"])
        return SimpleNamespace(log=lambda *_: None)

    monkeypatch.setattr("qcompiler._logging.logger.opt", fake_opt)

    handler.emit(record)

    assert depths == [3]
