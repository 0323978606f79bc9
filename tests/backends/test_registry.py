import pytest

from qcompiler.backends import (
    GateInstructionCompiler,
    NoOpCompiler,
    PulseCompiler,
    SimulatorEventCompiler,
    select_backend_compiler,
)
from qcompiler.exceptions import ConfigurationError


@pytest.mark.parametrize(
    ("identifier", "compiler_type", "extension"),
    [
        ("none", NoOpCompiler, None),
        ("qx", NoOpCompiler, None),
        ("qumis_compiler", PulseCompiler, "asm"),
        ("cc_light_compiler", GateInstructionCompiler, "eqasm"),
        ("quantumsim_compiler", SimulatorEventCompiler, "qsim"),
    ],
)
def test_select_backend_compiler(identifier, compiler_type, extension):
    compiler = select_backend_compiler(identifier)
    assert type(compiler) is compiler_type
    assert compiler.file_extension == extension
    assert compiler.is_noop is (extension is None)


def test_each_selection_is_a_new_instance():
    assert select_backend_compiler("qumis_compiler") is not select_backend_compiler("qumis_compiler")


@pytest.mark.parametrize("identifier", ["", "cc_light", "QUMIS_COMPILER"])
def test_unknown_identifier_raises(identifier):
    with pytest.raises(ConfigurationError):
        select_backend_compiler(identifier)
