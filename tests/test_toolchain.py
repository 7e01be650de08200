import pytest

from tsbuild.errors import ValidationError
from tsbuild.models import Compiler, Target
from tsbuild.toolchain import EnvironmentToolchain, StaticToolchain, default_compiler

LINUX = "x86_64-unknown-linux-gnu"


def test_target_specific_variable_wins_over_generic() -> None:
    toolchain = EnvironmentToolchain(
        environ={
            f"CXX_{LINUX}": "clang++-17",
            "CXX_x86_64_unknown_linux_gnu": "g++-12",
            "HOST_CXX": "host-c++",
            "CXX": "c++",
        },
    )
    assert toolchain.resolve(target=LINUX, host=LINUX).path == "clang++-17"


def test_underscored_target_variable_is_second() -> None:
    toolchain = EnvironmentToolchain(
        environ={"CXX_x86_64_unknown_linux_gnu": "g++-12", "CXX": "c++"},
    )
    assert toolchain.resolve(target=LINUX, host=LINUX).path == "g++-12"


def test_host_kind_variable_used_when_host_matches_target() -> None:
    toolchain = EnvironmentToolchain(environ={"HOST_CXX": "host-c++", "TARGET_CXX": "target-c++"})
    assert toolchain.resolve(target=LINUX, host=LINUX).path == "host-c++"
    assert (
        toolchain.resolve(target=LINUX, host="aarch64-apple-darwin").path == "target-c++"
    )


def test_wrapper_words_become_leading_arguments() -> None:
    toolchain = EnvironmentToolchain(environ={"CXX": "ccache  g++ -m64"})
    compiler = toolchain.resolve(target=LINUX, host=LINUX)
    assert compiler.path == "ccache"
    assert compiler.args == ("g++", "-m64")


def test_blank_variables_are_skipped() -> None:
    toolchain = EnvironmentToolchain(environ={"HOST_CXX": "   ", "CXX": "clang++"})
    assert toolchain.resolve(target=LINUX, host=LINUX).path == "clang++"


@pytest.mark.parametrize(
    ("triple", "expected"),
    [
        ("x86_64-pc-windows-msvc", "cl.exe"),
        ("aarch64-apple-darwin", "clang++"),
        ("x86_64-pc-windows-gnu", "g++"),
        (LINUX, "c++"),
    ],
)
def test_default_compiler_per_target(triple: str, expected: str) -> None:
    assert default_compiler(Target.parse(triple)) == expected
    assert EnvironmentToolchain(environ={}).resolve(target=triple, host=triple).path == expected


def test_msvc_forwards_toolchain_environment() -> None:
    environ = {"INCLUDE": r"C:\vc\include", "LIB": r"C:\vc\lib", "PATH": r"C:\bin"}
    triple = "x86_64-pc-windows-msvc"

    compiler = EnvironmentToolchain(environ=environ).resolve(target=triple, host=triple)

    assert compiler.env == {"INCLUDE": r"C:\vc\include", "LIB": r"C:\vc\lib"}


def test_posix_targets_carry_no_extra_environment() -> None:
    compiler = EnvironmentToolchain(environ={"INCLUDE": "/x"}).resolve(target=LINUX, host=LINUX)
    assert compiler.env == {}


def test_static_toolchain_ignores_target() -> None:
    compiler = Compiler(path="/opt/cc", args=("--driver-mode=g++",))
    toolchain = StaticToolchain(compiler)
    assert toolchain.resolve(target=LINUX, host=LINUX) is compiler
    assert toolchain.resolve(target="x86_64-pc-windows-msvc", host=LINUX) is compiler


def test_static_toolchain_from_command_splits_words() -> None:
    toolchain = StaticToolchain.from_command("zig c++ -target x86_64-linux-gnu")
    assert toolchain.compiler.path == "zig"
    assert toolchain.compiler.args == ("c++", "-target", "x86_64-linux-gnu")


def test_static_toolchain_rejects_empty_command() -> None:
    with pytest.raises(ValidationError):
        StaticToolchain.from_command("  ")


def test_unbalanced_quote_in_variable_is_validation_error() -> None:
    toolchain = EnvironmentToolchain(environ={"CXX": "'g++"})

    with pytest.raises(ValidationError) as excinfo:
        toolchain.resolve(target=LINUX, host=LINUX)

    assert excinfo.value.context["source"] == "CXX"
    assert excinfo.value.context["value"] == "'g++"


def test_unbalanced_quote_in_compiler_flag_is_validation_error() -> None:
    with pytest.raises(ValidationError) as excinfo:
        StaticToolchain.from_command('"gcc')

    assert excinfo.value.context["source"] == "--compiler"
