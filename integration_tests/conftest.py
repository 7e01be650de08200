"""Shared helpers for integration tests that run a real C/C++ compiler."""

from __future__ import annotations

import platform
import shlex
import shutil
import sys
import textwrap
from pathlib import Path

import pytest

from tsbuild.toolchain import EnvironmentToolchain


def host_target() -> str:
    machine = platform.machine().lower()
    arch = {"amd64": "x86_64", "arm64": "aarch64"}.get(machine, machine)
    if sys.platform == "darwin":
        return f"{arch}-apple-darwin"
    return f"{arch}-unknown-linux-gnu"


@pytest.fixture
def native_target() -> str:
    if not sys.platform.startswith(("linux", "darwin")):
        pytest.skip("Integration builds use the POSIX compiler dialect.")
    target = host_target()
    compiler = EnvironmentToolchain().resolve(target=target, host=target)
    if shutil.which(compiler.path) is None:
        pytest.skip(f"No C++ compiler `{compiler.path}` on PATH.")
    return target


@pytest.fixture
def generator_script(tmp_path: Path):
    """Write a generator stub emitting *files* under ``src/``, or failing with *fail*."""

    def factory(files: dict[str, str], fail: str = "") -> str:
        script = tmp_path / "fake_tree_sitter.py"
        script.write_text(
            textwrap.dedent(f"""\
                import sys
                from pathlib import Path

                if {fail!r}:
                    sys.stderr.write({fail!r})
                    sys.exit(1)
                Path("src").mkdir(exist_ok=True)
                for name, content in {files!r}.items():
                    Path("src", name).write_text(content)
            """),
            encoding="utf-8",
        )
        return f"{shlex.quote(sys.executable)} {shlex.quote(str(script))}"

    return factory
