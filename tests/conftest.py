"""Shared test fixtures: stub generator and stub compiler scripts."""

from __future__ import annotations

import json
import sys
import textwrap
from dataclasses import dataclass
from pathlib import Path

import pytest

from tsbuild.generate import GrammarGenerator
from tsbuild.models import Compiler
from tsbuild.toolchain import StaticToolchain

STUB_COMPILER = textwrap.dedent("""\
    import json
    import os
    import sys
    from pathlib import Path

    args = sys.argv[1:]
    with open(os.environ["STUB_COMPILER_LOG"], "a", encoding="utf-8") as fh:
        fh.write(json.dumps(sys.argv) + "\\n")
    if os.environ.get("STUB_COMPILER_FAIL"):
        sys.stdout.write("compiling parser.c\\n")
        sys.stderr.write("parser.c:1:1: error: expected ';'\\n")
        sys.exit(1)
    if os.environ.get("STUB_COMPILER_NO_OUTPUT"):
        sys.exit(0)
    if "-o" in args:
        out = args[args.index("-o") + 1]
    else:
        out = next(arg[len("/out:"):] for arg in args if arg.startswith("/out:"))
    Path(out).write_bytes(b"stub library")
""")

STUB_GENERATOR = textwrap.dedent("""\
    import sys
    from pathlib import Path

    FILES = {files!r}
    FAIL = {fail!r}

    assert sys.argv[1] == "generate", sys.argv
    assert sys.argv[2].endswith("grammar.js"), sys.argv
    if FAIL:
        sys.stderr.write(FAIL)
        sys.exit(1)
    src = Path("src")
    src.mkdir(exist_ok=True)
    for name, content in FILES.items():
        (src / name).write_text(content, encoding="utf-8")
""")

TRIVIAL_PARSER = "int tree_sitter_stub(void) { return 42; }\n"


@dataclass(slots=True)
class StubCompiler:
    script: Path
    log: Path

    def toolchain(self, *, fail: bool = False, no_output: bool = False) -> StaticToolchain:
        env = {"STUB_COMPILER_LOG": str(self.log)}
        if fail:
            env["STUB_COMPILER_FAIL"] = "1"
        if no_output:
            env["STUB_COMPILER_NO_OUTPUT"] = "1"
        return StaticToolchain(Compiler(path=sys.executable, env=env, args=(str(self.script),)))

    def calls(self) -> list[list[str]]:
        if not self.log.exists():
            return []
        lines = self.log.read_text(encoding="utf-8").splitlines()
        return [json.loads(line) for line in lines if line]


@pytest.fixture
def stub_compiler(tmp_path: Path) -> StubCompiler:
    script = tmp_path / "stub_cc.py"
    script.write_text(STUB_COMPILER, encoding="utf-8")
    return StubCompiler(script=script, log=tmp_path / "stub_cc.log")


@pytest.fixture
def make_generator(tmp_path: Path):
    """Return a factory for generator stubs that write *files* or fail with *fail*."""

    def factory(files: dict[str, str] | None = None, fail: str = "") -> GrammarGenerator:
        script = tmp_path / "stub_generator.py"
        script.write_text(
            STUB_GENERATOR.format(files=files if files is not None else {}, fail=fail),
            encoding="utf-8",
        )
        return GrammarGenerator(command=(sys.executable, str(script)))

    return factory


@pytest.fixture
def grammar_root(tmp_path: Path) -> Path:
    root = tmp_path / "tree-sitter-stub"
    root.mkdir()
    (root / "grammar.js").write_text("module.exports = grammar({name: 'stub'});\n", encoding="utf-8")
    return root


@pytest.fixture
def make_sources():
    """Return a factory writing parser.c plus the named extra sources."""

    def factory(src_dir: Path, *names: str, parser: bool = True) -> Path:
        src_dir.mkdir(parents=True, exist_ok=True)
        for name in (("parser.c",) if parser else ()) + names:
            (src_dir / name).write_text(TRIVIAL_PARSER, encoding="utf-8")
        return src_dir

    return factory
