"""Core typed dataclasses for build requests, sources and compiler invocations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Literal

from tsbuild.errors import ValidationError

ScannerDialect = Literal["c", "c++"]

DEFAULT_TARGET = "x86_64-unknown-linux-gnu"


class BuildStage(StrEnum):
    """Per-build progress; a failure ends the build at the stage it reached."""

    INIT = "init"
    SOURCES_RESOLVED = "sources_resolved"
    TOOLCHAIN_RESOLVED = "toolchain_resolved"
    COMMAND_CONSTRUCTED = "command_constructed"
    EXECUTED = "executed"


@dataclass(frozen=True, slots=True)
class Target:
    """A parsed ``arch-vendor-os[-env]`` target triple."""

    arch: str
    vendor: str
    os: str
    env: str | None = None

    @classmethod
    def parse(cls, triple: str) -> Target:
        parts = triple.strip().split("-")
        if len(parts) < 3 or not all(parts):
            raise ValidationError(
                f"Invalid target triple: {triple!r}",
                hint="Use the arch-vendor-os[-env] form, e.g. x86_64-unknown-linux-gnu.",
                context={"operation": "parse_target", "target": triple},
            )
        env = "-".join(parts[3:]) or None
        return cls(arch=parts[0], vendor=parts[1], os=parts[2], env=env)

    @property
    def triple(self) -> str:
        parts = [self.arch, self.vendor, self.os]
        if self.env:
            parts.append(self.env)
        return "-".join(parts)

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"

    @property
    def is_msvc(self) -> bool:
        return self.env == "msvc"

    @property
    def is_apple(self) -> bool:
        return self.vendor == "apple" or self.os in ("darwin", "macos", "ios")

    @property
    def shared_library_suffix(self) -> str:
        if self.is_windows:
            return ".dll"
        if self.is_apple:
            return ".dylib"
        return ".so"

    def shared_library_name(self, name: str) -> str:
        return f"{name}{self.shared_library_suffix}"

    def __str__(self) -> str:
        return self.triple


@dataclass(frozen=True, slots=True)
class BuildRequest:
    grammar_path: Path
    artifact_path: Path
    grammar_name: str
    target: str = DEFAULT_TARGET

    def __post_init__(self) -> None:
        name = self.grammar_name.strip()
        if not name:
            raise ValidationError(
                "Grammar name must not be empty.",
                context={"operation": "build_request"},
            )
        if "/" in name or "\\" in name:
            raise ValidationError(
                "Grammar name must not contain path separators.",
                hint="Pass the bare grammar name, e.g. `json`.",
                context={"operation": "build_request", "grammar_name": self.grammar_name},
            )
        Target.parse(self.target)
        object.__setattr__(self, "grammar_name", name)

    @property
    def parsed_target(self) -> Target:
        return Target.parse(self.target)

    @property
    def source_dir(self) -> Path:
        return self.artifact_path / "src"

    @property
    def dynlib_dir(self) -> Path:
        return self.artifact_path / "c-dynlib"

    @property
    def library_name(self) -> str:
        return self.parsed_target.shared_library_name(self.grammar_name)


@dataclass(frozen=True, slots=True)
class SourceSet:
    include_dir: Path
    parser: Path
    scanner: Path | None = None
    scanner_dialect: ScannerDialect | None = None


@dataclass(frozen=True, slots=True)
class Compiler:
    path: str
    env: Mapping[str, str] = field(default_factory=dict)
    args: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CompilerInvocation:
    executable: str
    argv: tuple[str, ...]
    env: Mapping[str, str] = field(default_factory=dict)

    @property
    def command(self) -> tuple[str, ...]:
        return (self.executable, *self.argv)


@dataclass(frozen=True, slots=True)
class BuildArtifact:
    target: str
    output_path: Path
    invocation: CompilerInvocation
    sources: SourceSet
    stdout: str = ""
    stderr: str = ""
