"""Compiler command-line dialects.

Each dialect is a pure function from a source set and an output path to the
ordered argument list passed after the compiler executable.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from pathlib import Path

from tsbuild.models import SourceSet, Target


class CommandDialect(StrEnum):
    MSVC = "msvc"
    POSIX = "posix"


def msvc_arguments(sources: SourceSet, output: Path) -> tuple[str, ...]:
    args = ["/nologo", "/LD", "/I", str(sources.include_dir), "/O2", str(sources.parser)]
    if sources.scanner is not None:
        args.append(str(sources.scanner))
    args.extend(["/link", f"/out:{output}"])
    return tuple(args)


def posix_arguments(sources: SourceSet, output: Path) -> tuple[str, ...]:
    args = [
        "-shared",
        "-fPIC",
        "-fno-exceptions",
        "-g",
        "-I",
        str(sources.include_dir),
        "-o",
        str(output),
        "-O2",
    ]
    if sources.scanner is not None:
        if sources.scanner_dialect == "c":
            args.extend(["-xc", "-std=c99", str(sources.scanner)])
        else:
            args.append(str(sources.scanner))
    # The parser is plain C even when the scanner is C++.
    args.extend(["-xc", str(sources.parser)])
    return tuple(args)


DIALECTS: dict[CommandDialect, Callable[[SourceSet, Path], tuple[str, ...]]] = {
    CommandDialect.MSVC: msvc_arguments,
    CommandDialect.POSIX: posix_arguments,
}


def dialect_for(target: Target) -> CommandDialect:
    return CommandDialect.MSVC if target.is_msvc else CommandDialect.POSIX


def build_arguments(target: Target, sources: SourceSet, output: Path) -> tuple[str, ...]:
    return DIALECTS[dialect_for(target)](sources, output)
