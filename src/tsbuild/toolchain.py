"""Native compiler discovery for a host/target pair.

Lookup follows the conventions native build helpers use for C++ compilers:
target-specific environment variables first, then the generic ``CXX``, then a
default executable name for the target family. The executable is not probed;
a compiler that cannot be spawned is reported when the build runs it.
"""

from __future__ import annotations

import os
import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from tsbuild.errors import ValidationError
from tsbuild.models import Compiler, Target

MSVC_FORWARDED_ENV = ("INCLUDE", "LIB", "LIBPATH")


class Toolchain(Protocol):
    def resolve(self, *, target: str, host: str) -> Compiler:
        """Return the compiler executable and environment for *target*."""


@dataclass(slots=True)
class EnvironmentToolchain:
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)

    def resolve(self, *, target: str, host: str) -> Compiler:
        parsed = Target.parse(target)
        for key in self.candidate_variables(target=target, host=host):
            value = self.environ.get(key, "").strip()
            if value:
                return self._from_command(value, parsed, source=key)
        return Compiler(path=default_compiler(parsed), env=self._forwarded_env(parsed))

    @staticmethod
    def candidate_variables(*, target: str, host: str) -> tuple[str, ...]:
        kind = "HOST" if host == target else "TARGET"
        return (
            f"CXX_{target}",
            f"CXX_{target.replace('-', '_')}",
            f"{kind}_CXX",
            "CXX",
        )

    def _from_command(self, value: str, target: Target, *, source: str) -> Compiler:
        words = split_command(value, source=source)
        if not words:
            raise ValidationError(
                "Compiler variable does not name an executable.",
                context={"operation": "resolve_toolchain", "variable": source, "value": value},
            )
        return Compiler(path=words[0], env=self._forwarded_env(target), args=tuple(words[1:]))

    def _forwarded_env(self, target: Target) -> dict[str, str]:
        if not target.is_msvc:
            return {}
        return {key: self.environ[key] for key in MSVC_FORWARDED_ENV if key in self.environ}


@dataclass(frozen=True, slots=True)
class StaticToolchain:
    compiler: Compiler

    @classmethod
    def from_command(cls, command: str) -> StaticToolchain:
        words = split_command(command, source="--compiler")
        if not words:
            raise ValidationError(
                "Compiler command must not be empty.",
                context={"operation": "resolve_toolchain"},
            )
        return cls(Compiler(path=words[0], args=tuple(words[1:])))

    def resolve(self, *, target: str, host: str) -> Compiler:
        return self.compiler


def default_compiler(target: Target) -> str:
    if target.is_msvc:
        return "cl.exe"
    if target.is_apple:
        return "clang++"
    if target.is_windows:
        return "g++"
    return "c++"


def split_command(value: str, *, source: str) -> list[str]:
    """Split a shell-style command; *source* names the flag or variable it came from."""
    try:
        return shlex.split(value, posix=os.name != "nt")
    except ValueError as exc:
        raise ValidationError(
            f"Cannot parse command from {source}: {exc}.",
            hint="Balance the quotes in the command.",
            context={"operation": "split_command", "source": source, "value": value},
        ) from exc
