"""Typed error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path


class ErrorCode(StrEnum):
    """Stable error identifiers used across the CLI and library API."""

    VALIDATION = "E_VALIDATION"
    IO = "E_IO"
    GENERATION = "E_GENERATION"
    MISSING_SOURCE = "E_MISSING_SOURCE"
    COMPILATION = "E_COMPILATION"


class TsbuildError(Exception):
    """Base error class that carries code, optional hint, and context."""

    code: str
    hint: str | None
    context: Mapping[str, str]

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code.value
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        if self.context:
            for k, v in self.context.items():
                if v:
                    parts.append(f"  {k}: {v}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ValidationError(TsbuildError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.VALIDATION, hint=hint, context=context)


class IoError(TsbuildError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.IO, hint=hint, context=context)


class GenerationError(TsbuildError):
    """The grammar generator exited non-zero or could not be spawned."""

    stderr: str

    def __init__(
        self,
        message: str,
        *,
        stderr: str = "",
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        merged = dict(context or {})
        merged["stderr"] = stderr
        super().__init__(message, code=ErrorCode.GENERATION, hint=hint, context=merged)
        self.stderr = stderr


class MissingSourceError(TsbuildError):
    """A source file the build cannot do without is absent."""

    path: Path

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        merged = {"path": str(path), **dict(context or {})}
        super().__init__(message, code=ErrorCode.MISSING_SOURCE, hint=hint, context=merged)
        self.path = path


class CompilationError(TsbuildError):
    """The native compiler failed; both captured streams are kept verbatim."""

    stdout: str
    stderr: str

    def __init__(
        self,
        message: str,
        *,
        stdout: str = "",
        stderr: str = "",
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        merged = dict(context or {})
        merged["stdout"] = stdout
        merged["stderr"] = stderr
        super().__init__(message, code=ErrorCode.COMPILATION, hint=hint, context=merged)
        self.stdout = stdout
        self.stderr = stderr


__all__ = [
    "CompilationError",
    "ErrorCode",
    "GenerationError",
    "IoError",
    "MissingSourceError",
    "TsbuildError",
    "ValidationError",
]
