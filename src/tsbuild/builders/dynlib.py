"""Dynamic library builder for generated parser sources."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from tsbuild.builders.dialects import build_arguments, dialect_for
from tsbuild.builders.sources import resolve_sources
from tsbuild.errors import CompilationError, IoError
from tsbuild.models import BuildArtifact, BuildStage, CompilerInvocation, SourceSet, Target
from tsbuild.observability import StructuredLogger
from tsbuild.toolchain import EnvironmentToolchain, Toolchain


@dataclass(frozen=True, slots=True)
class BuildPlan:
    target: Target
    sources: SourceSet
    output_path: Path
    invocation: CompilerInvocation


@dataclass(slots=True)
class DynamicLibraryBuilder:
    toolchain: Toolchain = field(default_factory=EnvironmentToolchain)
    logger: StructuredLogger = field(default_factory=StructuredLogger)

    def plan(self, src_dir: Path, dst_dir: Path, dst_name: str, target: str) -> BuildPlan:
        """Resolve sources and compiler and construct the command without running it."""
        parsed = Target.parse(target)
        try:
            dst_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IoError(
                "Failed to create library output directory.",
                context={
                    "operation": "compile_dynlib",
                    "stage": BuildStage.INIT,
                    "path": str(dst_dir),
                    "error": str(exc),
                },
            ) from exc

        sources = resolve_sources(src_dir)
        self._log(
            BuildStage.SOURCES_RESOLVED,
            f"Resolved parser sources in {src_dir}",
            target,
            {
                "parser": str(sources.parser),
                "scanner": str(sources.scanner) if sources.scanner else None,
                "scanner_dialect": sources.scanner_dialect,
            },
        )

        # Host is pinned to the target: no cross toolchain selection.
        compiler = self.toolchain.resolve(target=target, host=target)
        self._log(BuildStage.TOOLCHAIN_RESOLVED, f"Using compiler {compiler.path}", target)

        output_path = dst_dir / dst_name
        argv = (*compiler.args, *build_arguments(parsed, sources, output_path))
        invocation = CompilerInvocation(executable=compiler.path, argv=argv, env=dict(compiler.env))
        self._log(
            BuildStage.COMMAND_CONSTRUCTED,
            f"Compiler command ({dialect_for(parsed)}): {' '.join(invocation.command)}",
            target,
            level="debug",
        )
        return BuildPlan(target=parsed, sources=sources, output_path=output_path, invocation=invocation)

    def build(self, src_dir: Path, dst_dir: Path, dst_name: str, target: str) -> BuildArtifact:
        """Compile parser (and scanner) sources in *src_dir* into ``dst_dir/dst_name``."""
        plan = self.plan(src_dir, dst_dir, dst_name, target)
        invocation = plan.invocation
        context = {
            "operation": "compile_dynlib",
            "stage": BuildStage.EXECUTED,
            "target": target,
            "command": " ".join(invocation.command),
        }
        try:
            result = subprocess.run(
                list(invocation.command),
                env={**os.environ, **invocation.env},
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise CompilationError(
                "Failed to execute C compiler.",
                stderr=str(exc),
                hint="Install a C/C++ compiler or point CXX at one.",
                context=context,
            ) from exc

        if result.returncode != 0:
            raise CompilationError(
                "Parser compilation failed.",
                stdout=result.stdout or "",
                stderr=result.stderr or "",
                context={**context, "returncode": str(result.returncode)},
            )
        if not plan.output_path.is_file():
            raise CompilationError(
                "Compiler exited successfully but produced no library.",
                stdout=result.stdout or "",
                stderr=result.stderr or "",
                context={**context, "path": str(plan.output_path)},
            )

        self._log(BuildStage.EXECUTED, f"Wrote {plan.output_path}", target)
        return BuildArtifact(
            target=target,
            output_path=plan.output_path,
            invocation=invocation,
            sources=plan.sources,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )

    def _log(
        self,
        stage: BuildStage,
        message: str,
        target: str,
        extra: dict[str, object] | None = None,
        *,
        level: str = "debug",
    ) -> None:
        self.logger.log(
            operation="compile_dynlib",
            stage=stage.value,
            message=message,
            target=target,
            level=level,
            extra=extra,
        )
