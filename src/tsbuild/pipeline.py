"""Generate-then-compile pipeline for a single grammar."""

from __future__ import annotations

from tsbuild.builders.dynlib import BuildPlan, DynamicLibraryBuilder
from tsbuild.errors import IoError
from tsbuild.generate import GrammarGenerator
from tsbuild.models import BuildRequest
from tsbuild.observability import StructuredLogger
from tsbuild.report import BuildReport


def generate_artifacts(
    request: BuildRequest,
    *,
    generator: GrammarGenerator | None = None,
    builder: DynamicLibraryBuilder | None = None,
    logger: StructuredLogger | None = None,
) -> BuildReport:
    """Run the generator, then compile its output into ``c-dynlib/``."""
    generator, builder, logger = _collaborators(generator, builder, logger)
    _generate(request, generator, logger)

    artifact = builder.build(
        request.source_dir,
        request.dynlib_dir,
        request.library_name,
        request.target,
    )
    logger.log(
        operation="compile_dynlib",
        stage="executed",
        grammar=request.grammar_name,
        target=request.target,
        message="Finished compilation of dynamic C library",
        extra={"output_path": str(artifact.output_path)},
    )
    return BuildReport.from_build(request, artifact, generator.command)


def plan_artifacts(
    request: BuildRequest,
    *,
    generator: GrammarGenerator | None = None,
    builder: DynamicLibraryBuilder | None = None,
    logger: StructuredLogger | None = None,
) -> BuildPlan:
    """Like :func:`generate_artifacts` but stop once the compiler command is known."""
    generator, builder, logger = _collaborators(generator, builder, logger)
    _generate(request, generator, logger)
    return builder.plan(
        request.source_dir,
        request.dynlib_dir,
        request.library_name,
        request.target,
    )


def _collaborators(
    generator: GrammarGenerator | None,
    builder: DynamicLibraryBuilder | None,
    logger: StructuredLogger | None,
) -> tuple[GrammarGenerator, DynamicLibraryBuilder, StructuredLogger]:
    if logger is None:
        logger = builder.logger if builder is not None else StructuredLogger()
    if generator is None:
        generator = GrammarGenerator()
    if builder is None:
        builder = DynamicLibraryBuilder(logger=logger)
    return generator, builder, logger


def _generate(request: BuildRequest, generator: GrammarGenerator, logger: StructuredLogger) -> None:
    try:
        request.artifact_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise IoError(
            "Failed to create artifact directory.",
            context={
                "operation": "generate",
                "path": str(request.artifact_path),
                "error": str(exc),
            },
        ) from exc

    generator.generate(request.grammar_path, request.artifact_path)
    logger.log(
        operation="generate",
        stage=None,
        grammar=request.grammar_name,
        target=request.target,
        message=f'Finished "{generator.display_name} generate"',
    )
