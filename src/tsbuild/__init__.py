"""Generate tree-sitter parsers and compile them into dynamic libraries."""

from .builders import DynamicLibraryBuilder
from .errors import (
    CompilationError,
    ErrorCode,
    GenerationError,
    IoError,
    MissingSourceError,
    TsbuildError,
    ValidationError,
)
from .generate import GrammarGenerator
from .models import (
    BuildArtifact,
    BuildRequest,
    BuildStage,
    Compiler,
    CompilerInvocation,
    SourceSet,
    Target,
)
from .pipeline import generate_artifacts, plan_artifacts
from .report import BuildReport
from .toolchain import EnvironmentToolchain, StaticToolchain, Toolchain

__all__ = [
    "BuildArtifact",
    "BuildReport",
    "BuildRequest",
    "BuildStage",
    "CompilationError",
    "Compiler",
    "CompilerInvocation",
    "DynamicLibraryBuilder",
    "EnvironmentToolchain",
    "ErrorCode",
    "GenerationError",
    "GrammarGenerator",
    "IoError",
    "MissingSourceError",
    "SourceSet",
    "StaticToolchain",
    "Target",
    "Toolchain",
    "TsbuildError",
    "ValidationError",
    "generate_artifacts",
    "plan_artifacts",
]
