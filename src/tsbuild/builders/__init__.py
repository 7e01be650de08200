"""Dynamic library builder and its command-line dialects."""

from .dialects import CommandDialect, build_arguments, dialect_for, msvc_arguments, posix_arguments
from .dynlib import BuildPlan, DynamicLibraryBuilder
from .sources import resolve_sources

__all__ = [
    "BuildPlan",
    "CommandDialect",
    "DynamicLibraryBuilder",
    "build_arguments",
    "dialect_for",
    "msvc_arguments",
    "posix_arguments",
    "resolve_sources",
]
