"""Source set resolution for generated parser trees."""

from __future__ import annotations

from pathlib import Path

from tsbuild.errors import MissingSourceError
from tsbuild.models import SourceSet

PARSER_SOURCE = "parser.c"
C_SCANNER_SOURCE = "scanner.c"
CXX_SCANNER_SOURCE = "scanner.cc"


def resolve_sources(src_dir: Path) -> SourceSet:
    """Locate ``parser.c`` and at most one scanner; a C scanner wins over C++."""
    parser = src_dir / PARSER_SOURCE
    if not parser.is_file():
        raise MissingSourceError(
            "Generated parser source is missing.",
            path=parser,
            hint="Run the grammar generator before compiling.",
            context={"operation": "resolve_sources", "source_dir": str(src_dir)},
        )

    c_scanner = src_dir / C_SCANNER_SOURCE
    cxx_scanner = src_dir / CXX_SCANNER_SOURCE
    if c_scanner.is_file():
        return SourceSet(include_dir=src_dir, parser=parser, scanner=c_scanner, scanner_dialect="c")
    if cxx_scanner.is_file():
        return SourceSet(
            include_dir=src_dir,
            parser=parser,
            scanner=cxx_scanner,
            scanner_dialect="c++",
        )
    return SourceSet(include_dir=src_dir, parser=parser)
