"""Command-line entrypoint."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from tsbuild.builders.dynlib import DynamicLibraryBuilder
from tsbuild.errors import TsbuildError
from tsbuild.generate import GrammarGenerator
from tsbuild.models import DEFAULT_TARGET, BuildRequest
from tsbuild.observability import StructuredLogger, configure_logging
from tsbuild.pipeline import generate_artifacts, plan_artifacts
from tsbuild.toolchain import EnvironmentToolchain, StaticToolchain, Toolchain


def _version() -> str:
    try:
        return version("tsbuild")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsbuild",
        description="Generate a tree-sitter parser and compile it into a dynamic library.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    parser.add_argument(
        "--grammar-path",
        type=Path,
        default=Path("."),
        help="Path to parser library root",
    )
    parser.add_argument(
        "-a",
        "--artifact-path",
        type=Path,
        default=Path("./artifacts"),
        help="Path where intermediate artifacts should be placed",
    )
    parser.add_argument("-g", "--grammar-name", required=True, help="Grammar name")
    parser.add_argument("-t", "--target", default=DEFAULT_TARGET, help="Compilation target")
    parser.add_argument(
        "--generator",
        default=None,
        help="Grammar generator command (default: $TSBUILD_GENERATOR or tree-sitter)",
    )
    parser.add_argument(
        "--compiler",
        default=None,
        help="Compiler command; skips toolchain discovery",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write a build report (.cbor for CBOR, JSON otherwise)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate sources and print the compiler command without running it",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write structured log records as JSON lines",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger = configure_logging(verbose=args.verbose)
    code = _run(args, logger)
    if args.log_file is not None:
        try:
            logger.to_json_lines(args.log_file)
        except TsbuildError as exc:
            print(f"error[{exc.code}]: {exc}", file=sys.stderr)
            return 1
    return code


def _run(args: argparse.Namespace, logger: StructuredLogger) -> int:
    try:
        request = BuildRequest(
            grammar_path=args.grammar_path,
            artifact_path=args.artifact_path,
            grammar_name=args.grammar_name,
            target=args.target,
        )
        toolchain: Toolchain = (
            StaticToolchain.from_command(args.compiler)
            if args.compiler is not None
            else EnvironmentToolchain()
        )
        generator = GrammarGenerator.from_command(args.generator)
        builder = DynamicLibraryBuilder(toolchain=toolchain, logger=logger)

        if args.dry_run:
            plan = plan_artifacts(request, generator=generator, builder=builder, logger=logger)
            print(" ".join(plan.invocation.command))
            return 0

        report = generate_artifacts(request, generator=generator, builder=builder, logger=logger)
        if args.report is not None:
            report.write(args.report)
    except TsbuildError as exc:
        logger.log(
            operation=exc.context.get("operation", "tsbuild"),
            stage=exc.context.get("stage"),
            message=str(exc),
            level="error",
            extra={"code": exc.code},
            echo=False,
        )
        print(f"error[{exc.code}]: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
