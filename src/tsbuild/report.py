"""Build report export."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import cbor2

from tsbuild.errors import IoError
from tsbuild.models import BuildArtifact, BuildRequest, ScannerDialect


@dataclass(frozen=True, slots=True)
class BuildReport:
    grammar_name: str
    target: str
    library_path: Path
    compiler_command: tuple[str, ...]
    generator_command: tuple[str, ...]
    scanner_dialect: ScannerDialect | None = None
    schema_version: int = 1

    @classmethod
    def from_build(
        cls,
        request: BuildRequest,
        artifact: BuildArtifact,
        generator_command: tuple[str, ...],
    ) -> BuildReport:
        return cls(
            grammar_name=request.grammar_name,
            target=request.target,
            library_path=artifact.output_path,
            compiler_command=artifact.invocation.command,
            generator_command=generator_command,
            scanner_dialect=artifact.sources.scanner_dialect,
        )

    def to_json(self, path: str | Path | None = None) -> str:
        encoded = json.dumps(self._payload(), indent=2, sort_keys=True) + "\n"
        if path is not None:
            Path(path).write_text(encoded, encoding="utf-8")
        return encoded

    def to_cbor(self, path: str | Path | None = None) -> bytes:
        encoded = cbor2.dumps(self._payload(), canonical=True)
        if path is not None:
            Path(path).write_bytes(encoded)
        return encoded

    def write(self, path: str | Path) -> Path:
        """Write the report, choosing CBOR for a ``.cbor`` suffix and JSON otherwise."""
        output_path = Path(path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            if output_path.suffix == ".cbor":
                self.to_cbor(output_path)
            else:
                self.to_json(output_path)
        except OSError as exc:
            raise IoError(
                "Failed to write build report.",
                context={"operation": "write_report", "path": str(output_path), "error": str(exc)},
            ) from exc
        return output_path

    def _payload(self) -> dict[str, object]:
        return {
            "schema_version": self.schema_version,
            "grammar_name": self.grammar_name,
            "target": self.target,
            "library_path": str(self.library_path),
            "compiler_command": list(self.compiler_command),
            "generator_command": list(self.generator_command),
            "scanner_dialect": self.scanner_dialect,
        }
