"""Invocation of the external grammar generator."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from tsbuild.errors import GenerationError
from tsbuild.toolchain import split_command

DEFAULT_GENERATOR = "tree-sitter"
GENERATOR_ENV = "TSBUILD_GENERATOR"


@dataclass(frozen=True, slots=True)
class GrammarGenerator:
    command: tuple[str, ...] = (DEFAULT_GENERATOR,)

    @classmethod
    def from_command(cls, command: str | None = None) -> GrammarGenerator:
        """Build from a shell-style command, falling back to ``$TSBUILD_GENERATOR``."""
        source = "--generator"
        if command is None:
            command = os.environ.get(GENERATOR_ENV, DEFAULT_GENERATOR)
            source = GENERATOR_ENV
        words = tuple(split_command(command, source=source))
        return cls(command=words or (DEFAULT_GENERATOR,))

    def argv(self, grammar_path: Path) -> list[str]:
        grammar_file = Path(grammar_path).resolve() / "grammar.js"
        return [*self.command, "generate", str(grammar_file)]

    def generate(self, grammar_path: Path, artifact_path: Path) -> subprocess.CompletedProcess[str]:
        """Run ``generate`` with *artifact_path* as working directory."""
        argv = self.argv(grammar_path)
        context = {
            "operation": "generate",
            "command": " ".join(argv),
            "cwd": str(artifact_path),
        }
        try:
            completed = subprocess.run(
                argv,
                cwd=artifact_path,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise GenerationError(
                f'Failed to run "{self.display_name} generate".',
                stderr=str(exc),
                hint="Install tree-sitter or pass --generator.",
                context=context,
            ) from exc

        if completed.returncode != 0:
            raise GenerationError(
                f'Failed to run "{self.display_name} generate".',
                stderr=completed.stderr or "",
                context={
                    **context,
                    "returncode": str(completed.returncode),
                    "stdout": completed.stdout or "",
                },
            )
        return completed

    @property
    def display_name(self) -> str:
        return " ".join(self.command)
