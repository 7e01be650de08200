"""Structured logging helpers."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO

from tsbuild.errors import IoError

LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40}
LOG_LEVEL_ENV = "TSBUILD_LOG"


@dataclass(slots=True)
class StructuredLogger:
    records: list[dict[str, Any]] = field(default_factory=list)
    stream: TextIO | None = None
    threshold: str = "info"

    def log(
        self,
        *,
        operation: str,
        stage: str | None,
        message: str,
        grammar: str | None = None,
        target: str | None = None,
        level: str = "info",
        extra: dict[str, Any] | None = None,
        echo: bool = True,
    ) -> None:
        record: dict[str, Any] = {
            "level": level,
            "operation": operation,
            "stage": stage,
            "grammar": grammar,
            "target": target,
            "message": message,
        }
        if extra is not None:
            record["extra"] = extra
        self.records.append(record)
        if echo and self.stream is not None and LEVELS.get(level, 0) >= LEVELS[self.threshold]:
            print(f"[{level}] {message}", file=self.stream)

    def to_json_lines(self, path: str | Path) -> Path:
        output_path = Path(path)
        lines = [json.dumps(record, sort_keys=True) for record in self.records]
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        except OSError as exc:
            raise IoError(
                "Failed to write log file.",
                context={"operation": "write_log", "path": str(output_path), "error": str(exc)},
            ) from exc
        return output_path


def configure_logging(*, verbose: bool = False, stream: TextIO | None = None) -> StructuredLogger:
    """Create the process-wide logger; called once at CLI start-up."""
    if verbose:
        threshold = "debug"
    else:
        threshold = os.environ.get(LOG_LEVEL_ENV, "info").strip().lower()
        if threshold not in LEVELS:
            threshold = "info"
    return StructuredLogger(stream=stream if stream is not None else sys.stderr, threshold=threshold)
