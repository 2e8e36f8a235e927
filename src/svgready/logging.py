from __future__ import annotations

import json
import os
import re
import threading
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

if os.name == "posix":
    import fcntl

CONTROL_CHARS_RE = re.compile(r"[\r\n\x00-\x1f\x7f]")
SNIPPET_LENGTH = 500


def _utc_timestamp(epoch: float | None = None) -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(epoch))


def svg_snippet(text: str, length: int = SNIPPET_LENGTH) -> str:
    if len(text) <= length:
        return text
    return text[:length] + "... [truncated]"


@dataclass(slots=True)
class ConversionLogEntry:
    request_id: str
    status: str
    level: str
    message: str
    input_length: int
    output_length: int = 0
    error_code: str | None = None
    category: str | None = None
    technical_detail: str | None = None
    elapsed_ms: float = 0.0
    warnings: list[str] = field(default_factory=list)
    svg_input: str | None = None
    traceback: str | None = None
    timestamp: str = field(default_factory=_utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["message"] = CONTROL_CHARS_RE.sub("", self.message)
        return {key: value for key, value in payload.items() if value not in (None, "", [])}


class ConversionLogger:
    """Append-only JSONL sink, safe to share between threads and processes."""

    def __init__(self, log_file: Path) -> None:
        self._log_file = log_file
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._log_file

    def append(self, entry: ConversionLogEntry) -> None:
        line = json.dumps(entry.to_dict(), ensure_ascii=False) + "\n"
        with self._lock:
            self._log_file.parent.mkdir(parents=True, exist_ok=True)
            with self._log_file.open("a", encoding="utf-8") as handle:
                if os.name == "posix":
                    fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
                try:
                    handle.write(line)
                    handle.flush()
                finally:
                    if os.name == "posix":
                        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)

    def read_entries(self) -> list[dict[str, Any]]:
        if not self._log_file.exists():
            return []
        with self._log_file.open("r", encoding="utf-8") as handle:
            return [json.loads(line) for line in handle if line.strip()]


@dataclass(slots=True)
class BatchSummary:
    timestamp: float = field(default_factory=time.time)
    total: int = 0
    successes: int = 0
    failures: int = 0
    errors: dict[str, int] = field(default_factory=dict)

    def record_failure(self, code: str) -> None:
        self.failures += 1
        self.errors[code] = self.errors.get(code, 0) + 1


__all__ = [
    "BatchSummary",
    "ConversionLogEntry",
    "ConversionLogger",
    "svg_snippet",
]
