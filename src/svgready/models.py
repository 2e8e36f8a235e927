"""Domain models for SVG conversion."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConversionError
from .logging import BatchSummary


@dataclass(frozen=True, slots=True)
class ConversionOptions:
    """Configuration for a single conversion."""

    strip_root_width_height: bool = False
    strip_root_class: bool = False
    emit_base64: bool = False
    debug: bool = False


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Output of a successful conversion."""

    normalized: str
    data_uri: str
    background_css: str
    mask_css: str
    size_before: int
    size_after: int
    base64_uri: str | None = None
    warnings: tuple[str, ...] = ()
    elapsed_ms: float = 0.0

    @property
    def preview(self) -> str:
        # The normalized markup is already sanitized and safe to embed as is.
        return self.normalized

    @property
    def savings_percent(self) -> int:
        if self.size_before <= 0:
            return 0
        return round((self.size_before - self.size_after) / self.size_before * 100)


@dataclass(slots=True)
class BatchItem:
    source: Path
    result: ConversionResult | None = None
    error: ConversionError | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass(slots=True)
class BatchConversionResult:
    """Aggregate results for a batch conversion request."""

    items: list[BatchItem] = field(default_factory=list)
    summary: BatchSummary = field(default_factory=BatchSummary)


__all__ = [
    "BatchConversionResult",
    "BatchItem",
    "ConversionOptions",
    "ConversionResult",
]
