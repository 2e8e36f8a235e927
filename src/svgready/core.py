from __future__ import annotations

import concurrent.futures
import traceback
from pathlib import Path
from typing import Sequence

from .config import AppConfig
from .errors import ConversionError, ErrorCategory
from .guards import byte_length
from .logging import BatchSummary, ConversionLogEntry, ConversionLogger, svg_snippet
from .models import BatchConversionResult, BatchItem, ConversionOptions, ConversionResult
from .pipeline import convert
from .utils import generate_run_id, iter_files
from .whitelist import DEFAULT_WHITELIST, Whitelist


class ConversionService:
    """Runs conversions and records every outcome in the conversion log."""

    def __init__(
        self,
        config: AppConfig,
        *,
        logger: ConversionLogger | None = None,
        whitelist: Whitelist = DEFAULT_WHITELIST,
    ) -> None:
        self._config = config
        self._logger = logger or ConversionLogger(config.runtime.log_file)
        self._whitelist = whitelist

    @property
    def config(self) -> AppConfig:
        return self._config

    def convert_text(
        self,
        raw: str | bytes,
        options: ConversionOptions | None = None,
        *,
        request_id: str | None = None,
    ) -> ConversionResult | ConversionError:
        opts = options or ConversionOptions(debug=self._config.runtime.debug)
        request_id = request_id or generate_run_id()
        outcome = convert(
            raw,
            opts,
            whitelist=self._whitelist,
            max_input_bytes=self._config.max_input_bytes,
        )
        if isinstance(outcome, ConversionError):
            self._log_failure(request_id, raw, outcome)
        else:
            self._log_success(request_id, outcome)
        return outcome

    def convert_file(
        self, path: Path, options: ConversionOptions | None = None
    ) -> ConversionResult | ConversionError:
        if not path.is_file():
            raise FileNotFoundError(f"Source file does not exist: {path}")
        return self.convert_text(path.read_bytes(), options)

    def _log_success(self, request_id: str, result: ConversionResult) -> None:
        self._logger.append(
            ConversionLogEntry(
                request_id=request_id,
                status="success",
                level="INFO",
                message="Converted SVG",
                input_length=result.size_before,
                output_length=result.size_after,
                elapsed_ms=result.elapsed_ms,
                warnings=list(result.warnings),
            )
        )

    def _log_failure(self, request_id: str, raw: str | bytes, error: ConversionError) -> None:
        category = error.category
        entry = ConversionLogEntry(
            request_id=request_id,
            status="failure",
            level="ERROR",
            message=category.title,
            input_length=byte_length(raw),
            error_code=error.code,
            category=category.value,
            technical_detail=error.technical_detail,
        )
        if category is ErrorCategory.INVALID_SVG and self._config.runtime.log_svg_content:
            text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
            entry.svg_input = svg_snippet(text)
        if error.cause is not None:
            entry.traceback = "".join(
                traceback.format_exception(type(error.cause), error.cause, error.cause.__traceback__)
            )
        self._logger.append(entry)

    def batch_convert(
        self,
        inputs: Sequence[Path],
        options: ConversionOptions | None = None,
        *,
        parallelism: int | None = None,
    ) -> BatchConversionResult:
        paths = list(iter_files(inputs))
        parallelism = max(1, parallelism or self._config.runtime.parallelism)
        if parallelism == 1 or len(paths) < 2:
            items = [self._convert_item(path, options) for path in paths]
        else:
            items = self._run_parallel_batch(paths, options, parallelism)

        summary = BatchSummary(total=len(items))
        for item in items:
            if item.ok:
                summary.successes += 1
            elif item.error is not None:
                summary.record_failure(item.error.code)
        return BatchConversionResult(items=items, summary=summary)

    def _convert_item(self, path: Path, options: ConversionOptions | None) -> BatchItem:
        outcome = self.convert_file(path, options)
        if isinstance(outcome, ConversionError):
            return BatchItem(source=path, error=outcome)
        return BatchItem(source=path, result=outcome)

    def _run_parallel_batch(
        self, paths: Sequence[Path], options: ConversionOptions | None, parallelism: int
    ) -> list[BatchItem]:
        with concurrent.futures.ThreadPoolExecutor(max_workers=parallelism) as executor:
            # map keeps results in input order
            return list(executor.map(lambda path: self._convert_item(path, options), paths))


__all__ = ["ConversionService"]
