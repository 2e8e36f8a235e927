"""The conversion pipeline: size guard through encoder.

``convert`` never raises for bad input. Stages signal failure with
``StageFailure`` and the first one short-circuits the rest; the error is
handed back to the caller as a ``ConversionError`` value.
"""

from __future__ import annotations

import time

from .encoder import background_css, mask_css, to_base64_uri, to_data_uri
from .errors import ConversionError, StageFailure
from .guards import MAX_INPUT_BYTES, byte_length, check_size, decode_input, prefilter
from .models import ConversionOptions, ConversionResult
from .normalizer import normalize_markup
from .parser import parse_markup, serialize
from .references import check_use_depth
from .sanitizer import sanitize_tree
from .whitelist import DEFAULT_WHITELIST, Whitelist


def sanitize_markup(
    raw: str | bytes,
    *,
    whitelist: Whitelist = DEFAULT_WHITELIST,
    max_input_bytes: int = MAX_INPUT_BYTES,
) -> tuple[str, list[str]]:
    """Run every stage up to serialization of the cleaned tree.

    Raises ``StageFailure`` on the first failing stage.
    """
    check_size(raw, max_input_bytes)
    text = prefilter(decode_input(raw))
    root = parse_markup(text)
    report = sanitize_tree(root, whitelist)
    check_use_depth(root)
    return serialize(root), report.warnings


def convert(
    raw: str | bytes,
    options: ConversionOptions | None = None,
    *,
    whitelist: Whitelist = DEFAULT_WHITELIST,
    max_input_bytes: int = MAX_INPUT_BYTES,
) -> ConversionResult | ConversionError:
    opts = options or ConversionOptions()
    start = time.perf_counter()
    try:
        sanitized, warnings = sanitize_markup(
            raw, whitelist=whitelist, max_input_bytes=max_input_bytes
        )
        normalized = normalize_markup(
            sanitized,
            strip_root_width_height=opts.strip_root_width_height,
            strip_root_class=opts.strip_root_class,
        )
    except StageFailure as exc:
        return exc.error
    except Exception as exc:
        return ConversionError.server_error(exc)

    data_uri = to_data_uri(normalized)
    return ConversionResult(
        normalized=normalized,
        data_uri=data_uri,
        background_css=background_css(data_uri),
        mask_css=mask_css(data_uri),
        size_before=byte_length(raw),
        size_after=len(normalized.encode("utf-8")),
        base64_uri=to_base64_uri(normalized) if opts.emit_base64 else None,
        warnings=tuple(warnings),
        elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
    )


__all__ = ["convert", "sanitize_markup"]
