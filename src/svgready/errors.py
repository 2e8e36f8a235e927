"""Error taxonomy shared by every conversion stage."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(str, Enum):
    TOO_LARGE = "too_large"
    EMPTY = "empty"
    INVALID_ROOT = "invalid_root"
    MALFORMED_XML = "malformed_xml"
    INVALID_ATTRIBUTE = "invalid_attribute"
    NESTING_TOO_DEEP = "nesting_too_deep"
    XML_PARSE = "xml_parse_error"

    @property
    def category(self) -> ErrorCategory:
        if self is ErrorKind.EMPTY:
            return ErrorCategory.EMPTY_INPUT
        if self is ErrorKind.TOO_LARGE:
            return ErrorCategory.TOO_LARGE
        return ErrorCategory.INVALID_SVG


class ErrorCategory(str, Enum):
    EMPTY_INPUT = "empty_input"
    TOO_LARGE = "too_large"
    INVALID_SVG = "invalid_svg"
    SERVER_ERROR = "server_error"

    @property
    def title(self) -> str:
        return _CATEGORY_TEXT[self][0]

    @property
    def text(self) -> str:
        return _CATEGORY_TEXT[self][1]


_CATEGORY_TEXT: dict[ErrorCategory, tuple[str, str]] = {
    ErrorCategory.EMPTY_INPUT: ("Nothing to convert", "Please paste your SVG markup first."),
    ErrorCategory.TOO_LARGE: ("File too large", "SVG exceeds the 250 KB size limit."),
    ErrorCategory.INVALID_SVG: (
        "Invalid SVG",
        "The SVG markup contains unsafe or unsupported elements.",
    ),
    ErrorCategory.SERVER_ERROR: (
        "Something went wrong",
        "Unexpected server error. Please try again.",
    ),
}


@dataclass(frozen=True, slots=True)
class ConversionError:
    """Failure value returned by the pipeline.

    ``kind`` is ``None`` only for unexpected internal faults. The
    ``technical_detail`` is raw diagnostic text and must only be shown when
    the caller asked for debug output.
    """

    kind: ErrorKind | None
    message: str
    technical_detail: str | None = None
    cause: BaseException | None = field(default=None, compare=False, repr=False)

    @property
    def category(self) -> ErrorCategory:
        if self.kind is None:
            return ErrorCategory.SERVER_ERROR
        return self.kind.category

    @property
    def code(self) -> str:
        if self.kind is None:
            return ErrorCategory.SERVER_ERROR.value
        return self.kind.value

    @classmethod
    def server_error(cls, exc: BaseException) -> ConversionError:
        return cls(
            kind=None,
            message=ErrorCategory.SERVER_ERROR.text,
            technical_detail=f"{type(exc).__name__}: {exc}",
            cause=exc,
        )

    def to_payload(self, *, debug: bool = False) -> dict[str, str]:
        payload = {
            "code": self.code,
            "category": self.category.value,
            "title": self.category.title,
            "message": self.message,
        }
        if debug and self.technical_detail:
            payload["debug"] = self.technical_detail
        return payload


class StageFailure(Exception):
    """Raised inside the pipeline; converted to a value at its boundary."""

    def __init__(self, error: ConversionError) -> None:
        super().__init__(error.message)
        self.error = error


def fail(kind: ErrorKind, message: str, detail: str | None = None) -> StageFailure:
    return StageFailure(ConversionError(kind=kind, message=message, technical_detail=detail))


_EVENT_HANDLER = "SVG contains invalid event handler attributes."
_MISMATCHED = "SVG has mismatched tags."
_INCOMPLETE = "SVG is incomplete or corrupted."

# Ordered: the first matching pattern wins.
PARSER_ERROR_MAP: tuple[tuple[re.Pattern[str], ErrorKind, str], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), kind, message)
    for pattern, kind, message in (
        (r"attribute\s+on\w+", ErrorKind.INVALID_ATTRIBUTE, _EVENT_HANDLER),
        (r"specification\s+mandates\s+value\s+for\s+attribute\s+on", ErrorKind.INVALID_ATTRIBUTE, _EVENT_HANDLER),
        (r"opening\s+and\s+ending\s+tag\s+mismatch", ErrorKind.XML_PARSE, _MISMATCHED),
        (r"end\s+tag\s+name", ErrorKind.XML_PARSE, _MISMATCHED),
        (r"mismatched\s+tag", ErrorKind.XML_PARSE, _MISMATCHED),
        (r"syntax\s+error", ErrorKind.XML_PARSE, "SVG has syntax errors."),
        (r"not\s+well-formed", ErrorKind.XML_PARSE, "SVG is not well-formed."),
        (r"unclosed\s+token", ErrorKind.XML_PARSE, "SVG has unclosed tags."),
        (r"premature\s+end\s+of\s+data", ErrorKind.XML_PARSE, _INCOMPLETE),
        (r"unexpected\s+end\s+of\s+data", ErrorKind.XML_PARSE, _INCOMPLETE),
        (r"unexpected\s+end\s+tag", ErrorKind.XML_PARSE, _INCOMPLETE),
        (r"extra\s+content\s+at\s+the\s+end", ErrorKind.XML_PARSE, _INCOMPLETE),
        (r"attribute\s+value\s+not\s+terminated", ErrorKind.INVALID_ATTRIBUTE, "SVG has invalid attribute values."),
        (r"AttValue:\s+\"\s+or\s+'\s+expected", ErrorKind.INVALID_ATTRIBUTE, "SVG has invalid attribute values."),
        (r"required\s+attribute\s+missing", ErrorKind.INVALID_ATTRIBUTE, "SVG is missing required attributes."),
    )
)

GENERIC_PARSE_MESSAGE = "Could not parse SVG."


def describe_parser_error(diagnostic: str) -> tuple[ErrorKind, str]:
    """Translate a raw parser diagnostic into a stable kind and user message."""
    for pattern, kind, message in PARSER_ERROR_MAP:
        if pattern.search(diagnostic):
            return kind, message
    return ErrorKind.XML_PARSE, GENERIC_PARSE_MESSAGE


__all__ = [
    "ConversionError",
    "ErrorCategory",
    "ErrorKind",
    "GENERIC_PARSE_MESSAGE",
    "StageFailure",
    "describe_parser_error",
    "fail",
]
