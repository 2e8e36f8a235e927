"""Sanitize untrusted SVG markup and encode it as CSS-ready data URIs."""

from .config import AppConfig, load_config
from .core import ConversionService
from .errors import ConversionError, ErrorCategory, ErrorKind
from .models import BatchConversionResult, ConversionOptions, ConversionResult
from .pipeline import convert
from .whitelist import DEFAULT_WHITELIST, Whitelist

__all__ = [
    "AppConfig",
    "BatchConversionResult",
    "ConversionError",
    "ConversionOptions",
    "ConversionResult",
    "ConversionService",
    "DEFAULT_WHITELIST",
    "ErrorCategory",
    "ErrorKind",
    "Whitelist",
    "convert",
    "load_config",
]
