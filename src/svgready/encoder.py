from __future__ import annotations

import base64
from urllib.parse import quote

DATA_URI_PREFIX = "data:image/svg+xml,"
BASE64_URI_PREFIX = "data:image/svg+xml;base64,"

# Characters kept literal in the percent-encoded form.
URL_SAFE_CHARACTERS = " =:/,;()#'"


def to_data_uri(svg: str) -> str:
    return DATA_URI_PREFIX + quote(svg, safe=URL_SAFE_CHARACTERS, encoding="utf-8")


def to_base64_uri(svg: str) -> str:
    return BASE64_URI_PREFIX + base64.b64encode(svg.encode("utf-8")).decode("ascii")


def background_css(data_uri: str) -> str:
    return f'background-image: url("{data_uri}");'


def mask_css(data_uri: str) -> str:
    return f'mask-image: url("{data_uri}");\n-webkit-mask-image: url("{data_uri}");'


__all__ = [
    "BASE64_URI_PREFIX",
    "DATA_URI_PREFIX",
    "background_css",
    "mask_css",
    "to_base64_uri",
    "to_data_uri",
]
