"""Text-level normalization of sanitized SVG markup."""

from __future__ import annotations

import re

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

BOM = "\ufeff"

XML_DECLARATION_RE = re.compile(r"^\s*<\?xml[^>]*>\s*", re.IGNORECASE)
COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
ROOT_OPEN_TAG_RE = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)
XMLNS_RE = re.compile(r"\sxmlns\s*=", re.IGNORECASE)
TAG_CLOSE_RE = re.compile(r"\s*(/?>)$")
WIDTH_HEIGHT_RES = (
    re.compile(r"\swidth\s*=\s*\"[^\"]*\"", re.IGNORECASE),
    re.compile(r"\swidth\s*=\s*'[^']*'", re.IGNORECASE),
    re.compile(r"\sheight\s*=\s*\"[^\"]*\"", re.IGNORECASE),
    re.compile(r"\sheight\s*=\s*'[^']*'", re.IGNORECASE),
)
CLASS_RES = (
    re.compile(r"\sclass\s*=\s*\"[^\"]*\"", re.IGNORECASE),
    re.compile(r"\sclass\s*=\s*'[^']*'", re.IGNORECASE),
)
WHITESPACE_RE = re.compile(r"\s+")
INTER_TAG_SPACE_RE = re.compile(r">\s+<")


def _rewrite_root_tag(open_tag: str, strip_width_height: bool, strip_class: bool) -> str:
    if not XMLNS_RE.search(open_tag):
        open_tag = TAG_CLOSE_RE.sub(lambda m: f' xmlns="{SVG_NAMESPACE}"{m.group(1)}', open_tag, count=1)

    patterns: list[re.Pattern[str]] = []
    if strip_width_height:
        patterns.extend(WIDTH_HEIGHT_RES)
    if strip_class:
        patterns.extend(CLASS_RES)
    for pattern in patterns:
        open_tag = pattern.sub("", open_tag)

    # "<svg />" keeps no space before the slash.
    return TAG_CLOSE_RE.sub(r"\1", open_tag, count=1)


def normalize_markup(
    svg: str,
    *,
    strip_root_width_height: bool = False,
    strip_root_class: bool = False,
) -> str:
    """Canonical single-line form of *svg*.

    Only the root ``<svg>`` open tag is rewritten; descendants keep their
    attributes. Applying the function to its own output returns it unchanged.
    """
    if svg.startswith(BOM):
        svg = svg[len(BOM):]
    svg = svg.strip()
    if not svg:
        return ""

    svg = XML_DECLARATION_RE.sub("", svg, count=1)
    svg = COMMENT_RE.sub("", svg)
    svg = ROOT_OPEN_TAG_RE.sub(
        lambda m: _rewrite_root_tag(m.group(0), strip_root_width_height, strip_root_class),
        svg,
        count=1,
    )
    svg = WHITESPACE_RE.sub(" ", svg)
    svg = INTER_TAG_SPACE_RE.sub("><", svg)
    return svg.strip()


__all__ = ["SVG_NAMESPACE", "normalize_markup"]
