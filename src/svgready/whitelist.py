"""Allow-lists of SVG element and attribute names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

ALLOWED_ELEMENTS = (
    "svg",
    "g",
    "path",
    "rect",
    "circle",
    "polygon",
    "line",
    "polyline",
    "ellipse",
    "defs",
    "use",
    "text",
    "tspan",
    "image",
    "clipPath",
    "mask",
    "pattern",
    "linearGradient",
    "radialGradient",
    "stop",
    "title",
    "desc",
    "a",
    "switch",
    "symbol",
    "view",
)

ALLOWED_ATTRIBUTES = (
    # common
    "id",
    "class",
    "style",
    "title",
    "lang",
    "xml:space",
    # geometry and presentation
    "x",
    "y",
    "width",
    "height",
    "viewBox",
    "preserveAspectRatio",
    "fill",
    "fill-opacity",
    "fill-rule",
    "stroke",
    "stroke-width",
    "stroke-opacity",
    "stroke-linecap",
    "stroke-linejoin",
    "transform",
    "opacity",
    "display",
    "visibility",
    # text
    "font-family",
    "font-size",
    "font-weight",
    "text-anchor",
    # links
    "href",
    "xlink:href",
    "target",
    # shapes and gradients
    "cx",
    "cy",
    "r",
    "rx",
    "ry",
    "x1",
    "y1",
    "x2",
    "y2",
    "points",
    "d",
    "offset",
    "stop-color",
    "stop-opacity",
    "xmlns",
    "xmlns:xlink",
)

# Elements that must never survive sanitization.
DANGEROUS_ELEMENTS = frozenset(
    {"script", "foreignobject", "iframe", "object", "embed", "link", "style"}
)

ALLOWED_ATTRIBUTE_PREFIXES = ("aria-", "data-")


@dataclass(frozen=True, slots=True)
class Whitelist:
    elements: frozenset[str]
    attributes: frozenset[str]
    attribute_prefixes: tuple[str, ...] = ALLOWED_ATTRIBUTE_PREFIXES

    @classmethod
    def build(
        cls,
        elements: Iterable[str],
        attributes: Iterable[str],
        attribute_prefixes: Iterable[str] = ALLOWED_ATTRIBUTE_PREFIXES,
    ) -> Whitelist:
        return cls(
            elements=frozenset(name.lower() for name in elements),
            attributes=frozenset(name.lower() for name in attributes),
            attribute_prefixes=tuple(prefix.lower() for prefix in attribute_prefixes),
        )

    def allows_element(self, name: str) -> bool:
        return name.lower() in self.elements

    def allows_attribute(self, name: str, local_name: str | None = None) -> bool:
        name = name.lower()
        if name in self.attributes:
            return True
        if local_name is not None and local_name.lower() in self.attributes:
            return True
        return name.startswith(self.attribute_prefixes)


DEFAULT_WHITELIST = Whitelist.build(ALLOWED_ELEMENTS, ALLOWED_ATTRIBUTES)


__all__ = [
    "ALLOWED_ATTRIBUTES",
    "ALLOWED_ELEMENTS",
    "DANGEROUS_ELEMENTS",
    "DEFAULT_WHITELIST",
    "Whitelist",
]
