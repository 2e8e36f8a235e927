"""Whitelist-based cleaning of a parsed SVG tree.

The walk mutates the tree in place and is the only stage that deletes
nodes. A parent decides about each child before descending into it, so a
removal never needs to look back up the tree.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from lxml import etree

from .parser import XLINK_NS, XML_NS, element_name, is_element
from .whitelist import DEFAULT_WHITELIST, Whitelist

MAX_TREE_DEPTH = 100

EVENT_HANDLER_RE = re.compile(r"^on[a-z]", re.IGNORECASE)
DANGEROUS_VALUE_RE = re.compile(r"(?:javascript:|data:text/html|vbscript:)", re.IGNORECASE)

SAFE_DATA_URI_PREFIXES = (
    "data:image/png",
    "data:image/gif",
    "data:image/jpg",
    "data:image/jpeg",
    "data:image/svg+xml",
)

_KNOWN_PREFIXES = {XLINK_NS: "xlink", XML_NS: "xml"}


def is_href_safe(href: str) -> bool:
    if not href:
        return True
    if href.startswith(("#", "/")):
        return True
    if href.startswith(("https://", "http://")):
        return True
    return href.startswith(SAFE_DATA_URI_PREFIXES)


@dataclass(slots=True)
class SanitizeReport:
    warnings: list[str] = field(default_factory=list)

    def note(self, message: str) -> None:
        if message not in self.warnings:
            self.warnings.append(message)


def attribute_names(element: etree._Element, key: str) -> tuple[str, str]:
    """Return the ``(prefix:local, local)`` names for an lxml attribute key."""
    qname = etree.QName(key)
    local = qname.localname
    if qname.namespace is None:
        return local, local
    prefix = _KNOWN_PREFIXES.get(qname.namespace)
    if prefix is None:
        for candidate, uri in element.nsmap.items():
            if uri == qname.namespace and candidate:
                prefix = candidate
                break
    if prefix is None:
        return local, local
    return f"{prefix}:{local}", local


def _attribute_rejected(name: str, local: str, value: str, whitelist: Whitelist) -> bool:
    lowered = name.lower()
    if EVENT_HANDLER_RE.match(lowered) or EVENT_HANDLER_RE.match(local.lower()):
        return True
    if not whitelist.allows_attribute(lowered, local):
        return True
    if "href" in lowered and not is_href_safe(value):
        return True
    return DANGEROUS_VALUE_RE.search(value) is not None


def _drop_child(parent: etree._Element, child: etree._Element) -> None:
    # lxml stores following text on the removed node; hand it to the previous sibling.
    tail = child.tail
    if tail:
        previous = child.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or "") + tail
        else:
            parent.text = (parent.text or "") + tail
    parent.remove(child)


def _clean_attributes(
    element: etree._Element, name: str, whitelist: Whitelist, report: SanitizeReport
) -> None:
    rejected: list[tuple[str, str]] = []
    for key, value in element.attrib.items():
        qualified, local = attribute_names(element, key)
        if _attribute_rejected(qualified, local, value, whitelist):
            rejected.append((key, qualified))
    for key, qualified in rejected:
        del element.attrib[key]
        report.note(f"removed attribute {qualified} from <{name}>")


def _clean_element(
    element: etree._Element, depth: int, whitelist: Whitelist, report: SanitizeReport
) -> None:
    name = element_name(element)
    _clean_attributes(element, name, whitelist, report)

    for child in list(element):
        if not is_element(child):
            if isinstance(child, etree._Entity):
                _drop_child(element, child)
                report.note("removed entity reference")
            continue
        child_name = element_name(child)
        if depth + 1 > MAX_TREE_DEPTH:
            _drop_child(element, child)
            report.note(f"removed element <{child_name}> nested deeper than {MAX_TREE_DEPTH}")
            continue
        if not whitelist.allows_element(child_name):
            _drop_child(element, child)
            report.note(f"removed element <{child_name}>")
            continue
        _clean_element(child, depth + 1, whitelist, report)


def sanitize_tree(
    root: etree._Element, whitelist: Whitelist = DEFAULT_WHITELIST
) -> SanitizeReport:
    """Strip everything from *root* that is not explicitly allowed.

    The root itself has already been checked to be ``<svg>`` by the parser
    adapter, so only its attributes and descendants are filtered here.
    """
    report = SanitizeReport()
    _clean_element(root, 0, whitelist, report)
    return report


__all__ = [
    "DANGEROUS_VALUE_RE",
    "EVENT_HANDLER_RE",
    "MAX_TREE_DEPTH",
    "SAFE_DATA_URI_PREFIXES",
    "SanitizeReport",
    "attribute_names",
    "is_href_safe",
    "sanitize_tree",
]
