"""Hardened XML parsing of untrusted SVG markup."""

from __future__ import annotations

from lxml import etree

from .errors import ErrorKind, describe_parser_error, fail
from .guards import check_root_tag

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_NS = "http://www.w3.org/XML/1998/namespace"

FALLBACK_DIAGNOSTIC = "Invalid XML structure."


def build_parser() -> etree.XMLParser:
    # A fresh parser per document keeps its error log private to one request.
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        dtd_validation=False,
        huge_tree=False,
        remove_pis=True,
        strip_cdata=True,
        remove_blank_text=True,
    )


def element_name(element: etree._Element) -> str:
    """Name used for whitelisting: local for SVG elements, ``prefix:local`` otherwise."""
    qname = etree.QName(element)
    if qname.namespace in (None, SVG_NS) or not element.prefix:
        return qname.localname
    return f"{element.prefix}:{qname.localname}"


def is_element(node: object) -> bool:
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def _first_diagnostic(error_log) -> str | None:  # type: ignore[no-untyped-def]
    for entry in error_log:
        message = (entry.message or "").strip()
        if message:
            return message
    return None


def _parse_failure(diagnostic: str):  # type: ignore[no-untyped-def]
    kind, message = describe_parser_error(diagnostic)
    return fail(kind, message, diagnostic)


def parse_markup(text: str) -> etree._Element:
    """Parse pre-filtered markup and return the ``<svg>`` root element."""
    check_root_tag(text)
    try:
        payload = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise fail(ErrorKind.MALFORMED_XML, "SVG must be UTF-8 encoded text.", str(exc)) from exc

    parser = build_parser()
    try:
        root = etree.fromstring(payload, parser)
    except etree.XMLSyntaxError as exc:
        diagnostic = (
            _first_diagnostic(getattr(exc, "error_log", None) or [])
            or _first_diagnostic(parser.error_log)
            or str(exc).strip()
            or FALLBACK_DIAGNOSTIC
        )
        raise _parse_failure(diagnostic) from exc

    errors = parser.error_log.filter_from_errors()
    if len(errors):
        raise _parse_failure(_first_diagnostic(errors) or FALLBACK_DIAGNOSTIC)

    if root is None or not is_element(root):
        raise fail(ErrorKind.MALFORMED_XML, "Invalid SVG: document has no root element.")
    if root.prefix or element_name(root).lower() != "svg":
        raise fail(ErrorKind.INVALID_ROOT, "Invalid SVG: root element must be <svg>.")
    return root


def serialize(root: etree._Element) -> str:
    return etree.tostring(root, encoding="unicode")


__all__ = [
    "SVG_NS",
    "XLINK_NS",
    "XML_NS",
    "build_parser",
    "element_name",
    "is_element",
    "parse_markup",
    "serialize",
]
