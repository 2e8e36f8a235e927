"""Bounds how deep ``<use href="#id">`` references may chain."""

from __future__ import annotations

from lxml import etree

from .errors import ErrorKind, fail
from .parser import XLINK_NS, element_name, is_element

MAX_USE_DEPTH = 15

NESTING_MESSAGE = "SVG contains excessive nesting in <use> elements."


def build_id_index(root: etree._Element) -> dict[str, etree._Element]:
    index: dict[str, etree._Element] = {}
    for element in root.iter():
        if not is_element(element):
            continue
        element_id = element.get("id")
        if element_id and element_id not in index:
            index[element_id] = element
    return index


def use_target(element: etree._Element, index: dict[str, etree._Element]) -> etree._Element | None:
    if element_name(element).lower() != "use":
        return None
    href = element.get("href") or element.get(f"{{{XLINK_NS}}}href")
    if not href or not href.startswith("#"):
        return None
    return index.get(href[1:])


class _UseWalker:
    def __init__(self, root: etree._Element, limit: int) -> None:
        self._index = build_id_index(root)
        self._limit = limit
        self._reach: dict[etree._Element, int] = {}
        self._active: set[etree._Element] = set()

    def frontier(self, start: etree._Element) -> list[etree._Element]:
        """Targets of the resolvable ``<use>`` elements under *start*.

        A resolved ``<use>`` is followed instead of walked into, so the walk
        stops there; every other element passes the walk on to its children.
        """
        targets: list[etree._Element] = []
        stack = [start]
        while stack:
            element = stack.pop()
            target = use_target(element, self._index)
            if target is not None:
                targets.append(target)
                continue
            stack.extend(child for child in element if is_element(child))
        return targets

    def reach(self, element: etree._Element, depth: int) -> int:
        """Longest chain of ``<use>`` hops starting at *element*."""
        if depth > self._limit:
            raise fail(ErrorKind.NESTING_TOO_DEEP, NESTING_MESSAGE)
        known = self._reach.get(element)
        if known is not None:
            if depth + known > self._limit:
                raise fail(ErrorKind.NESTING_TOO_DEEP, NESTING_MESSAGE)
            return known
        if element in self._active:
            raise fail(ErrorKind.NESTING_TOO_DEEP, NESTING_MESSAGE, "cyclic <use> reference")

        self._active.add(element)
        longest = 0
        for target in self.frontier(element):
            longest = max(longest, 1 + self.reach(target, depth + 1))
        self._active.discard(element)
        self._reach[element] = longest
        return longest


def check_use_depth(root: etree._Element, limit: int = MAX_USE_DEPTH) -> int:
    """Fail when ``<use>`` references chain more than *limit* hops deep.

    Returns the longest chain found.
    """
    return _UseWalker(root, limit).reach(root, 0)


__all__ = ["MAX_USE_DEPTH", "build_id_index", "check_use_depth", "use_target"]
