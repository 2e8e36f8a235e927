"""Cheap text-level checks that run before the XML parser sees any input."""

from __future__ import annotations

import re

from .errors import ErrorKind, fail

MAX_INPUT_BYTES = 250_000

BOM = "\ufeff"

SERVER_TAG_OPEN_RE = re.compile(r"<\?(?:=|php)", re.IGNORECASE)
SERVER_TAG_CLOSE = "?>"
# An opener is at most five characters, so a join can only hide one that
# starts in the last four kept characters.
_JOIN_REACH = 4
ROOT_TAG_RE = re.compile(r"^<\s*svg\b", re.IGNORECASE)


def decode_input(raw: str | bytes) -> str:
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise fail(ErrorKind.MALFORMED_XML, "SVG must be UTF-8 encoded text.", str(exc)) from exc


def byte_length(raw: str | bytes) -> int:
    if isinstance(raw, bytes):
        return len(raw)
    return len(raw.encode("utf-8", errors="surrogatepass"))


def check_size(raw: str | bytes, limit: int = MAX_INPUT_BYTES) -> int:
    """Reject input over *limit* bytes and return its byte length."""
    size = byte_length(raw)
    if size > min(limit, MAX_INPUT_BYTES):
        raise fail(ErrorKind.TOO_LARGE, "SVG too large (250 KB limit).")
    return size


def trim_input(text: str) -> str:
    text = text.strip()
    while text.startswith(BOM):
        text = text[len(BOM):].strip()
    return text


def strip_server_tags(text: str) -> str:
    """Remove ``<?php ... ?>`` and ``<?= ... ?>`` blocks until none remain.

    A single left-to-right pass. After each removal the scan resumes at the
    join, so tags assembled from the surrounding pieces are removed too and
    the result needs no second pass. Each character is scanned a bounded
    number of times.
    """
    kept: list[str] = []
    pos = 0
    while True:
        tail = "".join(kept[-_JOIN_REACH:])
        joined = SERVER_TAG_OPEN_RE.search(tail + text[pos:pos + _JOIN_REACH])
        if joined is not None and joined.start() < len(tail):
            start = len(kept) - len(tail) + joined.start()
            body = max(pos, pos + joined.end() - len(tail))
        else:
            opener = SERVER_TAG_OPEN_RE.search(text, pos)
            if opener is None:
                break
            kept.extend(text[pos:opener.start()])
            pos = opener.start()
            start = len(kept)
            body = opener.end()

        # The tag body holds at least one character.
        close = text.find(SERVER_TAG_CLOSE, body + 1)
        if close == -1:
            # No closer left, so no later opener can match either.
            break
        del kept[start:]
        pos = close + len(SERVER_TAG_CLOSE)

    kept.extend(text[pos:])
    return "".join(kept)


def prefilter(text: str) -> str:
    text = trim_input(text)
    if not text:
        raise fail(ErrorKind.EMPTY, "Empty SVG content.")
    text = strip_server_tags(text).strip()
    if not text:
        raise fail(ErrorKind.EMPTY, "Empty SVG content.")
    return text


def check_root_tag(text: str) -> None:
    if not ROOT_TAG_RE.match(text):
        raise fail(ErrorKind.INVALID_ROOT, "SVG must start with an <svg> tag.")


__all__ = [
    "MAX_INPUT_BYTES",
    "byte_length",
    "check_root_tag",
    "check_size",
    "decode_input",
    "prefilter",
    "strip_server_tags",
    "trim_input",
]
