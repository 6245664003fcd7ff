# Purpose: Stream CDA markup while tracking the enclosing element path.
# Date: 2026-10-19
# Related tests: tests/test_tokenizer.py
# AI-assisted: Portions of this file were generated with AI assistance.

"""Path-tracking XML tokenizer built on an lxml parser target.

The tokenizer never materialises a tree. lxml drives a target object with
``start``/``data``/``end`` callbacks; the target keeps a stack of lower-cased
element names and forwards two kinds of events to a handler:

* ``on_open(tag, attributes, path)`` when an element starts. ``attributes``
  is a list of ``(name, value)`` pairs in document order and ``path`` already
  includes ``tag``.
* ``on_close(tag, text, path)`` when an element ends and non-blank character
  data has accumulated since the last dispatch. ``path`` still includes
  ``tag`` at that point; it is popped afterwards.
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from lxml import etree

from .common import local_name
from .errors import XmlStructureError

logger = logging.getLogger(__name__)

Attribute = tuple[str, str]


class EventHandler(Protocol):
    def on_open(self, tag: str, attributes: Sequence[Attribute], path: Sequence[str]) -> None:
        ...

    def on_close(self, tag: str, text: str, path: Sequence[str]) -> None:
        ...


class PathTrackingTarget:
    """lxml parser target that maintains the current element path."""

    def __init__(self, handler: EventHandler) -> None:
        self._handler = handler
        self._path: list[str] = []
        self._text: list[str] = []

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self._path)

    def start(self, tag: str, attrib) -> None:
        name = local_name(tag)
        self._path.append(name)
        attributes = [(local_name(key), value) for key, value in attrib.items()]
        self._handler.on_open(name, attributes, self.path)

    def data(self, data: str) -> None:
        self._text.append(data)

    def end(self, tag: str) -> None:
        name = local_name(tag)
        text = "".join(self._text).strip()
        # Blank runs stay buffered; they vanish once stripped with later text.
        if text:
            self._handler.on_close(name, text, self.path)
            self._text.clear()
        if self._path:
            self._path.pop()

    def close(self) -> None:
        self._text.clear()


def _make_parser(target: PathTrackingTarget, *, force_utf8: bool) -> etree.XMLParser:
    return etree.XMLParser(
        target=target,
        encoding="utf-8" if force_utf8 else None,
        resolve_entities=False,
        no_network=True,
    )


def tokenize(file_name: str, xml: str | bytes, handler: EventHandler) -> None:
    """Walk ``xml`` and dispatch path-annotated events to ``handler``.

    Args:
        file_name: Document name used in error reports.
        xml: Raw document text. ``str`` input is encoded as UTF-8.
        handler: Receiver for open/close events.

    Raises:
        XmlStructureError: If the markup is malformed or cannot be decoded.
    """
    force_utf8 = isinstance(xml, str)
    try:
        payload = xml.encode("utf-8") if isinstance(xml, str) else bytes(xml)
    except UnicodeEncodeError as exc:
        raise XmlStructureError(file_name, f"encoding error: {exc}") from exc

    if not payload.strip():
        raise XmlStructureError(file_name, "document is empty")

    target = PathTrackingTarget(handler)
    parser = _make_parser(target, force_utf8=force_utf8)
    try:
        etree.fromstring(payload, parser)
    except etree.XMLSyntaxError as exc:
        logger.debug("XML syntax error in %s: %s", file_name, exc)
        raise XmlStructureError(file_name, str(exc)) from exc
    except (UnicodeDecodeError, LookupError) as exc:
        raise XmlStructureError(file_name, f"encoding error: {exc}") from exc
