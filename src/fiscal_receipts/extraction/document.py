"""Document load: tolerant HTML parsing with size and nesting guards."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from fiscal_receipts.config import MAX_DOCUMENT_BYTES, MAX_NESTING_DEPTH
from fiscal_receipts.errors import DocumentTooLargeError

logger = logging.getLogger(__name__)


def _max_depth(root: Tag) -> int:
    deepest = 0
    stack = [(root, 0)]
    while stack:
        tag, depth = stack.pop()
        deepest = max(deepest, depth)
        for child in tag.children:
            if isinstance(child, Tag):
                stack.append((child, depth + 1))
    return deepest


def load_document(
    html: str,
    max_bytes: int = MAX_DOCUMENT_BYTES,
    max_depth: int = MAX_NESTING_DEPTH,
) -> BeautifulSoup:
    """Parse an HTML string into a BeautifulSoup tree.

    Broken markup never raises: html.parser repairs what it can and drops
    the rest. Oversized or pathologically nested input is rejected with
    DocumentTooLargeError.
    """
    size = len(html.encode("utf-8"))
    if size > max_bytes:
        raise DocumentTooLargeError(f"{size} bytes exceeds limit of {max_bytes}")

    soup = BeautifulSoup(html, "html.parser")

    depth = _max_depth(soup)
    if depth > max_depth:
        raise DocumentTooLargeError(f"nesting depth {depth} exceeds limit of {max_depth}")

    logger.debug(f"Loaded document: {size} bytes, depth {depth}")
    return soup
