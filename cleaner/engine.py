"""Public cleaning entry points: ``clean``, ``clean_async``, ``is_fragment``.

Each call owns an independent tree and walks it through
``Idle -> Parsed -> ElementsRemoved -> AttributesCleaned -> Serialized``.
Empty, whitespace-only or non-string input short-circuits to ``""``.
Malformed markup never raises; parser/serializer failures propagate.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from models.options import CleanOptions
from parsing.adapter import parse, serialize
from parsing.fragments import is_fragment
from parsing.rules import remove_unwanted_elements
from parsing.traversal import (
    CHUNK_SIZE,
    ProgressCallback,
    collect_elements,
    walk_blocking,
    walk_chunked,
)

if TYPE_CHECKING:
    from bs4 import BeautifulSoup, Tag

logger = logging.getLogger("cleaner")

OptionsLike = Union[CleanOptions, Mapping[str, Any], None]

__all__ = ["clean", "clean_async", "is_fragment"]


def _prepare(
    markup: str, options: CleanOptions
) -> tuple[BeautifulSoup, bool, list[Tag]]:
    """Parse *markup* and strip unwanted elements.

    Returns the tree, its fragment flag, and the snapshot of remaining
    elements in document order.
    """
    fragment = is_fragment(markup)
    soup = parse(markup, fragment=fragment)
    logger.debug("parsed %d chars (fragment=%s)", len(markup), fragment)

    removed = remove_unwanted_elements(soup, options)
    elements = collect_elements(soup)
    logger.debug("removed %d elements, %d remain", removed, len(elements))
    return soup, fragment, elements


def _normalize(markup: Any) -> str:
    if not isinstance(markup, str):
        return ""
    return markup.strip()


def clean(markup: str, options: OptionsLike = None) -> str:
    """Clean *markup* in a single blocking pass.

    Args:
        markup: HTML fragment or full document.
        options: ``CleanOptions`` or a mapping of toggles; missing toggles
            default to ``False``.

    Returns:
        The cleaned markup, or ``""`` for empty/non-string input.
    """
    opts = CleanOptions.coerce(options)
    trimmed = _normalize(markup)
    if not trimmed:
        return ""

    soup, fragment, elements = _prepare(trimmed, opts)
    walk_blocking(elements, opts)
    logger.debug("cleaned %d elements", len(elements))
    return serialize(soup, fragment=fragment)


async def clean_async(
    markup: str,
    options: OptionsLike = None,
    on_progress: Optional[ProgressCallback] = None,
    *,
    chunk_size: int = CHUNK_SIZE,
) -> str:
    """Clean *markup* in chunks, yielding to the event loop between them.

    Produces exactly the same output as ``clean()``. *on_progress* receives
    ``(percent, processed, total)`` after each chunk and a final
    ``(100, total, total)``; it is never called when no elements remain.
    Cancelling the awaiting task stops the pass at the next chunk boundary
    with ``asyncio.CancelledError``; no partial result is returned.
    """
    opts = CleanOptions.coerce(options)
    trimmed = _normalize(markup)
    if not trimmed:
        return ""

    soup, fragment, elements = _prepare(trimmed, opts)
    await walk_chunked(elements, opts, on_progress, chunk_size=chunk_size)
    logger.debug("cleaned %d elements in chunks of %d", len(elements), chunk_size)
    return serialize(soup, fragment=fragment)
