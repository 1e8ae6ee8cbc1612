"""Document-order traversal that applies attribute rules to every element.

Two variants over the same element list:
    - ``walk_blocking()`` -- one synchronous pass, no progress.
    - ``walk_chunked()`` -- the same pass, reporting progress and yielding
      to the event loop after every ``chunk_size`` elements.

Both leave the tree in exactly the same state; chunking only affects
scheduling.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Callable, Optional

from models.progress import ProgressState
from parsing.rules import clean_element

if TYPE_CHECKING:
    from bs4 import BeautifulSoup, Tag

    from models.options import CleanOptions

CHUNK_SIZE = 100

# (percent, processed, total)
ProgressCallback = Callable[[int, int, int], None]


def collect_elements(soup: BeautifulSoup) -> list[Tag]:
    """Snapshot every element in *soup* in document order."""
    return soup.find_all(True)


def walk_blocking(elements: list[Tag], options: CleanOptions) -> int:
    """Clean every element synchronously. Returns the number visited."""
    for tag in elements:
        clean_element(tag, options)
    return len(elements)


async def walk_chunked(
    elements: list[Tag],
    options: CleanOptions,
    on_progress: Optional[ProgressCallback] = None,
    *,
    chunk_size: int = CHUNK_SIZE,
) -> int:
    """Clean every element, suspending between chunks.

    After each full chunk, *on_progress* (if given) is called with the
    current ``(percent, processed, total)`` and control returns to the
    event loop. A final ``(100, total, total)`` call always follows the
    pass. Nothing is reported for an empty element list.

    Args:
        elements: Snapshot from ``collect_elements()``; its length is the
            fixed total.
        options: Active removal options.
        on_progress: Optional synchronous progress hook.
        chunk_size: Elements per chunk (default 100).

    Returns:
        The number of elements visited.

    Raises:
        ValueError: If *chunk_size* is less than 1.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")

    total = len(elements)
    if total == 0:
        return 0

    for processed, tag in enumerate(elements, start=1):
        clean_element(tag, options)
        if processed % chunk_size == 0:
            if on_progress is not None:
                state = ProgressState.at(processed, total)
                on_progress(state.percent, state.processed, state.total)
            await asyncio.sleep(0)

    if on_progress is not None:
        on_progress(100, total, total)

    return total
