# sizer/pagination.py
"""
Generic cursor-following pagination.

AWS list calls signal "more results" in one of two ways:

- token presence: ``ListMetrics`` and ``ListBuckets`` return a ``NextToken``
  / ``ContinuationToken`` only when there is another page.
- truncation flag: ``ListObjectsV2``, ``ListObjectVersions``,
  ``ListMultipartUploads`` and ``ListParts`` set ``IsTruncated`` and carry
  one or more marker fields to resume from.

``paginate`` drives either style; the two ``*_cursor`` factories adapt a
response to "the cursor for the next request, or None when done".
"""

import logging
from typing import Any, Callable, Iterable, Iterator, Optional

from s3du.sizer.errors import PaginationError

logger = logging.getLogger(__name__)

Cursor = Any
Page = dict
FetchPage = Callable[[Optional[Cursor]], Page]
NextCursor = Callable[[Page], Optional[Cursor]]


def token_cursor(token_key: str) -> NextCursor:
    """Next cursor is ``response[token_key]``; absent or empty means done."""

    def next_cursor(page: Page) -> Optional[Cursor]:
        return page.get(token_key) or None

    return next_cursor


def truncated_cursor(*marker_keys: str) -> NextCursor:
    """
    Next cursor is the tuple of ``marker_keys`` while ``IsTruncated`` is set.

    A truncated page with none of its markers present can't be resumed, so
    that raises rather than silently stopping short.
    """

    def next_cursor(page: Page) -> Optional[Cursor]:
        if not page.get("IsTruncated"):
            return None

        markers = tuple(page.get(key) for key in marker_keys)
        if not any(markers):
            raise PaginationError(
                f"Response is truncated but has no {', '.join(marker_keys)}"
            )

        return markers[0] if len(markers) == 1 else markers

    return next_cursor


def paginate(fetch_page: FetchPage, next_cursor: NextCursor) -> Iterator[Page]:
    """
    Yield pages from ``fetch_page`` until ``next_cursor`` returns None.

    ``fetch_page`` is called with None first, then with each cursor in turn.
    The generator is lazy and restartable: iterating a fresh call starts
    over from the first page. A cursor seen twice raises PaginationError.
    """
    cursor = None
    seen = set()
    pages = 0

    while True:
        page = fetch_page(cursor)
        pages += 1
        yield page

        cursor = next_cursor(page)
        if cursor is None:
            break

        if cursor in seen:
            raise PaginationError(f"Cursor {cursor!r} repeated after {pages} pages")
        seen.add(cursor)

    logger.debug("paginate: Finished after %d page(s)", pages)


def iter_items(pages: Iterable[Page], items_key: str) -> Iterator[dict]:
    """Flatten ``page[items_key]`` across pages; missing keys are empty."""
    for page in pages:
        yield from page.get(items_key, [])
