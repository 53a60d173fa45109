"""Lazy iteration over paged list endpoints.

A :class:`PageStream` turns the N pages of a list endpoint into a single
async sequence of items. Pages are fetched one at a time, only once every
item of the previous page has been consumed.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .protocol import PagedList

if TYPE_CHECKING:
    from .http import KaiheilaHttpClient

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class _PageCursor(Generic[T]):
    """Iteration state of one stream."""

    buffer: deque[T] = field(default_factory=deque)
    next_page: int = 1
    page_total: int | None = None
    page_size: int | None = None
    done: bool = False


class PageStream(Generic[T]):
    """Forward-only async iterator over every item of a paged endpoint.

    Usage:
        async for guild in client.guild_list_stream():
            ...

    The first request carries only ``params``; later ones add ``page`` and
    the ``page_size`` reported by the first page. ``page_total`` is read once
    from the first page. A failed fetch is raised from ``__anext__`` and ends
    the stream.
    """

    def __init__(
        self,
        client: KaiheilaHttpClient,
        path: str,
        params: Iterable[tuple[str, str]],
        item_parser: Callable[[Any], T],
    ) -> None:
        self._client = client
        self._path = path
        self._params: tuple[tuple[str, str], ...] = tuple(params)
        self._item_parser = item_parser
        self._cursor: _PageCursor[T] = _PageCursor()
        self.last_page: PagedList[T] | None = None

    def __aiter__(self) -> PageStream[T]:
        return self

    async def __anext__(self) -> T:
        while not self._cursor.buffer:
            if self._cursor.done:
                raise StopAsyncIteration
            await self._fetch_next_page()
        return self._cursor.buffer.popleft()

    async def aclose(self) -> None:
        """Stop the stream; no further requests are issued."""
        self._cursor.done = True
        self._cursor.buffer.clear()

    async def to_list(self) -> list[T]:
        """Drain the remaining items into a list."""
        return [item async for item in self]

    def _page_query(self, page: int) -> tuple[tuple[str, str], ...]:
        if page == 1:
            return self._params
        return (
            *self._params,
            ("page", str(page)),
            ("page_size", str(self._cursor.page_size)),
        )

    def _parse_page(self, data: Any) -> PagedList[T]:
        return PagedList.from_dict(data, self._item_parser)

    async def _fetch_next_page(self) -> None:
        cursor = self._cursor
        page_no = cursor.next_page
        _LOGGER.debug(
            "Fetching %s page %s of %s",
            self._path,
            page_no,
            cursor.page_total if cursor.page_total is not None else "?",
        )
        try:
            page: PagedList[T] = await self._client.request(
                self._path,
                "GET",
                query=self._page_query(page_no),
                parser=self._parse_page,
            )
        except Exception:
            cursor.done = True
            raise

        if cursor.page_total is None:
            cursor.page_total = page.meta.page_total
            cursor.page_size = page.meta.page_size

        self.last_page = page
        cursor.buffer.extend(page.items)
        cursor.next_page = page_no + 1
        if cursor.next_page > cursor.page_total:
            cursor.done = True
