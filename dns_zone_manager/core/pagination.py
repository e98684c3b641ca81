"""
Cursor-based pagination over list endpoints.

A PaginatedList holds one page of results plus everything needed to ask the
backend for the following page.
"""

import logging
from typing import Callable, Dict, Generic, Iterator, List, Optional, Sequence, TypeVar

from ..exceptions import DNSError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PaginatedList(Generic[T]):
    """One page of items and the continuation token for the next one."""

    def __init__(
        self,
        items: Sequence[T],
        token: Optional[str] = None,
        loader: Optional[Callable[..., "PaginatedList[T]"]] = None,
        query: Optional[Dict] = None,
    ):
        self._items: List[T] = list(items)
        self.token = token or None
        self._loader = loader
        self._query = dict(query or {})

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self):
        return f"PaginatedList({self._items!r}, token={self.token!r})"

    @property
    def query(self) -> Dict:
        return dict(self._query)

    def has_next(self) -> bool:
        """Whether the backend reported more results."""
        return self.token is not None

    def next(self) -> Optional["PaginatedList[T]"]:
        """
        Fetch the next page with the original query.

        Returns:
            The next page, or None when this is the last one

        Raises:
            DNSError: If the list was created without a way to reload it
        """
        if not self.has_next():
            return None
        if self._loader is None:
            raise DNSError("Must have an active zone to load the next page")
        return self._loader(token=self.token, **self._query)

    def all(self, request_limit: Optional[int] = None) -> Iterator[T]:
        """
        Iterate over every item on this and all following pages.

        Pages are loaded lazily, one request at a time. Each call starts a
        fresh traversal from this page.

        Args:
            request_limit: Maximum number of additional requests to make

        Returns:
            A generator of items
        """
        if request_limit is not None:
            request_limit = int(request_limit)
        return self._iterate_all(request_limit)

    def _iterate_all(self, request_limit: Optional[int]) -> Iterator[T]:
        page: Optional[PaginatedList[T]] = self
        while page is not None:
            yield from page
            if request_limit is not None:
                request_limit -= 1
                if request_limit < 0:
                    logger.debug("Request limit reached while loading pages")
                    return
            if not page.has_next():
                return
            page = page.next()
