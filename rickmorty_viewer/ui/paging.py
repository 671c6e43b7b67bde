"""Paged data source over the character list endpoint."""

from dataclasses import dataclass, field
from typing import AsyncIterator, List, Optional
from urllib.parse import parse_qs, urlparse

from ..api.client import CartoonApiClient
from ..models.character import CharacterModel


def page_key_from_url(url: Optional[str]) -> Optional[int]:
    """Extract the ``page`` query parameter from a next/prev URL."""
    if not url:
        return None
    values = parse_qs(urlparse(url).query).get("page")
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        return None


@dataclass
class LoadResult:
    """One loaded page plus the keys of its neighbours."""
    items: List[CharacterModel] = field(default_factory=list)
    prev_key: Optional[int] = None
    next_key: Optional[int] = None


class CharacterPagingSource:
    """Loads pages of characters keyed by page number."""

    def __init__(self, api: CartoonApiClient):
        self._api = api

    async def load(self, page: int = 1) -> LoadResult:
        response = await self._api.get_characters(page)
        return LoadResult(
            items=response.characters or [],
            prev_key=page_key_from_url(response.info.prev),
            next_key=page_key_from_url(response.info.next),
        )


class Pager:
    """Walks a paging source from an initial key until there is no next page."""

    def __init__(self, source: CharacterPagingSource, initial_key: int = 1, max_pages: Optional[int] = None):
        self._source = source
        self._initial_key = initial_key
        self._max_pages = max_pages

    async def pages(self) -> AsyncIterator[LoadResult]:
        key: Optional[int] = self._initial_key
        loaded = 0
        while key is not None:
            if self._max_pages is not None and loaded >= self._max_pages:
                break
            result = await self._source.load(key)
            loaded += 1
            yield result
            key = result.next_key
