"""REST client for the Rick and Morty API."""

import logging
from typing import Any, Optional
from urllib.parse import urljoin

import aiohttp

from ..constants.config import API_BASE_URL, CHARACTERS_ENDPOINT, REQUEST_TIMEOUT_SECONDS
from ..errors import ApiError
from ..models.character import CharacterModel, CharactersResponse
from ..models.episode import EpisodeModel


logger = logging.getLogger(__name__)


class CartoonApiClient:
    """Thin async wrapper around the character and episode endpoints.

    A new ``aiohttp.ClientSession`` is opened for every request unless a
    session is passed in, so the client can be shared across event loops.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        # urljoin drops the last path segment unless the base ends with a slash
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    def url_for(self, path: str) -> str:
        """Resolve an endpoint path against the base URL."""
        return urljoin(self.base_url, path)

    async def _get_json(self, url: str, params: Optional[dict] = None) -> Any:
        if self._session is not None:
            return await self._fetch(self._session, url, params)
        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            return await self._fetch(session, url, params)

    async def _fetch(self, session: aiohttp.ClientSession, url: str, params: Optional[dict]) -> Any:
        logger.debug("GET %s params=%s", url, params)
        async with session.get(url, params=params, timeout=self._timeout) as response:
            if response.status < 200 or response.status >= 300:
                logger.warning("GET %s failed: HTTP %s %s", url, response.status, response.reason)
                raise ApiError(response.status, response.reason, url=url)
            return await response.json()

    async def get_characters(self, page: int = 1) -> CharactersResponse:
        """Fetch one page of the character list."""
        data = await self._get_json(self.url_for(CHARACTERS_ENDPOINT), params={"page": page})
        return CharactersResponse.from_api(data or {})

    async def get_character(self, character_id: int) -> CharacterModel:
        """Fetch a single character by ID."""
        data = await self._get_json(self.url_for(f"{CHARACTERS_ENDPOINT}/{character_id}"))
        return CharacterModel.from_api(data)

    async def get_episode(self, episode_url: str) -> EpisodeModel:
        """Fetch an episode by its absolute API URL."""
        data = await self._get_json(episode_url)
        return EpisodeModel.from_api(data or {})
