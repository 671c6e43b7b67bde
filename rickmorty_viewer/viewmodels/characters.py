"""View-model for the character list and viewed-character history."""

import asyncio
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Union

import aiohttp

from ..api.client import CartoonApiClient
from ..constants.config import (
    API_BASE_URL,
    FETCH_CHARACTER_FAILED_MESSAGE,
    FETCH_FAILED_MESSAGE,
    NO_CHARACTERS_MESSAGE,
    UNKNOWN_EPISODE_NAME,
    UNKNOWN_ERROR_MESSAGE,
)
from ..constants.paths import DB_PATH
from ..errors import ApiError
from ..models.character import CharacterModel, CharactersResponse
from ..models.viewed import ViewedCharacterModel
from ..storage.dao import ViewedCharacterDao
from ..ui.paging import CharacterPagingSource, Pager
from ..utils.images import url_to_base64
from ..utils.observable import Observable


logger = logging.getLogger(__name__)


class CharactersViewModel:
    """Loads characters, resolves episode names and records viewed characters.

    State is exposed as ``Observable`` values so a front end (CLI, web
    server, adapter) can react to updates:

    - ``characters_data``: the last successfully loaded list of characters
    - ``error_data``: the last error message
    - ``episode_name``: the last resolved episode name

    Episode names are cached per episode URL for the lifetime of the
    view-model. Entries are only ever added.
    """

    def __init__(
        self,
        api: CartoonApiClient,
        character_dao: ViewedCharacterDao,
        image_loader: Callable = url_to_base64,
    ):
        self._api = api
        self._character_dao = character_dao
        self._image_loader = image_loader

        self.characters_data: Observable[List[CharacterModel]] = Observable()
        self.error_data: Observable[str] = Observable()
        self.episode_name: Observable[str] = Observable()

        self._episode_cache: Dict[str, str] = {}

    @classmethod
    def create(cls, api_url: Optional[str] = None, db_path: Optional[Union[str, Path]] = None) -> "CharactersViewModel":
        """Build a view-model with a real API client and SQLite DAO."""
        api = CartoonApiClient(api_url or API_BASE_URL)
        dao = ViewedCharacterDao.from_path(db_path or DB_PATH)
        return cls(api, dao)

    @property
    def episode_cache(self) -> Mapping[str, str]:
        """Read-only view of the episode URL -> name cache."""
        return MappingProxyType(self._episode_cache)

    async def get_characters(self, page: int = 1) -> Optional[CharactersResponse]:
        """Load one page of characters into ``characters_data``.

        Failures are reported through ``error_data`` and None is returned.
        """
        try:
            response = await self._api.get_characters(page)
        except ApiError as e:
            self.error_data.post_value(FETCH_FAILED_MESSAGE.format(reason=e.reason or e.status))
            return None
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning("Character list request failed: %s", e)
            self.error_data.post_value(str(e) or UNKNOWN_ERROR_MESSAGE)
            return None

        if response.characters is None:
            self.error_data.post_value(NO_CHARACTERS_MESSAGE)
            return response

        self.characters_data.post_value(response.characters)
        return response

    async def get_character(self, character_id: int) -> Optional[CharacterModel]:
        """Load a single character, reporting failures through ``error_data``."""
        try:
            return await self._api.get_character(character_id)
        except ApiError as e:
            self.error_data.post_value(
                FETCH_CHARACTER_FAILED_MESSAGE.format(character_id=character_id, reason=e.reason or e.status)
            )
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning("Character %s request failed: %s", character_id, e)
            self.error_data.post_value(str(e) or UNKNOWN_ERROR_MESSAGE)
        return None

    async def get_episode_name_for_character(
        self,
        episode_url: str,
        callback: Optional[Callable[[str], None]] = None,
    ) -> str:
        """Resolve an episode name, hitting the network only on a cache miss.

        A non-success response is cached as the placeholder name. A transport
        failure returns the placeholder without caching it.
        """
        if not episode_url:
            return self._deliver_episode_name(UNKNOWN_EPISODE_NAME, callback)

        cached = self._episode_cache.get(episode_url)
        if cached is not None:
            return self._deliver_episode_name(cached, callback)

        try:
            episode = await self._api.get_episode(episode_url)
            fetched_name = episode.name if episode.name is not None else UNKNOWN_EPISODE_NAME
        except ApiError:
            fetched_name = UNKNOWN_EPISODE_NAME
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning("Episode request for %r failed: %s", episode_url, e)
            return self._deliver_episode_name(UNKNOWN_EPISODE_NAME, callback)

        self._episode_cache[episode_url] = fetched_name
        return self._deliver_episode_name(fetched_name, callback)

    def _deliver_episode_name(self, name: str, callback: Optional[Callable[[str], None]]) -> str:
        self.episode_name.post_value(name)
        if callback:
            callback(name)
        return name

    async def save_viewed_character(self, character: CharacterModel) -> Optional[ViewedCharacterModel]:
        """Persist a snapshot of a character the user opened.

        Characters without any episode are not saved.
        """
        episode_url = character.first_episode_url
        if episode_url is None:
            logger.info("Character %s has no episodes, not saving", character.id)
            return None

        episode_name = await self.get_episode_name_for_character(episode_url)
        image_base64 = await self._image_loader(character.image) if character.image else None

        entity = ViewedCharacterModel.from_character(
            character,
            first_episode_name=episode_name,
            image_base64=image_base64,
        )
        return await asyncio.to_thread(self._character_dao.insert_character, entity)

    def characters_pager(self, initial_page: int = 1, max_pages: Optional[int] = None) -> Pager:
        """Return a pager that walks the character list from ``initial_page``."""
        return Pager(CharacterPagingSource(self._api), initial_key=initial_page, max_pages=max_pages)

    def get_viewed_characters(self) -> Observable[List[ViewedCharacterModel]]:
        return self._character_dao.observe_all_viewed_characters()
